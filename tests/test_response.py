from __future__ import annotations

import json
import unittest

from socketlabs.errors import DecodeError
from socketlabs.models import (
    AddressResultErrorCode,
    MessageResultErrorCode,
    PostMessageErrorCode,
)
from socketlabs.response import parse_send_response


class ResponseParsingTests(unittest.TestCase):
    def test_success_response(self) -> None:
        result = parse_send_response(b'{"ErrorCode": "Success", "TransactionReceipt": null, "MessageResults": []}')
        self.assertTrue(result.success)
        self.assertEqual(result.error_code, "Success")
        self.assertIsNone(result.transaction_receipt)
        self.assertEqual(result.messages_errors, ())

    def test_warning_with_message_and_address_results(self) -> None:
        body = json.dumps(
            {
                "ErrorCode": "Warning",
                "TransactionReceipt": "tr-9",
                "MessageResults": [
                    {
                        "Index": 0,
                        "ErrorCode": "Warning",
                        "AddressResults": [
                            {"EmailAddress": "bad@", "Accepted": False, "ErrorCode": "InvalidAddress"},
                            {"EmailAddress": "ok@example.com", "Accepted": True, "ErrorCode": "InvalidAddress"},
                        ],
                    }
                ],
            }
        ).encode("utf-8")
        result = parse_send_response(body)
        self.assertFalse(result.success)
        self.assertEqual(result.error_code, "Warning")
        self.assertEqual(result.transaction_receipt, "tr-9")
        self.assertEqual(len(result.message_results), 1)
        message_result = result.message_results[0]
        self.assertEqual(message_result.error_code, MessageResultErrorCode.WARNING)
        self.assertEqual(message_result.address_results[0].error_code, AddressResultErrorCode.INVALID_ADDRESS)
        self.assertEqual(len(result.messages_errors), 2)
        self.assertIn("bad@", result.messages_errors[1])

    def test_unknown_error_code_does_not_fail(self) -> None:
        result = parse_send_response(b'{"ErrorCode": "SomethingNew"}')
        self.assertFalse(result.success)
        self.assertEqual(result.error_code, PostMessageErrorCode.UNKNOWN_ERROR_CODE.value)
        self.assertIn("unknown error code", result.messages_errors[0])

    def test_explicit_success_flag_wins(self) -> None:
        result = parse_send_response(b'{"success": true, "transactionReceipt": "abc"}')
        self.assertTrue(result.success)
        self.assertEqual(result.transaction_receipt, "abc")
        self.assertIsNone(result.error_code)

    def test_invalid_json_raises(self) -> None:
        with self.assertRaises(DecodeError) as ctx:
            parse_send_response(b"not json")
        self.assertEqual(ctx.exception.body, b"not json")

    def test_non_object_json_raises(self) -> None:
        with self.assertRaises(DecodeError):
            parse_send_response(b"[1, 2]")

    def test_malformed_message_results_raise(self) -> None:
        with self.assertRaises(DecodeError):
            parse_send_response(b'{"ErrorCode": "Warning", "MessageResults": ["x"]}')


if __name__ == "__main__":
    unittest.main()

from __future__ import annotations

import json
import unittest
from typing import Mapping

from socketlabs.client import API_URL, EmailClient
from socketlabs.errors import (
    ApiError,
    ConfigError,
    DecodeError,
    ErrorKind,
    TransportError,
    ValidationError,
)
from socketlabs.models import EmailAddress, EmailMessage, HttpResponse


class FakeTransport:
    def __init__(self, response: HttpResponse | None = None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.calls: list[tuple[str, bytes, dict[str, str], float | None]] = []

    def post(
        self,
        url: str,
        body: bytes,
        headers: Mapping[str, str],
        timeout_sec: float | None = None,
    ) -> HttpResponse:
        self.calls.append((url, body, dict(headers), timeout_sec))
        if self.error is not None:
            raise self.error
        assert self.response is not None
        return self.response


def _message(**overrides) -> EmailMessage:  # type: ignore[no-untyped-def]
    fields = {
        "from_": EmailAddress("sender@example.com", "Sender"),
        "to": (EmailAddress("rcpt@example.com"),),
        "subject": "Hi",
        "text_body": "hello",
    }
    fields.update(overrides)
    return EmailMessage(**fields)


def _ok(payload: dict) -> HttpResponse:
    return HttpResponse(status_code=200, body=json.dumps(payload).encode("utf-8"))


class EmailClientConstructionTests(unittest.TestCase):
    def test_empty_server_id_raises_config_error(self) -> None:
        with self.assertRaises(ConfigError) as ctx:
            EmailClient("", "key")
        self.assertEqual(ctx.exception.kind, ErrorKind.CONFIG)

    def test_unusual_server_id_is_sent_unchanged(self) -> None:
        transport = FakeTransport(_ok({"ErrorCode": "Success"}))
        client = EmailClient("\u00b2", "key", transport=transport)

        client.send(_message())

        self.assertEqual(json.loads(transport.calls[0][1])["ServerId"], "\u00b2")

    def test_empty_api_key_raises_config_error(self) -> None:
        with self.assertRaises(ConfigError):
            EmailClient("12345", "   ")

    def test_repr_does_not_leak_api_key(self) -> None:
        client = EmailClient("12345", "secret-key", transport=FakeTransport())
        self.assertNotIn("secret-key", repr(client))


class EmailClientSendTests(unittest.TestCase):
    def test_valid_message_makes_exactly_one_call(self) -> None:
        transport = FakeTransport(_ok({"ErrorCode": "Success", "TransactionReceipt": "r-1"}))
        client = EmailClient("12345", "key", transport=transport, timeout_sec=5.0)

        result = client.send(_message())

        self.assertEqual(len(transport.calls), 1)
        url, body, headers, timeout = transport.calls[0]
        self.assertEqual(url, API_URL)
        self.assertEqual(headers["Content-Type"], "application/json")
        self.assertEqual(timeout, 5.0)
        payload = json.loads(body)
        self.assertEqual(payload["ServerId"], 12345)
        self.assertEqual(payload["ApiKey"], "key")
        self.assertEqual(payload["Messages"][0]["To"], [{"EmailAddress": "rcpt@example.com"}])
        self.assertTrue(result.success)
        self.assertEqual(result.transaction_receipt, "r-1")

    def test_missing_bodies_fails_without_network_call(self) -> None:
        transport = FakeTransport(_ok({"ErrorCode": "Success"}))
        client = EmailClient("12345", "key", transport=transport)

        with self.assertRaises(ValidationError):
            client.send(_message(text_body=None, html_body=None))
        self.assertEqual(transport.calls, [])

    def test_no_recipients_fails_without_network_call(self) -> None:
        transport = FakeTransport(_ok({"ErrorCode": "Success"}))
        client = EmailClient("12345", "key", transport=transport)

        with self.assertRaises(ValidationError):
            client.send(_message(to=()))
        self.assertEqual(transport.calls, [])

    def test_camel_case_success_body(self) -> None:
        transport = FakeTransport(_ok({"success": True, "transactionReceipt": "abc"}))
        client = EmailClient("12345", "key", transport=transport)

        result = client.send(_message())

        self.assertTrue(result.success)
        self.assertEqual(result.transaction_receipt, "abc")

    def test_http_401_raises_api_error(self) -> None:
        transport = FakeTransport(HttpResponse(status_code=401, body=b"Unauthorized"))
        client = EmailClient("12345", "key", transport=transport)

        with self.assertRaises(ApiError) as ctx:
            client.send(_message())
        self.assertEqual(ctx.exception.status_code, 401)
        self.assertEqual(ctx.exception.body, b"Unauthorized")
        self.assertEqual(ctx.exception.kind, ErrorKind.API)

    def test_timeout_raises_transport_error_without_retry(self) -> None:
        transport = FakeTransport(error=TimeoutError("timed out"))
        client = EmailClient("12345", "key", transport=transport)

        with self.assertRaises(TransportError) as ctx:
            client.send(_message())
        self.assertIsInstance(ctx.exception.__cause__, TimeoutError)
        self.assertEqual(len(transport.calls), 1)

    def test_transport_error_from_transport_propagates(self) -> None:
        transport = FakeTransport(error=TransportError("connection refused"))
        client = EmailClient("12345", "key", transport=transport)

        with self.assertRaisesRegex(TransportError, "connection refused"):
            client.send(_message())
        self.assertEqual(len(transport.calls), 1)

    def test_unparseable_body_raises_decode_error(self) -> None:
        transport = FakeTransport(HttpResponse(status_code=200, body=b"<html>oops</html>"))
        client = EmailClient("12345", "key", transport=transport)

        with self.assertRaises(DecodeError):
            client.send(_message())

    def test_provider_failure_is_returned_not_raised(self) -> None:
        transport = FakeTransport(_ok({"ErrorCode": "InvalidAuthentication", "TransactionReceipt": None}))
        client = EmailClient("12345", "key", transport=transport)

        result = client.send(_message())

        self.assertFalse(result.success)
        self.assertEqual(result.error_code, "InvalidAuthentication")
        self.assertEqual(len(result.messages_errors), 1)

    def test_send_batch_posts_all_messages_once(self) -> None:
        transport = FakeTransport(_ok({"ErrorCode": "Success"}))
        client = EmailClient("12345", "key", transport=transport)

        client.send_batch([_message(subject="a"), _message(subject="b")])

        self.assertEqual(len(transport.calls), 1)
        payload = json.loads(transport.calls[0][1])
        self.assertEqual([m["Subject"] for m in payload["Messages"]], ["a", "b"])

    def test_send_batch_rejects_empty_and_names_bad_index(self) -> None:
        transport = FakeTransport(_ok({"ErrorCode": "Success"}))
        client = EmailClient("12345", "key", transport=transport)

        with self.assertRaises(ValidationError):
            client.send_batch([])
        with self.assertRaisesRegex(ValidationError, "Message 1"):
            client.send_batch([_message(), _message(text_body=None)])
        self.assertEqual(transport.calls, [])


if __name__ == "__main__":
    unittest.main()

from __future__ import annotations

import json
from typing import Any

from socketlabs.errors import DecodeError
from socketlabs.models import (
    AddressResult,
    AddressResultErrorCode,
    MessageResult,
    MessageResultErrorCode,
    PostMessageErrorCode,
    SendResult,
)


def parse_send_response(body: bytes) -> SendResult:
    """Decode a 2xx Injection API body into a ``SendResult``.

    Keys are matched case-insensitively: the API answers in PascalCase but
    camelCase bodies decode the same way. An explicit boolean ``Success``
    field wins over ``ErrorCode``.
    """
    try:
        data = json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as exc:
        raise DecodeError(f"Response body is not valid JSON: {exc}", body) from exc
    if not isinstance(data, dict):
        raise DecodeError("Response body is not a JSON object.", body)

    fields = _lower_keys(data)
    raw_code = fields.get("errorcode")
    error_code = PostMessageErrorCode.parse(raw_code) if raw_code is not None else None

    explicit_success = fields.get("success")
    if isinstance(explicit_success, bool):
        success = explicit_success
    else:
        success = error_code == PostMessageErrorCode.SUCCESS

    try:
        message_results = tuple(_message_result(item) for item in fields.get("messageresults") or [])
    except (AttributeError, TypeError, ValueError) as exc:
        raise DecodeError(f"Malformed MessageResults: {exc}", body) from exc

    receipt = fields.get("transactionreceipt")
    return SendResult(
        success=success,
        transaction_receipt=str(receipt) if receipt is not None else None,
        error_code=error_code.value if error_code is not None else None,
        messages_errors=_collect_errors(error_code, message_results),
        message_results=message_results,
    )


def _lower_keys(data: dict[str, Any]) -> dict[str, Any]:
    return {str(k).lower(): v for k, v in data.items()}


def _message_result(raw: dict[str, Any]) -> MessageResult:
    fields = _lower_keys(raw)
    addresses = tuple(_address_result(item) for item in fields.get("addressresults") or [])
    return MessageResult(
        index=int(fields.get("index", 0)),
        error_code=MessageResultErrorCode.parse(fields.get("errorcode")),
        address_results=addresses,
    )


def _address_result(raw: dict[str, Any]) -> AddressResult:
    fields = _lower_keys(raw)
    return AddressResult(
        email_address=str(fields.get("emailaddress", "")),
        accepted=bool(fields.get("accepted", False)),
        error_code=AddressResultErrorCode.parse(fields.get("errorcode")),
    )


def _collect_errors(
    error_code: PostMessageErrorCode | None,
    message_results: tuple[MessageResult, ...],
) -> tuple[str, ...]:
    errors: list[str] = []
    if error_code is not None and error_code not in (
        PostMessageErrorCode.SUCCESS,
        PostMessageErrorCode.WARNING,
    ):
        errors.append(f"{error_code.value}: {error_code.describe()}")
    for result in message_results:
        errors.append(f"message {result.index}: {result.error_code.value}: {result.error_code.describe()}")
        for address in result.address_results:
            if address.accepted:
                continue
            errors.append(
                f"message {result.index} address {address.email_address}: "
                f"{address.error_code.value}: {address.error_code.describe()}"
            )
    return tuple(errors)

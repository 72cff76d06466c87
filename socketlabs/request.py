from __future__ import annotations

import json
from typing import Any, Sequence

from socketlabs.errors import ValidationError
from socketlabs.models import (
    Attachment,
    Credentials,
    CustomHeader,
    EmailAddress,
    EmailMessage,
    MergeData,
    MergeField,
)


def validate_message(message: EmailMessage) -> None:
    if not message.from_.email.strip():
        raise ValidationError("Message sender address is empty.")
    if not message.to:
        raise ValidationError("Message must have at least one recipient.")
    for address in (*message.to, *message.cc, *message.bcc):
        if not address.email.strip():
            raise ValidationError("Message recipient address is empty.")
    if not message.text_body and not message.html_body:
        raise ValidationError("Message must have a text body or an html body.")


def validate_messages(messages: Sequence[EmailMessage]) -> None:
    if not messages:
        raise ValidationError("You must have at least one Message per Request.")
    for index, message in enumerate(messages):
        try:
            validate_message(message)
        except ValidationError as exc:
            raise ValidationError(f"Message {index}: {exc}") from exc


def build_payload(credentials: Credentials, messages: Sequence[EmailMessage]) -> dict[str, Any]:
    server_id: int | str = credentials.server_id
    if _is_numeric_id(credentials.server_id):
        server_id = int(credentials.server_id)
    return {
        "ServerId": server_id,
        "ApiKey": credentials.api_key,
        "Messages": [message_to_dict(m) for m in messages],
    }


def _is_numeric_id(server_id: str) -> bool:
    # ids with leading zeros go out unchanged so no id is rewritten
    if not (server_id.isascii() and server_id.isdecimal()):
        return False
    return server_id == "0" or not server_id.startswith("0")


def encode_payload(credentials: Credentials, messages: Sequence[EmailMessage]) -> bytes:
    return json.dumps(build_payload(credentials, messages), ensure_ascii=False).encode("utf-8")


def message_to_dict(message: EmailMessage) -> dict[str, Any]:
    out: dict[str, Any] = {
        "To": [_address(a) for a in message.to],
        "From": _address(message.from_),
        "Subject": message.subject,
    }
    if message.text_body:
        out["TextBody"] = message.text_body
    if message.html_body:
        out["HtmlBody"] = message.html_body
    if message.mailing_id:
        out["MailingId"] = message.mailing_id
    if message.message_id:
        out["MessageId"] = message.message_id
    if message.charset:
        out["Charset"] = message.charset
    if message.custom_headers:
        out["CustomHeaders"] = [_header(h) for h in message.custom_headers]
    if message.cc:
        out["Cc"] = [_address(a) for a in message.cc]
    if message.bcc:
        out["Bcc"] = [_address(a) for a in message.bcc]
    if message.reply_to is not None:
        out["ReplyTo"] = _address(message.reply_to)
    if message.attachments:
        out["Attachments"] = [_attachment(a) for a in message.attachments]
    if message.merge_data is not None:
        out["MergeData"] = _merge_data(message.merge_data)
    return out


def _address(address: EmailAddress) -> dict[str, str]:
    out = {"EmailAddress": address.email}
    if address.friendly_name:
        out["FriendlyName"] = address.friendly_name
    return out


def _header(header: CustomHeader) -> dict[str, str]:
    return {"Name": header.name, "Value": header.value}


def _attachment(attachment: Attachment) -> dict[str, Any]:
    out: dict[str, Any] = {
        "Name": attachment.name,
        "Content": attachment.content,
        "ContentType": attachment.content_type,
    }
    if attachment.content_id:
        out["ContentId"] = attachment.content_id
    if attachment.custom_headers:
        out["CustomHeaders"] = [_header(h) for h in attachment.custom_headers]
    return out


def _merge_field(merge_field: MergeField) -> dict[str, str]:
    return {"Field": merge_field.field, "Value": merge_field.value}


def _merge_data(merge_data: MergeData) -> dict[str, Any]:
    return {
        "PerMessage": [[_merge_field(f) for f in row] for row in merge_data.per_message],
        "Global": [_merge_field(f) for f in merge_data.global_],
    }

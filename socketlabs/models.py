from __future__ import annotations

import base64
from dataclasses import dataclass, field
from enum import Enum


class PostMessageErrorCode(str, Enum):
    SUCCESS = "Success"
    WARNING = "Warning"
    ACCOUNT_DISABLED = "AccountDisabled"
    INTERNAL_ERROR = "InternalError"
    INVALID_AUTHENTICATION = "InvalidAuthentication"
    INVALID_DATA = "InvalidData"
    NO_MESSAGES = "NoMessages"
    EMPTY_MESSAGE = "EmptyMessage"
    OVER_QUOTA = "OverQuota"
    TOO_MANY_ERRORS = "TooManyErrors"
    TOO_MANY_MESSAGES = "TooManyMessages"
    TOO_MANY_RECIPIENTS = "TooManyRecipients"
    NO_VALID_RECIPIENTS = "NoValidRecipients"
    UNKNOWN_ERROR_CODE = "UnknownErrorCode"

    @classmethod
    def parse(cls, raw: object) -> PostMessageErrorCode:
        try:
            return cls(raw)
        except ValueError:
            return cls.UNKNOWN_ERROR_CODE

    def describe(self) -> str:
        return _POST_MESSAGE_DESCRIPTIONS[self]


class MessageResultErrorCode(str, Enum):
    WARNING = "Warning"
    INVALID_ATTACHMENT = "InvalidAttachment"
    MESSAGE_TOO_LARGE = "MessageTooLarge"
    EMPTY_SUBJECT = "EmptySubject"
    EMPTY_TO_ADDRESS = "EmptyToAddress"
    INVALID_FROM_ADDRESS = "InvalidFromAddress"
    NO_VALID_BODY_PARTS = "NoValidBodyParts"
    NO_VALID_RECIPIENTS = "NoValidRecipients"
    INVALID_MERGE_DATA = "InvalidMergeData"
    INVALID_TEMPLATE_ID = "InvalidTemplateId"
    MESSAGE_BODY_CONFLICT = "MessageBodyConflict"
    UNKNOWN_ERROR_CODE = "UnknownErrorCode"

    @classmethod
    def parse(cls, raw: object) -> MessageResultErrorCode:
        try:
            return cls(raw)
        except ValueError:
            return cls.UNKNOWN_ERROR_CODE

    def describe(self) -> str:
        return _MESSAGE_RESULT_DESCRIPTIONS[self]


class AddressResultErrorCode(str, Enum):
    INVALID_ADDRESS = "InvalidAddress"
    UNKNOWN_ERROR_CODE = "UnknownErrorCode"

    @classmethod
    def parse(cls, raw: object) -> AddressResultErrorCode:
        try:
            return cls(raw)
        except ValueError:
            return cls.UNKNOWN_ERROR_CODE

    def describe(self) -> str:
        return _ADDRESS_RESULT_DESCRIPTIONS[self]


_UNKNOWN_DESCRIPTION = "SocketLabs returned an unknown error code."

_POST_MESSAGE_DESCRIPTIONS = {
    PostMessageErrorCode.SUCCESS: "Success.",
    PostMessageErrorCode.WARNING: "There were one or more failed messages and/or recipients.",
    PostMessageErrorCode.ACCOUNT_DISABLED: "The account has been disabled.",
    PostMessageErrorCode.INTERNAL_ERROR: (
        "Internal server error. (Please report to SocketLabs support if encountered.)"
    ),
    PostMessageErrorCode.INVALID_AUTHENTICATION: "The ServerId/ApiKey combination is invalid.",
    PostMessageErrorCode.INVALID_DATA: (
        "PostBody parameter does not have a valid structure, or contains invalid or missing data."
    ),
    PostMessageErrorCode.NO_MESSAGES: "There were no messages to inject included in the request.",
    PostMessageErrorCode.EMPTY_MESSAGE: "One or more messages have insufficient content to process.",
    PostMessageErrorCode.OVER_QUOTA: "Rate limit exceeded.",
    PostMessageErrorCode.TOO_MANY_ERRORS: "Authentication error limit exceeded.",
    PostMessageErrorCode.TOO_MANY_MESSAGES: "Too many messages in a single request.",
    PostMessageErrorCode.TOO_MANY_RECIPIENTS: "Too many recipients in a single message.",
    PostMessageErrorCode.NO_VALID_RECIPIENTS: "A merge was attempted, but there were no valid recipients.",
    PostMessageErrorCode.UNKNOWN_ERROR_CODE: _UNKNOWN_DESCRIPTION,
}

_MESSAGE_RESULT_DESCRIPTIONS = {
    MessageResultErrorCode.WARNING: "The message has one or more bad recipients.",
    MessageResultErrorCode.INVALID_ATTACHMENT: "The message has one or more invalid attachments.",
    MessageResultErrorCode.MESSAGE_TOO_LARGE: "The message was larger than the allowed size.",
    MessageResultErrorCode.EMPTY_SUBJECT: (
        "This message contained an empty subject line, which is not allowed."
    ),
    MessageResultErrorCode.EMPTY_TO_ADDRESS: "This message does not contain a To address.",
    MessageResultErrorCode.INVALID_FROM_ADDRESS: "This message does not contain a valid From address.",
    MessageResultErrorCode.NO_VALID_BODY_PARTS: "This message does not have a valid text HTML body specified.",
    MessageResultErrorCode.NO_VALID_RECIPIENTS: (
        "There are no valid addresses specified as message recipients."
    ),
    MessageResultErrorCode.INVALID_MERGE_DATA: (
        "The included merge data does not follow the API specification."
    ),
    MessageResultErrorCode.INVALID_TEMPLATE_ID: "The selected API Template does not exist.",
    MessageResultErrorCode.MESSAGE_BODY_CONFLICT: (
        "The Html Body and Text Body cannot be set when also specifying an API Template ID."
    ),
    MessageResultErrorCode.UNKNOWN_ERROR_CODE: _UNKNOWN_DESCRIPTION,
}

_ADDRESS_RESULT_DESCRIPTIONS = {
    AddressResultErrorCode.INVALID_ADDRESS: "The address did not meet specification requirements.",
    AddressResultErrorCode.UNKNOWN_ERROR_CODE: _UNKNOWN_DESCRIPTION,
}


@dataclass(frozen=True)
class Credentials:
    server_id: str
    api_key: str = field(repr=False)


@dataclass(frozen=True)
class EmailAddress:
    email: str
    friendly_name: str | None = None


@dataclass(frozen=True)
class CustomHeader:
    name: str
    value: str


@dataclass(frozen=True)
class Attachment:
    """A file attached to a message. ``content`` holds base64 text."""

    name: str
    content: str
    content_type: str
    content_id: str | None = None
    custom_headers: tuple[CustomHeader, ...] = ()

    @classmethod
    def from_bytes(
        cls,
        name: str,
        data: bytes,
        content_type: str = "application/octet-stream",
        content_id: str | None = None,
    ) -> Attachment:
        return cls(
            name=name,
            content=base64.b64encode(data).decode("ascii"),
            content_type=content_type,
            content_id=content_id,
        )


@dataclass(frozen=True)
class MergeField:
    field: str
    value: str


@dataclass(frozen=True)
class MergeData:
    """Inline merge values.

    ``per_message`` holds one field set per delivery; the reserved field
    ``DeliveryAddress`` names the recipient of that delivery. ``global_``
    applies to every delivery in the message.
    """

    per_message: tuple[tuple[MergeField, ...], ...] = ()
    global_: tuple[MergeField, ...] = ()


@dataclass(frozen=True)
class EmailMessage:
    from_: EmailAddress
    to: tuple[EmailAddress, ...]
    subject: str
    text_body: str | None = None
    html_body: str | None = None
    cc: tuple[EmailAddress, ...] = ()
    bcc: tuple[EmailAddress, ...] = ()
    reply_to: EmailAddress | None = None
    custom_headers: tuple[CustomHeader, ...] = ()
    attachments: tuple[Attachment, ...] = ()
    mailing_id: str | None = None
    message_id: str | None = None
    charset: str | None = None
    merge_data: MergeData | None = None


@dataclass(frozen=True)
class AddressResult:
    email_address: str
    accepted: bool
    error_code: AddressResultErrorCode


@dataclass(frozen=True)
class MessageResult:
    index: int
    error_code: MessageResultErrorCode
    address_results: tuple[AddressResult, ...] = ()


@dataclass(frozen=True)
class SendResult:
    success: bool
    transaction_receipt: str | None = None
    error_code: str | None = None
    messages_errors: tuple[str, ...] = ()
    message_results: tuple[MessageResult, ...] = ()


@dataclass(frozen=True)
class HttpResponse:
    status_code: int
    body: bytes

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


@dataclass(frozen=True)
class ClientSettings:
    server_id: str
    api_key: str = field(repr=False)
    api_url: str
    timeout_sec: float | None
    log_level: str
    log_file: str | None = None

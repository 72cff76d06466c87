from __future__ import annotations

import logging
from typing import Sequence

from socketlabs.errors import ApiError, ConfigError, DecodeError, TransportError
from socketlabs.models import Credentials, EmailMessage, SendResult
from socketlabs.request import encode_payload, validate_messages
from socketlabs.response import parse_send_response
from socketlabs.transport import HttpTransport, UrllibTransport

LOGGER = logging.getLogger(__name__)
API_URL = "https://inject.socketlabs.com/api/v1/email"


class EmailClient:
    """Client for the SocketLabs Injection API.

    Holds the server id and API key; each ``send`` is one blocking POST with
    no retry. Failures are raised as ``ClientError`` subclasses.
    """

    def __init__(
        self,
        server_id: str,
        api_key: str,
        *,
        transport: HttpTransport | None = None,
        api_url: str = API_URL,
        timeout_sec: float | None = None,
    ) -> None:
        server_id = str(server_id).strip() if server_id is not None else ""
        api_key = (api_key or "").strip()
        if not server_id:
            raise ConfigError("SocketLabs server id is empty.")
        if not api_key:
            raise ConfigError("SocketLabs API key is empty.")
        self._credentials = Credentials(server_id=server_id, api_key=api_key)
        self._transport: HttpTransport = transport or UrllibTransport()
        self._api_url = api_url
        self._timeout_sec = timeout_sec

    @property
    def server_id(self) -> str:
        return self._credentials.server_id

    def send(self, message: EmailMessage) -> SendResult:
        return self.send_batch([message])

    def send_batch(self, messages: Sequence[EmailMessage]) -> SendResult:
        validate_messages(messages)
        body = encode_payload(self._credentials, messages)

        try:
            response = self._transport.post(
                self._api_url,
                body,
                {"Content-Type": "application/json", "Accept": "application/json"},
                self._timeout_sec,
            )
        except TransportError as exc:
            LOGGER.warning("SocketLabs request failed server_id=%s: %s", self.server_id, exc)
            raise
        except OSError as exc:
            LOGGER.warning("SocketLabs request failed server_id=%s: %s", self.server_id, exc)
            raise TransportError(f"Problem making request to SocketLabs: {exc}") from exc

        LOGGER.info(
            "SocketLabs injection server_id=%s messages=%s status=%s",
            self.server_id,
            len(messages),
            response.status_code,
        )
        if not response.ok:
            LOGGER.warning(
                "SocketLabs rejected request server_id=%s status=%s", self.server_id, response.status_code
            )
            raise ApiError(response.status_code, response.body)

        try:
            result = parse_send_response(response.body)
        except DecodeError:
            LOGGER.warning("SocketLabs response could not be decoded server_id=%s", self.server_id)
            raise
        if not result.success:
            LOGGER.warning(
                "SocketLabs reported failure server_id=%s error_code=%s errors=%s",
                self.server_id,
                result.error_code,
                len(result.messages_errors),
            )
        return result

    def __repr__(self) -> str:
        return f"EmailClient(server_id={self.server_id!r}, api_url={self._api_url!r})"

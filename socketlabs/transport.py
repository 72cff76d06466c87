from __future__ import annotations

import logging
from http.client import HTTPException
from typing import Mapping, Protocol
from urllib.error import HTTPError, URLError
from urllib.request import Request, build_opener

from socketlabs.errors import TransportError
from socketlabs.models import HttpResponse

LOGGER = logging.getLogger(__name__)
USER_AGENT = "socketlabs-python/0.1.0"


class HttpTransport(Protocol):
    """POSTs a body and returns the response, whatever its status.

    Implementations raise ``TransportError`` when no response was received.
    """

    def post(
        self,
        url: str,
        body: bytes,
        headers: Mapping[str, str],
        timeout_sec: float | None = None,
    ) -> HttpResponse: ...


class UrllibTransport:
    def __init__(self, handlers: tuple = ()) -> None:
        self._handlers = handlers

    def post(
        self,
        url: str,
        body: bytes,
        headers: Mapping[str, str],
        timeout_sec: float | None = None,
    ) -> HttpResponse:
        opener = build_opener(*self._handlers)
        kwargs = {} if timeout_sec is None else {"timeout": timeout_sec}
        try:
            req = Request(url, data=body, headers={"User-Agent": USER_AGENT, **headers}, method="POST")
            with opener.open(req, **kwargs) as response:  # type: ignore[arg-type]
                return HttpResponse(status_code=response.status, body=response.read())
        except HTTPError as exc:
            try:
                payload = exc.read()
            except (OSError, HTTPException) as read_exc:
                raise TransportError(f"Problem reading SocketLabs error response: {read_exc}") from read_exc
            finally:
                exc.close()
            return HttpResponse(status_code=exc.code, body=payload or b"")
        except URLError as exc:
            LOGGER.debug("POST %s failed: %s", url, exc.reason)
            raise TransportError(f"Problem making request to SocketLabs: {exc.reason}") from exc
        except (OSError, HTTPException) as exc:
            raise TransportError(f"Problem making request to SocketLabs: {exc}") from exc
        except ValueError as exc:
            raise TransportError(f"Invalid SocketLabs request URL {url!r}: {exc}") from exc

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    CONFIG = "CONFIG"
    VALIDATION = "VALIDATION"
    TRANSPORT = "TRANSPORT"
    API = "API"
    DECODE = "DECODE"


class ClientError(RuntimeError):
    kind: ErrorKind

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind


class ConfigError(ClientError):
    def __init__(self, message: str):
        super().__init__(ErrorKind.CONFIG, message)


class ValidationError(ClientError):
    def __init__(self, message: str):
        super().__init__(ErrorKind.VALIDATION, message)


class TransportError(ClientError):
    """Network, TLS or timeout failure; the original exception is ``__cause__``."""

    def __init__(self, message: str):
        super().__init__(ErrorKind.TRANSPORT, message)


class ApiError(ClientError):
    def __init__(self, status_code: int, body: bytes):
        super().__init__(ErrorKind.API, f"SocketLabs returned HTTP {status_code}")
        self.status_code = status_code
        self.body = body


class DecodeError(ClientError):
    def __init__(self, message: str, body: bytes = b""):
        super().__init__(ErrorKind.DECODE, message)
        self.body = body

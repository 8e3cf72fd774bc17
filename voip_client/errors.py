"""
Exception hierarchy for the VOIP API client.

Every failure raised by a request is a VoipError subclass, so callers can
catch the whole family at once or single out one kind.

Classes:
    VoipError: Base class, carries the API method name when known.
    ConfigurationError: Malformed endpoint or missing configuration.
    ReservedParameterError: A query parameter collides with a mandatory one.
    VoipTransportError: Connection failure or timeout.
    MalformedResponseError: Response body is not the expected JSON.
    HTTPStatusError: HTTP status other than 200.
    StatusError: Response status field other than "success".
    EncodingError: Payload could not be written as form fields.

(c) Passlick Development 2025. All rights reserved.
"""


from __future__ import annotations


class VoipError(Exception):
    def __init__(self, message: str, *, method: str | None = None):
        self.message = message
        self.method = method
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class ConfigurationError(VoipError):
    pass


class ReservedParameterError(VoipError, ValueError):
    pass


class VoipTransportError(VoipError):
    pass


class MalformedResponseError(VoipError):
    pass


class HTTPStatusError(VoipError):
    """Status text such as "404 Not Found" is the message."""

    def __init__(self, message: str, *, status_code: int, method: str | None = None):
        self.status_code = status_code
        super().__init__(message, method=method)


class StatusError(VoipError):
    """The provider's own status string is the message."""

    def __init__(self, status: str, *, method: str | None = None):
        self.status = status
        super().__init__(status, method=method)


class EncodingError(VoipError):
    def __init__(self, message: str, *, field: str | None = None):
        self.field = field
        super().__init__(message)

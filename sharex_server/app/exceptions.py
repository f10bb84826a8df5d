"""Server exception types.

Services raise the HTTP-agnostic ``RequestError`` subclasses below; the global
exception handlers registered in ``sharex_server/app/main.py`` map them to
JSON error responses.
"""

from __future__ import annotations


class ShareXServerError(Exception):
    """Base class for every error raised by this package."""


class ConfigError(ShareXServerError, ValueError):
    """Raised when server options are missing or invalid."""


class BindError(ShareXServerError, OSError):
    """Raised by ``ShareXServer.start`` when the listening socket cannot be bound."""


class ServerStateError(ShareXServerError, RuntimeError):
    """Raised when a lifecycle operation does not fit the server's current state."""


class RequestError(ShareXServerError):
    """An error that belongs to a single request and carries its HTTP status."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BadRequestError(RequestError):
    status_code = 400


class UnauthorizedError(RequestError):
    status_code = 401


class NotFoundError(RequestError):
    status_code = 404

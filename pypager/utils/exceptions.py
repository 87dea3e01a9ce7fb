from __future__ import annotations


class PypagerError(Exception):
    """Base exception for all Pypager errors."""


class NoRemainingPages(PypagerError):
    """Raised when no page exists in the requested direction."""


class NotConnected(PypagerError):
    """Raised when attempting to use a client that is not connected."""


class MissingEndpoint(PypagerError):
    """Raised when a cursor page has no endpoint descriptor to re-request against."""


class RequestFailed(PypagerError):
    """Raised when a page request fails in transport, status or deserialization."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code

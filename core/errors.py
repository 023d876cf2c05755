"""
core/errors.py
────────────────────────────────────────────────────────────────────────
Failure taxonomy shared by the store, the upstream clients and the
domain services.  Routers translate these into HTTP status codes; nothing
below the API layer knows about HTTP responses.
"""
from __future__ import annotations


class ServiceError(Exception):
    """Base class for every expected failure of the service layer."""


class InvalidInput(ServiceError):
    """Missing or malformed caller input (→ 400)."""


class NotFound(ServiceError):
    """A referenced record does not exist (→ 404)."""


class UpstreamError(ServiceError):
    """A third-party API answered with a non-success status or was unreachable."""

    def __init__(self, message: str, status_text: str | None = None) -> None:
        super().__init__(message)
        self.status_text = status_text


class RateLimited(ServiceError):
    """The completion provider signalled quota exhaustion or HTTP 429."""


class EmptyResponse(ServiceError):
    """The upstream succeeded but returned no usable content."""


class MalformedResponse(EmptyResponse):
    """The upstream returned content that could not be parsed into the expected shape."""

"""Error types rendered by the API as ``{"error": ..., "details": ...}``."""

from __future__ import annotations


class CoachError(Exception):
    """Base error carrying an HTTP status and a client-facing message."""

    status_code = 500

    def __init__(self, error: str, details: str | None = None) -> None:
        super().__init__(error)
        self.error = error
        self.details = details

    def to_dict(self) -> dict[str, str]:
        body = {"error": self.error}
        if self.details:
            body["details"] = self.details
        return body


class InvalidRequestError(CoachError):
    status_code = 400


class HasChildrenError(InvalidRequestError):
    """Raised when deleting a node that still has children without cascading."""


class NotFoundError(CoachError):
    status_code = 404


class UpstreamError(CoachError):
    """A storage or LLM call failed."""

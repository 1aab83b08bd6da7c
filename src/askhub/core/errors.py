"""Error taxonomy shared by the service layer and the HTTP layer."""

from __future__ import annotations

from typing import Any


class AskHubError(Exception):
    """Base class for all domain errors.

    Subclasses carry a stable ``kind`` and the HTTP status the API layer
    renders them with. ``data`` holds structured context such as a ban
    reason or a suspension end date.
    """

    kind = "error"
    status_code = 500

    def __init__(self, message: str, data: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.data = data or {}


class NotFoundError(AskHubError):
    """Raised when a target entity does not exist."""

    kind = "not_found"
    status_code = 404


class InvalidArgumentError(AskHubError):
    """Raised for malformed input such as an out-of-range vote value."""

    kind = "invalid_argument"
    status_code = 400


class ForbiddenError(AskHubError):
    """Raised on ownership or role violations and for blocked accounts."""

    kind = "forbidden"
    status_code = 403


class ConflictError(AskHubError):
    """Raised when the current state forbids the requested transition."""

    kind = "conflict"
    status_code = 409


__all__ = [
    "AskHubError",
    "ConflictError",
    "ForbiddenError",
    "InvalidArgumentError",
    "NotFoundError",
]

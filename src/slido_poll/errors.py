"""Failure classification for Slido poll automation."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class FailureKind(Enum):
    """Closed set of expected failures the runner reports to the user."""

    LOGIN_FAILED = "login_failed"
    EVENT_NOT_FOUND = "event_not_found"
    QUOTA_EXCEEDED = "quota_exceeded"
    MALFORMED_PAGE = "malformed_page"

    @property
    def default_message(self) -> str:
        return _DEFAULT_MESSAGES[self]


_DEFAULT_MESSAGES = {
    FailureKind.LOGIN_FAILED: "Login failed (wrong credential or slow network)",
    FailureKind.EVENT_NOT_FOUND: "Event not found",
    FailureKind.QUOTA_EXCEEDED: "Poll couldn't be created, possibly due to poll limit for free user",
    FailureKind.MALFORMED_PAGE: "Malformed page structure",
}


class ActuatorTimeout(Exception):
    """A wait on the page did not complete within its timeout."""


class PollAutomationError(Exception):
    """Classified failure carrying a :class:`FailureKind`.

    Raised by the login, event and poll components; the runner turns it into
    a user-facing message instead of a traceback.
    """

    def __init__(self, kind: FailureKind, message: Optional[str] = None) -> None:
        self.kind = kind
        super().__init__(message or kind.default_message)


__all__ = ["ActuatorTimeout", "FailureKind", "PollAutomationError"]

"""Domain objects for Slido poll automation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple


@dataclass(frozen=True)
class Credential:
    """Email/password pair used once per run to log in."""

    email: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class PollOption:
    """A single answer of a multiple-choice poll."""

    name: str
    correct: bool = False


@dataclass(frozen=True)
class PollDefinition:
    """Prompt plus ordered options; options are entered positionally."""

    prompt: str
    options: Tuple[PollOption, ...]

    def __post_init__(self) -> None:
        # Accept any iterable but store an immutable tuple.
        object.__setattr__(self, "options", tuple(self.options))
        if not self.options:
            raise ValueError(f"Poll {self.prompt!r} must have at least one option")

    @property
    def has_correct_answer(self) -> bool:
        return any(option.correct for option in self.options)


class LoginSurface(Enum):
    """Which login form the service presented after the email was entered."""

    NATIVE = "native"
    FEDERATED = "federated"


__all__ = ["Credential", "LoginSurface", "PollDefinition", "PollOption"]

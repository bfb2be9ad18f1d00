"""Runtime configuration for the poll creator, read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Optional

from .utils.env_utils import env_ms, getenv_bool

LOGIN_URL = "https://accounts.sli.do/login"

# Uniform bound for every wait on the page.
DEFAULT_TIMEOUT_MS = 5000
# The multiple-choice entry is missing when the free-tier poll limit is hit,
# so this wait is deliberately short.
POLL_TYPE_TIMEOUT_MS = 1000

SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")


@dataclass(frozen=True)
class AppConfig:
    login_url: str = LOGIN_URL
    browser_name: str = "chromium"
    channel: Optional[str] = None
    headless: bool = False
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    poll_type_timeout_ms: int = POLL_TYPE_TIMEOUT_MS
    credential_path: str = "credential.json"

    def __post_init__(self) -> None:
        if self.browser_name not in SUPPORTED_BROWSERS:
            raise ValueError(
                f"Unsupported browser {self.browser_name!r}; choose one of {', '.join(SUPPORTED_BROWSERS)}"
            )
        # Playwright treats 0 as "no timeout", which would let a quota check hang.
        for name in ("timeout_ms", "poll_type_timeout_ms"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be a positive number of milliseconds, got {getattr(self, name)}")

    def with_overrides(self, **changes) -> "AppConfig":
        """Return a copy with the non-None values of ``changes`` applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def load_config() -> AppConfig:
    """Build an :class:`AppConfig` from environment variables.

    Call :func:`slido_poll.utils.env_utils.load_env` first to pick up a
    ``.env`` file.
    """
    return AppConfig(
        login_url=os.getenv("SLIDO_LOGIN_URL") or LOGIN_URL,
        browser_name=(os.getenv("BROWSER") or "chromium").lower(),
        channel=os.getenv("BROWSER_CHANNEL") or None,
        headless=getenv_bool("HEADLESS", False),
        timeout_ms=env_ms("TIMEOUT_MS", DEFAULT_TIMEOUT_MS),
        poll_type_timeout_ms=env_ms("POLL_TYPE_TIMEOUT_MS", POLL_TYPE_TIMEOUT_MS),
        credential_path=os.getenv("CREDENTIAL_PATH") or "credential.json",
    )


__all__ = ["AppConfig", "DEFAULT_TIMEOUT_MS", "LOGIN_URL", "POLL_TYPE_TIMEOUT_MS", "load_config"]

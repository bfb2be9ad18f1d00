"""Capabilities the login, event and poll steps need from a browser tab."""

from __future__ import annotations

from typing import Any, AsyncContextManager, List, Optional, Protocol

# Opaque element reference; only valid until the next navigation.
ElementHandle = Any


class PageActuator(Protocol):
    """Drive a single browser tab.

    Every operation that waits raises
    :class:`slido_poll.errors.ActuatorTimeout` when its timeout elapses.
    ``timeout_ms=None`` means the session-wide default timeout.
    """

    async def goto(self, url: str, *, wait_until: str = "load") -> None:
        ...

    async def wait_for(self, selector: str, *, timeout_ms: Optional[int] = None, visible: bool = False) -> None:
        ...

    async def pause(self, ms: int) -> None:
        """Fixed delay."""

    def expect_navigation(self, *, wait_until: str = "load") -> AsyncContextManager[None]:
        """Wait, on exit, for the navigation triggered inside the block."""

    async def click(self, selector: str) -> None:
        ...

    async def click_element(self, handle: ElementHandle) -> None:
        ...

    async def type(self, selector: str, text: str, *, submit: bool = False) -> None:
        """Type ``text`` key by key; ``submit`` presses Enter afterwards."""

    async def query(self, selector: str) -> Optional[ElementHandle]:
        ...

    async def query_all(self, selector: str) -> List[ElementHandle]:
        ...

    async def query_relative(self, handle: ElementHandle, xpath: str) -> Optional[ElementHandle]:
        """Resolve ``xpath`` relative to ``handle``; None when nothing matches."""

    async def read_text(self, handle: ElementHandle) -> str:
        ...

    def current_url(self) -> str:
        ...


__all__ = ["ElementHandle", "PageActuator"]

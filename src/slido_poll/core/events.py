"""Locate an event by name and open its poll management view."""

from __future__ import annotations

from typing import List, Optional

from ..errors import ActuatorTimeout, FailureKind, PollAutomationError
from ..utils.logger import debug_detail, progress
from .actuator import ElementHandle, PageActuator

EVENT_ITEM_SELECTOR = "div.event-item span"

QUESTIONS_SEGMENT = "questions"
POLLS_SEGMENT = "polls"

# Opening the polls page and creating a poll straight away can slip past the
# poll-count limit before the client has applied it. Keep this delay.
POLLS_SETTLE_DELAY_MS = 2000


def polls_url_for(event_url: str) -> str:
    """Turn an event's questions URL into its polls URL."""
    if QUESTIONS_SEGMENT not in event_url:
        raise PollAutomationError(
            FailureKind.MALFORMED_PAGE,
            f"Unexpected event URL (no '{QUESTIONS_SEGMENT}' segment): {event_url}",
        )
    return event_url.replace(QUESTIONS_SEGMENT, POLLS_SEGMENT, 1)


async def find_event(
    actuator: PageActuator, handles: List[ElementHandle], event_name: str
) -> Optional[ElementHandle]:
    """First handle whose displayed text equals ``event_name`` exactly."""
    for handle in handles:
        text = await actuator.read_text(handle)
        if text == event_name:
            return handle
    return None


async def open_polls(actuator: PageActuator, event_name: str) -> str:
    """Open the polls page of ``event_name`` and return its URL."""
    try:
        await actuator.wait_for(EVENT_ITEM_SELECTOR)
    except ActuatorTimeout as exc:
        raise PollAutomationError(FailureKind.EVENT_NOT_FOUND, f"Event not found: {event_name}") from exc

    handles = await actuator.query_all(EVENT_ITEM_SELECTOR)
    debug_detail(f"{len(handles)} events listed")
    match = await find_event(actuator, handles, event_name)
    if match is None:
        raise PollAutomationError(FailureKind.EVENT_NOT_FOUND, f"Event not found: {event_name}")

    async with actuator.expect_navigation(wait_until="domcontentloaded"):
        await actuator.click_element(match)
    progress("Opened Event page")

    url = polls_url_for(actuator.current_url())
    await actuator.goto(url, wait_until="domcontentloaded")
    progress("Opened Polls page")
    await actuator.pause(POLLS_SETTLE_DELAY_MS)
    return url


__all__ = ["find_event", "open_polls", "polls_url_for", "POLLS_SETTLE_DELAY_MS"]

"""
src/slido_poll/core/polls.py
Create a multiple-choice poll through the Slido admin UI.

Option fields are named parametrically by the service, so they are addressed
by position: the n-th option's textarea name ends with ``{n}_{n}``. The
"mark correct" button has no stable selector of its own and is reached from
its option's textarea through ``CORRECT_BUTTON_XPATH``.
"""

from __future__ import annotations

from typing import List

from ..config import POLL_TYPE_TIMEOUT_MS
from ..errors import ActuatorTimeout, FailureKind, PollAutomationError
from ..models import PollDefinition, PollOption
from ..utils.logger import debug_detail, progress, success
from .actuator import PageActuator

CREATE_POLL_BUTTON = "div.create-component__placeholder"
MULTIPLE_CHOICE_ITEM = "li.select-boxed-item[ng-click*=\"('options')\"]"
ALLOW_CORRECT_TOGGLE = "label[ng-model$=allow_correct_answers]"
PROMPT_TEXTAREA = "textarea[name=questionText0]"
SUBMIT_BUTTON = 'button[type="submit"]'
CORRECT_BUTTON_XPATH = (
    '../../div[@class="poll-option__controls"]'
    '/div[contains(@ng-hide,"allow_correct_answers")]/span/button'
)

# Leaving the page right after submitting loses the poll server-side.
SUBMIT_SETTLE_DELAY_MS = 1000


def option_field_selector(index: int) -> str:
    return f"textarea[name$='{index}_{index}']"


async def _select_multiple_choice(actuator: PageActuator, timeout_ms: int) -> None:
    await actuator.wait_for(CREATE_POLL_BUTTON)
    await actuator.click(CREATE_POLL_BUTTON)
    progress("Opened Create Poll page")
    try:
        await actuator.wait_for(MULTIPLE_CHOICE_ITEM, timeout_ms=timeout_ms)
    except ActuatorTimeout as exc:
        raise PollAutomationError(FailureKind.QUOTA_EXCEEDED) from exc
    await actuator.click(MULTIPLE_CHOICE_ITEM)
    progress("Opened Multiple Choice Poll page")


async def _mark_correct(actuator: PageActuator, selector: str) -> None:
    field = await actuator.query(selector)
    if field is None:
        raise PollAutomationError(FailureKind.MALFORMED_PAGE, f"Option field vanished: {selector}")
    button = await actuator.query_relative(field, CORRECT_BUTTON_XPATH)
    if button is None:
        raise PollAutomationError(FailureKind.MALFORMED_PAGE, f"No correct-answer button next to {selector}")
    await actuator.click_element(button)


async def _fill_options(actuator: PageActuator, options: List[PollOption]) -> List[int]:
    """Type every option in order; return the indexes marked correct."""
    marked: List[int] = []
    for index, option in enumerate(options):
        selector = option_field_selector(index)
        await actuator.wait_for(selector)
        await actuator.type(selector, option.name)
        if option.correct:
            await _mark_correct(actuator, selector)
            marked.append(index)
    return marked


async def create_poll(
    actuator: PageActuator,
    poll: PollDefinition,
    *,
    poll_type_timeout_ms: int = POLL_TYPE_TIMEOUT_MS,
) -> None:
    """Create exactly one poll on the currently open polls page.

    Raises :class:`PollAutomationError` with ``QUOTA_EXCEEDED`` when the
    multiple-choice type never shows up, and with ``MALFORMED_PAGE`` when an
    option's controls cannot be found.
    """
    await _select_multiple_choice(actuator, poll_type_timeout_ms)

    # Must be on before any option can be marked correct.
    await actuator.click(ALLOW_CORRECT_TOGGLE)

    await actuator.wait_for(PROMPT_TEXTAREA)
    await actuator.type(PROMPT_TEXTAREA, poll.prompt)

    marked = await _fill_options(actuator, list(poll.options))
    debug_detail(f"Options entered: {len(poll.options)}, marked correct: {marked}")
    if not marked:
        # The toggle has to agree with whether an answer is marked.
        await actuator.click(ALLOW_CORRECT_TOGGLE)

    await actuator.click(SUBMIT_BUTTON)
    await actuator.pause(SUBMIT_SETTLE_DELAY_MS)
    success(f"Poll created: {poll.prompt}")


__all__ = ["create_poll", "option_field_selector", "SUBMIT_SETTLE_DELAY_MS"]

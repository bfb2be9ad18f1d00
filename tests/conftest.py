import re
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import pytest

from slido_poll.core import events, login, polls
from slido_poll.errors import ActuatorTimeout

ADMIN_URL = "https://admin.sli.do/events"
GOOGLE_URL = "https://accounts.google.com/v3/signin/identifier"
EVENT_URL = "https://admin.sli.do/event/abc123/questions"

_OPTION_FIELD = re.compile(r"textarea\[name\$='(\d+)_\1'\]")


@dataclass
class FakeHandle:
    kind: str
    value: Any


@dataclass
class SubmittedPoll:
    prompt: str
    options: List[str]
    marked: List[int]
    allow_correct: bool


@dataclass
class FakeSlido:
    """In-memory stand-in for the Slido pages behind the PageActuator protocol."""

    password: str = "x"
    federated: bool = False
    events: List[str] = field(default_factory=lambda: ["Conf2024"])
    event_url: str = EVENT_URL
    quota_left: Optional[int] = None
    drop_correct_button: bool = False

    url: str = "about:blank"
    actions: List[tuple] = field(default_factory=list)
    pauses: List[int] = field(default_factory=list)
    submitted: List[SubmittedPoll] = field(default_factory=list)
    wait_timeouts: Dict[str, Optional[int]] = field(default_factory=dict)
    waits: List[tuple] = field(default_factory=list)

    _email_entered: bool = False
    _next_clicked: bool = False
    _navigated: bool = False
    _dialog: bool = False
    _multiple_choice: bool = False
    _allow_correct: bool = False
    _prompt: str = ""
    _options: Dict[int, str] = field(default_factory=dict)
    _marked: List[int] = field(default_factory=list)

    # -- DOM model ---------------------------------------------------------

    def _present(self, selector: str, visible: bool) -> bool:
        if selector == f"{login.NATIVE_PASSWORD_INPUT}, {login.FEDERATED_NEXT_BUTTON}":
            return self._email_entered
        if selector == login.NATIVE_PASSWORD_INPUT:
            return self._email_entered and not self.federated
        if selector == login.FEDERATED_PASSWORD_INPUT:
            # Attached on the Google page right away, visible only after Next.
            return self.federated and (self._next_clicked or not visible)
        if selector == events.EVENT_ITEM_SELECTOR:
            return self.url == ADMIN_URL and bool(self.events)
        if selector == polls.CREATE_POLL_BUTTON:
            return "/polls" in self.url
        if selector == polls.MULTIPLE_CHOICE_ITEM:
            return self._dialog and (self.quota_left is None or self.quota_left > 0)
        if selector == polls.PROMPT_TEXTAREA or _OPTION_FIELD.fullmatch(selector):
            return self._multiple_choice
        return False

    # -- PageActuator ------------------------------------------------------

    async def goto(self, url: str, *, wait_until: str = "load") -> None:
        self.actions.append(("goto", url, wait_until))
        self.url = url
        self._navigated = True

    async def wait_for(self, selector: str, *, timeout_ms: Optional[int] = None, visible: bool = False) -> None:
        self.wait_timeouts[selector] = timeout_ms
        self.waits.append((selector, visible))
        if not self._present(selector, visible):
            raise ActuatorTimeout(f"Timed out waiting for {selector}")

    async def pause(self, ms: int) -> None:
        self.pauses.append(ms)
        self.actions.append(("pause", ms))

    @asynccontextmanager
    async def expect_navigation(self, *, wait_until: str = "load"):
        self._navigated = False
        yield
        if not self._navigated:
            raise ActuatorTimeout("Timed out waiting for navigation")

    async def click(self, selector: str) -> None:
        self.actions.append(("click", selector))
        if selector == login.FEDERATED_NEXT_BUTTON:
            self._next_clicked = True
        elif selector == polls.CREATE_POLL_BUTTON:
            self._dialog = True
        elif selector == polls.MULTIPLE_CHOICE_ITEM:
            self._multiple_choice = True
        elif selector == polls.ALLOW_CORRECT_TOGGLE:
            self._allow_correct = not self._allow_correct
        elif selector == polls.SUBMIT_BUTTON:
            self._submit()
        else:
            raise AssertionError(f"unexpected click on {selector}")

    async def click_element(self, handle: FakeHandle) -> None:
        self.actions.append(("click_element", handle.kind, handle.value))
        if handle.kind == "event":
            self.url = self.event_url
            self._navigated = True
        elif handle.kind == "correct":
            assert self._allow_correct, "correct answer marked while toggle is off"
            self._marked.append(handle.value)

    async def type(self, selector: str, text: str, *, submit: bool = False) -> None:
        self.actions.append(("type", selector, text, submit))
        if selector == login.EMAIL_INPUT:
            self._email_entered = True
            if self.federated:
                self.url = GOOGLE_URL
        elif selector in (login.NATIVE_PASSWORD_INPUT, login.FEDERATED_PASSWORD_INPUT):
            if submit and text == self.password:
                self.url = ADMIN_URL
                self._navigated = True
        elif selector == polls.PROMPT_TEXTAREA:
            self._prompt = text
        else:
            match = _OPTION_FIELD.fullmatch(selector)
            assert match, f"unexpected typing into {selector}"
            self._options[int(match.group(1))] = text

    async def query(self, selector: str) -> Optional[FakeHandle]:
        match = _OPTION_FIELD.fullmatch(selector)
        if match and int(match.group(1)) in self._options:
            return FakeHandle("option", int(match.group(1)))
        return None

    async def query_all(self, selector: str) -> List[FakeHandle]:
        if selector == events.EVENT_ITEM_SELECTOR and self.url == ADMIN_URL:
            return [FakeHandle("event", name) for name in self.events]
        return []

    async def query_relative(self, handle: FakeHandle, xpath: str) -> Optional[FakeHandle]:
        assert xpath == polls.CORRECT_BUTTON_XPATH
        if self.drop_correct_button:
            return None
        return FakeHandle("correct", handle.value)

    async def read_text(self, handle: FakeHandle) -> str:
        return handle.value

    def current_url(self) -> str:
        return self.url

    # -- helpers -----------------------------------------------------------

    def _submit(self) -> None:
        self.submitted.append(
            SubmittedPoll(
                prompt=self._prompt,
                options=[self._options[i] for i in sorted(self._options)],
                marked=list(self._marked),
                allow_correct=self._allow_correct,
            )
        )
        if self.quota_left is not None:
            self.quota_left -= 1
        self._dialog = self._multiple_choice = self._allow_correct = False
        self._prompt = ""
        self._options = {}
        self._marked = []

    def start_at_polls_page(self) -> "FakeSlido":
        self.url = self.event_url.replace("questions", "polls")
        return self


@pytest.fixture
def slido():
    """Factory for fake Slido pages: ``slido(federated=True, events=[...])``."""
    return FakeSlido


class CountingSession:
    """Session factory recording how many sessions were opened and closed."""

    def __init__(self, page: FakeSlido) -> None:
        self.page = page
        self.opened = 0
        self.closed = 0

    @asynccontextmanager
    async def __call__(self):
        self.opened += 1
        try:
            yield self.page
        finally:
            self.closed += 1


@pytest.fixture
def counting_session():
    return CountingSession

"""Run orchestration: login, open the event, create each poll in order."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import AsyncContextManager, Awaitable, Callable, Optional, Sequence, TypeVar

from ..config import AppConfig
from ..errors import FailureKind, PollAutomationError
from ..models import Credential, PollDefinition
from ..utils.logger import get_logger
from ..utils.progress import LoggingReporter, ProgressReporter
from .actuator import PageActuator
from .browser_controller import BrowserConfig, BrowserController
from .events import open_polls
from .login import authenticate
from .polls import create_poll

T = TypeVar("T")

SessionFactory = Callable[[], AsyncContextManager[PageActuator]]


class RunState(Enum):
    IDLE = "idle"
    AUTHENTICATING = "authenticating"
    LOCATING_EVENT = "locating_event"
    CREATING_POLLS = "creating_polls"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class RunResult:
    """Outcome of one run. ``created`` counts polls submitted before any failure."""

    state: RunState
    created: int
    failure: Optional[FailureKind] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.state is RunState.DONE


class PollRunner:
    """Drive one browser session from login to the last poll.

    Classified failures end the run with a failed :class:`RunResult`; polls
    created before the failure stay on the service. Anything unclassified is
    re-raised. The session is closed either way.
    """

    def __init__(
        self,
        config: AppConfig,
        reporter: Optional[ProgressReporter] = None,
        session_factory: Optional[SessionFactory] = None,
    ) -> None:
        self.config = config
        self.reporter = reporter or LoggingReporter()
        self._session_factory = session_factory or self._browser_session
        self._logger = get_logger("runner")
        self.state = RunState.IDLE

    def _browser_session(self) -> BrowserController:
        return BrowserController(BrowserConfig.from_app_config(self.config))

    async def _phase(self, state: RunState, label: str, action: Callable[[], Awaitable[T]]) -> T:
        self.state = state
        self.reporter.phase_started(label)
        try:
            result = await action()
        except PollAutomationError as exc:
            self.reporter.phase_failed(label, str(exc))
            raise
        except Exception as exc:
            self.reporter.phase_failed(label, f"unexpected error: {exc!r}")
            raise
        self.reporter.phase_succeeded(label)
        return result

    async def run(
        self,
        credential: Credential,
        event_name: str,
        polls: Sequence[PollDefinition],
    ) -> RunResult:
        created = 0
        try:
            async with self._session_factory() as actuator:
                await self._phase(
                    RunState.AUTHENTICATING,
                    "Logging in",
                    lambda: authenticate(actuator, credential, login_url=self.config.login_url),
                )
                await self._phase(
                    RunState.LOCATING_EVENT,
                    f"Opening polls of event '{event_name}'",
                    lambda: open_polls(actuator, event_name),
                )
                total = len(polls)
                for index, poll in enumerate(polls, 1):
                    await self._phase(
                        RunState.CREATING_POLLS,
                        f"Creating poll {index}/{total}: {poll.prompt}",
                        lambda poll=poll: create_poll(
                            actuator, poll, poll_type_timeout_ms=self.config.poll_type_timeout_ms
                        ),
                    )
                    created += 1
        except PollAutomationError as exc:
            self.state = RunState.FAILED
            self._logger.debug("Run aborted (%s) after %d poll(s)", exc.kind.value, created)
            return RunResult(state=RunState.FAILED, created=created, failure=exc.kind, message=str(exc))
        except Exception:
            self.state = RunState.FAILED
            raise

        self.state = RunState.DONE
        return RunResult(state=RunState.DONE, created=created, message=f"Created {created} poll(s)")


__all__ = ["PollRunner", "RunResult", "RunState", "SessionFactory"]

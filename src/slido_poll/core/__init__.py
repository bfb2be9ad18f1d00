"""Login, event lookup, poll creation and the run orchestration."""

from .events import open_polls
from .login import authenticate
from .polls import create_poll
from .runner import PollRunner, RunResult, RunState

__all__ = ["PollRunner", "RunResult", "RunState", "authenticate", "create_poll", "open_polls"]

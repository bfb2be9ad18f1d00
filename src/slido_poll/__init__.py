"""Create Slido polls by driving the web UI with Playwright."""

from .errors import ActuatorTimeout, FailureKind, PollAutomationError
from .models import Credential, LoginSurface, PollDefinition, PollOption

__all__ = [
    "ActuatorTimeout",
    "Credential",
    "FailureKind",
    "LoginSurface",
    "PollAutomationError",
    "PollDefinition",
    "PollOption",
]

"""
src/slido_poll/core/login.py
Login routines: Slido accounts and Google-federated accounts.

After the email is entered the service shows either its own password field or
hands over to Google. Nothing tells the two apart in advance, so both signal
elements are awaited at once and the resulting URL decides the path.
"""

from __future__ import annotations

from ..config import LOGIN_URL
from ..errors import ActuatorTimeout, FailureKind, PollAutomationError
from ..models import Credential, LoginSurface
from ..utils.logger import debug_detail, progress, success
from .actuator import PageActuator

EMAIL_INPUT = "#emailInput"
NATIVE_PASSWORD_INPUT = "#passwordInput"
FEDERATED_NEXT_BUTTON = "#identifierNext"
FEDERATED_PASSWORD_INPUT = "input[name=password]"


def detect_login_surface(current_url: str, login_url: str = LOGIN_URL) -> LoginSurface:
    """Still on the Slido login page means a Slido account; anything else is Google."""
    if current_url.startswith(login_url):
        return LoginSurface.NATIVE
    return LoginSurface.FEDERATED


async def authenticate(
    actuator: PageActuator,
    credential: Credential,
    *,
    login_url: str = LOGIN_URL,
) -> LoginSurface:
    """Log in with ``credential`` and return the surface that was used.

    Any timeout is reported as :attr:`FailureKind.LOGIN_FAILED`. Do not retry
    on failure: a second password submission can leave the form in a broken
    state.
    """
    try:
        await actuator.goto(login_url, wait_until="domcontentloaded")
        progress("Logging in...")
        await actuator.type(EMAIL_INPUT, credential.email, submit=True)
        await actuator.wait_for(f"{NATIVE_PASSWORD_INPUT}, {FEDERATED_NEXT_BUTTON}")

        surface = detect_login_surface(actuator.current_url(), login_url)
        debug_detail(f"Login surface: {surface.value} ({actuator.current_url()})")
        if surface is LoginSurface.NATIVE:
            progress("Login with sli.do account")
            password_input = NATIVE_PASSWORD_INPUT
            await actuator.wait_for(password_input)
        else:
            # The email is already filled on Google's side.
            progress("Login with Google account")
            await actuator.click(FEDERATED_NEXT_BUTTON)
            password_input = FEDERATED_PASSWORD_INPUT
            # Present in the DOM before it can take input.
            await actuator.wait_for(password_input, visible=True)

        async with actuator.expect_navigation():
            await actuator.type(password_input, credential.password, submit=True)
    except ActuatorTimeout as exc:
        raise PollAutomationError(FailureKind.LOGIN_FAILED) from exc

    success("Login completed successfully")
    return surface


__all__ = ["authenticate", "detect_login_surface"]

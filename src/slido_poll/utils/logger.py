"""
src/slido_poll/utils/logger.py
Console logging for poll runs.

Records carry a ``layer`` extra (step, progress, success, warning, error or
debug) that picks the icon and colour of the console line. Set ``LOG_FILE`` to
also keep plain timestamped lines on disk.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

__all__ = [
    "logger",
    "step",
    "progress",
    "success",
    "debug_detail",
    "get_logger",
    "set_log_profile",
]

ROOT_LOGGER_NAME = "slido_poll"

_ANSI: Dict[str, str] = {
    "reset": "\033[0m",
    "dim": "\033[2m",
    "bold": "\033[1m",
    "blue": "\033[34m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "red": "\033[31m",
    "cyan": "\033[36m",
}

_PROFILE_LEVELS: Dict[str, int] = {
    "quiet": logging.WARNING,
    "user": logging.INFO,
    "debug": logging.DEBUG,
}


def _colour(text: str, *styles: str) -> str:
    if os.getenv("NO_COLOR") is not None or not styles:
        return text
    return "".join(_ANSI.get(s, "") for s in styles) + text + _ANSI["reset"]


class LayeredFormatter(logging.Formatter):
    """Render ``icon message``; debug lines get a dimmed ``[debug]`` tag."""

    LAYERS: Dict[str, Dict[str, Any]] = {
        "step": {"icon": "▶", "style": ("blue", "bold")},
        "progress": {"icon": "…", "style": ("cyan",)},
        "success": {"icon": "✓", "style": ("green", "bold")},
        "warning": {"icon": "!", "style": ("yellow", "bold")},
        "error": {"icon": "✗", "style": ("red", "bold")},
        "user": {"icon": "•", "style": ()},
    }

    def format(self, record: logging.LogRecord) -> str:
        layer = getattr(record, "layer", "user")
        message = super().format(record)
        if layer == "debug":
            return f"{_colour('[debug]', 'dim')} {message}"
        spec = self.LAYERS.get(layer, self.LAYERS["user"])
        return f"{_colour(spec['icon'], *spec['style'])} {message}"


class LayeredAdapter(logging.LoggerAdapter):
    """Accept a ``layer=`` keyword and pass it on as the record extra."""

    def __init__(self, base: logging.Logger):
        super().__init__(base, {"layer": "user"})

    def log(self, level: int, msg: Any, *args, layer: Optional[str] = None, **kwargs) -> None:
        if not self.isEnabledFor(level):
            return
        extra = kwargs.setdefault("extra", {})
        extra.setdefault("layer", layer or self.extra.get("layer", "user"))
        self.logger.log(level, msg, *args, **kwargs)

    def warning(self, msg: Any, *args, **kwargs) -> None:  # type: ignore[override]
        kwargs.setdefault("layer", "warning")
        super().warning(msg, *args, **kwargs)

    def error(self, msg: Any, *args, **kwargs) -> None:  # type: ignore[override]
        kwargs.setdefault("layer", "error")
        super().error(msg, *args, **kwargs)


def _console_level() -> int:
    level = _PROFILE_LEVELS.get((os.getenv("LOG_PROFILE") or "user").lower(), logging.INFO)
    override = os.getenv("LOG_LEVEL")
    if override:
        named = getattr(logging, override.upper(), None)
        if isinstance(named, int):
            level = named
    return level


def _configure_base_logger() -> LayeredAdapter:
    base = logging.getLogger(ROOT_LOGGER_NAME)
    if base.handlers:
        return LayeredAdapter(base)

    base.setLevel(logging.DEBUG)

    console = logging.StreamHandler()
    console.setLevel(_console_level())
    console.setFormatter(LayeredFormatter("%(message)s"))
    base.addHandler(console)

    log_file = os.getenv("LOG_FILE")
    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as exc:
            base.warning("Failed to open log file '%s': %s", log_file, exc)
        else:
            file_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s [%(levelname)s] %(name)s %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
            file_handler.setLevel(logging.DEBUG)
            base.addHandler(file_handler)

    return LayeredAdapter(base)


logger = _configure_base_logger()


def step(message: str) -> None:
    """A run phase is starting."""
    logger.log(logging.INFO, message, layer="step")


def progress(message: str) -> None:
    logger.log(logging.INFO, message, layer="progress")


def success(message: str) -> None:
    logger.log(logging.INFO, message, layer="success")


def debug_detail(message: str) -> None:
    """Selector and browser chatter, shown with LOG_PROFILE=debug."""
    logger.log(logging.DEBUG, message, layer="debug")


def get_logger(name: str) -> LayeredAdapter:
    return LayeredAdapter(logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}"))


def set_log_profile(profile: str) -> None:
    """Switch console verbosity to ``quiet``, ``user`` or ``debug``."""
    level = _PROFILE_LEVELS.get((profile or "user").lower(), logging.INFO)
    base = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in base.handlers:
        if type(handler) is logging.StreamHandler:
            handler.setLevel(level)

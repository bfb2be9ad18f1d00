"""Read credential and poll definitions from JSON files."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from .models import Credential, PollDefinition, PollOption


def _read_object(path: Path, what: str) -> Dict[str, Any]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"{path}: invalid JSON in {what} ({exc})") from exc
    if not isinstance(payload, dict):
        raise ValueError(f"{path}: {what} must be a JSON object")
    return payload


def _first_str(payload: Dict[str, Any], *keys: str) -> Optional[str]:
    for key in keys:
        value = payload.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def load_credential(path: Path | str) -> Credential:
    """Load ``{"email": ..., "pass": ...}`` (``"password"`` is accepted too)."""
    path = Path(path)
    payload = _read_object(path, "credential")
    email = _first_str(payload, "email")
    password = _first_str(payload, "pass", "password")
    if not email or not password:
        raise ValueError(f"{path}: credential needs non-empty 'email' and 'pass'")
    return Credential(email=email, password=password)


def credential_from_env() -> Optional[Credential]:
    """Credential from SLIDO_EMAIL / SLIDO_PASSWORD, if both are set."""
    email = os.getenv("SLIDO_EMAIL")
    password = os.getenv("SLIDO_PASSWORD")
    if email and password:
        return Credential(email=email, password=password)
    return None


def _parse_option(path: Path, index: int, entry: Any) -> PollOption:
    if isinstance(entry, str):
        return PollOption(name=entry)
    if not isinstance(entry, dict):
        raise ValueError(f"{path}: option {index} must be an object with 'name'")
    name = entry.get("name")
    if not isinstance(name, str) or not name:
        raise ValueError(f"{path}: option {index} is missing 'name'")
    return PollOption(name=name, correct=bool(entry.get("correct", False)))


def load_poll(path: Path | str) -> PollDefinition:
    """Load ``{"desc": ..., "options": [{"name": ..., "correct": true}]}``.

    ``"prompt"`` may be used instead of ``"desc"``; options may be plain
    strings. Option order is kept as written.
    """
    path = Path(path)
    payload = _read_object(path, "poll definition")
    prompt = _first_str(payload, "desc", "prompt")
    if not prompt:
        raise ValueError(f"{path}: poll needs a non-empty 'desc'")
    options = payload.get("options")
    if not isinstance(options, list) or not options:
        raise ValueError(f"{path}: poll needs a non-empty 'options' list")
    return PollDefinition(
        prompt=prompt,
        options=tuple(_parse_option(path, i, entry) for i, entry in enumerate(options)),
    )


__all__ = ["credential_from_env", "load_credential", "load_poll"]

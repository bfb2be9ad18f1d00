import json

import pytest

from slido_poll.loader import credential_from_env, load_credential, load_poll
from slido_poll.models import Credential, PollDefinition, PollOption


def _write(path, payload):
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_load_poll_keeps_option_order_and_flags(tmp_path):
    path = _write(
        tmp_path / "poll.json",
        {"desc": "Best talk?", "options": [{"name": "A", "correct": True}, {"name": "B"}, "C"]},
    )

    poll = load_poll(path)

    assert poll == PollDefinition(
        prompt="Best talk?",
        options=(PollOption("A", correct=True), PollOption("B"), PollOption("C")),
    )


def test_load_poll_accepts_prompt_key(tmp_path):
    path = _write(tmp_path / "poll.json", {"prompt": "Q?", "options": ["yes", "no"]})
    assert load_poll(path).prompt == "Q?"


@pytest.mark.parametrize(
    "payload",
    [
        {"desc": "No options", "options": []},
        {"options": [{"name": "A"}]},
        {"desc": "Bad option", "options": [{"correct": True}]},
        ["not", "an", "object"],
    ],
)
def test_load_poll_rejects_malformed_definitions(tmp_path, payload):
    path = _write(tmp_path / "poll.json", payload)
    with pytest.raises(ValueError) as info:
        load_poll(path)
    assert str(path) in str(info.value)


def test_load_poll_reports_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        load_poll(path)


def test_load_credential_reads_pass_key(tmp_path):
    path = _write(tmp_path / "credential.json", {"email": "a@b.com", "pass": "x"})
    assert load_credential(path) == Credential(email="a@b.com", password="x")


def test_load_credential_requires_both_fields(tmp_path):
    path = _write(tmp_path / "credential.json", {"email": "a@b.com"})
    with pytest.raises(ValueError):
        load_credential(path)


def test_credential_from_env(monkeypatch):
    monkeypatch.delenv("SLIDO_PASSWORD", raising=False)
    monkeypatch.setenv("SLIDO_EMAIL", "a@b.com")
    assert credential_from_env() is None

    monkeypatch.setenv("SLIDO_PASSWORD", "x")
    assert credential_from_env() == Credential(email="a@b.com", password="x")

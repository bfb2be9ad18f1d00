import pytest

from slido_poll.models import Credential, PollDefinition, PollOption


def test_poll_definition_requires_an_option():
    with pytest.raises(ValueError):
        PollDefinition(prompt="Empty?", options=())


def test_poll_definition_freezes_options_as_tuple():
    options = [PollOption("A"), PollOption("B", correct=True)]
    poll = PollDefinition(prompt="Q?", options=options)
    options.append(PollOption("C"))

    assert poll.options == (PollOption("A"), PollOption("B", correct=True))
    assert poll.has_correct_answer is True


def test_poll_option_defaults_to_not_correct():
    assert PollOption("A").correct is False
    assert PollDefinition(prompt="Q?", options=(PollOption("A"),)).has_correct_answer is False


def test_credential_repr_hides_password():
    credential = Credential(email="a@b.com", password="hunter2")
    assert "hunter2" not in repr(credential)
    assert "a@b.com" in repr(credential)

import json

import pytest
from pydantic import ValidationError

from relay.models.message_schemas import (
    ErrorMessage,
    PromptMessage,
    SetupMessage,
    TextTokenMessage,
    parse_incoming_message,
)


def test_setup_message_keeps_extra_fields():
    message = parse_incoming_message(
        {"type": "setup", "sessionId": "VX1", "callSid": "CA1", "from": "+100", "customParameters": {}}
    )
    assert isinstance(message, SetupMessage)
    assert message.callSid == "CA1"


def test_prompt_message():
    message = parse_incoming_message({"type": "prompt", "voicePrompt": "Hello", "lang": "en-US", "last": True})
    assert isinstance(message, PromptMessage)
    assert message.voicePrompt == "Hello"
    assert message.last is True


def test_prompt_requires_text():
    with pytest.raises(ValidationError):
        parse_incoming_message({"type": "prompt"})
    with pytest.raises(ValidationError):
        parse_incoming_message({"type": "prompt", "voicePrompt": ""})


@pytest.mark.parametrize("message", [{"type": "dtmf", "digit": "1"}, {}, {"type": None}, {"type": 3}])
def test_unhandled_types(message):
    assert parse_incoming_message(message) is None


def test_text_token_serialization():
    payload = json.loads(TextTokenMessage(token="こんにちは。", last=False).model_dump_json())
    assert payload == {"type": "text", "token": "こんにちは。", "last": False}


def test_error_serialization():
    payload = json.loads(ErrorMessage(message="API key not configured").model_dump_json())
    assert payload == {"type": "error", "message": "API key not configured"}


def test_text_token_rejects_other_types():
    with pytest.raises(ValidationError):
        TextTokenMessage(type="error", token="x", last=True)

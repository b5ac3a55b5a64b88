from relay.config import settings


def test_api_key_unset_or_blank(monkeypatch):
    assert settings.get_openai_api_key() is None
    monkeypatch.setenv("OPENAI_API_KEY", "   ")
    assert settings.get_openai_api_key() is None


def test_api_key_is_read_on_every_call(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-one")
    assert settings.get_openai_api_key() == "sk-one"
    monkeypatch.setenv("OPENAI_API_KEY", "sk-two")
    assert settings.get_openai_api_key() == "sk-two"


def test_backend_defaults():
    assert settings.get_chat_model() == "gpt-4o-mini"
    assert settings.get_openai_base_url() == "https://api.openai.com/v1"
    assert settings.get_request_timeout() == 30.0


def test_backend_overrides(monkeypatch):
    monkeypatch.setenv("OPENAI_CHAT_MODEL", "gpt-4o")
    monkeypatch.setenv("OPENAI_BASE_URL", "http://localhost:11434/v1/")
    monkeypatch.setenv("OPENAI_TIMEOUT", "not-a-number")
    assert settings.get_chat_model() == "gpt-4o"
    assert settings.get_openai_base_url() == "http://localhost:11434/v1"
    assert settings.get_request_timeout() == 30.0

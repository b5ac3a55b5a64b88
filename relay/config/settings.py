"""
Environment-backed settings for the chat completions backend.

The API key is not cached. It is looked up every time a streaming request is
about to be issued, so a key added to the environment later is picked up by the
next turn without restarting the session.
"""

import os
from typing import Optional

from relay.config.constants import (
    DEFAULT_CHAT_MODEL,
    DEFAULT_OPENAI_BASE_URL,
    DEFAULT_REQUEST_TIMEOUT,
)


def get_openai_api_key() -> Optional[str]:
    """Return the configured OpenAI API key, or None if it is unset or blank."""
    api_key = os.getenv("OPENAI_API_KEY", "").strip()
    return api_key or None


def get_chat_model() -> str:
    return os.getenv("OPENAI_CHAT_MODEL", DEFAULT_CHAT_MODEL)


def get_openai_base_url() -> str:
    return os.getenv("OPENAI_BASE_URL", DEFAULT_OPENAI_BASE_URL).rstrip("/")


def get_request_timeout() -> float:
    try:
        return float(os.getenv("OPENAI_TIMEOUT", str(DEFAULT_REQUEST_TIMEOUT)))
    except ValueError:
        return DEFAULT_REQUEST_TIMEOUT

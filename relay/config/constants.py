"""
Constants and configuration values used throughout the application.

This module defines constants that are used across different parts of the application,
providing a centralized location for configuration values and making it easier to
maintain consistent naming throughout the codebase.
"""

# Logger name used throughout the application
LOGGER_NAME = "conversation_relay"

# Chat completions backend defaults
DEFAULT_CHAT_MODEL = "gpt-4o-mini"
DEFAULT_OPENAI_BASE_URL = "https://api.openai.com/v1"
DEFAULT_REQUEST_TIMEOUT = 30.0  # seconds
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 150

# Server-sent event framing used by the chat completions stream
SSE_DATA_PREFIX = "data: "
SSE_DONE_SENTINEL = "[DONE]"

# Full-width period, comma and question mark end a speakable fragment
SENTENCE_DELIMITERS = "。、？"

# Inbound message types (ConversationRelay -> relay)
MESSAGE_TYPE_SETUP = "setup"
MESSAGE_TYPE_PROMPT = "prompt"

# Outbound message types (relay -> ConversationRelay)
MESSAGE_TYPE_TEXT = "text"
MESSAGE_TYPE_ERROR = "error"

# System prompt used when a route has no configured prompt
DEFAULT_SYSTEM_PROMPT = "あなたは親切なアシスタントです。"

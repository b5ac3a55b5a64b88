"""
Configuration module for the conversation relay application.

This module provides centralized configuration management for the entire application,
including constants, logging setup, route definitions and environment-based settings.

Key components:
- constants: Defines application-wide constants used across modules, including
  message types, stream framing markers and default model settings.
- logging_config: Provides a consistent logging infrastructure with support for
  console and file-based logging with rotation capabilities.
- routes: Enumerates the relay WebSocket routes and resolves the system prompt
  bound to each of them.
- settings: Reads backend settings (API key, model, base URL) from the environment.

Usage examples:
```python
from relay.config.constants import LOGGER_NAME, DEFAULT_CHAT_MODEL

from relay.config.logging_config import configure_logging
logger = configure_logging()
logger.info("Application started")

from relay.config.routes import RelayRoute, load_system_prompts
prompts = load_system_prompts()
faq_prompt = prompts[RelayRoute.FAQ]
```
"""

# Config module initialization

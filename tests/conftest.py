import os

import pytest
import logging

RELAY_ENV_PREFIXES = ("OPENAI_", "SYSTEM_PROMPT_", "LOG_")


@pytest.fixture(autouse=True)
def reset_logging():
    """Reset logging configuration before each test"""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    logging.basicConfig(level=logging.NOTSET)
    yield


@pytest.fixture(autouse=True)
def relay_env(monkeypatch):
    """Run every test without backend settings or prompts from the developer's shell"""
    for name in list(os.environ):
        if name.startswith(RELAY_ENV_PREFIXES):
            monkeypatch.delenv(name)
    yield monkeypatch

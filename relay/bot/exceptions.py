"""Exceptions raised while relaying a turn to the chat completions backend."""

from typing import Optional


class RelayError(Exception):
    """Base class for relay errors."""


class BackendError(RelayError):
    """A turn could not be completed by the backend.

    The message is safe to forward to the client as-is.
    """


class MissingCredentialError(BackendError):
    """No API key is configured for the backend."""

    def __init__(self, message: str = "API key not configured"):
        super().__init__(message)


class BackendStatusError(BackendError):
    """The backend answered the streaming request with a non-2xx status."""

    def __init__(self, status_code: int, body: Optional[str] = None):
        super().__init__(f"OpenAI API error: {status_code}")
        self.status_code = status_code
        self.body = body


class BackendTransportError(BackendError):
    """The request could not be sent or the stream broke while being read."""

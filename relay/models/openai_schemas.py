"""
Pydantic models for OpenAI chat completions message structures.

This module provides type-safe models for the streaming chat completions request
and for the chunks delivered on its server-sent event stream.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from relay.config.constants import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE


class MessageRole(str, Enum):
    """Role of a participant in a conversation."""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class OpenAIMessage(BaseModel):
    """One message of the conversation sent to the backend."""
    role: MessageRole
    content: str


class ChatCompletionRequest(BaseModel):
    """Body of a streaming chat completions request."""
    model: str
    messages: List[OpenAIMessage]
    stream: bool = True
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int = DEFAULT_MAX_TOKENS


class ChoiceDelta(BaseModel):
    """Incremental content of one choice."""
    model_config = ConfigDict(extra="ignore")

    role: Optional[str] = None
    content: Optional[str] = None


class ChunkChoice(BaseModel):
    """One choice of a streamed completion chunk."""
    model_config = ConfigDict(extra="ignore")

    index: int = 0
    delta: ChoiceDelta = Field(default_factory=ChoiceDelta)
    finish_reason: Optional[str] = None


class ChatCompletionChunk(BaseModel):
    """One `data:` record of a streamed chat completion."""
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    model: Optional[str] = None
    choices: List[ChunkChoice] = Field(default_factory=list)

    @property
    def content(self) -> Optional[str]:
        """Content delta of the first choice, if any."""
        if not self.choices:
            return None
        return self.choices[0].delta.content

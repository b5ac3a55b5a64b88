"""
Pydantic models for the ConversationRelay WebSocket message schemas.

This module defines structured data models for the incoming and outgoing messages
exchanged with the telephony layer over the relay WebSocket, providing type
validation and documentation.
"""

from typing import Any, Dict, Literal, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from relay.config.constants import (
    MESSAGE_TYPE_ERROR,
    MESSAGE_TYPE_PROMPT,
    MESSAGE_TYPE_SETUP,
    MESSAGE_TYPE_TEXT,
)


# Base Models
class BaseMessage(BaseModel):
    """Base model for all WebSocket messages."""

    type: str = Field(..., description="Message type identifier")


class IncomingBaseMessage(BaseMessage):
    """Base model for messages sent by ConversationRelay.

    ConversationRelay adds call metadata to its messages; fields the relay does
    not use are accepted and kept as extras.
    """

    model_config = ConfigDict(extra="allow")


# Incoming Messages
class SetupMessage(IncomingBaseMessage):
    """Model for the setup message sent once the relay connection is open."""

    type: Literal["setup"]
    sessionId: Optional[str] = Field(None, description="ConversationRelay session id")
    callSid: Optional[str] = Field(None, description="Twilio call SID")


class PromptMessage(IncomingBaseMessage):
    """Model for a prompt message carrying one transcribed caller utterance."""

    type: Literal["prompt"]
    voicePrompt: str = Field(..., description="Transcribed caller speech")
    lang: Optional[str] = Field(None, description="Recognition language")
    last: Optional[bool] = Field(None, description="Whether the transcript is final")

    @field_validator("voicePrompt")
    def validate_voice_prompt(cls, v):
        """Validate that the prompt carries some text."""
        if not v.strip():
            raise ValueError("voicePrompt cannot be empty")
        return v


# Outgoing Messages
class TextTokenMessage(BaseMessage):
    """Model for a speakable text fragment sent to ConversationRelay."""

    type: Literal["text"] = MESSAGE_TYPE_TEXT
    token: str = Field(..., description="Text fragment to synthesize")
    last: bool = Field(..., description="Whether this fragment ends the reply")


class ErrorMessage(BaseMessage):
    """Model for an error reported to ConversationRelay."""

    type: Literal["error"] = MESSAGE_TYPE_ERROR
    message: str = Field(..., description="Description of the failure")


# Union type for all possible incoming messages
IncomingMessage = Union[SetupMessage, PromptMessage]

# Union type for all possible outgoing messages
OutgoingMessage = Union[TextTokenMessage, ErrorMessage]

INCOMING_MESSAGE_MODELS: Dict[str, Type[IncomingBaseMessage]] = {
    MESSAGE_TYPE_SETUP: SetupMessage,
    MESSAGE_TYPE_PROMPT: PromptMessage,
}


def parse_incoming_message(message: Dict[str, Any]) -> Optional[IncomingMessage]:
    """
    Validate a decoded inbound frame against the model for its type.

    Args:
        message: The decoded JSON object received from ConversationRelay

    Returns:
        The typed message, or None if the type is not one the relay handles

    Raises:
        pydantic.ValidationError: If the message does not match its model
    """
    message_type = message.get("type")
    if not isinstance(message_type, str):
        return None
    model = INCOMING_MESSAGE_MODELS.get(message_type)
    if model is None:
        return None
    return model.model_validate(message)

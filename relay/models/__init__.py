"""
Models module for data structures and state in the conversation relay.

This module provides structured data models for the application, defining the
schemas of both the ConversationRelay WebSocket protocol and the OpenAI chat
completions API.

Key components:
- message_schemas: Pydantic models for validating and serializing the messages
  exchanged with ConversationRelay (setup, prompt, text, error).
- openai_schemas: Type-safe models for the streaming chat completions request
  and the chunks of its event stream.
- conversation: The append-only history of system, user and assistant turns
  owned by one relay session.

Usage examples:
```python
from relay.models.conversation import ConversationHistory

history = ConversationHistory("You are a helpful assistant.")
history.add_user_turn("Hello")
messages = history.to_messages()

from relay.models.message_schemas import TextTokenMessage

await websocket.send_text(
    TextTokenMessage(token="こんにちは。", last=False).model_dump_json()
)
```
"""

from relay.models.conversation import ConversationHistory, Turn
from relay.models.message_schemas import (
    BaseMessage,
    ErrorMessage,
    IncomingMessage,
    OutgoingMessage,
    PromptMessage,
    SetupMessage,
    TextTokenMessage,
    parse_incoming_message,
)
from relay.models.openai_schemas import (
    ChatCompletionChunk,
    ChatCompletionRequest,
    MessageRole,
    OpenAIMessage,
)

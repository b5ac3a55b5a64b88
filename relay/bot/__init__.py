"""
Bot module relaying caller prompts to the OpenAI chat completions API.

This module provides the components that turn one transcribed caller utterance
into a streamed, sentence-segmented spoken reply.

Key components:
- ConversationSession: Owns the history of one call, queues prompts and runs
  one streaming completion per turn, forwarding each finished sentence.
- ChatCompletionClient: Issues the streaming request with httpx and yields
  content tokens, mapping failures to BackendError subclasses.
- StreamDecoder: Reassembles server-sent event lines from raw byte chunks and
  extracts the content deltas.
- SentenceSegmenter / split_sentences: Split streamed text after full-width
  punctuation so speech synthesis can start before the reply is complete.

Usage examples:
```python
from relay.bot import ChatCompletionClient, ConversationSession

async def relay_one_prompt(transport):
    async with ChatCompletionClient() as client:
        session = ConversationSession("You are a helpful assistant.", transport, client)
        reply = await session.process_turn("Hello")
```
"""

from relay.bot.chat_completions import ChatCompletionClient
from relay.bot.exceptions import (
    BackendError,
    BackendStatusError,
    BackendTransportError,
    MissingCredentialError,
    RelayError,
)
from relay.bot.segmenter import SentenceSegmenter, split_sentences
from relay.bot.session import ConversationSession, SessionState
from relay.bot.stream_decoder import StreamDecoder
from relay.bot.transport import Transport, WebSocketTransport

__all__ = [
    "BackendError",
    "BackendStatusError",
    "BackendTransportError",
    "ChatCompletionClient",
    "ConversationSession",
    "MissingCredentialError",
    "RelayError",
    "SentenceSegmenter",
    "SessionState",
    "StreamDecoder",
    "Transport",
    "WebSocketTransport",
    "split_sentences",
]

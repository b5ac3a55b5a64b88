"""
Conversation session driving one relay connection.

A ConversationSession owns the history of one call and turns each caller prompt
into a streaming chat completion whose reply is forwarded to the transport
sentence by sentence. Prompts are queued and processed one at a time by the
session's run() worker, so at most one backend call is in flight per session
and the history has a single writer.
"""

import asyncio
import logging
from contextlib import aclosing
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional

from pydantic import ValidationError

from relay.bot.chat_completions import ChatCompletionClient
from relay.bot.exceptions import BackendError
from relay.bot.segmenter import SentenceSegmenter
from relay.bot.transport import Transport
from relay.config.constants import LOGGER_NAME, MESSAGE_TYPE_PROMPT, MESSAGE_TYPE_SETUP
from relay.models.conversation import ConversationHistory
from relay.models.message_schemas import (
    ErrorMessage,
    IncomingMessage,
    PromptMessage,
    SetupMessage,
    TextTokenMessage,
    parse_incoming_message,
)

logger = logging.getLogger(LOGGER_NAME)

# Type hint for inbound message handlers
HandlerFunc = Callable[[IncomingMessage], Awaitable[None]]


class SessionState(str, Enum):
    """Whether a backend call is currently open for the session."""
    IDLE = "idle"
    STREAMING = "streaming"


class ConversationSession:
    """
    State of one relay connection: history, turn state and pending prompts.

    Inbound messages go through handle_message(); the turns themselves run in
    run(), which the connection owner schedules as a task and cancels when the
    client goes away.
    """

    def __init__(
        self,
        system_prompt: str,
        transport: Transport,
        client: ChatCompletionClient,
    ):
        self.history = ConversationHistory(system_prompt)
        self.transport = transport
        self.client = client
        self.state = SessionState.IDLE
        self._prompts: "asyncio.Queue[str]" = asyncio.Queue()

        self.handlers: Dict[str, HandlerFunc] = {
            MESSAGE_TYPE_SETUP: self._handle_setup,
            MESSAGE_TYPE_PROMPT: self._handle_prompt,
        }

    @property
    def pending_prompts(self) -> int:
        return self._prompts.qsize()

    async def handle_message(self, message: Dict[str, Any]) -> None:
        """
        Route one decoded inbound frame.

        Unknown types and messages failing validation are logged and dropped.

        Args:
            message: The JSON object received from ConversationRelay
        """
        message_type = message.get("type")
        try:
            typed_message = parse_incoming_message(message)
        except ValidationError as e:
            logger.error(f"Invalid {message_type} message: {e}")
            return

        if typed_message is None:
            logger.warning(f"Unhandled message type received: {message_type}")
            return

        await self.handlers[message_type](typed_message)

    async def _handle_setup(self, message: SetupMessage) -> None:
        logger.info(
            "WebSocket setup complete"
            + (f" for call: {message.callSid}" if message.callSid else "")
        )

    async def _handle_prompt(self, message: PromptMessage) -> None:
        if self.state is SessionState.STREAMING or self.pending_prompts:
            logger.info(
                f"Prompt queued behind the current turn ({self.pending_prompts + 1} waiting)"
            )
        await self._prompts.put(message.voicePrompt)

    async def run(self) -> None:
        """Process queued prompts one turn at a time until cancelled."""
        while True:
            user_input = await self._prompts.get()
            try:
                await self.process_turn(user_input)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error(f"Error while processing turn: {e}", exc_info=True)
                self.state = SessionState.IDLE
            finally:
                self._prompts.task_done()

    async def wait_until_idle(self) -> None:
        """Wait until every queued prompt has been processed."""
        await self._prompts.join()

    async def process_turn(self, user_input: str) -> Optional[str]:
        """
        Run one user turn against the backend.

        Args:
            user_input: The caller's utterance

        Returns:
            The complete assistant reply, or None if the backend call failed
        """
        self.history.add_user_turn(user_input)
        self.state = SessionState.STREAMING

        segmenter = SentenceSegmenter()
        reply_parts = []
        text_sent = False

        try:
            async with aclosing(self.client.stream_reply(self.history.to_messages())) as tokens:
                async for token in tokens:
                    reply_parts.append(token)
                    for sentence in segmenter.feed(token):
                        logger.debug(f"Sending sentence to client: {sentence}")
                        await self.transport.send(TextTokenMessage(token=sentence, last=False))
                        text_sent = True
        except BackendError as e:
            logger.error(f"Turn aborted: {e}")
            self.state = SessionState.IDLE
            await self.transport.send(ErrorMessage(message=str(e)))
            return None

        remainder = segmenter.flush()
        if remainder:
            logger.debug(f"Sending final buffer: {remainder}")
            await self.transport.send(TextTokenMessage(token=remainder, last=True))
        elif text_sent:
            await self.transport.send(TextTokenMessage(token="", last=True))

        reply = "".join(reply_parts)
        logger.info(f"Complete AI response: {reply}")
        self.history.add_assistant_turn(reply)
        self.state = SessionState.IDLE
        return reply

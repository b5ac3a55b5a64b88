"""
Conversation history for one relay session.

This module provides the Turn model and the ConversationHistory class which
records the system, user and assistant messages of one call. A history always
starts with its system turn and only ever grows; it lives exactly as long as
the WebSocket session that owns it.
"""

from typing import Iterator, List

from pydantic import BaseModel, ConfigDict

from relay.models.openai_schemas import MessageRole, OpenAIMessage


class Turn(BaseModel):
    """One message of the conversation. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    role: MessageRole
    content: str


class ConversationHistory:
    """
    Ordered, append-only record of the turns of one conversation.

    The first turn is always the system turn given at construction. Turns are
    never removed or rewritten.
    """

    def __init__(self, system_prompt: str):
        """Start a history holding only the system turn."""
        self._turns: List[Turn] = [Turn(role=MessageRole.SYSTEM, content=system_prompt)]

    @property
    def system_prompt(self) -> str:
        return self._turns[0].content

    def add_user_turn(self, content: str) -> Turn:
        """
        Append a user turn.

        Args:
            content: The caller's utterance

        Returns:
            The appended turn
        """
        return self._append(Turn(role=MessageRole.USER, content=content))

    def add_assistant_turn(self, content: str) -> Turn:
        """
        Append an assistant turn.

        Args:
            content: The complete reply assembled from the streamed tokens

        Returns:
            The appended turn
        """
        return self._append(Turn(role=MessageRole.ASSISTANT, content=content))

    def _append(self, turn: Turn) -> Turn:
        self._turns.append(turn)
        return turn

    def to_messages(self) -> List[OpenAIMessage]:
        """Snapshot of the history in the shape the backend expects."""
        return [OpenAIMessage(role=turn.role, content=turn.content) for turn in self._turns]

    @property
    def turns(self) -> List[Turn]:
        """Copy of the recorded turns, oldest first."""
        return list(self._turns)

    def __len__(self) -> int:
        return len(self._turns)

    def __iter__(self) -> Iterator[Turn]:
        return iter(list(self._turns))

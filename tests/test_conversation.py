import unittest

from pydantic import ValidationError

from relay.models.conversation import ConversationHistory, Turn
from relay.models.openai_schemas import MessageRole


class TestConversationHistory(unittest.TestCase):

    def setUp(self):
        self.history = ConversationHistory("You are a helpful assistant.")

    def test_starts_with_system_turn(self):
        # Assert
        self.assertEqual(len(self.history), 1)
        self.assertEqual(self.history.turns[0].role, MessageRole.SYSTEM)
        self.assertEqual(self.history.system_prompt, "You are a helpful assistant.")

    def test_turns_are_appended_in_order(self):
        # Execute
        self.history.add_user_turn("Hello")
        self.history.add_assistant_turn("Hi there.")
        self.history.add_user_turn("Bye")

        # Assert
        self.assertEqual(
            [(turn.role, turn.content) for turn in self.history],
            [
                (MessageRole.SYSTEM, "You are a helpful assistant."),
                (MessageRole.USER, "Hello"),
                (MessageRole.ASSISTANT, "Hi there."),
                (MessageRole.USER, "Bye"),
            ],
        )

    def test_turns_are_immutable(self):
        turn = self.history.add_user_turn("Hello")
        with self.assertRaises(ValidationError):
            turn.content = "changed"

    def test_turns_property_is_a_copy(self):
        self.history.turns.append(Turn(role=MessageRole.USER, content="sneaky"))
        self.assertEqual(len(self.history), 1)

    def test_to_messages(self):
        self.history.add_user_turn("Hello")

        messages = [message.model_dump(mode="json") for message in self.history.to_messages()]

        self.assertEqual(
            messages,
            [
                {"role": "system", "content": "You are a helpful assistant."},
                {"role": "user", "content": "Hello"},
            ],
        )


if __name__ == "__main__":
    unittest.main()

import asyncio
import json

import pytest

from client import send_prompt


class FakeRelaySocket:
    def __init__(self, replies):
        self.sent = []
        self.replies = list(replies)

    async def send(self, data):
        self.sent.append(json.loads(data))

    async def recv(self):
        if self.replies:
            return json.dumps(self.replies.pop(0))
        # Nothing more is coming
        await asyncio.Event().wait()


@pytest.mark.asyncio
async def test_send_prompt_collects_tokens_until_last():
    websocket = FakeRelaySocket(
        [
            {"type": "text", "token": "こんにちは。", "last": False},
            {"type": "text", "token": "", "last": True},
        ]
    )

    reply = await send_prompt(websocket, "Hello")

    assert reply == "こんにちは。"
    assert websocket.sent == [{"type": "prompt", "voicePrompt": "Hello", "last": True}]


@pytest.mark.asyncio
async def test_send_prompt_stops_on_error():
    websocket = FakeRelaySocket([{"type": "error", "message": "OpenAI API error: 500"}])

    assert await send_prompt(websocket, "Hello") == ""


@pytest.mark.asyncio
async def test_send_prompt_gives_up_when_reply_is_empty():
    websocket = FakeRelaySocket([])

    reply = await asyncio.wait_for(send_prompt(websocket, "Hello", reply_timeout=0.05), timeout=5)

    assert reply == ""

"""
Outbound side of the relay session.

A session only needs to send messages; inbound frames and the close event are
delivered to it by the WebSocket manager.
"""

from typing import Protocol

from fastapi import WebSocket

from relay.models.message_schemas import OutgoingMessage


class Transport(Protocol):
    """Anything a session can send outgoing messages through."""

    async def send(self, message: OutgoingMessage) -> None: ...


class WebSocketTransport:
    """Transport writing each message as one JSON text frame."""

    def __init__(self, websocket: WebSocket):
        self.websocket = websocket

    async def send(self, message: OutgoingMessage) -> None:
        await self.websocket.send_text(message.model_dump_json())

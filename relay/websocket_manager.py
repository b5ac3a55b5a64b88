"""
WebSocket connection manager for Twilio ConversationRelay integration.

This module implements the server side of the relay WebSocket, providing the
infrastructure to:
- Accept a connection on one of the relay routes
- Create the ConversationSession bound to that route's system prompt
- Decode incoming frames and hand them to the session
- Cancel the in-flight turn and release the backend client when the caller hangs up

The WebSocketManager class is the central component that connects ConversationRelay
to the chat completions backend.
"""

import asyncio
import json
import logging
from typing import Callable, Dict

from fastapi import WebSocket, WebSocketDisconnect

from relay.bot.chat_completions import ChatCompletionClient
from relay.bot.session import ConversationSession
from relay.bot.transport import WebSocketTransport
from relay.config.constants import LOGGER_NAME
from relay.config.routes import RelayRoute

logger = logging.getLogger(LOGGER_NAME)

ClientFactory = Callable[[], ChatCompletionClient]


class WebSocketManager:
    """Manages relay WebSocket connections and their conversation sessions.

    Each connection gets its own ConversationSession and ChatCompletionClient;
    nothing is shared between connections except the resolved system prompts.
    """

    def __init__(
        self,
        system_prompts: Dict[RelayRoute, str],
        client_factory: ClientFactory = ChatCompletionClient,
    ):
        self.system_prompts = system_prompts
        self.client_factory = client_factory

    def create_session(self, route: RelayRoute, websocket: WebSocket) -> ConversationSession:
        """Build the session for a connection on the given route."""
        return ConversationSession(
            self.system_prompts[route],
            WebSocketTransport(websocket),
            self.client_factory(),
        )

    async def handle_websocket(self, websocket: WebSocket, route: RelayRoute):
        """Handle a WebSocket connection throughout its lifecycle.

        Args:
            websocket (WebSocket): The FastAPI WebSocket connection object
            route (RelayRoute): The relay route the connection was opened on

        This method:
        1. Accepts the WebSocket connection
        2. Starts the session's turn worker
        3. Decodes incoming frames in a loop and routes them to the session
        4. Cancels the worker, aborting any in-flight backend stream, once the
           client disconnects

        Malformed frames are logged and skipped; they never close the connection.
        """
        await websocket.accept()
        logger.info(f"WebSocket connection established on {route.path}")

        session = self.create_session(route, websocket)
        worker = asyncio.create_task(session.run())
        disconnected = False

        try:
            while True:
                frame = await websocket.receive()
                if frame["type"] == "websocket.disconnect":
                    raise WebSocketDisconnect(frame.get("code", 1000))

                data = frame.get("text")
                if data is None:
                    logger.error("WebSocket message error: expected a text frame")
                    continue

                try:
                    message = json.loads(data)
                except json.JSONDecodeError as e:
                    logger.error(f"WebSocket message error: invalid JSON ({e})")
                    continue

                if not isinstance(message, dict):
                    logger.error("WebSocket message error: expected a JSON object")
                    continue

                logger.debug(f"Received message type: {message.get('type')}")
                await session.handle_message(message)

        except WebSocketDisconnect:
            disconnected = True
        except Exception as e:
            logger.error(f"Error in WebSocket connection: {e}", exc_info=True)
        finally:
            worker.cancel()
            try:
                await worker
            except asyncio.CancelledError:
                pass
            await session.client.close()

            if not disconnected:
                try:
                    await websocket.close()
                except RuntimeError:
                    pass
            logger.info(f"WebSocket connection closed on {route.path}")

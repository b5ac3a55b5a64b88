"""
FastAPI server relaying Twilio ConversationRelay calls to an OpenAI chat model.

This module initializes and configures the FastAPI application that serves:
- the voice webhook returning ConversationRelay TwiML for incoming calls
- one WebSocket endpoint per relay route, each bound to its own system prompt
- plain-text descriptions of the public relay routes and a health check

Each WebSocket connection carries one call. Caller utterances arrive as prompt
messages; the model's reply is streamed back as sentence-sized text messages.
"""

import os
from pathlib import Path

import dotenv
from fastapi import FastAPI, Request, Response, WebSocket
from fastapi.responses import PlainTextResponse

from relay.config import settings
from relay.config.logging_config import configure_logging
from relay.config.routes import INFO_ROUTES, RelayRoute, load_system_prompts
from relay.handlers.twiml_handlers import (
    relay_server_url,
    render_twiml,
    resolve_preset,
    resolve_query_preset,
)
from relay.websocket_manager import WebSocketManager

# Load environment variables from .env file if it exists
env_path = Path(".") / ".env"
if env_path.exists():
    dotenv.load_dotenv(env_path)

# Configure logging
logger = configure_logging()

# Get configuration from environment variables
PORT = int(os.getenv("PORT", "8000"))
HOST = os.getenv("HOST", "0.0.0.0")

APP_NAME = "Conversation Relay Agent"
APP_VERSION = "1.0.0"

app = FastAPI(
    title=APP_NAME,
    description="Relay between Twilio ConversationRelay and the OpenAI chat completions API",
    version=APP_VERSION,
)

# System prompts are resolved once, at startup
websocket_manager = WebSocketManager(load_system_prompts())


def twiml_response(twiml: str) -> Response:
    return Response(content=twiml, media_type="text/xml")


@app.post("/webhook/twiml")
async def twiml_webhook(request: Request):
    """Voice webhook configured through query parameters.

    Returns:
        Response: ConversationRelay TwiML; missing parameters take the
        translator-en-jp defaults.
    """
    server_url = relay_server_url(request.headers.get("host", request.url.netloc))
    preset = resolve_query_preset(request.query_params, server_url)
    return twiml_response(render_twiml(preset))


@app.post("/webhook/twiml/{preset:path}")
async def twiml_preset_webhook(preset: str, request: Request):
    """Voice webhook for a named preset (translator-en-jp, translator-jp-en, faq).

    Returns:
        Response: ConversationRelay TwiML; unknown presets fall back to
        translator-en-jp, and an empty preset name is treated like the
        query-parameter webhook.
    """
    server_url = relay_server_url(request.headers.get("host", request.url.netloc))
    preset_name = preset.rstrip("/").split("/")[-1]
    if not preset_name:
        return twiml_response(render_twiml(resolve_query_preset(request.query_params, server_url)))
    return twiml_response(render_twiml(resolve_preset(preset_name, server_url)))


def make_websocket_endpoint(route: RelayRoute):
    async def websocket_endpoint(websocket: WebSocket):
        await websocket_manager.handle_websocket(websocket, route)

    websocket_endpoint.__name__ = f"websocket_{route.name.lower()}"
    return websocket_endpoint


def make_info_endpoint(route: RelayRoute):
    async def info_endpoint():
        return PlainTextResponse(
            f"WebSocket endpoint: {route.path}\nConnect via WebSocket for interactive chat."
        )

    info_endpoint.__name__ = f"info_{route.name.lower()}"
    return info_endpoint


for relay_route in RelayRoute:
    app.add_api_websocket_route(relay_route.path, make_websocket_endpoint(relay_route))

for relay_route in INFO_ROUTES:
    app.add_api_route(relay_route.path, make_info_endpoint(relay_route), methods=["GET"])


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring system status.

    Returns:
        dict: Status information indicating the server is operational.
    """
    return {
        "status": "healthy",
        "openai_api_key_configured": settings.get_openai_api_key() is not None,
        "model": settings.get_chat_model(),
    }


@app.get("/")
async def root():
    """Root endpoint to display basic information about the API.

    Returns:
        dict: Basic information about the API and its endpoints.
    """
    endpoints = {
        "/webhook/twiml": "Voice webhook (POST), configured by query parameters",
        "/webhook/twiml/{preset}": "Voice webhook (POST) for a named preset",
        "/health": "Health check endpoint",
    }
    for route in RelayRoute:
        endpoints[route.path] = "WebSocket endpoint for ConversationRelay"

    return {
        "name": APP_NAME,
        "description": app.description,
        "version": APP_VERSION,
        "endpoints": endpoints,
    }


if __name__ == "__main__":
    import uvicorn

    logger.info(f"Starting server on http://{HOST}:{PORT}")
    uvicorn.run(app, host=HOST, port=PORT, http="h11")

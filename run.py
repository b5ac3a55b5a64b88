"""
Start the Conversation Relay server.

Twilio's voice webhook must reach /webhook/twiml on this server, and the
ConversationRelay WebSocket must reach the route named in the returned TwiML,
so the server is normally run behind a public TLS endpoint (a tunnel in
development).

Usage:
    python run.py [--host HOST] [--port PORT] [--log-level LEVEL] [--reload]
"""

import argparse
import os
from typing import Any, Dict, List, Optional

import dotenv
import uvicorn

from relay.config import settings
from relay.config.logging_config import configure_logging

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Start the Conversation Relay server")
    parser.add_argument(
        "--host",
        default=os.getenv("HOST", "0.0.0.0"),
        help="Interface to bind (default: HOST env var or 0.0.0.0)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("PORT", "8000")),
        help="Port to listen on (default: PORT env var or 8000)",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        default=os.getenv("LOG_LEVEL", "INFO").upper(),
        choices=LOG_LEVELS,
        help="Relay and uvicorn log level (default: LOG_LEVEL env var or INFO)",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        default=os.getenv("ENV", "production").lower() == "development",
        help="Restart on code changes (default: on when ENV=development)",
    )
    return parser.parse_args(argv)


def uvicorn_options(args: argparse.Namespace) -> Dict[str, Any]:
    """Keyword arguments for uvicorn.run() serving the relay app."""
    return {
        "host": args.host,
        "port": args.port,
        "log_level": args.log_level.lower(),
        "reload": args.reload,
        # The relay logs every connection and turn itself
        "access_log": False,
    }


def main(argv: Optional[List[str]] = None) -> None:
    dotenv.load_dotenv()
    args = parse_args(argv)
    logger = configure_logging(args.log_level)

    if settings.get_openai_api_key() is None:
        logger.warning(
            "OPENAI_API_KEY is not set; every prompt will be answered with an error event"
        )

    logger.info(f"Chat model: {settings.get_chat_model()} at {settings.get_openai_base_url()}")
    logger.info(f"Starting relay on http://{args.host}:{args.port}")
    uvicorn.run("relay.main:app", **uvicorn_options(args))


if __name__ == "__main__":
    main()

"""
Command-line client that talks to a running relay the way ConversationRelay does.

Usage:
    python client.py [--url ws://localhost:8000/faq] "first utterance" "second utterance"
"""

import argparse
import asyncio
import json
import logging
import uuid
from typing import List

import websockets

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("relay_client")

# Empty replies produce no text message at all
DEFAULT_REPLY_TIMEOUT = 30.0


async def send_setup(websocket, call_sid: str) -> None:
    """Send the setup message ConversationRelay sends after connecting."""
    setup_message = {
        "type": "setup",
        "sessionId": str(uuid.uuid4()),
        "callSid": call_sid,
        "from": "+10000000000",
        "to": "+10000000001",
    }
    logger.info(f"Sending setup for call: {call_sid}")
    await websocket.send(json.dumps(setup_message))


async def send_prompt(websocket, utterance: str, reply_timeout: float = DEFAULT_REPLY_TIMEOUT) -> str:
    """Send one utterance and collect the streamed reply until the last token.

    Gives up once no message arrives for `reply_timeout` seconds.
    """
    prompt_message = {"type": "prompt", "voicePrompt": utterance, "last": True}
    logger.info(f"Sending prompt: {utterance}")
    await websocket.send(json.dumps(prompt_message))

    reply = []
    while True:
        try:
            raw = await asyncio.wait_for(websocket.recv(), timeout=reply_timeout)
        except asyncio.TimeoutError:
            logger.warning(f"No reply within {reply_timeout}s, moving on")
            break

        response_data = json.loads(raw)
        if response_data.get("type") == "error":
            logger.error(f"Relay error: {response_data.get('message')}")
            break

        if response_data.get("type") == "text":
            token = response_data.get("token", "")
            reply.append(token)
            if token:
                logger.info(f"Token: {token}")
            if response_data.get("last"):
                break
        else:
            logger.warning(f"Unexpected message: {response_data}")

    return "".join(reply)


async def run_relay_client(
    url: str, utterances: List[str], reply_timeout: float = DEFAULT_REPLY_TIMEOUT
) -> None:
    call_sid = f"CA{uuid.uuid4().hex}"
    try:
        async with websockets.connect(url) as websocket:
            logger.info(f"WebSocket connection established to {url}")
            await send_setup(websocket, call_sid)

            for utterance in utterances:
                reply = await send_prompt(websocket, utterance, reply_timeout)
                logger.info(f"Complete reply: {reply}")

            logger.info("Relay client finished successfully")
    except Exception as e:
        logger.error(f"Error in relay client: {e}", exc_info=True)


def parse_args():
    parser = argparse.ArgumentParser(description="Send prompts to a conversation relay")
    parser.add_argument("--url", default="ws://localhost:8000/faq", help="Relay WebSocket URL")
    parser.add_argument(
        "--timeout", type=float, default=DEFAULT_REPLY_TIMEOUT,
        help="Seconds to wait for each reply message",
    )
    parser.add_argument("utterances", nargs="+", help="Caller utterances to send in order")
    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()
    asyncio.run(run_relay_client(args.url, args.utterances, args.timeout))

"""
Generates the TwiML that points an incoming call at the relay.

Twilio posts to the webhook when a call arrives; the response tells it to open
a ConversationRelay WebSocket to this service and how to recognise and
synthesize speech on that call. The relay settings come either from a named
preset (/webhook/twiml/<preset>) or from query parameters (/webhook/twiml).
"""

import logging
from typing import Dict, Mapping
from xml.sax.saxutils import quoteattr

from pydantic import BaseModel, Field

from relay.config.constants import LOGGER_NAME
from relay.config.routes import RelayRoute

logger = logging.getLogger(LOGGER_NAME)

DEFAULT_PRESET = RelayRoute.TRANSLATOR_EN_JP.value


class RelayPreset(BaseModel):
    """ConversationRelay attributes for one kind of call."""

    url: str = Field(..., description="WebSocket URL ConversationRelay connects to")
    language: str = Field(..., description="Speech recognition language")
    welcomeGreeting: str = Field(..., description="Greeting spoken when the call connects")
    ttsLanguage: str = Field(..., description="Speech synthesis language")
    ttsProvider: str = Field(..., description="Speech synthesis provider")
    voice: str = Field(..., description="Speech synthesis voice")


# Attributes of each preset; `route` is turned into `url` per request
PRESETS: Dict[str, Dict[str, str]] = {
    # English speech translated to Japanese
    "translator-en-jp": {
        "route": RelayRoute.TRANSLATOR_EN_JP.value,
        "language": "en-US",
        "welcomeGreeting": "こんにちは。英語を日本語に翻訳する通訳です。英語でお話頂ければ日本で翻訳します。",
        "ttsLanguage": "ja-JP",
        "ttsProvider": "Google",
        "voice": "ja-JP-Chirp3-HD-Aoede",
    },
    # Japanese speech translated to English
    "translator-jp-en": {
        "route": RelayRoute.TRANSLATOR_JP_EN.value,
        "language": "ja-JP",
        "welcomeGreeting": "Hello. I am an interpreter who translates Japanese into English. Please speak in Japanese.",
        "ttsLanguage": "en-US",
        "ttsProvider": "Google",
        "voice": "en-US-Journey-F",
    },
    "faq": {
        "route": RelayRoute.FAQ.value,
        "language": "ja-JP",
        "welcomeGreeting": "よくある質問にお答えします。ご質問をどうぞ。",
        "ttsLanguage": "ja-JP",
        "ttsProvider": "Google",
        "voice": "ja-JP-Chirp3-HD-Aoede",
    },
}

QUERY_PARAMETERS = ("url", "language", "welcomeGreeting", "ttsLanguage", "ttsProvider", "voice")


def relay_server_url(host: str) -> str:
    """Base WebSocket URL of this service as seen by Twilio."""
    return f"wss://{host}"


def resolve_preset(preset: str, server_url: str) -> RelayPreset:
    """
    Build the relay settings of a named preset.

    Args:
        preset: Preset name taken from the webhook path
        server_url: Base WebSocket URL of this service

    Returns:
        The preset's settings; unknown names fall back to DEFAULT_PRESET
    """
    attributes = PRESETS.get(preset)
    if attributes is None:
        logger.warning(f"Unknown preset '{preset}', falling back to {DEFAULT_PRESET}")
        attributes = PRESETS[DEFAULT_PRESET]

    attributes = dict(attributes)
    route = attributes.pop("route")
    return RelayPreset(url=f"{server_url}/{route}", **attributes)


def resolve_query_preset(params: Mapping[str, str], server_url: str) -> RelayPreset:
    """
    Build relay settings from webhook query parameters.

    Missing or empty parameters take the value of the default preset.

    Args:
        params: Query parameters of the webhook request
        server_url: Base WebSocket URL of this service

    Returns:
        The resulting relay settings
    """
    defaults = resolve_preset(DEFAULT_PRESET, server_url).model_dump()
    overrides = {name: params[name] for name in QUERY_PARAMETERS if params.get(name)}
    return RelayPreset(**{**defaults, **overrides})


def render_twiml(preset: RelayPreset) -> str:
    """Render the ConversationRelay TwiML document for the given settings."""
    attributes = "".join(
        f"\n      {name}={quoteattr(value)}" for name, value in preset.model_dump().items()
    )
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        "<Response>\n"
        "  <Connect>\n"
        f"    <ConversationRelay{attributes} />\n"
        "  </Connect>\n"
        "</Response>"
    )

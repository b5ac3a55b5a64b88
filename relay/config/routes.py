"""
Relay routes and the system prompt bound to each of them.

Every WebSocket route the relay serves is listed in RelayRoute. Each route maps
to exactly one environment variable holding its system prompt; routes whose
variable is unset or blank fall back to DEFAULT_SYSTEM_PROMPT. The table is
resolved once when the application starts.
"""

import logging
import os
from enum import Enum
from typing import Dict, Mapping, Optional

from relay.config.constants import DEFAULT_SYSTEM_PROMPT, LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)


class RelayRoute(str, Enum):
    """WebSocket routes served by the relay."""

    FAQ = "faq"
    TRANSLATOR_EN_JP = "translator-en-jp"
    TRANSLATOR_JP_EN = "translator-jp-en"
    ORDER = "order"
    BOOKING = "booking"

    @property
    def path(self) -> str:
        return f"/{self.value}"


SYSTEM_PROMPT_KEYS: Dict[RelayRoute, str] = {
    RelayRoute.FAQ: "SYSTEM_PROMPT_FAQ",
    RelayRoute.TRANSLATOR_EN_JP: "SYSTEM_PROMPT_TRANSLATOR_EN_JP",
    RelayRoute.TRANSLATOR_JP_EN: "SYSTEM_PROMPT_TRANSLATOR_JP_EN",
    RelayRoute.ORDER: "SYSTEM_PROMPT_ORDER",
    RelayRoute.BOOKING: "SYSTEM_PROMPT_BOOKING",
}

# Routes that answer a plain GET with a short description
INFO_ROUTES = (
    RelayRoute.FAQ,
    RelayRoute.TRANSLATOR_EN_JP,
    RelayRoute.TRANSLATOR_JP_EN,
)


def load_system_prompts(
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[RelayRoute, str]:
    """
    Resolve the system prompt of every relay route.

    Args:
        environ: Mapping to read prompts from (defaults to os.environ)

    Returns:
        Dictionary mapping every RelayRoute to its system prompt
    """
    if environ is None:
        environ = os.environ

    missing = set(RelayRoute) - set(SYSTEM_PROMPT_KEYS)
    if missing:
        raise ValueError(f"Routes without a system prompt key: {sorted(r.value for r in missing)}")

    prompts: Dict[RelayRoute, str] = {}
    for route, key in SYSTEM_PROMPT_KEYS.items():
        value = (environ.get(key) or "").strip()
        if value:
            prompts[route] = value
        else:
            logger.info(f"{key} not set, using default system prompt for {route.path}")
            prompts[route] = DEFAULT_SYSTEM_PROMPT
    return prompts

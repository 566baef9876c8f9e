# src/covgate/telemetry/logger/processors.py

"""
Custom structlog processors used by covgate's logging pipeline.
"""

import logging
from typing import Any

from structlog.typing import EventDict, WrappedLogger

# Keys used only to steer rendering; never shown.
INTERNAL_KEYS = ("emoji_key",)


def add_emoji_processor(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Prefixes the event message with an emoji for its level or explicit ``emoji_key``."""
    from covgate.telemetry.logger.base import LOG_EMOJIS

    key: Any = event_dict.get("emoji_key")
    if key is None:
        key = logging._nameToLevel.get(str(event_dict.get("level", "")).upper())
    emoji = LOG_EMOJIS.get(key, LOG_EMOJIS["general"])
    event = event_dict.get("event")
    if isinstance(event, str):
        event_dict["event"] = f"{emoji} {event}"
    return event_dict


def remove_extra_keys_processor(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Drops rendering hints before the final renderer sees the event."""
    for key in INTERNAL_KEYS:
        event_dict.pop(key, None)
    return event_dict

# 🔼⚙️

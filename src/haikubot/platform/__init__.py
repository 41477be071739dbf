"""Chat platform contracts and adapters."""

from haikubot.platform.types import (
    DisplayPayload,
    EmbedPayload,
    NavigationControl,
    PlatformClient,
    PlatformError,
    Responder,
)

__all__ = [
    "DisplayPayload",
    "EmbedPayload",
    "NavigationControl",
    "PlatformClient",
    "PlatformError",
    "Responder",
]

"""Config loading and validation."""

from .settings import ENV_PREFIX, CodecSettings

__all__ = [
    "CodecSettings",
    "ENV_PREFIX",
]

"""Encoder and decoder bundled with settings and a JSON serializer."""

from __future__ import annotations

import json
from typing import Any

from faultline.codec.decoder import ErrorDecoder
from faultline.codec.encoder import ErrorEncoder
from faultline.codec.registry import DEFAULT_REGISTRY, ErrorTypeRegistry
from faultline.config.settings import CodecSettings

__all__ = ["ErrorCodec", "decode", "dumps", "encode", "get_default_codec", "loads"]


class ErrorCodec:
    """Round-trips error trees through tagged documents and JSON text.
    
    Example:
        >>> codec = ErrorCodec()
        >>> text = codec.dumps(ErrorRecord("boom", cause=ValueError("bad")))
        >>> restored = codec.loads(text)
        >>> type(restored.cause)
        <class 'ValueError'>
    """
    
    def __init__(
        self,
        registry: ErrorTypeRegistry | None = None,
        settings: CodecSettings | None = None,
    ) -> None:
        self.registry = registry if registry is not None else DEFAULT_REGISTRY
        self.settings = settings if settings is not None else CodecSettings()
        self.encoder = ErrorEncoder(include_stack=self.settings.include_stack)
        self.decoder = ErrorDecoder(
            self.registry,
            unknown_message=self.settings.unknown_message,
        )
    
    def encode(self, value: Any) -> Any:
        """Convert a value into a JSON-compatible tagged document."""
        return self.encoder.encode(value)
    
    def decode(self, document: Any) -> Any:
        """Rebuild errors from a parsed document."""
        return self.decoder.decode(document)
    
    def dumps(self, value: Any) -> str:
        """Encode a value and serialize it to JSON text."""
        return json.dumps(
            self.encode(value),
            indent=self.settings.json_indent,
            sort_keys=self.settings.sort_keys,
        )
    
    def loads(self, text: str | bytes) -> Any:
        """Parse JSON text and rebuild the errors it describes.
        
        Raises:
            json.JSONDecodeError: If ``text`` is not valid JSON
        """
        return self.decode(json.loads(text))


_default_codec: ErrorCodec | None = None


def get_default_codec() -> ErrorCodec:
    """Codec over the process-wide registries with default settings."""
    global _default_codec
    if _default_codec is None:
        _default_codec = ErrorCodec()
    return _default_codec


def encode(value: Any) -> Any:
    return get_default_codec().encode(value)


def decode(document: Any) -> Any:
    return get_default_codec().decode(document)


def dumps(value: Any) -> str:
    return get_default_codec().dumps(value)


def loads(text: str | bytes) -> Any:
    return get_default_codec().loads(text)

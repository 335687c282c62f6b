"""Codec settings.

Settings are a frozen pydantic model so they can be shared between codecs
and validated once. ``CodecSettings.from_env`` reads ``FAULTLINE_*``
environment variables for deployments that configure the codec externally.

Usage:
    >>> settings = CodecSettings(include_stack=False)
    >>> settings.unknown_message
    'Unknown error JSON'
"""

from __future__ import annotations

import os
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field

__all__ = ["CodecSettings", "ENV_PREFIX"]

ENV_PREFIX = "FAULTLINE_"


class CodecSettings(BaseModel):
    """Options controlling how errors are encoded and decoded.
    
    Attributes:
        include_stack: Emit ``stack`` fields when encoding
        unknown_message: Message of the ``UnknownError`` wrapping an untagged root
        json_indent: Indentation used by ``dumps`` (None for compact output)
        sort_keys: Sort object keys in ``dumps`` output
    """
    
    model_config = ConfigDict(frozen=True, extra="forbid")
    
    include_stack: bool = True
    unknown_message: str = "Unknown error JSON"
    json_indent: int | None = Field(default=None, ge=0)
    sort_keys: bool = False
    
    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> CodecSettings:
        """Build settings from ``FAULTLINE_*`` variables.
        
        Unset variables keep their defaults. Values are validated (and
        coerced from strings) by pydantic.
        
        Raises:
            pydantic.ValidationError: If a variable holds an invalid value
        """
        environ = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        for name in cls.model_fields:
            raw = environ.get(f"{ENV_PREFIX}{name.upper()}")
            if raw is not None:
                values[name] = raw
        return cls(**values)

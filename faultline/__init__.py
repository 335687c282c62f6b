"""Structured errors with a type-tagged, transportable document form."""

from .codec import (
    APPLICATION_ERRORS,
    DEFAULT_REGISTRY,
    FOREIGN_ERRORS,
    ErrorCodec,
    ErrorDecoder,
    ErrorEncoder,
    ErrorRegistry,
    ErrorTypeRegistry,
    decode,
    dumps,
    encode,
    loads,
    register_error,
)
from .config import CodecSettings
from .domain import (
    AggregateError,
    ErrorRecord,
    EvalError,
    FaultlineError,
    RangeError,
    RegistryError,
    StructuralDecodeError,
    URIError,
    UnknownError,
)
from .logging_config import configure_logging

__version__ = "0.1.0"

__all__ = [
    "APPLICATION_ERRORS",
    "AggregateError",
    "CodecSettings",
    "DEFAULT_REGISTRY",
    "ErrorCodec",
    "ErrorDecoder",
    "ErrorEncoder",
    "ErrorRecord",
    "ErrorRegistry",
    "ErrorTypeRegistry",
    "EvalError",
    "FOREIGN_ERRORS",
    "FaultlineError",
    "RangeError",
    "RegistryError",
    "StructuralDecodeError",
    "URIError",
    "UnknownError",
    "configure_logging",
    "decode",
    "dumps",
    "encode",
    "loads",
    "register_error",
]

"""Tagged-document codec for error trees."""

from .codec import ErrorCodec, decode, dumps, encode, get_default_codec, loads
from .decoder import DEFAULT_UNKNOWN_MESSAGE, ErrorDecoder, looks_tagged
from .encoder import ErrorEncoder, encode_node
from .outcome import DecodeOutcome, Decoded, StructuralFailure, attempt_decode
from .registry import (
    APPLICATION_ERRORS,
    DEFAULT_REGISTRY,
    FOREIGN_ERRORS,
    Decoder,
    ErrorRegistry,
    ErrorTypeRegistry,
    build_application_registry,
    build_foreign_registry,
    register_error,
)

__all__ = [
    "APPLICATION_ERRORS",
    "DEFAULT_REGISTRY",
    "DEFAULT_UNKNOWN_MESSAGE",
    "DecodeOutcome",
    "Decoded",
    "Decoder",
    "ErrorCodec",
    "ErrorDecoder",
    "ErrorEncoder",
    "ErrorRegistry",
    "ErrorTypeRegistry",
    "FOREIGN_ERRORS",
    "StructuralFailure",
    "attempt_decode",
    "build_application_registry",
    "build_foreign_registry",
    "decode",
    "dumps",
    "encode",
    "encode_node",
    "get_default_codec",
    "loads",
    "register_error",
]

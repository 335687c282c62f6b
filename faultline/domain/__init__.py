"""Dependency-free error model: records, foreign kinds and wire shapes."""

from .clock import MonotonicClock, get_clock, now, set_clock
from .error_schema import ErrorDocument, ErrorPayload, ForeignPayload
from .exceptions import (
    ErrorRecord,
    FaultlineError,
    RegistryError,
    StructuralDecodeError,
    UnknownError,
    format_timestamp,
    parse_timestamp,
)
from .foreign import (
    AGGREGATE_TAG,
    FOREIGN_KINDS,
    AggregateError,
    EvalError,
    RangeError,
    URIError,
    decode_aggregate,
    foreign_to_dict,
    native_decoder,
)

__all__ = [
    "AGGREGATE_TAG",
    "AggregateError",
    "ErrorDocument",
    "ErrorPayload",
    "ErrorRecord",
    "EvalError",
    "FOREIGN_KINDS",
    "FaultlineError",
    "ForeignPayload",
    "MonotonicClock",
    "RangeError",
    "RegistryError",
    "StructuralDecodeError",
    "URIError",
    "UnknownError",
    "decode_aggregate",
    "foreign_to_dict",
    "format_timestamp",
    "get_clock",
    "native_decoder",
    "now",
    "parse_timestamp",
    "set_clock",
]

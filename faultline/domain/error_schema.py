"""Typed shapes of the tagged error document (documentation and type checking).

Every error node on the wire has the form::

    {"type": "<TypeIdentifier>", "data": {...payload...}}

``ErrorRecord`` payloads carry ``message``, ``timestamp``, ``data`` and
``cause``; foreign payloads carry ``message`` and, for the aggregate kind,
``errors``. ``stack`` is optional everywhere.
"""

from __future__ import annotations

from typing import Any, TypedDict

__all__ = ["ErrorDocument", "ErrorPayload", "ForeignPayload"]


class _PayloadBase(TypedDict):
    message: str
    """Human-readable error message."""


class ErrorPayload(_PayloadBase, total=False):
    """Payload of an ``ErrorRecord`` document.
    
    Attributes:
        message: Error message
        timestamp: ISO 8601 timestamp when the error was constructed
        data: Structured diagnostic context
        cause: Recursively encoded cause (any JSON value)
        stack: Stack trace captured at construction, if kept
    """
    
    timestamp: str
    data: dict[str, Any]
    cause: Any
    stack: str


class ForeignPayload(_PayloadBase, total=False):
    """Payload of a foreign (native) error document.
    
    ``errors`` is present for the ``AggregateError`` kind only; ``group``
    marks aggregates that were native exception groups.
    """
    
    errors: list[Any]
    group: bool
    stack: str


class ErrorDocument(TypedDict):
    """A single tagged error node."""
    
    type: str
    """Type identifier used to pick the decoder."""
    
    data: Any
    """Type-specific payload (ErrorPayload or ForeignPayload)."""

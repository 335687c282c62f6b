"""Structured error model.

``ErrorRecord`` is the base for application errors. Each record carries a
message, an open ``data`` mapping with diagnostic context, a reference to
whatever caused it, a weakly monotonic timestamp and the stack captured at
construction time.

Records convert to tagged documents (``to_dict``) and back (``from_dict``)
so that a whole causation chain can be transported and rebuilt with its
concrete types intact. See ``faultline.codec`` for the tree-walking codec.

Example:
    >>> class QuotaExceededError(ErrorRecord):
    ...     description = "Account quota exceeded"
    >>> error = QuotaExceededError("over limit", data={"limit": 10})
    >>> error.to_dict()["type"]
    'QuotaExceededError'
"""

from __future__ import annotations

import traceback
from datetime import datetime
from typing import Any, ClassVar, Generic, Mapping, TypeVar

from faultline.domain import clock
from faultline.domain.error_schema import ErrorDocument, ErrorPayload

__all__ = [
    "ErrorRecord",
    "FaultlineError",
    "RegistryError",
    "StructuralDecodeError",
    "UnknownError",
    "format_timestamp",
    "parse_timestamp",
]


CauseT = TypeVar("CauseT")


class FaultlineError(Exception):
    """Base class for failures raised by faultline itself."""


class StructuralDecodeError(FaultlineError, TypeError):
    """A tagged document does not match the shape its type requires.
    
    Decoders raise this for malformed input. The tree decoder treats it as
    recoverable and falls back to returning the node unchanged; any other
    exception escaping a decoder is a bug and propagates.
    
    Attributes:
        type_identifier: Tag the document was decoded against
        reason: What was wrong with the document
    """
    
    def __init__(self, type_identifier: str, reason: str) -> None:
        super().__init__(f"Cannot decode document to {type_identifier}: {reason}")
        self.type_identifier = type_identifier
        self.reason = reason


class RegistryError(FaultlineError):
    """Invalid registration (duplicate tag, frozen registry)."""


def format_timestamp(timestamp: datetime) -> str:
    """Render a timestamp as ISO 8601, using ``Z`` for UTC."""
    return timestamp.isoformat(timespec="microseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO 8601 timestamp, accepting a trailing ``Z``.
    
    Raises:
        ValueError: If the string is not a valid ISO 8601 timestamp
    """
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def _capture_stack(error: BaseException, skip: int) -> str:
    frames = traceback.format_stack()[:-skip]
    header = f"{type(error).__name__}: {error}\n"
    return header + "".join(frames)


class ErrorRecord(Exception, Generic[CauseT]):
    """Base error with message, data, cause and timestamp.
    
    Subclass to define application errors. The class name becomes the tag
    used on the wire unless ``type_identifier`` is set explicitly, and
    ``description`` gives a static label shared by every instance.
    
    Attributes:
        message: Human-readable message (may be empty)
        data: Structured diagnostic context, never None
        cause: Whatever triggered this error, held by reference
        timestamp: When the error was constructed
        stack: Stack trace captured at construction
    """
    
    description: ClassVar[str] = ""
    type_identifier: ClassVar[str] = "ErrorRecord"
    
    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        # Every concrete class gets its own tag, never its parent's
        cls.type_identifier = cls.__dict__.get("type_identifier", cls.__name__)
    
    def __init__(
        self,
        message: str = "",
        *,
        timestamp: datetime | None = None,
        data: dict[str, Any] | None = None,
        cause: CauseT | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.timestamp = timestamp if timestamp is not None else clock.now()
        self.data = data if data is not None else {}
        self.cause = cause
        if isinstance(cause, BaseException):
            self.__cause__ = cause
        self.stack = _capture_stack(self, skip=2)
    
    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"
    
    def to_dict(self) -> ErrorDocument:
        """Convert to a tagged document.
        
        The result is shallow: ``cause`` and ``data`` are the live values.
        ``ErrorEncoder`` walks them afterwards so nested errors are encoded
        too.
        
        Returns:
            Dictionary with ``type`` and ``data`` keys
        """
        payload: ErrorPayload = {
            "message": self.message,
            "timestamp": format_timestamp(self.timestamp),
            "data": self.data,
            "cause": self.cause,
            "stack": self.stack,
        }
        return {"type": self.type_identifier, "data": payload}
    
    @classmethod
    def from_dict(cls, document: Mapping[str, Any]) -> ErrorRecord[Any]:
        """Rebuild an instance of this class from a tagged document.
        
        Nested values are used as given: when called by ``ErrorDecoder`` the
        cause has already been decoded.
        
        Args:
            document: Tagged document produced by ``to_dict``
        
        Returns:
            New instance with the original timestamp and stack restored
        
        Raises:
            StructuralDecodeError: If the document is tagged with another
                type or its payload is malformed
        """
        payload = cls._validate_payload(document)
        error = cls(
            payload["message"],
            timestamp=parse_timestamp(payload["timestamp"]),
            data=payload["data"],
            cause=payload["cause"],
        )
        if "stack" in payload:
            error.stack = payload["stack"]
        return error
    
    @classmethod
    def _validate_payload(cls, document: Mapping[str, Any]) -> Mapping[str, Any]:
        """Check the base document shape and return its payload."""
        tag = cls.type_identifier
        if not isinstance(document, Mapping):
            raise StructuralDecodeError(tag, "document is not a mapping")
        if document.get("type") != tag:
            raise StructuralDecodeError(tag, f"document is tagged {document.get('type')!r}")
        payload = document.get("data")
        if not isinstance(payload, Mapping):
            raise StructuralDecodeError(tag, "'data' is not a mapping")
        if not isinstance(payload.get("message"), str):
            raise StructuralDecodeError(tag, "'message' is not a string")
        timestamp = payload.get("timestamp")
        if not isinstance(timestamp, str):
            raise StructuralDecodeError(tag, "'timestamp' is not a string")
        try:
            parse_timestamp(timestamp)
        except ValueError as exc:
            raise StructuralDecodeError(tag, f"invalid timestamp {timestamp!r}") from exc
        if not isinstance(payload.get("data"), dict):
            raise StructuralDecodeError(tag, "'data.data' is not a mapping")
        if "cause" not in payload:
            raise StructuralDecodeError(tag, "'cause' is missing")
        if "stack" in payload and not isinstance(payload["stack"], str):
            raise StructuralDecodeError(tag, "'stack' is not a string")
        return payload


class UnknownError(ErrorRecord[Any]):
    """Sentinel for a document root that is not a tagged error at all.
    
    The offending value is kept under ``data["json"]``.
    """
    
    description = "Unknown error"

"""Foreign (native) error kinds and their tagged-document codec.

Foreign errors are exceptions that do not derive from ``ErrorRecord``.
A fixed set of kinds is tagged with the names other runtimes use on the
wire, so documents stay interchangeable across producers:

    ==================  =====================================
    Wire tag            Python class
    ==================  =====================================
    ``Error``           ``Exception``
    ``TypeError``       ``TypeError``
    ``SyntaxError``     ``SyntaxError``
    ``ReferenceError``  ``NameError``
    ``EvalError``       ``faultline.EvalError``
    ``RangeError``      ``faultline.RangeError``
    ``URIError``        ``faultline.URIError``
    ``AggregateError``  ``ExceptionGroup`` / ``faultline.AggregateError``
    ==================  =====================================

Common Python builtins (``ValueError``, ``KeyError``, ``OSError`` ...) are
tagged with their own class names. Other exceptions are tagged with their
nearest listed ancestor: ``FileNotFoundError`` travels as ``OSError`` and
an application ``Exception`` subclass as ``Error``.
"""

from __future__ import annotations

import traceback
from typing import Any, Callable, Mapping, Sequence

from faultline.domain.error_schema import ErrorDocument, ForeignPayload
from faultline.domain.exceptions import StructuralDecodeError

__all__ = [
    "AGGREGATE_TAG",
    "AggregateError",
    "EvalError",
    "FOREIGN_KINDS",
    "RangeError",
    "URIError",
    "decode_aggregate",
    "foreign_message",
    "foreign_stack",
    "foreign_tag",
    "foreign_to_dict",
    "native_decoder",
]


class EvalError(RuntimeError):
    """Failure while evaluating dynamically supplied code."""


class RangeError(ValueError):
    """Value outside the set or range of allowed values."""


class URIError(ValueError):
    """Malformed URI or URI component."""


class AggregateError(Exception):
    """Several errors reported together.
    
    Unlike ``ExceptionGroup`` the ``errors`` list may hold arbitrary
    values, which is what a decoded document can contain when some entries
    were not recognised as errors.
    
    Attributes:
        message: Summary message
        errors: The grouped values, in order
    """
    
    def __init__(self, message: str = "", errors: Sequence[Any] = ()) -> None:
        super().__init__(message)
        self.message = message
        self.errors = list(errors)


AGGREGATE_TAG = "AggregateError"

FOREIGN_KINDS: dict[str, type[BaseException]] = {
    "Error": Exception,
    "TypeError": TypeError,
    "SyntaxError": SyntaxError,
    "ReferenceError": NameError,
    "EvalError": EvalError,
    "RangeError": RangeError,
    "URIError": URIError,
    # Python builtins keep their own names
    "ValueError": ValueError,
    "KeyError": KeyError,
    "IndexError": IndexError,
    "LookupError": LookupError,
    "AttributeError": AttributeError,
    "RuntimeError": RuntimeError,
    "NotImplementedError": NotImplementedError,
    "ArithmeticError": ArithmeticError,
    "ZeroDivisionError": ZeroDivisionError,
    "OverflowError": OverflowError,
    "AssertionError": AssertionError,
    "OSError": OSError,
}

_TAG_BY_CLASS: dict[type[BaseException], str] = {cls: tag for tag, cls in FOREIGN_KINDS.items()}


def foreign_tag(error: BaseException) -> str:
    """Wire tag for a foreign error.
    
    Subclasses are tagged with their nearest listed ancestor, so
    ``json.JSONDecodeError`` travels as ``ValueError`` and any other
    ``Exception`` subclass at least as ``Error``. Only exceptions outside
    the ``Exception`` hierarchy fall back to their own class name.
    """
    if isinstance(error, (BaseExceptionGroup, AggregateError)):
        return AGGREGATE_TAG
    for klass in type(error).__mro__:
        tag = _TAG_BY_CLASS.get(klass)
        if tag is not None:
            return tag
    return type(error).__name__


def foreign_message(error: BaseException) -> str:
    """Message of a foreign error.
    
    Uses the first argument when it is a string so that ``KeyError("k")``
    yields ``k`` rather than its quoted ``str()``.
    """
    if error.args and isinstance(error.args[0], str):
        return error.args[0]
    return str(error)


def foreign_stack(error: BaseException) -> str | None:
    """Stack trace for a foreign error, if one is available.
    
    A ``stack`` attribute restored by decoding wins over the live traceback.
    """
    stack = getattr(error, "stack", None)
    if isinstance(stack, str):
        return stack
    if error.__traceback__ is not None:
        return "".join(traceback.format_exception(type(error), error, error.__traceback__))
    return None


def foreign_to_dict(error: BaseException, *, include_stack: bool = True) -> ErrorDocument:
    """Convert a foreign error to a tagged document (shallow).
    
    Aggregate errors keep their member list live; the encoder walks it.
    """
    payload: ForeignPayload = {"message": foreign_message(error)}
    if isinstance(error, BaseExceptionGroup):
        payload["errors"] = list(error.exceptions)
        payload["group"] = True
    elif isinstance(error, AggregateError):
        payload["errors"] = list(error.errors)
    if include_stack:
        stack = foreign_stack(error)
        if stack is not None:
            payload["stack"] = stack
    return {"type": foreign_tag(error), "data": payload}


def _validate_payload(tag: str, document: Mapping[str, Any]) -> Mapping[str, Any]:
    if not isinstance(document, Mapping):
        raise StructuralDecodeError(tag, "document is not a mapping")
    if document.get("type") != tag:
        raise StructuralDecodeError(tag, f"document is tagged {document.get('type')!r}")
    payload = document.get("data")
    if not isinstance(payload, Mapping):
        raise StructuralDecodeError(tag, "'data' is not a mapping")
    if not isinstance(payload.get("message"), str):
        raise StructuralDecodeError(tag, "'message' is not a string")
    if "stack" in payload and not isinstance(payload["stack"], str):
        raise StructuralDecodeError(tag, "'stack' is not a string")
    return payload


def _restore_stack(error: BaseException, payload: Mapping[str, Any]) -> None:
    if "stack" in payload:
        error.stack = payload["stack"]  # type: ignore[attr-defined]


def native_decoder(tag: str, error_class: type[BaseException]) -> Callable[[Mapping[str, Any]], BaseException]:
    """Build the decoder for a single-message foreign kind."""
    
    def decode(document: Mapping[str, Any]) -> BaseException:
        payload = _validate_payload(tag, document)
        error = error_class(payload["message"])
        _restore_stack(error, payload)
        return error
    
    decode.__name__ = f"decode_{tag}"
    return decode


def decode_aggregate(document: Mapping[str, Any]) -> BaseException:
    """Decode an ``AggregateError`` document.
    
    Documents produced from an exception group carry ``"group": true`` and
    come back as a native group when every member is still an exception.
    Everything else becomes a ``faultline.AggregateError`` holding the
    members verbatim.
    """
    payload = _validate_payload(AGGREGATE_TAG, document)
    errors = payload.get("errors")
    if not isinstance(errors, list):
        raise StructuralDecodeError(AGGREGATE_TAG, "'errors' is not a list")
    group = payload.get("group", False)
    if not isinstance(group, bool):
        raise StructuralDecodeError(AGGREGATE_TAG, "'group' is not a boolean")
    error: BaseException
    if group and errors and all(isinstance(member, BaseException) for member in errors):
        error = BaseExceptionGroup(payload["message"], errors)
    else:
        error = AggregateError(payload["message"], errors)
    _restore_stack(error, payload)
    return error

"""Two-variant result of running a single decoder."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Union

from faultline.codec.registry import Decoder
from faultline.domain.exceptions import StructuralDecodeError

__all__ = ["DecodeOutcome", "Decoded", "StructuralFailure", "attempt_decode"]


@dataclass(frozen=True)
class Decoded:
    """The decoder rebuilt the node."""
    
    value: Any


@dataclass(frozen=True)
class StructuralFailure:
    """The node looked tagged but did not match its type's shape."""
    
    error: StructuralDecodeError
    
    @property
    def reason(self) -> str:
        return self.error.reason


DecodeOutcome = Union[Decoded, StructuralFailure]


def attempt_decode(decoder: Decoder, document: Mapping[str, Any]) -> DecodeOutcome:
    """Run a decoder, turning structural failures into a value.
    
    Only ``StructuralDecodeError`` is captured. Anything else raised by the
    decoder is a defect in the decoder and propagates to the caller.
    """
    try:
        return Decoded(decoder(document))
    except StructuralDecodeError as exc:
        return StructuralFailure(exc)

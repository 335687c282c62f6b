"""Registries mapping type identifiers to decoders.

Two registries are consulted when a tagged node is decoded: application
errors (``ErrorRecord`` subclasses) first, then foreign error kinds. Both
are populated at import time and are expected to be read-only once
decoding starts; call ``freeze()`` to enforce that.

Usage:
    @register_error
    class QuotaExceededError(ErrorRecord):
        description = "Account quota exceeded"
"""

from __future__ import annotations

from typing import Any, Callable, Iterator, Mapping, TypeVar, overload

from faultline.domain.exceptions import ErrorRecord, RegistryError, UnknownError
from faultline.domain.foreign import (
    AGGREGATE_TAG,
    FOREIGN_KINDS,
    decode_aggregate,
    native_decoder,
)

__all__ = [
    "APPLICATION_ERRORS",
    "DEFAULT_REGISTRY",
    "Decoder",
    "ErrorRegistry",
    "ErrorTypeRegistry",
    "FOREIGN_ERRORS",
    "build_application_registry",
    "build_foreign_registry",
    "register_error",
]

Decoder = Callable[[Mapping[str, Any]], Any]

E = TypeVar("E", bound=type[ErrorRecord[Any]])


class ErrorRegistry:
    """Mapping from type identifier to decoder.
    
    Attributes:
        name: Label used in error messages (e.g., "application")
    """
    
    def __init__(self, name: str) -> None:
        self.name = name
        self._decoders: dict[str, Decoder] = {}
        self._frozen = False
    
    @property
    def frozen(self) -> bool:
        return self._frozen
    
    def freeze(self) -> None:
        """Reject any further registration changes."""
        self._frozen = True
    
    def register(self, type_identifier: str, decoder: Decoder) -> None:
        """Associate a type identifier with its decoder.
        
        Re-registering the same decoder is a no-op.
        
        Raises:
            RegistryError: If frozen, or the tag is bound to another decoder
        """
        if self._frozen:
            raise RegistryError(f"{self.name} registry is frozen; cannot register {type_identifier!r}")
        existing = self._decoders.get(type_identifier)
        if existing is not None and existing != decoder:
            raise RegistryError(
                f"Type identifier {type_identifier!r} is already registered "
                f"in the {self.name} registry"
            )
        self._decoders[type_identifier] = decoder
    
    def unregister(self, type_identifier: str) -> None:
        if self._frozen:
            raise RegistryError(f"{self.name} registry is frozen; cannot unregister {type_identifier!r}")
        self._decoders.pop(type_identifier, None)
    
    def lookup(self, type_identifier: str) -> Decoder | None:
        return self._decoders.get(type_identifier)
    
    def __contains__(self, type_identifier: object) -> bool:
        return type_identifier in self._decoders
    
    def __iter__(self) -> Iterator[str]:
        return iter(self._decoders)
    
    def __len__(self) -> int:
        return len(self._decoders)
    
    def __repr__(self) -> str:
        return f"ErrorRegistry({self.name!r}, {list(self._decoders)!r})"


class ErrorTypeRegistry:
    """Application and foreign registries, resolved in that order."""
    
    def __init__(self, application: ErrorRegistry, foreign: ErrorRegistry) -> None:
        self.application = application
        self.foreign = foreign
    
    def resolve(self, type_identifier: str) -> Decoder | None:
        """Find the decoder for a tag; None means unregistered."""
        decoder = self.application.lookup(type_identifier)
        if decoder is None:
            decoder = self.foreign.lookup(type_identifier)
        return decoder
    
    def freeze(self) -> None:
        self.application.freeze()
        self.foreign.freeze()


@overload
def register_error(cls: E) -> E: ...


@overload
def register_error(*, registry: ErrorRegistry) -> Callable[[E], E]: ...


def register_error(cls: E | None = None, *, registry: ErrorRegistry | None = None) -> Any:
    """Decorator registering an ``ErrorRecord`` subclass for decoding.
    
    The class is registered under its ``type_identifier`` with its
    ``from_dict`` classmethod as decoder, and returned unchanged.
    
    Usage:
        @register_error
        class MyError(ErrorRecord): ...
        
        @register_error(registry=my_registry)
        class OtherError(ErrorRecord): ...
    """
    target = registry if registry is not None else APPLICATION_ERRORS
    
    def decorator(error_class: E) -> E:
        target.register(error_class.type_identifier, error_class.from_dict)
        return error_class
    
    if cls is not None:
        return decorator(cls)
    return decorator


def build_foreign_registry(name: str = "foreign") -> ErrorRegistry:
    """Registry holding every built-in foreign error kind."""
    registry = ErrorRegistry(name)
    for tag, error_class in FOREIGN_KINDS.items():
        registry.register(tag, native_decoder(tag, error_class))
    registry.register(AGGREGATE_TAG, decode_aggregate)
    return registry


def build_application_registry(name: str = "application") -> ErrorRegistry:
    """Registry holding the base record types."""
    registry = ErrorRegistry(name)
    registry.register(ErrorRecord.type_identifier, ErrorRecord.from_dict)
    registry.register(UnknownError.type_identifier, UnknownError.from_dict)
    return registry


APPLICATION_ERRORS = build_application_registry()
FOREIGN_ERRORS = build_foreign_registry()
DEFAULT_REGISTRY = ErrorTypeRegistry(APPLICATION_ERRORS, FOREIGN_ERRORS)

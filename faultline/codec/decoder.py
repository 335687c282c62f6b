"""Rebuild error trees from tagged documents.

Every node is decoded bottom-up (children before their parent), so by the
time a record's decoder runs its cause and aggregate members are already
live objects. Each node gets one of three outcomes:

- reconstructed: tagged, registered and well-formed
- passed through: not tagged, unregistered, or tagged but malformed
- wrapped in ``UnknownError``: only for a root that is not tagged at all

A malformed node deeper in the tree therefore stays available as plain
data for debugging, while a caller can always rely on an untagged root
coming back as an error.

A record's ``data`` bag is a child like any other. A bag that is itself
shaped like a tagged registered error (``{"type": "Error", "data": {...}}``)
is decoded into an exception first; the record then fails its own payload
check, since ``data`` must stay a mapping, and the whole record passes
through as a document. Wrap such values one level down
(``data={"detail": ...}``) to keep the record reconstructable.
"""

from __future__ import annotations

from typing import Any, Mapping

import structlog

from faultline.codec.outcome import Decoded, attempt_decode
from faultline.codec.registry import DEFAULT_REGISTRY, ErrorTypeRegistry
from faultline.domain.exceptions import UnknownError

__all__ = ["DEFAULT_UNKNOWN_MESSAGE", "ErrorDecoder", "looks_tagged"]

logger = structlog.get_logger(__name__)

DEFAULT_UNKNOWN_MESSAGE = "Unknown error JSON"


def looks_tagged(value: Any) -> bool:
    """True for a mapping with a string ``type`` and a mapping ``data``."""
    return (
        isinstance(value, Mapping)
        and isinstance(value.get("type"), str)
        and isinstance(value.get("data"), Mapping)
    )


class ErrorDecoder:
    """Decodes documents against an ``ErrorTypeRegistry``.
    
    Attributes:
        registry: Registries consulted for each tagged node
        unknown_message: Message given to the root ``UnknownError``
    """
    
    def __init__(
        self,
        registry: ErrorTypeRegistry | None = None,
        *,
        unknown_message: str = DEFAULT_UNKNOWN_MESSAGE,
    ) -> None:
        self.registry = registry if registry is not None else DEFAULT_REGISTRY
        self.unknown_message = unknown_message
    
    def decode(self, document: Any) -> Any:
        """Decode a parsed document (as produced by ``json.loads``).
        
        Returns:
            The rebuilt root error, an ``UnknownError`` wrapping an untagged
            root, or the root document itself when it is tagged but could
            not be decoded
        """
        return self._walk(document, root=True)
    
    def _walk(self, value: Any, *, root: bool) -> Any:
        if isinstance(value, dict):
            value = {key: self._walk(item, root=False) for key, item in value.items()}
        elif isinstance(value, list):
            value = [self._walk(item, root=False) for item in value]
        return self.decode_node(value, root=root)
    
    def decode_node(self, value: Any, *, root: bool = False) -> Any:
        """Apply the decode policy to one node whose children are decoded.
        
        Raises:
            Exception: Whatever a decoder raises other than
                ``StructuralDecodeError``; that indicates a bug
        """
        if not looks_tagged(value):
            if root:
                logger.debug("error_root_unknown", value_type=type(value).__name__)
                return UnknownError(self.unknown_message, data={"json": value})
            return value
        
        type_identifier = value["type"]
        decoder = self.registry.resolve(type_identifier)
        if decoder is None:
            logger.debug("error_node_unregistered", type=type_identifier, root=root)
            return value
        
        outcome = attempt_decode(decoder, value)
        if isinstance(outcome, Decoded):
            return outcome.value
        # Tagged but malformed: kept as data, even at the root
        logger.debug(
            "error_node_passthrough",
            type=type_identifier,
            reason=outcome.reason,
            root=root,
        )
        return value

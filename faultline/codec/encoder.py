"""Encode error trees into tagged documents.

``encode_node`` is the per-node transform: it turns one error into its
tagged document and leaves every other value alone. ``ErrorEncoder``
applies it to every node of a structure, depth-first, so errors nested in
causes, aggregate members, data bags or plain containers are all tagged.
"""

from __future__ import annotations

from typing import Any

import structlog

from faultline.domain.exceptions import ErrorRecord
from faultline.domain.foreign import foreign_to_dict

__all__ = ["ErrorEncoder", "encode_node"]

logger = structlog.get_logger(__name__)


def encode_node(value: Any, *, include_stack: bool = True) -> Any:
    """Transform a single node; non-error values pass through unchanged.
    
    Args:
        value: Any value found in the structure being encoded
        include_stack: Keep ``stack`` fields in the produced documents
    
    Returns:
        Shallow tagged document for errors, otherwise ``value`` itself
    """
    if isinstance(value, ErrorRecord):
        document = value.to_dict()
        if not include_stack:
            document["data"].pop("stack", None)
        return document
    if isinstance(value, BaseException):
        return foreign_to_dict(value, include_stack=include_stack)
    return value


class ErrorEncoder:
    """Walks a structure and tags every error found in it.
    
    Dicts are rebuilt with their keys in order, lists and tuples become
    lists, so the output is deterministic and JSON-compatible wherever the
    input leaves are.
    """
    
    def __init__(self, *, include_stack: bool = True) -> None:
        self.include_stack = include_stack
    
    def encode(self, value: Any) -> Any:
        """Encode a value and everything reachable from it.
        
        Raises:
            ValueError: If the structure contains a reference cycle
        """
        return self._walk(value, set())
    
    def _walk(self, value: Any, active: set[int]) -> Any:
        node = encode_node(value, include_stack=self.include_stack)
        if not isinstance(node, (dict, list, tuple)):
            return node
        
        # Track the original object: errors produce a fresh dict each time
        marker = id(value)
        if marker in active:
            logger.debug("error_encode_cycle", type=type(value).__name__)
            raise ValueError("Circular reference detected")
        active.add(marker)
        try:
            if isinstance(node, dict):
                return {key: self._walk(item, active) for key, item in node.items()}
            return [self._walk(item, active) for item in node]
        finally:
            active.discard(marker)

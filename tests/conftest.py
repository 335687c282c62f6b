"""Shared fixtures for the faultline test suite.

Tests that define their own ``ErrorRecord`` subclasses register them in an
isolated registry so nothing leaks into the process-wide defaults.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterator

import pytest

from faultline.codec import (
    ErrorCodec,
    ErrorTypeRegistry,
    build_application_registry,
    build_foreign_registry,
)
from faultline.domain import clock


@pytest.fixture
def registry() -> ErrorTypeRegistry:
    """Fresh application and foreign registries."""
    return ErrorTypeRegistry(build_application_registry(), build_foreign_registry())


@pytest.fixture
def codec(registry: ErrorTypeRegistry) -> ErrorCodec:
    """Codec bound to the isolated registry."""
    return ErrorCodec(registry=registry)


@pytest.fixture
def fixed_origin_clock() -> Iterator[clock.MonotonicClock]:
    """Process-wide clock anchored at a known origin, restored afterwards."""
    fixed = clock.MonotonicClock(origin=datetime(2022, 5, 7, 9, 16, 6, tzinfo=timezone.utc))
    previous = clock.set_clock(fixed)
    try:
        yield fixed
    finally:
        clock.set_clock(previous)

"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from typedwire import DeserializerRegistry, register_primitives


@pytest.fixture
def registry() -> DeserializerRegistry:
    """Fresh registry holding only the built-in primitives."""
    registry = DeserializerRegistry()
    register_primitives(registry)
    return registry


@pytest.fixture
def empty_registry() -> DeserializerRegistry:
    """Fresh registry with nothing registered."""
    return DeserializerRegistry()


@pytest.fixture
def sample_payload() -> bytes:
    """Sample binary payload for testing."""
    return b"Hello, typed world!"

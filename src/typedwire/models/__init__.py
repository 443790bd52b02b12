"""Model base class for typedwire records."""

from __future__ import annotations

from .base import FIELD_WRAPPERS, SerializableModel

__all__ = ["SerializableModel", "FIELD_WRAPPERS"]

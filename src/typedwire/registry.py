"""Deserializer registry: type identifier -> decode function.

Decoding a self-describing envelope needs to find the function that rebuilds
the concrete type from its payload. This module keeps that table.

Registries are ordinary objects that can be created and passed explicitly to
any decode call (``registry=...``). A process-wide ``default_registry`` is used
whenever no registry is given; the built-in primitives register themselves
there on import.

All methods are safe to call concurrently: lookups share a read lock, changes
take the write lock.
"""

from __future__ import annotations

import logging

from .exceptions import DuplicateRegistrationError
from .serializable import Deserializer
from .utils.lock import RWLock


class DeserializerRegistry:
    """Thread-safe map from type identifier to Deserializer.

    Example:
        >>> registry = DeserializerRegistry()
        >>> registry.register("example.Point", Point.decode)
        >>> registry.get("example.Point") is Point.decode
        True
        >>> registry.update("example.Point", None)  # remove
        >>> registry.get("example.Point") is None
        True
    """

    def __init__(self) -> None:
        self._deserializers: dict[str, Deserializer] = {}
        self._lock = RWLock()
        self._logger = logging.getLogger("typedwire.registry")

    def get(self, type_id: str) -> Deserializer | None:
        """Return the Deserializer registered for type_id, or None."""
        with self._lock.read():
            return self._deserializers.get(type_id)

    def update(self, type_id: str, deserializer: Deserializer | None) -> None:
        """Add or replace the Deserializer for type_id.

        Passing None removes type_id from the table entirely, allowing
        register() to be called for it again.
        """
        with self._lock.write():
            if deserializer is None:
                removed = self._deserializers.pop(type_id, None)
                if removed is not None:
                    self._logger.debug("Removed deserializer for %r", type_id)
            else:
                self._deserializers[type_id] = deserializer
                self._logger.debug("Updated deserializer for %r", type_id)

    def register(self, type_id: str, deserializer: Deserializer) -> None:
        """Like update(), but type_id must not be in use yet.

        Raises:
            DuplicateRegistrationError: If type_id is already registered
        """
        with self._lock.write():
            if type_id in self._deserializers:
                self._logger.critical("Type ID already in use: %r", type_id)
                raise DuplicateRegistrationError(type_id)
            self._deserializers[type_id] = deserializer
        self._logger.debug("Registered deserializer for %r", type_id)

    def type_ids(self) -> list[str]:
        """Sorted snapshot of the registered type identifiers."""
        with self._lock.read():
            return sorted(self._deserializers)

    def __contains__(self, type_id: object) -> bool:
        with self._lock.read():
            return type_id in self._deserializers

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._deserializers)


default_registry = DeserializerRegistry()


def get_deserializer(type_id: str) -> Deserializer | None:
    """Look up type_id in the default registry."""
    return default_registry.get(type_id)


def update_deserializer(type_id: str, deserializer: Deserializer | None) -> None:
    """Add, replace or (with None) remove an entry in the default registry."""
    default_registry.update(type_id, deserializer)


def register_deserializer(type_id: str, deserializer: Deserializer) -> None:
    """Register a new entry in the default registry; duplicates raise."""
    default_registry.register(type_id, deserializer)

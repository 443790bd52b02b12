"""Capability contracts shared by every encodable value.

A value takes part in the typedwire protocol by exposing two methods; there
is no base class to inherit from. The type identifier is the key the decoder
looks up, so it is persisted next to the data and must never change for a
given type.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol, runtime_checkable


@runtime_checkable
class Serializable(Protocol):
    """Anything that can be stored in a typed envelope.

    Example:
        >>> class Point:
        ...     def __init__(self, x: int, y: int) -> None:
        ...         self.x, self.y = x, y
        ...     def encode(self) -> bytes:
        ...         return bytes([self.x, self.y])
        ...     def type_id(self) -> str:
        ...         return "example.Point"
        >>> isinstance(Point(1, 2), Serializable)
        True
    """

    def encode(self) -> bytes:
        """Serialize this value to its payload bytes."""
        ...

    def type_id(self) -> str:
        """Return the unique, stable type identifier for this type."""
        ...


@runtime_checkable
class Copier(Protocol):
    """A value that can produce an independent deep copy of itself."""

    def clone(self) -> Any:
        ...


# Inverse of a type's encode(): payload bytes -> value. Raises on failure.
Deserializer = Callable[[bytes], Serializable]

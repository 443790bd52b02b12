"""Copy values by native clone or by an encode/decode round trip."""

from __future__ import annotations

from typing import Any

from ..codec.envelope import decode_with_type, encode_with_type
from ..exceptions import NotCopyableError, TypedwireError
from ..registry import DeserializerRegistry
from ..serializable import Copier, Serializable


def copy(obj: Any, *, registry: DeserializerRegistry | None = None) -> Any:
    """Produce a deep copy of obj.

    This uses obj.clone() if obj is a Copier and falls back on encoding and
    decoding it with its type ID if it is only Serializable.

    Args:
        obj: Value to copy
        registry: Registry used for the round trip (default: default_registry)

    Returns:
        An independent copy of obj

    Raises:
        NotCopyableError: If obj is neither a Copier nor Serializable
        DecodeError: If the round trip fails (e.g. the type is not registered)

    Example:
        >>> from typedwire import Float64Slice
        >>> original = Float64Slice([1.0, 2.0])
        >>> copy(original) == original
        True
    """
    if isinstance(obj, type):
        raise NotCopyableError(obj)
    if isinstance(obj, Copier):
        return obj.clone()
    if not isinstance(obj, Serializable):
        raise NotCopyableError(obj)
    try:
        return decode_with_type(encode_with_type(obj), registry=registry)
    except TypedwireError as e:
        e.add_context("copy")
        raise

"""Save and load encode_any() data to and from files."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ..codec.dynamic import Slot, decode_any, encode_any
from ..exceptions import TypedwireError
from ..registry import DeserializerRegistry


def save_any(path: str | Path, *values: Any) -> None:
    """Write values to a file.

    It is like using encode_any() and writing the result to a file afterward.
    Nothing is written if encoding fails.

    Args:
        path: Destination file (created or truncated)
        *values: Values accepted by encode_any()

    Raises:
        EncodeError: If a value cannot be encoded
        OSError: If the file cannot be written
    """
    try:
        data = encode_any(*values)
    except TypedwireError as e:
        e.add_context(f"save {path}")
        raise
    Path(path).write_bytes(data)


def load_any(
    path: str | Path,
    *slots: Slot[Any],
    registry: DeserializerRegistry | None = None,
) -> None:
    """Load values from a file written by save_any().

    It is like using decode_any(), but first reading the data from a file.

    Args:
        path: File to read
        *slots: One Slot per stored value
        registry: Registry used to resolve type IDs (default: default_registry)

    Raises:
        DecodeError: If the file contents cannot be decoded into the slots
        OSError: If the file cannot be read
    """
    data = Path(path).read_bytes()
    try:
        decode_any(data, *slots, registry=registry)
    except TypedwireError as e:
        e.add_context(f"load {path}")
        raise

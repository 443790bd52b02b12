"""Sequence inspection CLI command."""

from __future__ import annotations

from pathlib import Path

from ..codec.sequence import EnvelopeInfo, iter_envelopes
from ..registry import DeserializerRegistry, default_registry


def inspect_file(file_path: Path, registry: DeserializerRegistry | None = None) -> None:
    """Print the elements of an encoded sequence file.

    Only headers are read; payloads are never decoded.

    Args:
        file_path: Path to a file written by save_any() or encode_sequence()
        registry: Registry used to mark type IDs as known (default: default_registry)

    Raises:
        DecodeError: If the file is not a well-formed sequence
    """
    if registry is None:
        registry = default_registry

    data = file_path.read_bytes()
    # Scan fully before printing so a malformed file produces no partial table
    elements = list(iter_envelopes(data))

    print("|" * 7, "typedwire: Self-Describing Binary Serialization", "|" * 7)
    print(
        f"{file_path}: {len(data)} bytes, "
        f"{len(elements)} element{'s' if len(elements) != 1 else ''}."
    )
    print()

    if not elements:
        return

    print(f"{'#':>4}  {'offset':>10}  {'size':>10}  {'payload':>10}  type ID")
    for info in elements:
        print(format_element(info, info.type_id in registry))


def format_element(info: EnvelopeInfo, registered: bool) -> str:
    """Format one table row for inspect_file()."""
    marker = "" if registered else "  (unregistered)"
    return (
        f"{info.index:>4}  {info.offset:>10}  {info.size:>10}  "
        f"{info.payload_size:>10}  {info.type_id}{marker}"
    )

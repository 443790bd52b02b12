#!/usr/bin/env python3
"""Basic usage example for typedwire.

This example demonstrates:
1. Defining a record with SerializableModel
2. Encoding it in a self-describing envelope
3. Decoding it without knowing its type in advance
4. Mixing records and built-in values with encode_any()/decode_any()
"""

from __future__ import annotations

from typing import ClassVar

from typedwire import (
    SerializableModel,
    Slot,
    decode_any,
    decode_with_type,
    encode_any,
    encode_with_type,
    iter_envelopes,
)


# Define a record class
class StatusReport(SerializableModel):
    """Underwater vehicle status report.

    The type ID is stored next to every encoded report, so readers can
    rebuild it from the bytes alone.
    """

    vehicle_id: int
    depth_m: float
    battery_pct: int
    active: bool

    typedwire_type_id: ClassVar[str] = "examples.StatusReport"


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("typedwire Basic Usage Example")
    print("=" * 60)
    print()

    # Create a record instance
    print("1. Creating a status report...")
    report = StatusReport(vehicle_id=42, depth_m=25.0, battery_pct=87, active=True)

    print(f"   Vehicle ID: {report.vehicle_id}")
    print(f"   Depth: {report.depth_m} m")
    print(f"   Battery: {report.battery_pct}%")
    print(f"   Active: {report.active}")
    print()

    # Encode the record
    print("2. Encoding with its type ID...")
    envelope = encode_with_type(report)

    print(f"   Type ID: {report.type_id()}")
    print(f"   Encoded size: {len(envelope)} bytes")
    print(f"   Hex: {envelope.hex()}")
    print()

    # Decode the record
    print("3. Decoding from binary...")
    decoded = decode_with_type(envelope)

    print(f"   Decoded type: {type(decoded).__name__}")
    print(f"   Vehicle ID: {decoded.vehicle_id}")
    print()

    # Verify round-trip
    print("4. Verifying round-trip...")
    if decoded == report:
        print("   ✓ Round-trip successful! Reports match.")
    else:
        print("   ✗ Round-trip failed! Reports don't match.")
    print()

    # Mix records and built-in values
    print("5. Encoding mixed values...")
    data = encode_any(report, "surface at 18:00", [10.0, 20.0, 5.5])
    for info in iter_envelopes(data):
        print(f"   #{info.index}: {info.type_id} ({info.payload_size} payload bytes)")

    status, note, waypoints = Slot(StatusReport), Slot(str), Slot(list)
    decode_any(data, status, note, waypoints)

    print(f"   Note: {note.value}")
    print(f"   Waypoints: {waypoints.value}")
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()

"""Self-describing binary codec for typedwire.

This module provides the typed envelope codec, the sequence codec built on
top of it, and the dynamic encode_any()/decode_any() facade.
"""

from __future__ import annotations

from .dynamic import CONVERSIONS, Slot, decode_any, encode_any, to_serializable
from .envelope import decode_with_type, encode_with_type, read_envelope_header
from .sequence import EnvelopeInfo, decode_sequence, encode_sequence, iter_envelopes

__all__ = [
    "encode_with_type",
    "decode_with_type",
    "read_envelope_header",
    "encode_sequence",
    "decode_sequence",
    "iter_envelopes",
    "EnvelopeInfo",
    "encode_any",
    "decode_any",
    "to_serializable",
    "Slot",
    "CONVERSIONS",
]

"""typedwire: Self-Describing Binary Serialization

A Python library for encoding heterogeneous values to bytes and decoding them
back into the right concrete type without knowing that type in advance. Every
value travels in an envelope carrying its type identifier; a registry maps
identifiers back to decode functions.

Key Features:
- Typed envelopes and length-framed sequences
- Thread-safe, injectable deserializer registry
- encode_any()/decode_any() with built-in primitive coercion
- Pydantic-based record models that register themselves

Quick Start:
    >>> from typing import ClassVar
    >>> from typedwire import SerializableModel, Slot, decode_any, encode_any
    >>>
    >>> class Sample(SerializableModel):
    ...     label: str
    ...     values: list[float]
    ...
    ...     typedwire_type_id: ClassVar[str] = "example.Sample"
    >>>
    >>> data = encode_any(Sample(label="ping", values=[0.5, 1.5]), 42)
    >>> sample, count = Slot(Sample), Slot(int)
    >>> decode_any(data, sample, count)
    >>> sample.value.label, count.value
    ('ping', 42)

Wire format (all integers little-endian, unsigned):
    Sequence := Element*
    Element  := u64(envelopeLen) Envelope
    Envelope := u32(typeIdLen) bytes(typeId) bytes(payload)
"""

from __future__ import annotations

from .codec import (
    CONVERSIONS,
    EnvelopeInfo,
    Slot,
    decode_any,
    decode_sequence,
    decode_with_type,
    encode_any,
    encode_sequence,
    encode_with_type,
    iter_envelopes,
)
from .exceptions import (
    BufferUnderflowError,
    CountMismatchError,
    DecodeError,
    DuplicateRegistrationError,
    EncodeError,
    InvalidSlotError,
    NotCopyableError,
    ResidualDataError,
    SchemaError,
    TypedwireError,
    TypeMismatchError,
    UnregisteredTypeError,
    UnsupportedTypeError,
)
from .models import SerializableModel
from .primitives import (
    PRIMITIVES,
    Bool,
    Bytes,
    Float32,
    Float32Slice,
    Float64,
    Float64Slice,
    Int,
    Int32,
    Int32Slice,
    Int64,
    Int64Slice,
    IntSlice,
    String,
    register_primitives,
)
from .registry import (
    DeserializerRegistry,
    default_registry,
    get_deserializer,
    register_deserializer,
    update_deserializer,
)
from .serializable import Copier, Deserializer, Serializable
from .utils.copying import copy
from .utils.files import load_any, save_any

__version__ = "0.1.0"

__all__ = [
    # Capability
    "Serializable",
    "Copier",
    "Deserializer",
    # Core API
    "encode_with_type",
    "decode_with_type",
    "encode_sequence",
    "decode_sequence",
    "iter_envelopes",
    "EnvelopeInfo",
    "encode_any",
    "decode_any",
    "Slot",
    "CONVERSIONS",
    # Registry
    "DeserializerRegistry",
    "default_registry",
    "get_deserializer",
    "update_deserializer",
    "register_deserializer",
    # Primitives
    "Bytes",
    "String",
    "Bool",
    "Int",
    "Int32",
    "Int64",
    "Float32",
    "Float64",
    "IntSlice",
    "Int32Slice",
    "Int64Slice",
    "Float32Slice",
    "Float64Slice",
    "PRIMITIVES",
    "register_primitives",
    # Models
    "SerializableModel",
    # Helpers
    "copy",
    "save_any",
    "load_any",
    # Exceptions
    "TypedwireError",
    "EncodeError",
    "UnsupportedTypeError",
    "DecodeError",
    "BufferUnderflowError",
    "ResidualDataError",
    "UnregisteredTypeError",
    "CountMismatchError",
    "TypeMismatchError",
    "InvalidSlotError",
    "NotCopyableError",
    "SchemaError",
    "DuplicateRegistrationError",
    # Version
    "__version__",
]

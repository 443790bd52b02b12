"""Serializable wrappers for built-in Python values.

Each wrapper is a pydantic RootModel around a native value (``Int(42).root ==
42``), so construction validates ranges and normalizes input. Every wrapper
implements the Serializable capability and has a ``decode`` classmethod, which
is registered as its Deserializer.

Payload layouts (all little-endian, unpadded):

==============  ==========  ==============================
Wrapper         Type ID     Payload
==============  ==========  ==============================
Bytes           []byte      raw bytes
String          string      UTF-8 text
Int             int         signed 64-bit integer
Int32           int32       signed 32-bit integer
Int64           int64       signed 64-bit integer
Float32         float32     IEEE 754 single
Float64         float64     IEEE 754 double
Bool            bool        one byte, 0 or 1
IntSlice        []int       packed signed 64-bit integers
Int32Slice      []int32     packed signed 32-bit integers
Int64Slice      []int64     packed signed 64-bit integers
Float32Slice    []float32   packed IEEE 754 singles
Float64Slice    []float64   packed IEEE 754 doubles
==============  ==========  ==============================

The wrappers register themselves in the default registry on import. Use
register_primitives() to install them into a registry of your own.
"""

from __future__ import annotations

import struct
from typing import Annotated, ClassVar, TypeVar

from pydantic import AfterValidator, ConfigDict, Field, RootModel

from .exceptions import DecodeError, EncodeError
from .registry import DeserializerRegistry, default_registry

T = TypeVar("T")

INT32_MIN, INT32_MAX = -(1 << 31), (1 << 31) - 1
INT64_MIN, INT64_MAX = -(1 << 63), (1 << 63) - 1


def _round_float32(value: float) -> float:
    """Round a Python float to the nearest IEEE 754 single."""
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError as e:
        # pydantic only turns ValueError into a ValidationError
        raise ValueError(f"{value} is out of range for float32") from e


Int32Value = Annotated[int, Field(ge=INT32_MIN, le=INT32_MAX)]
Int64Value = Annotated[int, Field(ge=INT64_MIN, le=INT64_MAX)]
Float32Value = Annotated[float, AfterValidator(_round_float32)]


class _Scalar:
    """Codec for wrappers whose payload is a single struct item."""

    wire_type_id: ClassVar[str]
    wire_format: ClassVar[str]

    def type_id(self) -> str:
        return self.wire_type_id

    def encode(self) -> bytes:
        try:
            return struct.pack(self.wire_format, self.root)  # type: ignore[attr-defined]
        except struct.error as e:
            raise EncodeError(f"{self.wire_type_id}: {e}") from e

    @classmethod
    def decode(cls: type[T], data: bytes) -> T:
        size = struct.calcsize(cls.wire_format)  # type: ignore[attr-defined]
        if len(data) != size:
            raise DecodeError(
                f"{cls.wire_type_id}: expected {size} bytes, got {len(data)}"  # type: ignore[attr-defined]
            )
        return cls(struct.unpack(cls.wire_format, data)[0])  # type: ignore[attr-defined,call-arg]


class _Packed:
    """Codec for wrappers whose payload is a packed array of one struct item."""

    wire_type_id: ClassVar[str]
    wire_item_format: ClassVar[str]

    def type_id(self) -> str:
        return self.wire_type_id

    def encode(self) -> bytes:
        items = self.root  # type: ignore[attr-defined]
        try:
            return struct.pack(f"<{len(items)}{self.wire_item_format}", *items)
        except struct.error as e:
            raise EncodeError(f"{self.wire_type_id}: {e}") from e

    @classmethod
    def decode(cls: type[T], data: bytes) -> T:
        item_size = struct.calcsize(cls.wire_item_format)  # type: ignore[attr-defined]
        count, extra = divmod(len(data), item_size)
        if extra:
            raise DecodeError(
                f"{cls.wire_type_id}: {len(data)} bytes is not a multiple "  # type: ignore[attr-defined]
                f"of the {item_size}-byte item size"
            )
        items = struct.unpack(f"<{count}{cls.wire_item_format}", data)  # type: ignore[attr-defined]
        return cls(list(items))  # type: ignore[call-arg]


class Bytes(RootModel[bytes]):
    """Serializable byte string."""

    model_config = ConfigDict(frozen=True)

    wire_type_id: ClassVar[str] = "[]byte"

    def type_id(self) -> str:
        return self.wire_type_id

    def encode(self) -> bytes:
        return self.root

    @classmethod
    def decode(cls, data: bytes) -> Bytes:
        return cls(bytes(data))


class String(RootModel[str]):
    """Serializable text, stored as UTF-8."""

    model_config = ConfigDict(frozen=True)

    wire_type_id: ClassVar[str] = "string"

    def type_id(self) -> str:
        return self.wire_type_id

    def encode(self) -> bytes:
        try:
            return self.root.encode("utf-8")
        except UnicodeEncodeError as e:
            raise EncodeError(f"string: cannot encode as UTF-8: {e}") from e

    @classmethod
    def decode(cls, data: bytes) -> String:
        try:
            return cls(bytes(data).decode("utf-8"))
        except UnicodeDecodeError as e:
            raise DecodeError(f"string: invalid UTF-8 encoding: {e}") from e


class Bool(RootModel[bool]):
    """Serializable boolean, stored as a single 0 or 1 byte."""

    model_config = ConfigDict(frozen=True)

    wire_type_id: ClassVar[str] = "bool"

    def type_id(self) -> str:
        return self.wire_type_id

    def encode(self) -> bytes:
        return b"\x01" if self.root else b"\x00"

    @classmethod
    def decode(cls, data: bytes) -> Bool:
        if len(data) != 1:
            raise DecodeError(f"bool: expected 1 byte, got {len(data)}")
        if data[0] not in (0, 1):
            raise DecodeError(f"bool: invalid value {data[0]}")
        return cls(data[0] == 1)


class Int(_Scalar, RootModel[Int64Value]):
    """Serializable platform integer (always 64 bits on the wire)."""

    model_config = ConfigDict(frozen=True)

    wire_type_id: ClassVar[str] = "int"
    wire_format: ClassVar[str] = "<q"


class Int32(_Scalar, RootModel[Int32Value]):
    model_config = ConfigDict(frozen=True)

    wire_type_id: ClassVar[str] = "int32"
    wire_format: ClassVar[str] = "<i"


class Int64(_Scalar, RootModel[Int64Value]):
    model_config = ConfigDict(frozen=True)

    wire_type_id: ClassVar[str] = "int64"
    wire_format: ClassVar[str] = "<q"


class Float32(_Scalar, RootModel[Float32Value]):
    """Serializable single-precision float.

    Values are rounded to single precision on construction, so a decoded
    Float32 compares equal to the one that was encoded.
    """

    model_config = ConfigDict(frozen=True)

    wire_type_id: ClassVar[str] = "float32"
    wire_format: ClassVar[str] = "<f"


class Float64(_Scalar, RootModel[float]):
    model_config = ConfigDict(frozen=True)

    wire_type_id: ClassVar[str] = "float64"
    wire_format: ClassVar[str] = "<d"


class IntSlice(_Packed, RootModel[list[Int64Value]]):
    model_config = ConfigDict(frozen=True)

    wire_type_id: ClassVar[str] = "[]int"
    wire_item_format: ClassVar[str] = "q"


class Int32Slice(_Packed, RootModel[list[Int32Value]]):
    model_config = ConfigDict(frozen=True)

    wire_type_id: ClassVar[str] = "[]int32"
    wire_item_format: ClassVar[str] = "i"


class Int64Slice(_Packed, RootModel[list[Int64Value]]):
    model_config = ConfigDict(frozen=True)

    wire_type_id: ClassVar[str] = "[]int64"
    wire_item_format: ClassVar[str] = "q"


class Float32Slice(_Packed, RootModel[list[Float32Value]]):
    model_config = ConfigDict(frozen=True)

    wire_type_id: ClassVar[str] = "[]float32"
    wire_item_format: ClassVar[str] = "f"


class Float64Slice(_Packed, RootModel[list[float]]):
    model_config = ConfigDict(frozen=True)

    wire_type_id: ClassVar[str] = "[]float64"
    wire_item_format: ClassVar[str] = "d"


PRIMITIVES: tuple[type, ...] = (
    Bytes,
    String,
    Bool,
    Int,
    Int32,
    Int64,
    Float32,
    Float64,
    IntSlice,
    Int32Slice,
    Int64Slice,
    Float32Slice,
    Float64Slice,
)


def register_primitives(registry: DeserializerRegistry) -> None:
    """Register every built-in wrapper in the given registry.

    Raises:
        DuplicateRegistrationError: If any primitive type ID is already taken
    """
    for wrapper in PRIMITIVES:
        registry.register(wrapper.wire_type_id, wrapper.decode)  # type: ignore[attr-defined]


register_primitives(default_registry)

"""Dynamic "any object" encode/decode.

encode_any() accepts Serializable values and a fixed set of built-in Python
values, wrapping the latter in the matching primitive wrapper. decode_any()
decodes a sequence into caller-supplied Slots, checking that each decoded
value fits its slot's target type.

Supported built-in inputs for encode_any():

    str                          -> String
    bytes, bytearray, memoryview -> Bytes
    bool                         -> Bool
    int                          -> Int
    float                        -> Float64
    list/tuple of int            -> IntSlice      (non-empty, no bools)
    list/tuple of float          -> Float64Slice  (non-empty)
    array.array('i')             -> Int32Slice
    array.array('q')             -> Int64Slice
    array.array('f')             -> Float32Slice
    array.array('d')             -> Float64Slice
"""

from __future__ import annotations

import array
import logging
from typing import Any, Callable, Generic, TypeVar

from ..exceptions import (
    CountMismatchError,
    EncodeError,
    InvalidSlotError,
    TypedwireError,
    TypeMismatchError,
    UnsupportedTypeError,
)
from ..primitives import (
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
)
from ..registry import DeserializerRegistry
from ..serializable import Serializable
from .sequence import decode_sequence, encode_sequence

T = TypeVar("T")

logger = logging.getLogger("typedwire.codec.dynamic")

_ARRAY_WRAPPERS: dict[str, type] = {
    "i": Int32Slice,
    "q": Int64Slice,
    "f": Float32Slice,
    "d": Float64Slice,
}

# (decoded type, slot target) -> converter. Only lossless conversions belong here.
CONVERSIONS: dict[tuple[type, type], Callable[[Any], Any]] = {
    (Bytes, String): lambda v: String(v.root.decode("utf-8")),
    (String, Bytes): lambda v: Bytes(v.root.encode("utf-8")),
    # widening
    (Int32, Int64): lambda v: Int64(v.root),
    (Int32, Int): lambda v: Int(v.root),
    (Int64, Int): lambda v: Int(v.root),
    (Int, Int64): lambda v: Int64(v.root),
    (Float32, Float64): lambda v: Float64(v.root),
    (Int32Slice, Int64Slice): lambda v: Int64Slice(v.root),
    (Int32Slice, IntSlice): lambda v: IntSlice(v.root),
    (Int64Slice, IntSlice): lambda v: IntSlice(v.root),
    (IntSlice, Int64Slice): lambda v: Int64Slice(v.root),
    (Float32Slice, Float64Slice): lambda v: Float64Slice(v.root),
    # unwrapping
    (String, str): lambda v: v.root,
    (Bytes, bytes): lambda v: v.root,
    (Bytes, str): lambda v: v.root.decode("utf-8"),
    (String, bytes): lambda v: v.root.encode("utf-8"),
    (Bool, bool): lambda v: v.root,
    (Int, int): lambda v: v.root,
    (Int32, int): lambda v: v.root,
    (Int64, int): lambda v: v.root,
    (Float32, float): lambda v: v.root,
    (Float64, float): lambda v: v.root,
    (IntSlice, list): lambda v: list(v.root),
    (Int32Slice, list): lambda v: list(v.root),
    (Int64Slice, list): lambda v: list(v.root),
    (Float32Slice, list): lambda v: list(v.root),
    (Float64Slice, list): lambda v: list(v.root),
}


class Slot(Generic[T]):
    """Output destination for decode_any().

    A slot names the type it accepts and receives the decoded value.

    Example:
        >>> name, count = Slot(str), Slot(int)
        >>> decode_any(encode_any("hello", 42), name, count)
        >>> name.value, count.value
        ('hello', 42)
    """

    def __init__(self, target: Any = object) -> None:
        self.target = target
        self._value: Any = None
        self.is_set = False

    @property
    def value(self) -> T:
        return self._value

    @value.setter
    def value(self, value: T) -> None:
        self._value = value
        self.is_set = True

    def __repr__(self) -> str:
        target = getattr(self.target, "__name__", repr(self.target))
        if self.is_set:
            return f"Slot({target}, value={self._value!r})"
        return f"Slot({target})"


def to_serializable(value: Any) -> Serializable:
    """Return value itself if it is Serializable, else its primitive wrapper.

    Raises:
        UnsupportedTypeError: If value is neither Serializable nor a supported
            built-in value
    """
    # classes have encode and type_id too, as unbound functions
    if isinstance(value, Serializable) and not isinstance(value, type):
        return value
    if isinstance(value, str):
        return String(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return Bytes(bytes(value))
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return Bool(value)
    if isinstance(value, int):
        return Int(value)
    if isinstance(value, float):
        return Float64(value)
    if isinstance(value, array.array):
        wrapper = _ARRAY_WRAPPERS.get(value.typecode)
        if wrapper is not None:
            return wrapper(value.tolist())
    elif isinstance(value, (list, tuple)) and value:
        if all(type(item) is int for item in value):
            return IntSlice(list(value))
        if all(type(item) is float for item in value):
            return Float64Slice(list(value))
    raise UnsupportedTypeError(value)


def encode_any(*values: Any) -> bytes:
    """Encode Serializable and built-in values as a sequence.

    Args:
        *values: Values to encode, in order

    Returns:
        Encoded sequence

    Raises:
        UnsupportedTypeError: If a value is neither Serializable nor a
            supported built-in value
        EncodeError: If a value fails to encode

    Example:
        >>> data = encode_any("hello", 42, True, [1.5, 2.5])
    """
    wrapped: list[Serializable] = []
    for index, value in enumerate(values):
        try:
            wrapped.append(to_serializable(value))
        except UnsupportedTypeError as e:
            e.index = index
            e.add_context(f"encode any: argument {index}")
            raise
        except ValueError as e:
            # pydantic rejected the value, e.g. an int outside the 64-bit range
            raise EncodeError(f"encode any: argument {index}: {e}") from e
    return encode_sequence(wrapped)


def _fits(value: Any, target: Any) -> bool:
    if target is object or target is Any:
        return True
    try:
        return isinstance(value, target)
    except TypeError:
        # not a class, e.g. a parameterized generic such as list[int]
        return False


def decode_any(
    data: bytes,
    *slots: Slot[Any],
    registry: DeserializerRegistry | None = None,
) -> None:
    """Decode a sequence into the given slots.

    For each decoded value, in order:
    - if it is an instance of the slot's target type, it is stored as is;
    - else, if CONVERSIONS has an entry for (its type, the target type), the
      converted value is stored (e.g. Bytes -> String, Int32 -> Int, String -> str);
    - else TypeMismatchError is raised.

    Slots are only written once every value has been checked, so on error
    none of them change.

    Args:
        data: Encoded sequence
        *slots: One Slot per encoded value
        registry: Registry used to resolve type IDs (default: default_registry)

    Raises:
        InvalidSlotError: If an argument is not a Slot
        CountMismatchError: If the number of slots differs from the number of
            decoded values
        TypeMismatchError: If a value cannot be stored in its slot
        DecodeError: If the sequence itself fails to decode
    """
    for index, slot in enumerate(slots):
        if not isinstance(slot, Slot):
            raise InvalidSlotError(index, slot)

    try:
        decoded = decode_sequence(data, registry=registry)
        if len(decoded) != len(slots):
            raise CountMismatchError(len(slots), len(decoded))

        results: list[Any] = []
        for index, (value, slot) in enumerate(zip(decoded, slots)):
            if _fits(value, slot.target):
                results.append(value)
                continue
            converter = CONVERSIONS.get((type(value), slot.target))
            if converter is None:
                raise TypeMismatchError(index, slot.target, type(value))
            logger.debug(
                "Converting element %d from %s to %s",
                index,
                type(value).__name__,
                getattr(slot.target, "__name__", slot.target),
            )
            try:
                results.append(converter(value))
            except ValueError as e:
                # e.g. Bytes that are not valid UTF-8 going into a String slot
                raise TypeMismatchError(index, slot.target, type(value)) from e
    except TypedwireError as e:
        e.add_context("decode any")
        raise

    for slot, result in zip(slots, results):
        slot.value = result

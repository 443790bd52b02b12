"""Exception hierarchy for typedwire.

All recoverable errors inherit from TypedwireError for easy catching of any
typedwire-specific error. DuplicateRegistrationError sits outside
that hierarchy: it signals a misconfigured program, not bad input data.
"""

from __future__ import annotations

from typing import Any


class TypedwireError(Exception):
    """Base exception for all recoverable typedwire errors.

    Each layer a failure passes through may prepend a short context string
    (e.g. ``"element 3"``), so the final message reads like
    ``"decode sequence: element 3: buffer underflow ..."``.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
        self.context: list[str] = []

    def add_context(self, context: str) -> None:
        """Prepend a context string to the error message."""
        self.context.insert(0, context)

    def __str__(self) -> str:
        if self.context:
            return ": ".join([*self.context, self.message])
        return self.message


class EncodeError(TypedwireError):
    """Raised when encoding a value fails.

    Examples:
        - Type identifier too long for its 32-bit length prefix
        - Value out of range for a fixed-width primitive
    """

    pass


class UnsupportedTypeError(EncodeError):
    """Raised when encode_any() gets a value it cannot coerce."""

    def __init__(self, value: Any, index: int | None = None) -> None:
        self.value = value
        self.index = index
        shape = type(value).__name__
        if index is None:
            super().__init__(f"unsupported type {shape}")
        else:
            super().__init__(f"argument {index}: unsupported type {shape}")


class DecodeError(TypedwireError):
    """Raised when decoding binary data fails.

    Examples:
        - Truncated data (insufficient bytes)
        - Payload of the wrong size for a primitive
        - Decode function rejected its payload
    """

    pass


class BufferUnderflowError(DecodeError):
    """Raised when a length prefix claims more bytes than are available."""

    def __init__(self, needed: int, available: int) -> None:
        self.needed = needed
        self.available = available
        super().__init__(f"buffer underflow: need {needed} bytes, have {available}")


class ResidualDataError(DecodeError):
    """Raised when bytes remain after the last well-formed sequence element."""

    def __init__(self, remaining: int) -> None:
        self.remaining = remaining
        super().__init__(f"residual data: {remaining} trailing bytes")


class UnregisteredTypeError(DecodeError):
    """Raised when a decoded type identifier has no registry entry."""

    def __init__(self, type_id: str, registered: list[str] | None = None) -> None:
        self.type_id = type_id
        self.registered = registered or []
        super().__init__(
            f"unregistered type ID: {type_id!r}. "
            f"Registered IDs: {self.registered}"
        )


class CountMismatchError(DecodeError):
    """Raised when decode_any() gets the wrong number of output slots."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"count mismatch: have {expected} destinations but {actual} decoded objects")


class TypeMismatchError(DecodeError):
    """Raised when a decoded value cannot be stored in its output slot."""

    def __init__(self, index: int, expected: Any, actual: Any) -> None:
        self.index = index
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"type mismatch: element {index}: expecting {_type_name(expected)} "
            f"but decoded {_type_name(actual)}"
        )


class InvalidSlotError(TypedwireError, TypeError):
    """Raised when decode_any() is given something other than a Slot."""

    def __init__(self, index: int, got: Any) -> None:
        self.index = index
        self.got = got
        super().__init__(f"element {index}: expected Slot but got {type(got).__name__}")


class NotCopyableError(TypedwireError):
    """Raised when copy() gets a value that is neither a Copier nor Serializable."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(f"cannot copy objects of type {type(value).__name__}")


class SchemaError(TypedwireError):
    """Raised when a SerializableModel definition is invalid.

    Examples:
        - Type identifier is not a string
        - Field annotation with no wrapper and no runtime coercion
    """

    pass


class DuplicateRegistrationError(RuntimeError):
    """Raised when register() is called twice for the same type identifier.

    This is a programming error (two types claiming one identifier), so it is
    not a TypedwireError and ordinary decode error handling will not catch it.
    """

    def __init__(self, type_id: str) -> None:
        self.type_id = type_id
        super().__init__(f"type ID already in use: {type_id!r}")


def _type_name(tp: Any) -> str:
    if isinstance(tp, type):
        return tp.__name__
    return repr(tp)

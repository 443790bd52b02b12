"""Typed envelope codec.

An envelope pairs a value's payload with its type identifier, so the payload
can be decoded later without knowing its type in advance:

- [Type ID length (4 bytes, little-endian)] [Type ID (UTF-8)] [Payload]

The envelope does not record where the payload ends; the decode function is
handed everything after the type ID. The sequence codec is what bounds each
envelope.
"""

from __future__ import annotations

import struct

from ..exceptions import (
    BufferUnderflowError,
    DecodeError,
    EncodeError,
    TypedwireError,
    UnregisteredTypeError,
)
from ..registry import DeserializerRegistry, default_registry
from ..serializable import Serializable

TYPE_ID_HEADER = struct.Struct("<I")
MAX_TYPE_ID_LENGTH = 0xFFFFFFFF


def encode_with_type(value: Serializable) -> bytes:
    """Encode a value together with its type identifier.

    This is meant to be used with decode_with_type().

    Args:
        value: Serializable value to encode

    Returns:
        Envelope bytes: exactly 4 + len(type ID) + len(payload) bytes

    Raises:
        EncodeError: If the type ID does not fit its 32-bit length prefix
        Exception: Whatever value.encode() raises, unchanged

    Example:
        >>> from typedwire import Int
        >>> encode_with_type(Int(1))
        b'\\x03\\x00\\x00\\x00int\\x01\\x00\\x00\\x00\\x00\\x00\\x00\\x00'
    """
    payload = value.encode()
    type_data = value.type_id().encode("utf-8")
    if len(type_data) > MAX_TYPE_ID_LENGTH:
        raise EncodeError(f"encode with type: type ID is {len(type_data)} bytes, too long")

    result = bytearray(TYPE_ID_HEADER.pack(len(type_data)))
    result.extend(type_data)
    result.extend(payload)
    return bytes(result)


def read_envelope_header(data: bytes) -> tuple[str, int]:
    """Parse the type ID at the start of an envelope.

    Args:
        data: Envelope bytes

    Returns:
        Tuple of (type_id, payload_offset)

    Raises:
        BufferUnderflowError: If the header or type ID is truncated
        DecodeError: If the type ID is not valid UTF-8
    """
    if len(data) < TYPE_ID_HEADER.size:
        raise BufferUnderflowError(TYPE_ID_HEADER.size, len(data))

    (size,) = TYPE_ID_HEADER.unpack_from(data)
    payload_offset = TYPE_ID_HEADER.size + size
    if payload_offset > len(data):
        raise BufferUnderflowError(payload_offset, len(data))

    try:
        type_id = bytes(data[TYPE_ID_HEADER.size : payload_offset]).decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(f"type ID is not valid UTF-8: {e}") from e

    return type_id, payload_offset


def decode_with_type(
    data: bytes,
    *,
    registry: DeserializerRegistry | None = None,
) -> Serializable:
    """Decode an envelope produced by encode_with_type().

    The type ID is read first and used to look up the Deserializer, which then
    decodes the rest of the buffer.

    Args:
        data: Envelope bytes
        registry: Registry to look the type ID up in (default: default_registry)

    Returns:
        Decoded value (type determined by the embedded type ID)

    Raises:
        BufferUnderflowError: If the header or type ID is truncated
        UnregisteredTypeError: If no Deserializer is registered for the type ID
        DecodeError: If the Deserializer fails
    """
    if registry is None:
        registry = default_registry

    try:
        type_id, payload_offset = read_envelope_header(data)
    except TypedwireError as e:
        e.add_context("decode with type")
        raise

    deserializer = registry.get(type_id)
    if deserializer is None:
        raise UnregisteredTypeError(type_id, registry.type_ids())

    payload = bytes(data[payload_offset:])
    try:
        return deserializer(payload)
    except TypedwireError as e:
        e.add_context(f"decode {type_id!r}")
        raise
    except Exception as e:
        raise DecodeError(f"decode {type_id!r}: {e}") from e

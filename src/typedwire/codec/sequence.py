"""Sequence codec: an ordered list of length-prefixed envelopes.

The sequence structure is:
- ([Envelope length (8 bytes, little-endian)] [Envelope])*

The outer length lets the decoder hand each envelope exactly its own bytes,
so elements can be read front to back without backtracking.
"""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass
from typing import Iterable, Iterator

from ..exceptions import BufferUnderflowError, ResidualDataError, TypedwireError
from ..registry import DeserializerRegistry
from ..serializable import Serializable
from .envelope import decode_with_type, encode_with_type, read_envelope_header

ELEMENT_HEADER = struct.Struct("<Q")

logger = logging.getLogger("typedwire.codec.sequence")


@dataclass(frozen=True)
class EnvelopeInfo:
    """Location and type of one sequence element, read from headers only.

    Attributes:
        index: Position of the element in the sequence
        offset: Byte offset of the element's 8-byte length prefix
        size: Envelope size in bytes (excluding the length prefix)
        type_id: Type identifier stored in the envelope
        payload_size: Payload size in bytes
    """

    index: int
    offset: int
    size: int
    type_id: str
    payload_size: int


def encode_sequence(values: Iterable[Serializable]) -> bytes:
    """Encode values as a sequence of typed envelopes.

    This is meant to be used in conjunction with decode_sequence().

    Args:
        values: Serializable values, in order

    Returns:
        Encoded sequence (empty bytes for an empty input)

    Example:
        >>> from typedwire import Int, String
        >>> data = encode_sequence([Int(7), String("hello")])
        >>> decode_sequence(data)
        [Int(root=7), String(root='hello')]
    """
    result = bytearray()
    count = 0
    for index, value in enumerate(values):
        try:
            envelope = encode_with_type(value)
        except TypedwireError as e:
            e.add_context(f"encode sequence: element {index}")
            raise
        result.extend(ELEMENT_HEADER.pack(len(envelope)))
        result.extend(envelope)
        count += 1

    logger.debug("Encoded sequence of %d elements (%d bytes)", count, len(result))
    return bytes(result)


def _scan(data: bytes) -> Iterator[tuple[int, int, int]]:
    """Yield (index, offset, size) for every element's envelope.

    Raises:
        BufferUnderflowError: If a length prefix overruns the buffer
        ResidualDataError: If 1-7 bytes trail the last element
    """
    position = 0
    index = 0
    while len(data) - position >= ELEMENT_HEADER.size:
        (size,) = ELEMENT_HEADER.unpack_from(data, position)
        start = position + ELEMENT_HEADER.size
        available = len(data) - start
        if size > available:
            error = BufferUnderflowError(size, available)
            error.add_context(f"element {index}")
            raise error
        yield index, position, size
        position = start + size
        index += 1

    if position != len(data):
        raise ResidualDataError(len(data) - position)


def decode_sequence(
    data: bytes,
    *,
    registry: DeserializerRegistry | None = None,
) -> list[Serializable]:
    """Decode a sequence produced by encode_sequence().

    Args:
        data: Encoded sequence
        registry: Registry used to resolve type IDs (default: default_registry)

    Returns:
        Decoded values, in order (empty list for empty input)

    Raises:
        BufferUnderflowError: If an element is truncated
        ResidualDataError: If trailing bytes remain after the last element
        UnregisteredTypeError: If an element's type ID is not registered
        DecodeError: If an element fails to decode
    """
    view = memoryview(data)
    values: list[Serializable] = []
    try:
        for index, offset, size in _scan(data):
            start = offset + ELEMENT_HEADER.size
            try:
                values.append(decode_with_type(view[start : start + size], registry=registry))
            except TypedwireError as e:
                e.add_context(f"element {index}")
                raise
    except TypedwireError as e:
        e.add_context("decode sequence")
        raise

    logger.debug("Decoded sequence of %d elements", len(values))
    return values


def iter_envelopes(data: bytes) -> Iterator[EnvelopeInfo]:
    """Walk a sequence's headers without decoding any payload.

    No registry is consulted, so this works for sequences containing types
    that are not registered in this process.

    Args:
        data: Encoded sequence

    Yields:
        EnvelopeInfo for each element, in order

    Raises:
        BufferUnderflowError: If an element or its type ID is truncated
        ResidualDataError: If trailing bytes remain after the last element
    """
    for index, offset, size in _scan(data):
        start = offset + ELEMENT_HEADER.size
        try:
            type_id, payload_offset = read_envelope_header(data[start : start + size])
        except TypedwireError as e:
            e.add_context(f"element {index}")
            raise
        yield EnvelopeInfo(
            index=index,
            offset=offset,
            size=size,
            type_id=type_id,
            payload_size=size - payload_offset,
        )

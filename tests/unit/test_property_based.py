"""Property-based tests using hypothesis."""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from typedwire import (
    BufferUnderflowError,
    DecodeError,
    Float32Slice,
    Int32Slice,
    Int64,
    Slot,
    String,
    decode_any,
    decode_sequence,
    decode_with_type,
    encode_any,
    encode_sequence,
    encode_with_type,
    iter_envelopes,
)
from typedwire.codec.dynamic import to_serializable
from typedwire.primitives import INT32_MAX, INT32_MIN, INT64_MAX, INT64_MIN

int64s = st.integers(min_value=INT64_MIN, max_value=INT64_MAX)
finite_floats = st.floats(allow_nan=False)

# Built-in values encode_any() accepts
builtin_values = st.one_of(
    st.text(),
    st.binary(max_size=64),
    st.booleans(),
    int64s,
    finite_floats,
    st.lists(int64s, min_size=1, max_size=16),
    st.lists(finite_floats, min_size=1, max_size=16),
)


class TestEnvelopeProperties:
    """Property-based tests for the envelope codec."""

    @given(text=st.text())
    def test_string_roundtrip(self, text: str) -> None:
        value = String(text)
        assert decode_with_type(encode_with_type(value)) == value

    @given(items=st.lists(st.integers(min_value=INT32_MIN, max_value=INT32_MAX)))
    def test_int32_slice_roundtrip(self, items: list[int]) -> None:
        value = Int32Slice(items)
        assert decode_with_type(encode_with_type(value)) == value

    @given(items=st.lists(st.floats(width=32, allow_nan=False)))
    def test_float32_slice_roundtrip(self, items: list[float]) -> None:
        """Test values already representable in single precision are exact."""
        value = Float32Slice(items)
        assert decode_with_type(encode_with_type(value)).root == items

    @given(number=int64s)
    def test_envelope_length(self, number: int) -> None:
        """Test envelope size is header + type ID + payload, no padding."""
        value = Int64(number)
        assert len(encode_with_type(value)) == 4 + len("int64") + 8


class TestSequenceProperties:
    """Property-based tests for the sequence codec."""

    @given(values=st.lists(builtin_values, max_size=10))
    def test_sequence_roundtrip(self, values: list) -> None:
        wrapped = [to_serializable(v) for v in values]
        assert decode_sequence(encode_sequence(wrapped)) == wrapped

    @given(values=st.lists(builtin_values, max_size=10))
    def test_encode_deterministic(self, values: list) -> None:
        assert encode_any(*values) == encode_any(*values)

    @given(values=st.lists(builtin_values, min_size=1, max_size=5), data=st.data())
    def test_truncation_detected(self, values: list, data: st.DataObject) -> None:
        """Test every proper prefix that cuts an element fails to decode."""
        encoded = encode_any(*values)
        boundaries = {info.offset for info in iter_envelopes(encoded)} | {len(encoded)}
        cut = data.draw(st.integers(min_value=1, max_value=len(encoded) - 1))
        if cut in boundaries:
            return

        try:
            decode_sequence(encoded[:cut])
        except DecodeError:
            pass
        else:
            raise AssertionError(f"prefix of {cut} bytes decoded")

    @given(values=st.lists(builtin_values, max_size=10))
    def test_iter_envelopes_matches(self, values: list) -> None:
        encoded = encode_any(*values)
        infos = list(iter_envelopes(encoded))

        assert [info.type_id for info in infos] == [to_serializable(v).type_id() for v in values]
        assert sum(8 + info.size for info in infos) == len(encoded)


class TestDynamicProperties:
    """Property-based tests for encode_any/decode_any."""

    @given(text=st.text(), number=int64s, flag=st.booleans())
    def test_native_slots_roundtrip(self, text: str, number: int, flag: bool) -> None:
        slots = Slot(str), Slot(int), Slot(bool)

        decode_any(encode_any(text, number, flag), *slots)

        assert [slot.value for slot in slots] == [text, number, flag]

    @given(payload=st.binary(max_size=7))
    def test_short_garbage_rejected(self, payload: bytes) -> None:
        """Test fewer than 8 non-empty bytes never decode."""
        if not payload:
            assert decode_sequence(payload) == []
            return
        try:
            decode_sequence(payload)
        except DecodeError as e:
            assert not isinstance(e, BufferUnderflowError)
        else:
            raise AssertionError("garbage decoded")

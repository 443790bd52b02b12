"""Unit tests for SerializableModel."""

from __future__ import annotations

from typing import Any, ClassVar

import pytest

from typedwire import (
    Bool,
    CountMismatchError,
    DecodeError,
    DeserializerRegistry,
    DuplicateRegistrationError,
    EncodeError,
    Float64,
    Int,
    Int32,
    SchemaError,
    SerializableModel,
    Slot,
    String,
    TypeMismatchError,
    UnregisteredTypeError,
    UnsupportedTypeError,
    copy,
    decode_any,
    decode_sequence,
    decode_with_type,
    default_registry,
    encode_any,
    encode_with_type,
)


class Reading(SerializableModel):
    """Sensor reading used across the model tests."""

    sensor: str
    value: float
    valid: bool = True

    typedwire_type_id: ClassVar[str] = "tests.models.Reading"


class Batch(SerializableModel):
    """Record with list, bytes, wrapper and nested fields."""

    name: str
    counts: list[int]
    weights: list[float]
    blob: bytes
    channel: Int32
    first: Reading

    typedwire_type_id: ClassVar[str] = "tests.models.Batch"


class Base(SerializableModel):
    """Abstract record: no type ID, never registered."""

    label: str


class Labelled(Base):
    typedwire_type_id: ClassVar[str] = "tests.models.Labelled"


def make_batch() -> Batch:
    return Batch(
        name="batch-1",
        counts=[1, 2, 3],
        weights=[0.5, 1.5],
        blob=b"\x00\x01",
        channel=Int32(7),
        first=Reading(sensor="depth", value=12.5),
    )


class TestEncodeDecode:
    """Test models round-trip through envelopes."""

    def test_simple_roundtrip(self) -> None:
        reading = Reading(sensor="depth", value=12.5, valid=False)

        decoded = decode_with_type(encode_with_type(reading))

        assert isinstance(decoded, Reading)
        assert decoded == reading

    def test_payload_is_sequence_of_fields(self) -> None:
        """Test the payload holds one wrapped value per field, in order."""
        reading = Reading(sensor="depth", value=12.5)

        assert decode_sequence(reading.encode()) == [
            String("depth"),
            Float64(12.5),
            Bool(True),
        ]

    def test_nested_roundtrip(self) -> None:
        batch = make_batch()

        decoded = decode_with_type(encode_with_type(batch))

        assert decoded == batch
        assert isinstance(decoded.first, Reading)
        assert type(decoded.channel) is Int32

    def test_empty_list_field(self) -> None:
        batch = make_batch().model_copy(update={"counts": [], "weights": []})

        decoded = decode_with_type(encode_with_type(batch))

        assert decoded.counts == []
        assert decoded.weights == []

    def test_type_id(self) -> None:
        assert Reading(sensor="a", value=1.0).type_id() == "tests.models.Reading"
        assert "tests.models.Reading" in default_registry

    def test_unsupported_field_value(self) -> None:
        """Test a field with no wrapper names the field in the error."""

        class WithNote(SerializableModel):
            note: str | None = None

            typedwire_type_id: ClassVar[str] = "tests.models.WithNote"
            typedwire_register: ClassVar[bool] = False

        with pytest.raises(UnsupportedTypeError, match="WithNote.note"):
            WithNote().encode()

    def test_field_out_of_range(self) -> None:
        class Wide(SerializableModel):
            number: int

            typedwire_type_id: ClassVar[str] = "tests.models.Wide"
            typedwire_register: ClassVar[bool] = False

        with pytest.raises(EncodeError, match="Wide.number"):
            Wide(number=1 << 70).encode()


class TestDecodeErrors:
    """Test malformed payloads for models."""

    def test_count_mismatch(self) -> None:
        with pytest.raises(CountMismatchError, match="Reading: count mismatch"):
            Reading.decode(encode_any("depth"))

    def test_validation_failure(self) -> None:
        """Test a field value that fails validation becomes a DecodeError."""
        with pytest.raises(DecodeError, match="Failed to construct Reading"):
            Reading.decode(encode_any("depth", "not a number", True))

    def test_envelope_names_type(self) -> None:
        envelope = encode_with_type(Reading(sensor="a", value=1.0))[:-1]

        with pytest.raises(DecodeError, match="decode 'tests.models.Reading'"):
            decode_with_type(envelope)


class TestRegistration:
    """Test class-creation registration."""

    def test_abstract_model(self) -> None:
        """Test models without a type ID are neither registered nor encodable."""
        assert Base.typedwire_type_id is None

        with pytest.raises(EncodeError, match="Base has no typedwire_type_id"):
            encode_with_type(Base(label="x"))

        with pytest.raises(SchemaError):
            Base.register()

    def test_concrete_subclass(self) -> None:
        value = Labelled(label="x")

        assert decode_with_type(encode_with_type(value)) == value

    def test_inherited_type_id(self) -> None:
        """Test a subclass cannot encode under its parent's type ID."""

        class Relabelled(Labelled):
            pass

        class Extended(Labelled):
            extra: int

        with pytest.raises(EncodeError, match="Relabelled inherits typedwire_type_id"):
            encode_with_type(Relabelled(label="x"))
        with pytest.raises(EncodeError, match="Extended inherits"):
            encode_any(Extended(label="x", extra=1))
        with pytest.raises(SchemaError):
            Relabelled.register()

    def test_class_as_field_value(self) -> None:
        """Test a model class stored in a field is rejected, not called."""

        class Holder(SerializableModel):
            kind: Any

            typedwire_type_id: ClassVar[str] = "tests.models.Holder"
            typedwire_register: ClassVar[bool] = False

        with pytest.raises(UnsupportedTypeError, match="Holder.kind"):
            Holder(kind=Reading).encode()

    def test_duplicate_type_id(self) -> None:
        with pytest.raises(DuplicateRegistrationError, match="tests.models.Reading"):

            class Impostor(SerializableModel):
                sensor: str

                typedwire_type_id: ClassVar[str] = "tests.models.Reading"

        assert default_registry.get("tests.models.Reading") == Reading.decode

    def test_non_string_type_id(self) -> None:
        with pytest.raises(SchemaError, match="must be a string"):

            class Numbered(SerializableModel):
                typedwire_type_id: ClassVar[Any] = 5

    def test_register_disabled(self) -> None:
        class Local(SerializableModel):
            label: str

            typedwire_type_id: ClassVar[str] = "tests.models.Local"
            typedwire_register: ClassVar[bool] = False

        assert "tests.models.Local" not in default_registry

    def test_injected_registry(self, registry: DeserializerRegistry) -> None:
        """Test registering into an explicit registry, nested values included."""

        class Point(SerializableModel):
            x: int
            y: int

            typedwire_type_id: ClassVar[str] = "tests.models.Point"
            typedwire_register: ClassVar[bool] = False

        Point.register(registry)
        data = encode_with_type(Point(x=1, y=-2))

        assert decode_with_type(data, registry=registry) == Point(x=1, y=-2)
        with pytest.raises(UnregisteredTypeError):
            decode_with_type(data)

        with pytest.raises(DuplicateRegistrationError):
            Point.register(registry)
        Point.register(registry, replace=True)


class TestDynamic:
    """Test models with encode_any/decode_any and copy."""

    def test_model_slot(self) -> None:
        data = encode_any(Reading(sensor="depth", value=1.0), 3)
        reading, count = Slot(Reading), Slot(int)

        decode_any(data, reading, count)

        assert reading.value == Reading(sensor="depth", value=1.0)
        assert count.value == 3

    def test_model_slot_mismatch(self) -> None:
        with pytest.raises(TypeMismatchError, match="expecting Reading but decoded Int"):
            decode_any(encode_any(Int(1)), Slot(Reading))

    def test_clone_is_deep(self) -> None:
        batch = make_batch()

        clone = copy(batch)
        clone.counts.append(4)

        assert clone is not batch
        assert batch.counts == [1, 2, 3]
        assert clone.first == batch.first

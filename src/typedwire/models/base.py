"""Base model class for user-defined Serializable records.

This module provides SerializableModel, a Pydantic BaseModel that implements
the Serializable capability from its declared fields and registers its own
Deserializer when the class is created.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, ClassVar, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from ..codec.dynamic import to_serializable
from ..codec.sequence import decode_sequence, encode_sequence
from ..exceptions import CountMismatchError, DecodeError, EncodeError, SchemaError, TypedwireError
from ..primitives import PRIMITIVES, Bool, Bytes, Float64, Float64Slice, Int, IntSlice, String
from ..registry import DeserializerRegistry, default_registry
from ..serializable import Serializable

M = TypeVar("M", bound="SerializableModel")

logger = logging.getLogger("typedwire.models")

# Field annotation -> wrapper used to encode that field's value.
FIELD_WRAPPERS: dict[Any, type] = {
    str: String,
    bytes: Bytes,
    bool: Bool,
    int: Int,
    float: Float64,
    list[int]: IntSlice,
    list[float]: Float64Slice,
}


class SerializableModel(BaseModel):
    """Base class for Serializable records.

    The payload of a model is a typedwire sequence of its field values in
    declaration order, so fields may be built-in values (str, bytes, bool,
    int, float, list[int], list[float]), primitive wrappers, or any other
    Serializable, including nested models.

    Options are configured as ClassVar attributes:

    Example:
        >>> from typing import ClassVar
        >>> class Reading(SerializableModel):
        ...     sensor: str
        ...     value: float
        ...
        ...     typedwire_type_id: ClassVar[str] = "example.Reading"
        >>> data = encode_with_type(Reading(sensor="depth", value=12.5))
        >>> decode_with_type(data)
        Reading(sensor='depth', value=12.5)

    Attributes:
        typedwire_type_id: Type identifier; models without one are abstract and
            are not registered. It is not inherited: a subclass of a concrete
            model must declare its own before it can be encoded
        typedwire_register: Register in the default registry when the class is
            created (default True). Registration fails with
            DuplicateRegistrationError if the type ID is already taken.
    """

    model_config = ConfigDict(
        # Lax validation, so decoded wrapper values coerce back into fields
        strict=False,
        # Allow arbitrary Serializable field types
        arbitrary_types_allowed=True,
        # Validate on assignment
        validate_assignment=True,
        # Forbid extra fields not defined in schema
        extra="forbid",
    )

    typedwire_type_id: ClassVar[str | None] = None
    typedwire_register: ClassVar[bool] = True

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        """Hook called once Pydantic has finished building a subclass.

        Registers the subclass's Deserializer if it declares its own type ID.
        """
        super().__pydantic_init_subclass__(**kwargs)

        if "typedwire_type_id" not in cls.__dict__ or cls.typedwire_type_id is None:
            return
        if not isinstance(cls.typedwire_type_id, str):
            raise SchemaError(
                f"{cls.__name__}.typedwire_type_id must be a string, "
                f"got {type(cls.typedwire_type_id).__name__}"
            )
        if cls.typedwire_register:
            cls.register()

    @classmethod
    def register(cls, registry: DeserializerRegistry | None = None, *, replace: bool = False) -> None:
        """Register this model's Deserializer.

        Args:
            registry: Registry to register in (default: default_registry). Nested
                values are decoded with the same registry.
            replace: Overwrite an existing entry instead of failing

        Raises:
            SchemaError: If the model has no type ID
            DuplicateRegistrationError: If the type ID is taken and replace is False
        """
        type_id = cls.__dict__.get("typedwire_type_id")
        if type_id is None:
            raise SchemaError(f"{cls.__name__} declares no typedwire_type_id. Cannot register.")

        if registry is None:
            registry = default_registry
            deserializer = cls.decode
        else:
            deserializer = functools.partial(cls.decode, registry=registry)

        if replace:
            registry.update(type_id, deserializer)
        else:
            registry.register(type_id, deserializer)
        logger.debug("Registered model %s as %r", cls.__name__, type_id)

    def type_id(self) -> str:
        cls = type(self)
        type_id = cls.__dict__.get("typedwire_type_id")
        if type_id is None:
            if cls.typedwire_type_id is not None:
                # an inherited ID belongs to the parent, whose fields may differ
                raise EncodeError(
                    f"{cls.__name__} inherits typedwire_type_id {cls.typedwire_type_id!r}; "
                    "subclasses must declare their own"
                )
            raise EncodeError(f"{cls.__name__} has no typedwire_type_id")
        return type_id

    def encode(self) -> bytes:
        """Encode the field values as a sequence, in declaration order.

        Raises:
            EncodeError: If a field value cannot be encoded
        """
        values: list[Serializable] = []
        for name, field in type(self).model_fields.items():
            value = getattr(self, name)
            try:
                values.append(_wrap_field(value, field.annotation))
            except TypedwireError as e:
                e.add_context(f"{type(self).__name__}.{name}")
                raise
            except ValueError as e:
                raise EncodeError(f"{type(self).__name__}.{name}: {e}") from e
        return encode_sequence(values)

    @classmethod
    def decode(cls: type[M], data: bytes, *, registry: DeserializerRegistry | None = None) -> M:
        """Rebuild a model from the payload produced by encode().

        Raises:
            CountMismatchError: If the payload has the wrong number of fields
            DecodeError: If a field fails to decode or validate
        """
        values = decode_sequence(data, registry=registry)
        names = list(cls.model_fields)
        if len(values) != len(names):
            error = CountMismatchError(len(names), len(values))
            error.add_context(cls.__name__)
            raise error

        fields = {
            name: _unwrap(value, cls.model_fields[name].annotation)
            for name, value in zip(names, values)
        }
        try:
            return cls(**fields)
        except ValidationError as e:
            raise DecodeError(f"Failed to construct {cls.__name__}: {e}") from e

    def clone(self: M) -> M:
        """Deep copy, used by typedwire.copy()."""
        return self.model_copy(deep=True)


def _wrap_field(value: Any, annotation: Any) -> Serializable:
    if isinstance(value, Serializable) and not isinstance(value, type):
        return value
    wrapper = FIELD_WRAPPERS.get(annotation)
    if wrapper is not None:
        return wrapper(value)
    return to_serializable(value)


def _unwrap(value: Serializable, annotation: Any) -> Any:
    try:
        if isinstance(value, annotation):
            return value
    except TypeError:
        # not a class, e.g. list[int] or a Union
        pass
    if isinstance(value, PRIMITIVES):
        return value.root  # type: ignore[attr-defined]
    return value

"""Field entity describing one attribute of a collection schema.

Fields are created by the constructors in
``mimsy.domain.services.field_catalog`` and are immutable afterwards.
Constraints are pydantic models so that known keys are validated while
unknown keys pass through to the exported schema untouched.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic import Field as PydanticField
from pydantic.alias_generators import to_camel

from mimsy.domain.entities.builtins import is_builtin

# Only fields built by the catalog carry this sentinel.
_FIELD_MARKER = object()


class FieldType(str, Enum):
    """Supported field types for collection schemas."""

    STRING = "string"
    RICH_TEXT = "rich_text"
    CHECKBOX = "checkbox"
    DATE_TIME = "date_time"
    DATE = "date"
    NUMBER = "number"
    EMAIL = "email"
    RELATION = "relation"
    MULTI_RELATION = "multi_relation"


RELATION_TYPES = frozenset({FieldType.RELATION, FieldType.MULTI_RELATION})


class Constraints(BaseModel):
    """Constraints shared by every field type.

    Keys are exported in camelCase. Unrecognized keys are kept as given.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        frozen=True,
    )

    required: bool | None = None

    def to_options(self) -> dict[str, Any]:
        """Dump the constraints the way they appear in an exported schema."""
        return self.model_dump(by_alias=True, exclude_none=True)


class StringConstraints(Constraints):
    """Constraints for short string fields."""

    min_length: int | None = PydanticField(default=None, ge=0)
    max_length: int | None = PydanticField(default=None, ge=0)


class NumberConstraints(Constraints):
    """Constraints for number fields."""

    min: int | float | None = None
    max: int | float | None = None


CONSTRAINTS_BY_TYPE: dict[FieldType, type[Constraints]] = {
    FieldType.STRING: StringConstraints,
    FieldType.NUMBER: NumberConstraints,
}


def constraints_for(field_type: FieldType, value: Any) -> Constraints | None:
    """Validate a constraints argument into the model for ``field_type``.

    Args:
        field_type: The type of the field being declared.
        value: None, a mapping (camelCase or snake_case keys) or a
            ``Constraints`` instance.

    Returns:
        The validated constraints model, or None when no constraints were given.

    Raises:
        TypeError: If value is neither a mapping nor a Constraints instance.
        pydantic.ValidationError: If a known constraint has an invalid value.
    """
    if value is None:
        return None

    model = CONSTRAINTS_BY_TYPE.get(field_type, Constraints)
    if isinstance(value, model):
        return value
    if isinstance(value, Constraints):
        return model.model_validate(value.to_options())
    if isinstance(value, Mapping):
        return model.model_validate(dict(value))

    raise TypeError(
        f"constraints must be a mapping or Constraints instance, got {type(value).__name__}"
    )


@dataclass(frozen=True)
class Field:
    """A typed attribute of a collection schema.

    Attributes:
        type: The field type tag.
        label: Optional display name.
        description: Optional human readable description.
        constraints: Optional type-specific constraints.
        relates_to: Target collection or builtin (relation types only).
        extra: Unrecognized declaration options, exported as-is.
    """

    type: FieldType
    label: str | None = None
    description: str | None = None
    constraints: Constraints | None = None
    relates_to: Any = None
    extra: Mapping[str, Any] = field(default_factory=dict)
    _marker: object = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Validate the relation invariant."""
        if self.type in RELATION_TYPES and self.relates_to is None:
            raise ValueError(f"A {self.type.value} field requires relates_to")
        if self.type not in RELATION_TYPES and self.relates_to is not None:
            raise ValueError(f"A {self.type.value} field cannot relate to another collection")
        if self.relates_to is not None and not _is_relation_target(self.relates_to):
            raise TypeError(
                "relates_to must be a collection, a global or a builtin, "
                f"got {type(self.relates_to).__name__}"
            )

    @property
    def is_relation(self) -> bool:
        return self.type in RELATION_TYPES


def is_field(value: Any) -> bool:
    """Check whether a value is a field built by the field catalog."""
    return isinstance(value, Field) and value._marker is _FIELD_MARKER


def _is_relation_target(value: Any) -> bool:
    # Imported here: collection.py imports this module.
    from mimsy.domain.entities.collection import Collection

    return is_builtin(value) or isinstance(value, Collection)

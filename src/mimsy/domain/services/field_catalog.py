"""Field constructors used in collection declarations.

Example:
    from mimsy import builtins, collection, fields

    posts = collection("posts", {
        "title": fields.short_string(constraints={"minLength": 5}),
        "author": fields.relation(relates_to=builtins.User),
        "cover_image": fields.media(),
    })

Every constructor accepts ``label``, ``description`` and ``constraints``.
Any other keyword is kept on the field and exported unchanged, so its value
must be JSON serializable. Calling a constructor never touches the registry.
"""

import json
from typing import Any

from mimsy.domain.entities.builtins import Media
from mimsy.domain.entities.field import (
    _FIELD_MARKER,
    Field,
    FieldType,
    constraints_for,
)


def _ensure_json_safe(option: str, value: Any) -> None:
    """Reject option values that cannot be written to the schema file."""
    try:
        json.dumps(value)
    except (TypeError, ValueError) as e:
        raise TypeError(f"Field option '{option}' is not JSON serializable: {e}") from e


def _build(
    field_type: FieldType,
    label: str | None,
    description: str | None,
    constraints: Any,
    extra: dict[str, Any],
    relates_to: Any = None,
) -> Field:
    validated = constraints_for(field_type, constraints)
    _ensure_json_safe("constraints", validated.to_options() if validated is not None else {})
    for key, value in extra.items():
        _ensure_json_safe(key, value)

    return Field(
        type=field_type,
        label=label,
        description=description,
        constraints=validated,
        relates_to=relates_to,
        extra=extra,
        _marker=_FIELD_MARKER,
    )


def short_string(
    *,
    label: str | None = None,
    description: str | None = None,
    constraints: Any = None,
    **extra: Any,
) -> Field:
    """Declare a short string field (``minLength``/``maxLength`` constraints)."""
    return _build(FieldType.STRING, label, description, constraints, extra)


def rich_text(
    *,
    label: str | None = None,
    description: str | None = None,
    constraints: Any = None,
    **extra: Any,
) -> Field:
    return _build(FieldType.RICH_TEXT, label, description, constraints, extra)


def checkbox(
    *,
    label: str | None = None,
    description: str | None = None,
    constraints: Any = None,
    **extra: Any,
) -> Field:
    return _build(FieldType.CHECKBOX, label, description, constraints, extra)


def date_time(
    *,
    label: str | None = None,
    description: str | None = None,
    constraints: Any = None,
    **extra: Any,
) -> Field:
    return _build(FieldType.DATE_TIME, label, description, constraints, extra)


def date(
    *,
    label: str | None = None,
    description: str | None = None,
    constraints: Any = None,
    **extra: Any,
) -> Field:
    return _build(FieldType.DATE, label, description, constraints, extra)


def number(
    *,
    label: str | None = None,
    description: str | None = None,
    constraints: Any = None,
    **extra: Any,
) -> Field:
    """Declare a number field (``min``/``max`` constraints)."""
    return _build(FieldType.NUMBER, label, description, constraints, extra)


def email(
    *,
    label: str | None = None,
    description: str | None = None,
    constraints: Any = None,
    **extra: Any,
) -> Field:
    return _build(FieldType.EMAIL, label, description, constraints, extra)


def relation(
    *,
    relates_to: Any,
    label: str | None = None,
    description: str | None = None,
    constraints: Any = None,
    **extra: Any,
) -> Field:
    """Declare a to-one relation.

    Args:
        relates_to: The target collection, global or builtin (``User``, ``Media``).

    The raw API record stores the related id under ``<field>_id``.
    """
    return _build(FieldType.RELATION, label, description, constraints, extra, relates_to)


def multi_relation(
    *,
    relates_to: Any,
    label: str | None = None,
    description: str | None = None,
    constraints: Any = None,
    **extra: Any,
) -> Field:
    """Declare a to-many relation.

    Multi relations are exported like relations, but records are not
    rehydrated: ``post_process`` yields ``MULTI_RELATION_UNSUPPORTED`` for them.
    """
    return _build(FieldType.MULTI_RELATION, label, description, constraints, extra, relates_to)


def media(
    *,
    label: str | None = None,
    description: str | None = None,
    constraints: Any = None,
    **extra: Any,
) -> Field:
    """Shortcut for ``relation(relates_to=Media, ...)``."""
    return relation(
        relates_to=Media,
        label=label,
        description=description,
        constraints=constraints,
        **extra,
    )

"""Rehydrate raw API records against a collection's declared schema.

Relation fields arrive from the content API as ``<field>_id`` columns; they
are turned into ``UnfetchedRelation`` handles that
``mimsy.infrastructure.client.fetch_relation`` can resolve later.
"""

from collections.abc import Mapping
from typing import Any

from mimsy.domain.entities.collection import Collection
from mimsy.domain.entities.field import FieldType, is_field
from mimsy.domain.entities.relation import UnfetchedRelation

# Placeholder value for to-many relations, which are not rehydrated yet
MULTI_RELATION_UNSUPPORTED = "Unsupported type"


def relation_key(field_name: str) -> str:
    """Return the raw record key holding the id for a relation field."""
    return f"{field_name}_id"


def post_process(collection: Collection, data: Any) -> dict[str, Any]:
    """Map a raw API record onto the collection's schema.

    Private fields are skipped, like in exported schemas. Fields missing from
    the record come out as None. Values of non-relation fields are passed
    through without coercion.

    Args:
        collection: The collection the record belongs to.
        data: Decoded JSON record. Anything but a mapping is treated as empty.

    Returns:
        A dict keyed by the schema's public field names. A relation field
        holds an ``UnfetchedRelation`` or None when the record has no id for it.
    """
    record: Mapping[str, Any] = data if isinstance(data, Mapping) else {}

    if not isinstance(collection.schema, Mapping):
        return dict(record)

    processed: dict[str, Any] = {}
    for key, field in collection.public_fields().items():
        if not is_field(field):
            continue

        if field.type is FieldType.MULTI_RELATION:
            processed[key] = MULTI_RELATION_UNSUPPORTED
        elif field.type is FieldType.RELATION:
            relation_id = record.get(relation_key(key))
            if relation_id is None:
                processed[key] = None
            else:
                processed[key] = UnfetchedRelation(target=field.relates_to, id=str(relation_id))
        else:
            processed[key] = record.get(key)

    return processed

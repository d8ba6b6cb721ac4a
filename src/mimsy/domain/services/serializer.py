"""Schema serializer - turns registered collections into a JSON document.

The exported document is what ``mimsy.schema.json`` contains:

    {
      "collections": [
        {"name": "posts", "isGlobal": false,
         "schema": {"author": {"type": "relation", "relatesTo": "<builtins.user>"}}}
      ],
      "generatedAt": "2025-08-11T07:55:00.170Z"
    }

Private fields (names starting with ``_``) are never exported. Relation
targets are written as their name. Options that end up empty are omitted so
that unchanged declarations produce identical output.
"""

import json
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from mimsy.core.logging import get_logger
from mimsy.domain.entities.builtins import is_builtin
from mimsy.domain.entities.collection import Collection, Schema
from mimsy.domain.entities.field import Field, is_field
from mimsy.domain.services.registry import CollectionRegistry, default_registry

logger = get_logger(__name__)


def serialize_field(field: Field) -> dict[str, Any]:
    """Serialize a single field.

    Returns:
        ``{"type": ..., "relatesTo"?: ..., "options"?: {...}}``
    """
    result: dict[str, Any] = {"type": field.type.value}

    if field.relates_to is not None:
        result["relatesTo"] = field.relates_to.name

    options: dict[str, Any] = {}
    if field.label is not None:
        options["label"] = field.label
    if field.description is not None:
        options["description"] = field.description
    if field.constraints is not None:
        options["constraints"] = field.constraints.to_options()
    options.update(field.extra)

    if options:
        result["options"] = options

    return result


def serialize_schema(schema: Schema) -> dict[str, Any]:
    """Serialize a collection schema.

    Builtin markers serialize to ``{"type": "builtin", "name": ...}``.
    Anything that is not a mapping degrades to an empty schema.
    """
    if is_builtin(schema):
        return {"type": "builtin", "name": schema.name}

    if not isinstance(schema, Mapping):
        logger.warning(
            "Schema is not a field mapping, exporting it as empty",
            schema_type=type(schema).__name__,
        )
        return {}

    serialized: dict[str, Any] = {}
    for key, field in schema.items():
        if not isinstance(key, str):
            logger.warning("Skipping field with a non-string name", field=repr(key))
            continue
        if key.startswith("_"):
            continue
        if not is_field(field):
            logger.warning("Skipping value that is not a field", field=key)
            continue
        serialized[key] = serialize_field(field)
    return serialized


def serialize_collection(entry: Collection) -> dict[str, Any]:
    return {
        "name": entry.name,
        "schema": serialize_schema(entry.schema),
        "isGlobal": bool(entry.is_global),
    }


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def export_schema(registry: CollectionRegistry | None = None) -> dict[str, Any]:
    """Export every registered collection as a JSON-safe document.

    Args:
        registry: Registry to export. Defaults to the process-wide registry.

    Returns:
        ``{"collections": [...], "generatedAt": <ISO-8601>}``, collections in
        registration order.
    """
    registry = registry if registry is not None else default_registry
    collections = [serialize_collection(entry) for entry in registry.get_all_collections()]

    logger.debug("Exported schema", collections=len(collections))

    return {
        "collections": collections,
        "generatedAt": _timestamp(),
    }


def export_schema_json(registry: CollectionRegistry | None = None, pretty: bool = False) -> str:
    """Export the registry as a JSON string."""
    document = export_schema(registry)
    if pretty:
        return json.dumps(document, indent=2)
    return json.dumps(document)

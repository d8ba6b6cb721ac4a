"""Domain services for Mimsy.

Services hold the registry, the schema serializer and record
post-processing. They have no dependencies on the CLI or HTTP client.
"""

from mimsy.domain.services import field_catalog
from mimsy.domain.services.post_processor import MULTI_RELATION_UNSUPPORTED, post_process
from mimsy.domain.services.registry import (
    CollectionRegistry,
    clear_registry,
    collection,
    default_registry,
    get_all_collections,
    get_collection,
    global_,
    register_collection,
    register_global,
)
from mimsy.domain.services.serializer import (
    export_schema,
    export_schema_json,
    serialize_field,
    serialize_schema,
)

__all__ = [
    "CollectionRegistry",
    "MULTI_RELATION_UNSUPPORTED",
    "clear_registry",
    "collection",
    "default_registry",
    "export_schema",
    "export_schema_json",
    "field_catalog",
    "get_all_collections",
    "get_collection",
    "global_",
    "post_process",
    "register_collection",
    "register_global",
    "serialize_field",
    "serialize_schema",
]

"""Mimsy - declare content collections and export them as a JSON schema.

Example:
    from mimsy import builtins, collection, export_schema, fields

    posts = collection("posts", {
        "title": fields.short_string(),
        "author": fields.relation(relates_to=builtins.User),
    })
    document = export_schema()
"""

__version__ = "0.1.0"

from mimsy.core.exceptions import (
    CollectionImportError,
    MimsyError,
    ProjectNotFoundError,
    ReservedNameError,
    UnknownBuiltinError,
)
from mimsy.domain.entities import (
    Collection,
    Field,
    FieldType,
    Global,
    Media,
    UnfetchedRelation,
    User,
    builtins,
    is_builtin,
)
from mimsy.domain.services import field_catalog as fields
from mimsy.domain.services.post_processor import MULTI_RELATION_UNSUPPORTED, post_process
from mimsy.domain.services.registry import (
    CollectionRegistry,
    clear_registry,
    collection,
    get_all_collections,
    get_collection,
    global_,
)
from mimsy.domain.services.serializer import export_schema, export_schema_json
from mimsy.infrastructure.client import MimsyClient, fetch_relation

__all__ = [
    "Collection",
    "CollectionImportError",
    "CollectionRegistry",
    "Field",
    "FieldType",
    "Global",
    "MULTI_RELATION_UNSUPPORTED",
    "Media",
    "MimsyClient",
    "MimsyError",
    "ProjectNotFoundError",
    "ReservedNameError",
    "UnfetchedRelation",
    "UnknownBuiltinError",
    "User",
    "__version__",
    "builtins",
    "clear_registry",
    "collection",
    "export_schema",
    "export_schema_json",
    "fetch_relation",
    "fields",
    "get_all_collections",
    "get_collection",
    "global_",
    "is_builtin",
    "post_process",
]

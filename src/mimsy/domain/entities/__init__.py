"""Domain entities for Mimsy.

Entities are plain Python objects describing declared content models.
They have no dependencies on the registry, the CLI or the HTTP client.
"""

from mimsy.domain.entities.builtins import (
    BUILTINS,
    MEDIA_NAME,
    USER_NAME,
    Builtin,
    Media,
    User,
    get_builtin,
    is_builtin,
)
from mimsy.domain.entities.collection import RESERVED_NAMES, Collection, Global, Schema
from mimsy.domain.entities.field import (
    Constraints,
    Field,
    FieldType,
    NumberConstraints,
    StringConstraints,
    is_field,
)
from mimsy.domain.entities.relation import UnfetchedRelation

__all__ = [
    "BUILTINS",
    "Builtin",
    "Collection",
    "Constraints",
    "Field",
    "FieldType",
    "Global",
    "MEDIA_NAME",
    "Media",
    "NumberConstraints",
    "RESERVED_NAMES",
    "Schema",
    "StringConstraints",
    "USER_NAME",
    "UnfetchedRelation",
    "User",
    "get_builtin",
    "is_builtin",
    "is_field",
]

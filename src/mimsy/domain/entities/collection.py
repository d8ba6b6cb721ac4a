"""Collection and Global entities.

A collection is a named, list-backed content type; a global is a singleton
resource such as site settings. Both hold a schema mapping field names to
fields. Construction does not register anything: use ``collection()`` or
``global_()`` from ``mimsy.domain.services.registry`` for that.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union

from mimsy.domain.entities.builtins import Builtin
from mimsy.domain.entities.field import Field

Schema = Union[Mapping[str, Field], Builtin]

# Names that collide with resources owned by the content API
RESERVED_NAMES = frozenset({
    "user",
    "media",
    "collection",
    "cron_locks",
    "session",
    "sync_status",
})


@dataclass(frozen=True, eq=False)
class Collection:
    """Collection entity holding a named schema.

    Attributes:
        name: Collection name (registry key and API path segment).
        schema: Mapping of field name to field.
        is_global: Whether this entry is a singleton global.
    """

    name: str
    schema: Schema
    is_global: bool = False

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Collection name is required")

    def public_fields(self) -> dict[str, Any]:
        """Return the schema entries whose names are strings and not private."""
        if not isinstance(self.schema, Mapping):
            return {}
        return {
            key: value
            for key, value in self.schema.items()
            if isinstance(key, str) and not key.startswith("_")
        }


@dataclass(frozen=True, eq=False)
class Global(Collection):
    """A singleton content type such as site settings."""

    is_global: bool = True

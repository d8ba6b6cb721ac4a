"""Collection registry - process-wide store of declared schemas.

Declaration modules call ``collection()`` and ``global_()``, which register
the new entry in ``default_registry`` as a side effect. The CLI loads those
modules and then exports whatever was registered.

Re-declaring a name logs a warning and replaces the previous entry, so a
collections module can be re-imported during development. Tooling that
imports several independent modules in one process (tests, the CLI with
``--clear``) should call ``clear_registry()`` between imports.
"""

from collections.abc import Iterator

from mimsy.core.exceptions import ReservedNameError
from mimsy.core.logging import get_logger
from mimsy.domain.entities.collection import (
    RESERVED_NAMES,
    Collection,
    Global,
    Schema,
)

logger = get_logger(__name__)


class CollectionRegistry:
    """Ordered mapping of names to registered collections and globals.

    Iteration follows registration order. Overwriting a name keeps its
    original position, which keeps exported schemas stable for diffing.

    Example:
        registry = CollectionRegistry()
        registry.register_collection("posts", {"title": fields.short_string()})
        registry.get_collection("posts")  # -> Collection(name="posts", ...)
    """

    def __init__(self) -> None:
        self._entries: dict[str, Collection] = {}

    def register(self, entry: Collection) -> Collection:
        """Register a collection or global entry.

        Args:
            entry: The entry to register.

        Returns:
            The registered entry.

        Raises:
            ReservedNameError: If the entry's name is reserved.
        """
        if entry.name in RESERVED_NAMES:
            raise ReservedNameError(entry.name)

        if entry.name in self._entries:
            logger.warning(
                "Collection already registered, overwriting",
                collection=entry.name,
                is_global=entry.is_global,
            )
        else:
            logger.debug(
                "Registered collection",
                collection=entry.name,
                is_global=entry.is_global,
            )

        self._entries[entry.name] = entry
        return entry

    def register_collection(self, name: str, schema: Schema) -> Collection:
        """Create and register a collection."""
        return self.register(Collection(name=name, schema=schema))

    def register_global(self, name: str, schema: Schema) -> Global:
        """Create and register a global."""
        entry = Global(name=name, schema=schema)
        self.register(entry)
        return entry

    def get_all_collections(self) -> list[Collection]:
        """Return all collections and globals in registration order."""
        return list(self._entries.values())

    def get_collection(self, name: str) -> Collection | None:
        """Return the entry registered under ``name``, or None."""
        return self._entries.get(name)

    def clear(self) -> None:
        """Remove every entry."""
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[Collection]:
        return iter(self.get_all_collections())


# Process-wide registry used by declaration modules and the CLI
default_registry = CollectionRegistry()


def register_collection(name: str, schema: Schema) -> Collection:
    return default_registry.register_collection(name, schema)


def register_global(name: str, schema: Schema) -> Global:
    return default_registry.register_global(name, schema)


def collection(name: str, schema: Schema) -> Collection:
    """Declare a collection and register it.

    Args:
        name: Collection name, also used as the API path segment.
        schema: Mapping of field name to field.

    Returns:
        The registered collection, usable as a relation target.

    Raises:
        ReservedNameError: If the name is reserved by the content API.
    """
    return register_collection(name, schema)


def global_(name: str, schema: Schema) -> Global:
    """Declare a global (singleton) content type and register it.

    Raises:
        ReservedNameError: If the name is reserved by the content API.
    """
    return register_global(name, schema)


def get_all_collections() -> list[Collection]:
    return default_registry.get_all_collections()


def get_collection(name: str) -> Collection | None:
    return default_registry.get_collection(name)


def clear_registry() -> None:
    """Empty the process-wide registry."""
    default_registry.clear()

"""Exceptions raised by the Mimsy SDK."""


class MimsyError(Exception):
    """Base class for all Mimsy errors."""


class ReservedNameError(MimsyError, ValueError):
    """Raised when a collection or global is declared with a reserved name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f'"{name}" is a reserved name and cannot be used for a collection or global'
        )


class UnknownBuiltinError(MimsyError, LookupError):
    """Raised when a relation points at a builtin the SDK does not know."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown builtin type: {name}")


class ProjectNotFoundError(MimsyError):
    """Raised when no Mimsy project can be located from a directory."""


class CollectionImportError(MimsyError):
    """Raised when a collections file cannot be loaded."""

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        super().__init__(f"Failed to import collections from {path}: {message}")

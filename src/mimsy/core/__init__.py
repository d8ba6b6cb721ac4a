"""Core Mimsy utilities.

This module exports configuration, logging and the exception hierarchy.
"""

from mimsy.core.config import Settings, get_settings
from mimsy.core.exceptions import (
    CollectionImportError,
    MimsyError,
    ProjectNotFoundError,
    ReservedNameError,
    UnknownBuiltinError,
)
from mimsy.core.logging import LoggingContext, configure_logging, get_logger

__all__ = [
    "CollectionImportError",
    "LoggingContext",
    "MimsyError",
    "ProjectNotFoundError",
    "ReservedNameError",
    "Settings",
    "UnknownBuiltinError",
    "configure_logging",
    "get_logger",
    "get_settings",
]

"""Project discovery and collection module loading."""

from mimsy.infrastructure.project.loader import load_collections
from mimsy.infrastructure.project.locator import (
    ProjectConfig,
    locate_project,
    read_project_config,
)

__all__ = [
    "ProjectConfig",
    "load_collections",
    "locate_project",
    "read_project_config",
]

"""Locate the Mimsy project enclosing a directory.

Starting from a directory and walking up:

1. A ``mimsy.config.json`` with a string ``basePath`` wins; the base path is
   resolved relative to the directory holding the config file.
2. Otherwise a ``mimsy.schema.json`` marks the current directory as the root.
3. A ``.git`` entry (repository root) or the filesystem root ends the search.
"""

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from mimsy.core.config import get_settings
from mimsy.core.exceptions import ProjectNotFoundError
from mimsy.core.logging import get_logger

logger = get_logger(__name__)


class ProjectConfig(BaseModel):
    """Contents of ``mimsy.config.json``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    base_path: str = Field(..., alias="basePath")


def read_project_config(path: Path) -> ProjectConfig | None:
    """Read a project config file.

    Returns:
        The parsed config, or None if the file is malformed (a warning is logged).
    """
    try:
        return ProjectConfig.model_validate(json.loads(path.read_text(encoding="utf-8")))
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        logger.warning("Ignoring invalid project config", path=str(path), error=str(e))
        return None


def locate_project(start: str | Path | None = None) -> Path:
    """Return the root directory of the project containing ``start``.

    Args:
        start: Directory to start from. Defaults to the current directory.

    Raises:
        ProjectNotFoundError: If a git repository root or the filesystem root
            is reached first.
    """
    settings = get_settings()
    current = Path(start).resolve() if start is not None else Path.cwd()

    while True:
        config_path = current / settings.config_file
        if config_path.is_file():
            config = read_project_config(config_path)
            if config is not None:
                return (current / config.base_path).resolve()

        if (current / settings.schema_file).is_file():
            return current

        if (current / ".git").exists():
            raise ProjectNotFoundError("No mimsy project found (reached git repository root)")

        parent = current.parent
        if parent == current:
            raise ProjectNotFoundError("No mimsy project found (reached filesystem root)")
        current = parent

"""Load user-authored collection modules.

A collections module declares content types at import time by calling
``collection()``/``global_()``; executing it is what fills the registry.
"""

import importlib.util
import sys
import uuid
from pathlib import Path
from types import ModuleType

from mimsy.core.exceptions import CollectionImportError
from mimsy.core.logging import get_logger

logger = get_logger(__name__)


def load_collections(path: str | Path) -> ModuleType:
    """Execute a Python collections file.

    The module is loaded under a unique name, so loading the same file twice
    runs its declarations twice (and the registry warns about overwrites
    unless it was cleared in between).

    Args:
        path: Path to the collections file.

    Returns:
        The executed module.

    Raises:
        CollectionImportError: If the file is missing, not a Python module,
            or raises while executing.
    """
    file_path = Path(path).resolve()

    if not file_path.is_file():
        raise CollectionImportError(str(file_path), "file not found")

    module_name = f"mimsy_collections_{uuid.uuid4().hex[:12]}"
    spec = importlib.util.spec_from_file_location(module_name, file_path)
    if spec is None or spec.loader is None:
        raise CollectionImportError(str(file_path), "not a Python module")

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module

    logger.info("Importing collections", path=str(file_path))
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        raise CollectionImportError(str(file_path), str(e)) from e
    finally:
        sys.modules.pop(module_name, None)

    return module

"""Dependency manifest loading."""

import json
import logging
from pathlib import Path

from .contracts import ManifestError
from .walker import ensure_parent

logger = logging.getLogger(__name__)

VALUES_KEY = "values"


def load(path: Path) -> list[str]:
    """Return the dependency ids listed in the manifest at path.

    A missing manifest is created holding an empty list. Failing to create
    it is logged and treated as an empty list.

    Raises:
        ManifestError: If the manifest exists but is not a JSON object with
            a list of strings under "values".
    """
    path = Path(path)
    if not path.exists():
        _create_empty(path)
        return []

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestError(f"Failed to read manifest {path}: {e}") from e

    # Older scaffolds created the manifest as a zero-byte file
    if not text.strip():
        return []

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ManifestError(f"Invalid JSON in manifest {path}: {e}") from e

    if not isinstance(data, dict) or VALUES_KEY not in data:
        raise ManifestError(f"Manifest {path} has no '{VALUES_KEY}' field")

    values = data[VALUES_KEY]
    if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
        raise ManifestError(f"Manifest field '{VALUES_KEY}' must be a list of strings")

    return list(values)


def _create_empty(path: Path) -> None:
    try:
        ensure_parent(path)
        path.write_text(json.dumps({VALUES_KEY: []}, indent=2), encoding="utf-8")
        logger.info(f"Created empty dependency manifest at {path}")
    except OSError as e:
        logger.warning(f"Failed to create config file {path}: {e}")

"""Cleanup of the output tree and relocation of compiled artifacts."""

import logging
import shutil
from pathlib import Path

from .contracts import RelocationReport
from .walker import any_path, collect, ensure_parent, has_suffix, walk

logger = logging.getLogger(__name__)


def cleanup(output_root: Path) -> list[str]:
    """Delete the output tree, files before their directories.

    Returns a message per path that could not be removed. A missing
    output root is not an error.
    """
    output_root = Path(output_root)
    failures: list[str] = []

    def fail(path: Path, error: OSError) -> None:
        logger.warning(f"Failed to cleanup {path}: {error}")
        failures.append(f"{path}: {error}")

    def delete(path: Path) -> None:
        try:
            if path.is_dir() and not path.is_symlink():
                path.rmdir()
            else:
                path.unlink()
        except OSError as e:
            fail(path, e)

    walk(output_root, any_path, delete, on_error=fail)
    return failures


def relocate(source_root: Path, output_root: Path, extension: str = ".class") -> RelocationReport:
    """Move every artifact under source_root to the same relative path under output_root."""
    source_root = Path(source_root)
    output_root = Path(output_root)
    report = RelocationReport()

    for path in collect(source_root, has_suffix(extension)):
        relative = path.relative_to(source_root)
        try:
            move(path, output_root / relative)
        except OSError as e:
            logger.warning(f"Failed to move path from {path} to {output_root / relative}: {e}")
            report.failures[relative.as_posix()] = str(e)
        else:
            report.moved.append(relative.as_posix())

    return report


def move(source: Path, destination: Path) -> None:
    """Move source to destination, replacing any file already there."""
    ensure_parent(destination)
    if destination.exists() or destination.is_symlink():
        destination.unlink()
    shutil.move(str(source), str(destination))

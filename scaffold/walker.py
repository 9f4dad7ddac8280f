"""Directory walking shared by discovery, cleanup and relocation."""

import logging
from pathlib import Path
from typing import Callable, Iterator

Predicate = Callable[[Path], bool]
Action = Callable[[Path], None]
ErrorHandler = Callable[[Path, OSError], None]

logger = logging.getLogger(__name__)


def iter_tree(root: Path, on_error: ErrorHandler | None = None) -> Iterator[Path]:
    """Yield every path under root in post-order, root last.

    Children of a directory are listed in sorted name order before any of
    them is yielded, so callers may delete what they receive. Symlinked
    directories are yielded as leaves and never followed. A missing root
    yields nothing.
    """
    if not root.exists() and not root.is_symlink():
        return
    if root.is_symlink() or not root.is_dir():
        yield root
        return

    try:
        children = sorted(root.iterdir())
    except OSError as e:
        if on_error is None:
            raise
        on_error(root, e)
        children = []

    for child in children:
        yield from iter_tree(child, on_error)
    yield root


def walk(
    root: Path,
    predicate: Predicate,
    action: Action,
    on_error: ErrorHandler | None = None,
) -> None:
    """Apply action to every path under root that matches predicate."""
    for path in iter_tree(root, on_error):
        if predicate(path):
            action(path)


def collect(root: Path, predicate: Predicate) -> list[Path]:
    """Return every path under root that matches predicate, in walk order."""
    found: list[Path] = []
    walk(root, predicate, found.append)
    return found


def has_suffix(extension: str) -> Predicate:
    """Predicate matching regular files whose name ends with extension."""
    def matches(path: Path) -> bool:
        return path.name.endswith(extension) and path.is_file()
    return matches


def any_path(path: Path) -> bool:
    return True


def ensure_parent(path: Path) -> None:
    """Create the parent directory chain of path if it is missing."""
    parent = path.parent
    if not parent.exists():
        parent.mkdir(parents=True, exist_ok=True)
        logger.debug(f"Created parent directory {parent}")

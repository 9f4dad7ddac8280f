"""Classpath construction from manifest dependencies."""

import os
from pathlib import Path

from .walker import collect, has_suffix

QUOTE = '"'


def find_archives(entries: list[str], modules_root: Path, extension: str = ".jar") -> list[Path]:
    """Absolute paths of every archive under each entry's module directory.

    Entries are visited in manifest order; a missing module directory
    contributes nothing.
    """
    archives: list[Path] = []
    for entry in entries:
        module_dir = Path(modules_root) / entry
        archives.extend(p.absolute() for p in collect(module_dir, has_suffix(extension)))
    return archives


def resolve(entries: list[str], modules_root: Path, extension: str = ".jar") -> str:
    """Join the archives for entries into one quoted classpath token.

    An empty entry list gives a pair of quotes with nothing between them.
    """
    archives = find_archives(entries, modules_root, extension)
    return QUOTE + os.pathsep.join(str(p) for p in archives) + QUOTE

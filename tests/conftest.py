"""Shared fixtures: a throwaway project tree and a stand-in compiler."""

import sys
from pathlib import Path

import pytest

from scaffold.config import BuildConfig

# Compiles every *.src argument into a sibling *.out file. Sources containing
# "ERROR" are reported on stderr instead. The argv and cwd it saw are written
# to ../last_command.json so tests can inspect the command line.
FAKE_COMPILER = '''
import json
import os
import sys
from pathlib import Path

args = sys.argv[1:]
classpath = None
if args[:1] == ["-cp"]:
    classpath = args[1]
    args = args[2:]

Path("..", "last_command.json").write_text(
    json.dumps({"argv": sys.argv[1:], "classpath": classpath, "cwd": os.getcwd()}),
    encoding="utf-8",
)

for name in args:
    source = Path(name)
    text = source.read_text(encoding="utf-8")
    if "ERROR" in text:
        sys.stderr.write(f"{name}:1: error: cannot compile\\n")
        continue
    source.with_suffix(".out").write_text("compiled:" + text, encoding="utf-8")
'''


def write_script(directory: Path, name: str, body: str) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    script = directory / name
    script.write_text(body, encoding="utf-8")
    return script


@pytest.fixture
def fake_compiler(tmp_path: Path) -> Path:
    return write_script(tmp_path / "tools", "fakec.py", FAKE_COMPILER)


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Project root with an empty source tree."""
    root = tmp_path / "project"
    (root / "src").mkdir(parents=True)
    return root


@pytest.fixture
def config(project: Path, fake_compiler: Path) -> BuildConfig:
    return BuildConfig(
        project_path=project,
        source_root="src",
        output_root="out",
        modules_root="modules",
        manifest_path="config/dependencies.json",
        compiler=sys.executable,
        compiler_flags=[str(fake_compiler)],
        source_extension=".src",
        archive_extension=".jar",
        artifact_extension=".out",
        timeout=60,
    )


def write_file(path: Path, text: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def tree(root: Path) -> list[str]:
    """Sorted relative posix paths of every file under root."""
    if not root.exists():
        return []
    return sorted(p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file())

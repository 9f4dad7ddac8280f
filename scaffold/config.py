"""Build configuration management."""

import json
from dataclasses import dataclass, field, asdict, fields
from pathlib import Path

from .contracts import BuildConfigError

CONFIG_DIR = ".scaffold"
CONFIG_FILE = "build.json"


@dataclass
class BuildConfig:
    """Filesystem roots and compiler settings for one project.

    Root paths are stored as given and resolved against ``project_path``
    by the ``*_dir`` properties.
    """
    project_path: Path = field(default_factory=Path.cwd)
    source_root: str = "src/main/java"
    output_root: str = "target/compile"
    modules_root: str = "modules"
    manifest_path: str = "config/dependencies.json"
    compiler: str = "javac"
    compiler_flags: list[str] = field(default_factory=list)
    classpath_flag: str = "-cp"
    source_extension: str = ".java"
    archive_extension: str = ".jar"
    artifact_extension: str = ".class"
    use_manifest: bool = True
    timeout: float | None = None

    @property
    def source_dir(self) -> Path:
        return self.project_path / self.source_root

    @property
    def output_dir(self) -> Path:
        return self.project_path / self.output_root

    @property
    def modules_dir(self) -> Path:
        return self.project_path / self.modules_root

    @property
    def manifest_file(self) -> Path:
        return self.project_path / self.manifest_path

    @classmethod
    def load(cls, project_path: Path) -> "BuildConfig":
        project_path = Path(project_path)
        config_path = project_path / CONFIG_DIR / CONFIG_FILE
        if config_path.exists():
            try:
                text = config_path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                raise BuildConfigError(f"Failed to read {config_path}: {e}") from e
            try:
                data = json.loads(text)
            except json.JSONDecodeError as e:
                raise BuildConfigError(f"Invalid JSON in {config_path}: {e}") from e
            return cls._from_dict(project_path, data)
        return cls(project_path=project_path)

    @classmethod
    def _from_dict(cls, project_path: Path, data: dict) -> "BuildConfig":
        if not isinstance(data, dict):
            raise BuildConfigError("Build config must be a JSON object")

        known = {f.name: f for f in fields(cls) if f.name != "project_path"}
        unknown = sorted(set(data) - set(known))
        if unknown:
            raise BuildConfigError(f"Unknown build config keys: {', '.join(unknown)}")

        config = cls(project_path=project_path, **data)
        config._check_types()
        return config

    def _check_types(self) -> None:
        for name in ("source_root", "output_root", "modules_root", "manifest_path",
                     "compiler", "classpath_flag", "source_extension",
                     "archive_extension", "artifact_extension"):
            if not isinstance(getattr(self, name), str):
                raise BuildConfigError(f"'{name}' must be a string")
        if not isinstance(self.compiler_flags, list) or not all(
            isinstance(flag, str) for flag in self.compiler_flags
        ):
            raise BuildConfigError("'compiler_flags' must be a list of strings")
        if not isinstance(self.use_manifest, bool):
            raise BuildConfigError("'use_manifest' must be true or false")
        if self.timeout is not None and (
            isinstance(self.timeout, bool) or not isinstance(self.timeout, (int, float))
        ):
            raise BuildConfigError("'timeout' must be a number of seconds or null")

    def to_dict(self) -> dict:
        data = asdict(self)
        del data["project_path"]
        return data

    def save(self) -> None:
        config_dir = self.project_path / CONFIG_DIR
        config_dir.mkdir(parents=True, exist_ok=True)
        config_path = config_dir / CONFIG_FILE
        config_path.write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")

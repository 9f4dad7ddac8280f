"""Persisted records of past builds."""

import json
from pathlib import Path

from .config import CONFIG_DIR
from .contracts import BuildResult


class BuildHistory:
    """Stores build results under <project>/.scaffold/builds."""

    def __init__(self, project_path: Path) -> None:
        self.storage_dir = Path(project_path) / CONFIG_DIR / "builds"

    def save(self, result: BuildResult) -> Path:
        """Persist build result to disk."""
        self.storage_dir.mkdir(parents=True, exist_ok=True)
        path = self.storage_dir / f"{result.build_id}.json"
        path.write_text(json.dumps(result.to_dict(), indent=2), encoding="utf-8")
        return path

    def get(self, build_id: str) -> BuildResult | None:
        """Retrieve a build result, or None if missing or unreadable."""
        path = self.storage_dir / f"{build_id}.json"
        if not path.exists():
            return None
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            return BuildResult.from_dict(data)
        except (json.JSONDecodeError, KeyError, ValueError):
            return None

    def recent(self, limit: int = 10) -> list[BuildResult]:
        """Most recent builds first, by file modification time."""
        if not self.storage_dir.exists():
            return []
        builds: list[BuildResult] = []
        build_files = sorted(
            self.storage_dir.glob("*.json"),
            key=lambda p: p.stat().st_mtime,
            reverse=True,
        )
        for path in build_files[:limit]:
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
                builds.append(BuildResult.from_dict(data))
            except (json.JSONDecodeError, KeyError, ValueError):
                continue
        return builds

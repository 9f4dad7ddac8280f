"""Data contracts for build runs."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class ScaffoldError(Exception):
    """Base error for the build scaffold."""


class ManifestError(ScaffoldError):
    """Raised when the dependency manifest cannot be read or parsed."""


class BuildConfigError(ScaffoldError):
    """Raised when .scaffold/build.json holds unusable settings."""


class StageStatus(Enum):
    """Outcome of a single pipeline stage."""
    OK = "ok"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class StageResult:
    """Result of one pipeline stage."""
    stage: str
    status: StageStatus
    message: str = ""
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == StageStatus.OK

    def to_dict(self) -> dict:
        return {
            "stage": self.stage,
            "status": self.status.value,
            "message": self.message,
            "error": self.error,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "StageResult":
        return cls(
            stage=data["stage"],
            status=StageStatus(data["status"]),
            message=data.get("message", ""),
            error=data.get("error"),
        )


@dataclass
class CompileOutput:
    """Captured result of one compiler invocation."""
    command: list[str]
    stdout: str = ""
    stderr: str = ""
    returncode: int | None = None
    launched: bool = True
    timed_out: bool = False
    error: str | None = None

    @property
    def failed(self) -> bool:
        """Compiler could not run or wrote to its error stream."""
        return not self.launched or self.timed_out or bool(self.stderr.strip())

    def to_dict(self) -> dict:
        return {
            "command": self.command,
            "stdout": self.stdout,
            "stderr": self.stderr,
            "returncode": self.returncode,
            "launched": self.launched,
            "timed_out": self.timed_out,
            "error": self.error,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CompileOutput":
        return cls(
            command=data.get("command", []),
            stdout=data.get("stdout", ""),
            stderr=data.get("stderr", ""),
            returncode=data.get("returncode"),
            launched=data.get("launched", True),
            timed_out=data.get("timed_out", False),
            error=data.get("error"),
        )


@dataclass
class RelocationReport:
    """Artifacts moved into the output tree, plus per-file failures."""
    moved: list[str] = field(default_factory=list)
    failures: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {"moved": self.moved, "failures": self.failures}

    @classmethod
    def from_dict(cls, data: dict) -> "RelocationReport":
        return cls(
            moved=data.get("moved", []),
            failures=data.get("failures", {}),
        )


@dataclass
class BuildResult:
    """Record of one complete pipeline run."""
    build_id: str
    project_path: str
    started_at: datetime
    completed_at: datetime | None = None
    stages: list[StageResult] = field(default_factory=list)
    compile_output: CompileOutput | None = None
    relocation: RelocationReport | None = None

    @property
    def success(self) -> bool:
        return all(s.status != StageStatus.FAILED for s in self.stages)

    def stage(self, name: str) -> StageResult | None:
        """Look up a stage result by name."""
        for result in self.stages:
            if result.stage == name:
                return result
        return None

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON storage."""
        return {
            "build_id": self.build_id,
            "project_path": self.project_path,
            "started_at": self.started_at.isoformat(),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "success": self.success,
            "stages": [s.to_dict() for s in self.stages],
            "compile_output": self.compile_output.to_dict() if self.compile_output else None,
            "relocation": self.relocation.to_dict() if self.relocation else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BuildResult":
        """Deserialize from dictionary."""
        compile_output = data.get("compile_output")
        relocation = data.get("relocation")
        return cls(
            build_id=data["build_id"],
            project_path=data["project_path"],
            started_at=datetime.fromisoformat(data["started_at"]),
            completed_at=datetime.fromisoformat(data["completed_at"]) if data.get("completed_at") else None,
            stages=[StageResult.from_dict(s) for s in data.get("stages", [])],
            compile_output=CompileOutput.from_dict(compile_output) if compile_output else None,
            relocation=RelocationReport.from_dict(relocation) if relocation else None,
        )

__version__ = "1.0.0"

from .config import BuildConfig
from .contracts import (
    BuildConfigError,
    BuildResult,
    CompileOutput,
    ManifestError,
    RelocationReport,
    ScaffoldError,
    StageResult,
    StageStatus,
)
from .pipeline import BuildPipeline, run_build

__all__ = [
    "BuildConfig",
    "BuildConfigError",
    "BuildPipeline",
    "BuildResult",
    "CompileOutput",
    "ManifestError",
    "RelocationReport",
    "ScaffoldError",
    "StageResult",
    "StageStatus",
    "run_build",
]

"""Build pipeline: manifest, classpath, compile, cleanup, relocate."""

import logging
import uuid
from datetime import datetime

from . import classpath, manifest
from .compiler import CompilerInvoker, collect_sources
from .config import BuildConfig
from .contracts import BuildResult, ManifestError, StageResult, StageStatus
from .relocator import cleanup, relocate

logger = logging.getLogger(__name__)

MANIFEST = "manifest"
CLASSPATH = "classpath"
COMPILE = "compile"
CLEANUP = "cleanup"
RELOCATE = "relocate"

STAGES = (MANIFEST, CLASSPATH, COMPILE, CLEANUP, RELOCATE)


class BuildPipeline:
    """Runs every build stage once, logging failures and carrying on.

    A failing stage never stops the next one from being attempted. The
    only exception is a compiler that cannot be launched: the output tree
    is still cleaned, but with nothing compiled relocation is skipped.
    """

    def __init__(self, config: BuildConfig) -> None:
        self.config = config
        self.invoker = CompilerInvoker(config)

    def run(self, build_id: str | None = None) -> BuildResult:
        result = BuildResult(
            build_id=build_id or uuid.uuid4().hex[:8],
            project_path=str(self.config.project_path),
            started_at=datetime.now(),
        )

        cp = self._resolve_classpath(result)
        launched = self._compile(result, cp)
        self._cleanup(result)
        if launched:
            self._relocate(result)
        else:
            result.stages.append(StageResult(RELOCATE, StageStatus.SKIPPED, "Compiler did not run"))

        result.completed_at = datetime.now()
        self._log_summary(result)
        return result

    def _resolve_classpath(self, result: BuildResult) -> str | None:
        if not self.config.use_manifest:
            result.stages.append(StageResult(MANIFEST, StageStatus.SKIPPED, "Flat compile"))
            result.stages.append(StageResult(CLASSPATH, StageStatus.SKIPPED, "Flat compile"))
            return None

        try:
            entries = manifest.load(self.config.manifest_file)
        except ManifestError as e:
            logger.error(f"Failed to read dependency manifest: {e}")
            result.stages.append(StageResult(MANIFEST, StageStatus.FAILED, "Manifest unreadable", str(e)))
            result.stages.append(StageResult(CLASSPATH, StageStatus.SKIPPED, "No manifest"))
            return None
        result.stages.append(StageResult(MANIFEST, StageStatus.OK, f"{len(entries)} dependencies"))

        try:
            cp = classpath.resolve(entries, self.config.modules_dir, self.config.archive_extension)
        except OSError as e:
            logger.error(f"Failed to build classpath: {e}")
            result.stages.append(StageResult(CLASSPATH, StageStatus.FAILED, "Classpath unavailable", str(e)))
            return None
        result.stages.append(StageResult(CLASSPATH, StageStatus.OK, cp))
        return cp

    def _compile(self, result: BuildResult, cp: str | None) -> bool:
        """Run the compiler; returns whether it was launched."""
        try:
            sources = collect_sources(self.config.source_dir, self.config.source_extension)
        except OSError as e:
            logger.error(f"Failed to collect source files: {e}")
            result.stages.append(StageResult(COMPILE, StageStatus.FAILED, "Source discovery failed", str(e)))
            return False

        output = self.invoker.invoke(sources, cp)
        result.compile_output = output
        if not output.launched:
            result.stages.append(StageResult(COMPILE, StageStatus.FAILED, "Compiler not launched", output.error))
        elif output.failed:
            error = output.error or output.stderr.strip()
            result.stages.append(StageResult(COMPILE, StageStatus.FAILED, "Compiler reported errors", error))
        else:
            result.stages.append(StageResult(COMPILE, StageStatus.OK, f"{len(sources)} source files"))
        return output.launched

    def _cleanup(self, result: BuildResult) -> None:
        failures = cleanup(self.config.output_dir)
        if failures:
            result.stages.append(StageResult(
                CLEANUP, StageStatus.FAILED, f"{len(failures)} paths not removed", "\n".join(failures)
            ))
        else:
            result.stages.append(StageResult(CLEANUP, StageStatus.OK))

    def _relocate(self, result: BuildResult) -> None:
        try:
            report = relocate(self.config.source_dir, self.config.output_dir, self.config.artifact_extension)
        except OSError as e:
            logger.error(f"Failed to move classes: {e}")
            result.stages.append(StageResult(RELOCATE, StageStatus.FAILED, "Artifact discovery failed", str(e)))
            return

        result.relocation = report
        message = f"{len(report.moved)} artifacts moved"
        if report.failures:
            error = "\n".join(f"{path}: {err}" for path, err in report.failures.items())
            result.stages.append(StageResult(RELOCATE, StageStatus.FAILED, message, error))
        else:
            result.stages.append(StageResult(RELOCATE, StageStatus.OK, message))

    def _log_summary(self, result: BuildResult) -> None:
        if result.success:
            logger.info(f"Successfully compiled classes (build {result.build_id}).")
            return
        failed = [s.stage for s in result.stages if s.status == StageStatus.FAILED]
        logger.error(f"Build {result.build_id} failed in: {', '.join(failed)}")


def run_build(config: BuildConfig) -> BuildResult:
    return BuildPipeline(config).run()

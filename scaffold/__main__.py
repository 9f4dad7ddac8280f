"""Command line entry point: run one build of a project."""

import logging
import sys
from pathlib import Path

from .config import BuildConfig
from .contracts import BuildConfigError, BuildResult, StageStatus
from .pipeline import MANIFEST, BuildPipeline

USAGE = "Usage: python -m scaffold [project_path] [--flat] [--timeout <seconds>] [--verbose]"


def exit_code(result: BuildResult) -> int:
    """Non-zero only when the manifest was unreadable or the compiler never ran."""
    manifest = result.stage(MANIFEST)
    if manifest and manifest.status == StageStatus.FAILED:
        return 1
    output = result.compile_output
    if output is None or not output.launched:
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv

    project_path = Path.cwd()
    flat = False
    timeout = None
    verbose = False

    i = 0
    while i < len(args):
        if args[i] in ("-h", "--help"):
            print(USAGE)
            return 0
        elif args[i] == "--flat":
            flat = True
            i += 1
        elif args[i] == "--timeout" and i + 1 < len(args):
            try:
                timeout = float(args[i + 1])
            except ValueError:
                print(f"Invalid timeout: {args[i + 1]}")
                return 2
            i += 2
        elif args[i] == "--verbose":
            verbose = True
            i += 1
        elif not args[i].startswith("-"):
            project_path = Path(args[i])
            i += 1
        else:
            print(USAGE)
            return 2

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = BuildConfig.load(project_path)
    except BuildConfigError as e:
        logging.getLogger("scaffold").error(f"Invalid build config: {e}")
        return 2

    if flat:
        config.use_manifest = False
    if timeout is not None:
        config.timeout = timeout

    result = BuildPipeline(config).run()
    return exit_code(result)


if __name__ == "__main__":
    sys.exit(main())

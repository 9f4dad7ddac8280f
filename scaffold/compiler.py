"""External compiler invocation."""

import logging
import os
import subprocess
import threading
from pathlib import Path
from typing import IO

from .config import BuildConfig
from .contracts import CompileOutput
from .walker import collect, has_suffix

logger = logging.getLogger(__name__)


def collect_sources(source_root: Path, extension: str = ".java") -> list[str]:
    """Source files under source_root as paths relative to it."""
    source_root = Path(source_root)
    return [
        str(path.relative_to(source_root))
        for path in collect(source_root, has_suffix(extension))
    ]


def _drain(stream: IO[bytes], sink: list[bytes]) -> None:
    """Read stream to EOF into sink."""
    try:
        for chunk in iter(lambda: stream.read(65536), b""):
            sink.append(chunk)
    finally:
        stream.close()


def _decode(chunks: list[bytes]) -> str:
    return b"".join(chunks).decode("utf-8", errors="replace")


class CompilerInvoker:
    """Runs the compiler in the source root and captures both output streams."""

    def __init__(self, config: BuildConfig) -> None:
        self.config = config

    def build_command(self, source_files: list[str], classpath: str | None = None) -> list[str]:
        command = [self.config.compiler, *self.config.compiler_flags]
        if classpath is not None:
            command.extend([self.config.classpath_flag, classpath])
        command.extend(source_files)
        return command

    def invoke(self, source_files: list[str], classpath: str | None = None) -> CompileOutput:
        """Run the compiler over source_files and wait for it to finish.

        stdout and stderr are drained by separate threads so a compiler
        filling both pipes cannot block on either one.
        """
        command = self.build_command(source_files, classpath)
        try:
            process = subprocess.Popen(
                command,
                cwd=self.config.source_dir,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except OSError as e:
            logger.error(f"Failed to run compilation command {command}: {e}")
            return CompileOutput(command=command, launched=False, error=str(e))

        stdout_chunks: list[bytes] = []
        stderr_chunks: list[bytes] = []
        readers = [
            threading.Thread(target=_drain, args=(process.stdout, stdout_chunks), daemon=True),
            threading.Thread(target=_drain, args=(process.stderr, stderr_chunks), daemon=True),
        ]
        for reader in readers:
            reader.start()

        timed_out = False
        try:
            process.wait(timeout=self.config.timeout)
        except subprocess.TimeoutExpired:
            timed_out = True
            logger.error(f"Compiler exceeded {self.config.timeout}s timeout, killing it")
            process.kill()
            process.wait()

        for reader in readers:
            reader.join()

        output = CompileOutput(
            command=command,
            stdout=_decode(stdout_chunks),
            stderr=_decode(stderr_chunks),
            returncode=process.returncode,
            timed_out=timed_out,
            error=f"Timed out after {self.config.timeout}s" if timed_out else None,
        )
        log_output(output)
        return output


def log_output(output: CompileOutput) -> None:
    """Log compiler output; any text on stderr counts as a failure."""
    if output.stderr.strip():
        logger.error(f"Failed to execute {output.command}.{os.linesep}{output.stderr}")
    elif output.stdout.strip():
        logger.info(f"Command produced output:{os.linesep}\t{output.stdout}")
    else:
        logger.info("Command produced no output.")

"""Locate and run rust-code-analysis-cli."""

import shutil
import subprocess
from typing import Iterator, List, Optional

from .exceptions import ToolNotFoundError
from .logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_EXECUTABLE = "rust-code-analysis-cli"
UNKNOWN_VERSION = "unknown"


class RcaCli:
    """Wrapper around one resolved rust-code-analysis-cli executable."""

    def __init__(self, path: str):
        self.path = path
        self.returncode: Optional[int] = None

    @classmethod
    def find(cls, executable: str = DEFAULT_EXECUTABLE) -> "RcaCli":
        path = shutil.which(executable)
        if path is None:
            logger.error(
                "%s is not installed, install it with `cargo install rust-code-analysis-cli`",
                executable,
            )
            raise ToolNotFoundError(executable)
        return cls(path)

    def version(self) -> str:
        """Return the tool version, e.g. ``0.0.24`` from ``rust-code-analysis-cli 0.0.24``."""
        result = subprocess.run(
            [self.path, "-V"],
            capture_output=True,
            text=True,
            timeout=30,
        )
        output = result.stdout.strip()
        if result.returncode != 0 or not output:
            logger.warning(
                "Cannot read the %s version (exit code %d), reporting it as %s",
                self.path,
                result.returncode,
                UNKNOWN_VERSION,
            )
            return UNKNOWN_VERSION
        parts = output.split(" ", 2)
        return parts[1] if len(parts) > 1 else parts[0]

    def metrics(self, directory: str) -> Iterator[str]:
        """Stream stdout of a JSON metrics run over ``directory``, one line at a time.

        The exit code is stored in ``returncode`` once the stream is exhausted;
        a non-zero code is not raised here so callers can still report.
        """
        yield from self.stream(["--metrics", "--output-format=json", "-p", directory])

    def stream(self, args: List[str]) -> Iterator[str]:
        cmd = [self.path, *args]
        logger.debug("Running %s", " ".join(cmd))
        # stderr is inherited so tool diagnostics land in the job log
        proc = subprocess.Popen(cmd, stdout=subprocess.PIPE, text=True)
        try:
            for line in proc.stdout:  # type: ignore[union-attr]
                yield line.rstrip("\r\n")
            self.returncode = proc.wait()
        finally:
            if proc.stdout:
                proc.stdout.close()
            if proc.poll() is None:
                proc.kill()
                proc.wait()
        logger.debug("%s exited with %d", self.path, self.returncode)

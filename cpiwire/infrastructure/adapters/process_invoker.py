"""
Process Invoker

Architectural Intent:
- Validates and runs a CPI executable synchronously
- Feeds the encoded request on stdin, captures stdout, stderr and exit status

Design Decisions:
- No command-line arguments, no shell, no timeout
- Exit status is captured for diagnostics only; callers must not treat a
  non-zero status as failure, the CPI reports errors in its JSON response
"""

import logging
import os
import subprocess
from dataclasses import dataclass
from typing import Mapping

from cpiwire.domain.errors import NonExecutable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessResult:
    stdout: str
    stderr: str
    exit_status: int


class ProcessInvoker:
    def ensure_executable(self, path: str) -> None:
        if not (os.path.isfile(path) and os.access(path, os.X_OK)):
            raise NonExecutable(f"Failed to run cpi: `{path}' is not executable")

    def run(self, path: str, stdin_data: str, env: Mapping[str, str]) -> ProcessResult:
        try:
            completed = subprocess.run(
                [path],
                input=stdin_data.encode("utf-8"),
                capture_output=True,
                env=dict(env),
                check=False,
            )
        except OSError as e:
            raise NonExecutable(f"Failed to run cpi: `{path}' could not be started: {e}") from e

        result = ProcessResult(
            stdout=_decode(completed.stdout),
            stderr=_decode(completed.stderr),
            exit_status=completed.returncode,
        )
        logger.debug("cpi %s exited with status %s", path, result.exit_status)
        return result


def _decode(data) -> str:
    if data is None:
        return ""
    if isinstance(data, str):
        return data
    return data.decode("utf-8", errors="replace")

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

from .invocation import Command

logger = logging.getLogger(__name__)


class ProcessSpawnError(RuntimeError):
    pass


@dataclass(frozen=True, slots=True)
class ProcessOutput:
    exit_status: int
    stdout: bytes
    stderr: bytes

    @property
    def succeeded(self) -> bool:
        return self.exit_status == 0


@runtime_checkable
class ProcessRunner(Protocol):
    def run(self, command: Command) -> ProcessOutput: ...


@dataclass(frozen=True, slots=True)
class SubprocessRunner:
    cwd: Path | None = None

    def run(self, command: Command) -> ProcessOutput:
        if not command:
            raise ProcessSpawnError("cannot run an empty command")
        logger.debug("running %s", " ".join(command))
        try:
            completed = subprocess.run(
                list(command),
                cwd=self.cwd,
                capture_output=True,
                check=False,
            )
        except OSError as exc:
            raise ProcessSpawnError(f"failed to spawn '{command[0]}': {exc}") from exc
        logger.debug(
            "%d stdout bytes, %d stderr bytes",
            len(completed.stdout),
            len(completed.stderr),
        )
        return ProcessOutput(
            exit_status=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr,
        )

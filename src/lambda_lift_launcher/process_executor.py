"""
Runs child processes with the launcher's own standard streams.
"""

import dataclasses
import logging
import subprocess
from typing import List, Optional, Sequence

from lambda_lift_launcher.launcher_exceptions import SpawnFailedError
from lambda_lift_launcher.launcher_logger import LauncherLogger


@dataclasses.dataclass(frozen=True)
class RunResult:
    """
    Outcome of a child process: either it started and exited with exit_code,
    or it could not be started and error says why.
    """

    exit_code: Optional[int] = None
    error: Optional[SpawnFailedError] = None

    @classmethod
    def exited(cls, exit_code: int) -> "RunResult":
        return cls(exit_code=exit_code)

    @classmethod
    def failed_to_start(cls, error: SpawnFailedError) -> "RunResult":
        return cls(error=error)

    @property
    def started(self) -> bool:
        return self.error is None


def normalize_exit_code(returncode: int) -> int:
    """
    subprocess reports death by signal N as -N; shells report 128 + N.
    """
    if returncode < 0:
        return 128 - returncode
    return returncode


def wait_for_child(process: subprocess.Popen, logger: LauncherLogger) -> int:
    """
    Wait for the child to exit. Ctrl-C reaches the whole process group, so the
    child gets it as well; the launcher keeps waiting and reports whatever exit
    code the child settles on instead of dying with it.
    """
    while True:
        try:
            return process.wait()
        except KeyboardInterrupt:
            logger.log(f"Interrupted, waiting for {process.args[0]} to exit", logging.DEBUG)


def run_process(argv: Sequence[str], logger: LauncherLogger) -> RunResult:
    """
    Run argv to completion with stdin, stdout and stderr inherited from this process.
    """
    cmd: List[str] = [str(arg) for arg in argv]
    logger.log(f"Starting process: {cmd}", logging.DEBUG)
    try:
        process = subprocess.Popen(cmd)
    except OSError as e:
        logger.log(f"Could not start {cmd[0]}", logging.DEBUG, str(e))
        return RunResult.failed_to_start(SpawnFailedError(cmd[0], e))

    exit_code = normalize_exit_code(wait_for_child(process, logger))
    logger.log(f"Process {cmd[0]} exited with code {exit_code}", logging.DEBUG)
    return RunResult.exited(exit_code)

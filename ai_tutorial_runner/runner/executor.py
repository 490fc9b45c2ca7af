"""Run the tutorial script as a child process."""

import logging
import shlex
import subprocess
import sys
import time
from typing import List, Optional, Sequence

from ai_tutorial_runner.core.exceptions import ExecutionFailed
from ai_tutorial_runner.core.logging import log_execution

logger = logging.getLogger(__name__)


def build_command(file_path: str, interpreter: Optional[Sequence[str]] = None) -> List[str]:
    """Command line that runs ``file_path`` with ``interpreter``."""
    prefix = list(interpreter) if interpreter else [sys.executable]
    return [*prefix, file_path]


def run_command(command: Sequence[str]) -> None:
    """
    Run ``command`` with the parent's stdin/stdout/stderr.

    Output streams live to the terminal; the call returns once the child
    exits.

    Raises:
        ExecutionFailed: if the child cannot start or exits non-zero
    """
    display = shlex.join(command)
    logger.debug(f"Spawning: {display}")
    start_time = time.time()

    try:
        completed = subprocess.run(list(command), check=False)
    except OSError as e:
        log_execution(display)
        raise ExecutionFailed(display, reason=str(e)) from e

    duration_ms = int((time.time() - start_time) * 1000)
    log_execution(display, returncode=completed.returncode, duration_ms=duration_ms)

    if completed.returncode != 0:
        raise ExecutionFailed(display, returncode=completed.returncode)


def run_script(file_path: str, interpreter: Optional[Sequence[str]] = None) -> None:
    """Execute a tutorial script; see :func:`run_command`."""
    run_command(build_command(file_path, interpreter))

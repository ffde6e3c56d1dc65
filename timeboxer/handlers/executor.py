"""Running OS commands on behalf of handlers.

Handlers take an executor instead of calling subprocess directly so tests
can substitute a fake that records the script it was given.
"""

import logging
import os
import subprocess
from typing import Optional, Protocol, Sequence

from timeboxer.errors import ExecutorError

logger = logging.getLogger(__name__)


class CommandExecutor(Protocol):
    def __call__(
        self, name: str, args: Optional[Sequence[str]] = None, stdin: str = ""
    ) -> bytes: ...


def default_command_executor(
    name: str, args: Optional[Sequence[str]] = None, stdin: str = ""
) -> bytes:
    """Run ``name`` with ``args``, feeding ``stdin``.

    Returns:
        The combined stdout/stderr of the process.

    Raises:
        ExecutorError: if the binary is missing or exits non-zero. The
            error's ``output`` holds whatever the process printed.
    """
    cmd = [name, *(args or [])]
    logger.debug(f"exec: {' '.join(cmd)}")

    try:
        result = subprocess.run(
            cmd,
            input=stdin.encode(),
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            shell=False,
            env=os.environ.copy(),
        )
    except FileNotFoundError as e:
        raise ExecutorError(f"{name} not found: {e}", output=str(e).encode()) from e

    if result.returncode != 0:
        raise ExecutorError(
            f"{name} exited with status {result.returncode}",
            output=result.stdout,
            returncode=result.returncode,
        )
    return result.stdout

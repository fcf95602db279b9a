"""One-shot shell invocation.

All external tools are driven through ``run_shell``. It blocks until the
child exits and has no timeout.
"""

from __future__ import annotations

import os
import shlex
import subprocess
import sys
from collections.abc import Mapping
from pathlib import Path

from .errors import SpawnFailed
from .shared.logging import get_logger

logger = get_logger(__name__)


def shell_argv(line: str) -> list[str]:
    """Wrap a command line in the platform shell."""
    if sys.platform == "win32":
        return ["cmd", "/C", line]
    return ["sh", "-c", line]


def quote(arg: str | Path) -> str:
    """Quote a single argument for inclusion in a shell line."""
    if sys.platform == "win32":
        return subprocess.list2cmdline([str(arg)])
    return shlex.quote(str(arg))


def run_shell(
    line: str,
    *,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
    stdin: str | None = None,
    quiet: bool = False,
) -> int:
    """Run a command line through the host shell.

    Args:
        line: Command line to execute
        cwd: Working directory for the child
        env: Variables overlaid on the inherited environment
        stdin: Text piped to the child's standard input
        quiet: Discard the child's stdout and stderr

    Returns:
        The child's exit status.

    Raises:
        SpawnFailed: If the shell itself could not be launched.
    """
    child_env = None
    if env:
        child_env = {**os.environ, **env}

    output = subprocess.DEVNULL if quiet else None
    logger.debug("shell_invoke", line=line, cwd=str(cwd) if cwd else None)

    try:
        result = subprocess.run(
            shell_argv(line),
            cwd=cwd,
            env=child_env,
            input=stdin,
            text=True if stdin is not None else None,
            stdout=output,
            stderr=output,
        )
    except OSError as e:
        raise SpawnFailed(
            message=f"failed to launch: {line}",
            command=line,
            reason=str(e),
        ) from e

    logger.debug("shell_exit", line=line, returncode=result.returncode)
    return result.returncode

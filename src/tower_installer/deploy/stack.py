"""Stack teardown.

Stops and removes the running tower containers through the compose tool.
"""

from __future__ import annotations

from collections.abc import Callable

from ..config import InstallerConfig
from ..errors import ShutdownFailed, SpawnFailed
from ..shared.logging import get_logger
from ..shell import quote, run_shell

logger = get_logger(__name__)


class StackManager:
    """Manage the compose project."""

    def __init__(self, config: InstallerConfig, run: Callable[..., int] = run_shell):
        self.config = config
        self.run = run

    def down(self) -> None:
        """Stop the stack.

        Stopping an already stopped project succeeds as long as the compose
        tool reports success.

        Raises:
            ShutdownFailed: If the compose tool fails or cannot be launched.
        """
        line = f"{self.config.compose_command} -p {quote(self.config.project_name)} down"
        logger.info("stack_down", project=self.config.project_name)
        try:
            returncode = self.run(line)
        except SpawnFailed as e:
            raise ShutdownFailed(message=f"failed to shut down tower containers: {e.reason}") from e

        if returncode != 0:
            raise ShutdownFailed(exit_code=returncode)

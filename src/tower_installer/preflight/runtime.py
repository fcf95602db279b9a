"""Container runtime and image detection.

Only exit statuses matter here; probe output is discarded.
"""

from __future__ import annotations

from collections.abc import Callable

import click

from ..config import InstallerConfig
from ..errors import ComposeToolMissing, RuntimeUnavailable, SpawnFailed
from ..shared.logging import get_logger
from ..shell import quote, run_shell

logger = get_logger(__name__)

# Images the published stack runs on, besides the tower server itself
MIGRATION_IMAGE = "prismagraphql/prisma:1.34"
DATASTORE_IMAGE = "postgres:10.3"
PROXY_IMAGE = "openresty/openresty:alpine"


def required_images(config: InstallerConfig) -> list[str]:
    """Images the stack needs, in check order."""
    return [
        f"{config.project_name}:{config.image_tag}",
        MIGRATION_IMAGE,
        DATASTORE_IMAGE,
        PROXY_IMAGE,
    ]


class RuntimeChecker:
    """Verify the container runtime, compose tool and local images."""

    def __init__(self, config: InstallerConfig, run: Callable[..., int] = run_shell):
        self.config = config
        self.run = run

    def _succeeds(self, line: str) -> bool:
        try:
            return self.run(line, quiet=True) == 0
        except SpawnFailed as e:
            logger.debug("probe_spawn_failed", line=line, reason=e.reason)
            return False

    def ensure_runtime(self) -> None:
        """Check that the runtime daemon runs and the compose tool exists.

        Raises:
            RuntimeUnavailable: If the runtime status probe fails.
            ComposeToolMissing: If the compose version probe fails.
        """
        runtime = self.config.runtime_command
        compose = self.config.compose_command

        if not self._succeeds(f"{runtime} info"):
            raise RuntimeUnavailable(message=f"{runtime} is not running")
        click.echo(f"{runtime} is running")

        if not self._succeeds(f"{compose} version"):
            raise ComposeToolMissing(message=f"{compose} was not installed")
        click.echo(f"{compose} was installed")

    def check_images(self) -> bool:
        """Check that every required image exists locally.

        Stops at the first missing image.

        Returns:
            True if all images are present.
        """
        runtime = self.config.runtime_command
        for image in required_images(self.config):
            if not self._succeeds(f"{runtime} inspect --type=image {quote(image)}"):
                logger.info("image_missing", image=image)
                click.echo(f"{image} image is missing")
                return False

        click.echo("all images exist")
        return True

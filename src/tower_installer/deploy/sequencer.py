"""Deployment step chain.

Builds the ordered list of external invocations for a deployment mode and
runs them one at a time. The first failing step stops the chain; nothing
already started is rolled back.
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum

import click

from ..config import InstallerConfig
from ..errors import ExternalStepFailed, SpawnFailed
from ..shared.logging import get_logger
from ..shared.paths import SERVER_PACKAGE, SETUP_SCRIPT, SOURCE_COMPOSE_FILE
from ..shell import quote, run_shell
from .compose import ComposeGenerator
from .modes import DeploymentMode, FromArchive, FromPublishedImage, FromSource
from .steps import Step, SubStep, step

logger = get_logger(__name__)

MIGRATION_PORT_ENV = "PRISMA_PORT"


class SequencerState(Enum):
    """Lifecycle of a deployment run."""

    IDLE = "idle"
    DEPLOYING = "deploying"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class DeploymentSequencer:
    """Run the deployment step chain for one mode."""

    def __init__(
        self,
        config: InstallerConfig,
        force: bool = False,
        run: Callable[..., int] = run_shell,
    ):
        """Initialize sequencer.

        Args:
            config: Installer configuration
            force: Reset the data store after migrating (from-source only)
            run: Shell runner, see ``run_shell``
        """
        self.config = config
        self.force = force
        self.run = run
        self.state = SequencerState.IDLE
        self.failed_step: str | None = None

    # ── Planning ──

    def plan(self, mode: DeploymentMode) -> list[Step]:
        """Build the ordered steps for a mode."""
        if isinstance(mode, FromSource):
            return self._source_steps(mode)
        if isinstance(mode, FromArchive):
            return [self._load_images_step(mode)] + self._published_steps()
        if isinstance(mode, FromPublishedImage):
            return self._published_steps()
        raise TypeError(f"Unknown deployment mode: {mode!r}")

    def _compose(self, *args: str) -> str:
        base = f"{self.config.compose_command} -p {quote(self.config.project_name)}"
        return " ".join([base, *args])

    def _source_steps(self, mode: FromSource) -> list[Step]:
        source_dir = mode.source_dir
        server_dir = source_dir / SERVER_PACKAGE
        pkg = self.config.package_command

        return [
            step(
                "compose-up",
                self._compose("-f", quote(source_dir / SOURCE_COMPOSE_FILE), "up", "-d"),
                failure_message="failed to start tower containers",
            ),
            step(
                "build",
                pkg,
                f"{pkg} lerna run prepublish",
                failure_message="failed to build tower from source code",
                working_directory=source_dir,
            ),
            step(
                "setup",
                f"{pkg} prisma deploy",
                SubStep(f"{pkg} prisma reset -f", enabled=self.force),
                f"{self.config.script_command} {quote(source_dir / SETUP_SCRIPT)}",
                failure_message="failed to run setup script",
                working_directory=server_dir,
                environment={MIGRATION_PORT_ENV: str(self.config.migration_port)},
            ),
        ]

    def _load_images_step(self, mode: FromArchive) -> Step:
        return step(
            "load-images",
            f"{self.config.runtime_command} load --input {quote(mode.archive_path)}",
            failure_message="failed to load docker images",
        )

    def _published_steps(self) -> list[Step]:
        return [
            step(
                "compose-up",
                self._compose("-f", "-", "up", "-d"),
                failure_message="failed to start tower containers",
                stdin=ComposeGenerator().render(self.config),
            ),
        ]

    # ── Execution ──

    def run_step(self, current: Step) -> None:
        """Execute a single step.

        Raises:
            ExternalStepFailed: If the step exits non-zero or its working
                directory is missing.
            SpawnFailed: If the shell could not be launched.
        """
        line = current.command_line()
        logger.info("step_started", step=current.name, line=line)
        if current.working_directory is not None and not current.working_directory.is_dir():
            logger.warning(
                "step_failed", step=current.name, missing_directory=str(current.working_directory)
            )
            raise ExternalStepFailed(
                message=f"{current.failure_message}: no such directory {current.working_directory}",
                step=current.name,
            )

        try:
            returncode = self.run(
                line,
                cwd=current.working_directory,
                env=dict(current.environment) or None,
                stdin=current.stdin,
            )
        except SpawnFailed as e:
            e.step = current.name
            e.message = f"{current.failure_message}: {e.reason}"
            raise

        if returncode != 0:
            logger.warning("step_failed", step=current.name, returncode=returncode)
            raise ExternalStepFailed(
                message=current.failure_message,
                step=current.name,
                exit_code=returncode,
            )
        logger.info("step_succeeded", step=current.name)

    def deploy(self, mode: DeploymentMode) -> None:
        """Run every step for the mode, stopping at the first failure.

        Raises:
            RuntimeError: If this sequencer has already run.
            ExternalStepFailed: If a step exits non-zero.
            SpawnFailed: If a step's shell could not be launched.
        """
        if self.state is not SequencerState.IDLE:
            raise RuntimeError(f"Sequencer already ran (state: {self.state.value})")

        steps = self.plan(mode)
        self.state = SequencerState.DEPLOYING
        for current in steps:
            click.echo(f"> {current.name}...")
            try:
                self.run_step(current)
            except (ExternalStepFailed, SpawnFailed):
                self.state = SequencerState.FAILED
                self.failed_step = current.name
                raise
        self.state = SequencerState.SUCCEEDED

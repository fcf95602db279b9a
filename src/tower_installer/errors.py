"""Error types for tower-installer.

Every failure is terminal: commands let these propagate up to the CLI,
which prints the message and exits non-zero.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class InstallerError(Exception):
    """Base error class for installer failures."""

    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class HardwareInsufficient(InstallerError):
    """A required hardware threshold is not met."""

    message: str = "Hardware requirements not met"
    metric: str = ""


@dataclass
class RuntimeUnavailable(InstallerError):
    """The container runtime daemon is not running."""

    message: str = "docker is not running"


@dataclass
class ComposeToolMissing(InstallerError):
    """The compose tool is not installed."""

    message: str = "docker-compose was not installed"


@dataclass
class PathResolutionFailed(InstallerError):
    """A path argument could not be resolved to an existing location."""

    message: str = "failed to resolve path"
    path: str = ""


@dataclass
class ExternalStepFailed(InstallerError):
    """An external tool ran but exited with a non-zero status."""

    message: str = "external step failed"
    step: str = ""
    exit_code: int | None = None


@dataclass
class SpawnFailed(InstallerError):
    """The external tool could not be launched at all."""

    message: str = "failed to launch command"
    command: str = ""
    reason: str = ""
    step: str | None = None


@dataclass
class ShutdownFailed(InstallerError):
    """The compose teardown failed."""

    message: str = "failed to shut down tower containers"
    exit_code: int | None = None

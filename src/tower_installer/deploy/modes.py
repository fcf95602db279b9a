"""Deployment modes.

Exactly one mode is selected per deploy: build from a source checkout,
load images from an archive, or run the published images.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from ..errors import PathResolutionFailed


@dataclass(frozen=True)
class FromSource:
    """Build and run tower from a source checkout."""

    source_dir: Path


@dataclass(frozen=True)
class FromArchive:
    """Load images from an archive, then run the published stack."""

    archive_path: Path


@dataclass(frozen=True)
class FromPublishedImage:
    """Run the published images."""


DeploymentMode = Union[FromSource, FromArchive, FromPublishedImage]


def resolve_path(value: str | Path, cwd: Path | None = None) -> Path:
    """Resolve a path argument to an existing absolute path.

    Relative paths are taken against the current working directory.

    Raises:
        PathResolutionFailed: If the path does not exist.
    """
    path = Path(value)
    if not path.is_absolute():
        path = (cwd or Path.cwd()) / path
    try:
        return path.resolve(strict=True)
    except (OSError, RuntimeError) as e:
        raise PathResolutionFailed(
            message=f"failed to resolve path {value}: {e}",
            path=str(value),
        ) from e


def select_mode(
    from_source: str | None = None,
    from_tar: str | None = None,
    cwd: Path | None = None,
) -> DeploymentMode:
    """Pick the deployment mode from CLI arguments.

    Args:
        from_source: Source checkout directory
        from_tar: Image archive path
        cwd: Base for relative paths (default: current directory)

    Raises:
        ValueError: If both sources are given.
        PathResolutionFailed: If the given path does not exist.
    """
    if from_source and from_tar:
        raise ValueError("--from-source and --from-tar are mutually exclusive")
    if from_source:
        return FromSource(resolve_path(from_source, cwd))
    if from_tar:
        return FromArchive(resolve_path(from_tar, cwd))
    return FromPublishedImage()

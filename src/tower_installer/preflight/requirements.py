"""Hardware thresholds and classification.

Two requirement tiers exist: ``required`` is the hard floor that blocks a
deploy, ``expected`` is the soft target that only colors the report.
Every numeric metric assumes required <= expected.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

GiB = 1024**3


class Classification(Enum):
    """Where an actual value falls relative to the two tiers."""

    BELOW_REQUIRED = "below_required"
    BELOW_EXPECTED = "below_expected"
    MEETS_EXPECTED = "meets_expected"


@dataclass(frozen=True)
class HardwareRequirement:
    """One tier of hardware thresholds."""

    cpu_cores: int
    memory: int  # bytes
    storage_space: int  # bytes
    ports: tuple[int, ...] = ()


def default_requirements(
    migration_port: int = 8811,
) -> tuple[HardwareRequirement, HardwareRequirement]:
    """Build the (required, expected) requirement pair.

    Args:
        migration_port: Port the migration tool must be able to bind.

    Returns:
        Tuple of (required, expected).
    """
    required = HardwareRequirement(
        cpu_cores=2,
        memory=4 * GiB,
        storage_space=40 * GiB,
        ports=(migration_port,),
    )
    expected = HardwareRequirement(
        cpu_cores=4,
        memory=8 * GiB,
        storage_space=100 * GiB,
    )
    return required, expected


def classify(actual: int, required: int, expected: int) -> Classification:
    """Classify an actual value against the required and expected tiers."""
    if actual < required:
        return Classification.BELOW_REQUIRED
    if actual < expected:
        return Classification.BELOW_EXPECTED
    return Classification.MEETS_EXPECTED

"""Pre-flight hardware gate.

Probes the host, classifies each metric against the required and expected
tiers, always prints the full report, then decides whether the deploy may
proceed.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from rich.console import Console

from ..errors import HardwareInsufficient
from ..shared.logging import get_logger
from .probe import ActualCapabilities, HostProbe
from .report import ReportRow, format_bytes, format_ports, print_capability_report
from .requirements import Classification, HardwareRequirement, classify

logger = get_logger(__name__)

# Checked in this order; the first failure is the one reported
FAILURE_MESSAGES = {
    "cpu": "CPU cores not enough.",
    "memory": "Memory not enough.",
    "storage": "Storage space not enough.",
    "ports": "Some ports are not available.",
}


@dataclass
class GateResult:
    """Outcome of the capability gate."""

    passed: bool
    unavailable_ports: set[int] = field(default_factory=set)
    classifications: dict[str, Classification] = field(default_factory=dict)
    overridden: list[str] = field(default_factory=list)


class CapabilityGate:
    """Compare live host capabilities against hardware requirements."""

    def __init__(
        self,
        required: HardwareRequirement,
        expected: HardwareRequirement,
        probe: HostProbe | None = None,
        console: Console | None = None,
    ):
        """Initialize the gate.

        Args:
            required: Hard floor; violations block the deploy
            expected: Soft target; violations only show as warnings
            probe: Host probe (default: probes the required ports)
            console: Console for the report (default: stdout)
        """
        self.required = required
        self.expected = expected
        self.probe = probe or HostProbe(required.ports)
        self.console = console

    def run(self, force: bool = False) -> GateResult:
        """Run the gate.

        Args:
            force: Downgrade every failure to a warning.

        Returns:
            GateResult describing the host.

        Raises:
            HardwareInsufficient: If a required threshold is not met and
                force is not set.
        """
        actual = self.probe.probe()
        classifications = self.classify(actual)
        print_capability_report(self.build_rows(actual, classifications), self.console)

        failed = [
            metric
            for metric in FAILURE_MESSAGES
            if classifications[metric] is Classification.BELOW_REQUIRED
        ]
        result = GateResult(
            passed=not failed,
            unavailable_ports=set(actual.unavailable_ports),
            classifications=classifications,
        )

        if not failed:
            return result

        if force:
            logger.warning("gate_override", failed=failed)
            result.passed = True
            result.overridden = failed
            return result

        metric = failed[0]
        raise HardwareInsufficient(message=FAILURE_MESSAGES[metric], metric=metric)

    def classify(self, actual: ActualCapabilities) -> dict[str, Classification]:
        """Classify every metric, ports included."""
        ports = (
            Classification.BELOW_REQUIRED
            if actual.unavailable_ports
            else Classification.MEETS_EXPECTED
        )
        return {
            "cpu": classify(actual.cpu_cores, self.required.cpu_cores, self.expected.cpu_cores),
            "memory": classify(actual.total_memory, self.required.memory, self.expected.memory),
            "storage": classify(
                actual.free_storage,
                self.required.storage_space,
                self.expected.storage_space,
            ),
            "ports": ports,
        }

    def build_rows(
        self,
        actual: ActualCapabilities,
        classifications: dict[str, Classification],
    ) -> list[ReportRow]:
        """Build report rows in display order."""
        unavailable = [p for p in self.required.ports if p in actual.unavailable_ports]
        return [
            ReportRow(
                "cpu cores",
                str(self.required.cpu_cores),
                str(self.expected.cpu_cores),
                str(actual.cpu_cores),
                classifications["cpu"],
            ),
            ReportRow(
                "memory",
                format_bytes(self.required.memory),
                format_bytes(self.expected.memory),
                format_bytes(actual.total_memory),
                classifications["memory"],
            ),
            ReportRow(
                "storage space",
                format_bytes(self.required.storage_space),
                format_bytes(self.expected.storage_space),
                format_bytes(actual.free_storage),
                classifications["storage"],
            ),
            ReportRow(
                "ports",
                format_ports(self.required.ports),
                "-",
                format_ports(unavailable) if unavailable else "Ok",
                classifications["ports"],
            ),
        ]

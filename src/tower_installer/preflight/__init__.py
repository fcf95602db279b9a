"""Pre-flight checks run before every deploy.

1. Compare host hardware against required/expected thresholds
2. Verify the container runtime and compose tool
3. Check that the stack images exist locally
"""

from .gate import CapabilityGate, GateResult
from .probe import ActualCapabilities, HostProbe
from .report import ReportRow, format_bytes, print_capability_report
from .requirements import Classification, HardwareRequirement, classify, default_requirements
from .runtime import RuntimeChecker, required_images

__all__ = [
    # Thresholds
    "Classification",
    "HardwareRequirement",
    "classify",
    "default_requirements",
    # Probing
    "ActualCapabilities",
    "HostProbe",
    # Report
    "ReportRow",
    "format_bytes",
    "print_capability_report",
    # Gate
    "CapabilityGate",
    "GateResult",
    # Runtime
    "RuntimeChecker",
    "required_images",
]

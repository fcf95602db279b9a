"""Capability report rendering.

Pure presentation: rows are computed first, then handed to the renderer
as a whole.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .requirements import Classification

console = Console()

SEVERITY_COLORS = {
    Classification.BELOW_REQUIRED: "red",
    Classification.BELOW_EXPECTED: "yellow",
    Classification.MEETS_EXPECTED: "green",
}

BYTE_UNITS = ("B", "KiB", "MiB", "GiB", "TiB", "PiB")


@dataclass(frozen=True)
class ReportRow:
    """One metric line of the capability report."""

    label: str
    required: str
    expected: str
    actual: str
    classification: Classification


def format_bytes(value: int) -> str:
    """Format a byte count with the largest fitting binary unit.

    Examples: 512 -> "512 B", 4294967296 -> "4.00 GiB".
    """
    size = float(value)
    for unit in BYTE_UNITS:
        if size < 1024 or unit == BYTE_UNITS[-1]:
            break
        size /= 1024
    if unit == "B":
        return f"{value} B"
    return f"{size:.2f} {unit}"


def format_ports(ports: Sequence[int]) -> str:
    """Join port numbers for display."""
    return ", ".join(str(p) for p in ports)


def build_report_table(rows: Sequence[ReportRow]) -> Table:
    """Build the comparison table, preserving row order."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("")
    table.add_column("Required")
    table.add_column("Expected")
    table.add_column("Actual")

    for row in rows:
        color = SEVERITY_COLORS[row.classification]
        table.add_row(
            row.label,
            row.required,
            row.expected,
            Text(row.actual, style=f"bold {color}"),
        )
    return table


def print_capability_report(rows: Sequence[ReportRow], out: Console | None = None) -> None:
    """Print the capability report to stdout.

    Args:
        rows: Report rows in display order
        out: Console to print to (default: module console on stdout)
    """
    (out or console).print(build_report_table(rows))

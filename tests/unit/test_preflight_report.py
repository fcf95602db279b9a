"""Unit tests for capability report rendering."""

from __future__ import annotations

import io

from rich.console import Console

from tower_installer.preflight import (
    Classification,
    ReportRow,
    format_bytes,
    print_capability_report,
)
from tower_installer.preflight.report import build_report_table


def render(rows, color: bool = False) -> str:
    buffer = io.StringIO()
    console = Console(file=buffer, width=120, force_terminal=color, color_system="standard")
    print_capability_report(rows, console)
    return buffer.getvalue()


ROWS = [
    ReportRow("cpu cores", "2", "4", "1", Classification.BELOW_REQUIRED),
    ReportRow("memory", "4.00 GiB", "8.00 GiB", "6.00 GiB", Classification.BELOW_EXPECTED),
    ReportRow("ports", "8811", "-", "Ok", Classification.MEETS_EXPECTED),
]


class TestFormatBytes:
    """Tests for binary unit formatting."""

    def test_bytes(self):
        assert format_bytes(0) == "0 B"
        assert format_bytes(512) == "512 B"

    def test_gibibytes(self):
        assert format_bytes(4 * 1024**3) == "4.00 GiB"
        assert format_bytes(40 * 1024**3) == "40.00 GiB"

    def test_fractional(self):
        assert format_bytes(1536) == "1.50 KiB"

    def test_largest_unit(self):
        assert format_bytes(2 * 1024**6) == "2048.00 PiB"


class TestReportTable:
    """Tests for the report table."""

    def test_header_and_rows(self):
        output = render(ROWS)
        assert "Required" in output
        assert "Expected" in output
        assert "Actual" in output
        assert "4.00 GiB" in output

    def test_preserves_row_order(self):
        output = render(ROWS)
        assert output.index("cpu cores") < output.index("memory") < output.index("ports")

    def test_four_columns(self):
        table = build_report_table(ROWS)
        assert len(table.columns) == 4
        assert table.row_count == 3

    def test_actual_cell_colored_by_severity(self):
        table = build_report_table(ROWS)
        actual_cells = list(table.columns[3].cells)
        assert [cell.style for cell in actual_cells] == [
            "bold red",
            "bold yellow",
            "bold green",
        ]

    def test_color_output_contains_escape_codes(self):
        output = render(ROWS, color=True)
        assert "\x1b[" in output

"""Rich console utilities for lifecycle-report.

This module provides a shared Rich Console instance and helpers that
render the lifecycle report, colored by support status.
"""

import os
from typing import Any, Dict, Iterable, List, Optional, Tuple

from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from ._lifecycle.models import NO_VALUE, ClassificationResult, Status, SupportPhase

IS_CI = os.getenv("CI") == "true"

# Hex colors for local terminals, ANSI names in CI so both light and dark themes work
BRAND_COLORS_HEX = {
    "blue": "#4059D0",
    "purple": "#A85AC0",
    "orange": "#F4B57F",
}

BRAND_COLORS_ADAPTIVE = {
    "blue": "blue",
    "purple": "magenta",
    "orange": "yellow",
}

BRAND_COLORS = BRAND_COLORS_ADAPTIVE if IS_CI else BRAND_COLORS_HEX

custom_theme = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "highlight": "magenta",
        "status.supported": "green",
        "status.eol": "red",
        "status.unknown": "yellow",
        "phase.nearing": "bold dark_orange",
    }
)

STATUS_STYLES = {
    Status.SUPPORTED: "status.supported",
    Status.END_OF_LIFE: "status.eol",
    Status.UNKNOWN: "status.unknown",
}

REPORT_COLUMNS = [
    "OS",
    "Cycle",
    "Device",
    "Model",
    "User",
    "Version",
    "Status",
    "Phase",
    "EOL Date",
    "Days",
    "Lowest Supported",
    "Newest Available",
]

console = Console(theme=custom_theme, color_system="auto")


def print_banner(version: str = "unknown") -> None:
    """Print the tool banner."""
    banner = Text()
    banner.append("OS Lifecycle Report", style=f"bold {BRAND_COLORS['blue']}")
    version_display = f"v{version}" if version and version[0:1].isdigit() else version
    banner.append(f" {version_display}", style=BRAND_COLORS["orange"])
    banner.append(" - managed devices vs. endoflife.date\n", style=BRAND_COLORS["purple"])
    console.print(banner)


def print_summary_table(title: str, data: List[Tuple[str, Any]]) -> None:
    """
    Print a two-column summary table.

    Args:
        title: Table title
        data: List of (label, value) tuples
    """
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    for label, value in data:
        table.add_row(label, str(value))

    console.print(table)


def print_status_summary(counts: Dict[Status, int], skipped: int = 0) -> None:
    """Print device counts per status."""
    data: List[Tuple[str, Any]] = [(status.value, counts.get(status, 0)) for status in Status]
    data.append(("Total", sum(counts.values())))
    if skipped:
        data.append(("Skipped (no version)", skipped))
    print_summary_table("Devices by Status", data)


def _format_row(result: ClassificationResult) -> List[str]:
    return [
        result.os_family,
        result.cycle or NO_VALUE,
        result.device_name or NO_VALUE,
        result.model or NO_VALUE,
        result.user or NO_VALUE,
        result.os_version,
        result.status.value,
        result.phase.value,
        result.eol_date.isoformat() if result.eol_date else NO_VALUE,
        str(result.days_to_eol) if result.days_to_eol is not None else NO_VALUE,
        result.lowest_supported,
        result.newest_available,
    ]


def build_report_table(results: Iterable[ClassificationResult], title: Optional[str] = None) -> Table:
    """
    Build the report table with one styled row per result.

    Rows take the color of their status; supported devices that are
    nearing end-of-life get a highlighted phase cell.
    """
    table = Table(title=title, show_header=True, header_style="bold", expand=False)
    for column in REPORT_COLUMNS:
        table.add_column(column, overflow="fold", justify="right" if column == "Days" else "left")

    for result in results:
        cells = _format_row(result)
        if result.phase is SupportPhase.NEARING_EOL:
            phase_index = REPORT_COLUMNS.index("Phase")
            row = [Text(cell) for cell in cells]
            row[phase_index] = Text(cells[phase_index], style="phase.nearing")
            table.add_row(*row, style=STATUS_STYLES[result.status])
        else:
            table.add_row(*cells, style=STATUS_STYLES[result.status])

    return table


def print_report(results: List[ClassificationResult], only_eol: bool = False) -> None:
    """Print the lifecycle report table, or a notice when it is empty."""
    title = "End-of-Life Devices" if only_eol else "Device OS Lifecycle"
    if not results:
        console.print(f"[info]{title}: no devices to report[/info]")
        return
    console.print(build_report_table(results, title=title))


def print_final_failure(message: str) -> None:
    """Print final failure message."""
    console.print()
    console.rule("[bold red]FAILED[/bold red]", style="red")
    console.print(f"[bold red]{message}[/bold red]", justify="center")
    console.print()

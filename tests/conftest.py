from collections import defaultdict

from rich.console import Console
from rich.table import Table

# Markers registered in pyproject.toml
KNOWN_MARKERS = ("unit_common", "unit_lsp", "unit_ui")


def _collect_marker_stats(terminalreporter) -> dict[str, dict[str, float]]:
    stats: dict[str, dict[str, float]] = defaultdict(
        lambda: {"passed": 0, "failed": 0, "skipped": 0, "total": 0, "duration": 0.0}
    )
    for outcome in ("passed", "failed", "skipped"):
        for report in terminalreporter.stats.get(outcome, []):
            # Count the test call itself, plus tests skipped during setup
            if report.when != "call" and not (report.when == "setup" and report.skipped):
                continue
            for marker in KNOWN_MARKERS:
                if marker in report.keywords:
                    entry = stats[marker]
                    entry[outcome] += 1
                    entry["total"] += 1
                    entry["duration"] += getattr(report, "duration", 0.0)
    return stats


def pytest_terminal_summary(terminalreporter, exitstatus, config):
    """Print per-package test statistics at the end of the session."""
    _ = (exitstatus, config)
    stats = _collect_marker_stats(terminalreporter)
    if not stats:
        return

    table = Table(title="Tests by package marker", show_header=True, header_style="bold magenta")
    table.add_column("Marker", style="cyan")
    table.add_column("Total", justify="right")
    table.add_column("Passed", justify="right", style="green")
    table.add_column("Failed", justify="right", style="red")
    table.add_column("Skipped", justify="right", style="yellow")
    table.add_column("Duration (s)", justify="right", style="blue")

    for marker in sorted(stats):
        entry = stats[marker]
        table.add_row(
            marker,
            str(entry["total"]),
            str(entry["passed"]),
            str(entry["failed"]),
            str(entry["skipped"]),
            f"{entry['duration']:.2f}",
        )

    console = Console()
    console.print()
    console.print(table)

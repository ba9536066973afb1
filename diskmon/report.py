"""
Rich rendering of a single sweep, used by `diskmon --once`.
"""

from collections.abc import Sequence

from rich.console import Console
from rich.table import Table

from diskmon.disk.mounts import find_partition
from diskmon.events import CheckEvent, EventKind

STATUS_STYLES = {
    EventKind.OK: ("OK", "green"),
    EventKind.THRESHOLD_EXCEEDED: ("OVER THRESHOLD", "red bold"),
    EventKind.STATS_NOT_FOUND: ("NOT FOUND", "yellow"),
    EventKind.PROBE_ERROR: ("PROBE ERROR", "yellow"),
}


def _percent(value: float | None) -> str:
    if value is None:
        return "-"
    return f"{value * 100:.1f}%"


def build_table(events: Sequence[CheckEvent]) -> Table:
    table = Table(title="Disk Capacity", show_header=True)
    table.add_column("Mount Point", style="cyan")
    table.add_column("Device", style="dim")
    table.add_column("FS Type", style="dim")
    table.add_column("Status")
    table.add_column("Used", justify="right")
    table.add_column("Threshold", justify="right")

    for event in events:
        part = find_partition(event.mount_point) if event.kind is not EventKind.STATS_NOT_FOUND else None
        label, style = STATUS_STYLES[event.kind]
        status = f"[{style}]{label}[/{style}]"
        if event.kind is EventKind.PROBE_ERROR:
            status += f" [dim](code {event.code})[/dim]"
        table.add_row(
            event.mount_point,
            part.device if part else "-",
            part.fstype if part else "-",
            status,
            _percent(event.current),
            _percent(event.threshold),
        )
    return table


def render_report(events: Sequence[CheckEvent], console: Console | None = None) -> None:
    """Print a table of sweep results followed by a one-line summary."""
    console = console or Console()
    console.print(build_table(events))

    failed = [e for e in events if not e.ok]
    alarms = [e for e in failed if e.is_alarm]
    if not failed:
        console.print(f"[green]All {len(events)} target(s) within threshold.[/green]")
    else:
        console.print(
            f"[red]{len(failed)} of {len(events)} target(s) failed "
            f"({len(alarms)} over threshold).[/red]"
        )

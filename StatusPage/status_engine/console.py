"""
Console rendering of a StatusSnapshot using the Rich library.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from status_engine.models import (
    Incident,
    IncidentType,
    ServiceView,
    SeverityLevel,
    StatusSnapshot,
)
from status_engine.severity import label_for

logger = logging.getLogger(__name__)

# Color mapping for severity levels
LEVEL_COLORS: dict[SeverityLevel, str] = {
    SeverityLevel.MAJOR_OUTAGE: "bold red",
    SeverityLevel.PARTIAL_OUTAGE: "dark_orange",
    SeverityLevel.DEGRADED: "yellow",
    SeverityLevel.MAINTENANCE: "blue",
    SeverityLevel.OPERATIONAL: "green",
    SeverityLevel.UNKNOWN: "dim",
}

LEVEL_ICONS: dict[SeverityLevel, str] = {
    SeverityLevel.MAJOR_OUTAGE: "🔴",
    SeverityLevel.PARTIAL_OUTAGE: "🟠",
    SeverityLevel.DEGRADED: "🟡",
    SeverityLevel.MAINTENANCE: "🔧",
    SeverityLevel.OPERATIONAL: "🟢",
    SeverityLevel.UNKNOWN: "⚪",
}


def _pill(level: SeverityLevel) -> Text:
    return Text(f"{LEVEL_ICONS[level]} {label_for(level)}", style=LEVEL_COLORS[level])


def _add_service_rows(table: Table, services: Iterable[ServiceView]) -> None:
    for svc in services:
        table.add_row("", svc.name, _pill(svc.status))
        for comp in svc.components:
            table.add_row("", f"  └ {comp.name}", _pill(comp.status))


def _incident_lines(title: str, incidents: tuple[Incident, ...]) -> Optional[Text]:
    if not incidents:
        return None
    text = Text()
    text.append(f"{title}\n", style="bold white")
    for inc in incidents:
        text.append(f"  • {inc.title or inc.id}", style="white")
        text.append(f" [{inc.current_lifecycle_status.value}", style="dim")
        if inc.type == IncidentType.INCIDENT:
            text.append(f" | impact: {inc.impact.value}", style="dim")
        text.append("]\n", style="dim")
    return text


def render_snapshot(snapshot: StatusSnapshot, console: Optional[Console] = None) -> None:
    """Print the overall banner, the service table and current incidents."""
    console = console or Console()
    level = snapshot.overall.level

    console.print(
        Panel(
            Text(snapshot.overall.message, style=LEVEL_COLORS[level]),
            title=f"{LEVEL_ICONS[level]} {label_for(level)}",
            subtitle=snapshot.generated_at.strftime("%Y-%m-%d %H:%M:%S %Z").strip(),
            border_style=LEVEL_COLORS[level],
        )
    )

    table = Table(show_header=True, header_style="bold")
    table.add_column("Group")
    table.add_column("Service")
    table.add_column("Status")
    for group in snapshot.service_groups:
        table.add_row(Text(group.name, style="bold cyan"), "", _pill(group.overall_status))
        _add_service_rows(table, group.services)
    if snapshot.ungrouped_services:
        table.add_row(Text("Other", style="bold cyan"), "", _pill(snapshot.ungrouped_status))
        _add_service_rows(table, snapshot.ungrouped_services)
    console.print(table)

    for title, incidents in (
        ("Current Incidents", snapshot.active_incidents),
        ("Scheduled Maintenance", snapshot.scheduled_maintenance),
    ):
        lines = _incident_lines(title, incidents)
        if lines is not None:
            console.print(lines)

    logger.debug("Rendered snapshot (overall=%s)", level.value)

"""
Status aggregation engine.

Turns the administrator's configuration (manual status, subcomponents)
and the current incidents into the status shown on the public page.

Every function here is pure: no I/O, no clock reads, no mutation of its
arguments.  The caller decides when to re-run and which incidents count
as active; the resolvers re-check the lifecycle themselves so a caller
passing historical incidents still gets the right answer.

Pipeline:
    reduce_components       → worst subcomponent status
    map_incident_impact     → severity an incident imposes, or None
    resolve_service_status  → manual ∨ components ∨ incidents
    resolve_overall_status  → banner level + message
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional, Sequence

from status_engine.models import (
    DerivedServiceStatus,
    Incident,
    IncidentImpact,
    IncidentLifecycleStatus,
    IncidentType,
    OverallStatus,
    Service,
    ServiceComponent,
    SeverityLevel,
)
from status_engine.severity import more_severe_of, most_severe

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Tables
# ---------------------------------------------------------------------------

# Maintenance lifecycle phases that are ongoing or about to start.
IMMINENT_MAINTENANCE_STATUSES: frozenset[IncidentLifecycleStatus] = frozenset(
    {
        IncidentLifecycleStatus.SCHEDULED,
        IncidentLifecycleStatus.ACKNOWLEDGED,
        IncidentLifecycleStatus.IDENTIFIED,
        IncidentLifecycleStatus.IN_PROGRESS,
    }
)

IMPACT_SEVERITY: dict[IncidentImpact, Optional[SeverityLevel]] = {
    IncidentImpact.CRITICAL: SeverityLevel.MAJOR_OUTAGE,
    IncidentImpact.SIGNIFICANT: SeverityLevel.PARTIAL_OUTAGE,
    IncidentImpact.MINOR: SeverityLevel.DEGRADED,
    IncidentImpact.NONE: None,
}

OVERALL_MESSAGES: dict[SeverityLevel, str] = {
    SeverityLevel.MAJOR_OUTAGE: "Major service outage impacting multiple systems.",
    SeverityLevel.PARTIAL_OUTAGE: "Some services are experiencing a partial outage.",
    SeverityLevel.DEGRADED: "Some services are experiencing degraded performance.",
    SeverityLevel.MAINTENANCE: "Services are currently undergoing scheduled maintenance.",
    SeverityLevel.OPERATIONAL: "All systems operational.",
    SeverityLevel.UNKNOWN: "System status is currently unknown.",
}


# ---------------------------------------------------------------------------
# Incident activity
# ---------------------------------------------------------------------------

def is_active(incident: Incident) -> bool:
    """Publicly visible and not in a terminal lifecycle status."""
    return incident.is_publicly_visible and not incident.is_terminal


def filter_active_incidents(incidents: Iterable[Incident]) -> list[Incident]:
    """Keep only active incidents, preserving order."""
    return [inc for inc in incidents if is_active(inc)]


# ---------------------------------------------------------------------------
# Reducers
# ---------------------------------------------------------------------------

def reduce_components(components: Iterable[ServiceComponent]) -> SeverityLevel:
    """Worst status among ``components``; OPERATIONAL for an empty list."""
    return most_severe((c.status for c in components), start=SeverityLevel.OPERATIONAL)


def map_incident_impact(
    incident: Incident,
    *,
    imminent_maintenance: frozenset[IncidentLifecycleStatus] = IMMINENT_MAINTENANCE_STATUSES,
) -> Optional[SeverityLevel]:
    """
    Severity an incident imposes on the services it affects.

    Returns None when the incident should not change the displayed
    status: terminal lifecycle, informational notices, maintenance that
    is not yet imminent (or already monitoring), and impact NONE.
    """
    if incident.is_terminal:
        return None

    if incident.type == IncidentType.MAINTENANCE:
        if incident.current_lifecycle_status in imminent_maintenance:
            return SeverityLevel.MAINTENANCE
        return None

    if incident.type == IncidentType.INCIDENT:
        return IMPACT_SEVERITY[incident.impact]

    return None


def resolve_service_status(
    service: Service,
    incidents: Iterable[Incident],
    *,
    imminent_maintenance: frozenset[IncidentLifecycleStatus] = IMMINENT_MAINTENANCE_STATUSES,
) -> DerivedServiceStatus:
    """
    Combine manual baseline, subcomponents and incidents into one status.

    Subcomponents and incidents can only make the result more severe
    than the manual baseline, never less.
    """
    internal = service.manual_status
    if service.components:
        # An empty component list must not lift an UNKNOWN baseline to OPERATIONAL.
        internal = more_severe_of(internal, reduce_components(service.components))

    impacts = []
    for incident in incidents:
        if service.id not in incident.affected_service_ids or incident.is_terminal:
            continue
        impact = map_incident_impact(incident, imminent_maintenance=imminent_maintenance)
        if impact is not None:
            impacts.append(impact)

    final = most_severe(impacts, start=internal)
    if final != service.manual_status:
        logger.debug(
            "Service %s: manual=%s internal=%s final=%s (%d incident impacts)",
            service.id,
            service.manual_status.value,
            internal.value,
            final.value,
            len(impacts),
        )
    return DerivedServiceStatus(service_id=service.id, status=final)


def derive_service_statuses(
    services: Iterable[Service],
    incidents: Iterable[Incident],
    *,
    imminent_maintenance: frozenset[IncidentLifecycleStatus] = IMMINENT_MAINTENANCE_STATUSES,
) -> list[DerivedServiceStatus]:
    """Resolve every service against the same incident set, in input order."""
    incident_list = list(incidents)
    return [
        resolve_service_status(svc, incident_list, imminent_maintenance=imminent_maintenance)
        for svc in services
    ]


def resolve_overall_status(
    statuses: Iterable[DerivedServiceStatus],
    messages: Mapping[SeverityLevel, str] = OVERALL_MESSAGES,
) -> OverallStatus:
    """
    System-wide status: the most severe service status, or OPERATIONAL
    when there are no services at all.
    """
    level = most_severe((s.status for s in statuses), start=SeverityLevel.OPERATIONAL)
    return OverallStatus(level=level, message=messages[level])


def resolve_group_status(statuses: Sequence[SeverityLevel]) -> SeverityLevel:
    """
    Status pill for a service group.

    Unlike the overall banner, an empty group or one that mixes
    operational with unknown services is UNKNOWN.
    """
    if not statuses:
        return SeverityLevel.UNKNOWN
    worst = most_severe(statuses, start=SeverityLevel.OPERATIONAL)
    if worst != SeverityLevel.OPERATIONAL:
        return worst
    if all(s == SeverityLevel.OPERATIONAL for s in statuses):
        return SeverityLevel.OPERATIONAL
    return SeverityLevel.UNKNOWN

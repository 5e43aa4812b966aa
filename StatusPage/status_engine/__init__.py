"""
Status aggregation engine: derives the displayed status of each service,
service group and of the whole system from manual statuses, subcomponents
and active incidents.
"""

from status_engine.engine import (
    OVERALL_MESSAGES,
    derive_service_statuses,
    filter_active_incidents,
    is_active,
    map_incident_impact,
    reduce_components,
    resolve_group_status,
    resolve_overall_status,
    resolve_service_status,
)
from status_engine.models import (
    DerivedServiceStatus,
    Incident,
    IncidentImpact,
    IncidentLifecycleStatus,
    IncidentType,
    OverallStatus,
    Service,
    ServiceComponent,
    ServiceGroup,
    SeverityLevel,
    StatusSnapshot,
)
from status_engine.severity import SEVERITY_ORDER, more_severe, more_severe_of
from status_engine.snapshot import build_snapshot

__all__ = [
    "OVERALL_MESSAGES",
    "SEVERITY_ORDER",
    "DerivedServiceStatus",
    "Incident",
    "IncidentImpact",
    "IncidentLifecycleStatus",
    "IncidentType",
    "OverallStatus",
    "Service",
    "ServiceComponent",
    "ServiceGroup",
    "SeverityLevel",
    "StatusSnapshot",
    "build_snapshot",
    "derive_service_statuses",
    "filter_active_incidents",
    "is_active",
    "map_incident_impact",
    "more_severe",
    "more_severe_of",
    "reduce_components",
    "resolve_group_status",
    "resolve_overall_status",
    "resolve_service_status",
]

"""
Domain models for the status aggregation engine.

All models use Pydantic v2 for validation and serialization.  Inputs and
outputs are frozen so a snapshot handed to the engine can never be
mutated by it.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class SeverityLevel(str, Enum):
    """Operational level of a service, listed most → least severe."""
    MAJOR_OUTAGE = "major_outage"
    PARTIAL_OUTAGE = "partial_outage"
    DEGRADED = "degraded"
    MAINTENANCE = "maintenance"
    OPERATIONAL = "operational"
    UNKNOWN = "unknown"


class IncidentType(str, Enum):
    INCIDENT = "incident"
    MAINTENANCE = "maintenance"
    INFORMATION = "information"


class IncidentImpact(str, Enum):
    """Impact of an incident.  Only meaningful for IncidentType.INCIDENT."""
    CRITICAL = "critical"
    SIGNIFICANT = "significant"
    MINOR = "minor"
    NONE = "none"


class IncidentLifecycleStatus(str, Enum):
    """Lifecycle status of an incident or maintenance window."""
    DETECTED = "detected"
    ACKNOWLEDGED = "acknowledged"
    INVESTIGATING = "investigating"
    IDENTIFIED = "identified"
    IN_PROGRESS = "in_progress"
    MONITORING = "monitoring"
    RESOLVED = "resolved"
    COMPLETED = "completed"
    DISMISSED = "dismissed"
    SCHEDULED = "scheduled"
    UPDATE = "update"


TERMINAL_LIFECYCLE_STATUSES: frozenset[IncidentLifecycleStatus] = frozenset(
    {
        IncidentLifecycleStatus.RESOLVED,
        IncidentLifecycleStatus.COMPLETED,
        IncidentLifecycleStatus.DISMISSED,
    }
)


# ---------------------------------------------------------------------------
# Input models
# ---------------------------------------------------------------------------

class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class ServiceComponent(_Frozen):
    """A named sub-part of a service (e.g. 'Authentication Endpoint')."""
    id: str
    name: str
    status: SeverityLevel
    description: Optional[str] = None


class Service(_Frozen):
    """
    A publicly monitored service.

    ``manual_status`` is the administrator-set baseline; it is read from
    the ``status`` key of incoming JSON.
    """
    id: str
    name: str
    manual_status: SeverityLevel = Field(alias="status")
    components: tuple[ServiceComponent, ...] = ()
    group_id: Optional[str] = None
    description: Optional[str] = None
    display_order: int = 0
    is_monitored_publicly: bool = True


class ServiceGroup(_Frozen):
    id: str
    name: str
    display_order: int = 0


class Incident(_Frozen):
    """An incident, maintenance window or informational notice."""
    id: str
    title: str = ""
    type: IncidentType
    impact: IncidentImpact = IncidentImpact.NONE
    current_lifecycle_status: IncidentLifecycleStatus
    affected_service_ids: frozenset[str] = frozenset()
    is_publicly_visible: bool = True
    updated_at: Optional[datetime] = None

    @field_serializer("affected_service_ids")
    def _serialize_affected(self, ids: frozenset[str]) -> list[str]:
        return sorted(ids)

    @property
    def is_terminal(self) -> bool:
        return self.current_lifecycle_status in TERMINAL_LIFECYCLE_STATUSES


# ---------------------------------------------------------------------------
# Output models
# ---------------------------------------------------------------------------

class DerivedServiceStatus(_Frozen):
    """The displayed status of one service, recomputed on every call."""
    service_id: str
    status: SeverityLevel


class OverallStatus(_Frozen):
    """System-wide status shown in the banner."""
    level: SeverityLevel
    message: str


class ServiceView(_Frozen):
    """A service as it appears on the public page, with its derived status."""
    id: str
    name: str
    status: SeverityLevel
    description: Optional[str] = None
    components: tuple[ServiceComponent, ...] = ()


class GroupSnapshot(_Frozen):
    id: str
    name: str
    display_order: int
    overall_status: SeverityLevel
    services: tuple[ServiceView, ...] = ()


class StatusSnapshot(_Frozen):
    """
    Full public status view: overall banner, grouped services and the
    incidents currently shown on the page.
    """
    overall: OverallStatus
    service_groups: tuple[GroupSnapshot, ...] = ()
    ungrouped_services: tuple[ServiceView, ...] = ()
    ungrouped_status: SeverityLevel = SeverityLevel.UNKNOWN
    active_incidents: tuple[Incident, ...] = ()
    scheduled_maintenance: tuple[Incident, ...] = ()
    generated_at: datetime

"""
StatusSnapshot builder: the full public view in one value.

Groups derived service statuses under their service groups, splits the
active incidents (newest first) into incidents and scheduled
maintenance, and attaches the overall banner.  ``generated_at`` is supplied by
the caller so the same inputs always produce the same snapshot.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable

from status_engine.engine import (
    IMMINENT_MAINTENANCE_STATUSES,
    derive_service_statuses,
    filter_active_incidents,
    resolve_group_status,
    resolve_overall_status,
)
from status_engine.models import (
    GroupSnapshot,
    Incident,
    IncidentLifecycleStatus,
    IncidentType,
    Service,
    ServiceGroup,
    ServiceView,
    SeverityLevel,
    StatusSnapshot,
)

logger = logging.getLogger(__name__)


def _newest_first(incidents: list[Incident]) -> list[Incident]:
    """Sort by ``updated_at`` descending; undated incidents go last, ties keep input order."""
    dated = [i for i in incidents if i.updated_at is not None]
    undated = [i for i in incidents if i.updated_at is None]
    dated.sort(key=lambda i: i.updated_at, reverse=True)
    return dated + undated


def _service_view(service: Service, status: SeverityLevel) -> ServiceView:
    return ServiceView(
        id=service.id,
        name=service.name,
        status=status,
        description=service.description,
        components=service.components,
    )


def build_snapshot(
    services: Iterable[Service],
    incidents: Iterable[Incident],
    groups: Iterable[ServiceGroup] = (),
    *,
    generated_at: datetime,
    imminent_maintenance: frozenset[IncidentLifecycleStatus] = IMMINENT_MAINTENANCE_STATUSES,
) -> StatusSnapshot:
    """Build the public status view from raw services, incidents and groups."""
    public_services = sorted(
        (s for s in services if s.is_monitored_publicly),
        key=lambda s: s.display_order,
    )
    active = _newest_first(filter_active_incidents(incidents))

    derived = derive_service_statuses(
        public_services, active, imminent_maintenance=imminent_maintenance
    )
    views = [_service_view(svc, d.status) for svc, d in zip(public_services, derived)]

    sorted_groups = sorted(groups, key=lambda g: g.display_order)
    known_group_ids = {g.id for g in sorted_groups}

    by_group: dict[str, list[ServiceView]] = {}
    ungrouped: list[ServiceView] = []
    for svc, view in zip(public_services, views):
        if svc.group_id and svc.group_id in known_group_ids:
            by_group.setdefault(svc.group_id, []).append(view)
        else:
            ungrouped.append(view)

    group_snapshots = []
    for group in sorted_groups:
        members = by_group.get(group.id, [])
        group_snapshots.append(
            GroupSnapshot(
                id=group.id,
                name=group.name,
                display_order=group.display_order,
                overall_status=resolve_group_status([v.status for v in members]),
                services=tuple(members),
            )
        )

    snapshot = StatusSnapshot(
        overall=resolve_overall_status(derived),
        service_groups=tuple(group_snapshots),
        ungrouped_services=tuple(ungrouped),
        ungrouped_status=resolve_group_status([v.status for v in ungrouped]),
        active_incidents=tuple(i for i in active if i.type == IncidentType.INCIDENT),
        scheduled_maintenance=tuple(i for i in active if i.type == IncidentType.MAINTENANCE),
        generated_at=generated_at,
    )
    logger.debug(
        "Snapshot built: %d services, %d groups, %d active incidents, overall=%s",
        len(views),
        len(group_snapshots),
        len(active),
        snapshot.overall.level.value,
    )
    return snapshot

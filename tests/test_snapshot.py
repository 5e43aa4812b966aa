"""Tests for the public status snapshot builder."""

import json
from datetime import datetime, timezone

from status_engine.loader import load_status_input
from status_engine.models import (
    IncidentImpact,
    IncidentLifecycleStatus,
    IncidentType,
    ServiceGroup,
    SeverityLevel,
)
from status_engine.snapshot import build_snapshot
from tests.factories import make_component, make_incident, make_service


class TestBuildSnapshot:
    def test_empty_inputs(self, fixed_now):
        snap = build_snapshot([], [], [], generated_at=fixed_now)
        assert snap.overall.level == SeverityLevel.OPERATIONAL
        assert snap.service_groups == ()
        assert snap.ungrouped_services == ()
        assert snap.generated_at == fixed_now

    def test_groups_sorted_and_services_assigned(self, fixed_now):
        groups = [
            ServiceGroup(id="g2", name="Second", display_order=2),
            ServiceGroup(id="g1", name="First", display_order=1),
        ]
        services = [
            make_service(id="b", group_id="g1", display_order=2),
            make_service(id="a", group_id="g1", display_order=1),
            make_service(id="c", group_id="g2", status=SeverityLevel.DEGRADED),
        ]
        snap = build_snapshot(services, [], groups, generated_at=fixed_now)

        assert [g.id for g in snap.service_groups] == ["g1", "g2"]
        assert [s.id for s in snap.service_groups[0].services] == ["a", "b"]
        assert snap.service_groups[0].overall_status == SeverityLevel.OPERATIONAL
        assert snap.service_groups[1].overall_status == SeverityLevel.DEGRADED

    def test_empty_group_is_unknown(self, fixed_now):
        groups = [ServiceGroup(id="empty", name="Empty")]
        snap = build_snapshot([make_service()], [], groups, generated_at=fixed_now)
        assert snap.service_groups[0].overall_status == SeverityLevel.UNKNOWN
        assert snap.overall.level == SeverityLevel.OPERATIONAL

    def test_ungrouped_and_unknown_group_services(self, fixed_now):
        services = [
            make_service(id="loose"),
            make_service(id="orphan", group_id="missing"),
        ]
        snap = build_snapshot(services, [], [], generated_at=fixed_now)
        assert [s.id for s in snap.ungrouped_services] == ["loose", "orphan"]

    def test_private_services_are_excluded(self, fixed_now):
        services = [
            make_service(id="public"),
            make_service(id="private", status=SeverityLevel.MAJOR_OUTAGE, is_monitored_publicly=False),
        ]
        snap = build_snapshot(services, [], [], generated_at=fixed_now)
        assert [s.id for s in snap.ungrouped_services] == ["public"]
        assert snap.overall.level == SeverityLevel.OPERATIONAL

    def test_incidents_split_by_type(self, fixed_now):
        incidents = [
            make_incident(id="i1", impact=IncidentImpact.MINOR),
            make_incident(
                id="m1",
                type=IncidentType.MAINTENANCE,
                lifecycle=IncidentLifecycleStatus.SCHEDULED,
            ),
            make_incident(id="n1", type=IncidentType.INFORMATION),
            make_incident(id="old", lifecycle=IncidentLifecycleStatus.RESOLVED),
            make_incident(id="hidden", impact=IncidentImpact.CRITICAL, is_publicly_visible=False),
        ]
        snap = build_snapshot([make_service()], incidents, [], generated_at=fixed_now)

        assert [i.id for i in snap.active_incidents] == ["i1"]
        assert [i.id for i in snap.scheduled_maintenance] == ["m1"]
        assert snap.ungrouped_services[0].status == SeverityLevel.DEGRADED
        assert snap.overall.level == SeverityLevel.DEGRADED

    def test_components_are_carried_into_view(self, fixed_now):
        comp = make_component(SeverityLevel.PARTIAL_OUTAGE, name="Queue")
        snap = build_snapshot([make_service(components=[comp])], [], [], generated_at=fixed_now)
        view = snap.ungrouped_services[0]
        assert view.status == SeverityLevel.PARTIAL_OUTAGE
        assert view.components == (comp,)

    def test_acknowledged_maintenance_setting(self, fixed_now):
        inc = make_incident(
            type=IncidentType.MAINTENANCE,
            lifecycle=IncidentLifecycleStatus.ACKNOWLEDGED,
        )
        default = build_snapshot([make_service()], [inc], [], generated_at=fixed_now)
        narrowed = build_snapshot(
            [make_service()],
            [inc],
            [],
            generated_at=fixed_now,
            imminent_maintenance=frozenset({IncidentLifecycleStatus.SCHEDULED}),
        )
        assert default.overall.level == SeverityLevel.MAINTENANCE
        assert narrowed.overall.level == SeverityLevel.OPERATIONAL

    def test_same_inputs_same_snapshot(self, fixed_now):
        services = [make_service(components=[make_component(SeverityLevel.DEGRADED)])]
        incidents = [make_incident(impact=IncidentImpact.CRITICAL)]
        first = build_snapshot(services, incidents, [], generated_at=fixed_now)
        second = build_snapshot(services, incidents, [], generated_at=fixed_now)
        assert first == second

    def test_sample_data(self, sample_data_path, fixed_now):
        data = load_status_input(sample_data_path)
        snap = build_snapshot(data.services, data.incidents, data.groups, generated_at=fixed_now)

        statuses = {
            view.id: view.status
            for group in snap.service_groups
            for view in group.services
        }
        assert statuses == {
            "api_main": SeverityLevel.DEGRADED,
            "website_portal": SeverityLevel.MAINTENANCE,
            "payment_gateway": SeverityLevel.PARTIAL_OUTAGE,
        }
        assert [g.overall_status for g in snap.service_groups] == [
            SeverityLevel.DEGRADED,
            SeverityLevel.PARTIAL_OUTAGE,
        ]
        assert snap.overall.level == SeverityLevel.PARTIAL_OUTAGE
        assert [i.id for i in snap.active_incidents] == ["inc_payments_1"]
        assert [i.id for i in snap.scheduled_maintenance] == ["mnt_portal_1"]

    def test_incidents_newest_first(self, fixed_now):
        incidents = [
            make_incident(id="undated", impact=IncidentImpact.MINOR),
            make_incident(
                id="old",
                impact=IncidentImpact.MINOR,
                updated_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
            ),
            make_incident(
                id="tie-a",
                impact=IncidentImpact.MINOR,
                updated_at=datetime(2025, 1, 5, tzinfo=timezone.utc),
            ),
            make_incident(
                id="new",
                impact=IncidentImpact.MINOR,
                updated_at=datetime(2025, 1, 10, tzinfo=timezone.utc),
            ),
            make_incident(
                id="tie-b",
                impact=IncidentImpact.MINOR,
                updated_at=datetime(2025, 1, 5, tzinfo=timezone.utc),
            ),
        ]
        snap = build_snapshot([make_service()], incidents, [], generated_at=fixed_now)
        assert [i.id for i in snap.active_incidents] == ["new", "tie-a", "tie-b", "old", "undated"]

    def test_maintenance_newest_first(self, fixed_now):
        incidents = [
            make_incident(
                id=f"m{day}",
                type=IncidentType.MAINTENANCE,
                lifecycle=IncidentLifecycleStatus.SCHEDULED,
                updated_at=datetime(2025, 1, day, tzinfo=timezone.utc),
            )
            for day in (3, 9, 6)
        ]
        snap = build_snapshot([make_service()], incidents, [], generated_at=fixed_now)
        assert [i.id for i in snap.scheduled_maintenance] == ["m9", "m6", "m3"]

    def test_affected_service_ids_serialize_sorted(self, fixed_now):
        inc = make_incident(impact=IncidentImpact.MINOR, affects=("d", "a", "c", "svc", "b"))
        snap = build_snapshot([make_service()], [inc], [], generated_at=fixed_now)
        body = json.loads(snap.model_dump_json())
        assert body["active_incidents"][0]["affected_service_ids"] == ["a", "b", "c", "d", "svc"]
        assert snap.model_dump()["active_incidents"][0]["affected_service_ids"] == ["a", "b", "c", "d", "svc"]

    def test_ungrouped_status(self, fixed_now):
        services = [
            make_service(id="a"),
            make_service(id="b", status=SeverityLevel.MAINTENANCE),
            make_service(id="grouped", group_id="g", status=SeverityLevel.MAJOR_OUTAGE),
        ]
        groups = [ServiceGroup(id="g", name="G")]
        snap = build_snapshot(services, [], groups, generated_at=fixed_now)
        assert snap.ungrouped_status == SeverityLevel.MAINTENANCE

    def test_ungrouped_status_empty_is_unknown(self, fixed_now):
        groups = [ServiceGroup(id="g", name="G")]
        snap = build_snapshot([make_service(group_id="g")], [], groups, generated_at=fixed_now)
        assert snap.ungrouped_services == ()
        assert snap.ungrouped_status == SeverityLevel.UNKNOWN

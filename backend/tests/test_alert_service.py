import pytest

from societydesk.exceptions import InvalidStateTransition, NotFound, PermissionDenied, ValidationError
from societydesk.models.enums import AlertSeverity, AlertType
from societydesk.models.schemas import Actor, AlertTriggerRequest, AmenityUpdateRequest
from tests.helpers import START, visitor_request

FIRE = AlertTriggerRequest(type=AlertType.FIRE, message="Smoke detected in basement", location="basement")


def test_trigger_creates_active_alert(alert_service, security):
    alert = alert_service.trigger(security, FIRE)

    assert alert.is_active
    assert alert.acknowledged_by == []
    assert alert.reported_by == security.user_id
    assert alert.timestamp == START
    assert alert.severity == AlertSeverity.HIGH


def test_trigger_requires_message(alert_service, admin):
    with pytest.raises(ValidationError):
        alert_service.trigger(admin, AlertTriggerRequest(type=AlertType.PANIC, message="   "))
    assert alert_service.list_alerts() == []


def test_residents_cannot_trigger(alert_service, resident):
    with pytest.raises(PermissionDenied):
        alert_service.trigger(resident, FIRE)


def test_acknowledge_is_idempotent(alert_service, security, resident):
    alert = alert_service.trigger(security, FIRE)

    once = alert_service.acknowledge(resident, alert.alert_id)
    twice = alert_service.acknowledge(resident, alert.alert_id)

    assert once.acknowledged_by == [resident.user_id]
    assert twice.acknowledged_by == once.acknowledged_by


def test_acknowledgments_accumulate_in_order(alert_service, security, resident, admin, guest):
    alert = alert_service.trigger(security, FIRE)
    for actor in (resident, admin, resident, guest, admin):
        alert_service.acknowledge(actor, alert.alert_id)

    assert alert_service.get_alert(alert.alert_id).acknowledged_by == ["2", "1", "5"]


def test_resolve_deactivates_and_freezes_acknowledgments(alert_service, security, admin, resident, clock):
    alert = alert_service.trigger(security, FIRE)
    alert_service.acknowledge(resident, alert.alert_id)
    clock.advance(minutes=30)

    resolved = alert_service.resolve(admin, alert.alert_id)

    assert not resolved.is_active
    assert resolved.resolved_by == admin.user_id
    assert resolved.resolved_at == clock()
    assert resolved.acknowledged_by == [resident.user_id]

    with pytest.raises(InvalidStateTransition):
        alert_service.acknowledge(admin, alert.alert_id)
    with pytest.raises(InvalidStateTransition):
        alert_service.resolve(admin, alert.alert_id)


def test_list_active_only(alert_service, security):
    first = alert_service.trigger(security, FIRE)
    alert_service.trigger(security, AlertTriggerRequest(type=AlertType.MEDICAL, message="Fall at pool"))
    alert_service.resolve(security, first.alert_id)

    assert len(alert_service.list_alerts()) == 2
    assert [a.type for a in alert_service.list_alerts(active_only=True)] == [AlertType.MEDICAL]


def test_unknown_alert(alert_service, resident):
    with pytest.raises(NotFound):
        alert_service.acknowledge(resident, "nope")


def test_total_occupancy_counts_amenities_and_checked_in_visitors(
    ctx, alert_service, amenity_service, visitor_service, resident, admin, security
):
    amenity_total = sum(a.current_occupancy for a in amenity_service.list_amenities())

    inside = []
    for name in ("A", "B", "C"):
        v = visitor_service.register_visitor(resident, visitor_request(name=name))
        visitor_service.approve(admin, v.visitor_id)
        inside.append(visitor_service.check_in(security, v.visitor_id))
    visitor_service.check_out(security, inside[0].visitor_id)
    visitor_service.register_visitor(resident, visitor_request(name="Still pending"))

    occupancy = alert_service.total_occupancy()

    assert occupancy.amenity_occupancy == amenity_total
    assert occupancy.checked_in_visitors == 2
    assert occupancy.total_occupancy == amenity_total + 2


def test_total_occupancy_follows_amenity_changes(alert_service, amenity_service, admin, resident):
    before = alert_service.total_occupancy().total_occupancy

    amenity_service.check_in(resident, "amen-gf-07")
    amenity_service.update_amenity(admin, "amen-rt-o-09", AmenityUpdateRequest(current_occupancy=2))

    assert alert_service.total_occupancy().total_occupancy == before + 3


def test_facility_manager_can_acknowledge_but_not_resolve(alert_service, security):
    fm = Actor(user_id="fm", role="facility-manager")
    alert = alert_service.trigger(security, FIRE)

    assert alert_service.acknowledge(fm, alert.alert_id).acknowledged_by == ["fm"]
    with pytest.raises(PermissionDenied):
        alert_service.resolve(fm, alert.alert_id)

import pytest

from societydesk.exceptions import PermissionDenied
from societydesk.models.enums import Role
from societydesk.models.schemas import Actor
from societydesk.services.permissions import CAPABILITIES, is_allowed, require_role


def actor(role: Role) -> Actor:
    return Actor(user_id="u1", role=role)


@pytest.mark.parametrize(
    "role, operation, allowed",
    [
        (Role.RESIDENT, "register visitors", True),
        (Role.VISITOR, "register visitors", False),
        (Role.SECURITY, "check in visitors", True),
        (Role.RESIDENT, "check in visitors", False),
        (Role.FACILITY_MANAGER, "approve bookings", True),
        (Role.RESIDENT, "approve bookings", False),
        (Role.ADMIN, "manage amenities", True),
        (Role.FACILITY_MANAGER, "manage amenities", False),
        (Role.SECURITY, "trigger emergency alerts", True),
        (Role.RESIDENT, "trigger emergency alerts", False),
    ],
)
def test_capability_map(role, operation, allowed):
    assert is_allowed(actor(role), operation) is allowed


def test_every_role_may_acknowledge_alerts():
    for role in Role:
        assert is_allowed(actor(role), "acknowledge emergency alerts")


def test_unknown_operation_is_denied():
    assert not is_allowed(actor(Role.ADMIN), "launch rockets")


def test_require_role_raises_with_context():
    with pytest.raises(PermissionDenied) as exc_info:
        require_role(actor(Role.VISITOR), "manage amenities")

    assert exc_info.value.status_code == 403
    assert "manage amenities" in exc_info.value.message


def test_admin_holds_every_capability():
    missing = [op for op, roles in CAPABILITIES.items() if Role.ADMIN not in roles]
    assert missing == []

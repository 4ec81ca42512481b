"""
Role capabilities per core operation

Each operation names the roles allowed to invoke it. Services call
require_role() before mutating anything.
"""

import logging
from typing import Dict, FrozenSet

from societydesk.exceptions import PermissionDenied
from societydesk.models.enums import Role
from societydesk.models.schemas import Actor

logger = logging.getLogger(__name__)

ANY_ROLE: FrozenSet[Role] = frozenset(Role)

CAPABILITIES: Dict[str, FrozenSet[Role]] = {
    # visitors
    "register visitors": frozenset({Role.ADMIN, Role.RESIDENT, Role.SECURITY}),
    "bulk register visitors": frozenset({Role.ADMIN, Role.RESIDENT}),
    "approve visitors": frozenset({Role.ADMIN, Role.RESIDENT}),
    "reject visitors": frozenset({Role.ADMIN, Role.RESIDENT}),
    "check in visitors": frozenset({Role.ADMIN, Role.SECURITY}),
    "check out visitors": frozenset({Role.ADMIN, Role.SECURITY}),
    "verify visitor passes": frozenset({Role.ADMIN, Role.SECURITY}),
    "expire visitor passes": frozenset({Role.ADMIN, Role.SECURITY}),

    # amenities
    "manage amenities": frozenset({Role.ADMIN}),
    "check in to amenities": ANY_ROLE,
    "check out of amenities": ANY_ROLE,

    # bookings
    "book amenities": frozenset({Role.RESIDENT, Role.VISITOR, Role.ADMIN}),
    "approve bookings": frozenset({Role.ADMIN, Role.FACILITY_MANAGER}),
    "cancel bookings": ANY_ROLE,
    "complete bookings": frozenset({Role.ADMIN, Role.FACILITY_MANAGER}),
    "mark bookings as no-show": frozenset({Role.ADMIN, Role.FACILITY_MANAGER}),
    "update booking payments": frozenset({Role.ADMIN, Role.FACILITY_MANAGER}),

    # emergencies
    "trigger emergency alerts": frozenset({Role.ADMIN, Role.SECURITY}),
    "acknowledge emergency alerts": ANY_ROLE,
    "resolve emergency alerts": frozenset({Role.ADMIN, Role.SECURITY}),
}

# Roles that act on any record, not only their own
STAFF_ROLES: FrozenSet[Role] = frozenset({Role.ADMIN, Role.FACILITY_MANAGER})


def is_allowed(actor: Actor, operation: str) -> bool:
    return actor.role in CAPABILITIES.get(operation, frozenset())


def require_role(actor: Actor, operation: str) -> None:
    """Raise PermissionDenied unless the actor's role may run the operation."""
    if not is_allowed(actor, operation):
        logger.warning(
            f"PERMISSION_DENIED | user_id={actor.user_id} role={actor.role.value} operation={operation}"
        )
        raise PermissionDenied(actor.role.value, operation)

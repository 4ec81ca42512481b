"""
Domain exceptions for SocietyDesk

Every error is locally recoverable: the caller decides whether to retry,
prompt the user or give up. main.py maps each class to an HTTP status.
"""

from typing import Any, Dict, List, Optional


class SocietyDeskError(Exception):
    """Base exception for all domain errors"""

    status_code: int = 400

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(SocietyDeskError):
    """One or more fields are missing or malformed. Errors are accumulated."""

    status_code = 422

    def __init__(self, errors: List[str], message: Optional[str] = None):
        self.errors = list(errors)
        super().__init__(message or "; ".join(self.errors) or "Validation failed")


class InvalidStateTransition(SocietyDeskError):
    """Requested action is not legal from the record's current state"""

    status_code = 409

    def __init__(self, entity: str, current_state: str, action: str):
        self.entity = entity
        self.current_state = current_state
        self.action = action
        super().__init__(
            f"Cannot {action} {entity} in state '{current_state}'",
            details={"current_state": current_state, "action": action},
        )


class CapacityExceeded(SocietyDeskError):
    """Attendees or occupancy would go beyond the amenity capacity"""

    status_code = 409

    def __init__(self, amenity_name: str, capacity: int, requested: int):
        super().__init__(
            f"{amenity_name} has capacity {capacity}; requested {requested}",
            details={"capacity": capacity, "requested": requested},
        )


class AmenityUnavailable(SocietyDeskError):
    """Amenity is closed or under maintenance"""

    status_code = 409

    def __init__(self, amenity_name: str, reason: str):
        super().__init__(
            f"{amenity_name} is unavailable ({reason})",
            details={"reason": reason},
        )


class BookingConflict(SocietyDeskError):
    """Another booking already holds an overlapping slot"""

    status_code = 409

    def __init__(self, amenity_name: str, conflicting_booking_id: str):
        super().__init__(
            f"{amenity_name} is already booked for an overlapping time slot",
            details={"conflicting_booking_id": conflicting_booking_id},
        )


class NotFound(SocietyDeskError):
    """Operation references an unknown id"""

    status_code = 404

    def __init__(self, entity: str, entity_id: str):
        super().__init__(
            f"{entity} {entity_id} not found",
            details={"entity": entity, "id": entity_id},
        )


class PermissionDenied(SocietyDeskError):
    """Acting role is not allowed to invoke the operation"""

    status_code = 403

    def __init__(self, role: str, operation: str):
        super().__init__(
            f"Role '{role}' is not permitted to {operation}",
            details={"role": role, "operation": operation},
        )

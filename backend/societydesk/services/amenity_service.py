"""
Amenity service for amenity administration and open-access occupancy
"""

from typing import List, Optional
import uuid
import logging

from societydesk.config import settings
from societydesk.exceptions import AmenityUnavailable, CapacityExceeded, ValidationError
from societydesk.models.enums import AmenityLocation, AmenityType, MaintenanceStatus, OccupancyStatus
from societydesk.models.schemas import (
    Actor,
    Amenity,
    AmenityCreateRequest,
    AmenityUpdateRequest,
    AmenityView,
)
from societydesk.services.permissions import require_role
from societydesk.store.memory import AmenityStore

logger = logging.getLogger(__name__)

RESERVABLE_TYPES = {AmenityType.RESERVATION, AmenityType.PAYMENT_REQUIRED}

# Amenity fields an admin update may set back to None
CLEARABLE_FIELDS = {"last_cleaned", "next_maintenance"}


def occupancy_rate(amenity: Amenity) -> float:
    """current_occupancy / capacity; a zero capacity counts as 1"""
    return amenity.current_occupancy / (amenity.capacity or 1)


def occupancy_status(
    amenity: Amenity,
    busy_threshold: Optional[float] = None,
    full_threshold: Optional[float] = None,
) -> OccupancyStatus:
    """Read-only projection used for display and for gating bookings."""
    if not amenity.is_available or amenity.maintenance_status != MaintenanceStatus.OPERATIONAL:
        return OccupancyStatus.CLOSED

    if busy_threshold is None:
        busy_threshold = settings.OCCUPANCY_BUSY_THRESHOLD
    if full_threshold is None:
        full_threshold = settings.OCCUPANCY_FULL_THRESHOLD

    rate = occupancy_rate(amenity)
    if rate >= full_threshold:
        return OccupancyStatus.FULL
    if rate >= busy_threshold:
        return OccupancyStatus.BUSY
    return OccupancyStatus.AVAILABLE


def ensure_operational(amenity: Amenity) -> None:
    """Raise AmenityUnavailable when maintenance or the closed flag blocks use."""
    if amenity.maintenance_status != MaintenanceStatus.OPERATIONAL:
        raise AmenityUnavailable(amenity.name, amenity.maintenance_status.value)
    if not amenity.is_available:
        raise AmenityUnavailable(amenity.name, "closed")


class AmenityService:
    """Service for amenity-related operations"""

    def __init__(self, store: AmenityStore):
        self.store = store

    # -----------------------------
    # Reads
    # -----------------------------
    def get_amenity(self, amenity_id: str) -> Amenity:
        return self.store.get(amenity_id)

    def list_amenities(self, location: Optional[AmenityLocation] = None) -> List[Amenity]:
        amenities = self.store.all(lambda a: location is None or a.location == location)
        amenities.sort(key=lambda a: a.code)
        return amenities

    def view(self, amenity: Amenity) -> AmenityView:
        return AmenityView(
            amenity=amenity,
            occupancy_rate=round(occupancy_rate(amenity), 4),
            occupancy_status=occupancy_status(amenity),
        )

    def total_occupancy(self) -> int:
        return self.store.total_occupancy()

    # -----------------------------
    # Admin
    # -----------------------------
    def create_amenity(self, actor: Actor, data: AmenityCreateRequest) -> Amenity:
        require_role(actor, "manage amenities")
        amenity = Amenity(amenity_id=str(uuid.uuid4()), **data.model_dump())
        self.store.add(amenity)
        logger.info(f"AMENITY_CREATED | amenity_id={amenity.amenity_id} code={amenity.code} by={actor.user_id}")
        return amenity

    def update_amenity(self, actor: Actor, amenity_id: str, updates: AmenityUpdateRequest) -> Amenity:
        """
        Field-level merge of the provided fields. No cross-field checks:
        e.g. current_occupancy above capacity is accepted.
        """
        require_role(actor, "manage amenities")
        # null clears the clearable fields and is ignored everywhere else
        changes = {
            field: value
            for field, value in updates.model_dump(exclude_unset=True).items()
            if value is not None or field in CLEARABLE_FIELDS
        }
        with self.store.locked(amenity_id) as amenity:
            updated = self.store.save(amenity.model_copy(update=changes))
        logger.info(
            f"AMENITY_UPDATED | amenity_id={amenity_id} fields={sorted(changes)} by={actor.user_id}"
        )
        return updated

    def delete_amenity(self, actor: Actor, amenity_id: str) -> None:
        require_role(actor, "manage amenities")
        self.store.remove(amenity_id)
        logger.info(f"AMENITY_DELETED | amenity_id={amenity_id} by={actor.user_id}")

    # -----------------------------
    # Open-access occupancy
    # -----------------------------
    def check_in(self, actor: Actor, amenity_id: str) -> Amenity:
        """Count one more person into an open-access amenity."""
        require_role(actor, "check in to amenities")
        with self.store.locked(amenity_id) as amenity:
            if amenity.type != AmenityType.OPEN_ACCESS:
                raise ValidationError(
                    [f"{amenity.name} is a {amenity.type.value} amenity and does not take walk-in check-ins"]
                )
            ensure_operational(amenity)
            if amenity.current_occupancy >= amenity.capacity:
                logger.info(
                    f"AMENITY_CHECK_IN_FULL | amenity_id={amenity_id} "
                    f"occupancy={amenity.current_occupancy} capacity={amenity.capacity}"
                )
                raise CapacityExceeded(amenity.name, amenity.capacity, amenity.current_occupancy + 1)

            updated = self.store.save(
                amenity.model_copy(update={"current_occupancy": amenity.current_occupancy + 1})
            )

        logger.info(
            f"AMENITY_CHECK_IN | amenity_id={amenity_id} user_id={actor.user_id} "
            f"occupancy={updated.current_occupancy}/{updated.capacity}"
        )
        return updated

    def check_out(self, actor: Actor, amenity_id: str) -> Amenity:
        """Count one person out; occupancy never drops below zero."""
        require_role(actor, "check out of amenities")
        with self.store.locked(amenity_id) as amenity:
            if amenity.type != AmenityType.OPEN_ACCESS:
                raise ValidationError(
                    [f"{amenity.name} is a {amenity.type.value} amenity and does not track walk-ins"]
                )
            updated = self.store.save(
                amenity.model_copy(update={"current_occupancy": max(0, amenity.current_occupancy - 1)})
            )

        logger.info(
            f"AMENITY_CHECK_OUT | amenity_id={amenity_id} user_id={actor.user_id} "
            f"occupancy={updated.current_occupancy}/{updated.capacity}"
        )
        return updated

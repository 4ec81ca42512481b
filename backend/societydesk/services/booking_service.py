"""
Booking service for amenity reservations
"""

from datetime import date, datetime, time, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional, Tuple
import uuid
import logging

from societydesk.clock import Clock, utc_now
from societydesk.exceptions import (
    BookingConflict,
    CapacityExceeded,
    InvalidStateTransition,
    PermissionDenied,
    ValidationError,
)
from societydesk.models.enums import BookingAction, BookingStatus, PaymentStatus
from societydesk.models.schemas import Actor, Amenity, Booking, BookingCreateRequest
from societydesk.services.amenity_service import RESERVABLE_TYPES, ensure_operational
from societydesk.services.permissions import STAFF_ROLES, require_role
from societydesk.store.memory import AmenityStore, BookingStore

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")
MICROS_PER_HOUR = Decimal(3_600_000_000)

BOOKING_TRANSITIONS: Dict[Tuple[BookingStatus, BookingAction], BookingStatus] = {
    (BookingStatus.PENDING, BookingAction.APPROVE): BookingStatus.CONFIRMED,
    (BookingStatus.PENDING, BookingAction.CANCEL): BookingStatus.CANCELLED,
    (BookingStatus.CONFIRMED, BookingAction.CANCEL): BookingStatus.CANCELLED,
    (BookingStatus.CONFIRMED, BookingAction.COMPLETE): BookingStatus.COMPLETED,
    (BookingStatus.CONFIRMED, BookingAction.NO_SHOW): BookingStatus.NO_SHOW,
}

ACTION_OPERATIONS: Dict[BookingAction, str] = {
    BookingAction.APPROVE: "approve bookings",
    BookingAction.CANCEL: "cancel bookings",
    BookingAction.COMPLETE: "complete bookings",
    BookingAction.NO_SHOW: "mark bookings as no-show",
}

PAYMENT_TRANSITIONS: Dict[str, Tuple[PaymentStatus, PaymentStatus]] = {
    "mark_paid": (PaymentStatus.PENDING, PaymentStatus.PAID),
    "refund": (PaymentStatus.PAID, PaymentStatus.REFUNDED),
}


def duration_hours(start: time, end: time) -> Decimal:
    """Exact length of [start, end) in hours, down to the microsecond"""
    delta = datetime.combine(date.min, end) - datetime.combine(date.min, start)
    return Decimal(delta // timedelta(microseconds=1)) / MICROS_PER_HOUR


def booking_amount(amenity: Amenity, start: time, end: time) -> Decimal:
    """hours x price_per_hour when payment is required, else 0"""
    if not amenity.requires_payment or not amenity.price_per_hour:
        return Decimal("0.00")
    total = duration_hours(start, end) * Decimal(amenity.price_per_hour)
    return total.quantize(CENTS, rounding=ROUND_HALF_UP)


def overlaps(a_start: time, a_end: time, b_start: time, b_end: time) -> bool:
    """Half-open interval intersection"""
    return a_start < b_end and b_start < a_end


class BookingService:
    """Service for booking-related operations"""

    def __init__(self, bookings: BookingStore, amenities: AmenityStore, clock: Clock = utc_now):
        self.bookings = bookings
        self.amenities = amenities
        self.clock = clock

    def create_booking(self, actor: Actor, request: BookingCreateRequest) -> Booking:
        """
        Reserve an amenity for [start_time, end_time) on a date.

        Holds the amenity lock so the overlap check and the insert cannot
        interleave with another booking for the same amenity.
        """
        require_role(actor, "book amenities")

        errors: List[str] = []
        # Slots are local wall-clock times of the complex
        offsets = [
            label
            for label, value in (("Start time", request.start_time), ("End time", request.end_time))
            if value.tzinfo is not None
        ]
        for label in offsets:
            errors.append(f"{label} must not include a UTC offset")
        if not offsets and request.end_time <= request.start_time:
            errors.append("End time must be after start time")
        if request.attendees < 1:
            errors.append("At least one attendee is required")

        with self.amenities.locked(request.amenity_id) as amenity:
            if amenity.type not in RESERVABLE_TYPES:
                errors.append(f"{amenity.name} does not accept reservations")
            if errors:
                logger.info(f"CREATE_BOOKING_INVALID | amenity_id={amenity.amenity_id} errors={errors}")
                raise ValidationError(errors)

            ensure_operational(amenity)

            if request.attendees > amenity.capacity:
                raise CapacityExceeded(amenity.name, amenity.capacity, request.attendees)

            for existing in self.bookings.active_for_slot(amenity.amenity_id, request.booking_date):
                if overlaps(request.start_time, request.end_time, existing.start_time, existing.end_time):
                    logger.info(
                        f"CREATE_BOOKING_CONFLICT | amenity_id={amenity.amenity_id} "
                        f"date={request.booking_date} conflicting={existing.booking_id}"
                    )
                    raise BookingConflict(amenity.name, existing.booking_id)

            booking = Booking(
                booking_id=str(uuid.uuid4()),
                amenity_id=amenity.amenity_id,
                amenity_name=amenity.name,
                user_id=actor.user_id,
                user_name=actor.name,
                user_apartment=actor.apartment_no or "",
                booking_date=request.booking_date,
                start_time=request.start_time,
                end_time=request.end_time,
                attendees=request.attendees,
                equipment=list(request.equipment),
                special_requests=request.special_requests or None,
                status=BookingStatus.PENDING if amenity.requires_approval else BookingStatus.CONFIRMED,
                payment_status=PaymentStatus.PENDING if amenity.requires_payment else None,
                total_amount=booking_amount(amenity, request.start_time, request.end_time),
                created_at=self.clock(),
            )
            self.bookings.add(booking)

        logger.info(
            f"CREATE_BOOKING | booking_id={booking.booking_id} amenity={amenity.code} "
            f"date={booking.booking_date} slot={booking.start_time.isoformat()}-{booking.end_time.isoformat()} "
            f"status={booking.status.value} amount={booking.total_amount}"
        )
        return booking

    def get_booking(self, booking_id: str) -> Booking:
        return self.bookings.get(booking_id)

    def list_bookings(
        self,
        user_id: Optional[str] = None,
        amenity_id: Optional[str] = None,
        status: Optional[BookingStatus] = None,
    ) -> List[Booking]:
        bookings = self.bookings.all(
            lambda b: (user_id is None or b.user_id == user_id)
            and (amenity_id is None or b.amenity_id == amenity_id)
            and (status is None or b.status == status)
        )
        bookings.sort(key=lambda b: (b.booking_date, b.start_time))
        return bookings

    def transition(self, actor: Actor, booking_id: str, action: BookingAction) -> Booking:
        require_role(actor, ACTION_OPERATIONS[action])

        with self.bookings.locked(booking_id) as booking:
            if (
                action == BookingAction.CANCEL
                and actor.role not in STAFF_ROLES
                and booking.user_id != actor.user_id
            ):
                raise PermissionDenied(actor.role.value, "cancel bookings made by others")

            next_status = BOOKING_TRANSITIONS.get((booking.status, action))
            if next_status is None:
                raise InvalidStateTransition("booking", booking.status.value, action.value)

            updated = self.bookings.save(booking.model_copy(update={"status": next_status}))

        logger.info(
            f"BOOKING_TRANSITION | booking_id={booking_id} {booking.status.value}->{next_status.value} "
            f"by={actor.user_id}"
        )
        return updated

    def approve(self, actor: Actor, booking_id: str) -> Booking:
        return self.transition(actor, booking_id, BookingAction.APPROVE)

    def cancel(self, actor: Actor, booking_id: str) -> Booking:
        return self.transition(actor, booking_id, BookingAction.CANCEL)

    def _update_payment(self, actor: Actor, booking_id: str, change: str) -> Booking:
        require_role(actor, "update booking payments")
        expected, target = PAYMENT_TRANSITIONS[change]

        with self.bookings.locked(booking_id) as booking:
            if booking.payment_status != expected:
                current = booking.payment_status.value if booking.payment_status else "not-required"
                raise InvalidStateTransition("booking payment", current, change)
            updated = self.bookings.save(booking.model_copy(update={"payment_status": target}))

        logger.info(
            f"BOOKING_PAYMENT | booking_id={booking_id} {expected.value}->{target.value} "
            f"amount={updated.total_amount} by={actor.user_id}"
        )
        return updated

    def mark_paid(self, actor: Actor, booking_id: str) -> Booking:
        return self._update_payment(actor, booking_id, "mark_paid")

    def refund(self, actor: Actor, booking_id: str) -> Booking:
        return self._update_payment(actor, booking_id, "refund")

from datetime import date, time
from decimal import Decimal

import pytest

from societydesk.exceptions import (
    AmenityUnavailable,
    BookingConflict,
    CapacityExceeded,
    InvalidStateTransition,
    NotFound,
    PermissionDenied,
    ValidationError,
)
from societydesk.models.enums import BookingAction, BookingStatus, MaintenanceStatus, PaymentStatus
from societydesk.models.schemas import AmenityUpdateRequest, BookingCreateRequest
from societydesk.services.booking_service import booking_amount, duration_hours

MUSIC_ROOM = "amen-gf-01"      # free, capacity 10
CINEMA = "amen-gf-02"          # 25/hour
SOCIAL_HALL = "amen-gf-04"     # approval + 100/hour
LIBRARY = "amen-gf-07"         # open-access

DAY = date(2025, 1, 22)


def _request(amenity_id=CINEMA, start="14:00", end="16:00", attendees=4, **extra) -> BookingCreateRequest:
    return BookingCreateRequest(
        amenity_id=amenity_id,
        booking_date=extra.pop("booking_date", DAY),
        start_time=start,
        end_time=end,
        attendees=attendees,
        **extra,
    )


# -----------------------------
# Creation
# -----------------------------

def test_paid_amenity_without_approval_is_confirmed(booking_service, resident):
    booking = booking_service.create_booking(resident, _request(CINEMA, "14:00", "16:00"))

    assert booking.total_amount == Decimal("50.00")
    assert booking.status == BookingStatus.CONFIRMED
    assert booking.payment_status == PaymentStatus.PENDING
    assert booking.amenity_name == "Cinema Hall"
    assert booking.user_id == resident.user_id
    assert booking.user_apartment == "A-101"


def test_approval_amenity_starts_pending(booking_service, resident):
    booking = booking_service.create_booking(resident, _request(SOCIAL_HALL, "18:00", "21:00", attendees=60))

    assert booking.status == BookingStatus.PENDING
    assert booking.payment_status == PaymentStatus.PENDING
    assert booking.total_amount == Decimal("300.00")


def test_free_amenity_costs_nothing(booking_service, resident):
    booking = booking_service.create_booking(resident, _request(MUSIC_ROOM, "10:00", "11:30"))

    assert booking.total_amount == Decimal("0")
    assert booking.payment_status is None
    assert booking.status == BookingStatus.CONFIRMED


def test_partial_hours_are_priced_exactly(booking_service, resident):
    booking = booking_service.create_booking(resident, _request(CINEMA, "09:00", "10:20"))
    assert booking.total_amount == Decimal("33.33")
    assert duration_hours(time(9, 0), time(10, 30)) == Decimal("1.5")


@pytest.mark.parametrize("start, end", [("16:00", "14:00"), ("14:00", "14:00")])
def test_end_not_after_start_fails_without_booking(booking_service, resident, start, end):
    with pytest.raises(ValidationError) as exc:
        booking_service.create_booking(resident, _request(CINEMA, start, end))

    assert "End time must be after start time" in exc.value.errors
    assert booking_service.list_bookings() == []


def test_attendees_beyond_capacity(booking_service, resident):
    with pytest.raises(CapacityExceeded):
        booking_service.create_booking(resident, _request(MUSIC_ROOM, attendees=11))
    assert booking_service.list_bookings() == []


def test_attendees_at_capacity_is_fine(booking_service, resident):
    booking = booking_service.create_booking(resident, _request(MUSIC_ROOM, attendees=10))
    assert booking.attendees == 10


def test_no_attendees_is_invalid(booking_service, resident):
    with pytest.raises(ValidationError):
        booking_service.create_booking(resident, _request(MUSIC_ROOM, attendees=0))


@pytest.mark.parametrize(
    "update",
    [
        AmenityUpdateRequest(maintenance_status=MaintenanceStatus.MAINTENANCE),
        AmenityUpdateRequest(is_available=False),
    ],
)
def test_unavailable_amenity_cannot_be_booked(amenity_service, booking_service, admin, resident, update):
    amenity_service.update_amenity(admin, CINEMA, update)

    with pytest.raises(AmenityUnavailable):
        booking_service.create_booking(resident, _request(CINEMA))
    assert booking_service.list_bookings() == []


def test_open_access_amenity_takes_no_reservations(booking_service, resident):
    with pytest.raises(ValidationError):
        booking_service.create_booking(resident, _request(LIBRARY))


def test_unknown_amenity(booking_service, resident):
    with pytest.raises(NotFound):
        booking_service.create_booking(resident, _request("nope"))


def test_security_cannot_book(booking_service, security):
    with pytest.raises(PermissionDenied):
        booking_service.create_booking(security, _request())


def test_equipment_and_requests_are_kept(booking_service, guest):
    booking = booking_service.create_booking(
        guest, _request(MUSIC_ROOM, equipment=["Piano"], special_requests="Tune the piano")
    )
    assert booking.equipment == ["Piano"]
    assert booking.special_requests == "Tune the piano"


# -----------------------------
# Overlap
# -----------------------------

@pytest.mark.parametrize(
    "start, end",
    [("15:00", "17:00"), ("13:00", "14:30"), ("14:00", "16:00"), ("14:30", "15:30"), ("13:00", "17:00")],
)
def test_overlapping_slot_is_rejected(booking_service, resident, other_resident, start, end):
    first = booking_service.create_booking(resident, _request(CINEMA, "14:00", "16:00"))

    with pytest.raises(BookingConflict) as exc:
        booking_service.create_booking(other_resident, _request(CINEMA, start, end))

    assert exc.value.details["conflicting_booking_id"] == first.booking_id
    assert len(booking_service.list_bookings()) == 1


def test_back_to_back_slots_do_not_overlap(booking_service, resident, other_resident):
    booking_service.create_booking(resident, _request(CINEMA, "14:00", "16:00"))
    booking_service.create_booking(other_resident, _request(CINEMA, "16:00", "18:00"))
    booking_service.create_booking(other_resident, _request(CINEMA, "12:00", "14:00"))
    assert len(booking_service.list_bookings(amenity_id=CINEMA)) == 3


def test_same_slot_other_day_or_amenity_is_fine(booking_service, resident):
    booking_service.create_booking(resident, _request(CINEMA, "14:00", "16:00"))
    booking_service.create_booking(resident, _request(CINEMA, "14:00", "16:00", booking_date=date(2025, 1, 23)))
    booking_service.create_booking(resident, _request(MUSIC_ROOM, "14:00", "16:00"))
    assert len(booking_service.list_bookings(user_id=resident.user_id)) == 3


def test_cancelled_booking_frees_the_slot(booking_service, resident, other_resident):
    first = booking_service.create_booking(resident, _request(CINEMA, "14:00", "16:00"))
    booking_service.cancel(resident, first.booking_id)

    second = booking_service.create_booking(other_resident, _request(CINEMA, "14:00", "16:00"))
    assert second.status == BookingStatus.CONFIRMED


def test_pending_booking_still_holds_the_slot(booking_service, resident, other_resident):
    booking_service.create_booking(resident, _request(SOCIAL_HALL, "18:00", "20:00"))
    with pytest.raises(BookingConflict):
        booking_service.create_booking(other_resident, _request(SOCIAL_HALL, "19:00", "21:00"))


# -----------------------------
# Status and payment
# -----------------------------

def test_approve_pending_booking(booking_service, resident, facility_manager):
    booking = booking_service.create_booking(resident, _request(SOCIAL_HALL, "18:00", "20:00"))
    approved = booking_service.approve(facility_manager, booking.booking_id)
    assert approved.status == BookingStatus.CONFIRMED


def test_resident_cannot_approve_bookings(booking_service, resident):
    booking = booking_service.create_booking(resident, _request(SOCIAL_HALL, "18:00", "20:00"))
    with pytest.raises(PermissionDenied):
        booking_service.approve(resident, booking.booking_id)


def test_only_owner_or_staff_can_cancel(booking_service, resident, other_resident, admin):
    booking = booking_service.create_booking(resident, _request())

    with pytest.raises(PermissionDenied):
        booking_service.cancel(other_resident, booking.booking_id)
    assert booking_service.cancel(admin, booking.booking_id).status == BookingStatus.CANCELLED


@pytest.mark.parametrize(
    "action, expected",
    [
        (BookingAction.COMPLETE, BookingStatus.COMPLETED),
        (BookingAction.NO_SHOW, BookingStatus.NO_SHOW),
        (BookingAction.CANCEL, BookingStatus.CANCELLED),
    ],
)
def test_confirmed_booking_transitions(booking_service, resident, admin, action, expected):
    booking = booking_service.create_booking(resident, _request())
    assert booking_service.transition(admin, booking.booking_id, action).status == expected


@pytest.mark.parametrize(
    "first, second",
    [
        (BookingAction.CANCEL, BookingAction.COMPLETE),
        (BookingAction.COMPLETE, BookingAction.CANCEL),
        (BookingAction.NO_SHOW, BookingAction.COMPLETE),
        (BookingAction.COMPLETE, BookingAction.APPROVE),
    ],
)
def test_terminal_booking_states(booking_service, resident, admin, first, second):
    booking = booking_service.create_booking(resident, _request())
    booking_service.transition(admin, booking.booking_id, first)

    with pytest.raises(InvalidStateTransition):
        booking_service.transition(admin, booking.booking_id, second)


def test_confirmed_booking_cannot_be_approved_again(booking_service, resident, admin):
    booking = booking_service.create_booking(resident, _request())
    with pytest.raises(InvalidStateTransition):
        booking_service.approve(admin, booking.booking_id)


def test_payment_flow(booking_service, resident, admin):
    booking = booking_service.create_booking(resident, _request())

    paid = booking_service.mark_paid(admin, booking.booking_id)
    assert paid.payment_status == PaymentStatus.PAID
    with pytest.raises(InvalidStateTransition):
        booking_service.mark_paid(admin, booking.booking_id)

    refunded = booking_service.refund(admin, booking.booking_id)
    assert refunded.payment_status == PaymentStatus.REFUNDED
    with pytest.raises(InvalidStateTransition):
        booking_service.refund(admin, booking.booking_id)


def test_refund_requires_payment_first(booking_service, resident, admin):
    booking = booking_service.create_booking(resident, _request())
    with pytest.raises(InvalidStateTransition):
        booking_service.refund(admin, booking.booking_id)


def test_free_booking_has_no_payment_to_update(booking_service, resident, admin):
    booking = booking_service.create_booking(resident, _request(MUSIC_ROOM))
    with pytest.raises(InvalidStateTransition) as exc:
        booking_service.mark_paid(admin, booking.booking_id)
    assert exc.value.current_state == "not-required"


def test_booking_amount_for_unpaid_amenity(amenity_service):
    music = amenity_service.get_amenity(MUSIC_ROOM)
    assert booking_amount(music, time(10, 0), time(12, 0)) == Decimal("0.00")


def test_seconds_count_toward_the_amount(booking_service, resident):
    booking = booking_service.create_booking(
        resident, _request(CINEMA, time(14, 0, 30), time(14, 0, 59), attendees=1)
    )

    # 29 seconds at 25/hour
    assert booking.total_amount == Decimal("0.20")


def test_times_with_utc_offset_are_rejected(booking_service, resident):
    with pytest.raises(ValidationError) as exc:
        booking_service.create_booking(resident, _request(CINEMA, "14:00:00+05:00", "16:00:00"))

    assert exc.value.errors == ["Start time must not include a UTC offset"]
    assert booking_service.list_bookings() == []

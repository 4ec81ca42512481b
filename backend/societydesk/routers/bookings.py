"""
Booking API routes
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from societydesk.context import AppContext
from societydesk.deps import get_actor, get_context
from societydesk.models.enums import BookingStatus
from societydesk.models.schemas import (
    Actor,
    Booking,
    BookingCreateRequest,
    BookingListResponse,
    BookingPaymentUpdateRequest,
    BookingStatusUpdateRequest,
)

router = APIRouter()


@router.post(
    "",
    response_model=Booking,
    status_code=status.HTTP_201_CREATED,
    summary="Book an amenity",
    description="""
    Reserve an amenity for [start_time, end_time) on a date.

    - status=pending when the amenity requires approval, else confirmed
    - payment_status=pending and total_amount = hours x price_per_hour when payment is required
    - rejected when the slot overlaps another non-cancelled booking
    """,
)
def create_booking(
    request: BookingCreateRequest,
    actor: Actor = Depends(get_actor),
    ctx: AppContext = Depends(get_context),
):
    return ctx.booking_service.create_booking(actor, request)


@router.get("", response_model=BookingListResponse)
def list_bookings(
    mine: bool = False,
    amenity_id: Optional[str] = None,
    status_filter: Optional[BookingStatus] = Query(default=None, alias="status"),
    actor: Actor = Depends(get_actor),
    ctx: AppContext = Depends(get_context),
):
    bookings = ctx.booking_service.list_bookings(
        user_id=actor.user_id if mine else None,
        amenity_id=amenity_id,
        status=status_filter,
    )
    return BookingListResponse(bookings=bookings, count=len(bookings))


@router.get("/{booking_id}", response_model=Booking)
def get_booking(booking_id: str, ctx: AppContext = Depends(get_context)):
    return ctx.booking_service.get_booking(booking_id)


@router.post("/{booking_id}/status", response_model=Booking)
def update_booking_status(
    booking_id: str,
    request: BookingStatusUpdateRequest,
    actor: Actor = Depends(get_actor),
    ctx: AppContext = Depends(get_context),
):
    return ctx.booking_service.transition(actor, booking_id, request.action)


@router.post("/{booking_id}/payment", response_model=Booking)
def update_booking_payment(
    booking_id: str,
    request: BookingPaymentUpdateRequest,
    actor: Actor = Depends(get_actor),
    ctx: AppContext = Depends(get_context),
):
    svc = ctx.booking_service
    if request.action == "refund":
        return svc.refund(actor, booking_id)
    return svc.mark_paid(actor, booking_id)

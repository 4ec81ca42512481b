"""
Dashboard aggregates over visitors, bookings, amenities and alerts
"""

from collections import Counter
from decimal import Decimal

from societydesk.models.enums import BookingStatus, OccupancyStatus, PaymentStatus, VisitorStatus
from societydesk.models.schemas import DashboardSummary
from societydesk.services.alert_service import AlertService
from societydesk.services.amenity_service import AmenityService, occupancy_status
from societydesk.services.booking_service import BookingService
from societydesk.services.visitor_service import VisitorService


class AnalyticsService:
    def __init__(
        self,
        visitor_service: VisitorService,
        amenity_service: AmenityService,
        booking_service: BookingService,
        alert_service: AlertService,
    ):
        self.visitor_service = visitor_service
        self.amenity_service = amenity_service
        self.booking_service = booking_service
        self.alert_service = alert_service

    def dashboard_summary(self) -> DashboardSummary:
        visitors = self.visitor_service.list_visitors()
        today = self.visitor_service.clock().date()

        by_status = {s.value: 0 for s in VisitorStatus}
        by_status.update(Counter(v.status.value for v in visitors))

        amenity_status = {s.value: 0 for s in OccupancyStatus}
        amenity_status.update(
            Counter(occupancy_status(a).value for a in self.amenity_service.list_amenities())
        )

        bookings = self.booking_service.list_bookings()
        revenue = sum(
            (b.total_amount for b in bookings if b.payment_status == PaymentStatus.PAID),
            Decimal("0.00"),
        )

        return DashboardSummary(
            visitors_by_status=by_status,
            visitors_today=sum(1 for v in visitors if v.visit_date == today),
            active_alerts=len(self.alert_service.list_alerts(active_only=True)),
            occupancy=self.alert_service.total_occupancy(),
            bookings_by_amenity=dict(
                Counter(b.amenity_name for b in bookings if b.status != BookingStatus.CANCELLED)
            ),
            amenities_by_status=amenity_status,
            pending_bookings=sum(1 for b in bookings if b.status == BookingStatus.PENDING),
            revenue_collected=revenue,
        )

"""
Application context: composes the stores and services for one process
"""

from dataclasses import dataclass, field
import logging
from typing import Optional

from societydesk.clock import Clock, utc_now
from societydesk.config import settings
from societydesk.services.alert_service import AlertService
from societydesk.services.amenity_service import AmenityService
from societydesk.services.analytics_service import AnalyticsService
from societydesk.services.booking_service import BookingService
from societydesk.services.visitor_service import VisitorService
from societydesk.store.memory import AlertStore, AmenityStore, BookingStore, VisitorStore

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Stores and the services built on them"""

    clock: Clock = utc_now
    pass_validity_hours: Optional[int] = None

    visitors: VisitorStore = field(default_factory=VisitorStore)
    amenities: AmenityStore = field(default_factory=AmenityStore)
    bookings: BookingStore = field(default_factory=BookingStore)
    alerts: AlertStore = field(default_factory=AlertStore)

    def __post_init__(self):
        self.visitor_service = VisitorService(
            self.visitors,
            clock=self.clock,
            pass_validity_hours=self.pass_validity_hours,
        )
        self.amenity_service = AmenityService(self.amenities)
        self.booking_service = BookingService(self.bookings, self.amenities, clock=self.clock)
        self.alert_service = AlertService(
            self.alerts,
            amenity_service=self.amenity_service,
            visitor_service=self.visitor_service,
            clock=self.clock,
        )
        self.analytics_service = AnalyticsService(
            visitor_service=self.visitor_service,
            amenity_service=self.amenity_service,
            booking_service=self.booking_service,
            alert_service=self.alert_service,
        )


def build_context(
    clock: Clock = utc_now,
    seed: Optional[bool] = None,
    pass_validity_hours: Optional[int] = None,
) -> AppContext:
    """Create a fresh context, optionally loaded with the complex's amenities."""
    ctx = AppContext(clock=clock, pass_validity_hours=pass_validity_hours)

    if seed is None:
        seed = settings.SEED_SAMPLE_DATA
    if seed:
        from societydesk.seed import load_sample_amenities

        count = load_sample_amenities(ctx.amenities)
        logger.info(f"SEED_LOADED | amenities={count}")

    return ctx

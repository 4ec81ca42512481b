"""
Enums for SocietyDesk
"""

from enum import Enum


class Role(str, Enum):
    """Acting user role, supplied by the identity provider"""
    RESIDENT = "resident"
    VISITOR = "visitor"
    ADMIN = "admin"
    SECURITY = "security"
    FACILITY_MANAGER = "facility-manager"


class VisitorStatus(str, Enum):
    """Visitor status enumeration"""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CHECKED_IN = "checked-in"
    CHECKED_OUT = "checked-out"
    EXPIRED = "expired"


class VisitorAction(str, Enum):
    """Actions that move a visitor along its lifecycle"""
    APPROVE = "approve"
    REJECT = "reject"
    CHECK_IN = "check_in"
    CHECK_OUT = "check_out"


class RegistrationSource(str, Enum):
    MANUAL = "manual"
    PRE_REGISTRATION = "pre-registration"
    BULK_IMPORT = "bulk-import"


class DeliveryType(str, Enum):
    PERSONAL = "personal"
    FOOD = "food"
    GROCERY = "grocery"
    COURIER = "courier"
    SERVICE = "service"


class VendorType(str, Enum):
    AMAZON = "amazon"
    SWIGGY = "swiggy"
    ZOMATO = "zomato"
    FLIPKART = "flipkart"
    OTHER = "other"


class AmenityLocation(str, Enum):
    """Physical zones of the complex, also used as visitor access zones"""
    GROUND_FLOOR = "ground-floor"
    ROOFTOP_CLOSED = "rooftop-closed"
    ROOFTOP_OPEN = "rooftop-open"
    BASEMENT = "basement"
    PARKING = "parking"


class AmenityType(str, Enum):
    """Selects how residents interact with an amenity"""
    RESERVATION = "reservation"
    OPEN_ACCESS = "open-access"
    MONITORING = "monitoring"
    PAYMENT_REQUIRED = "payment-required"


class MaintenanceStatus(str, Enum):
    OPERATIONAL = "operational"
    MAINTENANCE = "maintenance"
    OUT_OF_ORDER = "out-of-order"


class OccupancyStatus(str, Enum):
    """Derived display status, never stored"""
    AVAILABLE = "available"
    BUSY = "busy"
    FULL = "full"
    CLOSED = "closed"


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"
    NO_SHOW = "no-show"


class BookingAction(str, Enum):
    APPROVE = "approve"
    CANCEL = "cancel"
    COMPLETE = "complete"
    NO_SHOW = "no_show"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"


class AlertType(str, Enum):
    EVACUATION = "evacuation"
    FIRE = "fire"
    MEDICAL = "medical"
    SECURITY = "security"
    PANIC = "panic"
    MAINTENANCE = "maintenance"


class AlertSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

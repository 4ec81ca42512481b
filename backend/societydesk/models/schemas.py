"""
Pydantic models for records, requests and read models
"""

from datetime import date, datetime, time
from decimal import Decimal
from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, Field

from societydesk.models.enums import (
    AlertSeverity,
    AlertType,
    AmenityLocation,
    AmenityType,
    BookingAction,
    BookingStatus,
    DeliveryType,
    MaintenanceStatus,
    OccupancyStatus,
    PaymentStatus,
    RegistrationSource,
    Role,
    VendorType,
    VisitorAction,
    VisitorStatus,
)


# Acting user
class Actor(BaseModel):
    """Acting user as supplied by the identity/session provider"""
    user_id: str
    role: Role
    name: str = ""
    apartment_no: Optional[str] = None


# -----------------------------
# Visitor Models
# -----------------------------

class VisitorCreateRequest(BaseModel):
    """
    Register visitor request.

    Required fields are Optional here on purpose: the service validates them
    all at once and reports every missing field, not just the first.
    """
    name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    id_number: Optional[str] = None
    purpose: Optional[str] = None
    visit_date: Optional[str] = Field(default=None, description="ISO date, e.g. 2025-01-20")
    visit_time: Optional[str] = Field(default=None, description="HH:MM")

    vehicle_number: Optional[str] = None
    delivery_type: Optional[DeliveryType] = None
    vendor_type: Optional[VendorType] = None
    access_zones: List[AmenityLocation] = Field(default_factory=list)
    assets: List[str] = Field(default_factory=list)

    # Defaults to the acting user when omitted
    host_id: Optional[str] = None
    host_name: Optional[str] = None
    host_apartment: Optional[str] = None

    registration_source: RegistrationSource = RegistrationSource.MANUAL


class Visitor(BaseModel):
    """Visitor record"""
    visitor_id: str
    name: str
    phone: str
    email: str
    id_number: str
    purpose: str
    visit_date: date
    visit_time: time

    host_id: str
    host_name: str = ""
    host_apartment: str = ""

    status: VisitorStatus = VisitorStatus.PENDING
    qr_code: str
    valid_until: Optional[datetime] = None
    access_zones: List[AmenityLocation] = Field(default_factory=list)

    vehicle_number: Optional[str] = None
    delivery_type: Optional[DeliveryType] = None
    vendor_type: Optional[VendorType] = None
    assets: List[str] = Field(default_factory=list)
    is_blacklisted: bool = False
    registration_source: RegistrationSource = RegistrationSource.MANUAL

    created_at: datetime
    approved_at: Optional[datetime] = None
    approved_by: Optional[str] = None
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None


class VisitorStatusUpdateRequest(BaseModel):
    """Move a visitor along its lifecycle"""
    action: VisitorAction = Field(..., description="approve / reject / check_in / check_out")


class VisitorListResponse(BaseModel):
    """List of visitors response"""
    visitors: List[Visitor]
    count: int


class RejectedRow(BaseModel):
    """A bulk import row that failed validation"""
    row: int
    errors: List[str]
    data: Dict[str, str] = Field(default_factory=dict)


class BulkRegistrationResult(BaseModel):
    """Per-row outcome of a bulk registration"""
    accepted: List[Visitor]
    rejected: List[RejectedRow]
    accepted_count: int
    rejected_count: int


class ZoneAccessResponse(BaseModel):
    visitor_id: str
    zone: AmenityLocation
    allowed: bool


# -----------------------------
# Amenity Models
# -----------------------------

class AmenityCreateRequest(BaseModel):
    """Admin: add an amenity"""
    name: str = Field(..., min_length=1)
    code: str = Field(..., min_length=1)
    location: AmenityLocation
    type: AmenityType
    capacity: int = Field(..., ge=0)
    current_occupancy: int = Field(default=0, ge=0)
    is_available: bool = True
    maintenance_status: MaintenanceStatus = MaintenanceStatus.OPERATIONAL
    requires_approval: bool = False
    requires_guardian: bool = False
    requires_payment: bool = False
    price_per_hour: Decimal = Field(default=Decimal("0"), ge=0)
    equipment: List[str] = Field(default_factory=list)
    rules: List[str] = Field(default_factory=list)


class Amenity(AmenityCreateRequest):
    """Amenity record"""
    amenity_id: str
    last_cleaned: Optional[datetime] = None
    next_maintenance: Optional[datetime] = None


class AmenityUpdateRequest(BaseModel):
    """Admin: partial field-level merge. No cross-field validation."""
    name: Optional[str] = None
    code: Optional[str] = None
    location: Optional[AmenityLocation] = None
    type: Optional[AmenityType] = None
    capacity: Optional[int] = Field(default=None, ge=0)
    current_occupancy: Optional[int] = Field(default=None, ge=0)
    is_available: Optional[bool] = None
    maintenance_status: Optional[MaintenanceStatus] = None
    requires_approval: Optional[bool] = None
    requires_guardian: Optional[bool] = None
    requires_payment: Optional[bool] = None
    price_per_hour: Optional[Decimal] = Field(default=None, ge=0)
    equipment: Optional[List[str]] = None
    rules: Optional[List[str]] = None
    last_cleaned: Optional[datetime] = None
    next_maintenance: Optional[datetime] = None


class AmenityView(BaseModel):
    """Amenity with its derived occupancy projection"""
    amenity: Amenity
    occupancy_rate: float
    occupancy_status: OccupancyStatus


# -----------------------------
# Booking Models
# -----------------------------

class BookingCreateRequest(BaseModel):
    amenity_id: str
    booking_date: date
    start_time: time
    end_time: time
    attendees: int = 1
    equipment: List[str] = Field(default_factory=list)
    special_requests: Optional[str] = None


class Booking(BaseModel):
    """Reservation of one amenity for [start_time, end_time) on a date"""
    booking_id: str
    amenity_id: str
    amenity_name: str
    user_id: str
    user_name: str = ""
    user_apartment: str = ""
    booking_date: date
    start_time: time
    end_time: time
    attendees: int
    equipment: List[str] = Field(default_factory=list)
    special_requests: Optional[str] = None
    status: BookingStatus
    payment_status: Optional[PaymentStatus] = None
    total_amount: Decimal = Decimal("0.00")
    created_at: datetime


class BookingStatusUpdateRequest(BaseModel):
    action: BookingAction = Field(..., description="approve / cancel / complete / no_show")


class BookingPaymentUpdateRequest(BaseModel):
    action: Literal["mark_paid", "refund"]


class BookingListResponse(BaseModel):
    bookings: List[Booking]
    count: int


# -----------------------------
# Emergency Models
# -----------------------------

class AlertTriggerRequest(BaseModel):
    type: AlertType
    message: str = ""
    severity: AlertSeverity = AlertSeverity.HIGH
    location: Optional[str] = None


class EmergencyAlert(BaseModel):
    alert_id: str
    type: AlertType
    message: str
    severity: AlertSeverity
    location: Optional[str] = None
    reported_by: str
    timestamp: datetime
    is_active: bool = True
    acknowledged_by: List[str] = Field(default_factory=list)
    resolved_at: Optional[datetime] = None
    resolved_by: Optional[str] = None


class OccupancyResponse(BaseModel):
    """How many people are on-site right now"""
    amenity_occupancy: int
    checked_in_visitors: int
    total_occupancy: int


# -----------------------------
# Dashboard Models
# -----------------------------

class DashboardSummary(BaseModel):
    visitors_by_status: Dict[str, int]
    visitors_today: int
    active_alerts: int
    occupancy: OccupancyResponse
    bookings_by_amenity: Dict[str, int]
    amenities_by_status: Dict[str, int]
    pending_bookings: int
    revenue_collected: Decimal

"""
Visitor service for visitor registration and lifecycle management
"""

from datetime import date, datetime, time, timedelta
from typing import Dict, List, Optional, Tuple
import uuid
import logging

from societydesk.clock import Clock, utc_now
from societydesk.config import settings
from societydesk.exceptions import InvalidStateTransition, NotFound, PermissionDenied, ValidationError
from societydesk.models.enums import AmenityLocation, RegistrationSource, Role, VisitorAction, VisitorStatus
from societydesk.models.schemas import (
    Actor,
    BulkRegistrationResult,
    RejectedRow,
    Visitor,
    VisitorCreateRequest,
)
from societydesk.services.permissions import require_role
from societydesk.store.memory import VisitorStore

logger = logging.getLogger(__name__)

# field -> label used in "<label> is required"
REQUIRED_FIELDS: List[Tuple[str, str]] = [
    ("name", "Name"),
    ("phone", "Phone"),
    ("email", "Email"),
    ("id_number", "ID Number"),
    ("purpose", "Purpose"),
    ("visit_date", "Visit Date"),
    ("visit_time", "Visit Time"),
]

# (current status, action) -> next status
VISITOR_TRANSITIONS: Dict[Tuple[VisitorStatus, VisitorAction], VisitorStatus] = {
    (VisitorStatus.PENDING, VisitorAction.APPROVE): VisitorStatus.APPROVED,
    (VisitorStatus.PENDING, VisitorAction.REJECT): VisitorStatus.REJECTED,
    (VisitorStatus.APPROVED, VisitorAction.CHECK_IN): VisitorStatus.CHECKED_IN,
    (VisitorStatus.CHECKED_IN, VisitorAction.CHECK_OUT): VisitorStatus.CHECKED_OUT,
}

ACTION_OPERATIONS: Dict[VisitorAction, str] = {
    VisitorAction.APPROVE: "approve visitors",
    VisitorAction.REJECT: "reject visitors",
    VisitorAction.CHECK_IN: "check in visitors",
    VisitorAction.CHECK_OUT: "check out visitors",
}

# A pass past valid_until in one of these states becomes expired
EXPIRABLE_STATUSES = {VisitorStatus.APPROVED, VisitorStatus.CHECKED_IN}


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


def _parse_visit_date(raw: str) -> Optional[date]:
    try:
        return date.fromisoformat(raw)
    except ValueError:
        return None


def _parse_visit_time(raw: str) -> Optional[time]:
    try:
        return datetime.strptime(raw, "%H:%M").time()
    except ValueError:
        return None


def validate_visitor_input(data: VisitorCreateRequest) -> List[str]:
    """
    Validate a registration request.
    Returns every problem found; an empty list means the input is valid.
    """
    errors: List[str] = []

    for field, label in REQUIRED_FIELDS:
        if not _clean(getattr(data, field)):
            errors.append(f"{label} is required")

    email = _clean(data.email)
    if email and "@" not in email:
        errors.append("Email is invalid")

    visit_date = _clean(data.visit_date)
    if visit_date and _parse_visit_date(visit_date) is None:
        errors.append("Visit Date must be a date like 2025-01-20")

    visit_time = _clean(data.visit_time)
    if visit_time and _parse_visit_time(visit_time) is None:
        errors.append("Visit Time must be HH:MM")

    return errors


class VisitorService:
    """Service for visitor-related operations"""

    def __init__(
        self,
        store: VisitorStore,
        clock: Clock = utc_now,
        pass_validity_hours: Optional[int] = None,
    ):
        self.store = store
        self.clock = clock
        if pass_validity_hours is None:
            pass_validity_hours = settings.VISITOR_PASS_VALIDITY_HOURS
        self.pass_validity = timedelta(hours=pass_validity_hours)

    # -----------------------------
    # Registration
    # -----------------------------
    def _new_qr_code(self) -> str:
        while True:
            token = f"QR{uuid.uuid4().hex[:16].upper()}"
            if self.store.find_by_qr_code(token) is None:
                return token

    def _build_visitor(self, actor: Actor, data: VisitorCreateRequest) -> Visitor:
        now = self.clock()
        return Visitor(
            visitor_id=str(uuid.uuid4()),
            name=_clean(data.name),
            phone=_clean(data.phone),
            email=_clean(data.email),
            id_number=_clean(data.id_number),
            purpose=_clean(data.purpose),
            visit_date=_parse_visit_date(_clean(data.visit_date)),
            visit_time=_parse_visit_time(_clean(data.visit_time)),
            host_id=data.host_id or actor.user_id,
            host_name=data.host_name or actor.name,
            host_apartment=data.host_apartment or actor.apartment_no or "",
            status=VisitorStatus.PENDING,
            qr_code=self._new_qr_code(),
            valid_until=now + self.pass_validity,
            access_zones=list(data.access_zones),
            vehicle_number=_clean(data.vehicle_number) or None,
            delivery_type=data.delivery_type,
            vendor_type=data.vendor_type,
            assets=list(data.assets),
            registration_source=data.registration_source,
            created_at=now,
        )

    def register_visitor(self, actor: Actor, data: VisitorCreateRequest) -> Visitor:
        """
        Register a visitor with status=pending.
        All field errors are reported together; nothing is stored on failure.
        """
        require_role(actor, "register visitors")

        errors = validate_visitor_input(data)
        if errors:
            logger.info(f"REGISTER_VISITOR_INVALID | host={actor.user_id} errors={errors}")
            raise ValidationError(errors)

        visitor = self.store.add(self._build_visitor(actor, data))
        logger.info(
            f"REGISTER_VISITOR | visitor_id={visitor.visitor_id} host_id={visitor.host_id} "
            f"source={visitor.registration_source.value} valid_until={visitor.valid_until.isoformat()}"
        )
        self._log_pass_issued(visitor)
        return visitor

    def bulk_register(self, actor: Actor, rows: List[VisitorCreateRequest]) -> BulkRegistrationResult:
        """
        Register many visitors. Each row is validated on its own; a bad row is
        reported with its errors and does not stop the others.
        """
        require_role(actor, "bulk register visitors")

        accepted: List[Visitor] = []
        rejected: List[RejectedRow] = []

        for row_no, row in enumerate(rows, start=1):
            errors = validate_visitor_input(row)
            if errors:
                rejected.append(
                    RejectedRow(
                        row=row_no,
                        errors=errors,
                        data={
                            field: _clean(getattr(row, field))
                            for field, _ in REQUIRED_FIELDS
                            if _clean(getattr(row, field))
                        },
                    )
                )
                continue

            row = row.model_copy(update={"registration_source": RegistrationSource.BULK_IMPORT})
            visitor = self.store.add(self._build_visitor(actor, row))
            self._log_pass_issued(visitor)
            accepted.append(visitor)

        logger.info(
            f"BULK_REGISTER | host={actor.user_id} rows={len(rows)} "
            f"accepted={len(accepted)} rejected={len(rejected)}"
        )
        return BulkRegistrationResult(
            accepted=accepted,
            rejected=rejected,
            accepted_count=len(accepted),
            rejected_count=len(rejected),
        )

    def _log_pass_issued(self, visitor: Visitor):
        """Stub for the delivery service (SMS/email/QR)"""
        logger.info(
            f"PASS_ISSUED_STUB | To: {visitor.phone} / {visitor.email} | "
            f"Host: {visitor.host_name} ({visitor.host_apartment}) | "
            f"QR: {visitor.qr_code} | VisitorID: {visitor.visitor_id}"
        )

    # -----------------------------
    # Expiry
    # -----------------------------
    def _expire_if_overdue(self, visitor: Visitor) -> Visitor:
        """Caller must hold the visitor's lock."""
        if (
            visitor.status in EXPIRABLE_STATUSES
            and visitor.valid_until is not None
            and visitor.valid_until < self.clock()
        ):
            previous = visitor.status
            visitor = visitor.model_copy(update={"status": VisitorStatus.EXPIRED})
            self.store.save(visitor)
            logger.info(
                f"VISITOR_EXPIRED | visitor_id={visitor.visitor_id} previous={previous.value} "
                f"valid_until={visitor.valid_until.isoformat()}"
            )
        return visitor

    def expire_overdue(self) -> List[str]:
        """Sweep every visitor and expire overdue passes. Returns the expired ids."""
        expired: List[str] = []
        for candidate in self.store.all(lambda v: v.status in EXPIRABLE_STATUSES):
            with self.store.locked(candidate.visitor_id) as visitor:
                before = visitor.status
                visitor = self._expire_if_overdue(visitor)
                if visitor.status != before:
                    expired.append(visitor.visitor_id)
        if expired:
            logger.info(f"EXPIRE_SWEEP | expired={len(expired)}")
        return expired

    # -----------------------------
    # Reads
    # -----------------------------
    def get_visitor(self, visitor_id: str) -> Visitor:
        with self.store.locked(visitor_id) as visitor:
            return self._expire_if_overdue(visitor)

    def list_visitors(
        self,
        status: Optional[VisitorStatus] = None,
        host_id: Optional[str] = None,
    ) -> List[Visitor]:
        self.expire_overdue()
        visitors = self.store.all(
            lambda v: (status is None or v.status == status)
            and (host_id is None or v.host_id == host_id)
        )
        visitors.sort(key=lambda v: v.created_at, reverse=True)
        return visitors

    def count_checked_in(self) -> int:
        self.expire_overdue()
        return self.store.count_checked_in()

    def verify_pass(self, actor: Actor, qr_code: str) -> Visitor:
        """Look a visitor up by the QR token shown at the gate."""
        require_role(actor, "verify visitor passes")
        found = self.store.find_by_qr_code(_clean(qr_code))
        if found is None:
            logger.warning(f"VERIFY_PASS_NOT_FOUND | qr_code={qr_code}")
            raise NotFound("Visitor pass", qr_code)
        return self.get_visitor(found.visitor_id)

    def can_access_zone(self, visitor_id: str, zone: AmenityLocation) -> bool:
        """
        Informational zone check. The physical access-control system does
        the actual enforcement.
        """
        visitor = self.get_visitor(visitor_id)
        return zone in visitor.access_zones

    # -----------------------------
    # Lifecycle
    # -----------------------------
    def transition(self, actor: Actor, visitor_id: str, action: VisitorAction) -> Visitor:
        """
        Move a visitor along its lifecycle.

        approve/reject: pending only
        check_in: approved only (sets check_in_time)
        check_out: checked-in only (sets check_out_time)
        """
        require_role(actor, ACTION_OPERATIONS[action])

        with self.store.locked(visitor_id) as visitor:
            visitor = self._expire_if_overdue(visitor)

            if (
                actor.role == Role.RESIDENT
                and action in (VisitorAction.APPROVE, VisitorAction.REJECT)
                and visitor.host_id != actor.user_id
            ):
                raise PermissionDenied(actor.role.value, f"{action.value} visitors hosted by others")

            next_status = VISITOR_TRANSITIONS.get((visitor.status, action))
            if next_status is None:
                logger.warning(
                    f"VISITOR_TRANSITION_REJECTED | visitor_id={visitor_id} "
                    f"status={visitor.status.value} action={action.value}"
                )
                raise InvalidStateTransition("visitor", visitor.status.value, action.value)

            now = self.clock()
            updates = {"status": next_status}
            if action in (VisitorAction.APPROVE, VisitorAction.REJECT):
                updates["approved_at"] = now
                updates["approved_by"] = actor.user_id
            elif action == VisitorAction.CHECK_IN:
                updates["check_in_time"] = now
            elif action == VisitorAction.CHECK_OUT:
                updates["check_out_time"] = now

            updated = self.store.save(visitor.model_copy(update=updates))

        logger.info(
            f"VISITOR_TRANSITION | visitor_id={visitor_id} {visitor.status.value}->{next_status.value} "
            f"by={actor.user_id} role={actor.role.value}"
        )
        return updated

    def approve(self, actor: Actor, visitor_id: str) -> Visitor:
        return self.transition(actor, visitor_id, VisitorAction.APPROVE)

    def reject(self, actor: Actor, visitor_id: str) -> Visitor:
        return self.transition(actor, visitor_id, VisitorAction.REJECT)

    def check_in(self, actor: Actor, visitor_id: str) -> Visitor:
        return self.transition(actor, visitor_id, VisitorAction.CHECK_IN)

    def check_out(self, actor: Actor, visitor_id: str) -> Visitor:
        return self.transition(actor, visitor_id, VisitorAction.CHECK_OUT)

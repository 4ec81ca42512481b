"""
Emergency alert service: trigger, multi-party acknowledgment, resolution
"""

from typing import List
import uuid
import logging

from societydesk.clock import Clock, utc_now
from societydesk.exceptions import InvalidStateTransition, ValidationError
from societydesk.models.schemas import Actor, AlertTriggerRequest, EmergencyAlert, OccupancyResponse
from societydesk.services.amenity_service import AmenityService
from societydesk.services.permissions import require_role
from societydesk.services.visitor_service import VisitorService
from societydesk.store.memory import AlertStore

logger = logging.getLogger(__name__)


class AlertService:
    """Service for emergency alerts"""

    def __init__(
        self,
        store: AlertStore,
        amenity_service: AmenityService,
        visitor_service: VisitorService,
        clock: Clock = utc_now,
    ):
        self.store = store
        self.amenity_service = amenity_service
        self.visitor_service = visitor_service
        self.clock = clock

    def trigger(self, actor: Actor, request: AlertTriggerRequest) -> EmergencyAlert:
        require_role(actor, "trigger emergency alerts")

        message = (request.message or "").strip()
        if not message:
            raise ValidationError(["Alert message is required"])

        alert = EmergencyAlert(
            alert_id=str(uuid.uuid4()),
            type=request.type,
            message=message,
            severity=request.severity,
            location=request.location,
            reported_by=actor.user_id,
            timestamp=self.clock(),
            is_active=True,
            acknowledged_by=[],
        )
        self.store.add(alert)

        logger.warning(
            f"EMERGENCY_TRIGGERED | alert_id={alert.alert_id} type={alert.type.value} "
            f"severity={alert.severity.value} location={alert.location} by={actor.user_id} "
            f"on_site={self.total_occupancy().total_occupancy}"
        )
        return alert

    def acknowledge(self, actor: Actor, alert_id: str) -> EmergencyAlert:
        """Record that the actor has seen the alert. Repeating it changes nothing."""
        require_role(actor, "acknowledge emergency alerts")

        with self.store.locked(alert_id) as alert:
            if not alert.is_active:
                raise InvalidStateTransition("alert", "resolved", "acknowledge")
            if actor.user_id in alert.acknowledged_by:
                return alert

            alert = self.store.save(
                alert.model_copy(update={"acknowledged_by": alert.acknowledged_by + [actor.user_id]})
            )

        logger.info(
            f"EMERGENCY_ACKNOWLEDGED | alert_id={alert_id} user_id={actor.user_id} "
            f"acknowledged={len(alert.acknowledged_by)}"
        )
        return alert

    def resolve(self, actor: Actor, alert_id: str) -> EmergencyAlert:
        require_role(actor, "resolve emergency alerts")

        with self.store.locked(alert_id) as alert:
            if not alert.is_active:
                raise InvalidStateTransition("alert", "resolved", "resolve")
            alert = self.store.save(
                alert.model_copy(
                    update={
                        "is_active": False,
                        "resolved_at": self.clock(),
                        "resolved_by": actor.user_id,
                    }
                )
            )

        logger.info(f"EMERGENCY_RESOLVED | alert_id={alert_id} by={actor.user_id}")
        return alert

    def get_alert(self, alert_id: str) -> EmergencyAlert:
        return self.store.get(alert_id)

    def list_alerts(self, active_only: bool = False) -> List[EmergencyAlert]:
        alerts = self.store.all(lambda a: a.is_active or not active_only)
        alerts.sort(key=lambda a: a.timestamp, reverse=True)
        return alerts

    def total_occupancy(self) -> OccupancyResponse:
        """People on-site: amenity occupancy plus checked-in visitors"""
        amenity_occupancy = self.amenity_service.total_occupancy()
        checked_in = self.visitor_service.count_checked_in()
        return OccupancyResponse(
            amenity_occupancy=amenity_occupancy,
            checked_in_visitors=checked_in,
            total_occupancy=amenity_occupancy + checked_in,
        )

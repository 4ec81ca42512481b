"""
Emergency alert API routes
"""

from typing import List

from fastapi import APIRouter, Depends, status

from societydesk.context import AppContext
from societydesk.deps import get_actor, get_context
from societydesk.models.schemas import Actor, AlertTriggerRequest, EmergencyAlert, OccupancyResponse

router = APIRouter()


@router.post("", response_model=EmergencyAlert, status_code=status.HTTP_201_CREATED)
def trigger_alert(
    request: AlertTriggerRequest,
    actor: Actor = Depends(get_actor),
    ctx: AppContext = Depends(get_context),
):
    return ctx.alert_service.trigger(actor, request)


@router.get("", response_model=List[EmergencyAlert])
def list_alerts(active_only: bool = False, ctx: AppContext = Depends(get_context)):
    return ctx.alert_service.list_alerts(active_only=active_only)


@router.get("/occupancy", response_model=OccupancyResponse)
def on_site_occupancy(ctx: AppContext = Depends(get_context)):
    """How many people are on-site: amenity occupancy + checked-in visitors"""
    return ctx.alert_service.total_occupancy()


@router.get("/{alert_id}", response_model=EmergencyAlert)
def get_alert(alert_id: str, ctx: AppContext = Depends(get_context)):
    return ctx.alert_service.get_alert(alert_id)


@router.post("/{alert_id}/acknowledge", response_model=EmergencyAlert)
def acknowledge_alert(
    alert_id: str,
    actor: Actor = Depends(get_actor),
    ctx: AppContext = Depends(get_context),
):
    return ctx.alert_service.acknowledge(actor, alert_id)


@router.post("/{alert_id}/resolve", response_model=EmergencyAlert)
def resolve_alert(
    alert_id: str,
    actor: Actor = Depends(get_actor),
    ctx: AppContext = Depends(get_context),
):
    return ctx.alert_service.resolve(actor, alert_id)

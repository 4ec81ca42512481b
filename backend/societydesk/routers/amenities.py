"""
Amenity API routes
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status

from societydesk.context import AppContext
from societydesk.deps import get_actor, get_context
from societydesk.models.enums import AmenityLocation
from societydesk.models.schemas import Actor, AmenityCreateRequest, AmenityUpdateRequest, AmenityView

router = APIRouter()


@router.get("", response_model=List[AmenityView])
def list_amenities(
    location: Optional[AmenityLocation] = None,
    ctx: AppContext = Depends(get_context),
):
    """All amenities with occupancy rate and status (available / busy / full / closed)"""
    svc = ctx.amenity_service
    return [svc.view(a) for a in svc.list_amenities(location=location)]


@router.post("", response_model=AmenityView, status_code=status.HTTP_201_CREATED)
def create_amenity(
    request: AmenityCreateRequest,
    actor: Actor = Depends(get_actor),
    ctx: AppContext = Depends(get_context),
):
    svc = ctx.amenity_service
    return svc.view(svc.create_amenity(actor, request))


@router.get("/{amenity_id}", response_model=AmenityView)
def get_amenity(amenity_id: str, ctx: AppContext = Depends(get_context)):
    svc = ctx.amenity_service
    return svc.view(svc.get_amenity(amenity_id))


@router.patch("/{amenity_id}", response_model=AmenityView)
def update_amenity(
    amenity_id: str,
    request: AmenityUpdateRequest,
    actor: Actor = Depends(get_actor),
    ctx: AppContext = Depends(get_context),
):
    """Admin only. Only the fields sent are changed."""
    svc = ctx.amenity_service
    return svc.view(svc.update_amenity(actor, amenity_id, request))


@router.delete("/{amenity_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_amenity(
    amenity_id: str,
    actor: Actor = Depends(get_actor),
    ctx: AppContext = Depends(get_context),
):
    ctx.amenity_service.delete_amenity(actor, amenity_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{amenity_id}/check-in", response_model=AmenityView)
def check_in(
    amenity_id: str,
    actor: Actor = Depends(get_actor),
    ctx: AppContext = Depends(get_context),
):
    """Walk-in to an open-access amenity"""
    svc = ctx.amenity_service
    return svc.view(svc.check_in(actor, amenity_id))


@router.post("/{amenity_id}/check-out", response_model=AmenityView)
def check_out(
    amenity_id: str,
    actor: Actor = Depends(get_actor),
    ctx: AppContext = Depends(get_context),
):
    svc = ctx.amenity_service
    return svc.view(svc.check_out(actor, amenity_id))

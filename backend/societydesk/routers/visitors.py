"""
Visitor API routes
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, Response, UploadFile, status

from societydesk.context import AppContext
from societydesk.deps import get_actor, get_context
from societydesk.models.enums import AmenityLocation, VisitorStatus
from societydesk.models.schemas import (
    Actor,
    BulkRegistrationResult,
    Visitor,
    VisitorCreateRequest,
    VisitorListResponse,
    VisitorStatusUpdateRequest,
    ZoneAccessResponse,
)
from societydesk.services.csv_service import export_visitors_csv, parse_visitor_csv
from societydesk.services.permissions import require_role

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=Visitor,
    status_code=status.HTTP_201_CREATED,
    summary="Register visitor",
    description="""
    Register (or pre-register) a visitor.

    Validates every required field and reports all problems at once:
    Name, Phone, Email, ID Number, Purpose, Visit Date, Visit Time.

    Creates the visitor with:
    - status=pending
    - a unique QR token
    - valid_until = now + pass validity (24h by default)
    """,
)
def register_visitor(
    request: VisitorCreateRequest,
    actor: Actor = Depends(get_actor),
    ctx: AppContext = Depends(get_context),
):
    return ctx.visitor_service.register_visitor(actor, request)


@router.post("/bulk", response_model=BulkRegistrationResult)
async def bulk_register_visitors(
    file: UploadFile = File(...),
    actor: Actor = Depends(get_actor),
    ctx: AppContext = Depends(get_context),
):
    """
    Bulk registration from CSV.
    Required columns: Name, Phone, Email, ID Number, Purpose, Visit Date, Visit Time.
    Optional: Vehicle Number. Valid rows are registered even when others fail.
    """
    require_role(actor, "bulk register visitors")

    raw = await file.read()
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="CSV file must be UTF-8 encoded",
        )

    logger.info(f"BULK_UPLOAD | filename={file.filename} bytes={len(raw)} by={actor.user_id}")
    rows = parse_visitor_csv(text)
    return ctx.visitor_service.bulk_register(actor, rows)


@router.get("", response_model=VisitorListResponse)
def list_visitors(
    status_filter: Optional[VisitorStatus] = Query(default=None, alias="status"),
    host_id: Optional[str] = None,
    ctx: AppContext = Depends(get_context),
):
    visitors = ctx.visitor_service.list_visitors(status=status_filter, host_id=host_id)
    return VisitorListResponse(visitors=visitors, count=len(visitors))


@router.get("/export")
def export_visitors(ctx: AppContext = Depends(get_context)):
    """Download the visitor collection as CSV"""
    body = export_visitors_csv(ctx.visitor_service.list_visitors())
    return Response(
        content=body,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="visitors.csv"'},
    )


@router.get("/pass/{qr_code}", response_model=Visitor)
def verify_pass(
    qr_code: str,
    actor: Actor = Depends(get_actor),
    ctx: AppContext = Depends(get_context),
):
    """Security desk: resolve a scanned QR token to its visitor"""
    return ctx.visitor_service.verify_pass(actor, qr_code)


@router.post("/expire")
def expire_overdue_passes(
    actor: Actor = Depends(get_actor),
    ctx: AppContext = Depends(get_context),
):
    """Sweep approved/checked-in visitors whose pass validity has lapsed"""
    require_role(actor, "expire visitor passes")
    expired: List[str] = ctx.visitor_service.expire_overdue()
    return {"expired": expired, "count": len(expired)}


@router.get("/{visitor_id}", response_model=Visitor)
def get_visitor(visitor_id: str, ctx: AppContext = Depends(get_context)):
    return ctx.visitor_service.get_visitor(visitor_id)


@router.post("/{visitor_id}/status", response_model=Visitor)
def update_visitor_status(
    visitor_id: str,
    request: VisitorStatusUpdateRequest,
    actor: Actor = Depends(get_actor),
    ctx: AppContext = Depends(get_context),
):
    """
    approve / reject: pending visitors only (host or admin)
    check_in: approved visitors only (security)
    check_out: checked-in visitors only (security)
    """
    return ctx.visitor_service.transition(actor, visitor_id, request.action)


@router.get("/{visitor_id}/zones/{zone}", response_model=ZoneAccessResponse)
def check_zone_access(
    visitor_id: str,
    zone: AmenityLocation,
    ctx: AppContext = Depends(get_context),
):
    allowed = ctx.visitor_service.can_access_zone(visitor_id, zone)
    return ZoneAccessResponse(visitor_id=visitor_id, zone=zone, allowed=allowed)

"""
Dashboard API routes
"""

from fastapi import APIRouter, Depends

from societydesk.context import AppContext
from societydesk.deps import get_context
from societydesk.models.schemas import DashboardSummary

router = APIRouter()


@router.get("/summary", response_model=DashboardSummary)
def dashboard_summary(ctx: AppContext = Depends(get_context)):
    return ctx.analytics_service.dashboard_summary()

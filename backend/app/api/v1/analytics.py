from fastapi import APIRouter, Depends, Request

from app.api.deps import get_analytics_service
from app.core.config import settings
from app.core.limiter import limiter
from app.schemas.analytics import AnalyticsReport, EventTypeBreakdown
from app.services.analytics_service import AnalyticsService

router = APIRouter()


@router.get("", response_model=AnalyticsReport)
@limiter.limit(f"{settings.RATE_LIMIT_PER_MINUTE}/minute")
async def get_analytics(
    request: Request,
    service: AnalyticsService = Depends(get_analytics_service),
):
    """Get funnel metrics computed over the whole event log."""
    return await service.compute()


@router.get("/event-types", response_model=EventTypeBreakdown)
@limiter.limit(f"{settings.RATE_LIMIT_PER_MINUTE}/minute")
async def get_event_types(
    request: Request,
    service: AnalyticsService = Depends(get_analytics_service),
):
    """Get event counts for every event type in the log."""
    return await service.event_type_breakdown()

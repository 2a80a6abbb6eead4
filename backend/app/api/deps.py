from fastapi import Depends, Request

from app.services.analytics_service import AnalyticsService
from app.services.event_store import EventStore


async def get_event_store(request: Request) -> EventStore:
    """Dependency returning the process-wide event store from ``app.state``."""
    return request.app.state.event_store  # type: ignore[no-any-return]


async def get_analytics_service(
    store: EventStore = Depends(get_event_store),
) -> AnalyticsService:
    return AnalyticsService(store)

import asyncio
from decimal import Decimal

from app.core.rounding import round_half_up
from app.models.event import ADD_TO_CART, PAGE_VIEW, PURCHASE
from app.schemas.analytics import (
    AnalyticsReport,
    EventTypeBreakdown,
    EventTypeCount,
)
from app.services.event_store import EventStore


async def _gather_or_cancel(*aws):
    """Await ``aws`` concurrently; if one fails, cancel and reap the rest, then re-raise."""
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        # Collects late failures too, so none go unretrieved
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


def conversion_rate(purchases: int, page_views: int) -> float:
    """Purchases per hundred page views, rounded half-up to two decimals.

    Zero page views gives exactly 0.0.
    """
    if page_views == 0:
        return 0.0
    return round_half_up(Decimal(purchases) * 100 / Decimal(page_views))


class AnalyticsService:
    """Derives the funnel report from an EventStore."""

    def __init__(self, store: EventStore):
        self.store = store

    async def compute(self) -> AnalyticsReport:
        """Build the analytics report over the current event log.

        The store queries are independent reads, so they are awaited
        together. If one fails the others are cancelled before the error
        propagates, so no query outlives the call and no report is built.
        """
        page_views, add_to_carts, purchases, stats, top_product = await _gather_or_cancel(
            self.store.count_by_type(PAGE_VIEW),
            self.store.count_by_type(ADD_TO_CART),
            self.store.count_by_type(PURCHASE),
            self.store.purchase_stats(),
            self.store.top_viewed_product(),
        )

        return AnalyticsReport(
            total_page_views=page_views,
            total_add_to_carts=add_to_carts,
            total_purchases=purchases,
            conversion_rate=conversion_rate(purchases, page_views),
            average_purchase_value=stats.avg,
            max_purchase_value=stats.max,
            min_purchase_value=stats.min,
            top_product_id=top_product,
        )

    async def event_type_breakdown(self) -> EventTypeBreakdown:
        """Counts for every event type, most frequent first."""
        counts = await self.store.count_all_types()
        rows = sorted(counts.items(), key=lambda x: (-x[1], x[0]))
        return EventTypeBreakdown(
            data=[EventTypeCount(event_type=name, count=count) for name, count in rows],
            total=sum(counts.values()),
        )

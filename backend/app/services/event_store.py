"""Read-only access to the funnel event log."""

from typing import Protocol

from sqlalchemy import func, select

from app.core.rounding import round_half_up
from app.db.session import Database
from app.models.event import PAGE_VIEW, PURCHASE, Event
from app.schemas.analytics import PurchaseStats


class EventStore(Protocol):
    """The queries the analytics service needs from an event log."""

    async def count_by_type(self, event_type: str) -> int: ...

    async def purchase_stats(self) -> PurchaseStats: ...

    async def top_viewed_product(self) -> str | None: ...

    async def count_all_types(self) -> dict[str, int]: ...


class SqlEventStore:
    """EventStore backed by the ``events`` table.

    Every query runs in its own session so callers may await several of
    them concurrently. Storage errors are not caught here.
    """

    def __init__(self, database: Database):
        self.database = database

    async def count_by_type(self, event_type: str) -> int:
        """Count events whose type matches exactly (case-sensitive)."""
        await self.database.ensure_schema()
        async with self.database.session_factory() as session:
            result = await session.execute(
                select(func.count()).select_from(Event).where(Event.event_type == event_type)
            )
            return int(result.scalar_one())

    async def purchase_stats(self) -> PurchaseStats:
        """Average, max and min order amount over purchases with an amount.

        Purchases without an ``order_amount`` are ignored. With nothing left
        to aggregate every field is 0.0.
        """
        await self.database.ensure_schema()
        async with self.database.session_factory() as session:
            result = await session.execute(
                select(
                    func.avg(Event.order_amount),
                    func.max(Event.order_amount),
                    func.min(Event.order_amount),
                ).where(
                    Event.event_type == PURCHASE,
                    Event.order_amount.isnot(None),
                )
            )
            avg, max_, min_ = result.one()

        return PurchaseStats(
            avg=round_half_up(avg) if avg is not None else 0.0,
            max=round_half_up(max_) if max_ is not None else 0.0,
            min=round_half_up(min_) if min_ is not None else 0.0,
        )

    async def top_viewed_product(self) -> str | None:
        """Product with the most page views; ties go to the smallest id."""
        await self.database.ensure_schema()
        views = func.count().label("views")
        async with self.database.session_factory() as session:
            result = await session.execute(
                select(Event.product_id, views)
                .where(
                    Event.event_type == PAGE_VIEW,
                    Event.product_id.isnot(None),
                )
                .group_by(Event.product_id)
                .order_by(views.desc(), Event.product_id.asc())
                .limit(1)
            )
            row = result.first()
        return row[0] if row else None

    async def count_all_types(self) -> dict[str, int]:
        """Event count per type, for every type present in the log."""
        await self.database.ensure_schema()
        async with self.database.session_factory() as session:
            result = await session.execute(
                select(Event.event_type, func.count()).group_by(Event.event_type)
            )
            return {row[0]: int(row[1]) for row in result.all()}

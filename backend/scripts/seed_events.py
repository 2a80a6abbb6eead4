"""Generate a realistic fake funnel event log for development and demos.

Writes straight to the configured database; the API itself is read-only.

Usage:
    python -m scripts.seed_events [--count 1000] [--days 7] [--products 20]
    DATABASE_URL=sqlite+aiosqlite:///./demo.db python -m scripts.seed_events --count 5000
"""

import argparse
import asyncio
import random
from datetime import datetime, timedelta, timezone
from typing import Any

from app.core.config import settings
from app.db.session import Database
from app.models.event import ADD_TO_CART, PAGE_VIEW, PURCHASE, Event

# Funnel steps and their relative weights
EVENTS = [
    (PAGE_VIEW, 80),
    (ADD_TO_CART, 15),
    (PURCHASE, 5),
]

ORDER_AMOUNTS = [9.99, 19.99, 29.99, 49.99, 99.99, 149.5, 299.0]


def generate_events(count: int, days: int, products: int = 20) -> list[dict[str, Any]]:
    """Generate a list of fake events, sorted by timestamp."""
    now = datetime.now(timezone.utc)
    start = now - timedelta(days=days)
    product_ids = [f"prod-{i}" for i in range(1, products + 1)]

    # Skew popularity so there is a clear top product
    popularity = [1 / rank for rank in range(1, products + 1)]

    event_types = [e[0] for e in EVENTS]
    event_weights = [e[1] for e in EVENTS]

    events = []
    for _ in range(count):
        event_type = random.choices(event_types, weights=event_weights, k=1)[0]
        ts = start + timedelta(seconds=random.randint(0, days * 86400))
        product_id = random.choices(product_ids, weights=popularity, k=1)[0]

        evt: dict[str, Any] = {
            "event_type": event_type,
            "timestamp": ts,
            "product_id": product_id,
            "order_amount": None,
        }

        if event_type == PAGE_VIEW and random.random() < 0.1:
            # Landing and category pages carry no product
            evt["product_id"] = None
        elif event_type == PURCHASE and random.random() > 0.05:
            evt["order_amount"] = random.choice(ORDER_AMOUNTS)

        events.append(evt)

    events.sort(key=lambda e: e["timestamp"])
    return events


async def seed(database: Database, events: list[dict[str, Any]], batch_size: int) -> int:
    """Bulk-insert events in batches. Returns the number inserted."""
    await database.ensure_schema()
    total = 0
    for i in range(0, len(events), batch_size):
        batch = events[i : i + batch_size]
        async with database.session_factory() as session:
            session.add_all([Event(**evt) for evt in batch])
            await session.commit()
        total += len(batch)
        print(f"  Inserted {total}/{len(events)} events")
    return total


async def _run(args: argparse.Namespace) -> int:
    database = Database(args.database_url)
    try:
        events = generate_events(args.count, args.days, args.products)
        return await seed(database, events, args.batch_size)
    finally:
        await database.dispose()


def main():
    parser = argparse.ArgumentParser(description="Seed funnel analytics events")
    parser.add_argument("--database-url", default=settings.DATABASE_URL, help="Async database URL")
    parser.add_argument("--count", type=int, default=1000, help="Number of events")
    parser.add_argument("--days", type=int, default=7, help="Days of history")
    parser.add_argument("--products", type=int, default=20, help="Distinct product ids")
    parser.add_argument("--batch-size", type=int, default=500, help="Events per transaction")
    args = parser.parse_args()

    print(f"Generating {args.count} events over {args.days} days...")
    total = asyncio.run(_run(args))
    print(f"Done! Seeded {total} events.")


if __name__ == "__main__":
    main()

from pydantic import BaseModel, Field


class PurchaseStats(BaseModel):
    """Purchase value statistics over purchases with a known amount."""

    avg: float = 0.0
    max: float = 0.0
    min: float = 0.0


class AnalyticsReport(BaseModel):
    """Funnel metrics over the whole event log."""

    total_page_views: int = Field(..., ge=0)
    total_add_to_carts: int = Field(..., ge=0)
    total_purchases: int = Field(..., ge=0)
    conversion_rate: float
    average_purchase_value: float
    max_purchase_value: float
    min_purchase_value: float
    top_product_id: str | None


class EventTypeCount(BaseModel):
    """Number of events of one type."""

    event_type: str
    count: int


class EventTypeBreakdown(BaseModel):
    """Event counts for every type present in the log."""

    data: list[EventTypeCount]
    total: int

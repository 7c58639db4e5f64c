"""Aggregate figures shown on the admin dashboard."""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class DashboardStats(BaseModel):
    total_bookings: int = 0
    pending_bookings: int = 0
    completed_bookings: int = 0
    # Sum of ``price`` over approved and completed bookings.
    total_revenue: float = 0.0

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

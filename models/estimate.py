"""
Estimate request/response schemas.

Stateless calculations: order time from items or size counts, and
delivery projection onto a work schedule.
"""

from pydantic import Field, computed_field
from typing import Optional
from datetime import datetime

from models.base import BaseSchema
from models.garment import GarmentType, OrderItem
from models.schedule import WorkSchedule
from utils.time_utils import format_duration


class OrderTimeRequest(BaseSchema):
    """Time for manual order lines."""

    items: list[OrderItem] = Field(default_factory=list)
    design_hours: float = Field(default=0, ge=0)


class SizeCountsTimeRequest(BaseSchema):
    """Time for one garment type given units per size."""

    garment_type: GarmentType
    size_counts: dict[str, int] = Field(..., description="Units per size")
    design_hours: float = Field(default=0, ge=0)


class SizeBucketsTimeRequest(BaseSchema):
    """Time for several garment types given units per size."""

    size_counts: dict[GarmentType, dict[str, int]] = Field(
        ...,
        description="Units per size, per garment type"
    )
    design_hours: float = Field(default=0, ge=0)


class DeliveryProjectionRequest(BaseSchema):
    """
    Project a duration onto the calendar.

    Uses the configured work schedule unless one is given.
    """

    total_minutes: float = Field(..., description="Minutes of work to schedule")
    start_instant: Optional[datetime] = Field(None, description="Defaults to now")
    work_schedule: Optional[WorkSchedule] = None


class DeliveryProjectionResponse(BaseSchema):
    """Projected delivery."""

    total_minutes: float
    start_instant: datetime
    estimated_delivery: datetime
    work_schedule: WorkSchedule

    @computed_field
    @property
    def formatted_total(self) -> str:
        return format_duration(self.total_minutes)

"""
Garment and duration schemas.

Durations are minutes per unit produced.
"""

from pydantic import ConfigDict, Field, computed_field
from enum import Enum

from models.base import BaseSchema
from utils.time_utils import format_duration


class GarmentType(str, Enum):
    """Garment types the workshop produces."""
    POLO = "polo"
    LONG_SLEEVE_POLO = "long_sleeve_polo"
    SHORTS = "shorts"
    SKIRT_SHORTS = "skirt_shorts"
    ATHLETIC_SHORTS = "athletic_shorts"


GARMENT_LABELS = {
    GarmentType.POLO: "Polo",
    GarmentType.LONG_SLEEVE_POLO: "Long-sleeve polo",
    GarmentType.SHORTS: "Shorts",
    GarmentType.SKIRT_SHORTS: "Skirt shorts",
    GarmentType.ATHLETIC_SHORTS: "Athletic shorts",
}


class ProcessDuration(BaseSchema):
    """Minutes per unit for each production process of one garment (or size)."""

    printing: float = Field(default=0, ge=0, description="Sublimation printing")
    cutting: float = Field(default=0, ge=0, description="Cutting")
    pressing: float = Field(default=0, ge=0, description="Heat pressing")
    qc: float = Field(default=0, ge=0, description="Quality control")
    contingency: float = Field(default=0, ge=0, description="Buffer for the unexpected")

    @property
    def per_unit_minutes(self) -> float:
        """Total minutes to produce one unit."""
        return self.printing + self.cutting + self.pressing + self.qc + self.contingency


class OrderItem(BaseSchema):
    """One order line: a garment type and how many units."""

    model_config = ConfigDict(frozen=True)

    garment_type: GarmentType = Field(..., description="Garment type")
    quantity: int = Field(..., ge=1, description="Units ordered")


class DurationBreakdown(BaseSchema):
    """Design, production, and total minutes for an order."""

    design_minutes: float = Field(..., ge=0)
    production_minutes: float = Field(..., ge=0)
    total_minutes: float = Field(..., ge=0)

    @computed_field
    @property
    def formatted_total(self) -> str:
        return format_duration(self.total_minutes)

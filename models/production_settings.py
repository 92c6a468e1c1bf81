"""
Production settings schema.

The snapshot the engine is fed: per-garment durations, optional per-size
durations, and the work schedule.
"""

from pydantic import Field

from models.base import BaseSchema
from models.garment import GarmentType, ProcessDuration
from models.schedule import WorkSchedule


class ProductionSettings(BaseSchema):
    """
    Durations and work schedule.

    durations_by_size is sparse: only configured sizes are present and
    lookups fall back to the garment-level duration.
    """

    durations: dict[GarmentType, ProcessDuration] = Field(
        default_factory=dict,
        description="Average per-unit durations by garment type"
    )
    durations_by_size: dict[GarmentType, dict[str, ProcessDuration]] = Field(
        default_factory=dict,
        description="Per-unit durations by garment type and size"
    )
    work_schedule: WorkSchedule = Field(
        default_factory=WorkSchedule,
        description="Business hours and worked weekdays"
    )
    designers: list[str] = Field(
        default_factory=list,
        description="Designers orders can be assigned to"
    )

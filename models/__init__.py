"""
Pydantic models for validation and serialization.
"""

from models.base import BaseSchema
from models.garment import (
    GarmentType,
    GARMENT_LABELS,
    ProcessDuration,
    OrderItem,
    DurationBreakdown,
)
from models.schedule import WorkSchedule
from models.production_settings import ProductionSettings
from models.order import (
    ProcessStage,
    PIPELINE_ORDER,
    STAGE_LABELS,
    OrderStatus,
    StageState,
    ProcessSet,
    Order,
    OrderCreate,
    OrderItemsReplace,
    OrderListResponse,
    ArchivedWeekGroup,
    ActiveOrderProgress,
    ScheduleOverview,
)
from models.estimate import (
    OrderTimeRequest,
    SizeCountsTimeRequest,
    SizeBucketsTimeRequest,
    DeliveryProjectionRequest,
    DeliveryProjectionResponse,
)

__all__ = [
    # Base
    "BaseSchema",

    # Garments
    "GarmentType",
    "GARMENT_LABELS",
    "ProcessDuration",
    "OrderItem",
    "DurationBreakdown",

    # Schedule & settings
    "WorkSchedule",
    "ProductionSettings",

    # Orders
    "ProcessStage",
    "PIPELINE_ORDER",
    "STAGE_LABELS",
    "OrderStatus",
    "StageState",
    "ProcessSet",
    "Order",
    "OrderCreate",
    "OrderItemsReplace",
    "OrderListResponse",
    "ArchivedWeekGroup",
    "ActiveOrderProgress",
    "ScheduleOverview",

    # Estimates
    "OrderTimeRequest",
    "SizeCountsTimeRequest",
    "SizeBucketsTimeRequest",
    "DeliveryProjectionRequest",
    "DeliveryProjectionResponse",
]

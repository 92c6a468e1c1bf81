"""
Business logic services.

Each service handles one domain area.
"""

from services.duration_table_service import GarmentDurationTable, ZERO_DURATION
from services.production_settings_service import (
    ProductionSettingsService,
    get_production_settings_service,
)
from services.time_calculator_service import (
    TimeCalculatorService,
    get_time_calculator_service,
    compute_order_time,
    compute_order_time_from_size_counts,
    compute_order_time_from_size_buckets,
    format_duration,
)
from services.delivery_projector_service import (
    DeliveryProjectorService,
    get_delivery_projector_service,
    project_delivery,
)
from services.pipeline_service import (
    ProcessPipeline,
    get_process_pipeline,
    RemainingTimeEstimator,
    QuarterProductionEstimator,
    derive_status,
)
from services.order_service import OrderService, get_order_service

__all__ = [
    "GarmentDurationTable",
    "ZERO_DURATION",
    "ProductionSettingsService",
    "get_production_settings_service",
    "TimeCalculatorService",
    "get_time_calculator_service",
    "compute_order_time",
    "compute_order_time_from_size_counts",
    "compute_order_time_from_size_buckets",
    "format_duration",
    "DeliveryProjectorService",
    "get_delivery_projector_service",
    "project_delivery",
    "ProcessPipeline",
    "get_process_pipeline",
    "RemainingTimeEstimator",
    "QuarterProductionEstimator",
    "derive_status",
    "OrderService",
    "get_order_service",
]

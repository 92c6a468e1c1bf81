"""
Estimate API routes.

Stateless order time and delivery calculations, used by the order form
to preview an estimate before the order exists.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
import structlog

from models.garment import DurationBreakdown
from models.estimate import (
    OrderTimeRequest,
    SizeCountsTimeRequest,
    SizeBucketsTimeRequest,
    DeliveryProjectionRequest,
    DeliveryProjectionResponse,
)
from services.time_calculator_service import get_time_calculator_service
from services.delivery_projector_service import (
    get_delivery_projector_service,
    normalize_instant,
)
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/estimates", tags=["Estimates"])


# ===================
# EXCEPTION HANDLER
# ===================

def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


# ===================
# ROUTES
# ===================

@router.post("/order-time", response_model=DurationBreakdown)
async def estimate_order_time(data: OrderTimeRequest):
    """Design, production, and total minutes for manual order lines."""
    try:
        return get_time_calculator_service().order_time(data.items, data.design_hours)

    except Exception as e:
        return handle_error(e)


@router.post("/order-time/by-size", response_model=DurationBreakdown)
async def estimate_order_time_by_size(data: SizeCountsTimeRequest):
    """
    Order time for one garment type from units per size.

    Sizes without configured durations use the garment average.
    """
    try:
        return get_time_calculator_service().order_time_from_size_counts(
            data.garment_type,
            data.size_counts,
            data.design_hours,
        )

    except Exception as e:
        return handle_error(e)


@router.post("/order-time/by-size-buckets", response_model=DurationBreakdown)
async def estimate_order_time_by_size_buckets(data: SizeBucketsTimeRequest):
    """Order time for several garment types from units per size."""
    try:
        return get_time_calculator_service().order_time_from_size_buckets(
            data.size_counts,
            data.design_hours,
        )

    except Exception as e:
        return handle_error(e)


@router.post("/delivery", response_model=DeliveryProjectionResponse)
async def estimate_delivery(data: DeliveryProjectionRequest):
    """
    Project minutes of work onto the work calendar.

    Raises:
        422: Work schedule has no work days or bad hour bounds
    """
    try:
        start = normalize_instant(data.start_instant)
        delivery, schedule = get_delivery_projector_service().project(
            data.total_minutes,
            start=start,
            schedule=data.work_schedule,
        )

        return DeliveryProjectionResponse(
            total_minutes=data.total_minutes,
            start_instant=start,
            estimated_delivery=delivery,
            work_schedule=schedule,
        )

    except Exception as e:
        return handle_error(e)

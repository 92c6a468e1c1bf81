"""
Order API routes.

Creation, item replacement, stage progress, archival, and the
shop-floor schedule.
"""

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
from typing import Optional
import structlog

from models.order import (
    ArchivedWeekGroup,
    Order,
    OrderCreate,
    OrderItemsReplace,
    OrderListResponse,
    OrderStatus,
    ProcessStage,
    ScheduleOverview,
)
from services.order_service import get_order_service
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/orders", tags=["Orders"])


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
    # Unexpected error
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

@router.get("", response_model=OrderListResponse)
async def list_orders(
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(20, ge=1, le=100, description="Items per page"),
    status: Optional[OrderStatus] = Query(None, description="Filter by status"),
    include_archived: bool = Query(False, description="Include archived orders")
):
    """
    List orders, newest first.

    Archived orders are excluded unless requested or filtered by status.
    """
    try:
        service = get_order_service()

        orders, total = service.get_all(
            page=page,
            page_size=page_size,
            status=status,
            include_archived=include_archived
        )

        total_pages = (total + page_size - 1) // page_size

        return OrderListResponse(
            data=orders,
            total=total,
            page=page,
            page_size=page_size,
            total_pages=total_pages
        )

    except Exception as e:
        return handle_error(e)


@router.get("/archived", response_model=list[ArchivedWeekGroup])
async def list_archived_orders():
    """Archived orders grouped by ISO week."""
    try:
        return get_order_service().get_archived_by_week()

    except Exception as e:
        return handle_error(e)


@router.get("/schedule", response_model=ScheduleOverview)
async def get_schedule():
    """
    Shop-floor overview.

    Active orders with their current stage and elapsed time, plus
    deliveries due today and completed counts.
    """
    try:
        return get_order_service().schedule_overview()

    except Exception as e:
        return handle_error(e)


@router.get("/{order_id}", response_model=Order)
async def get_order(order_id: str):
    """
    Get a single order.

    Raises:
        404: Order not found
    """
    try:
        return get_order_service().get_by_id(order_id)

    except Exception as e:
        return handle_error(e)


@router.post("", response_model=Order, status_code=201)
async def create_order(data: OrderCreate):
    """
    Create an order and estimate its delivery.

    Raises:
        422: Validation error or invalid work schedule
    """
    try:
        return get_order_service().create(data)

    except Exception as e:
        return handle_error(e)


@router.put("/{order_id}/items", response_model=Order)
async def replace_order_items(order_id: str, data: OrderItemsReplace):
    """
    Replace the order's item list and refresh the delivery estimate.

    Raises:
        404: Order not found
        422: Order completed or archived
    """
    try:
        return get_order_service().replace_items(order_id, data)

    except Exception as e:
        return handle_error(e)


@router.post("/{order_id}/stages/{stage}/start", response_model=Order)
async def start_stage(order_id: str, stage: ProcessStage):
    """
    Start a pipeline stage.

    Starting a stage that is already running or done changes nothing.

    Raises:
        404: Order not found
    """
    try:
        return get_order_service().start_stage(order_id, stage)

    except Exception as e:
        return handle_error(e)


@router.post("/{order_id}/stages/{stage}/complete", response_model=Order)
async def complete_stage(order_id: str, stage: ProcessStage):
    """
    Complete a pipeline stage.

    Re-projects the delivery from now using the remaining stages.
    Completing a stage that was never started changes nothing.

    Raises:
        404: Order not found
    """
    try:
        return get_order_service().complete_stage(order_id, stage)

    except Exception as e:
        return handle_error(e)


@router.post("/{order_id}/archive", response_model=Order)
async def archive_order(order_id: str):
    """
    Archive a completed order under the current ISO week.

    Raises:
        404: Order not found
        422: Order is not completed
    """
    try:
        return get_order_service().archive(order_id)

    except Exception as e:
        return handle_error(e)

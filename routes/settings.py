"""
Production settings API routes.

Durations and the work schedule are read and replaced as one document.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
import structlog

from config.production import KNOWN_SIZES, WEEKDAY_NAMES
from models.garment import GARMENT_LABELS
from models.order import PIPELINE_ORDER, STAGE_LABELS
from models.production_settings import ProductionSettings
from services.production_settings_service import get_production_settings_service
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter()


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

@router.get("/production", response_model=ProductionSettings)
async def get_production_settings():
    """Current durations, per-size durations, and work schedule."""
    try:
        return get_production_settings_service().get()

    except Exception as e:
        return handle_error(e)


@router.get("/catalog")
async def get_catalog():
    """
    Labels and choices for the settings screen.

    Garment types, pipeline stages, offered sizes, and weekday indices.
    """
    return {
        "garments": [
            {"value": garment.value, "label": label}
            for garment, label in GARMENT_LABELS.items()
        ],
        "stages": [
            {"value": stage.value, "label": STAGE_LABELS[stage]}
            for stage in PIPELINE_ORDER
        ],
        "sizes": KNOWN_SIZES,
        "weekdays": [
            {"value": index, "label": name}
            for index, name in sorted(WEEKDAY_NAMES.items())
        ],
    }


@router.put("/production", response_model=ProductionSettings)
async def update_production_settings(data: ProductionSettings):
    """
    Replace production settings.

    Raises:
        422: Work schedule has no work days or bad hour bounds
    """
    try:
        return get_production_settings_service().update(data)

    except Exception as e:
        return handle_error(e)


@router.post("/production/reset", response_model=ProductionSettings)
async def reset_production_settings():
    """Restore default durations and the environment work schedule."""
    try:
        return get_production_settings_service().reset()

    except Exception as e:
        return handle_error(e)

"""
Shared test fixtures.
"""

import sys
from pathlib import Path

# Add project root to Python path
project_dir = Path(__file__).parent.parent
sys.path.insert(0, str(project_dir))

import pytest
from unittest.mock import patch

from models.garment import GarmentType, ProcessDuration
from models.production_settings import ProductionSettings
from models.schedule import WorkSchedule
from services.duration_table_service import GarmentDurationTable, default_durations
from services.production_settings_service import ProductionSettingsService
from services.pipeline_service import ProcessPipeline
from services.order_service import OrderService
from services.time_calculator_service import TimeCalculatorService
from services.delivery_projector_service import DeliveryProjectorService


# ===================
# SCHEDULE & DURATIONS
# ===================

@pytest.fixture
def default_schedule() -> WorkSchedule:
    """9:00-18:00, lunch 13:00-14:00, Monday to Saturday."""
    return WorkSchedule(
        start_hour=9,
        end_hour=18,
        lunch_start=13,
        lunch_end=14,
        work_days=[1, 2, 3, 4, 5, 6],
    )


@pytest.fixture
def duration_table() -> GarmentDurationTable:
    """Default garment averages, no per-size data."""
    return GarmentDurationTable.defaults()


@pytest.fixture
def sized_duration_table() -> GarmentDurationTable:
    """Default averages plus per-size polo durations for M and S."""
    return GarmentDurationTable(
        durations=default_durations(),
        durations_by_size={
            GarmentType.POLO: {
                "M": ProcessDuration(printing=6, cutting=1, pressing=2.5, qc=1, contingency=1.25),
                "S": ProcessDuration(printing=5, cutting=1, pressing=2, qc=1, contingency=1),
            }
        },
    )


# ===================
# SERVICES
# ===================

@pytest.fixture
def production_settings(default_schedule) -> ProductionSettings:
    """Default durations with the default schedule."""
    return ProductionSettings(
        durations=default_durations(),
        work_schedule=default_schedule,
    )


@pytest.fixture
def settings_service(production_settings) -> ProductionSettingsService:
    """Fresh settings store."""
    return ProductionSettingsService(initial=production_settings)


@pytest.fixture
def pipeline() -> ProcessPipeline:
    return ProcessPipeline()


@pytest.fixture
def order_service(settings_service, pipeline) -> OrderService:
    """Fresh, empty order store bound to the fresh settings store."""
    return OrderService(settings_service=settings_service, pipeline=pipeline)


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client(settings_service, order_service):
    """
    FastAPI test client with isolated services.

    Usage:
        def test_endpoint(test_client):
            response = test_client.get("/api/orders")
            assert response.status_code == 200
    """
    from fastapi.testclient import TestClient
    from main import app

    calculator = TimeCalculatorService(settings_service=settings_service)
    projector = DeliveryProjectorService(settings_service=settings_service)

    with patch("routes.orders.get_order_service", return_value=order_service), \
            patch("routes.settings.get_production_settings_service", return_value=settings_service), \
            patch("routes.estimates.get_time_calculator_service", return_value=calculator), \
            patch("routes.estimates.get_delivery_projector_service", return_value=projector), \
            patch("main.get_order_service", return_value=order_service), \
            patch("main.get_production_settings_service", return_value=settings_service):
        yield TestClient(app)

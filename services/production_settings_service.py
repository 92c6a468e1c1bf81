"""
Production settings service.

Holds the durations and work schedule the engine is fed. Readers get a
copy of the current snapshot; updates replace the snapshot as a whole,
so no calculation ever sees a half-applied change.
"""

import threading
from typing import Optional
import structlog

from config import get_settings, Settings
from models.production_settings import ProductionSettings
from models.schedule import WorkSchedule
from services.duration_table_service import default_durations

logger = structlog.get_logger(__name__)


def build_default_settings(app_settings: Optional[Settings] = None) -> ProductionSettings:
    """Initial snapshot: default durations plus the schedule from environment."""
    app_settings = app_settings or get_settings()
    return ProductionSettings(
        durations=default_durations(),
        durations_by_size={},
        work_schedule=WorkSchedule(
            start_hour=app_settings.work_start_hour,
            end_hour=app_settings.work_end_hour,
            lunch_start=app_settings.lunch_start_hour,
            lunch_end=app_settings.lunch_end_hour,
            work_days=app_settings.work_day_list,
        ),
    )


class ProductionSettingsService:
    """
    In-memory production settings store.

    Stands in for the settings persistence layer.
    """

    def __init__(self, initial: Optional[ProductionSettings] = None):
        self._lock = threading.Lock()
        self._current = initial or build_default_settings()

    def get(self) -> ProductionSettings:
        """
        Get a snapshot of the current settings.

        Returns:
            Deep copy, safe for the caller to keep or modify
        """
        with self._lock:
            return self._current.model_copy(deep=True)

    def get_work_schedule(self) -> WorkSchedule:
        return self.get().work_schedule

    def update(self, data: ProductionSettings) -> ProductionSettings:
        """
        Replace the settings snapshot.

        Args:
            data: Complete new settings

        Returns:
            The stored settings

        Raises:
            InvalidScheduleError: If the work schedule cannot be walked
        """
        logger.info("updating_production_settings")

        data.work_schedule.validate_schedule()

        with self._lock:
            self._current = data.model_copy(deep=True)

        logger.info(
            "production_settings_updated",
            garments=len(data.durations),
            sized_garments=len(data.durations_by_size),
            work_days=data.work_schedule.work_days,
        )
        return self.get()

    def reset(self) -> ProductionSettings:
        """Restore defaults."""
        with self._lock:
            self._current = build_default_settings()
        logger.info("production_settings_reset")
        return self.get()


# Singleton instance
_production_settings_service: Optional[ProductionSettingsService] = None


def get_production_settings_service() -> ProductionSettingsService:
    """Get or create ProductionSettingsService instance."""
    global _production_settings_service
    if _production_settings_service is None:
        _production_settings_service = ProductionSettingsService()
    return _production_settings_service

"""
Unit tests for the production settings store.

Run: pytest tests/unit/test_production_settings_service.py -v
"""

import pytest

from config.settings import Settings
from exceptions import InvalidScheduleError
from models.garment import GarmentType, ProcessDuration
from models.schedule import WorkSchedule
from services.production_settings_service import (
    ProductionSettingsService,
    build_default_settings,
)


class TestBuildDefaultSettings:
    """Tests for the initial snapshot."""

    def test_schedule_from_app_settings(self):
        app_settings = Settings(
            work_start_hour=8,
            work_end_hour=17,
            lunch_start_hour=12,
            lunch_end_hour=13,
            work_days="1,2,3,4,5",
        )

        production_settings = build_default_settings(app_settings)

        schedule = production_settings.work_schedule
        assert (schedule.start_hour, schedule.end_hour) == (8, 17)
        assert (schedule.lunch_start, schedule.lunch_end) == (12, 13)
        assert schedule.work_days == [1, 2, 3, 4, 5]

    def test_default_durations_loaded(self):
        production_settings = build_default_settings(Settings())

        assert set(production_settings.durations) == set(GarmentType)
        assert production_settings.durations_by_size == {}


class TestProductionSettingsService:
    """Tests for ProductionSettingsService."""

    def test_get_returns_copy(self, settings_service):
        snapshot = settings_service.get()
        snapshot.durations[GarmentType.POLO] = ProcessDuration(printing=100)

        assert settings_service.get().durations[GarmentType.POLO].printing == pytest.approx(8.9)

    def test_update_replaces_snapshot(self, settings_service):
        updated = settings_service.get()
        updated.work_schedule = WorkSchedule(work_days=[1, 2, 3])
        updated.designers = ["Ana", "Luis"]

        stored = settings_service.update(updated)

        assert stored.work_schedule.work_days == [1, 2, 3]
        assert settings_service.get().designers == ["Ana", "Luis"]

    def test_update_rejects_invalid_schedule(self, settings_service):
        updated = settings_service.get()
        updated.work_schedule = WorkSchedule(work_days=[])

        with pytest.raises(InvalidScheduleError):
            settings_service.update(updated)

        assert settings_service.get().work_schedule.work_days == [1, 2, 3, 4, 5, 6]

    def test_caller_mutation_after_update_not_stored(self, settings_service):
        updated = settings_service.get()
        settings_service.update(updated)

        updated.designers.append("Late")

        assert "Late" not in settings_service.get().designers

    def test_get_work_schedule(self, settings_service, default_schedule):
        assert settings_service.get_work_schedule() == default_schedule

    def test_reset(self, settings_service):
        updated = settings_service.get()
        updated.durations = {}
        settings_service.update(updated)

        restored = settings_service.reset()

        assert set(restored.durations) == set(GarmentType)

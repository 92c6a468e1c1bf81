"""
Unit tests for the garment duration table.

Run: pytest tests/unit/test_duration_table_service.py -v
"""

import pytest
from unittest.mock import patch

from models.garment import GarmentType, ProcessDuration
from models.production_settings import ProductionSettings
from services.duration_table_service import (
    GarmentDurationTable,
    default_durations,
    ZERO_DURATION,
)


# ===================
# DEFAULTS
# ===================

class TestDefaultDurations:
    """Tests for the built-in averages."""

    def test_every_garment_configured(self):
        durations = default_durations()

        assert set(durations) == set(GarmentType)

    def test_polo_breakdown(self):
        polo = default_durations()[GarmentType.POLO]

        assert polo.printing == pytest.approx(8.9)
        assert polo.cutting == pytest.approx(1)
        assert polo.pressing == pytest.approx(2.5)
        assert polo.qc == pytest.approx(1)
        assert polo.contingency == pytest.approx(1.25)
        assert polo.per_unit_minutes == pytest.approx(14.65)

    def test_independent_copies(self):
        first = default_durations()
        first[GarmentType.POLO] = ProcessDuration(printing=99)

        assert default_durations()[GarmentType.POLO].printing == pytest.approx(8.9)


# ===================
# LOOKUP
# ===================

class TestDurationFor:
    """Tests for duration_for fallbacks."""

    def test_average_without_size(self, duration_table):
        duration = duration_table.duration_for(GarmentType.SHORTS)

        assert duration.per_unit_minutes == pytest.approx(11.55)

    def test_configured_size(self, sized_duration_table):
        duration = sized_duration_table.duration_for(GarmentType.POLO, "M")

        assert duration.printing == pytest.approx(6)
        assert duration.per_unit_minutes == pytest.approx(11.75)

    def test_missing_size_falls_back_to_average(self, sized_duration_table):
        with patch("services.duration_table_service.logger") as mock_logger:
            duration = sized_duration_table.duration_for(GarmentType.POLO, "XXL")

        assert duration.per_unit_minutes == pytest.approx(14.65)
        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args[0][0] == "size_duration_missing"

    def test_size_on_garment_without_sizes(self, sized_duration_table):
        duration = sized_duration_table.duration_for(GarmentType.SHORTS, "M")

        assert duration.per_unit_minutes == pytest.approx(11.55)

    def test_average_lookup_does_not_warn(self, duration_table):
        with patch("services.duration_table_service.logger") as mock_logger:
            duration_table.duration_for(GarmentType.POLO)

        mock_logger.warning.assert_not_called()

    def test_missing_garment_is_zero(self):
        table = GarmentDurationTable(durations={})

        with patch("services.duration_table_service.logger") as mock_logger:
            duration = table.duration_for(GarmentType.SKIRT_SHORTS)

        assert duration == ZERO_DURATION
        assert duration.per_unit_minutes == 0
        assert mock_logger.warning.call_args[0][0] == "duration_config_missing"

    def test_missing_garment_with_size_is_zero(self):
        table = GarmentDurationTable()

        assert table.duration_for(GarmentType.POLO, "M").per_unit_minutes == 0


# ===================
# CONSTRUCTION
# ===================

class TestConstruction:
    """Tests for building tables from settings."""

    def test_from_settings(self):
        production_settings = ProductionSettings(
            durations={GarmentType.POLO: ProcessDuration(printing=3)},
            durations_by_size={GarmentType.POLO: {"L": ProcessDuration(printing=4)}},
        )

        table = GarmentDurationTable.from_settings(production_settings)

        assert table.has_garment(GarmentType.POLO)
        assert not table.has_garment(GarmentType.SHORTS)
        assert table.configured_sizes(GarmentType.POLO) == ["L"]
        assert table.duration_for(GarmentType.POLO, "L").printing == 4

    def test_unaffected_by_later_source_changes(self):
        durations = {GarmentType.POLO: ProcessDuration(printing=3)}
        table = GarmentDurationTable(durations=durations)

        durations[GarmentType.POLO] = ProcessDuration(printing=30)

        assert table.duration_for(GarmentType.POLO).printing == 3

    def test_configured_sizes_empty(self, duration_table):
        assert duration_table.configured_sizes(GarmentType.POLO) == []

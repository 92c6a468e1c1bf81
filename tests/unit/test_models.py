"""
Unit tests for schema validation.

Run: pytest tests/unit/test_models.py -v
"""

import pytest
from pydantic import ValidationError

from models.garment import GarmentType, OrderItem, ProcessDuration, DurationBreakdown
from models.order import OrderCreate, OrderItemsReplace, StageState, ProcessSet, ProcessStage
from models.schedule import WorkSchedule
from utils.time_utils import iso_week_tag, truncate_to_minute
from exceptions import InvalidScheduleError
from tests.factories import OrderFactory, MONDAY, at


# ===================
# GARMENTS & DURATIONS
# ===================

class TestGarmentSchemas:
    """Tests for garment and duration schemas."""

    def test_per_unit_minutes(self):
        duration = ProcessDuration(printing=8.9, cutting=1, pressing=2.5, qc=1, contingency=1.25)

        assert duration.per_unit_minutes == pytest.approx(14.65)

    def test_negative_duration_rejected(self):
        with pytest.raises(ValidationError):
            ProcessDuration(printing=-1)

    def test_item_quantity_must_be_positive(self):
        with pytest.raises(ValidationError):
            OrderItem(garment_type=GarmentType.POLO, quantity=0)

    def test_item_is_immutable(self):
        item = OrderItem(garment_type=GarmentType.POLO, quantity=2)

        with pytest.raises(ValidationError):
            item.quantity = 5

    def test_breakdown_formatted(self):
        breakdown = DurationBreakdown(design_minutes=60, production_minutes=40.85, total_minutes=100.85)

        assert breakdown.model_dump()["formatted_total"] == "1h 41m"


# ===================
# WORK SCHEDULE
# ===================

class TestWorkSchedule:
    """Tests for WorkSchedule."""

    def test_defaults(self):
        schedule = WorkSchedule()

        assert schedule.work_days == [1, 2, 3, 4, 5, 6]
        assert schedule.lunch_minutes == 60
        assert schedule.daily_work_minutes == 480
        assert schedule.violations() == []

    def test_work_days_sorted_and_deduped(self):
        assert WorkSchedule(work_days=[5, 1, 3, 1]).work_days == [1, 3, 5]

    def test_validate_returns_self(self):
        schedule = WorkSchedule()

        assert schedule.validate_schedule() is schedule

    def test_out_of_range_day(self):
        schedule = WorkSchedule(work_days=[1, 7])

        with pytest.raises(InvalidScheduleError) as exc_info:
            schedule.validate_schedule()

        assert "out of range" in exc_info.value.violations[0]

    def test_multiple_violations_reported(self):
        schedule = WorkSchedule(start_hour=14, lunch_start=13, lunch_end=12, end_hour=11, work_days=[])

        assert len(schedule.violations()) >= 4

    def test_lunch_may_be_empty(self):
        assert WorkSchedule(lunch_start=13, lunch_end=13).violations() == []


# ===================
# PIPELINE STATE
# ===================

class TestStageState:
    """Tests for stage state rules."""

    def test_finished_requires_completed(self):
        with pytest.raises(ValidationError):
            StageState(started_at=at(MONDAY, 9), finished_at=at(MONDAY, 10))

    def test_states(self):
        assert StageState().is_started is False
        assert StageState(started_at=at(MONDAY, 9)).is_in_progress is True
        done = StageState(started_at=at(MONDAY, 9), finished_at=at(MONDAY, 10), completed=True)
        assert done.is_started is True
        assert done.is_in_progress is False

    def test_pending_stages_in_order(self):
        done = StageState(started_at=at(MONDAY, 9), finished_at=at(MONDAY, 10), completed=True)
        processes = ProcessSet(printing=done)

        assert processes.pending_stages() == [
            ProcessStage.DESIGN,
            ProcessStage.CUTTING,
            ProcessStage.PRESSING,
            ProcessStage.QC,
        ]

    def test_order_serializes_current_stage(self):
        order = OrderFactory.create(processes=ProcessSet(cutting=StageState(started_at=at(MONDAY, 9))))

        data = order.model_dump(mode="json")

        assert data["current_stage"] == "cutting"
        assert data["formatted_total"] == "1h 59m"

    def test_invalid_archive_week(self):
        order = OrderFactory.create()

        with pytest.raises(ValidationError):
            order.archive_week = "week two"


# ===================
# ORDER REQUESTS
# ===================

class TestOrderLinesInput:
    """Tests for items / size_counts input rules."""

    def test_items(self):
        data = OrderCreate(name="A", items=[{"garment_type": "polo", "quantity": 1}])

        assert data.items[0].garment_type == GarmentType.POLO
        assert data.list_prep_minutes is None

    def test_size_counts(self):
        data = OrderItemsReplace(size_counts={"skirt_shorts": {"10": 4, "12": 0}})

        assert data.size_counts[GarmentType.SKIRT_SHORTS] == {"10": 4, "12": 0}

    def test_neither_source(self):
        with pytest.raises(ValidationError):
            OrderItemsReplace()

    def test_both_sources(self):
        with pytest.raises(ValidationError):
            OrderItemsReplace(
                items=[{"garment_type": "polo", "quantity": 1}],
                size_counts={"polo": {"M": 1}},
            )

    def test_empty_items(self):
        with pytest.raises(ValidationError):
            OrderItemsReplace(items=[])

    def test_all_zero_size_counts(self):
        with pytest.raises(ValidationError):
            OrderItemsReplace(size_counts={"polo": {"M": 0}})

    def test_negative_size_count(self):
        with pytest.raises(ValidationError):
            OrderItemsReplace(size_counts={"polo": {"M": 3, "L": -1}})

    def test_name_trimmed(self):
        data = OrderCreate(name="  Club  ", items=[{"garment_type": "polo", "quantity": 1}])

        assert data.name == "Club"


# ===================
# TIME UTILITIES
# ===================

class TestTimeUtils:
    """Tests for minute truncation and week tags."""

    def test_truncate_to_minute(self):
        assert truncate_to_minute(at(MONDAY, 9, 30, 59)) == at(MONDAY, 9, 30)

    def test_iso_week_tag(self):
        assert iso_week_tag(at(MONDAY, 9)) == "2025-W02"

    def test_iso_week_tag_uses_iso_year(self):
        assert iso_week_tag(at(MONDAY, 9).replace(year=2024, month=12, day=30)) == "2025-W01"

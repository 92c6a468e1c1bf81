"""
Delivery projector.

Walks a duration in working minutes forward from a start instant across
the work calendar: non-work days, hours outside the work window, and the
lunch break consume no budget. Resolution is one minute.

Minutes left on a day exclude the lunch length while the walk is before
lunch; the finishing minutes are added straight to the clock, and an end
that falls inside lunch is reported at lunch end.

Weekdays in WorkSchedule are 0=Sunday ... 6=Saturday.
"""

from datetime import datetime, timedelta
from typing import Optional
import structlog

from models.schedule import WorkSchedule
from services.production_settings_service import (
    ProductionSettingsService,
    get_production_settings_service,
)
from utils.time_utils import truncate_to_minute

logger = structlog.get_logger(__name__)

MINUTES_PER_DAY = 24 * 60


# ===================
# CALENDAR HELPERS
# ===================

def schedule_weekday(instant: datetime) -> int:
    """Weekday index in schedule convention (0=Sunday)."""
    return (instant.weekday() + 1) % 7


def is_work_day(instant: datetime, schedule: WorkSchedule) -> bool:
    return schedule_weekday(instant) in schedule.work_days


def normalize_instant(instant: Optional[datetime] = None) -> datetime:
    """Default to now and drop seconds."""
    return truncate_to_minute(instant or datetime.now())


def minute_of_day(instant: datetime) -> float:
    return instant.hour * 60 + instant.minute + instant.second / 60


def at_minute_of_day(instant: datetime, minutes: float) -> datetime:
    """Same calendar day as instant, at the given minute of day."""
    midnight = instant.replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight + timedelta(minutes=minutes)


def next_work_day_start(instant: datetime, schedule: WorkSchedule) -> datetime:
    """Opening time of the first work day strictly after instant's day."""
    day = instant + timedelta(days=1)
    while not is_work_day(day, schedule):
        day += timedelta(days=1)
    return at_minute_of_day(day, schedule.start_hour * 60)


def align_to_work_time(instant: datetime, schedule: WorkSchedule) -> datetime:
    """
    Move an instant onto the work calendar.

    Non-work day → next work day at opening.
    Before opening → opening the same day.
    At or after closing → next work day at opening.
    """
    if not is_work_day(instant, schedule):
        return next_work_day_start(instant, schedule)

    clock = minute_of_day(instant)
    if clock < schedule.start_hour * 60:
        return at_minute_of_day(instant, schedule.start_hour * 60)
    if clock >= schedule.end_hour * 60:
        return next_work_day_start(instant, schedule)
    return instant


# ===================
# PROJECTION
# ===================

def project_delivery(
    total_minutes: float,
    schedule: WorkSchedule,
    start: Optional[datetime] = None,
) -> datetime:
    """
    Project working minutes onto the calendar.

    Args:
        total_minutes: Minutes of work; zero or negative returns the
            aligned start
        schedule: Work schedule to walk
        start: Start instant (default: now); seconds are dropped

    Returns:
        Delivery timestamp at minute resolution

    Raises:
        InvalidScheduleError: If the schedule has no work days or bad hour
            bounds (the walk would never terminate)
    """
    schedule.validate_schedule()

    day_end = schedule.end_hour * 60
    lunch_start = schedule.lunch_start * 60
    lunch_end = schedule.lunch_end * 60
    lunch_minutes = schedule.lunch_minutes

    current = align_to_work_time(normalize_instant(start), schedule)
    remaining = total_minutes

    while remaining > 0:
        clock = minute_of_day(current)

        # Inside lunch: resume at lunch end, no budget spent
        if lunch_start <= clock < lunch_end:
            current = at_minute_of_day(current, lunch_end)
            continue

        left_today = day_end - clock
        if clock < lunch_start:
            left_today -= lunch_minutes

        if remaining <= left_today:
            finish = clock + remaining
            # An end inside lunch is reported at lunch end
            if lunch_start <= finish < lunch_end:
                finish = lunch_end
            # A midnight closing stays on the day the work finishes
            if finish >= MINUTES_PER_DAY:
                finish = MINUTES_PER_DAY - 1
            current = at_minute_of_day(current, finish)
            remaining = 0
        else:
            remaining -= left_today
            current = next_work_day_start(current, schedule)

    delivery = truncate_to_minute(current)

    logger.debug(
        "delivery_projected",
        total_minutes=total_minutes,
        start=start.isoformat() if start else None,
        delivery=delivery.isoformat(),
    )

    return delivery


class DeliveryProjectorService:
    """Delivery projection against the configured work schedule."""

    def __init__(self, settings_service: Optional[ProductionSettingsService] = None):
        self.settings_service = settings_service or get_production_settings_service()

    def project(
        self,
        total_minutes: float,
        start: Optional[datetime] = None,
        schedule: Optional[WorkSchedule] = None,
    ) -> tuple[datetime, WorkSchedule]:
        """
        Project total_minutes from start.

        Returns:
            Tuple of (delivery, schedule used)
        """
        schedule = schedule or self.settings_service.get_work_schedule()
        return project_delivery(total_minutes, schedule, start), schedule


# Singleton instance
_delivery_projector_service: Optional[DeliveryProjectorService] = None


def get_delivery_projector_service() -> DeliveryProjectorService:
    """Get or create DeliveryProjectorService instance."""
    global _delivery_projector_service
    if _delivery_projector_service is None:
        _delivery_projector_service = DeliveryProjectorService()
    return _delivery_projector_service

"""
Work schedule schema.

Hours are whole clock hours (0-24). Work days use 0=Sunday ... 6=Saturday.
"""

from pydantic import Field, field_validator

from models.base import BaseSchema
from config.production import DEFAULT_WORK_DAYS
from exceptions import InvalidScheduleError


class WorkSchedule(BaseSchema):
    """
    Business hours, lunch window, and worked weekdays.

    Construction accepts any integers so a bad stored configuration can
    still be loaded and reported; call validate_schedule() before walking
    the calendar with it.
    """

    start_hour: int = Field(default=9, description="Opening hour")
    end_hour: int = Field(default=18, description="Closing hour")
    lunch_start: int = Field(default=13, description="Lunch break start hour")
    lunch_end: int = Field(default=14, description="Lunch break end hour")
    work_days: list[int] = Field(
        default_factory=lambda: list(DEFAULT_WORK_DAYS),
        description="Worked weekdays (0=Sunday ... 6=Saturday)"
    )

    @field_validator("work_days")
    @classmethod
    def dedupe_work_days(cls, v: list[int]) -> list[int]:
        """Sort and drop duplicate weekdays."""
        return sorted(set(v))

    @property
    def lunch_minutes(self) -> int:
        """Length of the lunch break in minutes."""
        return (self.lunch_end - self.lunch_start) * 60

    @property
    def daily_work_minutes(self) -> int:
        """Working minutes in a full day, lunch excluded."""
        return (self.end_hour - self.start_hour) * 60 - self.lunch_minutes

    def violations(self) -> list[str]:
        """List every rule this schedule breaks (empty when valid)."""
        problems = []

        if not self.work_days:
            problems.append("work_days must contain at least one weekday")
        out_of_range = [d for d in self.work_days if d < 0 or d > 6]
        if out_of_range:
            problems.append(f"work_days out of range 0-6: {out_of_range}")

        if self.start_hour < 0:
            problems.append("start_hour must be >= 0")
        if self.start_hour >= self.lunch_start:
            problems.append("start_hour must be before lunch_start")
        if self.lunch_start > self.lunch_end:
            problems.append("lunch_start must not be after lunch_end")
        if self.lunch_end >= self.end_hour:
            problems.append("lunch_end must be before end_hour")
        if self.end_hour > 24:
            problems.append("end_hour must be <= 24")

        return problems

    def validate_schedule(self) -> "WorkSchedule":
        """
        Check the ordering invariant and work days.

        0 <= start_hour < lunch_start <= lunch_end < end_hour <= 24,
        work_days non-empty and within 0-6.

        Returns:
            self, for chaining

        Raises:
            InvalidScheduleError: If any rule is violated
        """
        problems = self.violations()
        if problems:
            raise InvalidScheduleError(problems, schedule=self.model_dump())
        return self

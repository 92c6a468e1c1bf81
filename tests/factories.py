"""
Test data factories.

Uses factory pattern to generate consistent test data.
"""

from datetime import datetime
from typing import Optional
from uuid import uuid4

from models.garment import GarmentType, OrderItem
from models.order import Order, OrderStatus, ProcessSet
from models.schedule import WorkSchedule
from services.delivery_projector_service import project_delivery
from services.duration_table_service import GarmentDurationTable
from services.time_calculator_service import compute_order_time


class OrderFactory:
    """
    Factory for creating test Order objects.

    Usage:
        # Create with defaults (4 polos, 1 design hour, Monday 09:00)
        order = OrderFactory.create()

        # Create with overrides
        order = OrderFactory.create(items=[OrderItem(garment_type="shorts", quantity=10)])
    """

    _counter = 0

    @classmethod
    def _next_counter(cls) -> int:
        cls._counter += 1
        return cls._counter

    @classmethod
    def create(
        cls,
        id: Optional[str] = None,
        name: Optional[str] = None,
        items: Optional[list[OrderItem]] = None,
        design_hours: float = 1.0,
        created_at: Optional[datetime] = None,
        status: OrderStatus = OrderStatus.PENDING,
        processes: Optional[ProcessSet] = None,
        schedule: Optional[WorkSchedule] = None,
    ) -> Order:
        """
        Create a single order with time and delivery computed from defaults.

        Args:
            id: Order UUID (auto-generated if not provided)
            name: Order name (auto-generated if not provided)
            items: Order lines (default: 4 polos)
            design_hours: Design time in hours
            created_at: Creation instant (default: Monday 2025-01-06 09:00)
            status: Initial status
            processes: Initial stage state
            schedule: Schedule used for the initial projection

        Returns:
            Order
        """
        counter = cls._next_counter()
        items = items or [OrderItem(garment_type=GarmentType.POLO, quantity=4)]
        created_at = created_at or datetime(2025, 1, 6, 9, 0)
        schedule = schedule or WorkSchedule()

        breakdown = compute_order_time(items, design_hours, GarmentDurationTable.defaults())

        return Order(
            id=id or str(uuid4()),
            name=name or f"TEST ORDER {counter}",
            items=items,
            design_hours=design_hours,
            total_minutes=breakdown.total_minutes,
            created_at=created_at,
            estimated_delivery=project_delivery(breakdown.total_minutes, schedule, created_at),
            status=status,
            processes=processes or ProcessSet(),
        )


# ===================
# CALENDAR
# ===================
# January 2025: the 5th is a Sunday, the 6th a Monday, the 11th a Saturday.

SUNDAY = datetime(2025, 1, 5)
MONDAY = datetime(2025, 1, 6)
TUESDAY = datetime(2025, 1, 7)
WEDNESDAY = datetime(2025, 1, 8)
FRIDAY = datetime(2025, 1, 10)
SATURDAY = datetime(2025, 1, 11)
NEXT_MONDAY = datetime(2025, 1, 13)


def at(day: datetime, hour: int, minute: int = 0, second: int = 0) -> datetime:
    """Clock time on a given day."""
    return day.replace(hour=hour, minute=minute, second=second)

"""
Order time calculator.

Turns order lines into design, production, and total minutes. The
module-level functions are pure and take the duration table explicitly;
TimeCalculatorService binds them to the current settings snapshot.
"""

from typing import Optional
import structlog

from models.garment import DurationBreakdown, GarmentType, OrderItem
from services.duration_table_service import GarmentDurationTable
from services.production_settings_service import (
    ProductionSettingsService,
    get_production_settings_service,
)
from utils.time_utils import format_duration

logger = structlog.get_logger(__name__)

__all__ = [
    "compute_order_time",
    "compute_order_time_from_size_counts",
    "compute_order_time_from_size_buckets",
    "compute_production_minutes",
    "items_from_size_buckets",
    "format_duration",
    "TimeCalculatorService",
    "get_time_calculator_service",
]


def compute_production_minutes(
    items: list[OrderItem],
    table: GarmentDurationTable,
) -> float:
    """Item-weighted production minutes (all five processes, every unit)."""
    return sum(
        item.quantity * table.duration_for(item.garment_type).per_unit_minutes
        for item in items
    )


def compute_order_time(
    items: list[OrderItem],
    design_hours: float,
    table: GarmentDurationTable,
) -> DurationBreakdown:
    """
    Compute design, production, and total minutes for order lines.

    Args:
        items: Order lines
        design_hours: Design time in hours
        table: Per-unit durations

    Returns:
        DurationBreakdown where total = design_hours * 60 + Σ quantity * per-unit minutes
    """
    design_minutes = design_hours * 60
    production_minutes = compute_production_minutes(items, table)

    return DurationBreakdown(
        design_minutes=design_minutes,
        production_minutes=production_minutes,
        total_minutes=design_minutes + production_minutes,
    )


def _size_counts_minutes(
    garment_type: GarmentType,
    size_counts: dict[str, int],
    table: GarmentDurationTable,
) -> float:
    total = 0.0
    for size, count in size_counts.items():
        if count <= 0:
            continue
        total += count * table.duration_for(garment_type, size).per_unit_minutes
    return total


def compute_order_time_from_size_counts(
    garment_type: GarmentType,
    size_counts: dict[str, int],
    design_hours: float,
    table: GarmentDurationTable,
) -> DurationBreakdown:
    """
    Compute order time for one garment type from units per size.

    Sizes without a configured duration use the garment average, so with
    no per-size data this equals compute_order_time on the summed quantity.

    Args:
        garment_type: Garment produced
        size_counts: Units per size label, e.g. {"M": 10, "L": 4}
        design_hours: Design time in hours
        table: Per-unit durations

    Returns:
        DurationBreakdown
    """
    design_minutes = design_hours * 60
    production_minutes = _size_counts_minutes(garment_type, size_counts, table)

    return DurationBreakdown(
        design_minutes=design_minutes,
        production_minutes=production_minutes,
        total_minutes=design_minutes + production_minutes,
    )


def compute_order_time_from_size_buckets(
    size_counts: dict[GarmentType, dict[str, int]],
    design_hours: float,
    table: GarmentDurationTable,
) -> DurationBreakdown:
    """
    Compute order time for several garment types from units per size.

    Design time is counted once for the whole order.
    """
    design_minutes = design_hours * 60
    production_minutes = sum(
        _size_counts_minutes(garment_type, counts, table)
        for garment_type, counts in size_counts.items()
    )

    return DurationBreakdown(
        design_minutes=design_minutes,
        production_minutes=production_minutes,
        total_minutes=design_minutes + production_minutes,
    )


def items_from_size_buckets(size_counts: dict[GarmentType, dict[str, int]]) -> list[OrderItem]:
    """Collapse units per size into one order line per garment type."""
    items = []
    for garment_type, counts in size_counts.items():
        quantity = sum(count for count in counts.values() if count > 0)
        if quantity > 0:
            items.append(OrderItem(garment_type=garment_type, quantity=quantity))
    return items


class TimeCalculatorService:
    """
    Order time calculations against the current production settings.

    Each call reads one settings snapshot; a concurrent settings update
    never affects a calculation in progress.
    """

    def __init__(self, settings_service: Optional[ProductionSettingsService] = None):
        self.settings_service = settings_service or get_production_settings_service()

    def _table(self) -> GarmentDurationTable:
        return GarmentDurationTable.from_settings(self.settings_service.get())

    def order_time(self, items: list[OrderItem], design_hours: float) -> DurationBreakdown:
        result = compute_order_time(items, design_hours, self._table())
        logger.debug(
            "order_time_computed",
            item_count=len(items),
            design_hours=design_hours,
            total_minutes=result.total_minutes,
        )
        return result

    def order_time_from_size_counts(
        self,
        garment_type: GarmentType,
        size_counts: dict[str, int],
        design_hours: float,
    ) -> DurationBreakdown:
        result = compute_order_time_from_size_counts(
            garment_type, size_counts, design_hours, self._table()
        )
        logger.debug(
            "order_time_from_sizes_computed",
            garment_type=garment_type.value,
            sizes=len(size_counts),
            total_minutes=result.total_minutes,
        )
        return result

    def order_time_from_size_buckets(
        self,
        size_counts: dict[GarmentType, dict[str, int]],
        design_hours: float,
    ) -> DurationBreakdown:
        return compute_order_time_from_size_buckets(size_counts, design_hours, self._table())


# Singleton instance
_time_calculator_service: Optional[TimeCalculatorService] = None


def get_time_calculator_service() -> TimeCalculatorService:
    """Get or create TimeCalculatorService instance."""
    global _time_calculator_service
    if _time_calculator_service is None:
        _time_calculator_service = TimeCalculatorService()
    return _time_calculator_service

"""
Garment duration table.

Looks up per-unit process durations by garment type and, when configured,
by size. Missing configuration never fails a lookup: a missing size falls
back to the garment average and a missing garment yields zero minutes,
both logged as warnings.
"""

from typing import Optional
import structlog

from config.production import DEFAULT_PROCESS_DURATIONS
from models.garment import GarmentType, ProcessDuration
from models.production_settings import ProductionSettings

logger = structlog.get_logger(__name__)

ZERO_DURATION = ProcessDuration()


class GarmentDurationTable:
    """
    Read-only lookup of per-unit durations.

    Built from a settings snapshot; never mutated after construction.
    """

    def __init__(
        self,
        durations: Optional[dict[GarmentType, ProcessDuration]] = None,
        durations_by_size: Optional[dict[GarmentType, dict[str, ProcessDuration]]] = None,
    ):
        self._durations = dict(durations or {})
        self._by_size = {
            garment: dict(sizes) for garment, sizes in (durations_by_size or {}).items()
        }

    @classmethod
    def from_settings(cls, production_settings: ProductionSettings) -> "GarmentDurationTable":
        return cls(
            durations=production_settings.durations,
            durations_by_size=production_settings.durations_by_size,
        )

    @classmethod
    def defaults(cls) -> "GarmentDurationTable":
        """Table with the workshop's default averages and no per-size data."""
        return cls(durations=default_durations())

    def duration_for(
        self,
        garment_type: GarmentType,
        size: Optional[str] = None,
    ) -> ProcessDuration:
        """
        Per-unit duration for a garment, optionally for a specific size.

        Args:
            garment_type: Garment to look up
            size: Size label (e.g. "M", "12"); None for the garment average

        Returns:
            Size duration if configured, else the garment average,
            else a zero duration
        """
        if size is not None:
            size_duration = self._by_size.get(garment_type, {}).get(size)
            if size_duration is not None:
                return size_duration

        average = self._durations.get(garment_type)
        if average is None:
            logger.warning(
                "duration_config_missing",
                garment_type=garment_type.value,
                size=size,
            )
            return ZERO_DURATION

        if size is not None:
            logger.warning(
                "size_duration_missing",
                garment_type=garment_type.value,
                size=size,
            )
        return average

    def has_garment(self, garment_type: GarmentType) -> bool:
        return garment_type in self._durations

    def configured_sizes(self, garment_type: GarmentType) -> list[str]:
        return list(self._by_size.get(garment_type, {}).keys())


def default_durations() -> dict[GarmentType, ProcessDuration]:
    """Default per-unit durations keyed by garment type."""
    return {
        GarmentType(garment): ProcessDuration(**values)
        for garment, values in DEFAULT_PROCESS_DURATIONS.items()
    }

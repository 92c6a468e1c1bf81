"""
Process pipeline state machine.

Each stage moves not started → in progress → completed, never backwards.
Order status is derived from stage state after every change; archived is
the only status set explicitly. Repeated or out-of-order transitions are
ignored (logged), so double submissions from the shop floor are harmless.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
import structlog

from config.production import PRODUCTION_STAGE_COUNT
from exceptions import InvalidStatusTransitionError
from models.order import (
    Order,
    OrderStatus,
    ProcessSet,
    ProcessStage,
    StageState,
)
from models.schedule import WorkSchedule
from services.delivery_projector_service import normalize_instant, project_delivery
from services.duration_table_service import GarmentDurationTable
from services.time_calculator_service import compute_production_minutes
from utils.time_utils import iso_week_tag

logger = structlog.get_logger(__name__)

# Status implied by a stage once it has been started
STAGE_STATUS = {
    ProcessStage.DESIGN: OrderStatus.IN_DESIGN,
    ProcessStage.PRINTING: OrderStatus.IN_PRODUCTION,
    ProcessStage.CUTTING: OrderStatus.IN_PRODUCTION,
    ProcessStage.PRESSING: OrderStatus.IN_PRESSING,
    ProcessStage.QC: OrderStatus.IN_PRESSING,
}

# Lower rank = earlier in flow
STATUS_RANK = {
    OrderStatus.PENDING: 0,
    OrderStatus.IN_DESIGN: 1,
    OrderStatus.IN_PRODUCTION: 2,
    OrderStatus.IN_PRESSING: 3,
    OrderStatus.COMPLETED: 4,
}


def derive_status(
    processes: ProcessSet,
    current: Optional[OrderStatus] = None,
) -> OrderStatus:
    """
    Derive order status from stage state.

    Rules:
    - ARCHIVED stays ARCHIVED (explicit, terminal)
    - All stages completed → COMPLETED
    - Otherwise the furthest status implied by any started stage
    - Nothing started → PENDING
    """
    if current == OrderStatus.ARCHIVED:
        return OrderStatus.ARCHIVED

    if processes.all_completed:
        return OrderStatus.COMPLETED

    status = OrderStatus.PENDING
    for stage, state in processes.stages():
        if not state.is_started:
            continue
        implied = STAGE_STATUS[stage]
        if STATUS_RANK[implied] > STATUS_RANK[status]:
            status = implied
    return status


# ===================
# REMAINING TIME ESTIMATORS
# ===================

class RemainingTimeEstimator(ABC):
    """Policy for the minutes of work left in a partially finished pipeline."""

    @abstractmethod
    def remaining_minutes(self, order: Order, table: GarmentDurationTable) -> float:
        """Minutes of work left for the order's pending stages."""


class QuarterProductionEstimator(RemainingTimeEstimator):
    """
    Coarse estimate used by the shop.

    A pending design stage contributes the order's design time. Each
    pending production stage contributes an equal share of the
    item-weighted production time. This is an approximation, not a
    per-stage model.
    """

    def remaining_minutes(self, order: Order, table: GarmentDurationTable) -> float:
        production_share = compute_production_minutes(order.items, table) / PRODUCTION_STAGE_COUNT

        remaining = 0.0
        for stage in order.processes.pending_stages():
            if stage == ProcessStage.DESIGN:
                remaining += order.design_hours * 60
            else:
                remaining += production_share
        return remaining


# ===================
# PIPELINE
# ===================

class ProcessPipeline:
    """
    Stage transitions for a single order.

    Methods mutate the given order in place and return it.
    """

    def __init__(self, estimator: Optional[RemainingTimeEstimator] = None):
        self.estimator = estimator or QuarterProductionEstimator()

    def _ignore(self, order: Order, stage: ProcessStage, action: str, reason: str) -> Order:
        logger.info(
            "stage_transition_ignored",
            order_id=order.id,
            stage=stage.value,
            action=action,
            reason=reason,
        )
        return order

    def start_stage(
        self,
        order: Order,
        stage: ProcessStage,
        now: Optional[datetime] = None,
    ) -> Order:
        """
        Start a stage.

        Records started_at and refreshes status. No-op if the stage is
        already in progress or completed, or the order is archived.
        """
        if order.status == OrderStatus.ARCHIVED:
            return self._ignore(order, stage, "start", "order_archived")

        state = order.processes.get(stage)
        if state.completed:
            return self._ignore(order, stage, "start", "already_completed")
        if state.is_in_progress:
            return self._ignore(order, stage, "start", "already_in_progress")

        now = normalize_instant(now)
        order.processes.replace(stage, StageState(started_at=now))
        previous_status = order.status
        order.status = derive_status(order.processes, order.status)

        logger.info(
            "stage_started",
            order_id=order.id,
            stage=stage.value,
            from_status=previous_status.value,
            to_status=order.status.value,
        )
        return order

    def complete_stage(
        self,
        order: Order,
        stage: ProcessStage,
        schedule: WorkSchedule,
        table: GarmentDurationTable,
        now: Optional[datetime] = None,
    ) -> Order:
        """
        Complete a stage and re-project delivery.

        Records finished_at, recomputes the remaining minutes with the
        estimator, and projects them from now onto the schedule. No-op if
        the stage was never started, is already completed, or the order is
        archived.

        Raises:
            InvalidScheduleError: If the schedule cannot be walked (checked
                before the order is touched)
        """
        if order.status == OrderStatus.ARCHIVED:
            return self._ignore(order, stage, "complete", "order_archived")

        state = order.processes.get(stage)
        if state.completed:
            return self._ignore(order, stage, "complete", "already_completed")
        if not state.is_started:
            return self._ignore(order, stage, "complete", "not_started")

        schedule.validate_schedule()

        now = normalize_instant(now)
        order.processes.replace(
            stage,
            StageState(started_at=state.started_at, finished_at=now, completed=True),
        )

        remaining = self.estimator.remaining_minutes(order, table)
        previous_delivery = order.estimated_delivery

        order.total_minutes = remaining
        order.estimated_delivery = project_delivery(remaining, schedule, now)
        order.status = derive_status(order.processes, order.status)

        logger.info(
            "stage_completed",
            order_id=order.id,
            stage=stage.value,
            remaining_minutes=round(remaining, 2),
            previous_delivery=previous_delivery.isoformat(),
            estimated_delivery=order.estimated_delivery.isoformat(),
            status=order.status.value,
        )
        return order

    def archive(self, order: Order, now: Optional[datetime] = None) -> Order:
        """
        Archive a completed order, tagging it with the ISO week.

        Raises:
            InvalidStatusTransitionError: If the order is not completed
        """
        if order.status == OrderStatus.ARCHIVED:
            logger.info("order_already_archived", order_id=order.id)
            return order

        if order.status != OrderStatus.COMPLETED:
            raise InvalidStatusTransitionError(
                current_status=order.status.value,
                new_status=OrderStatus.ARCHIVED.value,
            )

        order.archive_week = iso_week_tag(normalize_instant(now))
        order.status = OrderStatus.ARCHIVED

        logger.info("order_archived", order_id=order.id, week=order.archive_week)
        return order


# Singleton instance
_pipeline: Optional[ProcessPipeline] = None


def get_process_pipeline() -> ProcessPipeline:
    """Get or create ProcessPipeline instance."""
    global _pipeline
    if _pipeline is None:
        _pipeline = ProcessPipeline()
    return _pipeline

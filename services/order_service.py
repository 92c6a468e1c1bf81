"""
Order service for business logic operations.

Keeps orders in memory (the persistence collaborator is out of scope) and
orchestrates the engine: time calculation and delivery projection at
creation, stage transitions, archival, and the shop-floor overview.

Updates to one order are serialized by a per-order lock and applied as a
whole-order replace; the last write wins at order granularity.
"""

import math
import threading
from collections import defaultdict
from datetime import datetime
from typing import Optional
from uuid import uuid4
import structlog

from config import get_settings
from exceptions import OrderNotFoundError, OrderNotEditableError
from models.garment import DurationBreakdown, OrderItem
from models.order import (
    ActiveOrderProgress,
    ArchivedWeekGroup,
    Order,
    OrderCreate,
    OrderItemsReplace,
    OrderLinesInput,
    OrderStatus,
    ProcessStage,
    ScheduleOverview,
)
from models.production_settings import ProductionSettings
from services.delivery_projector_service import normalize_instant, project_delivery
from services.duration_table_service import GarmentDurationTable
from services.pipeline_service import ProcessPipeline, get_process_pipeline
from services.production_settings_service import (
    ProductionSettingsService,
    get_production_settings_service,
)
from services.time_calculator_service import (
    compute_order_time,
    compute_order_time_from_size_buckets,
    items_from_size_buckets,
)
from utils.time_utils import format_duration

logger = structlog.get_logger(__name__)

INACTIVE_STATUSES = (OrderStatus.PENDING, OrderStatus.COMPLETED, OrderStatus.ARCHIVED)


class OrderService:
    """
    Order business logic.

    Handles creation, item replacement, stage progress, and archival.
    """

    def __init__(
        self,
        settings_service: Optional[ProductionSettingsService] = None,
        pipeline: Optional[ProcessPipeline] = None,
    ):
        self.settings_service = settings_service or get_production_settings_service()
        self.pipeline = pipeline or get_process_pipeline()
        self._orders: dict[str, Order] = {}
        self._store_lock = threading.Lock()
        self._order_locks: dict[str, threading.Lock] = defaultdict(threading.Lock)

    # ===================
    # STORAGE
    # ===================

    def _lock_for(self, order_id: str) -> threading.Lock:
        """Per-order lock; unknown ids raise before a lock is created."""
        with self._store_lock:
            if order_id not in self._orders:
                raise OrderNotFoundError(order_id)
            return self._order_locks[order_id]

    def _load(self, order_id: str) -> Order:
        with self._store_lock:
            order = self._orders.get(order_id)
            if order is None:
                raise OrderNotFoundError(order_id)
            return order.model_copy(deep=True)

    def _save(self, order: Order) -> Order:
        with self._store_lock:
            self._orders[order.id] = order.model_copy(deep=True)
        return order

    def _snapshot(self) -> tuple[ProductionSettings, GarmentDurationTable]:
        production_settings = self.settings_service.get()
        return production_settings, GarmentDurationTable.from_settings(production_settings)

    def clear(self) -> None:
        """Drop all orders."""
        with self._store_lock:
            self._orders.clear()
            self._order_locks.clear()

    # ===================
    # READ OPERATIONS
    # ===================

    def get_all(
        self,
        page: int = 1,
        page_size: int = 20,
        status: Optional[OrderStatus] = None,
        include_archived: bool = False,
    ) -> tuple[list[Order], int]:
        """
        Get orders, newest first.

        Args:
            page: Page number (1-indexed)
            page_size: Items per page
            status: Filter by status
            include_archived: Include archived orders when no status is given

        Returns:
            Tuple of (orders list, total count)
        """
        logger.info("getting_orders", page=page, page_size=page_size, status=status)

        with self._store_lock:
            orders = [order.model_copy(deep=True) for order in self._orders.values()]

        if status is not None:
            orders = [o for o in orders if o.status == status]
        elif not include_archived:
            orders = [o for o in orders if o.status != OrderStatus.ARCHIVED]

        orders.sort(key=lambda o: o.created_at, reverse=True)

        total = len(orders)
        offset = (page - 1) * page_size
        return orders[offset:offset + page_size], total

    def get_by_id(self, order_id: str) -> Order:
        """
        Get a single order.

        Raises:
            OrderNotFoundError: If order doesn't exist
        """
        logger.debug("getting_order", order_id=order_id)
        return self._load(order_id)

    def get_archived_by_week(self) -> list[ArchivedWeekGroup]:
        """Archived orders grouped by archive week, most recent week first."""
        orders, _ = self.get_all(page=1, page_size=10**6, status=OrderStatus.ARCHIVED)

        groups: dict[str, list[Order]] = defaultdict(list)
        for order in orders:
            groups[order.archive_week or "unassigned"].append(order)

        return [
            ArchivedWeekGroup(week=week, count=len(groups[week]), orders=groups[week])
            for week in sorted(groups, reverse=True)
        ]

    def schedule_overview(self, now: Optional[datetime] = None) -> ScheduleOverview:
        """
        Shop-floor summary.

        Active orders are those with a stage started and not yet completed;
        elapsed minutes are measured from the start of the current stage.
        """
        now = normalize_instant(now)
        with self._store_lock:
            orders = [order.model_copy(deep=True) for order in self._orders.values()]

        active = [o for o in orders if o.status not in INACTIVE_STATUSES]
        due_today = [
            o for o in orders
            if o.status != OrderStatus.ARCHIVED and o.estimated_delivery.date() == now.date()
        ]
        completed = [o for o in orders if o.status == OrderStatus.COMPLETED]

        progress = []
        for order in sorted(active, key=lambda o: o.estimated_delivery):
            stage = order.current_stage
            started_at = order.processes.get(stage).started_at if stage else None
            elapsed = None
            if started_at is not None:
                elapsed = max(0, math.floor((now - started_at).total_seconds() / 60))

            progress.append(ActiveOrderProgress(
                order_id=order.id,
                name=order.name,
                client=order.client,
                status=order.status,
                current_stage=stage,
                stage_started_at=started_at,
                elapsed_minutes=elapsed,
                estimated_delivery=order.estimated_delivery,
                remaining=format_duration(order.total_minutes),
            ))

        return ScheduleOverview(
            active_count=len(active),
            due_today_count=len(due_today),
            completed_count=len(completed),
            active=progress,
        )

    # ===================
    # WRITE OPERATIONS
    # ===================

    def _lines(
        self,
        data: OrderLinesInput,
        design_hours: float,
        table: GarmentDurationTable,
    ) -> tuple[list[OrderItem], DurationBreakdown]:
        if data.size_counts is not None:
            items = items_from_size_buckets(data.size_counts)
            breakdown = compute_order_time_from_size_buckets(data.size_counts, design_hours, table)
        else:
            items = list(data.items)
            breakdown = compute_order_time(items, design_hours, table)
        return items, breakdown

    def create(self, data: OrderCreate, now: Optional[datetime] = None) -> Order:
        """
        Create an order and project its delivery.

        Design hours are (design_minutes + list_prep_minutes) / 60.

        Args:
            data: Order creation data
            now: Creation instant (default: now)

        Returns:
            Created Order with status pending and all stages not started

        Raises:
            InvalidScheduleError: If the configured schedule cannot be walked
        """
        production_settings, table = self._snapshot()

        list_prep = data.list_prep_minutes
        if list_prep is None:
            list_prep = get_settings().default_list_prep_minutes
        design_hours = (data.design_minutes + list_prep) / 60

        items, breakdown = self._lines(data, design_hours, table)

        created_at = normalize_instant(now)
        delivery = project_delivery(
            breakdown.total_minutes, production_settings.work_schedule, created_at
        )

        order = Order(
            id=str(uuid4()),
            name=data.name,
            client=data.client,
            designer=data.designer,
            description=data.description,
            items=items,
            design_hours=design_hours,
            total_minutes=breakdown.total_minutes,
            created_at=created_at,
            estimated_delivery=delivery,
            status=OrderStatus.PENDING,
        )
        self._save(order)

        logger.info(
            "order_created",
            order_id=order.id,
            item_count=len(items),
            units=order.total_units,
            total_minutes=round(order.total_minutes, 2),
            estimated_delivery=delivery.isoformat(),
        )
        return order

    def replace_items(
        self,
        order_id: str,
        data: OrderItemsReplace,
        now: Optional[datetime] = None,
    ) -> Order:
        """
        Replace an order's item list and re-project delivery from now.

        Before any stage has started the full order time is used; after
        that, the remaining-time estimate for the pending stages.

        Raises:
            OrderNotFoundError: If order doesn't exist
            OrderNotEditableError: If order is completed or archived
        """
        logger.info("replacing_order_items", order_id=order_id)

        with self._lock_for(order_id):
            order = self._load(order_id)
            if order.status in (OrderStatus.COMPLETED, OrderStatus.ARCHIVED):
                raise OrderNotEditableError(order_id, order.status.value)

            production_settings, table = self._snapshot()
            items, breakdown = self._lines(data, order.design_hours, table)
            order.items = items

            started = any(state.is_started for _, state in order.processes.stages())
            if started:
                total = self.pipeline.estimator.remaining_minutes(order, table)
            else:
                total = breakdown.total_minutes

            now = normalize_instant(now)
            order.total_minutes = total
            order.estimated_delivery = project_delivery(
                total, production_settings.work_schedule, now
            )
            self._save(order)

        logger.info(
            "order_items_replaced",
            order_id=order_id,
            item_count=len(items),
            total_minutes=round(total, 2),
            estimated_delivery=order.estimated_delivery.isoformat(),
        )
        return order

    def start_stage(
        self,
        order_id: str,
        stage: ProcessStage,
        now: Optional[datetime] = None,
    ) -> Order:
        """
        Start a pipeline stage.

        Raises:
            OrderNotFoundError: If order doesn't exist
        """
        with self._lock_for(order_id):
            order = self._load(order_id)
            self.pipeline.start_stage(order, stage, now)
            return self._save(order)

    def complete_stage(
        self,
        order_id: str,
        stage: ProcessStage,
        now: Optional[datetime] = None,
    ) -> Order:
        """
        Complete a pipeline stage and refresh the delivery estimate.

        Raises:
            OrderNotFoundError: If order doesn't exist
            InvalidScheduleError: If the configured schedule cannot be walked
        """
        with self._lock_for(order_id):
            order = self._load(order_id)
            production_settings, table = self._snapshot()
            self.pipeline.complete_stage(
                order, stage, production_settings.work_schedule, table, now
            )
            return self._save(order)

    def archive(self, order_id: str, now: Optional[datetime] = None) -> Order:
        """
        Archive a completed order.

        Raises:
            OrderNotFoundError: If order doesn't exist
            InvalidStatusTransitionError: If order is not completed
        """
        with self._lock_for(order_id):
            order = self._load(order_id)
            self.pipeline.archive(order, now)
            return self._save(order)


# Singleton instance
_order_service: Optional[OrderService] = None


def get_order_service() -> OrderService:
    """Get or create OrderService instance."""
    global _order_service
    if _order_service is None:
        _order_service = OrderService()
    return _order_service

"""
Order and process pipeline schemas.

An order moves through five fixed stages. Stage state is replaced as a
whole on every transition, never patched field by field.
"""

from pydantic import ConfigDict, Field, computed_field, field_validator, model_validator
from typing import Optional
from enum import Enum
from datetime import datetime

from models.base import BaseSchema
from models.garment import GarmentType, OrderItem
from utils.time_utils import format_duration


class ProcessStage(str, Enum):
    """Pipeline stages, in production order."""
    DESIGN = "design"
    PRINTING = "printing"
    CUTTING = "cutting"
    PRESSING = "pressing"
    QC = "qc"


PIPELINE_ORDER = (
    ProcessStage.DESIGN,
    ProcessStage.PRINTING,
    ProcessStage.CUTTING,
    ProcessStage.PRESSING,
    ProcessStage.QC,
)

STAGE_LABELS = {
    ProcessStage.DESIGN: "Design",
    ProcessStage.PRINTING: "Printing",
    ProcessStage.CUTTING: "Cutting",
    ProcessStage.PRESSING: "Pressing",
    ProcessStage.QC: "Quality control",
}


class OrderStatus(str, Enum):
    """Order status values."""
    PENDING = "pending"
    IN_DESIGN = "in_design"
    IN_PRODUCTION = "in_production"
    IN_PRESSING = "in_pressing"
    COMPLETED = "completed"
    ARCHIVED = "archived"


# ===================
# PIPELINE STATE
# ===================

class StageState(BaseSchema):
    """
    State of one stage.

    not started:  started_at None, completed False
    in progress:  started_at set, completed False
    completed:    started_at and finished_at set, completed True
    """

    model_config = ConfigDict(frozen=True)

    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    completed: bool = False

    @model_validator(mode="after")
    def finished_implies_completed(self) -> "StageState":
        if self.finished_at is not None and not self.completed:
            raise ValueError("finished_at set on a stage that is not completed")
        return self

    @property
    def is_started(self) -> bool:
        return self.started_at is not None or self.completed

    @property
    def is_in_progress(self) -> bool:
        return self.started_at is not None and not self.completed


class ProcessSet(BaseSchema):
    """One StageState per pipeline stage."""

    design: StageState = Field(default_factory=StageState)
    printing: StageState = Field(default_factory=StageState)
    cutting: StageState = Field(default_factory=StageState)
    pressing: StageState = Field(default_factory=StageState)
    qc: StageState = Field(default_factory=StageState)

    def get(self, stage: ProcessStage) -> StageState:
        return getattr(self, stage.value)

    def replace(self, stage: ProcessStage, state: StageState) -> None:
        setattr(self, stage.value, state)

    def stages(self) -> list[tuple[ProcessStage, StageState]]:
        """Stages with their state, in pipeline order."""
        return [(stage, self.get(stage)) for stage in PIPELINE_ORDER]

    def pending_stages(self) -> list[ProcessStage]:
        """Stages not yet completed, in pipeline order."""
        return [stage for stage, state in self.stages() if not state.completed]

    @property
    def all_completed(self) -> bool:
        return all(state.completed for _, state in self.stages())


# ===================
# ORDER
# ===================

class Order(BaseSchema):
    """
    A garment printing order.

    total_minutes is set at creation and refreshed with the remaining
    estimate whenever a stage completes; estimated_delivery follows it.
    """

    id: str = Field(..., description="Order UUID")
    name: str = Field(..., min_length=1, max_length=200, description="Order name")
    client: Optional[str] = Field(None, description="Client name")
    designer: Optional[str] = Field(None, description="Assigned designer")
    description: Optional[str] = Field(None, max_length=2000, description="Notes")
    items: list[OrderItem] = Field(..., min_length=1, description="Order lines")
    design_hours: float = Field(..., ge=0, description="Design time in hours")
    total_minutes: float = Field(..., ge=0, description="Estimated minutes of work")
    created_at: datetime = Field(..., description="Created timestamp")
    estimated_delivery: datetime = Field(..., description="Projected delivery timestamp")
    status: OrderStatus = Field(default=OrderStatus.PENDING, description="Current status")
    processes: ProcessSet = Field(default_factory=ProcessSet, description="Pipeline state")
    archive_week: Optional[str] = Field(
        None,
        pattern=r"^\d{4}-W\d{2}$",
        description="ISO week the order was archived in (e.g. 2025-W01)"
    )

    @computed_field
    @property
    def formatted_total(self) -> str:
        return format_duration(self.total_minutes)

    @computed_field
    @property
    def current_stage(self) -> Optional[ProcessStage]:
        """First stage in progress, if any."""
        for stage, state in self.processes.stages():
            if state.is_in_progress:
                return stage
        return None

    @property
    def total_units(self) -> int:
        return sum(item.quantity for item in self.items)


# ===================
# REQUEST SCHEMAS
# ===================

class OrderLinesInput(BaseSchema):
    """
    Order lines given either as items or as size counts per garment.

    size_counts is the shape produced by a roster import:
    {"polo": {"M": 10, "L": 4}, "shorts": {"M": 14}}
    """

    items: Optional[list[OrderItem]] = Field(None, description="Manual order lines")
    size_counts: Optional[dict[GarmentType, dict[str, int]]] = Field(
        None,
        description="Units per size, per garment type"
    )

    @field_validator("size_counts")
    @classmethod
    def non_negative_counts(
        cls, v: Optional[dict[GarmentType, dict[str, int]]]
    ) -> Optional[dict[GarmentType, dict[str, int]]]:
        if v is None:
            return v
        for garment, counts in v.items():
            for size, count in counts.items():
                if count < 0:
                    raise ValueError(f"Negative count for {garment.value} size {size}")
        return v

    @model_validator(mode="after")
    def exactly_one_source(self):
        if self.items is not None and self.size_counts is not None:
            raise ValueError("Provide either items or size_counts, not both")
        if self.items is None and self.size_counts is None:
            raise ValueError("Provide items or size_counts")
        if self.items is not None and not self.items:
            raise ValueError("items must not be empty")
        if self.size_counts is not None and not any(
            count > 0 for counts in self.size_counts.values() for count in counts.values()
        ):
            raise ValueError("size_counts must contain at least one unit")
        return self


class OrderCreate(OrderLinesInput):
    """
    Create a new order.

    Design time is design_minutes plus list_prep_minutes (defaults to the
    configured roster preparation time).
    """

    name: str = Field(..., min_length=1, max_length=200, description="Order name")
    client: Optional[str] = Field(None, max_length=200, description="Client name")
    designer: Optional[str] = Field(None, max_length=100, description="Assigned designer")
    description: Optional[str] = Field(None, max_length=2000, description="Notes")
    design_minutes: float = Field(default=0, ge=0, description="Design work in minutes")
    list_prep_minutes: Optional[float] = Field(
        None,
        ge=0,
        description="Roster preparation in minutes"
    )


class OrderItemsReplace(OrderLinesInput):
    """Replace the whole item list of an order."""


# ===================
# RESPONSE SCHEMAS
# ===================

class OrderListResponse(BaseSchema):
    """List of orders with pagination."""

    data: list[Order]
    total: int
    page: int
    page_size: int
    total_pages: int


class ArchivedWeekGroup(BaseSchema):
    """Archived orders sharing an archive week."""

    week: str
    count: int
    orders: list[Order]


class ActiveOrderProgress(BaseSchema):
    """Progress of one order on the shop floor."""

    order_id: str
    name: str
    client: Optional[str] = None
    status: OrderStatus
    current_stage: Optional[ProcessStage] = None
    stage_started_at: Optional[datetime] = None
    elapsed_minutes: Optional[int] = None
    estimated_delivery: datetime
    remaining: str


class ScheduleOverview(BaseSchema):
    """Shop-floor summary."""

    active_count: int
    due_today_count: int
    completed_count: int
    active: list[ActiveOrderProgress]

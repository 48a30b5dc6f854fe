"""Domain models for alert rule definitions."""

from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Discriminator, Field, Tag

# Metric types ending with this suffix are cyclic transfer-quota rules
CYCLE_TYPE_SUFFIX = "_cycle"


class TriggerMode(str, Enum):
    """When notifications fire relative to trigger state transitions."""

    ALWAYS = "always"  # Notify on every failing evaluation
    ON_CHANGE = "on_change"  # Notify only when the trigger state flips


class CycleUnit(str, Enum):
    """Unit of a transfer-quota cycle."""

    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class CoverMode(int, Enum):
    """How the `ignore` server map is applied."""

    ALL = 0  # Every server except the ignored ones
    IGNORE_ALL = 1  # Only the servers listed in `ignore`


class _ExpressionBase(BaseModel):
    """Fields shared by every rule expression."""

    type: str = Field(default="", description="Metric name, e.g. 'cpu' or 'transfer_in_cycle'")
    min: float | None = Field(default=None, description="Lower threshold")
    max: float | None = Field(default=None, description="Upper threshold")
    cover: CoverMode = Field(default=CoverMode.ALL, description="How the ignore map is applied")
    ignore: dict[int, bool] = Field(default_factory=dict, description="Server ID -> ignored flag")


class DurationRule(_ExpressionBase):
    """Threshold that must hold for `duration` seconds before it fires."""

    is_cyclic: Literal[False] = False
    duration: int = Field(default=0, description="Evaluation window in seconds")


class CyclicRule(_ExpressionBase):
    """Transfer quota evaluated over repeating cycles starting at `cycle_start`."""

    is_cyclic: Literal[True] = True
    cycle_start: datetime | None = Field(default=None, description="Start of the first cycle")
    cycle_interval: int = Field(default=0, description="Cycle length in `cycle_unit` units")
    cycle_unit: CycleUnit = Field(default=CycleUnit.HOUR, description="Unit of `cycle_interval`")


def _expression_kind(value: Any) -> str:
    """Pick the expression variant from `is_cyclic`, falling back to the metric type suffix."""
    if isinstance(value, dict):
        is_cyclic = value.get("is_cyclic")
        if is_cyclic is None:
            is_cyclic = str(value.get("type") or "").endswith(CYCLE_TYPE_SUFFIX)
    else:
        is_cyclic = getattr(value, "is_cyclic", False)
    return "cycle" if is_cyclic else "duration"


RuleExpression = Annotated[
    Union[Annotated[DurationRule, Tag("duration")], Annotated[CyclicRule, Tag("cycle")]],
    Discriminator(_expression_kind),
]


class AlertRule(BaseModel):
    """
    An alert rule definition as held by the registry.

    `id` is None until the store assigns one. `enabled` stays None when the
    request did not specify it, which the evaluation engine treats as disabled.
    """

    id: int | None = None
    name: str = ""
    rules: list[RuleExpression] = Field(default_factory=list)
    trigger_mode: TriggerMode = TriggerMode.ALWAYS
    fail_trigger_tasks: list[int] = Field(default_factory=list)
    recover_trigger_tasks: list[int] = Field(default_factory=list)
    notification_group_id: int = 0
    enabled: bool | None = None

    @property
    def is_enabled(self) -> bool:
        """Whether the rule was explicitly enabled."""
        return self.enabled is True

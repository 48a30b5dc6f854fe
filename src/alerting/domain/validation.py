"""Validation of alert rule definitions before they are persisted."""

from datetime import datetime, timezone

from src.alerting.domain.exceptions import (
    DurationTooShortError,
    EmptyRuleSetError,
    FutureCycleStartError,
    InvalidCycleIntervalError,
    MissingCycleStartError,
)
from src.alerting.domain.models import AlertRule, CyclicRule, DurationRule

# Shorter windows make evaluation too noisy
MIN_DURATION = 3
MIN_CYCLE_INTERVAL = 1


def _as_utc(value: datetime) -> datetime:
    """Treat naive timestamps as UTC so they compare with aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def validate_expression(expression: DurationRule | CyclicRule, index: int, now: datetime) -> None:
    """
    Check a single rule expression.

    Raises:
        DurationTooShortError: Duration rule with a window below MIN_DURATION
        InvalidCycleIntervalError: Cyclic rule with interval below MIN_CYCLE_INTERVAL
        MissingCycleStartError: Cyclic rule without cycle_start
        FutureCycleStartError: Cyclic rule starting after `now`
    """
    if isinstance(expression, CyclicRule):
        if expression.cycle_interval < MIN_CYCLE_INTERVAL:
            raise InvalidCycleIntervalError(index, expression.cycle_interval, MIN_CYCLE_INTERVAL)
        if expression.cycle_start is None:
            raise MissingCycleStartError(index)
        cycle_start = _as_utc(expression.cycle_start)
        if cycle_start > now:
            raise FutureCycleStartError(index, cycle_start, now)
        return

    if expression.duration < MIN_DURATION:
        raise DurationTooShortError(index, expression.duration, MIN_DURATION)


def validate_rule(rule: AlertRule, now: datetime | None = None) -> None:
    """
    Validate an alert rule, raising on the first violation.

    Has no side effects; pass `now` to make the future-start check deterministic.

    Args:
        rule: Fully populated candidate rule
        now: Validation time (defaults to the current UTC time)

    Raises:
        RuleValidationError: Specific subclass describing the rejection
    """
    if not rule.rules:
        raise EmptyRuleSetError()

    now = _as_utc(now) if now is not None else datetime.now(timezone.utc)
    for index, expression in enumerate(rule.rules):
        validate_expression(expression, index, now)

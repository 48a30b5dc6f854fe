from datetime import datetime, timedelta, timezone

import pytest

from src.alerting.domain.exceptions import (
    DurationTooShortError,
    EmptyRuleSetError,
    FutureCycleStartError,
    InvalidCycleIntervalError,
    MissingCycleStartError,
    RuleValidationError,
)
from src.alerting.domain.models import AlertRule, CyclicRule, DurationRule
from src.alerting.domain.validation import validate_rule


def _rule(*expressions) -> AlertRule:
    return AlertRule(name="test", rules=list(expressions))


def test_empty_rule_set_rejected(now) -> None:
    with pytest.raises(EmptyRuleSetError) as exc:
        validate_rule(_rule(), now=now)
    assert exc.value.message == "At least one rule must be defined"


@pytest.mark.parametrize("duration", [-1, 0, 1, 2])
def test_short_duration_rejected(now, duration: int) -> None:
    with pytest.raises(DurationTooShortError) as exc:
        validate_rule(_rule(DurationRule(type="cpu", duration=duration)), now=now)
    assert exc.value.message == "Duration must be at least 3"
    assert exc.value.details["rule_index"] == 0


@pytest.mark.parametrize("duration", [3, 5, 3600])
def test_duration_at_or_above_minimum_accepted(now, duration: int) -> None:
    validate_rule(_rule(DurationRule(type="cpu", duration=duration)), now=now)


def test_cycle_interval_below_one_rejected(now) -> None:
    rule = _rule(CyclicRule(cycle_interval=0, cycle_start=now - timedelta(days=1)))
    with pytest.raises(InvalidCycleIntervalError) as exc:
        validate_rule(rule, now=now)
    assert exc.value.message == "cycle_interval must be at least 1"


def test_cycle_interval_checked_before_cycle_start(now) -> None:
    with pytest.raises(InvalidCycleIntervalError):
        validate_rule(_rule(CyclicRule(cycle_interval=0)), now=now)


def test_missing_cycle_start_rejected(now) -> None:
    with pytest.raises(MissingCycleStartError) as exc:
        validate_rule(_rule(CyclicRule(cycle_interval=1)), now=now)
    assert exc.value.message == "cycle_start is not set"


def test_future_cycle_start_rejected(now) -> None:
    rule = _rule(CyclicRule(cycle_interval=1, cycle_start=now + timedelta(seconds=1)))
    with pytest.raises(FutureCycleStartError) as exc:
        validate_rule(rule, now=now)
    assert exc.value.message == "cycle_start is in the future"


def test_cycle_start_equal_to_now_accepted(now) -> None:
    validate_rule(_rule(CyclicRule(cycle_interval=1, cycle_start=now)), now=now)


def test_naive_cycle_start_is_read_as_utc(now) -> None:
    naive_past = (now - timedelta(hours=1)).replace(tzinfo=None)
    validate_rule(_rule(CyclicRule(cycle_interval=2, cycle_start=naive_past)), now=now)

    naive_future = (now + timedelta(hours=1)).replace(tzinfo=None)
    with pytest.raises(FutureCycleStartError):
        validate_rule(_rule(CyclicRule(cycle_interval=2, cycle_start=naive_future)), now=now)


def test_cycle_start_in_other_timezone_compared_correctly(now) -> None:
    # 13:30 at UTC+2 is 11:30 UTC, before the fixed clock
    plus_two = timezone(timedelta(hours=2))
    start = datetime(2024, 6, 1, 13, 30, tzinfo=plus_two)
    validate_rule(_rule(CyclicRule(cycle_interval=1, cycle_start=start)), now=now)


def test_any_failing_expression_rejects_whole_rule(now) -> None:
    rule = _rule(
        DurationRule(type="cpu", duration=10),
        CyclicRule(cycle_interval=1, cycle_start=now),
        DurationRule(type="memory", duration=1),
    )
    with pytest.raises(DurationTooShortError) as exc:
        validate_rule(rule, now=now)
    assert exc.value.index == 2


def test_all_errors_share_base_class(now) -> None:
    with pytest.raises(RuleValidationError):
        validate_rule(_rule(DurationRule(duration=2)), now=now)


def test_defaults_to_current_time() -> None:
    past = datetime.now(timezone.utc) - timedelta(minutes=5)
    validate_rule(_rule(CyclicRule(cycle_interval=1, cycle_start=past)))

    future = datetime.now(timezone.utc) + timedelta(days=1)
    with pytest.raises(FutureCycleStartError):
        validate_rule(_rule(CyclicRule(cycle_interval=1, cycle_start=future)))


def test_validation_does_not_mutate_rule(now) -> None:
    rule = _rule(DurationRule(type="cpu", duration=5))
    before = rule.model_dump()
    validate_rule(rule, now=now)
    assert rule.model_dump() == before

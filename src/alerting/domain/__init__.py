"""Domain layer for the alert rule registry."""

from src.alerting.domain.exceptions import (
    DurationTooShortError,
    EmptyRuleSetError,
    ExpressionValidationError,
    FutureCycleStartError,
    InvalidCycleIntervalError,
    MissingCycleStartError,
    RuleValidationError,
)
from src.alerting.domain.models import AlertRule, CyclicRule, DurationRule, RuleExpression, TriggerMode
from src.alerting.domain.protocols import RegistryListener, RuleStore
from src.alerting.domain.validation import validate_rule

__all__ = [
    "AlertRule",
    "CyclicRule",
    "DurationRule",
    "RuleExpression",
    "TriggerMode",
    "RegistryListener",
    "RuleStore",
    "validate_rule",
    "RuleValidationError",
    "EmptyRuleSetError",
    "ExpressionValidationError",
    "DurationTooShortError",
    "InvalidCycleIntervalError",
    "MissingCycleStartError",
    "FutureCycleStartError",
]

"""Alert rule registry package."""

from src.alerting.application import RuleRegistry
from src.alerting.domain import AlertRule, CyclicRule, DurationRule, TriggerMode, validate_rule

__all__ = [
    "RuleRegistry",
    "AlertRule",
    "CyclicRule",
    "DurationRule",
    "TriggerMode",
    "validate_rule",
]

"""Custom exceptions for the alerting domain."""


class RuleValidationError(Exception):
    """Base exception for rejected alert rule definitions."""

    def __init__(self, message: str, details: dict | None = None):
        """
        Initialize validation error.

        Args:
            message: Human-readable rejection reason
            details: Optional dict with additional error context
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)


class EmptyRuleSetError(RuleValidationError):
    """Raised when an alert rule defines no expressions."""

    def __init__(self):
        super().__init__("At least one rule must be defined")


class ExpressionValidationError(RuleValidationError):
    """Base exception for a single rejected rule expression."""

    def __init__(self, message: str, index: int, details: dict | None = None):
        full_details = {"rule_index": index}
        if details:
            full_details.update(details)
        super().__init__(message, full_details)
        self.index = index


class DurationTooShortError(ExpressionValidationError):
    """Raised when a duration expression uses a window below the minimum."""

    def __init__(self, index: int, duration: int, minimum: int):
        super().__init__(
            f"Duration must be at least {minimum}",
            index,
            {"duration": duration, "minimum": minimum},
        )


class InvalidCycleIntervalError(ExpressionValidationError):
    """Raised when a cyclic expression has a non-positive interval."""

    def __init__(self, index: int, cycle_interval: int, minimum: int):
        super().__init__(
            f"cycle_interval must be at least {minimum}",
            index,
            {"cycle_interval": cycle_interval, "minimum": minimum},
        )


class MissingCycleStartError(ExpressionValidationError):
    """Raised when a cyclic expression has no cycle_start."""

    def __init__(self, index: int):
        super().__init__("cycle_start is not set", index)


class FutureCycleStartError(ExpressionValidationError):
    """Raised when a cyclic expression starts after the validation time."""

    def __init__(self, index: int, cycle_start, now):
        super().__init__(
            "cycle_start is in the future",
            index,
            {"cycle_start": cycle_start.isoformat(), "now": now.isoformat()},
        )

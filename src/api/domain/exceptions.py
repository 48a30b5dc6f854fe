"""Custom exceptions for the API layer."""


class APIException(Exception):
    """Base exception for all API errors."""

    def __init__(self, message: str, details: dict | None = None):
        """
        Initialize API exception.

        Args:
            message: Human-readable error message
            details: Optional dict with additional error context
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ResourceNotFoundException(APIException):
    """Raised when a requested resource is not found."""

    pass


class AlertRuleNotFoundError(ResourceNotFoundException):
    """Raised when an alert rule ID does not exist."""

    def __init__(self, rule_id: int):
        super().__init__(
            message=f"Alert rule {rule_id} does not exist",
            details={"rule_id": rule_id}
        )


class MalformedRequestError(APIException):
    """Raised when a request is syntactically valid but inconsistent."""

    pass


class PersistenceError(APIException):
    """Raised when the rule store fails; wraps the underlying storage error."""

    def __init__(self, operation: str, original_error: Exception | None = None):
        details = {"operation": operation}
        if original_error:
            details["original_error"] = str(original_error)
            details["original_error_type"] = type(original_error).__name__
        super().__init__(
            message=f"Failed to {operation} alert rule(s)",
            details=details
        )
        self.operation = operation
        self.original_error = original_error

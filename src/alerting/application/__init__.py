"""Application layer for the alert rule registry."""

from src.alerting.application.registry import RuleRegistry

__all__ = ["RuleRegistry"]

"""Infrastructure layer for the alert rule registry."""

from src.alerting.infrastructure.locks import ReadWriteLock

__all__ = ["ReadWriteLock"]

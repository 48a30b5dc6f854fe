"""Domain models for API layer."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, Integer, String
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func

from src.alerting.domain.models import TriggerMode


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


class AlertRuleRecord(Base):
    """Stored alert rule definition."""

    __tablename__ = "alert_rules"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    rules: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False)  # Serialized rule expressions
    trigger_mode: Mapped[TriggerMode] = mapped_column(
        SQLEnum(TriggerMode, name="trigger_mode_enum"), default=TriggerMode.ALWAYS, nullable=False
    )
    fail_trigger_tasks: Mapped[list[int]] = mapped_column(JSON, nullable=False, default=list)
    recover_trigger_tasks: Mapped[list[int]] = mapped_column(JSON, nullable=False, default=list)
    notification_group_id: Mapped[int] = mapped_column(Integer, nullable=False, default=0, index=True)
    enabled: Mapped[bool | None] = mapped_column(Boolean, nullable=True)  # NULL = never specified
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

"""Repositories for data access."""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Iterable

from loguru import logger
from pydantic import TypeAdapter
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.alerting.domain.models import AlertRule, RuleExpression
from src.api.domain.exceptions import AlertRuleNotFoundError, PersistenceError
from src.api.domain.models import AlertRuleRecord

_expressions = TypeAdapter(list[RuleExpression])


def record_to_rule(record: AlertRuleRecord) -> AlertRule:
    """Build a detached domain rule from a stored record."""
    return AlertRule(
        id=record.id,
        name=record.name,
        rules=_expressions.validate_python(record.rules or []),
        trigger_mode=record.trigger_mode,
        fail_trigger_tasks=list(record.fail_trigger_tasks or []),
        recover_trigger_tasks=list(record.recover_trigger_tasks or []),
        notification_group_id=record.notification_group_id,
        enabled=record.enabled,
    )


def apply_rule(record: AlertRuleRecord, rule: AlertRule) -> None:
    """Overwrite every mutable column of `record` from `rule`."""
    record.name = rule.name
    record.rules = _expressions.dump_python(rule.rules, mode="json")
    record.trigger_mode = rule.trigger_mode
    record.fail_trigger_tasks = list(rule.fail_trigger_tasks)
    record.recover_trigger_tasks = list(rule.recover_trigger_tasks)
    record.notification_group_id = rule.notification_group_id
    record.enabled = rule.enabled


class AlertRuleRepository:
    """
    Repository for AlertRule entities.

    Each write commits its own transaction. Storage failures are rolled back
    and re-raised as PersistenceError naming the failed operation.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    @asynccontextmanager
    async def _persisting(self, operation: str, commit: bool = True) -> AsyncIterator[None]:
        try:
            yield
            if commit:
                await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"✗ Failed to {operation} alert rule(s): {e}")
            raise PersistenceError(operation, e) from e

    async def create(self, rule: AlertRule) -> AlertRule:
        """Create a new alert rule; the database assigns the ID."""
        record = AlertRuleRecord()
        apply_rule(record, rule)
        async with self._persisting("create"):
            self.session.add(record)
            await self.session.flush()
        return record_to_rule(record)

    async def get_by_id(self, rule_id: int) -> AlertRule | None:
        """Get alert rule by ID."""
        async with self._persisting("fetch", commit=False):
            record = await self.session.get(AlertRuleRecord, rule_id)
        return record_to_rule(record) if record is not None else None

    async def list_all(self) -> list[AlertRule]:
        """List all alert rules."""
        async with self._persisting("list", commit=False):
            result = await self.session.execute(select(AlertRuleRecord).order_by(AlertRuleRecord.id))
            records = result.scalars().all()
        return [record_to_rule(r) for r in records]

    async def update(self, rule: AlertRule) -> AlertRule:
        """Overwrite an existing alert rule by ID."""
        if rule.id is None:
            raise ValueError("Cannot update an alert rule without an ID")

        async with self._persisting("update"):
            record = await self.session.get(AlertRuleRecord, rule.id)
            if record is None:
                raise AlertRuleNotFoundError(rule.id)
            apply_rule(record, rule)
            await self.session.flush()
        return record_to_rule(record)

    async def delete_many(self, rule_ids: Iterable[int]) -> int:
        """Permanently delete all alert rules with the given IDs."""
        rule_ids = list(rule_ids)
        if not rule_ids:
            return 0

        async with self._persisting("delete"):
            result = await self.session.execute(delete(AlertRuleRecord).where(AlertRuleRecord.id.in_(rule_ids)))
        return result.rowcount or 0

"""Service for alert rule management."""

from datetime import datetime, timezone
from typing import Callable, Iterable

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from src.alerting.application.registry import RuleRegistry
from src.alerting.domain.exceptions import RuleValidationError
from src.alerting.domain.models import AlertRule
from src.alerting.domain.protocols import RuleStore
from src.alerting.domain.validation import validate_rule
from src.api.domain.exceptions import AlertRuleNotFoundError, MalformedRequestError
from src.api.domain.schemas import AlertRuleForm, AlertRuleResponse
from src.api.infrastructure.logging import LoggingContext
from src.api.infrastructure.repositories import AlertRuleRepository


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AlertRuleService:
    """
    Service for managing alert rules.

    Every write runs validate -> persist -> propagate. A failure at any step
    aborts the workflow, and the registry is only touched once the store has
    committed.
    """

    def __init__(
        self,
        registry: RuleRegistry,
        store_factory: Callable[[AsyncSession], RuleStore] = AlertRuleRepository,
        clock: Callable[[], datetime] = _utc_now,
    ):
        """
        Initialize service.

        Args:
            registry: Shared registry of active rules
            store_factory: Builds the rule store for a session (adheres to RuleStore)
            clock: Source of the current time for validation
        """
        self.registry = registry
        self.store_factory = store_factory
        self.clock = clock

    def list_alert_rules(self) -> list[AlertRuleResponse]:
        """List all active alert rules from the registry."""
        rules = sorted(self.registry.snapshot(), key=lambda r: r.id)
        return [self._to_response(r) for r in rules]

    async def load_registry(self, session: AsyncSession) -> int:
        """Rebuild the registry from every stored rule."""
        repo = self.store_factory(session)
        rules = await repo.list_all()
        self.registry.load(rules)
        return len(rules)

    async def create_alert_rule(self, session: AsyncSession, form: AlertRuleForm) -> int:
        """Create an alert rule and return its new ID."""
        with LoggingContext(operation="create", rule_id=None) as ctx:
            rule = self._build_rule(form)
            self._validate(rule)

            repo = self.store_factory(session)
            rule = await repo.create(rule)
            ctx.update(rule_id=rule.id)

            self.registry.upsert(rule)
            logger.info(f"✓ Created alert rule: {rule.name} (ID: {rule.id})")
            return rule.id

    async def update_alert_rule(self, session: AsyncSession, rule_id: int, form: AlertRuleForm) -> int:
        """Fully overwrite an existing alert rule."""
        with LoggingContext(operation="update", rule_id=rule_id):
            if form.id is not None and form.id != rule_id:
                raise MalformedRequestError(
                    f"Body ID {form.id} does not match path ID {rule_id}",
                    details={"path_id": rule_id, "body_id": form.id},
                )

            repo = self.store_factory(session)
            existing = await repo.get_by_id(rule_id)
            if existing is None:
                raise AlertRuleNotFoundError(rule_id)

            rule = self._build_rule(form, rule_id=existing.id)
            self._validate(rule)

            rule = await repo.update(rule)
            self.registry.upsert(rule)
            logger.info(f"✓ Updated alert rule: {rule.name} (ID: {rule.id})")
            return rule.id

    async def batch_delete_alert_rules(self, session: AsyncSession, rule_ids: Iterable[int]) -> None:
        """Permanently delete alert rules; unknown IDs are ignored."""
        rule_ids = list(dict.fromkeys(rule_ids))
        with LoggingContext(operation="delete"):
            repo = self.store_factory(session)
            deleted = await repo.delete_many(rule_ids)
            self.registry.remove(rule_ids)
            logger.info(f"✓ Deleted {deleted} alert rule(s) (requested: {rule_ids})")

    def _validate(self, rule: AlertRule) -> None:
        try:
            validate_rule(rule, now=self.clock())
        except RuleValidationError as e:
            logger.warning(f"Rejected alert rule '{rule.name}': {e.message}")
            raise

    @staticmethod
    def _build_rule(form: AlertRuleForm, rule_id: int | None = None) -> AlertRule:
        """Map a request form onto a rule, field by field."""
        return AlertRule(
            id=rule_id,
            name=form.name,
            rules=[expression.model_copy(deep=True) for expression in form.rules],
            trigger_mode=form.trigger_mode,
            fail_trigger_tasks=list(form.fail_trigger_tasks),
            recover_trigger_tasks=list(form.recover_trigger_tasks),
            notification_group_id=form.notification_group_id,
            enabled=form.enable,
        )

    @staticmethod
    def _to_response(rule: AlertRule) -> AlertRuleResponse:
        """Convert a rule to response schema."""
        return AlertRuleResponse(
            id=rule.id,
            name=rule.name,
            rules=rule.rules,
            fail_trigger_tasks=rule.fail_trigger_tasks,
            recover_trigger_tasks=rule.recover_trigger_tasks,
            notification_group_id=rule.notification_group_id,
            enable=rule.enabled,
            trigger_mode=rule.trigger_mode,
        )

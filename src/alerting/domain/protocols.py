"""Protocols (interfaces) for alerting components."""

from typing import Iterable, Protocol, runtime_checkable

from src.alerting.domain.models import AlertRule


@runtime_checkable
class RuleStore(Protocol):
    """Durable storage for alert rule records."""

    async def create(self, rule: AlertRule) -> AlertRule:
        """
        Persist a new rule.

        Returns:
            The stored rule with its assigned ID
        """
        ...

    async def get_by_id(self, rule_id: int) -> AlertRule | None:
        """Fetch a rule by ID, or None if it does not exist."""
        ...

    async def list_all(self) -> list[AlertRule]:
        """Fetch every stored rule."""
        ...

    async def update(self, rule: AlertRule) -> AlertRule:
        """Overwrite an existing rule by ID."""
        ...

    async def delete_many(self, rule_ids: Iterable[int]) -> int:
        """Hard delete all matching rules, returning how many were removed."""
        ...


class RegistryListener(Protocol):
    """Receives registry changes, e.g. the evaluation engine."""

    def on_rule_upserted(self, rule: AlertRule) -> None:
        """Called after a rule was added or replaced."""
        ...

    def on_rules_removed(self, rule_ids: list[int]) -> None:
        """Called after rules were evicted."""
        ...

"""In-memory registry of active alert rules read by the evaluation engine."""

import threading
from typing import Iterable

from loguru import logger

from src.alerting.domain.models import AlertRule
from src.alerting.domain.protocols import RegistryListener
from src.alerting.infrastructure.locks import ReadWriteLock


class RuleRegistry:
    """
    Concurrency-safe cache of alert rules keyed by ID.

    Every read and write goes through one reader-writer lock covering the whole
    cache. Rules are copied on the way in and on the way out, so callers never
    hold a reference to a cached entry. Persistence happens before any of the
    mutation hooks are called; the lock only covers in-memory work.

    Listeners are kept under a separate lock and notified after the cache lock
    is released, with copies.
    """

    def __init__(self):
        self._rules: dict[int, AlertRule] = {}
        self._lock = ReadWriteLock()
        self._listeners: list[RegistryListener] = []
        self._listeners_lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._rules)

    def snapshot(self) -> list[AlertRule]:
        """Return an independent deep copy of every cached rule."""
        with self._lock.read_locked():
            return [rule.model_copy(deep=True) for rule in self._rules.values()]

    def get(self, rule_id: int) -> AlertRule | None:
        """Return a copy of one cached rule, or None if absent."""
        with self._lock.read_locked():
            rule = self._rules.get(rule_id)
            return rule.model_copy(deep=True) if rule is not None else None

    def upsert(self, rule: AlertRule) -> None:
        """Insert or replace the entry for `rule.id`."""
        if rule.id is None:
            raise ValueError("Cannot register an alert rule without an ID")

        cached = rule.model_copy(deep=True)
        with self._lock.write_locked():
            self._rules[cached.id] = cached

        logger.debug(f"Registry upserted alert rule {cached.id}")
        self._notify_upserted(cached)

    def remove(self, rule_ids: Iterable[int]) -> None:
        """Evict all matching entries; unknown IDs are ignored."""
        rule_ids = list(rule_ids)
        with self._lock.write_locked():
            removed = [rule_id for rule_id in rule_ids if self._rules.pop(rule_id, None) is not None]

        logger.debug(f"Registry removed {len(removed)} of {len(rule_ids)} requested alert rules")
        if removed:
            self._notify_removed(removed)

    def load(self, rules: Iterable[AlertRule]) -> None:
        """Replace the whole cache, e.g. with the stored rules at startup."""
        fresh = {}
        for rule in rules:
            if rule.id is None:
                raise ValueError("Cannot register an alert rule without an ID")
            fresh[rule.id] = rule.model_copy(deep=True)
        loaded = list(fresh.values())

        with self._lock.write_locked():
            stale = [rule_id for rule_id in self._rules if rule_id not in fresh]
            self._rules = fresh

        logger.info(f"Registry loaded {len(fresh)} alert rules")
        if stale:
            self._notify_removed(stale)
        for rule in loaded:
            self._notify_upserted(rule)

    def subscribe(self, listener: RegistryListener) -> None:
        """Register a listener for future changes."""
        with self._listeners_lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def unsubscribe(self, listener: RegistryListener) -> None:
        """Stop notifying a listener; unknown listeners are ignored."""
        with self._listeners_lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def _current_listeners(self) -> list[RegistryListener]:
        with self._listeners_lock:
            return list(self._listeners)

    def _notify_upserted(self, rule: AlertRule) -> None:
        for listener in self._current_listeners():
            try:
                listener.on_rule_upserted(rule.model_copy(deep=True))
            except Exception:
                logger.exception(f"Registry listener {listener!r} failed on upsert of rule {rule.id}")

    def _notify_removed(self, rule_ids: list[int]) -> None:
        for listener in self._current_listeners():
            try:
                listener.on_rules_removed(list(rule_ids))
            except Exception:
                logger.exception(f"Registry listener {listener!r} failed on removal of rules {rule_ids}")

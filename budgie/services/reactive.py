"""
Reactive query façade.

Binds store and preference operations to observable state for a
presentation layer. Each bound query exposes its latest result, a loading
flag and the last error, plus `refresh()` to re-run the query. Mutators
write through the repository and then patch the cached result from the
write's return value instead of refetching.

State machine per query: idle -> loading -> (ready | error); `refresh()`
from either terminal state returns to loading. In-flight fetches are never
cancelled; whichever completes last wins.
"""

import asyncio
import bisect
import inspect
import logging
from collections import defaultdict
from contextlib import asynccontextmanager
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar, Union

from budgie.db.base import Database
from budgie.db.models import (
    Budget,
    CategorySpending,
    DatabaseStats,
    Subscription,
    Transaction,
    TransactionSummary,
    UserSettings,
)
from budgie.db.repository import BudgieRepository
from budgie.models.category import TransactionCategory
from budgie.models.period import Period
from budgie.models.settings import AppSettings
from budgie.models.transaction import (
    SettingsUpdate,
    SubscriptionInput,
    TransactionFilter,
    TransactionInput,
    TransactionUpdate,
)

from .preferences import PreferencesStore

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

Fetcher = Callable[[], Union[T, Awaitable[T]]]
Listener = Callable[["QueryState[Any]"], None]


class QueryStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class QueryState(Generic[T]):
    """Immutable snapshot of a bound query."""

    data: Optional[T] = None
    status: QueryStatus = QueryStatus.IDLE
    error: Optional[Exception] = None

    @property
    def is_loading(self) -> bool:
        return self.status == QueryStatus.LOADING

    @property
    def is_ready(self) -> bool:
        return self.status == QueryStatus.READY


async def _resolve(value: Union[R, Awaitable[R]]) -> R:
    if inspect.isawaitable(value):
        return await value
    return value


class KeyedLock:
    """Per-key asyncio locks, dropped once nobody holds or waits on them."""

    def __init__(self):
        self._locks: dict[Any, asyncio.Lock] = {}
        self._users: dict[Any, int] = defaultdict(int)

    @asynccontextmanager
    async def hold(self, key: Any):
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._users[key] += 1
        try:
            async with lock:
                yield
        finally:
            self._users[key] -= 1
            if self._users[key] == 0:
                del self._users[key]
                del self._locks[key]

    def __contains__(self, key: Any) -> bool:
        return key in self._locks


class BoundQuery(Generic[T]):
    """
    A query bound to observable state.

    Args:
        fetcher: Callable returning the result (or an awaitable of it)
        initial: Data exposed before the first successful fetch
    """

    name = "query"

    def __init__(self, fetcher: Fetcher, initial: Optional[T] = None):
        self._fetcher = fetcher
        self._state: QueryState[T] = QueryState(data=initial)
        self._listeners: list[Listener] = []
        self._entity_locks = KeyedLock()

    @property
    def state(self) -> QueryState[T]:
        return self._state

    @property
    def data(self) -> Optional[T]:
        return self._state.data

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    @property
    def error(self) -> Optional[Exception]:
        return self._state.error

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a callback fired on every state change.

        Returns:
            A function that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, **changes) -> None:
        self._state = replace(self._state, **changes)
        for listener in list(self._listeners):
            listener(self._state)

    def _patch(self, update: Callable[[Optional[T]], T]) -> None:
        self._set_state(data=update(self._state.data))

    async def refresh(self) -> QueryState[T]:
        """
        Re-run the query and replace the cached result.

        Errors are logged and recorded in `error`, never raised.
        """
        self._set_state(status=QueryStatus.LOADING)
        try:
            data = await _resolve(self._fetcher())
        except Exception as e:
            logger.error(f"[{self.name}] Error: {e}", exc_info=True)
            self._set_state(status=QueryStatus.ERROR, error=e)
            return self._state

        self._set_state(data=data, status=QueryStatus.READY, error=None)
        return self._state

    async def _mutate(
        self,
        operation: Callable[[], Union[R, Awaitable[R]]],
        patch: Callable[[R], None],
        key: Any = None,
    ) -> R:
        """
        Run a write, then patch the cache from its result.

        Writes sharing a key run one at a time, so cache patches are applied
        in the same order the store applied the writes. Errors are recorded
        and re-raised.
        """
        async with self._entity_locks.hold(key):
            try:
                result = await _resolve(operation())
            except Exception as e:
                logger.error(f"[{self.name}] Mutation error: {e}", exc_info=True)
                self._set_state(error=e)
                raise
            patch(result)
            return result


# =============================================================================
# Store initialization
# =============================================================================


async def initialize_store(database: Database) -> QueryState[bool]:
    """
    Initialize the store and report readiness.

    Returns:
        A ready state with data True, or an error state holding the failure
    """
    query: BoundQuery[bool] = BoundQuery(
        lambda: database.initialize() is not None, initial=False
    )
    query.name = "initialize_store"
    return await query.refresh()


# =============================================================================
# Transactions
# =============================================================================


class TransactionsQuery(BoundQuery[list[Transaction]]):
    """Filtered transaction listing with optimistic add/update/remove."""

    name = "transactions"

    def __init__(
        self, repository: BudgieRepository, filters: Optional[TransactionFilter] = None
    ):
        self.repository = repository
        self.filters = filters
        super().__init__(lambda: repository.get_transactions(filters), initial=[])

    async def add(self, data: TransactionInput) -> Transaction:
        """Add a transaction and prepend it to the cached list."""

        def patch(created: Transaction):
            self._patch(lambda current: [created, *(current or [])])

        return await self._mutate(lambda: self.repository.add_transaction(data), patch)

    async def update(
        self, transaction_id: str, changes: TransactionUpdate
    ) -> Optional[Transaction]:
        """Update a transaction and replace it in place in the cached list."""

        def patch(updated: Optional[Transaction]):
            if updated is None:
                return
            self._patch(
                lambda current: [
                    updated if t.id == transaction_id else t for t in (current or [])
                ]
            )

        return await self._mutate(
            lambda: self.repository.update_transaction(transaction_id, changes),
            patch,
            key=transaction_id,
        )

    async def remove(self, transaction_id: str) -> bool:
        """Delete a transaction and drop it from the cached list."""

        def patch(deleted: bool):
            if not deleted:
                return
            self._patch(
                lambda current: [t for t in (current or []) if t.id != transaction_id]
            )

        return await self._mutate(
            lambda: self.repository.delete_transaction(transaction_id),
            patch,
            key=transaction_id,
        )


class SummaryQuery(BoundQuery[TransactionSummary]):
    name = "transaction_summary"

    def __init__(self, repository: BudgieRepository, start_date: datetime, end_date: datetime):
        self.start_date = start_date
        self.end_date = end_date
        super().__init__(
            lambda: repository.get_transaction_summary(start_date, end_date)
        )


class SpendingByCategoryQuery(BoundQuery[list[CategorySpending]]):
    name = "spending_by_category"

    def __init__(self, repository: BudgieRepository, start_date: datetime, end_date: datetime):
        self.start_date = start_date
        self.end_date = end_date
        super().__init__(
            lambda: repository.get_spending_by_category(start_date, end_date),
            initial=[],
        )


class DatabaseStatsQuery(BoundQuery[DatabaseStats]):
    name = "database_stats"

    def __init__(self, repository: BudgieRepository):
        super().__init__(repository.get_database_stats)


# =============================================================================
# Budgets and subscriptions
# =============================================================================


class BudgetsQuery(BoundQuery[list[Budget]]):
    """All budgets, ordered by category."""

    name = "budgets"

    def __init__(self, repository: BudgieRepository):
        self.repository = repository
        super().__init__(repository.get_budgets, initial=[])

    async def set(
        self, category: TransactionCategory, amount: float, period: Period
    ) -> Budget:
        """Upsert a budget and replace (or insert) it in the cached list."""

        def patch(budget: Budget):
            def apply(current):
                others = [b for b in (current or []) if b.category != budget.category]
                return sorted([*others, budget], key=lambda b: b.category.value)

            self._patch(apply)

        category = TransactionCategory(category)
        return await self._mutate(
            lambda: self.repository.set_budget(category, amount, period),
            patch,
            key=category,
        )

    async def remove(self, category: TransactionCategory) -> bool:
        def patch(deleted: bool):
            if deleted:
                self._patch(
                    lambda current: [b for b in (current or []) if b.category != category]
                )

        category = TransactionCategory(category)
        return await self._mutate(
            lambda: self.repository.delete_budget(category), patch, key=category
        )


class SubscriptionsQuery(BoundQuery[list[Subscription]]):
    """All subscriptions, soonest next billing date first."""

    name = "subscriptions"

    def __init__(self, repository: BudgieRepository):
        self.repository = repository
        super().__init__(repository.get_subscriptions, initial=[])

    async def add(self, data: SubscriptionInput) -> Subscription:
        """Add a subscription, keeping the cached list in billing-date order."""

        def patch(created: Subscription):
            def apply(current):
                items = list(current or [])
                dates = [s.next_billing_date for s in items]
                items.insert(bisect.bisect_right(dates, created.next_billing_date), created)
                return items

            self._patch(apply)

        return await self._mutate(lambda: self.repository.add_subscription(data), patch)

    async def remove(self, subscription_id: str) -> bool:
        def patch(deleted: bool):
            if deleted:
                self._patch(
                    lambda current: [s for s in (current or []) if s.id != subscription_id]
                )

        return await self._mutate(
            lambda: self.repository.delete_subscription(subscription_id),
            patch,
            key=subscription_id,
        )


# =============================================================================
# Settings
# =============================================================================


class SettingsQuery(BoundQuery[UserSettings]):
    """The relational settings row."""

    name = "settings"

    def __init__(self, repository: BudgieRepository):
        self.repository = repository
        super().__init__(repository.get_settings)

    async def update(self, changes: SettingsUpdate) -> UserSettings:
        def patch(updated: UserSettings):
            self._set_state(data=updated)

        return await self._mutate(
            lambda: self.repository.update_settings(changes), patch, key="settings"
        )


class PreferencesQuery(BoundQuery[AppSettings]):
    """Snapshot of every key-value preference."""

    name = "preferences"

    def __init__(self, store: PreferencesStore):
        self.store = store
        super().__init__(store.get_all)

    async def set(self, name: str, value: Any) -> Any:
        """
        Write one preference and patch it into the cached snapshot.

        Returns:
            The value as it now reads back from the store
        """

        def operation():
            self.store.set(name, value)
            return getattr(self.store, f"get_{name}")()

        def patch(stored: Any):
            self._patch(lambda current: replace(current or AppSettings(), **{name: stored}))

        return await self._mutate(operation, patch, key=name)

    async def reset(self) -> QueryState[AppSettings]:
        """Remove every preference, then reload the defaults."""
        await self._mutate(self.store.reset_all, lambda _: None, key="reset")
        return await self.refresh()

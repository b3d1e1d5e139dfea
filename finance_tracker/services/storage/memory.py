"""
In-Memory Storage Implementation

Keeps everything in dictionaries. Used by tests and as the reference
backend for the storage interfaces.

TRADEOFFS:
- Nothing survives a restart
- Filtering is done in Python on every call (fine at personal scale)

Returned records are copies, so callers cannot mutate stored state
by accident.
"""

from typing import Optional
from uuid import UUID

from finance_tracker.models.audit import AuditEvent
from finance_tracker.models.records import (
    Area,
    Expense,
    FixedCost,
    Income,
    to_year_month,
)
from finance_tracker.services.storage.interface import (
    AreaStorageInterface,
    AuditStorageInterface,
    DuplicateError,
    NotFoundError,
    RecordStorageInterface,
)


def _in_period(year_month: int, year: int, month: Optional[int]) -> bool:
    if month is None:
        return year_month // 100 == year
    return year_month == to_year_month(year, month)


class InMemoryAreaStorage(AreaStorageInterface):
    """Area storage backed by a dict, insertion-ordered."""

    def __init__(self):
        self._areas: dict[str, Area] = {}

    async def save_area(self, area: Area) -> Area:
        self._areas[area.id] = area.model_copy(deep=True)
        return area

    async def get_area(self, area_id: str) -> Optional[Area]:
        area = self._areas.get(area_id)
        return area.model_copy(deep=True) if area else None

    async def delete_area(self, area_id: str) -> bool:
        if area_id not in self._areas:
            raise NotFoundError(f"Area not found: {area_id}")
        del self._areas[area_id]
        return True

    async def list_areas(self, user_id: str) -> list[Area]:
        areas = [a for a in self._areas.values() if a.user_id == user_id]
        # sorted() is stable, so equal priorities keep creation order
        return [
            a.model_copy(deep=True)
            for a in sorted(areas, key=lambda a: a.priority, reverse=True)
        ]


class InMemoryRecordStorage(RecordStorageInterface):
    """Expense, fixed cost and income storage backed by dicts."""

    def __init__(self):
        self._expenses: dict[str, Expense] = {}
        self._fixed_costs: dict[str, FixedCost] = {}
        self._incomes: dict[str, Income] = {}

    async def add_expense(self, expense: Expense) -> Expense:
        if expense.id in self._expenses:
            raise DuplicateError(f"Expense already exists: {expense.id}")
        self._expenses[expense.id] = expense.model_copy(deep=True)
        return expense

    async def delete_expense(self, expense_id: str) -> bool:
        if expense_id not in self._expenses:
            raise NotFoundError(f"Expense not found: {expense_id}")
        del self._expenses[expense_id]
        return True

    async def list_expenses(
        self,
        user_id: str,
        year: int,
        month: Optional[int] = None,
    ) -> list[Expense]:
        expenses = [
            e for e in self._expenses.values()
            if e.user_id == user_id and _in_period(e.year_month, year, month)
        ]
        return [e.model_copy(deep=True) for e in sorted(expenses, key=lambda e: e.date)]

    async def add_fixed_cost(self, fixed_cost: FixedCost) -> FixedCost:
        if fixed_cost.id in self._fixed_costs:
            raise DuplicateError(f"Fixed cost already exists: {fixed_cost.id}")
        self._fixed_costs[fixed_cost.id] = fixed_cost.model_copy(deep=True)
        return fixed_cost

    async def update_fixed_cost(self, fixed_cost: FixedCost) -> FixedCost:
        if fixed_cost.id not in self._fixed_costs:
            raise NotFoundError(f"Fixed cost not found: {fixed_cost.id}")
        self._fixed_costs[fixed_cost.id] = fixed_cost.model_copy(deep=True)
        return fixed_cost

    async def list_fixed_costs(
        self,
        user_id: str,
        year: int,
        month: Optional[int] = None,
    ) -> list[FixedCost]:
        return [
            c.model_copy(deep=True) for c in self._fixed_costs.values()
            if c.user_id == user_id and _in_period(c.year_month, year, month)
        ]

    async def add_income(self, income: Income) -> Income:
        if income.id in self._incomes:
            raise DuplicateError(f"Income already exists: {income.id}")
        self._incomes[income.id] = income.model_copy(deep=True)
        return income

    async def list_incomes(
        self,
        user_id: str,
        year: int,
        month: Optional[int] = None,
    ) -> list[Income]:
        return [
            i.model_copy(deep=True) for i in self._incomes.values()
            if i.user_id == user_id and _in_period(i.year_month, year, month)
        ]


class InMemoryAuditStorage(AuditStorageInterface):
    """Append-only audit log kept in a list."""

    def __init__(self):
        self._events: list[AuditEvent] = []

    async def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    async def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        return [e for e in self._events if e.correlation_id == correlation_id]

    async def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: str,
    ) -> list[AuditEvent]:
        return [
            e for e in self._events
            if e.entity_type == entity_type and e.entity_id == entity_id
        ]

    async def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        return list(reversed(self._events))[:limit]

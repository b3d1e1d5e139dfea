"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Swap the in-memory backend for a document database later
2. Use in-memory storage for testing
3. Keep categorization and aggregation decoupled from storage

Every read is scoped to one user. The core never sees records of more
than one user at a time.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from finance_tracker.models.audit import AuditEvent
from finance_tracker.models.records import Area, Expense, FixedCost, Income


class AreaStorageInterface(ABC):
    """
    Abstract interface for area storage.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    async def save_area(self, area: Area) -> Area:
        """
        Create or replace an area.

        Args:
            area: The area to store

        Returns:
            The stored area
        """
        pass

    @abstractmethod
    async def get_area(self, area_id: str) -> Optional[Area]:
        """
        Retrieve an area by its ID.

        Returns:
            The area if found, None otherwise
        """
        pass

    @abstractmethod
    async def delete_area(self, area_id: str) -> bool:
        """
        Delete an area by ID. Records that matched it are untouched.

        Returns:
            True if an area was deleted

        Raises:
            NotFoundError: If the area doesn't exist
        """
        pass

    @abstractmethod
    async def list_areas(self, user_id: str) -> list[Area]:
        """
        List a user's areas, highest priority first.

        Areas with equal priority keep their creation order.
        """
        pass


class RecordStorageInterface(ABC):
    """Abstract interface for expenses, fixed costs and incomes."""

    @abstractmethod
    async def add_expense(self, expense: Expense) -> Expense:
        pass

    @abstractmethod
    async def delete_expense(self, expense_id: str) -> bool:
        """
        Raises:
            NotFoundError: If the expense doesn't exist
        """
        pass

    @abstractmethod
    async def list_expenses(
        self,
        user_id: str,
        year: int,
        month: Optional[int] = None,
    ) -> list[Expense]:
        """
        List a user's expenses for a year, or for one month of it.

        Args:
            user_id: Owner
            year: Calendar year
            month: 1-12; None for the whole year

        Returns:
            Expenses ordered by date
        """
        pass

    @abstractmethod
    async def add_fixed_cost(self, fixed_cost: FixedCost) -> FixedCost:
        pass

    @abstractmethod
    async def update_fixed_cost(self, fixed_cost: FixedCost) -> FixedCost:
        """
        Raises:
            NotFoundError: If the fixed cost doesn't exist
        """
        pass

    @abstractmethod
    async def list_fixed_costs(
        self,
        user_id: str,
        year: int,
        month: Optional[int] = None,
    ) -> list[FixedCost]:
        """List a user's fixed costs for a year, or for one month of it."""
        pass

    @abstractmethod
    async def add_income(self, income: Income) -> Income:
        pass

    @abstractmethod
    async def list_incomes(
        self,
        user_id: str,
        year: int,
        month: Optional[int] = None,
    ) -> list[Income]:
        """List a user's incomes for a year, or for one month of it."""
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    async def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    async def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        """Get all events for a correlation ID, in chronological order."""
        pass

    @abstractmethod
    async def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: str,
    ) -> list[AuditEvent]:
        """Get all events for a specific entity, in chronological order."""
        pass

    @abstractmethod
    async def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """Get the most recent audit events (newest first)."""
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass


class DuplicateError(StorageError):
    """Attempted to insert a duplicate entity."""
    pass

"""
Area Report Service

Fetches one user's areas and records from storage and runs the pure
aggregation functions on that snapshot.

GUARANTEES:
- Each call reads a fresh snapshot; nothing is cached between calls
- Reports only contain the requesting user's data
- Storage failures are audited and re-raised, never turned into
  an empty report
"""

from datetime import date
from typing import Optional
from uuid import UUID

import structlog

from finance_tracker.audit import AuditLogger, create_correlation_id
from finance_tracker.models.records import split_year_month
from finance_tracker.models.stats import MonthBalance, MonthlyAreaStats, YearlyAreaStats
from finance_tracker.services.storage import (
    AreaStorageInterface,
    RecordStorageInterface,
    StorageError,
)
from finance_tracker.stats import month_balance, monthly_area_stats, yearly_area_stats


class AreaReportService:
    """Builds area reports and balances for one user at a time."""

    def __init__(
        self,
        area_storage: AreaStorageInterface,
        record_storage: RecordStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._areas = area_storage
        self._records = record_storage
        self._audit_logger = audit_logger
        self._logger = structlog.get_logger(__name__)

    async def _storage_failed(
        self,
        error: StorageError,
        operation: str,
        user_id: str,
        correlation_id: UUID,
    ) -> None:
        self._logger.error("report_storage_failed", operation=operation, error=str(error))
        if self._audit_logger:
            await self._audit_logger.log_error(
                error_type="storage_error",
                error_message=str(error),
                details={"operation": operation, "user_id": user_id},
                correlation_id=correlation_id,
            )

    async def monthly_report(
        self,
        user_id: str,
        year_month: int,
        correlation_id: Optional[UUID] = None,
    ) -> MonthlyAreaStats:
        """
        Area breakdown of one month for a user.

        Raises:
            StorageError: If any of the reads fail
        """
        correlation_id = correlation_id or create_correlation_id()
        year, month = split_year_month(year_month)

        try:
            areas = await self._areas.list_areas(user_id)
            expenses = await self._records.list_expenses(user_id, year, month)
            fixed_costs = await self._records.list_fixed_costs(user_id, year, month)
        except StorageError as e:
            await self._storage_failed(e, "monthly_report", user_id, correlation_id)
            raise

        stats = monthly_area_stats(expenses, areas, year_month, fixed_costs)
        self._logger.debug(
            "monthly_report_built",
            year_month=year_month,
            expenses=len(expenses),
            fixed_costs=len(fixed_costs),
            areas=len(areas),
        )

        if self._audit_logger:
            await self._audit_logger.log_report_generated(
                user_id=user_id,
                period=str(year_month),
                area_count=len(stats.areas),
                unassigned_amount=str(stats.unassigned.total_amount),
                correlation_id=correlation_id,
            )
        return stats

    async def yearly_report(
        self,
        user_id: str,
        year: int,
        correlation_id: Optional[UUID] = None,
    ) -> YearlyAreaStats:
        """
        Month-by-month area breakdown of a year for a user.

        Raises:
            StorageError: If any of the reads fail
        """
        correlation_id = correlation_id or create_correlation_id()

        try:
            areas = await self._areas.list_areas(user_id)
            expenses = await self._records.list_expenses(user_id, year)
            fixed_costs = await self._records.list_fixed_costs(user_id, year)
        except StorageError as e:
            await self._storage_failed(e, "yearly_report", user_id, correlation_id)
            raise

        stats = yearly_area_stats(expenses, areas, year, fixed_costs)

        if self._audit_logger:
            await self._audit_logger.log_report_generated(
                user_id=user_id,
                period=str(year),
                area_count=len(stats.areas),
                unassigned_amount=str(stats.unassigned_total),
                yearly=True,
                correlation_id=correlation_id,
            )
        return stats

    async def month_balance(
        self,
        user_id: str,
        year_month: int,
        today: Optional[date] = None,
        correlation_id: Optional[UUID] = None,
    ) -> MonthBalance:
        """
        Income against spending for one month, with month-end projection.

        Raises:
            StorageError: If any of the reads fail
        """
        correlation_id = correlation_id or create_correlation_id()
        year, month = split_year_month(year_month)

        try:
            expenses = await self._records.list_expenses(user_id, year, month)
            fixed_costs = await self._records.list_fixed_costs(user_id, year, month)
            incomes = await self._records.list_incomes(user_id, year, month)
        except StorageError as e:
            await self._storage_failed(e, "month_balance", user_id, correlation_id)
            raise

        balance = month_balance(expenses, fixed_costs, incomes, year_month, today=today)

        if self._audit_logger:
            await self._audit_logger.log_balance_calculated(
                user_id=user_id,
                year_month=year_month,
                balance=str(balance.balance),
                correlation_id=correlation_id,
            )
        return balance

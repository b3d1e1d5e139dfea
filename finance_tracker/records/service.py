"""
Fixed Cost Payments

Marks a fixed cost paid or unpaid for a month and persists the change.
"""

from typing import Optional
from uuid import UUID

import structlog

from finance_tracker.audit import AuditLogger
from finance_tracker.models.records import FixedCost
from finance_tracker.services.storage import RecordStorageInterface
from finance_tracker.stats import toggle_paid


class FixedCostService:
    """Edits a user's fixed costs through the storage interface."""

    def __init__(
        self,
        storage: RecordStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._audit_logger = audit_logger
        self._logger = structlog.get_logger(__name__)

    async def toggle_paid(
        self,
        fixed_cost: FixedCost,
        year_month: Optional[int] = None,
        correlation_id: Optional[UUID] = None,
    ) -> FixedCost:
        """
        Flip the paid state for a month (default: the cost's own month).

        Raises:
            NotFoundError: If the fixed cost isn't stored
        """
        year_month = year_month or fixed_cost.year_month
        updated = toggle_paid(fixed_cost, year_month)
        await self._storage.update_fixed_cost(updated)

        paid = updated.is_paid(year_month)
        self._logger.info(
            "fixed_cost_payment_toggled",
            fixed_cost_id=updated.id,
            year_month=year_month,
            paid=paid,
        )

        if self._audit_logger:
            await self._audit_logger.log_fixed_cost_payment_toggled(
                fixed_cost_id=updated.id,
                user_id=updated.user_id,
                name=updated.name,
                year_month=year_month,
                paid=paid,
                correlation_id=correlation_id,
            )
        return updated

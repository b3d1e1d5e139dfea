"""
Audit Logger

DESIGN DECISION: Every change to a user's areas and every generated
report is logged. This provides:
1. Traceability of categorization rule changes
2. Debugging capability when a report looks wrong
3. User can see history of their interactions

The audit logger:
- Is async, like the storage layer it writes to
- Gracefully handles failures (doesn't crash the app if logging fails)
- Supports correlation IDs to trace related events
"""

import logging
from typing import Optional
from uuid import UUID, uuid4

import structlog

from finance_tracker.config import get_settings
from finance_tracker.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from finance_tracker.services.storage import AuditStorageInterface

LOGGER_NAME = "finance_tracker"


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure structlog on top of stdlib logging.

    The level applies to the package logger; defaults to the configured
    app log level.
    """
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.getLogger(LOGGER_NAME).setLevel(level or get_settings().app.log_level)


configure_logging()


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. Audit storage (for persistence and user visibility)
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for persistence.
                    If None, only logs locally.
        """
        self._storage = storage
        self._logger = structlog.get_logger(f"{LOGGER_NAME}.audit")

    async def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage:
            try:
                return await self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    async def log_area_created(
        self,
        area_id: str,
        user_id: str,
        name: str,
        priority: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        await self.log(AuditEventBuilder.area_created(
            area_id=area_id,
            user_id=user_id,
            name=name,
            priority=priority,
            correlation_id=correlation_id,
        ))

    async def log_area_deleted(
        self,
        area_id: str,
        user_id: str,
        name: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        await self.log(AuditEventBuilder.area_deleted(
            area_id=area_id,
            user_id=user_id,
            name=name,
            correlation_id=correlation_id,
        ))

    async def log_keyword_added(
        self,
        area_id: str,
        user_id: str,
        keyword: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        await self.log(AuditEventBuilder.keyword_added(
            area_id=area_id,
            user_id=user_id,
            keyword=keyword,
            correlation_id=correlation_id,
        ))

    async def log_keyword_removed(
        self,
        area_id: str,
        user_id: str,
        keyword: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        await self.log(AuditEventBuilder.keyword_removed(
            area_id=area_id,
            user_id=user_id,
            keyword=keyword,
            correlation_id=correlation_id,
        ))

    async def log_keyword_rejected(
        self,
        area_id: str,
        user_id: str,
        keyword: str,
        reason: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a keyword that failed validation."""
        await self.log(AuditEventBuilder.keyword_rejected(
            area_id=area_id,
            user_id=user_id,
            keyword=keyword,
            reason=reason,
            correlation_id=correlation_id,
        ))

    async def log_fixed_cost_payment_toggled(
        self,
        fixed_cost_id: str,
        user_id: str,
        name: str,
        year_month: int,
        paid: bool,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        await self.log(AuditEventBuilder.fixed_cost_payment_toggled(
            fixed_cost_id=fixed_cost_id,
            user_id=user_id,
            name=name,
            year_month=year_month,
            paid=paid,
            correlation_id=correlation_id,
        ))

    async def log_report_generated(
        self,
        user_id: str,
        period: str,
        area_count: int,
        unassigned_amount: str,
        yearly: bool = False,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        await self.log(AuditEventBuilder.report_generated(
            user_id=user_id,
            period=period,
            area_count=area_count,
            unassigned_amount=unassigned_amount,
            yearly=yearly,
            correlation_id=correlation_id,
        ))

    async def log_balance_calculated(
        self,
        user_id: str,
        year_month: int,
        balance: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        await self.log(AuditEventBuilder.balance_calculated(
            user_id=user_id,
            year_month=year_month,
            balance=balance,
            correlation_id=correlation_id,
        ))

    async def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        await self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a new user action (e.g., editing an area).
    Pass it through all subsequent operations.
    """
    return uuid4()

"""
Audit Models for Finance Tracker

Every change to a user's areas, and every report generated from them,
is recorded as an audit event. This provides:
1. Traceability of how categorization rules changed over time
2. Debugging information when a report looks wrong
3. Ability to reconstruct which keywords existed when

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Area management
    AREA_CREATED = "area_created"
    AREA_DELETED = "area_deleted"
    KEYWORD_ADDED = "keyword_added"
    KEYWORD_REMOVED = "keyword_removed"
    KEYWORD_REJECTED = "keyword_rejected"

    # Fixed costs
    FIXED_COST_PAYMENT_TOGGLED = "fixed_cost_payment_toggled"

    # Reports
    MONTHLY_REPORT_GENERATED = "monthly_report_generated"
    YEARLY_REPORT_GENERATED = "yearly_report_generated"
    BALANCE_CALCULATED = "balance_calculated"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - who and what is this about?
    user_id: Optional[str] = Field(
        default=None,
        description="Owner of the affected data"
    )
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'area', 'report')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "user_id": self.user_id,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.area_created(area_id, user_id, name, correlation_id)
        event = AuditEventBuilder.keyword_added(area_id, user_id, keyword, correlation_id)
    """

    @staticmethod
    def area_created(
        area_id: str,
        user_id: str,
        name: str,
        priority: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.AREA_CREATED,
            user_id=user_id,
            entity_type="area",
            entity_id=area_id,
            correlation_id=correlation_id,
            description=f"Area created: {name}",
            details={
                "name": name,
                "priority": priority,
            },
            is_user_action=True,
        )

    @staticmethod
    def area_deleted(
        area_id: str,
        user_id: str,
        name: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.AREA_DELETED,
            user_id=user_id,
            entity_type="area",
            entity_id=area_id,
            correlation_id=correlation_id,
            description=f"Area deleted: {name}",
            details={"name": name},
            is_user_action=True,
        )

    @staticmethod
    def keyword_added(
        area_id: str,
        user_id: str,
        keyword: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.KEYWORD_ADDED,
            user_id=user_id,
            entity_type="area",
            entity_id=area_id,
            correlation_id=correlation_id,
            description=f"Keyword added: {keyword}",
            details={"keyword": keyword},
            is_user_action=True,
        )

    @staticmethod
    def keyword_removed(
        area_id: str,
        user_id: str,
        keyword: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.KEYWORD_REMOVED,
            user_id=user_id,
            entity_type="area",
            entity_id=area_id,
            correlation_id=correlation_id,
            description=f"Keyword removed: {keyword}",
            details={"keyword": keyword},
            is_user_action=True,
        )

    @staticmethod
    def keyword_rejected(
        area_id: str,
        user_id: str,
        keyword: str,
        reason: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.KEYWORD_REJECTED,
            severity=AuditSeverity.WARNING,
            user_id=user_id,
            entity_type="area",
            entity_id=area_id,
            correlation_id=correlation_id,
            description=f"Keyword rejected: {keyword!r}",
            details={
                "keyword": keyword,
                "reason": reason,
            },
            is_user_action=True,
        )

    @staticmethod
    def fixed_cost_payment_toggled(
        fixed_cost_id: str,
        user_id: str,
        name: str,
        year_month: int,
        paid: bool,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        state = "paid" if paid else "unpaid"
        return AuditEvent(
            event_type=AuditEventType.FIXED_COST_PAYMENT_TOGGLED,
            user_id=user_id,
            entity_type="fixed_cost",
            entity_id=fixed_cost_id,
            correlation_id=correlation_id,
            description=f"Fixed cost {name} marked {state} for {year_month}",
            details={
                "year_month": year_month,
                "paid": paid,
            },
            is_user_action=True,
        )

    @staticmethod
    def report_generated(
        user_id: str,
        period: str,
        area_count: int,
        unassigned_amount: str,
        yearly: bool = False,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        event_type = (
            AuditEventType.YEARLY_REPORT_GENERATED
            if yearly
            else AuditEventType.MONTHLY_REPORT_GENERATED
        )
        return AuditEvent(
            event_type=event_type,
            user_id=user_id,
            entity_type="report",
            entity_id=period,
            correlation_id=correlation_id,
            description=f"Area report generated for {period}",
            details={
                "area_count": area_count,
                "unassigned_amount": unassigned_amount,
            },
        )

    @staticmethod
    def balance_calculated(
        user_id: str,
        year_month: int,
        balance: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BALANCE_CALCULATED,
            user_id=user_id,
            entity_type="report",
            entity_id=str(year_month),
            correlation_id=correlation_id,
            description=f"Balance calculated for {year_month}",
            details={"balance": balance},
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )

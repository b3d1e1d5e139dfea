"""
Data Models Package

This package contains all Pydantic models used in the Finance Tracker.
All data flowing through the system must conform to these schemas.
"""

from finance_tracker.models.records import (
    Area,
    Expense,
    ExpenseCategory,
    FixedCost,
    Income,
    Recurrence,
    split_year_month,
    to_year_month,
    year_month_of,
)
from finance_tracker.models.stats import (
    AreaStatistics,
    MonthBalance,
    MonthlyAmount,
    MonthlyAreaStats,
    UnassignedStatistics,
    YearBalance,
    YearlyAreaStatistics,
    YearlyAreaStats,
)
from finance_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Record models
    "Area",
    "Expense",
    "ExpenseCategory",
    "FixedCost",
    "Income",
    "Recurrence",
    "split_year_month",
    "to_year_month",
    "year_month_of",
    # Statistics models
    "AreaStatistics",
    "MonthBalance",
    "MonthlyAmount",
    "MonthlyAreaStats",
    "UnassignedStatistics",
    "YearBalance",
    "YearlyAreaStatistics",
    "YearlyAreaStats",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]

"""
Core Record Models for Finance Tracker

These models define the schemas for everything the tracker stores:
areas, expenses, fixed costs and incomes.

DESIGN DECISION: Records are validated here, at the edge.
The categorization and aggregation code downstream trusts these
types and never re-validates amounts or dates.

Amounts are Decimal with two decimal places so that per-area sums
and the overall total agree to the cent.
"""

from datetime import date as Date
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)


# =============================================================================
# YEAR-MONTH ENCODING
# =============================================================================

def to_year_month(year: int, month: int) -> int:
    """Encode a calendar month as YYYYMM (e.g. 2026, 3 -> 202603)."""
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be between 1 and 12, got {month}")
    return year * 100 + month


def split_year_month(year_month: int) -> tuple[int, int]:
    """Decode YYYYMM into (year, month)."""
    return divmod(year_month, 100)


def year_month_of(day: Date) -> int:
    """YYYYMM of a calendar date."""
    return day.year * 100 + day.month


def _check_year_month(value: int) -> int:
    if not 1 <= value % 100 <= 12:
        raise ValueError(f"Invalid year-month {value}: expected YYYYMM with month 01-12")
    return value


def _new_id() -> str:
    return uuid4().hex


# =============================================================================
# ENUMS
# =============================================================================

class ExpenseCategory(str, Enum):
    """
    Fixed expense categories.

    Orthogonal to areas: every expense has exactly one category,
    and may additionally fall into one area by keyword.
    """
    EVERYDAY = "everyday"
    SPECIAL = "special"


class Recurrence(str, Enum):
    """How often a fixed cost falls due."""
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"
    ONCE = "once"


# =============================================================================
# AREA
# =============================================================================

class Area(BaseModel):
    """
    A user-defined budget bucket.

    A record belongs to an area when its normalized text contains one of
    the area's normalized keywords. When several areas match, the one with
    the highest priority wins.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(
        default_factory=_new_id,
        description="Unique area ID"
    )
    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Display label"
    )
    keywords: list[str] = Field(
        default_factory=list,
        description="Substring patterns matched against record text"
    )
    color: str = Field(
        default="#22c55e",
        pattern=r"^#[0-9a-fA-F]{6}$",
        description="Display color as hex code"
    )
    priority: int = Field(
        default=0,
        description="Higher priority wins when several areas match"
    )
    user_id: str = Field(
        ...,
        min_length=1,
        description="Owner of the area"
    )


# =============================================================================
# RECORDS
# =============================================================================

class Expense(BaseModel):
    """A variable transaction, matched to areas by its description."""
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(default_factory=_new_id)
    amount: Decimal = Field(
        ...,
        gt=0,
        decimal_places=2,
        description="Amount spent"
    )
    category: ExpenseCategory = Field(
        default=ExpenseCategory.EVERYDAY,
        description="Everyday spending or a special item"
    )
    description: str = Field(
        default="",
        max_length=500,
        description="Free text, matched against area keywords"
    )
    date: Date = Field(
        ...,
        description="Day the money was spent"
    )
    user_id: str = Field(..., min_length=1)

    @property
    def month(self) -> int:
        return self.date.month

    @property
    def year_month(self) -> int:
        return year_month_of(self.date)


class FixedCost(BaseModel):
    """
    A recurring or one-off monthly obligation.

    Each record belongs to exactly one calendar month (year_month).
    A recurring obligation is stored as one record per month it falls due;
    recurrence and recurrence_months describe the schedule it came from.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(default_factory=_new_id)
    name: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Name, matched against area keywords"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        decimal_places=2,
    )
    year_month: int = Field(
        ...,
        description="Month this cost belongs to, as YYYYMM"
    )
    recurrence: Recurrence = Field(default=Recurrence.MONTHLY)
    recurrence_months: Optional[list[int]] = Field(
        default=None,
        description="Explicit months (1-12) for quarterly/yearly costs"
    )
    paid_months: list[int] = Field(
        default_factory=list,
        description="Months (YYYYMM) in which payment was confirmed"
    )
    user_id: str = Field(..., min_length=1)

    @field_validator('year_month')
    @classmethod
    def validate_year_month(cls, v: int) -> int:
        return _check_year_month(v)

    @field_validator('recurrence_months')
    @classmethod
    def validate_recurrence_months(cls, v: Optional[list[int]]) -> Optional[list[int]]:
        """Months must be 1-12; duplicates are dropped, order is kept."""
        if v is None:
            return v
        for month in v:
            if not 1 <= month <= 12:
                raise ValueError(f"Recurrence month must be between 1 and 12, got {month}")
        return list(dict.fromkeys(v))

    @field_validator('paid_months')
    @classmethod
    def validate_paid_months(cls, v: list[int]) -> list[int]:
        return [_check_year_month(ym) for ym in v]

    @property
    def month(self) -> int:
        return self.year_month % 100

    @property
    def year(self) -> int:
        return self.year_month // 100

    def is_paid(self, year_month: Optional[int] = None) -> bool:
        """Whether payment was confirmed for the given month (default: own month)."""
        return (year_month or self.year_month) in self.paid_months


class Income(BaseModel):
    """Money received in one calendar month."""
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(default_factory=_new_id)
    name: str = Field(..., min_length=1, max_length=200)
    amount: Decimal = Field(..., ge=0, decimal_places=2)
    year_month: int
    user_id: str = Field(..., min_length=1)

    @field_validator('year_month')
    @classmethod
    def validate_year_month(cls, v: int) -> int:
        return _check_year_month(v)

    @property
    def month(self) -> int:
        return self.year_month % 100

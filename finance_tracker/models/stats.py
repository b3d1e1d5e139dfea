"""
Statistics Models

Output of the aggregation and balance functions. These are what the
presentation and export layers consume.

All amounts are Decimal; the per-area totals and the unassigned total
of one report always add up to the total of the input records.
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from finance_tracker.models.records import Expense, FixedCost


# =============================================================================
# MONTHLY AREA STATISTICS
# =============================================================================

class AreaStatistics(BaseModel):
    """Totals for one area in one month, with the matched records for drill-down."""

    area_id: str
    area_name: str
    color: str
    total_amount: Decimal = Field(
        default=Decimal("0"),
        description="Matched expenses plus matched fixed costs"
    )
    expense_count: int = Field(
        default=0,
        ge=0,
        description="Number of matched expenses plus matched fixed costs"
    )
    expenses: list[Expense] = Field(default_factory=list)
    fixed_costs: list[FixedCost] = Field(default_factory=list)


class UnassignedStatistics(BaseModel):
    """Records that matched no area."""

    total_amount: Decimal = Decimal("0")
    expense_count: int = Field(default=0, ge=0)
    expenses: list[Expense] = Field(default_factory=list)
    fixed_costs: list[FixedCost] = Field(default_factory=list)


class MonthlyAreaStats(BaseModel):
    """
    Area breakdown for one month.

    Contains one entry per area in the order the areas were given,
    including areas nothing matched.
    """

    year_month: int
    areas: list[AreaStatistics] = Field(default_factory=list)
    unassigned: UnassignedStatistics = Field(default_factory=UnassignedStatistics)

    @property
    def assigned_amount(self) -> Decimal:
        return sum((area.total_amount for area in self.areas), Decimal("0"))

    @property
    def total_amount(self) -> Decimal:
        """Everything in the month, assigned or not."""
        return self.assigned_amount + self.unassigned.total_amount


# =============================================================================
# YEARLY AREA STATISTICS
# =============================================================================

class MonthlyAmount(BaseModel):
    """One point of a 12-month series."""

    month: int = Field(..., ge=1, le=12)
    amount: Decimal = Decimal("0")


class YearlyAreaStatistics(BaseModel):
    """Month-by-month totals for one area over a year."""

    area_id: str
    area_name: str
    color: str
    monthly_totals: list[MonthlyAmount] = Field(
        default_factory=list,
        description="Exactly 12 entries, months 1-12"
    )
    year_total: Decimal = Decimal("0")


class YearlyAreaStats(BaseModel):
    """Area breakdown for a whole year."""

    year: int
    areas: list[YearlyAreaStatistics] = Field(default_factory=list)
    unassigned_total: Decimal = Decimal("0")

    @property
    def total_amount(self) -> Decimal:
        assigned = sum((area.year_total for area in self.areas), Decimal("0"))
        return assigned + self.unassigned_total


# =============================================================================
# BALANCES
# =============================================================================

class MonthBalance(BaseModel):
    """Income against spending for one month."""

    year_month: int
    total_income: Decimal = Decimal("0")
    total_fixed_costs: Decimal = Decimal("0")
    total_expenses: Decimal = Decimal("0")
    balance: Decimal = Decimal("0")
    trend: Decimal = Field(
        default=Decimal("0"),
        description="Projected balance at month end"
    )


class YearBalance(BaseModel):
    """
    Income against spending for one year.

    Fixed costs and income only count for months that have expenses,
    so a year in progress is not charged for months still to come.
    """

    year: int
    total_income: Decimal = Decimal("0")
    total_expenses: Decimal = Decimal("0")
    balance: Decimal = Decimal("0")
    monthly_balances: list[MonthBalance] = Field(default_factory=list)

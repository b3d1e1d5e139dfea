"""
Month and Year Balances

Income minus fixed costs minus variable expenses, plus a projection of
where the current month will end if spending continues at the weekly
allowance.
"""

import calendar
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, Sequence

from finance_tracker.config import get_settings
from finance_tracker.models.records import (
    Expense,
    ExpenseCategory,
    FixedCost,
    Income,
    split_year_month,
    to_year_month,
    year_month_of,
)
from finance_tracker.models.stats import MonthBalance, YearBalance

ZERO = Decimal("0")
CENT = Decimal("0.01")


def _total(records: Iterable) -> Decimal:
    return sum((record.amount for record in records), ZERO)


def _remaining_days(year_month: int, today: Optional[date]) -> int:
    """Days left after today, if today falls in the month; otherwise none."""
    if today is None or year_month_of(today) != year_month:
        return 0
    year, month = split_year_month(year_month)
    return calendar.monthrange(year, month)[1] - today.day


def month_balance(
    expenses: Sequence[Expense],
    fixed_costs: Sequence[FixedCost],
    incomes: Sequence[Income],
    year_month: int,
    today: Optional[date] = None,
    weekly_allowance: Optional[Decimal] = None,
) -> MonthBalance:
    """
    Balance for one month.

    Fixed costs and incomes are filtered to the month by year_month.
    Expenses are taken as given (they come from a month query).

    The trend is the projected balance at month end: when today lies in
    the month, each remaining day is charged at weekly_allowance / 7.
    For past and future months the trend equals the balance.
    """
    if weekly_allowance is None:
        weekly_allowance = get_settings().tracker.weekly_expense_allowance

    total_income = _total(i for i in incomes if i.year_month == year_month)
    total_fixed = _total(c for c in fixed_costs if c.year_month == year_month)
    total_expenses = _total(expenses)
    balance = total_income - total_fixed - total_expenses

    projected = (weekly_allowance / 7) * _remaining_days(year_month, today)
    trend = (balance - projected).quantize(CENT, rounding=ROUND_HALF_UP)

    return MonthBalance(
        year_month=year_month,
        total_income=total_income,
        total_fixed_costs=total_fixed,
        total_expenses=total_expenses,
        balance=balance,
        trend=trend,
    )


def year_balance(
    expenses: Sequence[Expense],
    fixed_costs: Sequence[FixedCost],
    incomes: Sequence[Income],
    year: int,
) -> YearBalance:
    """
    Balance for a year.

    Only months with at least one expense count towards the year totals:
    fixed costs and income of months without expenses are left out, so an
    unfinished year is not charged for months that have not happened yet.
    total_expenses includes the counted fixed costs.

    monthly_balances has one entry per month 1-12 regardless.
    """
    year_expenses = [e for e in expenses if e.date.year == year]
    active_months = {e.month for e in year_expenses}

    monthly_balances = []
    total_income = ZERO
    total_fixed = ZERO
    for month in range(1, 13):
        ym = to_year_month(year, month)
        balance = month_balance(
            [e for e in year_expenses if e.month == month],
            fixed_costs,
            incomes,
            ym,
            weekly_allowance=ZERO,
        )
        monthly_balances.append(balance)
        if month in active_months:
            total_income += balance.total_income
            total_fixed += balance.total_fixed_costs

    total_expenses = _total(year_expenses) + total_fixed
    return YearBalance(
        year=year,
        total_income=total_income,
        total_expenses=total_expenses,
        balance=total_income - total_expenses,
        monthly_balances=monthly_balances,
    )


def category_totals(expenses: Iterable[Expense]) -> dict[ExpenseCategory, Decimal]:
    """Sum of expenses per category; both categories are always present."""
    totals = {category: ZERO for category in ExpenseCategory}
    for expense in expenses:
        totals[expense.category] += expense.amount
    return totals


def outstanding_fixed_costs(
    fixed_costs: Iterable[FixedCost],
    year_month: int,
) -> list[FixedCost]:
    """Fixed costs of the month whose payment has not been confirmed."""
    return [
        cost for cost in fixed_costs
        if cost.year_month == year_month and not cost.is_paid(year_month)
    ]


def toggle_paid(fixed_cost: FixedCost, year_month: Optional[int] = None) -> FixedCost:
    """
    Flip the paid state of a fixed cost for one month.

    Defaults to the cost's own month. Returns a validated copy; the
    given cost is left untouched.

    Raises:
        ValidationError: If year_month is not a valid YYYYMM
    """
    year_month = year_month or fixed_cost.year_month
    if fixed_cost.is_paid(year_month):
        paid_months = [ym for ym in fixed_cost.paid_months if ym != year_month]
    else:
        paid_months = [*fixed_cost.paid_months, year_month]
    return FixedCost.model_validate({**fixed_cost.model_dump(), "paid_months": paid_months})

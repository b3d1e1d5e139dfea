"""
Area Aggregation

Turns expenses and fixed costs into per-area totals, for a single month
or month-by-month across a year.

GUARANTEES:
- Every input area appears in the result, in input order, even at zero
- Per-area totals plus the unassigned total equal the total of all
  input amounts, exactly (Decimal arithmetic, no rounding)
- Pure: no I/O, no state kept between calls
"""

from decimal import Decimal
from typing import Iterable, Sequence

from finance_tracker.matching.grouper import group_by_area
from finance_tracker.matching.matcher import (
    compile_areas,
    expense_text,
    fixed_cost_text,
    match_compiled,
)
from finance_tracker.models.records import Area, Expense, FixedCost
from finance_tracker.models.stats import (
    AreaStatistics,
    MonthlyAmount,
    MonthlyAreaStats,
    UnassignedStatistics,
    YearlyAreaStatistics,
    YearlyAreaStats,
)

ZERO = Decimal("0")
MONTHS = range(1, 13)


def _total(records: Iterable) -> Decimal:
    return sum((record.amount for record in records), ZERO)


def monthly_area_stats(
    expenses: Sequence[Expense],
    areas: Sequence[Area],
    year_month: int,
    fixed_costs: Sequence[FixedCost] = (),
) -> MonthlyAreaStats:
    """
    Area breakdown for one month.

    Expenses are matched by description and fixed costs by name, against
    the same areas. The collections are expected to be scoped to the month
    already; they are not filtered again here.

    Args:
        expenses: The month's expenses
        areas: Areas to break down by
        year_month: Month the collections belong to, as YYYYMM
        fixed_costs: The month's fixed costs

    Returns:
        MonthlyAreaStats with one AreaStatistics per area and the
        unassigned remainder
    """
    expense_groups = group_by_area(expenses, areas, expense_text)
    cost_groups = group_by_area(fixed_costs, areas, fixed_cost_text)

    area_stats = []
    for area in areas:
        area_expenses = expense_groups.by_area[area.id]
        area_costs = cost_groups.by_area[area.id]
        area_stats.append(AreaStatistics(
            area_id=area.id,
            area_name=area.name,
            color=area.color,
            total_amount=_total(area_expenses) + _total(area_costs),
            expense_count=len(area_expenses) + len(area_costs),
            expenses=area_expenses,
            fixed_costs=area_costs,
        ))

    unassigned = UnassignedStatistics(
        total_amount=_total(expense_groups.unassigned) + _total(cost_groups.unassigned),
        expense_count=len(expense_groups.unassigned) + len(cost_groups.unassigned),
        expenses=expense_groups.unassigned,
        fixed_costs=cost_groups.unassigned,
    )

    return MonthlyAreaStats(
        year_month=year_month,
        areas=area_stats,
        unassigned=unassigned,
    )


def yearly_area_stats(
    expenses: Sequence[Expense],
    areas: Sequence[Area],
    year: int,
    fixed_costs: Sequence[FixedCost] = (),
) -> YearlyAreaStats:
    """
    Month-by-month area totals for a year.

    Expenses are placed in the month of their date, fixed costs in the
    month of their year_month. The collections are expected to be scoped
    to the year already; records are not filtered by year here.

    Args:
        expenses: The year's expenses
        areas: Areas to break down by
        year: The year the collections belong to
        fixed_costs: The year's fixed costs

    Returns:
        YearlyAreaStats with a 12-month series per area and the
        unassigned total for the year
    """
    compiled = compile_areas(areas)
    # area id -> month -> amount
    totals: dict[str, dict[int, Decimal]] = {
        area.id: {month: ZERO for month in MONTHS} for area in areas
    }
    unassigned_total = ZERO

    matchable = [
        (expense.month, expense_text(expense), expense.amount) for expense in expenses
    ] + [
        (cost.month, fixed_cost_text(cost), cost.amount) for cost in fixed_costs
    ]

    for month, text, amount in matchable:
        area = match_compiled(text, compiled)
        if area is None:
            unassigned_total += amount
        else:
            totals[area.id][month] += amount

    area_stats = []
    for area in areas:
        by_month = totals[area.id]
        area_stats.append(YearlyAreaStatistics(
            area_id=area.id,
            area_name=area.name,
            color=area.color,
            monthly_totals=[
                MonthlyAmount(month=month, amount=by_month[month]) for month in MONTHS
            ],
            year_total=sum(by_month.values(), ZERO),
        ))

    return YearlyAreaStats(
        year=year,
        areas=area_stats,
        unassigned_total=unassigned_total,
    )

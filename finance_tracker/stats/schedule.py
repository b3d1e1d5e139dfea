"""
Fixed Cost Scheduling

A fixed cost record belongs to exactly one month. A recurring obligation
(rent, insurance, a yearly subscription) is therefore stored as one record
per month it falls due. This module works out those months and builds the
records.
"""

from decimal import Decimal
from typing import Optional

from finance_tracker.config import get_settings
from finance_tracker.models.records import (
    FixedCost,
    Recurrence,
    split_year_month,
    to_year_month,
)


def _add_months(year_month: int, offset: int) -> int:
    year, month = split_year_month(year_month)
    year, month_index = divmod(year * 12 + (month - 1) + offset, 12)
    return to_year_month(year, month_index + 1)


def schedule_months(
    recurrence: Recurrence,
    start_year_month: int,
    recurrence_months: Optional[list[int]] = None,
    horizon: Optional[int] = None,
) -> list[int]:
    """
    Months (YYYYMM) a fixed cost falls due in, within the horizon.

    The horizon starts at start_year_month and covers `horizon` consecutive
    months (default from settings).

    - monthly: every month
    - quarterly: the listed months, or every third month from the start
    - yearly: the listed months, or the start month
    - once: the start month only
    """
    if horizon is None:
        horizon = get_settings().tracker.schedule_horizon_months

    if recurrence == Recurrence.ONCE:
        return [start_year_month]

    window = [_add_months(start_year_month, offset) for offset in range(horizon)]

    if recurrence == Recurrence.MONTHLY:
        return window

    if recurrence_months:
        wanted = set(recurrence_months)
        return [ym for ym in window if ym % 100 in wanted]

    step = 3 if recurrence == Recurrence.QUARTERLY else 12
    return window[::step]


def expand_fixed_cost(
    name: str,
    amount: Decimal,
    user_id: str,
    start_year_month: int,
    recurrence: Recurrence = Recurrence.MONTHLY,
    recurrence_months: Optional[list[int]] = None,
    horizon: Optional[int] = None,
) -> list[FixedCost]:
    """Build one FixedCost record per month the obligation falls due in."""
    return [
        FixedCost(
            name=name,
            amount=amount,
            user_id=user_id,
            year_month=year_month,
            recurrence=recurrence,
            recurrence_months=recurrence_months,
        )
        for year_month in schedule_months(
            recurrence, start_year_month, recurrence_months, horizon
        )
    ]

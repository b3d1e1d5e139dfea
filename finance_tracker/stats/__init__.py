"""Aggregation, balance and scheduling package."""

from finance_tracker.stats.aggregator import monthly_area_stats, yearly_area_stats
from finance_tracker.stats.balance import (
    category_totals,
    month_balance,
    outstanding_fixed_costs,
    toggle_paid,
    year_balance,
)
from finance_tracker.stats.schedule import expand_fixed_cost, schedule_months

__all__ = [
    "category_totals",
    "expand_fixed_cost",
    "month_balance",
    "monthly_area_stats",
    "outstanding_fixed_costs",
    "schedule_months",
    "toggle_paid",
    "year_balance",
    "yearly_area_stats",
]

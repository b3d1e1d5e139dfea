"""Fixed cost editing package."""

from finance_tracker.records.service import FixedCostService

__all__ = ["FixedCostService"]

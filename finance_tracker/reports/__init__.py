"""Report generation package."""

from finance_tracker.reports.service import AreaReportService

__all__ = ["AreaReportService"]

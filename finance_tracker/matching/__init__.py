"""Keyword matching package."""

from finance_tracker.matching.grouper import AreaGrouping, group_by_area
from finance_tracker.matching.matcher import (
    CompiledArea,
    compile_areas,
    expense_text,
    fixed_cost_text,
    match_compiled,
    match_record,
    match_to_area,
)
from finance_tracker.matching.normalizer import normalize

__all__ = [
    "AreaGrouping",
    "CompiledArea",
    "compile_areas",
    "expense_text",
    "fixed_cost_text",
    "group_by_area",
    "match_compiled",
    "match_record",
    "match_to_area",
    "normalize",
]

"""Area management package."""

from finance_tracker.areas.service import (
    AREA_COLORS,
    AreaError,
    AreaService,
    AreaValidationError,
    DuplicateKeywordError,
    next_area_color,
)

__all__ = [
    "AREA_COLORS",
    "AreaError",
    "AreaService",
    "AreaValidationError",
    "DuplicateKeywordError",
    "next_area_color",
]

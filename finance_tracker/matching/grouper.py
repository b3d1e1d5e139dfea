"""
Area Grouper

Partitions records into one bucket per area plus an unassigned bucket.
"""

from typing import Iterable, NamedTuple, Sequence

from finance_tracker.matching.matcher import (
    RecordT,
    TextOf,
    compile_areas,
    match_compiled,
)
from finance_tracker.models.records import Area


class AreaGrouping(NamedTuple):
    """
    Result of group_by_area.

    by_area holds an entry for every area, in the order the areas were
    given, even when nothing matched it. Records keep their input order
    inside each bucket.
    """
    by_area: dict[str, list]
    unassigned: list


def group_by_area(
    records: Iterable[RecordT],
    areas: Sequence[Area],
    text_of: TextOf,
) -> AreaGrouping:
    """
    Assign each record to its matching area, or to unassigned.

    Args:
        records: Expenses, fixed costs or anything text_of understands
        areas: Areas to match against
        text_of: Extracts the matchable text from a record

    Returns:
        AreaGrouping with one bucket per area and the unassigned records
    """
    compiled = compile_areas(areas)
    by_area: dict[str, list[RecordT]] = {area.id: [] for area in areas}
    unassigned: list[RecordT] = []

    for record in records:
        area = match_compiled(text_of(record), compiled)
        if area is None:
            unassigned.append(record)
        else:
            by_area[area.id].append(record)

    return AreaGrouping(by_area=by_area, unassigned=unassigned)

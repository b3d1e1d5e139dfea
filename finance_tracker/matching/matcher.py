"""
Keyword Matcher

Assigns a piece of record text to at most one area.

Matching rules:
1. Case-insensitive
2. Accent-insensitive (Café = Cafe = café)
3. Substring match ("rewe" matches "REWE City Berlin")
4. Several matching areas: highest priority wins,
   on equal priority the area given first wins
5. No match: None

Keywords that are empty or only whitespace after normalization never
match, e.g. a lone combining accent.
"""

from typing import Callable, Iterable, NamedTuple, Optional, Sequence, TypeVar

from finance_tracker.matching.normalizer import normalize
from finance_tracker.models.records import Area, Expense, FixedCost

RecordT = TypeVar("RecordT")

TextOf = Callable[[RecordT], str]


class CompiledArea(NamedTuple):
    """An area with its keywords normalized once, ready for repeated matching."""
    area: Area
    keywords: tuple[str, ...]


def compile_areas(areas: Iterable[Area]) -> list[CompiledArea]:
    """Pre-normalize keywords. Keywords that normalize to blank are dropped."""
    compiled = []
    for area in areas:
        normalized = (normalize(k) for k in area.keywords)
        compiled.append(CompiledArea(
            area=area,
            keywords=tuple(k for k in normalized if k.strip()),
        ))
    return compiled


def match_compiled(text: str, compiled: Sequence[CompiledArea]) -> Optional[Area]:
    """Match against areas already passed through compile_areas."""
    normalized = normalize(text)

    best: Optional[Area] = None
    for candidate in compiled:
        if not any(keyword in normalized for keyword in candidate.keywords):
            continue
        # strict '>' keeps the earliest area on equal priority
        if best is None or candidate.area.priority > best.priority:
            best = candidate.area
    return best


def match_to_area(text: str, areas: Sequence[Area]) -> Optional[Area]:
    """
    Return the area that text belongs to, or None.

    Args:
        text: Record text, e.g. an expense description
        areas: Candidate areas; their order decides ties

    Returns:
        The highest-priority matching area, None if nothing matched
    """
    return match_compiled(text, compile_areas(areas))


def match_record(
    record: RecordT,
    areas: Sequence[Area],
    text_of: TextOf,
) -> Optional[Area]:
    """Match any record type, given a function that extracts its text."""
    return match_to_area(text_of(record), areas)


def expense_text(expense: Expense) -> str:
    """Expenses match on their description."""
    return expense.description


def fixed_cost_text(fixed_cost: FixedCost) -> str:
    """Fixed costs match on their name."""
    return fixed_cost.name

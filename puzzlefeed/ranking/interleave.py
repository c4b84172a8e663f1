"""Round-robin reordering of selected puzzles."""

from typing import Dict, Iterable, List, Optional, Sequence, TypeVar

from ..models import KNOWN_CATEGORIES, Puzzle

T = TypeVar("T")


def round_robin(groups: Sequence[Sequence[T]]) -> List[T]:
    """Take index 0 of every group in order, then index 1, and so on."""
    result: List[T] = []
    longest = max((len(group) for group in groups), default=0)

    for i in range(longest):
        for group in groups:
            if i < len(group):
                result.append(group[i])

    return result


def interleave_by_type(
    puzzles: Iterable[Puzzle],
    category_order: Optional[Sequence[str]] = None,
) -> List[Puzzle]:
    """
    Reorder puzzles so consecutive items rarely share a category.

    Puzzles are bucketed by type, keeping each bucket's order, and emitted
    round-robin. Buckets follow ``category_order`` (the catalog order by
    default); types not listed there come after, alphabetically.

    Args:
        puzzles: Already selected puzzles
        category_order: Category rotation order

    Returns:
        The same puzzles in interleaved order
    """
    by_type: Dict[str, List[Puzzle]] = {}
    for puzzle in puzzles:
        by_type.setdefault(puzzle.type, []).append(puzzle)

    order = list(dict.fromkeys(category_order or KNOWN_CATEGORIES))
    listed = [category for category in order if category in by_type]
    unlisted = sorted(category for category in by_type if category not in order)

    return round_robin([by_type[category] for category in listed + unlisted])

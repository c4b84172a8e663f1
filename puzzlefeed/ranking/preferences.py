"""Summaries of a user's favourite category and difficulty."""

import random
from typing import Dict, Mapping, Optional

from ..models import DIFFICULTY_LEVELS, KNOWN_CATEGORIES, CategoryStats

DEFAULT_FAVORITE_CATEGORY = "quickMath"


def _completions(stats: CategoryStats) -> int:
    return sum(bucket.completed for bucket in stats.buckets())


def favorite_category(
    stats_by_category: Optional[Mapping[str, CategoryStats]],
    rng: Optional[random.Random] = None,
) -> str:
    """
    Category with the most completions across all difficulties.

    With no history a random known category is returned. Ties keep the first
    category seen; if nothing was ever completed the default category wins.
    """
    if not stats_by_category:
        return (rng or random).choice(KNOWN_CATEGORIES)

    max_completions = 0
    favorite = DEFAULT_FAVORITE_CATEGORY
    for category, stats in stats_by_category.items():
        completions = _completions(stats)
        if completions > max_completions:
            max_completions = completions
            favorite = category

    return favorite


def preferred_difficulty(stats_by_category: Optional[Mapping[str, CategoryStats]]) -> int:
    """Difficulty level (1-3) with the most completions; ties go to the easier level."""
    if not stats_by_category:
        return 1

    totals: Dict[str, int] = {key: 0 for key in DIFFICULTY_LEVELS}
    for stats in stats_by_category.values():
        for key in DIFFICULTY_LEVELS:
            bucket = getattr(stats, key)
            if bucket is not None:
                totals[key] += bucket.completed

    max_completions = 0
    preferred = 1
    for key, level in DIFFICULTY_LEVELS.items():
        if totals[key] > max_completions:
            max_completions = totals[key]
            preferred = level

    return preferred

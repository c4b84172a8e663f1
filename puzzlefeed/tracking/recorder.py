"""Gameplay event recording over user profiles."""

import math
from datetime import datetime, timezone
from typing import Callable, Optional, Tuple

import pendulum

from ..models import (
    DIFFICULTY_KEYS,
    DIFFICULTY_LEVELS,
    KNOWN_CATEGORIES,
    CategoryStats,
    DifficultyStats,
    UserProfile,
)

_CATEGORIES_BY_LOWER = {category.lower(): category for category in KNOWN_CATEGORIES}


def parse_puzzle_id(puzzle_id: str) -> Tuple[Optional[str], Optional[int]]:
    """
    Extract category and difficulty from ``<category>_<difficulty>_<n>`` IDs.

    Category matching is case-insensitive against the known categories.

    Returns:
        (category, difficulty level) with None for parts that don't match
    """
    parts = puzzle_id.split("_")
    if len(parts) < 3:
        return None, None

    category = _CATEGORIES_BY_LOWER.get(parts[0].lower())
    difficulty = DIFFICULTY_LEVELS.get(parts[1].lower())
    return category, difficulty


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _rolling_average(average: int, count: int, value: float) -> int:
    """Average after adding ``value`` as the ``count + 1``-th sample."""
    return _round_half_up((average * count + value) / (count + 1))


class GameplayRecorder:
    """Apply attempt, completion and skip events to user profiles.

    Every method returns an updated copy; the given profile is left alone.
    Counters only ever increase.
    """

    def __init__(self, now: Optional[Callable[[], datetime]] = None) -> None:
        """
        Initialize recorder.

        Args:
            now: Clock returning the current time (UTC now by default)
        """
        self._now = now or (lambda: pendulum.now("UTC"))

    def _prepare(
        self,
        profile: UserProfile,
        category: Optional[str],
        difficulty: Optional[int],
    ) -> Tuple[UserProfile, Optional[CategoryStats], Optional[DifficultyStats]]:
        updated = profile.model_copy(deep=True)
        if category is None:
            return updated, None, None

        if updated.stats_by_category is None:
            updated.stats_by_category = {}
        stats = updated.stats_by_category.setdefault(category, CategoryStats())

        bucket = None
        if difficulty in DIFFICULTY_KEYS:
            key = DIFFICULTY_KEYS[difficulty]
            bucket = getattr(stats, key)
            if bucket is None:
                bucket = DifficultyStats()
                setattr(stats, key, bucket)

        return updated, stats, bucket

    def _next_streak(self, profile: UserProfile, now: datetime) -> int:
        if profile.last_played_at is None:
            return 1

        last_day = profile.last_played_at.astimezone(timezone.utc).date()
        days_apart = now.astimezone(timezone.utc).date().toordinal() - last_day.toordinal()

        if days_apart == 0:
            return profile.streak_count or 1
        if days_apart == 1:
            return profile.streak_count + 1
        return 1

    def record_attempt(
        self,
        profile: UserProfile,
        category: Optional[str],
        difficulty: Optional[int],
    ) -> UserProfile:
        """Count a started puzzle."""
        updated, stats, bucket = self._prepare(profile, category, difficulty)
        if stats is not None:
            stats.attempted += 1
        if bucket is not None:
            bucket.attempted += 1
        return updated

    def record_completion(
        self,
        profile: UserProfile,
        puzzle_id: str,
        category: Optional[str],
        difficulty: Optional[int],
        time_taken: float = 0,
    ) -> UserProfile:
        """
        Count a finished puzzle.

        Args:
            profile: Current profile
            puzzle_id: Finished puzzle
            category: Puzzle category (None if unknown)
            difficulty: Puzzle difficulty level (None if unknown)
            time_taken: Seconds spent

        Returns:
            Updated profile
        """
        now = self._now()
        updated, stats, bucket = self._prepare(profile, category, difficulty)

        if stats is not None:
            stats.avg_time = _rolling_average(stats.avg_time, stats.completed, time_taken)
            stats.completed += 1
            stats.attempted = max(stats.attempted, stats.completed)
        if bucket is not None:
            bucket.avg_time = _rolling_average(bucket.avg_time, bucket.completed, time_taken)
            bucket.completed += 1
            bucket.attempted = max(bucket.attempted, bucket.completed)

        updated.streak_count = self._next_streak(profile, now)
        updated.total_games_played += 1
        updated.total_play_time += _round_half_up(time_taken)
        updated.average_time_per_game = _round_half_up(
            updated.total_play_time / updated.total_games_played
        )
        updated.last_played_at = now

        if puzzle_id not in updated.completed_games:
            updated.completed_games.append(puzzle_id)

        return updated

    def record_skip(
        self,
        profile: UserProfile,
        puzzle_id: str,
        category: Optional[str],
        difficulty: Optional[int],
    ) -> UserProfile:
        """Count a skipped puzzle."""
        updated, stats, bucket = self._prepare(profile, category, difficulty)
        if stats is not None:
            stats.skipped += 1
        if bucket is not None:
            bucket.skipped += 1

        if puzzle_id not in updated.skipped_games:
            updated.skipped_games.append(puzzle_id)

        return updated

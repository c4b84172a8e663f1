"""User profile and gameplay statistics models."""

from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional

from pydantic import Field, field_validator

from .base import DocumentModel, parse_timestamp
from .puzzle import DIFFICULTY_KEYS


class DifficultyStats(DocumentModel):
    """Counters for one category at one difficulty."""

    attempted: int = Field(0, ge=0)
    completed: int = Field(0, ge=0)
    skipped: int = Field(0, ge=0)
    avg_time: int = Field(0, ge=0, description="Average completion time in seconds")


class CategoryStats(DocumentModel):
    """Aggregated counters for one puzzle category."""

    attempted: int = Field(0, ge=0)
    skipped: int = Field(0, ge=0)
    completed: int = Field(0, ge=0)
    avg_time: int = Field(0, ge=0, description="Average completion time in seconds")
    easy: Optional[DifficultyStats] = None
    medium: Optional[DifficultyStats] = None
    hard: Optional[DifficultyStats] = None

    def for_difficulty(self, difficulty: int) -> Optional[DifficultyStats]:
        """Get the bucket for a difficulty level (1-3), if recorded."""
        key = DIFFICULTY_KEYS.get(difficulty)
        if key is None:
            return None
        return getattr(self, key)

    def buckets(self) -> Iterator[DifficultyStats]:
        """Iterate over the difficulty buckets that are present."""
        for key in DIFFICULTY_KEYS.values():
            bucket = getattr(self, key)
            if bucket is not None:
                yield bucket


class UserProfile(DocumentModel):
    """Subset of the user document consumed by ranking and tracking."""

    stats_by_category: Optional[Dict[str, CategoryStats]] = Field(
        None, description="Per-category stats; None for users with no stats document"
    )
    last_played_at: Optional[datetime] = Field(None, description="Last completion time")
    completed_games: List[str] = Field(default_factory=list)
    skipped_games: List[str] = Field(default_factory=list)
    total_games_played: int = Field(0, ge=0)
    total_play_time: int = Field(0, ge=0, description="Seconds")
    average_time_per_game: int = Field(0, ge=0, description="Seconds")
    streak_count: int = Field(0, ge=0)

    @field_validator("last_played_at", mode="before")
    @classmethod
    def parse_last_played_at(cls, value: Any) -> Optional[datetime]:
        """Unparseable timestamps become None rather than failing."""
        return parse_timestamp(value)

    @property
    def is_new_user(self) -> bool:
        return self.stats_by_category is None

    def stats_for(self, category: str) -> Optional[CategoryStats]:
        if not self.stats_by_category:
            return None
        return self.stats_by_category.get(category)

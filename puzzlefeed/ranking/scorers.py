"""Individual scoring components for puzzle ranking."""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import AbstractSet, Any, Optional

import pendulum

from ..models import CategoryStats, Puzzle, UserProfile, parse_timestamp

SECONDS_PER_DAY = 60 * 60 * 24


def days_since(last_played_at: Any, now: Optional[datetime] = None) -> Optional[int]:
    """Whole days elapsed since ``last_played_at``, or None if it is unparseable."""
    last_played = parse_timestamp(last_played_at)
    if last_played is None:
        return None

    now = now or pendulum.now("UTC")
    return math.floor((now.timestamp() - last_played.timestamp()) / SECONDS_PER_DAY)


@dataclass
class ScoringContext:
    """Per-call inputs shared by every candidate."""

    profile: Optional[UserProfile] = None
    completed_ids: AbstractSet[str] = field(default_factory=frozenset)
    days_since_last_play: Optional[int] = None
    now: Optional[datetime] = None

    def stats_for(self, puzzle: Puzzle) -> Optional[CategoryStats]:
        if self.profile is None:
            return None
        return self.profile.stats_for(puzzle.type)


class BaseScorer(ABC):
    """Base class for scoring components."""

    @abstractmethod
    def score(self, puzzle: Puzzle, context: ScoringContext) -> float:
        """
        Score a puzzle for one user.

        Args:
            puzzle: Candidate puzzle
            context: User profile, completed IDs and timing for this call

        Returns:
            Component score
        """
        pass


class CategoryEngagementScorer(BaseScorer):
    """Score how positively a user engages with a puzzle's category."""

    def __init__(
        self,
        completion_weight: float = 0.6,
        non_skip_weight: float = 0.4,
        volume_divisor: float = 10.0,
        max_volume_bonus: float = 0.2,
    ) -> None:
        """
        Initialize engagement scorer.

        Args:
            completion_weight: Weight of the completion rate
            non_skip_weight: Weight of the non-skip rate
            volume_divisor: Completions needed per unit of volume bonus
            max_volume_bonus: Cap on the bonus for sustained play
        """
        self.completion_weight = completion_weight
        self.non_skip_weight = non_skip_weight
        self.volume_divisor = volume_divisor
        self.max_volume_bonus = max_volume_bonus

    def score_category(self, stats: Optional[CategoryStats]) -> float:
        """Engagement in [0, 1] from a category's per-difficulty counters."""
        if stats is None:
            return 0.0

        total_completed = 0
        total_attempted = 0
        total_skipped = 0
        for bucket in stats.buckets():
            total_completed += bucket.completed
            total_attempted += bucket.attempted
            total_skipped += bucket.skipped

        total_interactions = total_attempted + total_skipped
        if total_interactions == 0:
            return 0.0

        completion_rate = total_completed / total_attempted if total_attempted > 0 else 0.0
        skip_rate = total_skipped / total_interactions
        engagement = (
            completion_rate * self.completion_weight
            + (1 - skip_rate) * self.non_skip_weight
        )

        volume_bonus = min(total_completed / self.volume_divisor, self.max_volume_bonus)

        return min(1.0, engagement + volume_bonus)

    def score(self, puzzle: Puzzle, context: ScoringContext) -> float:
        return self.score_category(context.stats_for(puzzle) or CategoryStats())


class DifficultyPreferenceScorer(BaseScorer):
    """Score how well a puzzle's difficulty suits the user within its category."""

    def __init__(
        self,
        neutral_prior: float = 0.5,
        untried_prior: float = 0.3,
        completion_weight: float = 0.7,
        non_skip_weight: float = 0.3,
    ) -> None:
        """
        Initialize difficulty scorer.

        Args:
            neutral_prior: Score when there is no data for the category
            untried_prior: Score when the category has data but this difficulty was never attempted
            completion_weight: Weight of the completion rate
            non_skip_weight: Weight of the non-skip rate
        """
        self.neutral_prior = neutral_prior
        self.untried_prior = untried_prior
        self.completion_weight = completion_weight
        self.non_skip_weight = non_skip_weight

    def score_difficulty(self, stats: Optional[CategoryStats], difficulty: int) -> float:
        if stats is None:
            return self.neutral_prior

        bucket = stats.for_difficulty(difficulty)
        if bucket is None or bucket.attempted == 0:
            return self.untried_prior

        completion_rate = min(1.0, bucket.completed / bucket.attempted)
        skip_rate = bucket.skipped / (bucket.attempted + bucket.skipped)

        return completion_rate * self.completion_weight + (1 - skip_rate) * self.non_skip_weight

    def score(self, puzzle: Puzzle, context: ScoringContext) -> float:
        # Unseen categories are scored as empty stats, not as "no data"
        return self.score_difficulty(context.stats_for(puzzle) or CategoryStats(), puzzle.difficulty)


class TimeDecayCalculator:
    """Decay multiplier for categories the user has stopped playing.

    Heavily engaged categories decay faster once neglected; the multiplier
    never drops below ``floor``.
    """

    def __init__(
        self,
        grace_days: int = 7,
        days_per_full_rate: float = 100.0,
        max_base_decay: float = 0.8,
        floor: float = 0.2,
    ) -> None:
        self.grace_days = grace_days
        self.days_per_full_rate = days_per_full_rate
        self.max_base_decay = max_base_decay
        self.floor = floor

    def factor(
        self,
        last_played_at: Any,
        engagement: float,
        days_since_last_play: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> float:
        """
        Compute the decay multiplier.

        Args:
            last_played_at: Last play timestamp (any format the profile accepts)
            engagement: Category engagement score in [0, 1]
            days_since_last_play: Precomputed day count, overrides the timestamp age
            now: Reference time (defaults to the current UTC time)

        Returns:
            Multiplier in [floor, 1.0]
        """
        if last_played_at is None:
            return 1.0

        if days_since_last_play is None:
            days_since_last_play = days_since(last_played_at, now)
        elif parse_timestamp(last_played_at) is None:
            days_since_last_play = None

        if days_since_last_play is None or days_since_last_play < self.grace_days:
            return 1.0

        days_over_threshold = days_since_last_play - self.grace_days
        base_decay_rate = min(self.max_base_decay, days_over_threshold / self.days_per_full_rate)

        engagement_multiplier = max(0.3, min(1.2, 0.3 + engagement * 0.9))
        total_decay = base_decay_rate * engagement_multiplier

        return max(self.floor, 1.0 - total_decay)


class CompletionScorer(BaseScorer):
    """Penalize puzzles the user has already finished without excluding them."""

    def __init__(self, penalty: float = 0.3) -> None:
        self.penalty = penalty

    def score(self, puzzle: Puzzle, context: ScoringContext) -> float:
        return self.penalty if puzzle.id in context.completed_ids else 1.0


class DiversityScorer(BaseScorer):
    """Bonus for categories the user has rarely attempted."""

    def __init__(self, max_bonus: float = 0.2, plays_per_unit: float = 50.0) -> None:
        self.max_bonus = max_bonus
        self.plays_per_unit = plays_per_unit

    def score(self, puzzle: Puzzle, context: ScoringContext) -> float:
        stats = context.stats_for(puzzle)
        play_count = stats.attempted if stats else 0

        if play_count == 0:
            return self.max_bonus
        return max(0.0, self.max_bonus - play_count / self.plays_per_unit)


class ExplorationScorer(BaseScorer):
    """Bonus for categories the user skipped a few times, but not many."""

    def __init__(self, bonus: float = 0.1, max_skips: int = 5) -> None:
        self.bonus = bonus
        self.max_skips = max_skips

    def score(self, puzzle: Puzzle, context: ScoringContext) -> float:
        stats = context.stats_for(puzzle)
        skip_count = stats.skipped if stats else 0

        if 0 < skip_count < self.max_skips:
            return self.bonus
        return 0.0

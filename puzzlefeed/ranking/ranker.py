"""Puzzle ranker that combines scoring components into feed batches."""

import math
import random
from datetime import datetime
from typing import AbstractSet, Iterable, List, Optional, Sequence, Tuple

import pendulum
from rich.console import Console
from rich.table import Table

from ..config import RankingConfig
from ..models import Puzzle, UserProfile
from .interleave import interleave_by_type, round_robin
from .models import PuzzleScore, RankingResult
from .scorers import (
    CategoryEngagementScorer,
    CompletionScorer,
    DifficultyPreferenceScorer,
    DiversityScorer,
    ExplorationScorer,
    ScoringContext,
    TimeDecayCalculator,
    days_since,
)

console = Console()

DEFAULT_BATCH_SIZE = 15
DEFAULT_EXPLORATION_RATIO = 0.25
SIMPLE_EXPLORATION_RATIO = 0.33
STRATEGIES = ("scored", "hybrid", "simple")

# Shared generator used when no rng is injected
_shared_rng = random.Random()


class PuzzleScorer:
    """Score a single puzzle for a user from the individual components."""

    def __init__(self, config: Optional[RankingConfig] = None) -> None:
        self.config = config or RankingConfig()

        self.engagement_scorer = CategoryEngagementScorer()
        self.difficulty_scorer = DifficultyPreferenceScorer()
        self.decay_calculator = TimeDecayCalculator(
            grace_days=self.config.decay_grace_days,
            floor=self.config.decay_floor,
        )
        self.completion_scorer = CompletionScorer(penalty=self.config.completion_penalty)
        self.diversity_scorer = DiversityScorer()
        self.exploration_scorer = ExplorationScorer()

    def _generate_reason(self, score: PuzzleScore) -> str:
        """Generate human-readable reason for score."""
        reasons = []

        if score.category_score >= 0.8:
            reasons.append("Favourite category")
        elif score.category_score == 0:
            reasons.append("New category")

        if score.difficulty_score >= 0.8:
            reasons.append("well-matched difficulty")
        elif score.difficulty_score <= 0.3:
            reasons.append("weak difficulty match")

        if score.exploration_bonus > 0:
            reasons.append("worth another try")

        if score.time_decay < 1.0:
            reasons.append(f"decayed to {score.time_decay:.0%} after inactivity")

        if score.completion_penalty < 1.0:
            reasons.append("already completed")

        if not reasons:
            reasons.append("Balanced scoring across factors")

        return "; ".join(reasons) + f" ({score.category})"

    def explain(self, puzzle: Puzzle, context: ScoringContext) -> PuzzleScore:
        """Score a puzzle and keep the component breakdown."""
        profile = context.profile

        if profile is None or profile.is_new_user:
            # No history: slight preference for easy puzzles
            return PuzzleScore(
                puzzle_id=puzzle.id,
                category=puzzle.type,
                difficulty=puzzle.difficulty,
                total_score=0.6 if puzzle.difficulty == 1 else 0.4,
                new_user=True,
                reason=f"No play history, easy first ({puzzle.type})",
            )

        category_score = self.engagement_scorer.score(puzzle, context)
        difficulty_score = self.difficulty_scorer.score(puzzle, context)
        time_decay = self.decay_calculator.factor(
            profile.last_played_at,
            category_score,
            days_since_last_play=context.days_since_last_play,
            now=context.now,
        )
        completion_penalty = self.completion_scorer.score(puzzle, context)
        diversity_bonus = self.diversity_scorer.score(puzzle, context)
        exploration_bonus = self.exploration_scorer.score(puzzle, context)

        base_score = (
            category_score * self.config.category_weight
            + difficulty_score * self.config.difficulty_weight
            + diversity_bonus * self.config.diversity_weight
            + exploration_bonus * self.config.exploration_weight
        )

        score = PuzzleScore(
            puzzle_id=puzzle.id,
            category=puzzle.type,
            difficulty=puzzle.difficulty,
            total_score=base_score * time_decay * completion_penalty,
            category_score=category_score,
            difficulty_score=difficulty_score,
            diversity_bonus=diversity_bonus,
            exploration_bonus=exploration_bonus,
            time_decay=time_decay,
            completion_penalty=completion_penalty,
            reason="",
        )
        score.reason = self._generate_reason(score)
        return score

    def score(self, puzzle: Puzzle, context: ScoringContext) -> float:
        return self.explain(puzzle, context).total_score


class PuzzleRanker:
    """Select and order puzzle batches for a user's feed."""

    def __init__(
        self,
        config: Optional[RankingConfig] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
    ) -> None:
        """
        Initialize puzzle ranker.

        Args:
            config: Ranking configuration
            rng: Random source for shuffling (a shared generator by default)
            seed: Seed for a private generator when no rng is given; recorded in results
        """
        self.config = config or RankingConfig()
        self.seed = seed
        if rng is None:
            rng = random.Random(seed) if seed is not None else _shared_rng
        self.rng = rng
        self.scorer = PuzzleScorer(self.config)

    def build_context(
        self,
        profile: Optional[UserProfile] = None,
        completed_ids: Optional[AbstractSet[str]] = None,
        now: Optional[datetime] = None,
    ) -> ScoringContext:
        """Collect the per-call inputs, computing the days since last play once."""
        days = None
        if profile is not None and profile.last_played_at is not None:
            days = days_since(profile.last_played_at, now)

        return ScoringContext(
            profile=profile,
            completed_ids=frozenset(completed_ids or ()),
            days_since_last_play=days,
            now=now,
        )

    def _shuffled(self, items: Iterable[Puzzle]) -> List[Puzzle]:
        shuffled = list(items)
        self.rng.shuffle(shuffled)
        return shuffled

    def _score_bands(self, scored: Sequence[Tuple[Puzzle, float]]) -> List[List[Puzzle]]:
        """Split a descending run into bands; each item compares to its predecessor only."""
        bands: List[List[Puzzle]] = []
        current: List[Puzzle] = []
        last_score: Optional[float] = None

        for puzzle, score in scored:
            if last_score is None or abs(score - last_score) < self.config.band_threshold:
                current.append(puzzle)
            else:
                bands.append(current)
                current = [puzzle]
            last_score = score

        if current:
            bands.append(current)

        return bands

    def score_puzzle(
        self,
        puzzle: Puzzle,
        profile: Optional[UserProfile] = None,
        completed_ids: Optional[AbstractSet[str]] = None,
        now: Optional[datetime] = None,
    ) -> float:
        """Score one puzzle for a user."""
        return self.scorer.score(puzzle, self.build_context(profile, completed_ids, now))

    def _select_scored(
        self,
        candidates: Sequence[Puzzle],
        context: ScoringContext,
        batch_size: int,
    ) -> List[Puzzle]:
        if not candidates or batch_size <= 0:
            return []
        if len(candidates) <= batch_size:
            return self._shuffled(candidates)

        scored = [(puzzle, self.scorer.score(puzzle, context)) for puzzle in candidates]
        scored.sort(key=lambda item: item[1], reverse=True)

        top_count = min(batch_size * self.config.pool_multiplier, len(scored))
        bands = [self._shuffled(band) for band in self._score_bands(scored[:top_count])]

        return round_robin(bands)[:batch_size]

    def _select_hybrid(
        self,
        candidates: Sequence[Puzzle],
        context: ScoringContext,
        batch_size: int,
        exploration_ratio: float,
    ) -> List[Puzzle]:
        if not 0.0 <= exploration_ratio <= 1.0:
            raise ValueError(f"exploration_ratio must be between 0 and 1, got {exploration_ratio}")

        if not candidates or batch_size <= 0:
            return []
        if len(candidates) <= batch_size:
            return self._shuffled(candidates)

        personalized = self._select_scored(
            candidates, context, math.floor(batch_size * (1 - exploration_ratio))
        )
        personalized_ids = {puzzle.id for puzzle in personalized}

        play_counts = {}
        if context.profile is not None and context.profile.stats_by_category:
            play_counts = {
                category: stats.attempted
                for category, stats in context.profile.stats_by_category.items()
            }

        # Least played categories first, random order within a play count
        exploration_pool = [
            puzzle
            for puzzle in candidates
            if puzzle.id not in context.completed_ids and puzzle.id not in personalized_ids
        ]
        exploration_pool = sorted(
            self._shuffled(exploration_pool),
            key=lambda puzzle: play_counts.get(puzzle.type, 0),
        )

        exploration_count = batch_size - len(personalized)
        exploration = exploration_pool[:exploration_count]

        return self._shuffled(personalized + exploration)

    def get_scored_recommendations(
        self,
        candidates: Iterable[Puzzle],
        profile: Optional[UserProfile] = None,
        completed_ids: Optional[AbstractSet[str]] = None,
        batch_size: int = DEFAULT_BATCH_SIZE,
        now: Optional[datetime] = None,
    ) -> List[Puzzle]:
        """
        Select a batch by score, shuffling within bands of similar scores.

        Args:
            candidates: Puzzles to choose from
            profile: User profile (None for anonymous users)
            completed_ids: Puzzle IDs the user already finished
            batch_size: Maximum puzzles to return
            now: Reference time for decay

        Returns:
            Up to ``batch_size`` distinct candidates, best first with local shuffling
        """
        context = self.build_context(profile, completed_ids, now)
        return self._select_scored(list(candidates), context, batch_size)

    def get_hybrid_recommendations(
        self,
        candidates: Iterable[Puzzle],
        profile: Optional[UserProfile] = None,
        completed_ids: Optional[AbstractSet[str]] = None,
        batch_size: int = DEFAULT_BATCH_SIZE,
        exploration_ratio: float = DEFAULT_EXPLORATION_RATIO,
        now: Optional[datetime] = None,
    ) -> List[Puzzle]:
        """Mix personalized picks with unplayed puzzles from under-played categories."""
        context = self.build_context(profile, completed_ids, now)
        return self._select_hybrid(list(candidates), context, batch_size, exploration_ratio)

    def get_simple_recommendations(
        self,
        candidates: Iterable[Puzzle],
        profile: Optional[UserProfile] = None,
        batch_size: int = DEFAULT_BATCH_SIZE,
        now: Optional[datetime] = None,
    ) -> List[Puzzle]:
        """Default feed entry point: hybrid selection with a third of the batch exploring."""
        return self.get_hybrid_recommendations(
            candidates,
            profile,
            completed_ids=set(),
            batch_size=batch_size,
            exploration_ratio=SIMPLE_EXPLORATION_RATIO,
            now=now,
        )

    def rank(
        self,
        candidates: Iterable[Puzzle],
        profile: Optional[UserProfile] = None,
        completed_ids: Optional[AbstractSet[str]] = None,
        batch_size: int = DEFAULT_BATCH_SIZE,
        strategy: str = "hybrid",
        exploration_ratio: float = DEFAULT_EXPLORATION_RATIO,
        interleave: bool = False,
        category_order: Optional[Sequence[str]] = None,
        now: Optional[datetime] = None,
    ) -> RankingResult:
        """
        Select a batch and keep the score breakdown of every selected puzzle.

        Args:
            candidates: Puzzles to choose from
            profile: User profile (None for anonymous users)
            completed_ids: Puzzle IDs the user already finished
            batch_size: Maximum puzzles to return
            strategy: One of ``scored``, ``hybrid`` or ``simple``
            exploration_ratio: Exploration share for the hybrid strategy
            interleave: Reorder the batch round-robin by category
            category_order: Rotation order used when interleaving
            now: Reference time for decay

        Returns:
            Ranking result
        """
        if strategy not in STRATEGIES:
            raise ValueError(f"Unknown strategy '{strategy}', expected one of {', '.join(STRATEGIES)}")

        candidates = list(candidates)
        if strategy == "simple":
            completed_ids = set()
            exploration_ratio = SIMPLE_EXPLORATION_RATIO

        context = self.build_context(profile, completed_ids, now)
        if strategy == "scored":
            selected = self._select_scored(candidates, context, batch_size)
        else:
            selected = self._select_hybrid(candidates, context, batch_size, exploration_ratio)

        if interleave:
            selected = interleave_by_type(selected, category_order)

        return RankingResult(
            strategy=strategy,
            total_candidates=len(candidates),
            selected=selected,
            scores={puzzle.id: self.scorer.explain(puzzle, context) for puzzle in selected},
            ranking_timestamp=pendulum.now("UTC"),
            config_used=self.config.model_dump(),
            seed=self.seed,
        )


def get_scored_recommendations(
    candidates: Iterable[Puzzle],
    profile: Optional[UserProfile] = None,
    completed_ids: Optional[AbstractSet[str]] = None,
    batch_size: int = DEFAULT_BATCH_SIZE,
    rng: Optional[random.Random] = None,
) -> List[Puzzle]:
    """Scored batch selection with the default configuration."""
    return PuzzleRanker(rng=rng).get_scored_recommendations(
        candidates, profile, completed_ids, batch_size
    )


def get_hybrid_recommendations(
    candidates: Iterable[Puzzle],
    profile: Optional[UserProfile] = None,
    completed_ids: Optional[AbstractSet[str]] = None,
    batch_size: int = DEFAULT_BATCH_SIZE,
    exploration_ratio: float = DEFAULT_EXPLORATION_RATIO,
    rng: Optional[random.Random] = None,
) -> List[Puzzle]:
    """Hybrid batch selection with the default configuration."""
    return PuzzleRanker(rng=rng).get_hybrid_recommendations(
        candidates, profile, completed_ids, batch_size, exploration_ratio
    )


def get_simple_recommendations(
    candidates: Iterable[Puzzle],
    profile: Optional[UserProfile] = None,
    batch_size: int = DEFAULT_BATCH_SIZE,
    rng: Optional[random.Random] = None,
) -> List[Puzzle]:
    """Default feed selection (hybrid, 33% exploration, no completion history)."""
    return PuzzleRanker(rng=rng).get_simple_recommendations(candidates, profile, batch_size)


def print_ranking_summary(result: RankingResult, limit: int = 20) -> None:
    """Print ranking summary."""
    console.print(f"\n[bold]Ranking Summary:[/bold]")
    console.print(f"  Strategy: {result.strategy}")
    console.print(f"  Total candidates: {result.total_candidates}")
    console.print(f"  Selected puzzles: {len(result.selected)}")
    if result.seed is not None:
        console.print(f"  Seed: {result.seed}")

    if not result.selected:
        return

    table = Table(title="Feed")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Puzzle", style="cyan")
    table.add_column("Category", style="magenta")
    table.add_column("Diff", justify="center")
    table.add_column("Score", style="green", justify="right")
    table.add_column("C/D/Div/Exp", style="dim")
    table.add_column("Decay", justify="right")
    table.add_column("Reason", style="yellow")

    for i, puzzle in enumerate(result.selected[:limit], 1):
        score = result.scores.get(puzzle.id)
        if score is None:
            continue
        table.add_row(
            str(i),
            puzzle.title or puzzle.id,
            puzzle.type,
            str(puzzle.difficulty),
            f"{score.total_score:.3f}",
            f"{score.category_score:.2f}/{score.difficulty_score:.2f}/"
            f"{score.diversity_bonus:.2f}/{score.exploration_bonus:.2f}",
            f"{score.time_decay:.2f}",
            score.reason,
        )

    console.print(table)

"""Puzzle ranking and scoring."""

from .interleave import interleave_by_type, round_robin
from .models import PuzzleScore, RankingResult
from .preferences import favorite_category, preferred_difficulty
from .ranker import (
    PuzzleRanker,
    PuzzleScorer,
    get_hybrid_recommendations,
    get_scored_recommendations,
    get_simple_recommendations,
    print_ranking_summary,
)
from .scorers import (
    CategoryEngagementScorer,
    CompletionScorer,
    DifficultyPreferenceScorer,
    DiversityScorer,
    ExplorationScorer,
    ScoringContext,
    TimeDecayCalculator,
)

__all__ = [
    "CategoryEngagementScorer",
    "CompletionScorer",
    "DifficultyPreferenceScorer",
    "DiversityScorer",
    "ExplorationScorer",
    "PuzzleRanker",
    "PuzzleScore",
    "PuzzleScorer",
    "RankingResult",
    "ScoringContext",
    "TimeDecayCalculator",
    "favorite_category",
    "get_hybrid_recommendations",
    "get_scored_recommendations",
    "get_simple_recommendations",
    "interleave_by_type",
    "preferred_difficulty",
    "print_ranking_summary",
    "round_robin",
]

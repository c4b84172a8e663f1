"""Ranking models."""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from ..models import Puzzle


class PuzzleScore(BaseModel):
    """Individual puzzle score with breakdown."""

    puzzle_id: str = Field(..., description="Puzzle ID")
    category: str = Field(..., description="Puzzle category")
    difficulty: int = Field(..., description="Puzzle difficulty (1-3)")
    total_score: float = Field(..., description="Final score used for ordering", ge=0.0)
    category_score: float = Field(0.0, description="Category engagement", ge=0.0, le=1.0)
    difficulty_score: float = Field(0.0, description="Difficulty preference", ge=0.0, le=1.0)
    diversity_bonus: float = Field(0.0, description="Under-played category bonus", ge=0.0)
    exploration_bonus: float = Field(0.0, description="Lightly skipped category bonus", ge=0.0)
    time_decay: float = Field(1.0, description="Inactivity decay multiplier", ge=0.0, le=1.0)
    completion_penalty: float = Field(1.0, description="Completed puzzle multiplier", ge=0.0, le=1.0)
    new_user: bool = Field(False, description="Scored with the no-history prior")
    reason: str = Field(..., description="Human-readable scoring reason")


class RankingResult(BaseModel):
    """Result of ranking a candidate set."""

    strategy: str = Field(..., description="Selection strategy (scored, hybrid, simple)")
    total_candidates: int = Field(..., description="Candidates considered")
    selected: List[Puzzle] = Field(..., description="Puzzles in presentation order")
    scores: Dict[str, PuzzleScore] = Field(
        default_factory=dict, description="Score breakdown by puzzle ID"
    )
    ranking_timestamp: datetime = Field(..., description="When ranking was performed")
    config_used: Dict = Field(..., description="Ranking configuration used")
    seed: Optional[int] = Field(None, description="Random seed, if fixed")

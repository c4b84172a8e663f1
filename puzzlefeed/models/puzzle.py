"""Puzzle model for ranking candidates."""

from datetime import datetime
from typing import Dict, Optional

from pydantic import ConfigDict, Field

from .base import DocumentModel

DIFFICULTY_KEYS: Dict[int, str] = {1: "easy", 2: "medium", 3: "hard"}
DIFFICULTY_LEVELS: Dict[str, int] = {key: level for level, key in DIFFICULTY_KEYS.items()}

# Catalog ordering, also used to round-robin a feed by type
KNOWN_CATEGORIES = [
    "quickMath",
    "wordle",
    "wordChain",
    "riddle",
    "trivia",
    "mastermind",
    "sequencing",
    "alias",
    "zip",
    "futoshiki",
    "magicSquare",
    "hidato",
    "sudoku",
]


class Puzzle(DocumentModel):
    """Puzzle candidate. Owned by the catalog, never mutated by ranking."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Puzzle document ID")
    type: str = Field(..., description="Category tag (e.g. quickMath, riddle)")
    difficulty: int = Field(..., description="1=easy, 2=medium, 3=hard", ge=1, le=3)
    title: Optional[str] = Field(None, description="Display title")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")

    @property
    def difficulty_key(self) -> str:
        """Stats bucket name for this puzzle's difficulty."""
        return DIFFICULTY_KEYS[self.difficulty]

"""Data models for puzzle feeds."""

from .base import DocumentModel, parse_timestamp
from .profile import CategoryStats, DifficultyStats, UserProfile
from .puzzle import DIFFICULTY_KEYS, DIFFICULTY_LEVELS, KNOWN_CATEGORIES, Puzzle

__all__ = [
    "CategoryStats",
    "DIFFICULTY_KEYS",
    "DIFFICULTY_LEVELS",
    "DifficultyStats",
    "DocumentModel",
    "KNOWN_CATEGORIES",
    "Puzzle",
    "UserProfile",
    "parse_timestamp",
]

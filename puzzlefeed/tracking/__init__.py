"""Gameplay statistics tracking."""

from .recorder import GameplayRecorder, parse_puzzle_id

__all__ = ["GameplayRecorder", "parse_puzzle_id"]

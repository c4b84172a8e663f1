"""Shared fixtures for puzzlefeed tests."""

import random

import pendulum
import pytest

from puzzlefeed.models import Puzzle, UserProfile

NOW = pendulum.datetime(2025, 6, 1, 12, 0, 0, tz="UTC")


def make_puzzles(category: str, count: int, difficulty: int = 1, start: int = 1) -> list:
    return [
        Puzzle(id=f"{category}_{i}", type=category, difficulty=difficulty)
        for i in range(start, start + count)
    ]


@pytest.fixture
def puzzles():
    """Factory for numbered puzzles of one category."""
    return make_puzzles


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def math_stats():
    """A user who finished every easy math puzzle they tried."""
    return {
        "math": {
            "attempted": 10,
            "skipped": 0,
            "easy": {"attempted": 10, "completed": 10, "skipped": 0},
        }
    }


@pytest.fixture
def math_profile(math_stats):
    return UserProfile(statsByCategory=math_stats, lastPlayedAt=NOW)


@pytest.fixture
def lapsed_math_profile(math_stats):
    return UserProfile(statsByCategory=math_stats, lastPlayedAt=NOW.subtract(days=90))


@pytest.fixture
def math_and_riddle():
    return make_puzzles("math", 5) + make_puzzles("riddle", 5)


@pytest.fixture
def catalog_file(tmp_path):
    """A small catalog on disk covering several categories."""
    lines = ["puzzles:"]
    for category in ("quickMath", "riddle", "wordle"):
        for i in range(1, 7):
            difficulty = (i % 3) + 1
            lines.append(f"  - id: {category.lower()}_{i}")
            lines.append(f"    type: {category}")
            lines.append(f"    difficulty: {difficulty}")
    path = tmp_path / "catalog.yaml"
    path.write_text("\n".join(lines) + "\n")
    return path


@pytest.fixture
def profile_file(tmp_path):
    path = tmp_path / "profile.yaml"
    path.write_text(
        "statsByCategory:\n"
        "  riddle:\n"
        "    attempted: 8\n"
        "    skipped: 1\n"
        "    easy:\n"
        "      attempted: 8\n"
        "      completed: 7\n"
        "      skipped: 1\n"
        "lastPlayedAt: '2025-05-30T09:00:00Z'\n"
    )
    return path

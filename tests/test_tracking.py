"""Tests for gameplay recording."""

import pytest

from puzzlefeed.models import UserProfile
from puzzlefeed.tracking import GameplayRecorder, parse_puzzle_id


@pytest.fixture
def recorder(now):
    return GameplayRecorder(now=lambda: now)


class TestParsePuzzleId:
    @pytest.mark.parametrize(
        "puzzle_id, expected",
        [
            ("riddle_easy_12", ("riddle", 1)),
            ("quickmath_hard_3", ("quickMath", 3)),
            ("Sudoku_Medium_1", ("sudoku", 2)),
            ("riddle_impossible_1", ("riddle", None)),
            ("chess_easy_1", (None, 1)),
            ("riddle_12", (None, None)),
            ("", (None, None)),
        ],
    )
    def test_parse(self, puzzle_id, expected):
        assert parse_puzzle_id(puzzle_id) == expected


class TestRecordAttempt:
    def test_creates_stats_for_new_user(self, recorder):
        profile = UserProfile()
        updated = recorder.record_attempt(profile, "riddle", 2)

        assert updated.stats_for("riddle").attempted == 1
        assert updated.stats_for("riddle").medium.attempted == 1
        assert updated.stats_for("riddle").easy is None
        assert profile.stats_by_category is None

    def test_increments_existing(self, recorder, math_profile):
        updated = recorder.record_attempt(math_profile, "math", 1)
        assert updated.stats_for("math").attempted == 11
        assert updated.stats_for("math").easy.attempted == 11
        assert math_profile.stats_for("math").attempted == 10

    def test_unknown_category_changes_nothing(self, recorder, math_profile):
        assert recorder.record_attempt(math_profile, None, 1) == math_profile

    def test_unknown_difficulty_counts_category_only(self, recorder):
        updated = recorder.record_attempt(UserProfile(), "zip", None)
        assert updated.stats_for("zip").attempted == 1
        assert list(updated.stats_for("zip").buckets()) == []


class TestRecordCompletion:
    def test_updates_counters_and_averages(self, recorder):
        profile = recorder.record_attempt(UserProfile(), "riddle", 1)
        profile = recorder.record_completion(profile, "riddle_easy_1", "riddle", 1, time_taken=30)
        profile = recorder.record_attempt(profile, "riddle", 1)
        profile = recorder.record_completion(profile, "riddle_easy_2", "riddle", 1, time_taken=45)

        stats = profile.stats_for("riddle")
        assert stats.completed == 2
        assert stats.attempted == 2
        assert stats.avg_time == 38
        assert stats.easy.avg_time == 38
        assert profile.total_games_played == 2
        assert profile.total_play_time == 75
        assert profile.average_time_per_game == 38
        assert profile.completed_games == ["riddle_easy_1", "riddle_easy_2"]

    def test_completion_without_attempt_keeps_rates_valid(self, recorder):
        profile = recorder.record_completion(UserProfile(), "zip_hard_1", "zip", 3, time_taken=10)
        bucket = profile.stats_for("zip").hard
        assert bucket.completed == 1
        assert bucket.attempted == 1

    def test_repeat_completion_listed_once(self, recorder):
        profile = recorder.record_completion(UserProfile(), "zip_easy_1", "zip", 1)
        profile = recorder.record_completion(profile, "zip_easy_1", "zip", 1)
        assert profile.completed_games == ["zip_easy_1"]
        assert profile.stats_for("zip").completed == 2

    def test_sets_last_played(self, recorder, now):
        profile = recorder.record_completion(UserProfile(), "zip_easy_1", "zip", 1)
        assert profile.last_played_at == now


class TestStreak:
    def test_first_play_starts_streak(self, recorder):
        assert recorder.record_completion(UserProfile(), "a", None, None).streak_count == 1

    def test_same_day_keeps_streak(self, recorder, now):
        profile = UserProfile(lastPlayedAt=now.subtract(hours=3), streakCount=4)
        assert recorder.record_completion(profile, "a", None, None).streak_count == 4

    def test_next_day_extends_streak(self, recorder, now):
        profile = UserProfile(lastPlayedAt=now.subtract(days=1), streakCount=4)
        assert recorder.record_completion(profile, "a", None, None).streak_count == 5

    def test_gap_resets_streak(self, recorder, now):
        profile = UserProfile(lastPlayedAt=now.subtract(days=3), streakCount=4)
        assert recorder.record_completion(profile, "a", None, None).streak_count == 1


class TestRecordSkip:
    def test_counts_skip(self, recorder):
        profile = recorder.record_skip(UserProfile(), "trivia_easy_1", "trivia", 1)
        profile = recorder.record_skip(profile, "trivia_easy_1", "trivia", 1)

        stats = profile.stats_for("trivia")
        assert stats.skipped == 2
        assert stats.easy.skipped == 2
        assert stats.attempted == 0
        assert profile.skipped_games == ["trivia_easy_1"]

    def test_skip_does_not_touch_streak(self, recorder, math_profile):
        profile = recorder.record_skip(math_profile, "math_easy_1", "math", 1)
        assert profile.streak_count == math_profile.streak_count
        assert profile.last_played_at == math_profile.last_played_at

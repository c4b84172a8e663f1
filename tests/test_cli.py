"""Tests for the command line interface."""

import pytest
from typer.testing import CliRunner

from puzzlefeed.cli.app import app
from puzzlefeed.config import load_config, load_profile

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


class TestInit:
    def test_writes_default_config(self, tmp_path):
        config_dir = tmp_path / "conf"
        result = runner.invoke(app, ["init", "--config-dir", str(config_dir)])

        assert result.exit_code == 0
        assert load_config(config_dir / "config.yaml").feed.batch_size == 15

    def test_refuses_to_overwrite(self, tmp_path):
        config_dir = tmp_path / "conf"
        runner.invoke(app, ["init", "--config-dir", str(config_dir)])

        result = runner.invoke(app, ["init", "--config-dir", str(config_dir)])
        assert result.exit_code == 1
        assert "already exists" in result.output

        result = runner.invoke(app, ["init", "--config-dir", str(config_dir), "--force"])
        assert result.exit_code == 0


class TestRecommend:
    def test_prints_feed(self, catalog_file, profile_file):
        result = runner.invoke(
            app,
            ["recommend", str(catalog_file), "-p", str(profile_file), "-n", "4", "--seed", "7"],
        )

        assert result.exit_code == 0
        assert "Feed (simple)" in result.output
        assert result.output.count("_") >= 4

    def test_scored_strategy_with_completed(self, catalog_file, tmp_path):
        completed = tmp_path / "completed.txt"
        completed.write_text("riddle_1\n")
        result = runner.invoke(
            app,
            ["recommend", str(catalog_file), "-c", str(completed), "-s", "scored", "-n", "3", "--seed", "1"],
        )
        assert result.exit_code == 0
        assert "Feed (scored)" in result.output

    def test_missing_catalog(self, tmp_path):
        result = runner.invoke(app, ["recommend", str(tmp_path / "missing.yaml")])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_unknown_strategy(self, catalog_file):
        result = runner.invoke(app, ["recommend", str(catalog_file), "-s", "newest"])
        assert result.exit_code == 1
        assert "Unknown strategy" in result.output

    def test_exploration_ratio_ignored_outside_hybrid(self, catalog_file):
        result = runner.invoke(app, ["recommend", str(catalog_file), "--exploration-ratio", "0.5", "--seed", "2"])
        assert result.exit_code == 0
        assert "only applies to the hybrid strategy" in result.output

        result = runner.invoke(
            app,
            ["recommend", str(catalog_file), "-s", "hybrid", "--exploration-ratio", "0.5", "--seed", "2"],
        )
        assert result.exit_code == 0
        assert "only applies" not in result.output

    def test_empty_catalog(self, tmp_path):
        catalog = tmp_path / "catalog.yaml"
        catalog.write_text("puzzles: []\n")
        result = runner.invoke(app, ["recommend", str(catalog)])
        assert result.exit_code == 0
        assert "No puzzles to recommend" in result.output


class TestExplain:
    def test_shows_breakdown(self, catalog_file, profile_file):
        result = runner.invoke(
            app,
            ["explain", str(catalog_file), "-p", str(profile_file), "-n", "5", "--seed", "3"],
        )
        assert result.exit_code == 0
        assert "Ranking Summary" in result.output
        assert "Selected puzzles: 5" in result.output
        assert "Seed: 3" in result.output


class TestRecord:
    def test_completion_creates_profile(self, tmp_path):
        profile_path = tmp_path / "profile.yaml"
        result = runner.invoke(
            app, ["record", str(profile_path), "riddle_easy_3", "-e", "complete", "-t", "42"]
        )

        assert result.exit_code == 0
        profile = load_profile(profile_path)
        assert profile.stats_for("riddle").easy.completed == 1
        assert profile.completed_games == ["riddle_easy_3"]
        assert profile.total_play_time == 42

    def test_skip_updates_existing_profile(self, profile_file):
        result = runner.invoke(app, ["record", str(profile_file), "riddle_easy_9", "-e", "skip"])

        assert result.exit_code == 0
        stats = load_profile(profile_file).stats_for("riddle")
        assert stats.skipped == 2
        assert stats.easy.skipped == 2

    def test_explicit_category_and_difficulty(self, tmp_path):
        profile_path = tmp_path / "profile.yaml"
        result = runner.invoke(
            app,
            ["record", str(profile_path), "p-881", "-e", "attempt", "--category", "zip", "--difficulty", "hard"],
        )

        assert result.exit_code == 0
        assert load_profile(profile_path).stats_for("zip").hard.attempted == 1

    def test_unknown_category_warns(self, tmp_path):
        profile_path = tmp_path / "profile.yaml"
        result = runner.invoke(app, ["record", str(profile_path), "p-881", "-e", "attempt"])

        assert result.exit_code == 0
        assert "Could not determine category" in result.output

    def test_malformed_config_reported(self, isolated_home, tmp_path, monkeypatch):
        config_dir = isolated_home / ".config" / "puzzlefeed"
        config_dir.mkdir(parents=True)
        (config_dir / "config.yaml").write_text("feed: [unclosed\n")
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(app, ["record", "profile.yaml", "riddle_easy_1", "-e", "attempt"])
        assert result.exit_code == 1
        assert "Invalid YAML" in result.output

"""Tests for configuration and data file loading."""

import pytest

from puzzlefeed.config import (
    Config,
    ConfigModel,
    RankingConfig,
    load_catalog,
    load_completed_ids,
    load_config,
    load_profile,
    save_config,
    save_profile,
)


class TestRankingConfig:
    def test_defaults(self):
        config = RankingConfig()
        assert config.category_weight == 0.5
        assert config.completion_penalty == 0.3
        assert config.band_threshold == 0.1

    def test_weights_must_sum_to_one(self):
        with pytest.raises(ValueError, match="sum to 1.0"):
            RankingConfig(category_weight=0.7)

    def test_rebalanced_weights(self):
        config = RankingConfig(category_weight=0.6, difficulty_weight=0.2)
        assert config.difficulty_weight == 0.2


class TestLoadConfig:
    def test_round_trip(self, tmp_path):
        path = tmp_path / "config.yaml"
        save_config(ConfigModel(data_root="/srv/puzzles"), path)
        assert load_config(path).data_root == "/srv/puzzles"

    def test_partial_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("feed:\n  batch_size: 5\n")
        config = load_config(path)
        assert config.feed.batch_size == 5
        assert config.ranking.category_weight == 0.5

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(path) == ConfigModel()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("feed: [unclosed\n")
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_config(path)

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("feed:\n  exploration_ratio: 2\n")
        with pytest.raises(ValueError, match="Invalid configuration"):
            load_config(path)


class TestConfigManager:
    def test_defaults_without_file(self, tmp_path):
        config = Config(tmp_path / "config.yaml")
        assert config.config == ConfigModel()

    def test_resolves_relative_paths_against_data_root(self, tmp_path):
        path = tmp_path / "config.yaml"
        save_config(ConfigModel(data_root=str(tmp_path / "data")), path)
        config = Config(path)

        assert config.resolve_data_path("catalog.yaml") == tmp_path / "data" / "catalog.yaml"
        assert config.resolve_data_path(tmp_path / "x.yaml") == tmp_path / "x.yaml"


class TestLoadCatalog:
    def test_mapping_with_puzzles(self, catalog_file):
        catalog = load_catalog(catalog_file)
        assert len(catalog) == 18
        assert catalog[0].id == "quickmath_1"
        assert catalog[0].difficulty == 2

    def test_plain_list_skips_invalid(self, tmp_path, capsys):
        path = tmp_path / "catalog.json"
        path.write_text(
            '[{"id": "a", "type": "zip", "difficulty": 1},'
            ' {"id": "b", "type": "zip", "difficulty": 9},'
            ' {"id": "c", "type": "zip", "difficulty": 3}]'
        )
        catalog = load_catalog(path)
        assert [puzzle.id for puzzle in catalog] == ["a", "c"]
        assert "Skipping invalid puzzle b" in capsys.readouterr().out

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text("just a string\n")
        with pytest.raises(ValueError, match="list of puzzles"):
            load_catalog(path)


class TestProfileFiles:
    def test_load(self, profile_file):
        profile = load_profile(profile_file)
        assert profile.stats_for("riddle").easy.completed == 7
        assert profile.last_played_at.day == 30

    def test_save_and_reload(self, tmp_path, math_profile):
        path = tmp_path / "nested" / "profile.yaml"
        save_profile(math_profile, path)
        reloaded = load_profile(path)
        assert reloaded.stats_for("math") == math_profile.stats_for("math")
        assert reloaded.last_played_at == math_profile.last_played_at

    def test_empty_profile_is_new_user(self, tmp_path):
        path = tmp_path / "profile.yaml"
        path.write_text("")
        assert load_profile(path).is_new_user

    def test_invalid_profile(self, tmp_path):
        path = tmp_path / "profile.yaml"
        path.write_text("statsByCategory:\n  riddle:\n    attempted: -4\n")
        with pytest.raises(ValueError, match="Invalid profile"):
            load_profile(path)


class TestCompletedIds:
    def test_yaml_list(self, tmp_path):
        path = tmp_path / "completed.yaml"
        path.write_text("- riddle_1\n- zip_2\n")
        assert load_completed_ids(path) == {"riddle_1", "zip_2"}

    def test_profile_style_mapping(self, tmp_path):
        path = tmp_path / "completed.yaml"
        path.write_text("completedGames:\n  - riddle_1\n")
        assert load_completed_ids(path) == {"riddle_1"}

    def test_plain_lines(self, tmp_path):
        path = tmp_path / "completed.txt"
        path.write_text("riddle_1\n\nzip_2\n")
        assert load_completed_ids(path) == {"riddle_1", "zip_2"}

    def test_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_completed_ids(tmp_path / "missing.txt")

"""Tests for game configuration."""

import pytest

from playzzle.config import (
    BEST_TIMES_ENV_VAR,
    HISTORY_ENV_VAR,
    GameConfig,
    validate_game,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv(BEST_TIMES_ENV_VAR, raising=False)
    monkeypatch.delenv(HISTORY_ENV_VAR, raising=False)


class TestValidateGame:
    def test_ranges(self):
        validate_game("slide", 3)
        validate_game("slide", 10)
        validate_game("jigsaw", 2)
        validate_game("jigsaw", 12)

    @pytest.mark.parametrize(
        "game_type,difficulty",
        [("slide", 2), ("slide", 11), ("jigsaw", 1), ("jigsaw", 13), ("sudoku", 4)],
    )
    def test_invalid(self, game_type, difficulty):
        with pytest.raises(ValueError):
            validate_game(game_type, difficulty)


class TestGameConfig:
    """Tests for GameConfig defaults and validation."""

    def test_defaults(self):
        config = GameConfig()

        assert config.game_type == "jigsaw"
        assert config.difficulty == 4
        assert config.snap_tolerance == 0.3
        assert not config.reshuffle_on_resize
        assert config.best_times_path is None
        config.validate()

    def test_slide_default_difficulty(self):
        assert GameConfig(game_type="slide").difficulty == 3

    def test_env_paths(self, monkeypatch, tmp_path):
        monkeypatch.setenv(BEST_TIMES_ENV_VAR, str(tmp_path / "best.json"))
        monkeypatch.setenv(HISTORY_ENV_VAR, str(tmp_path / "history.json"))

        config = GameConfig()

        assert config.best_times_path == str(tmp_path / "best.json")
        assert config.history_path == str(tmp_path / "history.json")

    def test_explicit_path_beats_env(self, monkeypatch):
        monkeypatch.setenv(BEST_TIMES_ENV_VAR, "/from/env.json")

        assert GameConfig(best_times_path="best.json").best_times_path == "best.json"

    def test_invalid_snap_tolerance(self):
        with pytest.raises(ValueError):
            GameConfig(snap_tolerance=0).validate()
        with pytest.raises(ValueError):
            GameConfig(snap_tolerance=1.5).validate()

    def test_invalid_ratio(self):
        with pytest.raises(ValueError):
            GameConfig(jigsaw_width_ratio=0).validate()
        with pytest.raises(ValueError):
            GameConfig(slide_height_ratio=1.2).validate()

    def test_invalid_difficulty(self):
        with pytest.raises(ValueError):
            GameConfig(game_type="slide", difficulty=2).validate()

    def test_dict_round_trip(self):
        config = GameConfig(game_type="slide", difficulty=5, shuffle_seed=7, reshuffle_on_resize=True)

        assert GameConfig.from_dict(config.to_dict()) == config

    def test_from_partial_dict(self):
        config = GameConfig.from_dict({"game_type": "slide"})

        assert config.difficulty == 3
        assert config.slide_width_ratio == 0.9

"""Tests for environment-driven settings."""

import pytest

from long_game.config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("LONGGAME_RNG_SEED", raising=False)
        config = Settings()
        assert config.app_name == "long-game"
        assert config.default_burn_rate == 5.0
        assert config.funding_runway_quarters == 4.0
        assert config.rng_seed is None

    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LONGGAME_MAX_SESSIONS", "25")
        monkeypatch.setenv("LONGGAME_RNG_SEED", "99")
        monkeypatch.setenv("LONGGAME_PATH_STARTING_CONFIDENCE", "60")
        config = Settings()
        assert config.max_sessions == 25
        assert config.rng_seed == 99
        assert config.path_starting_confidence == 60.0

    def test_unprefixed_vars_are_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("LONGGAME_MAX_SESSIONS", raising=False)
        monkeypatch.setenv("MAX_SESSIONS", "3")
        assert Settings().max_sessions == 1000

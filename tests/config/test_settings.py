"""Tests for assemblage/config/settings.py — environment-driven settings."""

import logging

import pytest

from assemblage.config.settings import Settings, configure_logging, get_settings
from assemblage.engine.game import AssemblageEngine


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate tests from the developer's environment and .env file."""
    monkeypatch.chdir(tmp_path)
    for key in ("ASSEMBLAGE_DEBUG", "ASSEMBLAGE_LOG_LEVEL", "ASSEMBLAGE_RANDOM_SEED", "ASSEMBLAGE_SIZE_BONUS"):
        monkeypatch.delenv(key, raising=False)
    root_level = logging.getLogger().level
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    logging.getLogger().setLevel(root_level)


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.debug is False
        assert settings.log_level == "INFO"
        assert settings.random_seed is None
        assert settings.size_bonus == 50

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("ASSEMBLAGE_RANDOM_SEED", "7")
        monkeypatch.setenv("ASSEMBLAGE_SIZE_BONUS", "30")
        settings = Settings()
        assert settings.random_seed == 7
        assert settings.size_bonus == 30

    def test_negative_bonus_rejected(self, monkeypatch):
        monkeypatch.setenv("ASSEMBLAGE_SIZE_BONUS", "-5")
        with pytest.raises(ValueError):
            Settings()

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()


class TestEngineFromSettings:
    def test_seed_makes_deals_reproducible(self):
        settings = Settings(random_seed=11)
        first = AssemblageEngine.from_settings(settings).create_initial_state(["a", "b"])
        second = AssemblageEngine.from_settings(settings).create_initial_state(["a", "b"])
        assert first == second

    def test_bonus_flows_into_rules(self):
        engine = AssemblageEngine.from_settings(Settings(size_bonus=20))
        assert engine.rules.size_bonus == 20


class TestConfigureLogging:
    def test_level_from_settings(self):
        configure_logging(Settings(log_level="warning"))
        assert logging.getLogger().level == logging.WARNING

    def test_debug_overrides_level(self):
        configure_logging(Settings(debug=True, log_level="ERROR"))
        assert logging.getLogger().level == logging.DEBUG

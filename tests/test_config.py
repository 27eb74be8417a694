"""Tests for environment-driven settings."""
from pathlib import Path

import pytest

from config import Settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("PORT", "QUESTIONS_PATH", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


class TestSettingsFromEnv:
    """PORT and friends are read from the environment."""

    def test_defaults_to_port_3000_on_all_interfaces(self) -> None:
        s = Settings.from_env()

        assert s.port == 3000
        assert s.host == "0.0.0.0"

    def test_port_is_read_from_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("PORT", "8080")

        assert Settings.from_env().port == 8080

    def test_non_numeric_port_is_rejected(self, monkeypatch) -> None:
        monkeypatch.setenv("PORT", "eighty")

        with pytest.raises(ValueError, match="PORT"):
            Settings.from_env()

    def test_questions_path_and_log_level_overrides(self, monkeypatch, tmp_path) -> None:
        monkeypatch.setenv("QUESTIONS_PATH", str(tmp_path / "q.csv"))
        monkeypatch.setenv("LOG_LEVEL", "debug")

        s = Settings.from_env()

        assert s.dataset_path == Path(tmp_path / "q.csv")
        assert s.log_level == "DEBUG"

    def test_logo_path_lives_in_public_dir(self) -> None:
        s = Settings()

        assert s.logo_path == s.public_dir / "logo.png"
        assert s.logo_path.is_file()

"""Tests for API key lookup and settings (config.py).

The autouse fixture in conftest points HOME at a temp dir and cwd at a temp
"repo" containing .git.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from yt_pulse import config
from yt_pulse.exceptions import ConfigError


class TestGetApiKey:
    def test_environment_first(self, monkeypatch) -> None:
        monkeypatch.setenv("YOUTUBE_API_KEY", "from-env")
        assert config.get_api_key() == "from-env"

    def test_repo_dotenv(self, monkeypatch) -> None:
        Path(".env").write_text('YOUTUBE_API_KEY="from-dotenv"\n# comment\n', encoding="utf-8")
        assert config.get_api_key() == "from-dotenv"

    def test_user_config_after_save(self) -> None:
        path = config.save_api_key("  saved-key  ")
        assert path is not None and path.exists()
        assert config.get_api_key() == "saved-key"

    def test_missing_raises_with_hint(self) -> None:
        with pytest.raises(ConfigError) as exc:
            config.get_api_key()
        assert "YOUTUBE_API_KEY" in str(exc.value)
        assert "config.env" in (exc.value.hint or "")


class TestSaveApiKey:
    def test_blank_not_saved(self) -> None:
        assert config.save_api_key("   ") is None

    def test_keeps_other_lines(self) -> None:
        path = config.save_api_key("first")
        path.write_text(path.read_text(encoding="utf-8") + "GEMINI_API_KEY=g\n", encoding="utf-8")
        config.save_api_key("second")
        lines = path.read_text(encoding="utf-8").splitlines()
        assert "GEMINI_API_KEY=g" in lines
        assert "YOUTUBE_API_KEY=second" in lines
        assert "YOUTUBE_API_KEY=first" not in lines


class TestGeminiKey:
    def test_primary_name(self, monkeypatch) -> None:
        monkeypatch.setenv("GEMINI_API_KEY", "g")
        assert config.get_gemini_api_key() == "g"

    def test_api_key_fallback(self, monkeypatch) -> None:
        monkeypatch.setenv("API_KEY", "legacy")
        assert config.get_gemini_api_key() == "legacy"

    def test_missing(self) -> None:
        with pytest.raises(ConfigError):
            config.get_gemini_api_key()


class TestSettings:
    def test_round_trip_and_default(self) -> None:
        assert config.load_setting("region", "KR") == "KR"
        config.save_setting("region", "US")
        assert config.load_setting("region", "KR") == "US"

    def test_corrupt_file_uses_default(self) -> None:
        config.save_setting("region", "US")
        config._user_settings_path().write_text("{not json", encoding="utf-8")
        assert config.load_setting("region", "KR") == "KR"

"""Tests for deckforge.config module."""

from pathlib import Path

import pytest

from deckforge.config import ConfigError, Settings


class TestSettings:
    """Tests for the Settings class."""

    def test_default_values(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that default values are set correctly."""
        for name in ("OPENAI_API_KEY", "OPENAI_MODEL", "MIN_REGION_SIZE"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(
            _env_file=None,  # type: ignore[call-arg]
        )

        assert settings.OPENAI_API_KEY is None
        assert settings.OPENAI_MODEL == "gpt-4.1-mini"
        assert settings.OPENAI_IMAGE_MODEL == "gpt-image-1"
        assert settings.REFERENCE_CHAR_LIMIT == 20000
        assert settings.MIN_REGION_SIZE == 10.0
        assert (settings.EXPORT_PAGE_WIDTH, settings.EXPORT_PAGE_HEIGHT) == (
            10.0,
            5.625,
        )
        assert settings.PROJECTS_DIR == "projects"

    def test_env_var_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that environment variables override defaults."""
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test-key")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("MIN_REGION_SIZE", "5")

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.OPENAI_API_KEY == "sk-test-key"
        assert settings.LOG_LEVEL == "DEBUG"
        assert settings.MIN_REGION_SIZE == 5.0

    def test_env_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test values are read from a .env file."""
        monkeypatch.delenv("PROJECTS_DIR", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("PROJECTS_DIR=/srv/decks\n")

        settings = Settings(_env_file=env_file)  # type: ignore[call-arg]

        assert settings.PROJECTS_DIR == "/srv/decks"


class TestRequireKeys:
    """Tests for required-key accessors."""

    def test_require_openai_key_returns_key(self) -> None:
        settings = Settings(
            OPENAI_API_KEY="sk-abc",
            _env_file=None,  # type: ignore[call-arg]
        )
        assert settings.require_openai_key() == "sk-abc"

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_require_openai_key_missing(self, value: str | None) -> None:
        settings = Settings(
            OPENAI_API_KEY=value,
            _env_file=None,  # type: ignore[call-arg]
        )
        with pytest.raises(ConfigError) as exc_info:
            settings.require_openai_key()
        assert exc_info.value.env_var == "OPENAI_API_KEY"
        assert "OPENAI_API_KEY environment variable" in str(exc_info.value)

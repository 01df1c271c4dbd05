"""deckforge configuration using pydantic-settings.

All configuration is strongly typed and supports environment variables
and .env files.
"""

from typing import TypeGuard

from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigError(Exception):
    """Raised when required configuration is missing or invalid.

    This exception provides clear, actionable error messages when
    configuration values required by a specific operation are not set.

    Example:
        >>> Settings(_env_file=None).require_openai_key()  # doctest: +ELLIPSIS
        Traceback (most recent call last):
        ...
        ConfigError: OpenAI API key not configured. Set it in .env file or
        OPENAI_API_KEY environment variable.
    """

    def __init__(self, key_name: str, env_var: str) -> None:
        """Initialize configuration error.

        Args:
            key_name: Human-readable name of the missing key.
            env_var: Environment variable name to set.
        """
        self.key_name = key_name
        self.env_var = env_var
        message = (
            f"{key_name} not configured. "
            f"Set it in .env file or {env_var} environment variable."
        )
        super().__init__(message)


class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    # Generation service
    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL: str = "gpt-4.1-mini"
    OPENAI_IMAGE_MODEL: str = "gpt-image-1"
    OPENAI_RPM: int = 60  # Requests per minute
    REFERENCE_CHAR_LIMIT: int = 20000  # Per-reference truncation

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "console"  # "console" or "json"

    # Layout
    MIN_REGION_SIZE: float = 10.0  # Percent of the canvas dimension

    # Export page (16:9, inches)
    EXPORT_PAGE_WIDTH: float = 10.0
    EXPORT_PAGE_HEIGHT: float = 5.625

    # Project repository
    PROJECTS_DIR: str = "projects"

    @staticmethod
    def _is_configured_secret(value: str | None) -> TypeGuard[str]:
        return value is not None and value.strip() != ""

    def require_openai_key(self) -> str:
        """Get OpenAI API key, raising ConfigError if not set.

        Use this method before building the generation client to get a clear
        error message instead of cryptic authentication failures.

        Returns:
            The OpenAI API key string.

        Raises:
            ConfigError: If OPENAI_API_KEY is not configured.
        """
        if not self._is_configured_secret(self.OPENAI_API_KEY):
            raise ConfigError("OpenAI API key", "OPENAI_API_KEY")
        return self.OPENAI_API_KEY


# Singleton instance for import convenience
settings = Settings()

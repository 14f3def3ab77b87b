"""Application configuration using pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(RuntimeError):
    """Raised when a required configuration value is missing."""


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # IMDb-API
    imdb_base_url: str = "https://imdb-api.com/en/API"
    imdb_api_key: str = ""

    # Wikipedia REST API
    wikipedia_base_url: str = "https://en.wikipedia.org/api/rest_v1"

    # Storage: entity store and snapshot files live here
    persistence_directory: str = ""
    seed_directory: str = "data"

    # HTTP settings
    http_timeout: float = 10.0
    http_max_attempts: int = 3
    http_retry_delay: float = 3.0

    def require(self, *names: str) -> None:
        """
        Check that the named settings are non-empty.

        Args:
            names: Setting attribute names

        Raises:
            ConfigurationError: listing every missing setting
        """
        missing = [name for name in names if not getattr(self, name)]
        if missing:
            env_names = ", ".join(name.upper() for name in missing)
            raise ConfigurationError(f"Missing required configuration: {env_names}")


# Global settings instance
settings = Settings()

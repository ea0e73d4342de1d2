import logging
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from now_playing_badge.exceptions import ConfigError
from now_playing_badge.models import SpotifyCredentials


class Settings(BaseSettings):
    """Application settings with validation.

    Spotify credentials default to empty so the server can start without them;
    a missing credential is reported per request by ``credentials()`` and the
    badge falls back to its placeholder.
    """

    # API server settings
    api_host: str = Field(default="localhost", min_length=1, description="Host the badge server binds to")
    api_port: int = Field(ge=1, le=65535, default=3000, description="Port the badge server listens on")

    # Spotify API
    spotify_client_id: str = Field(default="", description="Spotify OAuth client ID")
    spotify_client_secret: str = Field(default="", description="Spotify OAuth client secret")
    spotify_refresh_token: str = Field(default="", description="Long-lived Spotify refresh token")

    # Outbound HTTP; None leaves upstream calls unbounded
    upstream_timeout: float | None = Field(default=None, gt=0, description="Timeout in seconds for upstream calls")

    # Logging; no log_dir means console only
    log_level: str = Field(default="INFO", description="Root log level name")
    log_dir: Path | None = Field(default=None, description="Directory for the rotating JSON log file")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
        frozen=True,
    )

    @field_validator("api_host", mode="after")
    @classmethod
    def validate_api_host(cls, v: str) -> str:
        """Ensure api_host is not empty or whitespace."""
        v = v.strip()
        if not v:
            raise ValueError("api_host cannot be empty")
        return v

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log_level names a standard logging level."""
        v = v.strip().upper()
        if v not in logging.getLevelNamesMapping():
            raise ValueError(f"log_level must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL, got {v!r}")
        return v

    @field_validator("spotify_client_id", "spotify_client_secret", "spotify_refresh_token", mode="after")
    @classmethod
    def strip_credential(cls, v: str) -> str:
        return v.strip()

    def credentials(self) -> SpotifyCredentials:
        """Return the Spotify credentials needed for one badge request.

        Raises:
            ConfigError: If any of the three values is missing
        """
        missing = [
            env_name
            for env_name, value in (
                ("SPOTIFY_CLIENT_ID", self.spotify_client_id),
                ("SPOTIFY_CLIENT_SECRET", self.spotify_client_secret),
                ("SPOTIFY_REFRESH_TOKEN", self.spotify_refresh_token),
            )
            if not value
        ]
        if missing:
            raise ConfigError(details={"missing": missing})

        return SpotifyCredentials(
            client_id=self.spotify_client_id,
            client_secret=self.spotify_client_secret,
            refresh_token=self.spotify_refresh_token,
        )


# Singleton settings instance (cached for performance)
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get singleton Settings instance.

    The app factory calls this once at startup when no explicit settings
    are passed; the handler then receives the instance from app state.

    Returns:
        Cached Settings instance
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance

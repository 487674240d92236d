"""
Organize Usings Server Settings

Configuration management using pydantic settings.
Loads from environment variables with ORGANIZE_USINGS_ prefix.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import computed_field
from typing import List, Optional


class Settings(BaseSettings):
    """
    Server configuration settings.

    Environment variables:
    - ORGANIZE_USINGS_API_KEYS_RAW: Comma-separated list of valid API keys (empty: no auth)
    - ORGANIZE_USINGS_ALLOWED_ORIGINS_RAW: Comma-separated list of allowed CORS origins
    - ORGANIZE_USINGS_DEBUG: Enable debug logging (default: false)
    - ORGANIZE_USINGS_VALIDATE_PROJECT: Check project restore state before
      removing unused directives (default: true)
    - ORGANIZE_USINGS_CONFIG_PATH: YAML file with the server-wide default options
    """

    model_config = SettingsConfigDict(
        env_prefix="ORGANIZE_USINGS_",
        env_file=".env",
        extra="ignore",
    )

    # Raw string fields for comma-separated values
    api_keys_raw: str = ""
    allowed_origins_raw: str = ""

    # Debug mode
    debug: bool = False

    # Default for requests that do not say
    validate_project: bool = True

    config_path: Optional[str] = None

    @computed_field
    @property
    def api_keys(self) -> List[str]:
        """Parse comma-separated API keys into list."""
        if not self.api_keys_raw:
            return []
        return [v.strip() for v in self.api_keys_raw.split(",") if v.strip()]

    @computed_field
    @property
    def allowed_origins(self) -> List[str]:
        """Parse comma-separated allowed origins into list."""
        if not self.allowed_origins_raw:
            return []
        return [v.strip() for v in self.allowed_origins_raw.split(",") if v.strip()]


# Global settings instance
settings = Settings()

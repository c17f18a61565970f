"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. YAML config file (if specified)
  2. Environment variables (IMAGESIFT_ prefix) and .env
  3. Default values
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

from imagesift import __version__


class WikimediaSettings(BaseModel):
    """Wikimedia Commons provider configuration."""

    api_url: str = Field(default="https://commons.wikimedia.org/w/api.php", description="MediaWiki api.php endpoint")
    thumbnail_width: int = Field(default=300, gt=0, description="Requested thumbnail width in pixels")
    page_size: int = Field(default=20, ge=1, le=500, description="Images per request (gimlimit)")
    timeout: float = Field(default=30.0, gt=0, description="HTTP request timeout in seconds")
    user_agent: str = Field(
        default=f"imagesift/{__version__} (https://commons.wikimedia.org/wiki/Commons:API)",
        description="User-agent sent to the Wikimedia API",
    )

    def provider_kwargs(self) -> dict[str, Any]:
        """Constructor arguments for ``WikimediaCommonsProvider``."""
        return self.model_dump()


class SearchSettings(BaseModel):
    """Search behavior configuration."""

    default_provider: str = Field(default="wikipedia", description="Provider used when none is selected")
    max_pages: int = Field(default=5, ge=1, description="Pages fetched per CLI search")


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="console", description="Log format: json, console")


class Settings(BaseSettings):
    """Root application settings.

    Configuration is loaded from environment variables with the IMAGESIFT_ prefix.
    Nested settings use double underscores: IMAGESIFT_WIKIMEDIA__PAGE_SIZE=50

    Example:
        IMAGESIFT_WIKIMEDIA__THUMBNAIL_WIDTH=640
        IMAGESIFT_SEARCH__MAX_PAGES=3
        IMAGESIFT_OBSERVABILITY__LOG_FORMAT=json
    """

    model_config = {
        "env_prefix": "IMAGESIFT_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    debug: bool = Field(default=False, description="Debug mode")

    wikimedia: WikimediaSettings = Field(default_factory=WikimediaSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    def provider_kwargs(self, provider_id: str) -> dict[str, Any]:
        """Constructor arguments for the provider registered as *provider_id*."""
        if provider_id == "wikipedia":
            return self.wikimedia.provider_kwargs()
        return {}

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Keys present in the YAML file override environment variables; keys it
        leaves out are still read from the environment.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)

"""
Configuration management for the playlist service.

Provides centralized configuration for web scraping, the music catalog
client, and entry resolution.
"""

import os
from dataclasses import dataclass, field


def _as_bool(value: str) -> bool:
    return value.lower() in ("true", "1", "yes")


@dataclass
class ScrapingConfig:
    """Configuration for web scraping operations."""

    user_agents: list[str] = field(
        default_factory=lambda: [
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
            "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
            "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
        ]
    )
    request_timeout: int = 30
    retry_attempts: int = 3
    retry_delay: float = 1.0
    rate_limit_delay: float = 1.0


@dataclass
class CatalogConfig:
    """Configuration for the Spotify catalog client."""

    client_id: str | None = None
    client_secret: str | None = None
    access_token: str | None = None
    api_base_url: str = "https://api.spotify.com/v1"
    token_url: str = "https://accounts.spotify.com/api/token"
    market: str | None = None
    search_limit: int = 1
    album_include_groups: str = "album,single"
    album_page_size: int = 50
    max_album_pages: int = 4
    request_timeout: int = 20
    retry_attempts: int = 3


@dataclass
class ResolutionConfig:
    """Configuration for entry resolution."""

    skip_unresolved: bool = True
    shuffle_seed: int | None = None


@dataclass
class ServiceConfig:
    """Main configuration for the playlist service."""

    scraping: ScrapingConfig = field(default_factory=ScrapingConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    resolution: ResolutionConfig = field(default_factory=ResolutionConfig)

    # Service-level settings
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "ServiceConfig":
        """Create configuration from environment variables.

        Environment variables follow the pattern:
        PLAYLIST_<SECTION>_<SETTING>

        Examples:
        - PLAYLIST_SCRAPING_RATE_LIMIT_DELAY=3.0
        - PLAYLIST_CATALOG_MARKET=SE
        - PLAYLIST_RESOLUTION_SKIP_UNRESOLVED=false

        Spotify credentials are also read from SPOTIFY_CLIENT_ID and
        SPOTIFY_CLIENT_SECRET when the prefixed variables are not set.
        """
        config = cls()

        # Scraping configuration
        if val := os.getenv("PLAYLIST_SCRAPING_REQUEST_TIMEOUT"):
            config.scraping.request_timeout = int(val)
        if val := os.getenv("PLAYLIST_SCRAPING_RETRY_ATTEMPTS"):
            config.scraping.retry_attempts = int(val)
        if val := os.getenv("PLAYLIST_SCRAPING_RETRY_DELAY"):
            config.scraping.retry_delay = float(val)
        if val := os.getenv("PLAYLIST_SCRAPING_RATE_LIMIT_DELAY"):
            config.scraping.rate_limit_delay = float(val)
        if val := os.getenv("PLAYLIST_SCRAPING_USER_AGENT"):
            config.scraping.user_agents = [val]

        # Catalog configuration
        config.catalog.client_id = os.getenv("PLAYLIST_CATALOG_CLIENT_ID") or os.getenv("SPOTIFY_CLIENT_ID")
        config.catalog.client_secret = os.getenv("PLAYLIST_CATALOG_CLIENT_SECRET") or os.getenv(
            "SPOTIFY_CLIENT_SECRET"
        )
        config.catalog.access_token = os.getenv("PLAYLIST_CATALOG_ACCESS_TOKEN")
        config.catalog.api_base_url = os.getenv("PLAYLIST_CATALOG_API_BASE_URL", config.catalog.api_base_url)
        config.catalog.token_url = os.getenv("PLAYLIST_CATALOG_TOKEN_URL", config.catalog.token_url)
        config.catalog.market = os.getenv("PLAYLIST_CATALOG_MARKET", config.catalog.market)
        if val := os.getenv("PLAYLIST_CATALOG_SEARCH_LIMIT"):
            config.catalog.search_limit = int(val)
        config.catalog.album_include_groups = os.getenv(
            "PLAYLIST_CATALOG_ALBUM_INCLUDE_GROUPS", config.catalog.album_include_groups
        )
        if val := os.getenv("PLAYLIST_CATALOG_ALBUM_PAGE_SIZE"):
            config.catalog.album_page_size = int(val)
        if val := os.getenv("PLAYLIST_CATALOG_MAX_ALBUM_PAGES"):
            config.catalog.max_album_pages = int(val)
        if val := os.getenv("PLAYLIST_CATALOG_REQUEST_TIMEOUT"):
            config.catalog.request_timeout = int(val)
        if val := os.getenv("PLAYLIST_CATALOG_RETRY_ATTEMPTS"):
            config.catalog.retry_attempts = int(val)

        # Resolution configuration
        if val := os.getenv("PLAYLIST_RESOLUTION_SKIP_UNRESOLVED"):
            config.resolution.skip_unresolved = _as_bool(val)
        if val := os.getenv("PLAYLIST_RESOLUTION_SHUFFLE_SEED"):
            config.resolution.shuffle_seed = int(val)

        # Service-level settings
        config.log_level = os.getenv("PLAYLIST_LOG_LEVEL", config.log_level)

        return config

    def validate(self) -> list[str]:
        """Validate configuration and return any errors.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        # Validate scraping settings
        if self.scraping.request_timeout <= 0:
            errors.append("Scraping request_timeout must be positive")
        if self.scraping.retry_attempts < 1:
            errors.append("Scraping retry_attempts must be at least 1")
        if self.scraping.rate_limit_delay < 0:
            errors.append("Scraping rate_limit_delay must be non-negative")
        if not self.scraping.user_agents:
            errors.append("Scraping user_agents must not be empty")

        # Validate catalog settings
        if not self.catalog.access_token and not (self.catalog.client_id and self.catalog.client_secret):
            errors.append("Catalog requires an access_token or client_id and client_secret")
        if self.catalog.search_limit <= 0:
            errors.append("Catalog search_limit must be positive")
        if not 1 <= self.catalog.album_page_size <= 50:
            errors.append("Catalog album_page_size must be between 1 and 50")
        if self.catalog.max_album_pages <= 0:
            errors.append("Catalog max_album_pages must be positive")
        if self.catalog.request_timeout <= 0:
            errors.append("Catalog request_timeout must be positive")

        if self.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            errors.append(f"Unknown log_level: {self.log_level}")

        return errors


# Global configuration instance
_config: ServiceConfig | None = None


def get_config() -> ServiceConfig:
    """Get the global configuration instance.

    Creates the configuration from environment variables on first call.
    """
    global _config  # noqa: PLW0603  # Global config pattern for application configuration
    if _config is None:
        _config = ServiceConfig.from_env()
    return _config


def set_config(config: ServiceConfig) -> None:
    """Set the global configuration instance.

    Useful for testing or when loading configuration from files.
    """
    global _config  # noqa: PLW0603  # Global config pattern for application configuration
    _config = config


def reset_config() -> None:
    """Reset the global configuration instance.

    The next call to get_config() will recreate from environment.
    """
    global _config  # noqa: PLW0603  # Global config pattern for application configuration
    _config = None

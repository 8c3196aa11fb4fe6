"""Configuration management for the data gateway.

Centralizes all environment variable access for better testability and maintainability.
"""

import os
from typing import Optional

DEFAULT_RATE_LIMIT_MAX_REQUESTS = 100
DEFAULT_RATE_LIMIT_WINDOW_SECONDS = 3600
DEFAULT_CACHE_MAX_AGE = 300
DEFAULT_CSV_FILENAME_PREFIX = "ehds"


def _int_env(name: str, default: int) -> int:
    """Read a positive integer from the environment, falling back to default."""
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


class Config:
    """Application configuration loaded from environment variables."""

    # Supabase configuration
    @staticmethod
    def supabase_url() -> Optional[str]:
        """Get Supabase project URL from environment."""
        return os.environ.get("SUPABASE_URL")

    @staticmethod
    def supabase_key() -> Optional[str]:
        """Get Supabase key, preferring the service role key over the anon key.

        The anon key is enough to read content; rate limiting stays disabled
        unless the service role key is set (see supabase_service_role_key).
        """
        return os.environ.get("SUPABASE_SERVICE_ROLE_KEY") or os.environ.get("SUPABASE_ANON_KEY")

    @staticmethod
    def supabase_service_role_key() -> Optional[str]:
        """Get Supabase service role key, required to call the rate-limit function."""
        return os.environ.get("SUPABASE_SERVICE_ROLE_KEY")

    # Rate limiting
    @staticmethod
    def rate_limit_max_requests() -> int:
        """Maximum requests per client inside one window."""
        return _int_env("API_RATE_LIMIT_MAX_REQUESTS", DEFAULT_RATE_LIMIT_MAX_REQUESTS)

    @staticmethod
    def rate_limit_window_seconds() -> int:
        """Rate limit window length in seconds."""
        return _int_env("API_RATE_LIMIT_WINDOW_SECONDS", DEFAULT_RATE_LIMIT_WINDOW_SECONDS)

    @staticmethod
    def trusted_proxy_headers() -> bool:
        """Whether client IPs may be taken from proxy headers.

        Enable only behind a proxy that overwrites cf-connecting-ip, x-real-ip
        and x-forwarded-for; otherwise clients choose their own rate-limit key.
        """
        return os.environ.get("API_TRUSTED_PROXY_HEADERS", "").strip().lower() in ("1", "true", "yes", "on")

    # Response shaping
    @staticmethod
    def cache_max_age() -> int:
        """Seconds clients and CDNs may cache a response."""
        return _int_env("API_CACHE_MAX_AGE", DEFAULT_CACHE_MAX_AGE)

    @staticmethod
    def csv_filename_prefix() -> str:
        """Prefix for CSV attachment filenames."""
        return os.environ.get("API_CSV_FILENAME_PREFIX") or DEFAULT_CSV_FILENAME_PREFIX

    # Helper methods
    @staticmethod
    def is_configured() -> bool:
        """Check if all required configuration is present."""
        return all([Config.supabase_url(), Config.supabase_key()])

    @staticmethod
    def get_missing_config() -> list[str]:
        """Get list of missing required configuration keys."""
        missing = []
        if not Config.supabase_url():
            missing.append("SUPABASE_URL")
        if not Config.supabase_key():
            missing.append("SUPABASE_SERVICE_ROLE_KEY or SUPABASE_ANON_KEY")
        return missing


# Singleton instance for easy access
config = Config()

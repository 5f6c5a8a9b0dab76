"""
Configuration management using pydantic-settings.
Loads configuration from environment variables and .env file.
"""

from functools import lru_cache
from typing import List, Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application Configuration
    APP_NAME: str = "Thingy Validator"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FILE: Optional[str] = None  # Optional: also write logs to this file

    # Validator Configuration
    VALIDATION_CONFIG_PATH: Optional[str] = None  # YAML file with validator definitions
    AUTO_REGISTER_BUILTINS: bool = True

    # DNS Lookups (only used when a validation context opts in with check_dns)
    DNS_TIMEOUT: float = 3.0  # Seconds per lookup
    DNS_NAMESERVERS: Optional[str] = None  # Comma-separated, overrides system resolvers

    @property
    def dns_nameservers_list(self) -> List[str]:
        """Get configured DNS nameservers as a list."""
        if not self.DNS_NAMESERVERS:
            return []
        return [ns.strip() for ns in self.DNS_NAMESERVERS.split(",") if ns.strip()]


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to ensure settings are loaded only once.
    """
    return Settings()


# Global settings instance
settings = get_settings()

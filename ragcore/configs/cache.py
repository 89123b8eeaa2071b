"""
Result cache configuration settings.

Dependencies: pydantic_settings
System role: In-process cache sizing and expiry
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CacheSettings(BaseSettings):
    """Result cache configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CACHE_",
        case_sensitive=False,
        extra="ignore",
    )

    enabled: bool = Field(default=True, description="Cache query embeddings")
    max_entries: int = Field(default=100, gt=0, description="LRU capacity")
    default_ttl_seconds: float = Field(default=3600.0, gt=0, description="Entry lifetime (1 hour)")
    sweep_interval_seconds: float = Field(
        default=300.0,
        gt=0,
        description="Background expiry sweep interval (5 minutes)",
    )

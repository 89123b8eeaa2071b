"""
Resilience configuration settings.

Timeout, retry and circuit breaker budgets per dependency. The search path
is stricter than the embedding path.

Dependencies: pydantic, pydantic_settings
System role: Failure containment configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ResilienceSettings(BaseSettings):
    """Timeout, retry and circuit breaker configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RESILIENCE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Vector store search/index path
    search_timeout_seconds: float = Field(default=10.0, gt=0, description="Per-call search timeout")
    index_timeout_seconds: float = Field(default=30.0, gt=0, description="Per-call index write timeout")
    search_max_attempts: int = Field(default=3, ge=1, description="Attempts for vector store calls")
    search_backoff_initial: float = Field(default=0.5, ge=0, description="First retry delay (s)")
    search_backoff_max: float = Field(default=4.0, ge=0, description="Maximum retry delay (s)")

    # Embedding path
    embedding_timeout_seconds: float = Field(default=30.0, gt=0, description="Per-call embedding timeout")
    embedding_max_attempts: int = Field(default=5, ge=1, description="Attempts for embedding calls")
    embedding_backoff_initial: float = Field(default=1.0, ge=0, description="First retry delay (s)")
    embedding_backoff_max: float = Field(default=30.0, ge=0, description="Maximum retry delay (s)")

    # Circuit breaker (shared shape, one breaker per dependency)
    breaker_failure_rate_threshold: float = Field(
        default=0.5,
        gt=0,
        le=1,
        description="Failure ratio within the window that opens the circuit",
    )
    breaker_minimum_calls: int = Field(
        default=5,
        ge=1,
        description="Calls required in the window before the ratio is evaluated",
    )
    breaker_window_seconds: float = Field(default=30.0, gt=0, description="Rolling window length")
    breaker_cooldown_seconds: float = Field(default=30.0, gt=0, description="Open state duration")

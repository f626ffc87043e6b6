"""
Application settings loaded from environment variables.

Uses Pydantic Settings for type-safe configuration with validation.
All settings can be overridden via environment variables or .env file.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Remote cluster keys configuration.

    All settings are loaded from environment variables or .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extraneous env vars from broader operator configs
    )

    # Resource store selection
    resource_backend: Literal["kubernetes", "memory"] = Field(
        default="kubernetes",
        description="Resource client backend (kubernetes or memory)",
    )

    # Kubernetes connection
    kubeconfig_path: str | None = Field(
        default=None,
        description="Path to kubeconfig (None uses the default location)",
    )
    kube_context: str | None = Field(
        default=None,
        description="kubeconfig context (None uses the current context)",
    )
    in_cluster: bool = Field(
        default=False,
        description="Use the pod service account instead of a kubeconfig",
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        le=600,
        description="Upper bound for a single API server call",
    )
    store_retry_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts for transient API failures and reconcile conflicts",
    )
    field_manager: str = Field(
        default="elastic-operator",
        description="Field manager name recorded on writes",
    )

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    service_name: str = Field(
        default="remote-cluster-keys",
        description="Service name stamped on every JSON log line",
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are loaded only once.

    Returns:
        Settings instance with all configuration loaded.

    Example:
        >>> settings = get_settings()
        >>> print(settings.resource_backend)
        'kubernetes'
    """
    return Settings()

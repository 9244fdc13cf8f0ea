"""Centralized configuration using Pydantic Settings.

This module provides a single source of truth for every location,
connection and template the convertor needs.

Configuration can be overridden via environment variables:
- NETEX_STORAGE_ROOT_DIR=/srv/netex
- NETEX_STORAGE_UNVALIDATED_BUCKET=fdbt-unvalidated-netex
- NETEX_REFERENCE_REDIS_URL=redis://cache:6379/1
- NETEX_VALIDATION_SCHEMA_PATH=/opt/netex/xsd/NeTEx_publication.xsd
- NETEX_EMAIL_SENDGRID_API_KEY=...
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_DIR = Path(__file__).resolve().parent


class StorageConfig(BaseSettings):
    """Object store configuration.

    Buckets are directories below ``root_dir`` for the filesystem store.
    Environment variables prefixed with NETEX_STORAGE_.
    """

    model_config = SettingsConfigDict(env_prefix="NETEX_STORAGE_")

    root_dir: Path = Field(default_factory=lambda: Path.cwd() / "storage")
    input_bucket: str = "fdbt-matching-data"
    unvalidated_bucket: str = "fdbt-unvalidated-netex"
    validated_bucket: str = "fdbt-netex"


class ReferenceStoreConfig(BaseSettings):
    """Operator reference store (Redis) configuration.

    Environment variables prefixed with NETEX_REFERENCE_.
    """

    model_config = SettingsConfigDict(env_prefix="NETEX_REFERENCE_")

    redis_url: str = "redis://localhost:6379/0"
    key_prefix: str = "noc:"
    socket_timeout_seconds: float = 2.0
    connect_timeout_seconds: float = 2.0


class TemplateConfig(BaseSettings):
    """Document skeleton configuration.

    Environment variables prefixed with NETEX_TEMPLATE_.
    """

    model_config = SettingsConfigDict(env_prefix="NETEX_TEMPLATE_")

    template_dir: Path = Field(
        default_factory=lambda: PACKAGE_DIR / "netex" / "templates"
    )
    # Ticket variant tag -> skeleton file name
    templates: Dict[str, str] = Field(
        default_factory=lambda: {
            "GeoZone": "period_ticket_template.xml",
            "MultiService": "period_ticket_template.xml",
        }
    )

    def template_path(self, variant_tag: str) -> Path:
        """Full path to the skeleton used for a variant."""
        return self.template_dir / self.templates[variant_tag]


class ValidationConfig(BaseSettings):
    """XML Schema validation configuration.

    Environment variables prefixed with NETEX_VALIDATION_.
    """

    model_config = SettingsConfigDict(env_prefix="NETEX_VALIDATION_")

    schema_path: Path = Field(
        default_factory=lambda: Path.cwd() / "xsd" / "NeTEx_publication.xsd"
    )
    max_reported_errors: int = 20


class EmailConfig(BaseSettings):
    """Submitter notification configuration.

    Environment variables prefixed with NETEX_EMAIL_.
    """

    model_config = SettingsConfigDict(env_prefix="NETEX_EMAIL_")

    sendgrid_api_key: Optional[str] = None
    sender: str = "noreply@fares-data.example.org"
    subject: str = "Your NeTEx fares file is ready"
    attachment_type: str = "application/xml"


class ObservabilityConfig(BaseSettings):
    """Logging and observability configuration.

    Environment variables prefixed with NETEX_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="NETEX_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

        config = get_config()
        print(config.storage.unvalidated_bucket)
        print(config.templates.template_path("GeoZone"))

    Environment variables prefixed with NETEX_.
    """

    model_config = SettingsConfigDict(env_prefix="NETEX_")

    storage: StorageConfig = Field(default_factory=StorageConfig)
    reference: ReferenceStoreConfig = Field(default_factory=ReferenceStoreConfig)
    templates: TemplateConfig = Field(default_factory=TemplateConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    email: EmailConfig = Field(default_factory=EmailConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Returns:
        The application configuration instance.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()

"""
Engine Configuration

Uses pydantic-settings for environment variable loading with validation.
All configuration is centralized here for easy management.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Engine settings loaded from environment variables.

    Environment variables can be set directly or via .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="CTA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Environment
    # ==========================================================================
    environment: Literal["development", "testing", "production"] = Field(
        default="development",
        description="Runtime environment"
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Root log level for the CLI"
    )

    # ==========================================================================
    # Theme defaults (used when the document has no theme value)
    # ==========================================================================
    default_primary_color: str = Field(
        default="#2563eb",
        description="Primary color when the theme sets none"
    )

    default_background_color: str = Field(
        default="#ffffff",
        description="Background color when the theme sets none"
    )

    default_text_color: str = Field(
        default="#1f2937",
        description="Text color when the theme sets none"
    )

    default_component_gap: int = Field(
        default=16,
        ge=0,
        le=100,
        description="Gap between components in pixels when the layout sets none"
    )

    default_divider_color: str = Field(
        default="#e5e7eb",
        description="Divider color when neither props nor style set one"
    )

    # ==========================================================================
    # Markup
    # ==========================================================================
    sanitize_custom_html: bool = Field(
        default=True,
        description="Run richtext and custom_html markup through the allow-list filter"
    )

    max_html_length: int = Field(
        default=5000,
        ge=0,
        description="Maximum accepted length of richtext/custom_html content"
    )

    # ==========================================================================
    # Text round-trip
    # ==========================================================================
    json_indent: int = Field(
        default=2,
        ge=0,
        description="Indentation used when serializing documents to text"
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()

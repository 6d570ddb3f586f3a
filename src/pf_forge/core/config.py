"""Configuration management for pf_forge.

This module provides centralized configuration using pydantic-settings,
supporting environment variables, .env files, and runtime overrides.

Example:
    >>> from pf_forge.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.rules.point_buy_budget
    25

Environment Variables:
    PF_FORGE_RULES_POINT_BUY_BUDGET: Ability score point-buy budget
    PF_FORGE_RULES_STARTING_GOLD: Starting gold for equipment purchase
    PF_FORGE_RULES_BONUS_FEAT_RACES: JSON list of race ids granting a bonus feat
    PF_FORGE_DATABASE_PATH: Path to the SQLite character store
    PF_FORGE_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
"""

from __future__ import annotations

from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pf_forge.core.constants import (
    BASE_FEATS_AT_FIRST_LEVEL,
    BONUS_FEAT_RACES,
    DEFAULT_POINT_BUY_BUDGET,
    DEFAULT_STARTING_GOLD,
)
from pf_forge.core.exceptions import ConfigurationError


class RulesSettings(BaseSettings):
    """Campaign-level knobs for character creation.

    Attributes:
        point_buy_budget: Points available for ability score purchase.
        starting_gold: Gold available for starting equipment.
        base_feats: Feats every 1st-level character may select.
        bonus_feat_races: Race ids granting one extra 1st-level feat.
    """

    model_config = SettingsConfigDict(
        env_prefix="PF_FORGE_RULES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    point_buy_budget: int = Field(
        default=DEFAULT_POINT_BUY_BUDGET,
        ge=0,
        le=100,
        description="Ability score point-buy budget",
    )
    starting_gold: Decimal = Field(
        default=Decimal(DEFAULT_STARTING_GOLD),
        ge=0,
        description="Starting gold for equipment purchase",
    )
    base_feats: int = Field(
        default=BASE_FEATS_AT_FIRST_LEVEL,
        ge=0,
        description="Feats available at 1st level",
    )
    bonus_feat_races: list[str] = Field(
        default_factory=lambda: list(BONUS_FEAT_RACES),
        description="Race ids that grant a bonus feat",
    )

    @field_validator("bonus_feat_races", mode="after")
    @classmethod
    def normalize_race_ids(cls, value: list[str]) -> list[str]:
        """Lower-case race ids and drop duplicates, keeping first-seen order.

        Args:
            value: Raw race id list.

        Returns:
            Normalized race id list.
        """
        seen: list[str] = []
        for race_id in value:
            key = race_id.strip().lower()
            if key and key not in seen:
                seen.append(key)
        return seen


class StorageSettings(BaseSettings):
    """Configuration for the character store.

    Attributes:
        database_path: Path to the SQLite database file.
    """

    model_config = SettingsConfigDict(
        env_prefix="PF_FORGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_path: Path = Field(
        default_factory=lambda: Path.home() / ".pf_forge" / "characters.db",
        description="Path to SQLite character store",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        log_json: Emit JSON log lines instead of console output.
        rules: Character creation rules settings.
        storage: Character store settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="PF_FORGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="pf_forge",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="Emit JSON logs",
    )

    rules: RulesSettings = Field(default_factory=RulesSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode.

        Returns:
            True if not in debug mode.
        """
        return not self.debug


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access.

    Example:
        >>> clear_settings_cache()
        >>> settings = get_settings()  # Reloads from environment
    """
    get_settings.cache_clear()


__all__ = [
    "RulesSettings",
    "StorageSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]

"""Core module providing configuration, logging, constants and exceptions.

Exports:
    Exceptions:
        PfForgeError: Base exception for all application errors.
        DomainError: Rules-domain violations (out of range, unknown id).
        ValidationError: Character data validation errors.
        StorageError: Character store failures.

    Configuration:
        Settings: Main application settings class.
        RulesSettings: Character creation rules knobs.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        configure_logging_from_settings: Set up logging from Settings.
        get_logger: Get a configured logger instance.
        bind_context: Add context to log entries.
        clear_context: Clear logging context.
        character_context: Bind a character id for a block.
"""

from __future__ import annotations

from pf_forge.core.config import (
    RulesSettings,
    Settings,
    StorageSettings,
    clear_settings_cache,
    get_settings,
)
from pf_forge.core.exceptions import (
    ConfigurationError,
    DomainError,
    DomainErrorKind,
    OutOfRangeError,
    PfForgeError,
    StorageError,
    UnknownCatalogIdError,
    ValidationError,
)
from pf_forge.core.logging import (
    bind_context,
    character_context,
    clear_context,
    configure_logging,
    configure_logging_from_settings,
    get_logger,
)


__all__ = [
    # Exceptions
    "PfForgeError",
    "DomainErrorKind",
    "DomainError",
    "OutOfRangeError",
    "UnknownCatalogIdError",
    "ConfigurationError",
    "ValidationError",
    "StorageError",
    # Configuration
    "Settings",
    "RulesSettings",
    "StorageSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
    "bind_context",
    "clear_context",
    "character_context",
]

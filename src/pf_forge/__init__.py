"""pf_forge - Pathfinder 1E Character Builder Rules Engine.

Turns a player's raw character-creation choices plus read-only reference
catalogs into a full character sheet.

ARCHITECTURE:
- Catalogs (races, classes, skills, feats, weapons, armor) are immutable
  and indexed by id once
- Allocators (point buy, skills, feats, equipment) return new selections
  and never mutate their inputs
- Derived stats are recomputed on every call; only selections are stored

Example:
    >>> from pf_forge import Catalogs, BuildSelections, evaluate_build
    >>>
    >>> catalogs = Catalogs.from_entries(classes=[...], races=[...])
    >>> selections = BuildSelections(race_id="human", classes=[...])
    >>> result = evaluate_build(selections, catalogs)
    >>> result.stats.armor_class.total
    10

Modules:
    core: Configuration, logging, constants and exceptions.
    models: Pydantic V2 schemas for catalogs, characters and derived output.
    engine: Point buy, prerequisites, skills, feats, combat and equipment.
    storage: SQLite character store and JSON import/export.
"""

from __future__ import annotations

# Core
from pf_forge.core.config import Settings, get_settings
from pf_forge.core.exceptions import (
    DomainError,
    OutOfRangeError,
    PfForgeError,
    StorageError,
    UnknownCatalogIdError,
    ValidationError,
)
from pf_forge.core.logging import configure_logging, get_logger

# Models
from pf_forge.models import (
    AbilityScoreSet,
    BuildEvaluation,
    Catalogs,
    Character,
    CharacterDraft,
    DerivedStatsSnapshot,
)

# Engine
from pf_forge.engine.sheet import BuildSelections, derive_stats, evaluate_build

# Storage
from pf_forge.storage.database import CharacterStore, get_character_store


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "PfForgeError",
    "DomainError",
    "OutOfRangeError",
    "UnknownCatalogIdError",
    "ValidationError",
    "StorageError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "AbilityScoreSet",
    "Catalogs",
    "Character",
    "CharacterDraft",
    "DerivedStatsSnapshot",
    "BuildEvaluation",
    # Engine
    "BuildSelections",
    "derive_stats",
    "evaluate_build",
    # Storage
    "CharacterStore",
    "get_character_store",
]

"""Pydantic V2 schemas for pf_forge.

Submodules:
    enums: Closed vocabularies (Ability, BABProgression, SaveType, ...).
    catalog: Immutable reference data and the indexed Catalogs container.
    character: Character selections, the Character aggregate and its draft.
    derived: Engine output (DerivedStatsSnapshot, BuildEvaluation).

Example:
    >>> from pf_forge.models import AbilityScoreSet, Ability
    >>> scores = AbilityScoreSet(strength=16)
    >>> scores.get(Ability.STR)
    16
"""

from __future__ import annotations

# =============================================================================
# Enumerations
# =============================================================================
from pf_forge.models.enums import (
    Ability,
    Alignment,
    ArmorType,
    BABProgression,
    CatalogName,
    ClassType,
    FavoredClassBonus,
    FeatSourceType,
    FeatType,
    SaveProgression,
    SaveType,
    Size,
    SpellcastingType,
    WeaponType,
)

# =============================================================================
# Reference Catalogs
# =============================================================================
from pf_forge.models.catalog import (
    ArmorDefinition,
    Catalogs,
    ClassDefinition,
    ClassProficiencies,
    ClassSaves,
    FeatDefinition,
    FeatPrerequisites,
    ItemDefinition,
    RaceDefinition,
    SkillDefinition,
    SkillRequirement,
    WeaponDefinition,
)

# =============================================================================
# Character
# =============================================================================
from pf_forge.models.character import (
    AbilityScoreSet,
    Character,
    CharacterClassEntry,
    CharacterDraft,
    CharacterEquipmentEntry,
    CharacterFeatEntry,
    CharacterSkillEntry,
    Currency,
    HitPoints,
    generate_character_id,
)

# =============================================================================
# Derived Output
# =============================================================================
from pf_forge.models.derived import (
    ArmorClass,
    ArmorClassBreakdown,
    BuildEvaluation,
    CarryingCapacity,
    DerivedStatsSnapshot,
    SavingThrows,
    SkillBreakdown,
    SkillModifier,
)


__all__ = [
    # Enums
    "Ability",
    "Alignment",
    "ArmorType",
    "BABProgression",
    "CatalogName",
    "ClassType",
    "FavoredClassBonus",
    "FeatSourceType",
    "FeatType",
    "SaveProgression",
    "SaveType",
    "Size",
    "SpellcastingType",
    "WeaponType",
    # Catalogs
    "ArmorDefinition",
    "Catalogs",
    "ClassDefinition",
    "ClassProficiencies",
    "ClassSaves",
    "FeatDefinition",
    "FeatPrerequisites",
    "ItemDefinition",
    "RaceDefinition",
    "SkillDefinition",
    "SkillRequirement",
    "WeaponDefinition",
    # Character
    "AbilityScoreSet",
    "Character",
    "CharacterClassEntry",
    "CharacterDraft",
    "CharacterEquipmentEntry",
    "CharacterFeatEntry",
    "CharacterSkillEntry",
    "Currency",
    "HitPoints",
    "generate_character_id",
    # Derived
    "ArmorClass",
    "ArmorClassBreakdown",
    "BuildEvaluation",
    "CarryingCapacity",
    "DerivedStatsSnapshot",
    "SavingThrows",
    "SkillBreakdown",
    "SkillModifier",
]

"""Enumeration types for Pathfinder 1E character building.

This module defines the closed vocabularies used by reference catalogs
and character data: abilities, progression tiers, equipment categories,
feat sources and the like. Values match the identifiers used in the
JSON catalog files.
"""

from __future__ import annotations

from enum import StrEnum


class Ability(StrEnum):
    """The six ability scores.

    Values are the three-letter keys used by catalog data
    (e.g. a race's ``abilityScoreModifiers``).
    """

    STR = "STR"
    DEX = "DEX"
    CON = "CON"
    INT = "INT"
    WIS = "WIS"
    CHA = "CHA"

    @property
    def full_name(self) -> str:
        """Get the full name of the ability.

        Returns:
            Full ability name (e.g., 'Strength' for STR).
        """
        return _ABILITY_FULL_NAMES[self]

    @property
    def field_name(self) -> str:
        """Get the AbilityScoreSet attribute holding this ability.

        Returns:
            Lower-case full name (e.g., 'strength').
        """
        return self.full_name.lower()


_ABILITY_FULL_NAMES: dict[Ability, str] = {
    Ability.STR: "Strength",
    Ability.DEX: "Dexterity",
    Ability.CON: "Constitution",
    Ability.INT: "Intelligence",
    Ability.WIS: "Wisdom",
    Ability.CHA: "Charisma",
}


class BABProgression(StrEnum):
    """Base attack bonus progression tiers."""

    FULL = "full"
    MEDIUM = "medium"
    POOR = "poor"


class SaveProgression(StrEnum):
    """Saving throw progression tiers."""

    GOOD = "good"
    POOR = "poor"


class SaveType(StrEnum):
    """The three saving throws and their key abilities."""

    FORTITUDE = "fortitude"
    REFLEX = "reflex"
    WILL = "will"

    @property
    def ability(self) -> Ability:
        """Get the ability whose modifier is added to this save.

        Returns:
            CON for Fortitude, DEX for Reflex, WIS for Will.
        """
        return {
            SaveType.FORTITUDE: Ability.CON,
            SaveType.REFLEX: Ability.DEX,
            SaveType.WILL: Ability.WIS,
        }[self]


class Size(StrEnum):
    """Creature size categories."""

    FINE = "Fine"
    DIMINUTIVE = "Diminutive"
    TINY = "Tiny"
    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"
    HUGE = "Huge"
    GARGANTUAN = "Gargantuan"
    COLOSSAL = "Colossal"


class Alignment(StrEnum):
    """The nine alignments."""

    LAWFUL_GOOD = "LG"
    NEUTRAL_GOOD = "NG"
    CHAOTIC_GOOD = "CG"
    LAWFUL_NEUTRAL = "LN"
    TRUE_NEUTRAL = "TN"
    CHAOTIC_NEUTRAL = "CN"
    LAWFUL_EVIL = "LE"
    NEUTRAL_EVIL = "NE"
    CHAOTIC_EVIL = "CE"


class ClassType(StrEnum):
    """Class categories."""

    BASE = "base"
    PRESTIGE = "prestige"
    NPC = "npc"


class SpellcastingType(StrEnum):
    """Spellcasting traditions."""

    ARCANE = "arcane"
    DIVINE = "divine"
    PSYCHIC = "psychic"


class FeatType(StrEnum):
    """Feat categories."""

    GENERAL = "general"
    COMBAT = "combat"
    METAMAGIC = "metamagic"
    ITEM_CREATION = "item creation"
    TEAMWORK = "teamwork"


class FeatSourceType(StrEnum):
    """How a character came to have a feat."""

    LEVEL = "level"
    CLASS = "class"
    RACE = "race"
    TRAIT = "trait"


class FavoredClassBonus(StrEnum):
    """Per-level favored class reward."""

    HP = "hp"
    SKILL = "skill"


class WeaponType(StrEnum):
    """Weapon proficiency groups."""

    SIMPLE = "simple"
    MARTIAL = "martial"
    EXOTIC = "exotic"


class ArmorType(StrEnum):
    """Armor weight classes (shields are their own class)."""

    LIGHT = "light"
    MEDIUM = "medium"
    HEAVY = "heavy"
    SHIELD = "shield"


class CatalogName(StrEnum):
    """Reference catalogs a lookup can target."""

    RACES = "races"
    CLASSES = "classes"
    SKILLS = "skills"
    FEATS = "feats"
    WEAPONS = "weapons"
    ARMOR = "armor"


__all__ = [
    "Ability",
    "BABProgression",
    "SaveProgression",
    "SaveType",
    "Size",
    "Alignment",
    "ClassType",
    "SpellcastingType",
    "FeatType",
    "FeatSourceType",
    "FavoredClassBonus",
    "WeaponType",
    "ArmorType",
    "CatalogName",
]

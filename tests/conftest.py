"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the pf_forge test suite. Catalog fixtures are written in the camelCase
JSON shape of the external catalog files.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest


if TYPE_CHECKING:
    from collections.abc import Generator

    from pf_forge.models.catalog import Catalogs


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from pf_forge.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "PF_FORGE_DEBUG": "true",
        "PF_FORGE_LOG_LEVEL": "DEBUG",
        "PF_FORGE_RULES_POINT_BUY_BUDGET": "20",
        "PF_FORGE_RULES_STARTING_GOLD": "175.5",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Catalog Data Fixtures
# =============================================================================


@pytest.fixture
def class_data() -> list[dict[str, Any]]:
    """Provide fighter, rogue and wizard class entries.

    Returns:
        List of raw class mappings.
    """
    return [
        {
            "id": "fighter",
            "name": "Fighter",
            "key": "Ftr",
            "hitDie": 10,
            "skillPointsPerLevel": 2,
            "classType": "base",
            "baseAttackBonus": "full",
            "saves": {"fortitude": "good", "reflex": "poor", "will": "poor"},
            "classSkills": ["climb", "intimidate", "ride", "swim"],
            "proficiencies": {
                "armor": ["Light", "Medium", "Heavy", "heavy-steel-shield"],
                "shields": ["Shields"],
                "weapons": ["Simple", "Martial"],
            },
            "classFeatures": [
                {"id": "bonus-feat", "name": "Bonus Feat", "level": 1, "type": "Ex"},
            ],
        },
        {
            "id": "rogue",
            "name": "Rogue",
            "hitDie": 8,
            "skillPointsPerLevel": 8,
            "baseAttackBonus": "medium",
            "saves": {"fortitude": "poor", "reflex": "good", "will": "poor"},
            "classSkills": ["acrobatics", "climb", "stealth", "swim"],
            "proficiencies": {
                "armor": ["Light"],
                "weapons": ["Simple", "rapier", "shortbow"],
            },
        },
        {
            "id": "wizard",
            "name": "Wizard",
            "hitDie": 6,
            "skillPointsPerLevel": 2,
            "baseAttackBonus": "poor",
            "saves": {"fortitude": "poor", "reflex": "poor", "will": "good"},
            "classSkills": ["knowledge-arcana", "spellcraft"],
            "proficiencies": {
                "armor": [],
                "weapons": ["Dagger", "quarterstaff"],
            },
            "spellcasting": {
                "type": "arcane",
                "stat": "INT",
                "spellsPerDay": [[3, 1]],
                "spellList": "wizard",
            },
        },
    ]


@pytest.fixture
def race_data() -> list[dict[str, Any]]:
    """Provide human, dwarf and elf race entries."""
    return [
        {"id": "human", "name": "Human", "size": "Medium", "speed": 30, "abilityScoreModifiers": {}},
        {
            "id": "dwarf",
            "name": "Dwarf",
            "size": "Medium",
            "speed": 20,
            "abilityScoreModifiers": {"CON": 2, "WIS": 2, "CHA": -2},
            "vision": "darkvision",
            "visionRange": 60,
        },
        {
            "id": "elf",
            "name": "Elf",
            "size": "Medium",
            "speed": 30,
            "abilityScoreModifiers": {"DEX": 2, "INT": 2, "CON": -2},
            "vision": "low-light",
        },
    ]


@pytest.fixture
def skill_data() -> list[dict[str, Any]]:
    """Provide a handful of skills with varied key abilities."""
    return [
        {"id": "acrobatics", "name": "Acrobatics", "ability": "DEX", "armorCheckPenalty": True},
        {"id": "climb", "name": "Climb", "ability": "STR", "armorCheckPenalty": True},
        {"id": "intimidate", "name": "Intimidate", "ability": "CHA"},
        {"id": "knowledge-arcana", "name": "Knowledge (Arcana)", "ability": "INT", "trainedOnly": True},
        {"id": "ride", "name": "Ride", "ability": "DEX", "armorCheckPenalty": True},
        {"id": "spellcraft", "name": "Spellcraft", "ability": "INT", "trainedOnly": True},
        {"id": "stealth", "name": "Stealth", "ability": "DEX", "armorCheckPenalty": True},
        {"id": "swim", "name": "Swim", "ability": "STR", "armorCheckPenalty": True},
    ]


@pytest.fixture
def feat_data() -> list[dict[str, Any]]:
    """Provide feats covering every prerequisite clause."""
    return [
        {
            "id": "power-attack",
            "name": "Power Attack",
            "type": "combat",
            "prerequisites": {"abilityScores": {"STR": 13}, "baseAttackBonus": 1},
        },
        {
            "id": "cleave",
            "name": "Cleave",
            "type": "combat",
            "prerequisites": {
                "abilityScores": {"STR": 13},
                "baseAttackBonus": 1,
                "feats": ["power-attack"],
            },
        },
        {
            "id": "improved-critical",
            "name": "Improved Critical",
            "type": "combat",
            "prerequisites": {"baseAttackBonus": 8, "other": "Proficiency with weapon"},
        },
        {
            "id": "mounted-combat",
            "name": "Mounted Combat",
            "type": "combat",
            "prerequisites": {"skills": [{"id": "ride", "ranks": 1}]},
        },
        {"id": "toughness", "name": "Toughness", "type": "general"},
        {"id": "weapon-finesse", "name": "Weapon Finesse", "type": "combat", "prerequisites": {}},
    ]


@pytest.fixture
def weapon_data() -> list[dict[str, Any]]:
    """Provide simple, martial and exotic weapons."""
    return [
        {"id": "dagger", "name": "Dagger", "cost": 2, "weight": 1, "weaponType": "simple",
         "damageSmall": "1d3", "damageMedium": "1d4", "critical": "19-20/x2"},
        {"id": "longsword", "name": "Longsword", "cost": 15, "weight": 4, "weaponType": "martial",
         "damageMedium": "1d8", "critical": "19-20/x2"},
        {"id": "rapier", "name": "Rapier", "cost": 20, "weight": 2, "weaponType": "martial"},
        {"id": "bastard-sword", "name": "Bastard Sword", "cost": 35, "weight": 6, "weaponType": "exotic"},
        {"id": "handaxe", "name": "Handaxe", "cost": 12.5, "weight": 3, "weaponType": "martial"},
    ]


@pytest.fixture
def armor_data() -> list[dict[str, Any]]:
    """Provide armor of every weight class plus shields."""
    return [
        {"id": "leather", "name": "Leather", "cost": 10, "weight": 15, "armorType": "light",
         "armorBonus": 2, "maxDexBonus": 6, "armorCheckPenalty": 0, "arcaneSpellFailure": 10},
        {"id": "scale-mail", "name": "Scale Mail", "cost": 50, "weight": 30, "armorType": "medium",
         "armorBonus": 5, "maxDexBonus": 3, "armorCheckPenalty": -4, "arcaneSpellFailure": 25},
        {"id": "full-plate", "name": "Full Plate", "cost": 1500, "weight": 50, "armorType": "heavy",
         "armorBonus": 9, "maxDexBonus": 1, "armorCheckPenalty": -6, "arcaneSpellFailure": 35},
        {"id": "heavy-steel-shield", "name": "Heavy Steel Shield", "cost": 20, "weight": 15,
         "armorType": "shield", "armorBonus": 2},
        {"id": "buckler", "name": "Buckler", "cost": 5, "weight": 5, "armorType": "shield",
         "armorBonus": 1},
    ]


@pytest.fixture
def catalogs(
    class_data: list[dict[str, Any]],
    race_data: list[dict[str, Any]],
    skill_data: list[dict[str, Any]],
    feat_data: list[dict[str, Any]],
    weapon_data: list[dict[str, Any]],
    armor_data: list[dict[str, Any]],
) -> Catalogs:
    """Build indexed catalogs from the raw fixtures.

    Returns:
        Catalogs instance.
    """
    from pf_forge.models.catalog import Catalogs

    return Catalogs.from_entries(
        races=race_data,
        classes=class_data,
        skills=skill_data,
        feats=feat_data,
        weapons=weapon_data,
        armor=armor_data,
    )


# =============================================================================
# Character Fixtures
# =============================================================================


@pytest.fixture
def sample_character_data() -> dict[str, Any]:
    """Provide a saved character in the persisted JSON shape.

    Returns:
        Dictionary of character data.
    """
    return {
        "id": "char_0123456789ab",
        "gameSystem": "pathfinder1e",
        "name": "Valeros",
        "alignment": "NG",
        "race": "human",
        "classes": [
            {"classId": "fighter", "level": 1, "hitPoints": [10], "favoredClassBonus": ["hp"]},
        ],
        "level": 1,
        "abilityScores": {"STR": 16, "DEX": 14, "CON": 14, "INT": 10, "WIS": 12, "CHA": 8},
        "skills": [{"skillId": "climb", "ranks": 1, "isClassSkill": True}],
        "feats": [{"featId": "power-attack", "sourceType": "level", "sourceLevel": 1}],
        "equipment": [{"itemId": "longsword", "quantity": 1, "equipped": True}],
        "currency": {"cp": 0, "sp": 0, "gp": "135", "pp": 0},
        "hp": {"max": 10, "current": 10, "temp": 0},
        "createdAt": "2024-01-01T12:00:00+00:00",
        "updatedAt": "2024-01-01T12:00:00+00:00",
    }


@pytest.fixture
def sample_character(sample_character_data: dict[str, Any]) -> Any:
    """Create a sample Character instance for testing.

    Returns:
        Character instance.
    """
    from pf_forge.models.character import Character

    return Character.model_validate(sample_character_data)


# =============================================================================
# Utility Fixtures
# =============================================================================


@pytest.fixture
def temp_db_path(tmp_path: Any) -> Any:
    """Provide a database path inside a temporary directory.

    Returns:
        Path to a not-yet-created SQLite file.
    """
    return tmp_path / "data" / "characters.db"

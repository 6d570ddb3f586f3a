"""Rules constants for Pathfinder 1E character creation.

This module defines the fixed tables and default values the engine
computes against. Values that a table or campaign may want to change
(point-buy budget, starting gold, bonus-feat races) are also exposed
through RulesSettings.
"""

from __future__ import annotations

# =============================================================================
# Point Buy (Core Rulebook p.16)
# =============================================================================

POINT_BUY_COSTS: dict[int, int] = {
    7: -4,
    8: -2,
    9: -1,
    10: 0,
    11: 1,
    12: 2,
    13: 3,
    14: 5,
    15: 7,
    16: 10,
    17: 13,
    18: 17,
}
"""Cost of each base score. Authoritative; never extrapolated."""

POINT_BUY_MIN = 7
"""Lowest base score purchasable with point buy."""

POINT_BUY_MAX = 18
"""Highest base score purchasable with point buy (before racial modifiers)."""

DEFAULT_POINT_BUY_BUDGET = 25
"""Standard fantasy point-buy budget."""

DEFAULT_ABILITY_SCORE = 10
"""Score every ability starts at (costs zero points)."""

# =============================================================================
# Skills
# =============================================================================

CLASS_SKILL_BONUS = 3
"""Flat bonus for a class skill with at least one rank."""

MIN_SKILL_POINTS_PER_LEVEL = 1
"""Skill points granted per level regardless of INT penalty."""

# =============================================================================
# Feats
# =============================================================================

BASE_FEATS_AT_FIRST_LEVEL = 1
"""Feats every 1st-level character may select."""

BONUS_FEAT_RACES: tuple[str, ...] = ("human",)
"""Race ids that grant one extra feat at 1st level."""

MAX_EVALUATED_BAB_PREREQUISITE = 1
"""Highest BAB prerequisite a 1st-level character can satisfy."""

# =============================================================================
# Combat
# =============================================================================

BASE_ARMOR_CLASS = 10
BASE_COMBAT_MANEUVER_DEFENSE = 10

MEDIUM_SIZE_MODIFIER = 0
"""Only Medium creatures are supported; size never alters CMB/CMD."""

MIN_HIT_POINTS = 1

# =============================================================================
# Carrying Capacity (Medium creatures, pounds)
# =============================================================================

LIGHT_LOAD_MULTIPLIER = 10
MEDIUM_LOAD_MULTIPLIER = 20
HEAVY_LOAD_MULTIPLIER = 30
LIFT_MULTIPLIER = 2
"""Lift over head is this multiple of the heavy load."""
DRAG_MULTIPLIER = 5
"""Push or drag is this multiple of the lift load."""

# =============================================================================
# Equipment
# =============================================================================

DEFAULT_STARTING_GOLD = 150
"""Average starting gold for a 1st-level character."""

# =============================================================================
# Character
# =============================================================================

GAME_SYSTEM = "pathfinder1e"
DEFAULT_ALIGNMENT = "TN"
MIN_CHARACTER_LEVEL = 1


__all__ = [
    # Point Buy
    "POINT_BUY_COSTS",
    "POINT_BUY_MIN",
    "POINT_BUY_MAX",
    "DEFAULT_POINT_BUY_BUDGET",
    "DEFAULT_ABILITY_SCORE",
    # Skills
    "CLASS_SKILL_BONUS",
    "MIN_SKILL_POINTS_PER_LEVEL",
    # Feats
    "BASE_FEATS_AT_FIRST_LEVEL",
    "BONUS_FEAT_RACES",
    "MAX_EVALUATED_BAB_PREREQUISITE",
    # Combat
    "BASE_ARMOR_CLASS",
    "BASE_COMBAT_MANEUVER_DEFENSE",
    "MEDIUM_SIZE_MODIFIER",
    "MIN_HIT_POINTS",
    # Carrying Capacity
    "LIGHT_LOAD_MULTIPLIER",
    "MEDIUM_LOAD_MULTIPLIER",
    "HEAVY_LOAD_MULTIPLIER",
    "LIFT_MULTIPLIER",
    "DRAG_MULTIPLIER",
    # Equipment
    "DEFAULT_STARTING_GOLD",
    # Character
    "GAME_SYSTEM",
    "DEFAULT_ALIGNMENT",
    "MIN_CHARACTER_LEVEL",
]

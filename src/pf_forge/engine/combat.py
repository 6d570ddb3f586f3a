"""Derived combat statistics.

Every class-dependent figure is summed over all class entries, so the
result does not depend on entry order. A class id missing from the
catalog contributes nothing and is logged at warning level; the
computation always completes.

Only Medium creatures are supported: the size modifier is always 0.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from pf_forge.core.constants import (
    BASE_ARMOR_CLASS,
    BASE_COMBAT_MANEUVER_DEFENSE,
    DRAG_MULTIPLIER,
    HEAVY_LOAD_MULTIPLIER,
    LIFT_MULTIPLIER,
    LIGHT_LOAD_MULTIPLIER,
    MEDIUM_LOAD_MULTIPLIER,
    MEDIUM_SIZE_MODIFIER,
    MIN_HIT_POINTS,
)
from pf_forge.core.logging import get_logger
from pf_forge.engine.abilities import ability_modifier
from pf_forge.models.catalog import Catalogs, ClassDefinition
from pf_forge.models.character import AbilityScoreSet, CharacterClassEntry
from pf_forge.models.derived import ArmorClass, ArmorClassBreakdown, CarryingCapacity, SavingThrows
from pf_forge.models.enums import Ability, BABProgression, FavoredClassBonus, SaveProgression, SaveType

logger = get_logger(__name__)


def _resolved(
    classes: Sequence[CharacterClassEntry],
    catalogs: Catalogs,
) -> Iterator[tuple[CharacterClassEntry, ClassDefinition]]:
    """Pair class entries with their definitions, skipping unknown ids."""
    for entry in classes:
        class_def = catalogs.find_class(entry.class_id)
        if class_def is None:
            logger.warning("Class not in catalog, contributing zero", class_id=entry.class_id)
            continue
        yield entry, class_def


# =============================================================================
# Attack Bonus & Saves
# =============================================================================


def class_base_attack_bonus(progression: BABProgression, level: int) -> int:
    """BAB granted by one class at a given level.

    Args:
        progression: Full, medium or poor.
        level: Levels in the class.

    Returns:
        ``level``, ``floor(level * 3 / 4)`` or ``floor(level / 2)``.
    """
    if progression == BABProgression.FULL:
        return level
    if progression == BABProgression.MEDIUM:
        return level * 3 // 4
    return level // 2


def base_attack_bonus(classes: Sequence[CharacterClassEntry], catalogs: Catalogs) -> int:
    """Sum BAB over every class entry."""
    return sum(
        class_base_attack_bonus(class_def.base_attack_bonus, entry.level)
        for entry, class_def in _resolved(classes, catalogs)
    )


def class_base_save(progression: SaveProgression, level: int) -> int:
    """Base save granted by one class: ``2 + level // 2`` if good, ``level // 3`` if poor."""
    if progression == SaveProgression.GOOD:
        return 2 + level // 2
    return level // 3


def base_save(
    classes: Sequence[CharacterClassEntry],
    catalogs: Catalogs,
    save_type: SaveType,
) -> int:
    return sum(
        class_base_save(class_def.saves.for_save(save_type), entry.level)
        for entry, class_def in _resolved(classes, catalogs)
    )


def saving_throw(
    ability_scores: AbilityScoreSet,
    classes: Sequence[CharacterClassEntry],
    catalogs: Catalogs,
    save_type: SaveType,
) -> int:
    """Total one saving throw.

    Args:
        ability_scores: Final ability scores.
        classes: Class entries.
        catalogs: Reference catalogs.
        save_type: Fortitude (CON), Reflex (DEX) or Will (WIS).

    Returns:
        Summed base save plus the key ability modifier.
    """
    return base_save(classes, catalogs, save_type) + ability_modifier(
        ability_scores.get(save_type.ability)
    )


def saving_throws(
    ability_scores: AbilityScoreSet,
    classes: Sequence[CharacterClassEntry],
    catalogs: Catalogs,
) -> SavingThrows:
    return SavingThrows(
        fortitude=saving_throw(ability_scores, classes, catalogs, SaveType.FORTITUDE),
        reflex=saving_throw(ability_scores, classes, catalogs, SaveType.REFLEX),
        will=saving_throw(ability_scores, classes, catalogs, SaveType.WILL),
    )


# =============================================================================
# Defense & Attacks
# =============================================================================


def armor_class(
    ability_scores: AbilityScoreSet,
    armor_bonus: int = 0,
    shield_bonus: int = 0,
    natural_armor: int = 0,
) -> ArmorClass:
    """Compute armor class with touch and flat-footed variants.

    Armor, shield and natural armor bonuses are taken as given; they are
    not derived from equipped items. Deflection and misc are always 0.

    Args:
        ability_scores: Final ability scores.
        armor_bonus: Armor bonus.
        shield_bonus: Shield bonus.
        natural_armor: Natural armor bonus.

    Returns:
        ArmorClass where touch drops armor, shield and natural armor and
        flat-footed drops DEX.
    """
    breakdown = ArmorClassBreakdown(
        base=BASE_ARMOR_CLASS,
        armor=armor_bonus,
        shield=shield_bonus,
        dex=ability_modifier(ability_scores.dexterity),
        natural=natural_armor,
    )
    total = (
        breakdown.base
        + breakdown.armor
        + breakdown.shield
        + breakdown.dex
        + breakdown.natural
        + breakdown.deflection
        + breakdown.misc
    )
    return ArmorClass(
        total=total,
        touch=breakdown.base + breakdown.dex + breakdown.deflection + breakdown.misc,
        flat_footed=total - breakdown.dex,
        breakdown=breakdown,
    )


def initiative(ability_scores: AbilityScoreSet) -> int:
    return ability_modifier(ability_scores.dexterity)


def melee_attack(ability_scores: AbilityScoreSet, bab: int) -> int:
    return bab + ability_modifier(ability_scores.strength)


def ranged_attack(ability_scores: AbilityScoreSet, bab: int) -> int:
    return bab + ability_modifier(ability_scores.dexterity)


def combat_maneuver_bonus(ability_scores: AbilityScoreSet, bab: int) -> int:
    return bab + ability_modifier(ability_scores.strength) + MEDIUM_SIZE_MODIFIER


def combat_maneuver_defense(ability_scores: AbilityScoreSet, bab: int) -> int:
    return (
        BASE_COMBAT_MANEUVER_DEFENSE
        + bab
        + ability_modifier(ability_scores.strength)
        + ability_modifier(ability_scores.dexterity)
        + MEDIUM_SIZE_MODIFIER
    )


# =============================================================================
# Hit Points & Encumbrance
# =============================================================================


def class_hit_points(hit_die: int, level: int, con_mod: int) -> int:
    """Hit points from one class using the average method.

    The first level gets the full hit die; each later level gets
    ``hit_die // 2 + 1``. CON applies to every level.
    """
    first = hit_die + con_mod
    later = (level - 1) * ((hit_die // 2 + 1) + con_mod)
    return first + later


def max_hit_points(
    ability_scores: AbilityScoreSet,
    classes: Sequence[CharacterClassEntry],
    catalogs: Catalogs,
) -> int:
    """Maximum hit points over all class entries.

    Each ``hp`` favored class token adds one. The total is never below 1.

    Args:
        ability_scores: Final ability scores.
        classes: Class entries.
        catalogs: Reference catalogs.

    Returns:
        Maximum hit points.
    """
    con_mod = ability_modifier(ability_scores.get(Ability.CON))
    total = 0
    for entry, class_def in _resolved(classes, catalogs):
        total += class_hit_points(class_def.hit_die, entry.level, con_mod)
        total += sum(1 for token in entry.favored_class_bonus if token == FavoredClassBonus.HP)
    return max(MIN_HIT_POINTS, total)


def carrying_capacity(ability_scores: AbilityScoreSet) -> CarryingCapacity:
    strength = ability_scores.strength
    heavy = strength * HEAVY_LOAD_MULTIPLIER
    lift = heavy * LIFT_MULTIPLIER
    return CarryingCapacity(
        light=strength * LIGHT_LOAD_MULTIPLIER,
        medium=strength * MEDIUM_LOAD_MULTIPLIER,
        heavy=heavy,
        lift=lift,
        drag=lift * DRAG_MULTIPLIER,
    )


def format_modifier(value: int) -> str:
    """Render a modifier with an explicit sign ("+2", "+0", "-1")."""
    return f"+{value}" if value >= 0 else str(value)


__all__ = [
    "class_base_attack_bonus",
    "base_attack_bonus",
    "class_base_save",
    "base_save",
    "saving_throw",
    "saving_throws",
    "armor_class",
    "initiative",
    "melee_attack",
    "ranged_attack",
    "combat_maneuver_bonus",
    "combat_maneuver_defense",
    "class_hit_points",
    "max_hit_points",
    "carrying_capacity",
    "format_modifier",
]

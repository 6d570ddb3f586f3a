"""Skill point allocation and skill modifiers.

Ranks are bought one at a time from a per-level pool. A skill with no
ranks has no entry; removing the last rank drops the entry entirely.
"""

from __future__ import annotations

from collections.abc import Sequence

from pf_forge.core.constants import CLASS_SKILL_BONUS, MIN_SKILL_POINTS_PER_LEVEL
from pf_forge.core.logging import get_logger
from pf_forge.engine.abilities import ability_modifier
from pf_forge.models.catalog import Catalogs, ClassDefinition, SkillDefinition
from pf_forge.models.character import AbilityScoreSet, CharacterSkillEntry
from pf_forge.models.derived import SkillBreakdown, SkillModifier
from pf_forge.models.enums import CatalogName

logger = get_logger(__name__)


# =============================================================================
# Modifiers
# =============================================================================


def class_skill_bonus(ranks: int, is_class_skill: bool) -> int:
    """+3 for a class skill with at least one rank, otherwise 0."""
    if ranks > 0 and is_class_skill:
        return CLASS_SKILL_BONUS
    return 0


def skill_modifier(ability_mod: int, ranks: int, is_class_skill: bool) -> SkillModifier:
    """Total a skill check modifier.

    Args:
        ability_mod: Modifier of the skill's key ability.
        ranks: Ranks invested.
        is_class_skill: Whether the skill is on the class list.

    Returns:
        Total and breakdown. ``misc`` is always 0.
    """
    bonus = class_skill_bonus(ranks, is_class_skill)
    return SkillModifier(
        total=ranks + ability_mod + bonus,
        breakdown=SkillBreakdown(ranks=ranks, ability_mod=ability_mod, class_bonus=bonus),
    )


def skill_sheet(
    ability_scores: AbilityScoreSet,
    skills: Sequence[CharacterSkillEntry],
    catalogs: Catalogs,
) -> dict[str, SkillModifier]:
    """Compute modifiers for every skill in the catalog.

    Skills without an entry are reported with 0 ranks. Entries naming a
    skill missing from the catalog are skipped.

    Args:
        ability_scores: Final ability scores.
        skills: Allocated skill entries.
        catalogs: Reference catalogs.

    Returns:
        Modifier by skill id, in catalog order.
    """
    entries = {entry.skill_id: entry for entry in skills}
    for skill_id in entries.keys() - catalogs.skills.keys():
        logger.warning("Skill entry not in catalog", skill_id=skill_id)

    sheet: dict[str, SkillModifier] = {}
    for skill_id, skill in catalogs.skills.items():
        entry = entries.get(skill_id)
        sheet[skill_id] = skill_modifier(
            ability_modifier(ability_scores.get(skill.ability)),
            entry.ranks if entry else 0,
            entry.is_class_skill if entry else False,
        )
    return sheet


# =============================================================================
# Allocation
# =============================================================================


def skill_points_available(skill_points_per_level: int, int_mod: int) -> int:
    """Skill points for one level; never less than 1."""
    return max(MIN_SKILL_POINTS_PER_LEVEL, skill_points_per_level + int_mod)


def max_ranks_per_skill(character_level: int) -> int:
    return character_level


def skill_points_spent(skills: Sequence[CharacterSkillEntry]) -> int:
    return sum(entry.ranks for entry in skills)


def skill_points_remaining(skills: Sequence[CharacterSkillEntry], available: int) -> int:
    return available - skill_points_spent(skills)


def is_class_skill(class_def: ClassDefinition | None, skill_id: str) -> bool:
    if class_def is None:
        return False
    return skill_id in class_def.class_skills


def current_ranks(skills: Sequence[CharacterSkillEntry], skill_id: str) -> int:
    for entry in skills:
        if entry.skill_id == skill_id:
            return entry.ranks
    return 0


def can_increase_skill(
    skills: Sequence[CharacterSkillEntry],
    skill_id: str,
    available: int,
    character_level: int = 1,
) -> bool:
    """Check whether another rank can go into a skill.

    Requires ranks below the per-skill cap and at least one unspent point.
    """
    return (
        current_ranks(skills, skill_id) < max_ranks_per_skill(character_level)
        and skill_points_remaining(skills, available) > 0
    )


def can_decrease_skill(skills: Sequence[CharacterSkillEntry], skill_id: str) -> bool:
    return current_ranks(skills, skill_id) > 0


def increase_skill(
    skills: Sequence[CharacterSkillEntry],
    skill_id: str,
    catalogs: Catalogs,
    class_def: ClassDefinition | None,
    available: int,
    character_level: int = 1,
) -> list[CharacterSkillEntry]:
    """Add one rank to a skill if allowed.

    The entry caches whether the skill is a class skill for ``class_def``.

    Args:
        skills: Current skill entries.
        skill_id: Skill to raise.
        catalogs: Reference catalogs.
        class_def: The character's class, or None.
        available: Skill points available.
        character_level: Character level (caps ranks).

    Returns:
        The new skill entry list; unchanged if the increase is not allowed.

    Raises:
        UnknownCatalogIdError: If the skill id is not in the catalog.
    """
    skill: SkillDefinition = catalogs.lookup(CatalogName.SKILLS, skill_id)
    if not can_increase_skill(skills, skill_id, available, character_level):
        logger.debug("Skill increase rejected", skill_id=skill_id, ranks=current_ranks(skills, skill_id))
        return list(skills)

    updated = CharacterSkillEntry(
        skill_id=skill.id,
        ranks=current_ranks(skills, skill_id) + 1,
        is_class_skill=is_class_skill(class_def, skill_id),
    )
    if current_ranks(skills, skill_id) == 0:
        return [*skills, updated]
    return [updated if entry.skill_id == skill_id else entry for entry in skills]


def decrease_skill(skills: Sequence[CharacterSkillEntry], skill_id: str) -> list[CharacterSkillEntry]:
    """Remove one rank from a skill, dropping the entry at zero.

    Returns:
        The new skill entry list; unchanged if the skill has no ranks.
    """
    result: list[CharacterSkillEntry] = []
    for entry in skills:
        if entry.skill_id != skill_id:
            result.append(entry)
        elif entry.ranks > 1:
            result.append(entry.model_copy(update={"ranks": entry.ranks - 1}))
    return result


__all__ = [
    "class_skill_bonus",
    "skill_modifier",
    "skill_sheet",
    "skill_points_available",
    "max_ranks_per_skill",
    "skill_points_spent",
    "skill_points_remaining",
    "is_class_skill",
    "current_ranks",
    "can_increase_skill",
    "can_decrease_skill",
    "increase_skill",
    "decrease_skill",
]

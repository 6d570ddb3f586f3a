"""Proficiency and feat prerequisite resolution.

Proficiency is advisory: a non-proficient item can still be bought, it is
only flagged. Prerequisites gate feat selection and are evaluated against
a PrerequisiteContext snapshot of the character's current choices.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from pydantic import BaseModel, ConfigDict, Field

from pf_forge.core.constants import MAX_EVALUATED_BAB_PREREQUISITE
from pf_forge.models.catalog import (
    ArmorDefinition,
    ClassDefinition,
    FeatDefinition,
    ItemDefinition,
    WeaponDefinition,
)
from pf_forge.models.character import AbilityScoreSet
from pf_forge.models.enums import ArmorType, WeaponType


# =============================================================================
# Proficiency
# =============================================================================

_WEAPON_GROUPS: dict[str, frozenset[WeaponType]] = {
    "Simple": frozenset({WeaponType.SIMPLE}),
    "Martial": frozenset({WeaponType.SIMPLE, WeaponType.MARTIAL}),
}

_ARMOR_GROUPS: dict[str, frozenset[ArmorType]] = {
    "Light": frozenset({ArmorType.LIGHT}),
    "Medium": frozenset({ArmorType.LIGHT, ArmorType.MEDIUM}),
    "Heavy": frozenset({ArmorType.LIGHT, ArmorType.MEDIUM, ArmorType.HEAVY}),
}


def _matches(
    entries: Iterable[str],
    groups: Mapping[str, frozenset[str]],
    item_id: str,
    kind: str,
) -> bool:
    target = item_id.lower()
    for entry in entries:
        if entry in groups:
            if kind in groups[entry]:
                return True
        elif entry.lower() == target:
            return True
    return False


def is_weapon_proficient(class_def: ClassDefinition | None, weapon: WeaponDefinition) -> bool:
    """Check weapon proficiency.

    ``Simple`` covers simple weapons, ``Martial`` covers simple and martial;
    any other entry must equal the weapon id (case-insensitive).
    """
    if class_def is None:
        return False
    return _matches(class_def.proficiencies.weapons, _WEAPON_GROUPS, weapon.id, weapon.weapon_type)


def is_armor_proficient(class_def: ClassDefinition | None, armor: ArmorDefinition) -> bool:
    """Check armor or shield proficiency.

    ``Light``, ``Medium`` and ``Heavy`` each cover their own weight class
    and every lighter one; any other entry must equal the armor id.
    Shields are matched against the armor list as well.
    """
    if class_def is None:
        return False
    return _matches(class_def.proficiencies.armor, _ARMOR_GROUPS, armor.id, armor.armor_type)


def is_proficient(class_def: ClassDefinition | None, item: ItemDefinition) -> bool:
    """Check proficiency with any weapon or armor item.

    Args:
        class_def: The character's class, or None when none is chosen.
        item: Catalog item.

    Returns:
        True if the class is proficient. Without a class, never.
    """
    if isinstance(item, WeaponDefinition):
        return is_weapon_proficient(class_def, item)
    return is_armor_proficient(class_def, item)


# =============================================================================
# Feat Prerequisites
# =============================================================================


class PrerequisiteContext(BaseModel):
    """The character state a prerequisite is checked against.

    Attributes:
        ability_scores: Final ability scores (racial modifiers applied).
        selected_feats: Ids of feats already selected.
        skill_ranks: Current ranks by skill id. Absent skills have 0.
    """

    model_config = ConfigDict(frozen=True)

    ability_scores: AbilityScoreSet = Field(default_factory=AbilityScoreSet)
    selected_feats: frozenset[str] = Field(default_factory=frozenset)
    skill_ranks: dict[str, int] = Field(default_factory=dict)


def unmet_prerequisites(feat: FeatDefinition, context: PrerequisiteContext) -> list[str]:
    """List every prerequisite clause the character fails.

    Clauses are checked independently so that all failures are reported,
    not only the first. A BAB requirement above 1 always fails because
    only 1st-level characters are evaluated.

    Args:
        feat: Feat to check.
        context: Current character state.

    Returns:
        Human-readable reasons, empty when every clause passes.
    """
    prereqs = feat.prerequisites
    if prereqs is None:
        return []

    reasons: list[str] = []
    for ability, required in prereqs.ability_scores.items():
        if context.ability_scores.get(ability) < required:
            reasons.append(f"{ability} {required}")

    if prereqs.base_attack_bonus is not None and prereqs.base_attack_bonus > MAX_EVALUATED_BAB_PREREQUISITE:
        reasons.append(f"BAB +{prereqs.base_attack_bonus}")

    for feat_id in prereqs.feats:
        if feat_id not in context.selected_feats:
            reasons.append(f"feat {feat_id}")

    for requirement in prereqs.skills:
        if context.skill_ranks.get(requirement.id, 0) < requirement.ranks:
            reasons.append(f"{requirement.id} {requirement.ranks} ranks")

    return reasons


def meets_prerequisites(feat: FeatDefinition, context: PrerequisiteContext) -> bool:
    return not unmet_prerequisites(feat, context)


__all__ = [
    "is_weapon_proficient",
    "is_armor_proficient",
    "is_proficient",
    "PrerequisiteContext",
    "unmet_prerequisites",
    "meets_prerequisites",
]

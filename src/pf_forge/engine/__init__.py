"""Rules engine for Pathfinder 1E character creation.

Submodules:
    abilities: Point buy, racial modifiers and ability modifiers.
    prerequisites: Weapon/armor proficiency and feat prerequisites.
    feats: Feat slot budget and selection.
    skills: Skill point allocation and skill modifiers.
    combat: BAB, saves, AC, attacks, CMB/CMD, hit points, encumbrance.
    equipment: Starting gold ledger.
    sheet: Derived stats snapshot and whole-build evaluation.

Every function is pure: inputs are never mutated and results are
recomputed on each call.
"""

from __future__ import annotations

from pf_forge.engine.abilities import (
    ability_modifier,
    ability_modifiers,
    can_decrease,
    can_increase,
    decrease_score,
    final_score,
    final_scores,
    increase_score,
    point_cost,
    points_remaining,
    racial_modifier,
    total_spent,
)
from pf_forge.engine.combat import (
    armor_class,
    base_attack_bonus,
    carrying_capacity,
    combat_maneuver_bonus,
    combat_maneuver_defense,
    format_modifier,
    initiative,
    max_hit_points,
    melee_attack,
    ranged_attack,
    saving_throw,
    saving_throws,
)
from pf_forge.engine.equipment import (
    add_item,
    can_afford,
    non_proficient_items,
    purchase_currency,
    remaining_gold,
    remove_item,
    set_equipped,
    total_cost,
    total_weight,
    unit_cost,
)
from pf_forge.engine.feats import can_select_feat, feats_available, feats_remaining, toggle_feat
from pf_forge.engine.prerequisites import (
    PrerequisiteContext,
    is_armor_proficient,
    is_proficient,
    is_weapon_proficient,
    meets_prerequisites,
    unmet_prerequisites,
)
from pf_forge.engine.sheet import BuildSelections, derive_character_stats, derive_stats, evaluate_build
from pf_forge.engine.skills import (
    can_decrease_skill,
    can_increase_skill,
    class_skill_bonus,
    decrease_skill,
    increase_skill,
    max_ranks_per_skill,
    skill_modifier,
    skill_points_available,
    skill_points_remaining,
    skill_points_spent,
    skill_sheet,
)


__all__ = [
    # Abilities
    "point_cost",
    "total_spent",
    "points_remaining",
    "can_increase",
    "can_decrease",
    "increase_score",
    "decrease_score",
    "ability_modifier",
    "ability_modifiers",
    "racial_modifier",
    "final_score",
    "final_scores",
    # Prerequisites
    "PrerequisiteContext",
    "is_weapon_proficient",
    "is_armor_proficient",
    "is_proficient",
    "unmet_prerequisites",
    "meets_prerequisites",
    # Feats
    "feats_available",
    "feats_remaining",
    "can_select_feat",
    "toggle_feat",
    # Skills
    "class_skill_bonus",
    "skill_modifier",
    "skill_sheet",
    "skill_points_available",
    "skill_points_spent",
    "skill_points_remaining",
    "max_ranks_per_skill",
    "can_increase_skill",
    "can_decrease_skill",
    "increase_skill",
    "decrease_skill",
    # Combat
    "base_attack_bonus",
    "saving_throw",
    "saving_throws",
    "armor_class",
    "initiative",
    "melee_attack",
    "ranged_attack",
    "combat_maneuver_bonus",
    "combat_maneuver_defense",
    "max_hit_points",
    "carrying_capacity",
    "format_modifier",
    # Equipment
    "unit_cost",
    "total_cost",
    "total_weight",
    "remaining_gold",
    "can_afford",
    "add_item",
    "remove_item",
    "set_equipped",
    "non_proficient_items",
    "purchase_currency",
    # Sheet
    "derive_stats",
    "derive_character_stats",
    "BuildSelections",
    "evaluate_build",
]

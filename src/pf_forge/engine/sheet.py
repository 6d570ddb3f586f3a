"""Character sheet composition.

derive_stats() produces the combat snapshot from final ability scores
and class entries. evaluate_build() runs the whole pipeline for an
in-progress build: racial modifiers, point buy, skill, feat and gold
budgets, and the snapshot, so a wizard can drive its affordances from a
single call.

Both are pure; nothing is cached between calls.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from pf_forge.core.config import RulesSettings, get_settings
from pf_forge.core.logging import get_logger
from pf_forge.engine.abilities import ability_modifier, ability_modifiers, final_scores, total_spent
from pf_forge.engine.combat import (
    armor_class,
    base_attack_bonus,
    carrying_capacity,
    combat_maneuver_bonus,
    combat_maneuver_defense,
    initiative,
    max_hit_points,
    melee_attack,
    ranged_attack,
    saving_throws,
)
from pf_forge.engine.equipment import non_proficient_items, total_cost, total_weight
from pf_forge.engine.feats import feats_available, feats_remaining
from pf_forge.engine.skills import skill_points_available, skill_points_spent, skill_sheet
from pf_forge.models.catalog import Catalogs, RaceDefinition
from pf_forge.models.character import (
    AbilityScoreSet,
    Character,
    CharacterClassEntry,
    CharacterEquipmentEntry,
    CharacterFeatEntry,
    CharacterSkillEntry,
)
from pf_forge.models.derived import BuildEvaluation, DerivedStatsSnapshot
from pf_forge.models.enums import Ability

logger = get_logger(__name__)


def derive_stats(
    ability_scores: AbilityScoreSet,
    classes: list[CharacterClassEntry],
    catalogs: Catalogs,
    *,
    armor_bonus: int = 0,
    shield_bonus: int = 0,
    natural_armor: int = 0,
) -> DerivedStatsSnapshot:
    """Compute every derived combat statistic.

    Args:
        ability_scores: Final ability scores (racial modifiers applied).
        classes: Class entries.
        catalogs: Reference catalogs.
        armor_bonus: Armor bonus to AC.
        shield_bonus: Shield bonus to AC.
        natural_armor: Natural armor bonus to AC.

    Returns:
        The derived stats snapshot.
    """
    bab = base_attack_bonus(classes, catalogs)
    return DerivedStatsSnapshot(
        ability_modifiers=ability_modifiers(ability_scores),
        base_attack_bonus=bab,
        saves=saving_throws(ability_scores, classes, catalogs),
        armor_class=armor_class(
            ability_scores,
            armor_bonus=armor_bonus,
            shield_bonus=shield_bonus,
            natural_armor=natural_armor,
        ),
        initiative=initiative(ability_scores),
        melee_attack=melee_attack(ability_scores, bab),
        ranged_attack=ranged_attack(ability_scores, bab),
        cmb=combat_maneuver_bonus(ability_scores, bab),
        cmd=combat_maneuver_defense(ability_scores, bab),
        max_hp=max_hit_points(ability_scores, classes, catalogs),
        carrying_capacity=carrying_capacity(ability_scores),
    )


def derive_character_stats(character: Character, catalogs: Catalogs) -> DerivedStatsSnapshot:
    """Snapshot for a saved character, whose scores are already final."""
    return derive_stats(character.ability_scores, character.classes, catalogs)


class BuildSelections(BaseModel):
    """Raw choices of a character under construction.

    Attributes:
        base_ability_scores: Point-buy scores before racial modifiers.
        race_id: Selected race, if any.
        classes: Class entries.
        skills: Skill entries with at least one rank.
        feats: Selected feats.
        equipment: Purchased items.
        starting_gold: Overrides the configured starting gold.
    """

    model_config = ConfigDict(frozen=True)

    base_ability_scores: AbilityScoreSet = Field(default_factory=AbilityScoreSet)
    race_id: str | None = None
    classes: list[CharacterClassEntry] = Field(default_factory=list)
    skills: list[CharacterSkillEntry] = Field(default_factory=list)
    feats: list[CharacterFeatEntry] = Field(default_factory=list)
    equipment: list[CharacterEquipmentEntry] = Field(default_factory=list)
    starting_gold: Decimal | None = Field(default=None, ge=0)


def _race(selections: BuildSelections, catalogs: Catalogs) -> RaceDefinition | None:
    if not selections.race_id:
        return None
    race = catalogs.races.get(selections.race_id)
    if race is None:
        logger.warning("Race not in catalog, ignoring racial modifiers", race_id=selections.race_id)
    return race


def evaluate_build(
    selections: BuildSelections,
    catalogs: Catalogs,
    rules: RulesSettings | None = None,
) -> BuildEvaluation:
    """Evaluate an in-progress build against the rules.

    Skill points come from the first class entry's class; without a
    resolvable class there are none.

    Args:
        selections: The player's raw choices.
        catalogs: Reference catalogs.
        rules: Budgets to apply. Defaults to the configured rules.

    Returns:
        Final scores, derived stats, skill modifiers and every budget.

    Raises:
        OutOfRangeError: If a base ability score is outside 7..18.
    """
    rules = rules or get_settings().rules
    scores = final_scores(selections.base_ability_scores, _race(selections, catalogs))
    spent = total_spent(selections.base_ability_scores)

    primary_class = catalogs.find_class(selections.classes[0].class_id) if selections.classes else None
    skill_points = 0
    if primary_class is not None:
        skill_points = skill_points_available(
            primary_class.skill_points_per_level,
            ability_modifier(scores.get(Ability.INT)),
        )

    feat_slots = feats_available(selections.race_id, rules.bonus_feat_races, rules.base_feats)
    starting_gold = selections.starting_gold if selections.starting_gold is not None else rules.starting_gold
    cost = total_cost(selections.equipment, catalogs)

    return BuildEvaluation(
        final_scores=scores,
        stats=derive_stats(scores, selections.classes, catalogs),
        skills=skill_sheet(scores, selections.skills, catalogs),
        point_buy_spent=spent,
        point_buy_remaining=rules.point_buy_budget - spent,
        skill_points_available=skill_points,
        skill_points_remaining=skill_points - skill_points_spent(selections.skills),
        feats_available=feat_slots,
        feats_remaining=feats_remaining(selections.feats, feat_slots),
        equipment_cost=cost,
        equipment_weight=total_weight(selections.equipment, catalogs),
        gold_remaining=Decimal(starting_gold) - cost,
        non_proficient_items=non_proficient_items(selections.equipment, catalogs, primary_class),
    )


__all__ = [
    "derive_stats",
    "derive_character_stats",
    "BuildSelections",
    "evaluate_build",
]

"""Engine output schemas.

Nothing here is persisted. Every value is recomputed from the character's
selections and the reference catalogs each time it is requested.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, computed_field

from pf_forge.models.character import AbilityScoreSet
from pf_forge.models.enums import Ability, SaveType


class DerivedModel(BaseModel):
    """Base configuration for engine output."""

    model_config = ConfigDict(frozen=True)


class ArmorClassBreakdown(DerivedModel):
    """The addends of armor class."""

    base: int
    armor: int = 0
    shield: int = 0
    dex: int = 0
    natural: int = 0
    deflection: int = 0
    misc: int = 0


class ArmorClass(DerivedModel):
    """Armor class with its touch and flat-footed variants."""

    total: int
    touch: int
    flat_footed: int
    breakdown: ArmorClassBreakdown


class SkillBreakdown(DerivedModel):
    """The addends of a skill modifier. ``misc`` is reserved and always 0."""

    ranks: int
    ability_mod: int
    class_bonus: int
    misc: int = 0


class SkillModifier(DerivedModel):
    """A skill total and how it was reached."""

    total: int
    breakdown: SkillBreakdown


class CarryingCapacity(DerivedModel):
    """Load limits in pounds for a Medium creature."""

    light: int
    medium: int
    heavy: int
    lift: int
    drag: int


class SavingThrows(DerivedModel):
    """Fortitude, Reflex and Will totals."""

    fortitude: int
    reflex: int
    will: int

    def get(self, save_type: SaveType) -> int:
        return getattr(self, SaveType(save_type).value)


class DerivedStatsSnapshot(DerivedModel):
    """Every derived combat statistic for one character.

    Attributes:
        ability_modifiers: Modifier per ability from final scores.
        base_attack_bonus: Summed over all class entries.
        saves: Saving throw totals.
        armor_class: AC with touch and flat-footed variants.
        initiative: DEX modifier.
        melee_attack: BAB + STR modifier.
        ranged_attack: BAB + DEX modifier.
        cmb: Combat maneuver bonus.
        cmd: Combat maneuver defense.
        max_hp: Maximum hit points (at least 1).
        carrying_capacity: Load limits.
    """

    ability_modifiers: dict[Ability, int]
    base_attack_bonus: int
    saves: SavingThrows
    armor_class: ArmorClass
    initiative: int
    melee_attack: int
    ranged_attack: int
    cmb: int
    cmd: int
    max_hp: int
    carrying_capacity: CarryingCapacity


class BuildEvaluation(DerivedModel):
    """Derived stats plus the allocator figures that drive wizard affordances.

    Remaining figures may be negative when selections were made through an
    unchecked path; callers surface that as a warning, never correct it.
    """

    final_scores: AbilityScoreSet
    stats: DerivedStatsSnapshot
    skills: dict[str, SkillModifier] = Field(default_factory=dict)
    point_buy_spent: int
    point_buy_remaining: int
    skill_points_available: int
    skill_points_remaining: int
    feats_available: int
    feats_remaining: int
    equipment_cost: Decimal
    equipment_weight: float
    gold_remaining: Decimal
    non_proficient_items: list[str] = Field(default_factory=list)

    @computed_field(description="Whether any allocator is over budget")
    @property
    def is_over_budget(self) -> bool:
        return (
            self.point_buy_remaining < 0
            or self.skill_points_remaining < 0
            or self.feats_remaining < 0
            or self.gold_remaining < 0
        )


__all__ = [
    "ArmorClassBreakdown",
    "ArmorClass",
    "SkillBreakdown",
    "SkillModifier",
    "CarryingCapacity",
    "SavingThrows",
    "DerivedStatsSnapshot",
    "BuildEvaluation",
]

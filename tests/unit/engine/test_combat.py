"""Tests for derived combat statistics."""

from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from pf_forge.engine.combat import (
    armor_class,
    base_attack_bonus,
    base_save,
    carrying_capacity,
    class_base_attack_bonus,
    class_base_save,
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
from pf_forge.models import (
    AbilityScoreSet,
    BABProgression,
    Catalogs,
    CharacterClassEntry,
    FavoredClassBonus,
    SaveProgression,
    SaveType,
)


class TestBaseAttackBonus:
    """Tests for BAB progressions and multiclass summation."""

    @pytest.mark.parametrize(
        "progression,level,expected",
        [
            (BABProgression.FULL, 1, 1),
            (BABProgression.FULL, 7, 7),
            (BABProgression.MEDIUM, 1, 0),
            (BABProgression.MEDIUM, 4, 3),
            (BABProgression.MEDIUM, 7, 5),
            (BABProgression.POOR, 1, 0),
            (BABProgression.POOR, 5, 2),
        ],
    )
    def test_progressions(self, progression: BABProgression, level: int, expected: int) -> None:
        """Test each progression tier."""
        assert class_base_attack_bonus(progression, level) == expected

    def test_multiclass_sum(self, catalogs: Catalogs) -> None:
        """Test BAB adds across class entries."""
        classes = [
            CharacterClassEntry(class_id="fighter", level=4),
            CharacterClassEntry(class_id="wizard", level=3),
        ]

        assert base_attack_bonus(classes, catalogs) == 4 + 1

    @pytest.mark.parametrize("full_level,poor_level", [(1, 1), (3, 5), (6, 4), (10, 10)])
    def test_order_independent(self, catalogs: Catalogs, full_level: int, poor_level: int) -> None:
        """Test summation does not depend on entry order."""
        fighter = CharacterClassEntry(class_id="fighter", level=full_level)
        wizard = CharacterClassEntry(class_id="wizard", level=poor_level)
        expected = full_level + poor_level // 2

        assert base_attack_bonus([fighter, wizard], catalogs) == expected
        assert base_attack_bonus([wizard, fighter], catalogs) == expected

    def test_unknown_class_contributes_zero(self, catalogs: Catalogs) -> None:
        """Test an unknown class id is skipped with a warning."""
        classes = [
            CharacterClassEntry(class_id="fighter", level=2),
            CharacterClassEntry(class_id="gunslinger", level=3),
        ]

        with capture_logs() as logs:
            bab = base_attack_bonus(classes, catalogs)

        assert bab == 2
        assert any(
            log["log_level"] == "warning" and log.get("class_id") == "gunslinger" for log in logs
        )

    def test_no_classes(self, catalogs: Catalogs) -> None:
        """Test an empty class list yields 0."""
        assert base_attack_bonus([], catalogs) == 0


class TestSaves:
    """Tests for saving throws."""

    @pytest.mark.parametrize(
        "progression,level,expected",
        [
            (SaveProgression.GOOD, 1, 2),
            (SaveProgression.GOOD, 4, 4),
            (SaveProgression.POOR, 1, 0),
            (SaveProgression.POOR, 3, 1),
            (SaveProgression.POOR, 6, 2),
        ],
    )
    def test_progressions(self, progression: SaveProgression, level: int, expected: int) -> None:
        """Test good and poor save progressions."""
        assert class_base_save(progression, level) == expected

    def test_good_fortitude_with_con(self, catalogs: Catalogs) -> None:
        """Test a level-1 good Fortitude save with +2 CON."""
        classes = [CharacterClassEntry(class_id="fighter", level=1)]
        scores = AbilityScoreSet(constitution=14)

        assert saving_throw(scores, classes, catalogs, SaveType.FORTITUDE) == 4

    def test_key_abilities(self, catalogs: Catalogs) -> None:
        """Test each save adds its own ability modifier."""
        classes = [CharacterClassEntry(class_id="rogue", level=1)]
        scores = AbilityScoreSet(constitution=8, dexterity=16, wisdom=12)

        saves = saving_throws(scores, classes, catalogs)

        assert saves.fortitude == 0 - 1
        assert saves.reflex == 2 + 3
        assert saves.will == 0 + 1
        assert saves.get(SaveType.REFLEX) == 5

    def test_multiclass_base_save(self, catalogs: Catalogs) -> None:
        """Test base saves add across classes."""
        classes = [
            CharacterClassEntry(class_id="fighter", level=2),
            CharacterClassEntry(class_id="wizard", level=2),
        ]

        assert base_save(classes, catalogs, SaveType.WILL) == 0 + 3
        assert base_save(classes, catalogs, SaveType.FORTITUDE) == 3 + 0


class TestArmorClass:
    """Tests for AC and its variants."""

    def test_example(self) -> None:
        """Test armor +4, shield +2 and DEX +3."""
        ac = armor_class(AbilityScoreSet(dexterity=16), armor_bonus=4, shield_bonus=2)

        assert ac.total == 19
        assert ac.touch == 13
        assert ac.flat_footed == 16
        assert ac.breakdown.base == 10
        assert ac.breakdown.deflection == 0
        assert ac.breakdown.misc == 0

    def test_defaults_to_unarmored(self) -> None:
        """Test armor inputs default to zero."""
        ac = armor_class(AbilityScoreSet(dexterity=14))

        assert (ac.total, ac.touch, ac.flat_footed) == (12, 12, 10)

    def test_natural_armor_excluded_from_touch(self) -> None:
        """Test natural armor counts for total and flat-footed only."""
        ac = armor_class(AbilityScoreSet(), natural_armor=3)

        assert ac.total == 13
        assert ac.touch == 10
        assert ac.flat_footed == 13

    def test_dex_penalty(self) -> None:
        """Test a DEX penalty lowers touch and is removed when flat-footed."""
        ac = armor_class(AbilityScoreSet(dexterity=7), armor_bonus=2)

        assert ac.total == 10
        assert ac.touch == 8
        assert ac.flat_footed == 12


class TestAttacks:
    """Tests for initiative, attacks and combat maneuvers."""

    def test_values(self) -> None:
        """Test each formula for a STR 16, DEX 14 character with BAB 1."""
        scores = AbilityScoreSet(strength=16, dexterity=14)

        assert initiative(scores) == 2
        assert melee_attack(scores, 1) == 4
        assert ranged_attack(scores, 1) == 3
        assert combat_maneuver_bonus(scores, 1) == 4
        assert combat_maneuver_defense(scores, 1) == 10 + 1 + 3 + 2

    def test_penalties(self) -> None:
        """Test negative modifiers flow through."""
        scores = AbilityScoreSet(strength=7, dexterity=8)

        assert melee_attack(scores, 0) == -2
        assert combat_maneuver_defense(scores, 0) == 10 - 2 - 1


class TestHitPoints:
    """Tests for maximum hit points."""

    def test_first_level(self, catalogs: Catalogs) -> None:
        """Test d10 at level 1 with +2 CON."""
        classes = [CharacterClassEntry(class_id="fighter", level=1)]

        assert max_hit_points(AbilityScoreSet(constitution=14), classes, catalogs) == 12

    def test_average_later_levels(self, catalogs: Catalogs) -> None:
        """Test later levels use half the die plus one."""
        classes = [CharacterClassEntry(class_id="fighter", level=3)]

        assert max_hit_points(AbilityScoreSet(constitution=12), classes, catalogs) == (10 + 1) + 2 * (6 + 1)

    def test_favored_class_hp(self, catalogs: Catalogs) -> None:
        """Test each hp favored class token adds one."""
        classes = [
            CharacterClassEntry(
                class_id="fighter",
                level=2,
                favored_class_bonus=[FavoredClassBonus.HP, FavoredClassBonus.SKILL],
            )
        ]

        assert max_hit_points(AbilityScoreSet(), classes, catalogs) == 10 + 6 + 1

    def test_minimum_one(self, catalogs: Catalogs) -> None:
        """Test a terrible CON still leaves 1 hit point."""
        classes = [CharacterClassEntry(class_id="wizard", level=3)]

        assert max_hit_points(AbilityScoreSet(constitution=1), classes, catalogs) == 1

    def test_unknown_class_only(self, catalogs: Catalogs) -> None:
        """Test no resolvable class still yields the minimum."""
        classes = [CharacterClassEntry(class_id="gunslinger", level=1)]

        assert max_hit_points(AbilityScoreSet(constitution=18), classes, catalogs) == 1

    def test_multiclass(self, catalogs: Catalogs) -> None:
        """Test each class entry gets its own first-level hit die."""
        classes = [
            CharacterClassEntry(class_id="fighter", level=1),
            CharacterClassEntry(class_id="wizard", level=1),
        ]

        assert max_hit_points(AbilityScoreSet(), classes, catalogs) == 10 + 6


class TestCarryingCapacity:
    """Tests for load limits."""

    def test_strength_sixteen(self) -> None:
        """Test STR 16 load limits."""
        capacity = carrying_capacity(AbilityScoreSet(strength=16))

        assert capacity.light == 160
        assert capacity.medium == 320
        assert capacity.heavy == 480
        assert capacity.lift == 960
        assert capacity.drag == 4800


class TestFormatModifier:
    """Tests for signed modifier rendering."""

    @pytest.mark.parametrize("value,expected", [(0, "+0"), (3, "+3"), (-1, "-1"), (-12, "-12")])
    def test_format(self, value: int, expected: str) -> None:
        """Test explicit plus sign for non-negative values."""
        assert format_modifier(value) == expected

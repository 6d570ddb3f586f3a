"""Reference catalog models for Pathfinder 1E rules data.

Races, classes, skills, feats, weapons and armor are immutable reference
data supplied by an external loader. Each model accepts the camelCase
keys of the JSON catalog files (``hitDie``, ``skillPointsPerLevel``) as
well as the snake_case attribute names.

Catalogs indexes every entry by id once at construction, so lookups are
dictionary hits rather than scans.

Example:
    >>> catalogs = Catalogs.from_entries(classes=[{"id": "fighter", ...}])
    >>> catalogs.lookup(CatalogName.CLASSES, "fighter").hit_die
    10
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Any, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from pf_forge.core.exceptions import UnknownCatalogIdError, ValidationError
from pf_forge.models.enums import (
    Ability,
    ArmorType,
    BABProgression,
    CatalogName,
    ClassType,
    FeatType,
    SaveProgression,
    SaveType,
    Size,
    SpellcastingType,
    WeaponType,
)


# =============================================================================
# Base
# =============================================================================


class CatalogModel(BaseModel):
    """Base class for reference data.

    Reference data is frozen; the engine never mutates it.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Source(CatalogModel):
    """Publication an entry comes from."""

    name: str = ""
    short_name: str = ""
    page: str | None = None
    url: str | None = None


# =============================================================================
# Classes
# =============================================================================


class ClassSaves(CatalogModel):
    """Save progression tiers for a class."""

    fortitude: SaveProgression
    reflex: SaveProgression
    will: SaveProgression

    def for_save(self, save_type: SaveType) -> SaveProgression:
        """Get the progression for one save."""
        return getattr(self, save_type.value)


class ClassProficiencies(CatalogModel):
    """Armor, shield and weapon proficiency lists.

    Entries are either group keywords (``Simple``, ``Martial``, ``Light``,
    ``Medium``, ``Heavy``) or individual item ids.
    """

    armor: list[str] = Field(default_factory=list)
    shields: list[str] = Field(default_factory=list)
    weapons: list[str] = Field(default_factory=list)


class Spellcasting(CatalogModel):
    """Spellcasting descriptor. Carried as data; slots are not computed."""

    type: SpellcastingType
    stat: Ability
    spells_per_day: list[list[int]] = Field(default_factory=list)
    spells_known: list[list[int]] | None = None
    spell_list: str = ""


class ClassFeature(CatalogModel):
    """A class feature gained at a given level."""

    id: str
    name: str
    level: int = Field(ge=1)
    description: str = ""
    type: Literal["Ex", "Su", "Sp"] = "Ex"


class ClassDefinition(CatalogModel):
    """A character class and its progressions.

    Attributes:
        id: Catalog identifier.
        name: Display name.
        hit_die: Hit die size (d6 = 6, d10 = 10, ...).
        skill_points_per_level: Skill ranks gained per level before INT.
        base_attack_bonus: BAB progression tier.
        saves: Save progression tiers.
        class_skills: Skill ids on this class's list.
        proficiencies: Armor, shield and weapon proficiencies.
        spellcasting: Optional spellcasting descriptor.
    """

    id: str = Field(min_length=1)
    name: str
    key: str = ""
    hit_die: int = Field(ge=4, le=12)
    skill_points_per_level: int = Field(ge=0)
    class_type: ClassType = ClassType.BASE
    base_attack_bonus: BABProgression
    saves: ClassSaves
    class_skills: frozenset[str] = Field(default_factory=frozenset)
    proficiencies: ClassProficiencies = Field(default_factory=ClassProficiencies)
    spellcasting: Spellcasting | None = None
    class_features: list[ClassFeature] = Field(default_factory=list)
    source: Source = Field(default_factory=Source)


# =============================================================================
# Races
# =============================================================================


class RacialTrait(CatalogModel):
    """A racial trait."""

    id: str
    name: str
    description: str = ""
    type: str = ""


class RaceLanguages(CatalogModel):
    """Starting and bonus languages."""

    starting: list[str] = Field(default_factory=list)
    bonus: list[str] = Field(default_factory=list)


class RaceDefinition(CatalogModel):
    """A playable race.

    ``size`` is informational; combat formulas assume Medium.
    """

    id: str = Field(min_length=1)
    name: str
    size: Size = Size.MEDIUM
    type: str = "humanoid"
    speed: int = Field(default=30, ge=0)
    ability_score_modifiers: dict[Ability, int] = Field(default_factory=dict)
    racial_traits: list[RacialTrait] = Field(default_factory=list)
    languages: RaceLanguages = Field(default_factory=RaceLanguages)
    vision: Literal["normal", "darkvision", "low-light"] = "normal"
    vision_range: int | None = None
    source: Source = Field(default_factory=Source)


# =============================================================================
# Skills & Feats
# =============================================================================


class SkillDefinition(CatalogModel):
    """A skill and its key ability."""

    id: str = Field(min_length=1)
    name: str
    ability: Ability
    trained_only: bool = False
    armor_check_penalty: bool = False
    description: str = ""
    source: Source = Field(default_factory=Source)


class SkillRequirement(CatalogModel):
    """Minimum ranks in a skill."""

    id: str
    ranks: int = Field(ge=0)


class FeatPrerequisites(CatalogModel):
    """Prerequisite clauses of a feat. Absent clauses are always met.

    ``spellcaster_level`` and ``other`` are carried for display only.
    """

    ability_scores: dict[Ability, int] = Field(default_factory=dict)
    base_attack_bonus: int | None = None
    feats: list[str] = Field(default_factory=list)
    skills: list[SkillRequirement] = Field(default_factory=list)
    spellcaster_level: int | None = None
    other: str | None = None


class FeatDefinition(CatalogModel):
    """A feat."""

    id: str = Field(min_length=1)
    name: str
    type: FeatType = FeatType.GENERAL
    description: str = ""
    benefit: str = ""
    prerequisites: FeatPrerequisites | None = None
    source: Source = Field(default_factory=Source)


# =============================================================================
# Equipment
# =============================================================================


class EquipmentDefinition(CatalogModel):
    """Common fields of purchasable items. Cost is in gold pieces, weight in pounds."""

    id: str = Field(min_length=1)
    name: str
    cost: Decimal = Field(default=Decimal(0), ge=0)
    weight: float = Field(default=0.0, ge=0)
    description: str = ""
    source: Source = Field(default_factory=Source)


class WeaponDefinition(EquipmentDefinition):
    """A weapon."""

    category: Literal["weapon"] = "weapon"
    weapon_type: WeaponType
    damage_small: str = ""
    damage_medium: str = ""
    critical: str = "x2"
    range: int | None = None
    damage_type: list[str] = Field(default_factory=list)
    special: list[str] = Field(default_factory=list)


class ArmorDefinition(EquipmentDefinition):
    """A suit of armor or a shield."""

    category: Literal["armor"] = "armor"
    armor_type: ArmorType
    armor_bonus: int = Field(default=0, ge=0)
    max_dex_bonus: int | None = None
    armor_check_penalty: int = 0
    arcane_spell_failure: int = Field(default=0, ge=0, le=100)
    speed30: int = 30
    speed20: int = 20


ItemDefinition = WeaponDefinition | ArmorDefinition


# =============================================================================
# Catalog Index
# =============================================================================


_EntryT = TypeVar("_EntryT", bound=CatalogModel)


def _index(
    catalog: CatalogName,
    model: type[_EntryT],
    entries: Iterable[_EntryT | Mapping[str, Any]],
) -> dict[str, _EntryT]:
    """Validate entries and index them by id, rejecting duplicates."""
    indexed: dict[str, _EntryT] = {}
    for raw in entries:
        entry = raw if isinstance(raw, model) else model.model_validate(raw)
        entry_id = entry.id  # type: ignore[attr-defined]
        if entry_id in indexed:
            raise ValidationError(
                f"Duplicate id in {catalog} catalog",
                field_name="id",
                invalid_value=entry_id,
            )
        indexed[entry_id] = entry
    return indexed


class Catalogs(BaseModel):
    """Read-only reference catalogs keyed by id.

    Build with from_entries() so every catalog is validated and indexed
    once. Instances are frozen and safe to share between computations.
    """

    model_config = ConfigDict(frozen=True)

    races: dict[str, RaceDefinition] = Field(default_factory=dict)
    classes: dict[str, ClassDefinition] = Field(default_factory=dict)
    skills: dict[str, SkillDefinition] = Field(default_factory=dict)
    feats: dict[str, FeatDefinition] = Field(default_factory=dict)
    weapons: dict[str, WeaponDefinition] = Field(default_factory=dict)
    armor: dict[str, ArmorDefinition] = Field(default_factory=dict)

    @classmethod
    def from_entries(
        cls,
        *,
        races: Iterable[RaceDefinition | Mapping[str, Any]] = (),
        classes: Iterable[ClassDefinition | Mapping[str, Any]] = (),
        skills: Iterable[SkillDefinition | Mapping[str, Any]] = (),
        feats: Iterable[FeatDefinition | Mapping[str, Any]] = (),
        weapons: Iterable[WeaponDefinition | Mapping[str, Any]] = (),
        armor: Iterable[ArmorDefinition | Mapping[str, Any]] = (),
    ) -> Catalogs:
        """Build catalogs from sequences of entries.

        Args:
            races: Race entries (models or raw JSON mappings).
            classes: Class entries.
            skills: Skill entries.
            feats: Feat entries.
            weapons: Weapon entries.
            armor: Armor and shield entries.

        Returns:
            Indexed catalogs.

        Raises:
            ValidationError: If two entries in one catalog share an id.
            pydantic.ValidationError: If a raw entry does not match its model.
        """
        return cls(
            races=_index(CatalogName.RACES, RaceDefinition, races),
            classes=_index(CatalogName.CLASSES, ClassDefinition, classes),
            skills=_index(CatalogName.SKILLS, SkillDefinition, skills),
            feats=_index(CatalogName.FEATS, FeatDefinition, feats),
            weapons=_index(CatalogName.WEAPONS, WeaponDefinition, weapons),
            armor=_index(CatalogName.ARMOR, ArmorDefinition, armor),
        )

    def _catalog(self, catalog: CatalogName) -> Mapping[str, CatalogModel]:
        return getattr(self, CatalogName(catalog).value)

    def find(self, catalog: CatalogName, item_id: str) -> Any | None:
        """Look up an entry, returning None when absent."""
        return self._catalog(catalog).get(item_id)

    def lookup(self, catalog: CatalogName, item_id: str) -> Any:
        """Look up an entry that must exist.

        Args:
            catalog: Catalog to search.
            item_id: Entry id.

        Returns:
            The catalog entry.

        Raises:
            UnknownCatalogIdError: If the id is not in the catalog.
        """
        entry = self.find(catalog, item_id)
        if entry is None:
            raise UnknownCatalogIdError(
                f"Unknown id in {catalog} catalog",
                catalog=str(catalog),
                item_id=item_id,
            )
        return entry

    def find_class(self, class_id: str) -> ClassDefinition | None:
        return self.classes.get(class_id)

    def find_item(self, item_id: str) -> ItemDefinition | None:
        """Resolve an item id against weapons first, then armor."""
        weapon = self.weapons.get(item_id)
        if weapon is not None:
            return weapon
        return self.armor.get(item_id)

    def lookup_item(self, item_id: str) -> ItemDefinition:
        """Resolve an item id that must exist in the weapon or armor catalog.

        Raises:
            UnknownCatalogIdError: If neither catalog holds the id.
        """
        item = self.find_item(item_id)
        if item is None:
            raise UnknownCatalogIdError(
                "Unknown equipment id",
                catalog=f"{CatalogName.WEAPONS}|{CatalogName.ARMOR}",
                item_id=item_id,
            )
        return item


__all__ = [
    "CatalogModel",
    "Source",
    "ClassSaves",
    "ClassProficiencies",
    "Spellcasting",
    "ClassFeature",
    "ClassDefinition",
    "RacialTrait",
    "RaceLanguages",
    "RaceDefinition",
    "SkillDefinition",
    "SkillRequirement",
    "FeatPrerequisites",
    "FeatDefinition",
    "EquipmentDefinition",
    "WeaponDefinition",
    "ArmorDefinition",
    "ItemDefinition",
    "Catalogs",
]

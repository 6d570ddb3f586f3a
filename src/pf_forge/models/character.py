"""Pydantic V2 schemas for characters under construction and complete.

A character is assembled incrementally in a CharacterDraft, where every
field may be missing, and promoted to an immutable-shape Character by
CharacterDraft.build() once the required fields are present. Only a
Character is persisted.

Field names are snake_case in Python; the persisted JSON uses the
camelCase keys of the character file format (``classId``, ``hitPoints``)
and three-letter keys for ability scores.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Literal, Self
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from pf_forge.core.constants import (
    DEFAULT_ABILITY_SCORE,
    DEFAULT_ALIGNMENT,
    GAME_SYSTEM,
    MIN_CHARACTER_LEVEL,
)
from pf_forge.core.exceptions import ValidationError
from pf_forge.models.enums import Ability, Alignment, FavoredClassBonus, FeatSourceType


class CharacterModel(BaseModel):
    """Base configuration for character data."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


# =============================================================================
# Ability Scores
# =============================================================================


class AbilityScoreSet(CharacterModel):
    """All six ability scores. Every field is always present.

    The same shape holds base (point-buy) scores and final scores after
    racial modifiers; bounds are enforced by the point-buy operations,
    not by the model, because final scores may exceed 18.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    strength: int = Field(default=DEFAULT_ABILITY_SCORE, alias="STR")
    dexterity: int = Field(default=DEFAULT_ABILITY_SCORE, alias="DEX")
    constitution: int = Field(default=DEFAULT_ABILITY_SCORE, alias="CON")
    intelligence: int = Field(default=DEFAULT_ABILITY_SCORE, alias="INT")
    wisdom: int = Field(default=DEFAULT_ABILITY_SCORE, alias="WIS")
    charisma: int = Field(default=DEFAULT_ABILITY_SCORE, alias="CHA")

    def get(self, ability: Ability) -> int:
        """Get the score for an ability."""
        return getattr(self, Ability(ability).field_name)

    def with_score(self, ability: Ability, score: int) -> AbilityScoreSet:
        """Return a copy with one score replaced."""
        return self.model_copy(update={Ability(ability).field_name: score})

    def as_dict(self) -> dict[Ability, int]:
        """Scores keyed by ability, in STR..CHA order."""
        return {ability: self.get(ability) for ability in Ability}


# =============================================================================
# Selections
# =============================================================================


class CharacterClassEntry(CharacterModel):
    """Levels taken in one class.

    Attributes:
        class_id: Reference into the class catalog.
        level: Levels in this class.
        hit_points: Per-level rolled or assigned hit-die values.
        favored_class_bonus: Per-level favored class reward tokens.
    """

    model_config = ConfigDict(frozen=True)

    class_id: str = Field(min_length=1)
    level: int = Field(default=1, ge=1, le=20)
    hit_points: list[int] = Field(default_factory=list)
    favored_class_bonus: list[FavoredClassBonus] = Field(default_factory=list)


class CharacterSkillEntry(CharacterModel):
    """Ranks invested in one skill. Zero-rank skills have no entry."""

    model_config = ConfigDict(frozen=True)

    skill_id: str = Field(min_length=1)
    ranks: int = Field(ge=1)
    is_class_skill: bool = False


class CharacterFeatEntry(CharacterModel):
    """A selected feat and how it was gained."""

    model_config = ConfigDict(frozen=True)

    feat_id: str = Field(min_length=1)
    source_type: FeatSourceType = FeatSourceType.LEVEL
    source_level: int | None = 1


class CharacterEquipmentEntry(CharacterModel):
    """A purchased item. Cost and weight are resolved from the catalog."""

    model_config = ConfigDict(frozen=True)

    item_id: str = Field(min_length=1)
    quantity: int = Field(default=1, ge=0)
    equipped: bool = False
    location: str | None = None


class Currency(CharacterModel):
    """Coins carried. Only ``gp`` changes during equipment purchase."""

    model_config = ConfigDict(frozen=True)

    cp: int = Field(default=0, ge=0)
    sp: int = Field(default=0, ge=0)
    gp: Decimal = Field(default=Decimal(0), ge=0)
    pp: int = Field(default=0, ge=0)


class HitPoints(CharacterModel):
    """Recorded hit point state."""

    max: int = Field(default=0, ge=0)
    current: int = 0
    temp: int = Field(default=0, ge=0)


def generate_character_id() -> str:
    """Generate a unique character id."""
    return f"char_{uuid4().hex[:12]}"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# Character Aggregate
# =============================================================================


class Character(CharacterModel):
    """A complete, persistable character.

    Attributes:
        id: Unique character identifier.
        game_system: Always ``pathfinder1e``.
        name: Character name.
        race: Race id.
        classes: Class entries (at least one).
        level: Total character level.
        ability_scores: Final ability scores (racial modifiers applied).
        skills: Skills with at least one rank.
        feats: Selected feats, unique by id.
        equipment: Purchased items.
        currency: Coins remaining after purchase.
        hp: Recorded hit points.
        created_at: When the character was first saved.
        updated_at: When the character was last saved.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(min_length=1)
    game_system: Literal["pathfinder1e"] = GAME_SYSTEM
    name: str = Field(min_length=1, max_length=100)
    player: str | None = None
    alignment: Alignment = Alignment(DEFAULT_ALIGNMENT)
    deity: str | None = None
    race: str = Field(min_length=1)
    classes: list[CharacterClassEntry] = Field(min_length=1)
    level: int = Field(ge=MIN_CHARACTER_LEVEL)
    ability_scores: AbilityScoreSet
    skills: list[CharacterSkillEntry]
    feats: list[CharacterFeatEntry]
    equipment: list[CharacterEquipmentEntry]
    currency: Currency = Field(default_factory=Currency)
    hp: HitPoints = Field(default_factory=HitPoints)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)
    notes: str | None = None

    @model_validator(mode="after")
    def check_unique_selections(self) -> Self:
        """Reject duplicate feats, skills and equipment entries.

        Returns:
            Self if validation passes.

        Raises:
            ValueError: If any id appears twice in one selection list.
        """
        for label, ids in (
            ("feat", [f.feat_id for f in self.feats]),
            ("skill", [s.skill_id for s in self.skills]),
            ("equipment", [e.item_id for e in self.equipment]),
        ):
            seen: set[str] = set()
            for item_id in ids:
                if item_id in seen:
                    raise ValueError(f"Duplicate {label} id: {item_id}")
                seen.add(item_id)
        return self

    @model_validator(mode="after")
    def check_level_consistency(self) -> Self:
        """Reject a level that disagrees with the class entries.

        Returns:
            Self if validation passes.

        Raises:
            ValueError: If ``level`` is not the sum of class levels, or a
                skill has more ranks than the character has levels.
        """
        class_levels = sum(entry.level for entry in self.classes)
        if self.level != class_levels:
            raise ValueError(f"Level {self.level} does not match class levels ({class_levels})")
        for skill in self.skills:
            if skill.ranks > self.level:
                raise ValueError(f"Skill {skill.skill_id} has {skill.ranks} ranks at level {self.level}")
        return self

    def feat_ids(self) -> set[str]:
        return {f.feat_id for f in self.feats}

    def skill_ranks(self) -> dict[str, int]:
        return {s.skill_id: s.ranks for s in self.skills}


# =============================================================================
# Draft Builder
# =============================================================================


class CharacterDraft(CharacterModel):
    """A character under construction.

    Every field is optional and assignment is validated, so a draft is
    never structurally invalid, only incomplete. Promote it with build().

    Example:
        >>> draft = CharacterDraft(name="Valeros", race="human")
        >>> draft.classes = [CharacterClassEntry(class_id="fighter")]
        >>> character = draft.build()
    """

    model_config = ConfigDict(validate_assignment=True)

    name: str | None = None
    player: str | None = None
    alignment: Alignment | None = None
    deity: str | None = None
    notes: str | None = None
    race: str | None = None
    classes: list[CharacterClassEntry] | None = None
    ability_scores: AbilityScoreSet | None = None
    skills: list[CharacterSkillEntry] | None = None
    feats: list[CharacterFeatEntry] | None = None
    equipment: list[CharacterEquipmentEntry] | None = None
    currency: Currency | None = None

    @classmethod
    def from_character(cls, character: Character) -> CharacterDraft:
        """Reopen a saved character for editing."""
        return cls(
            name=character.name,
            player=character.player,
            alignment=character.alignment,
            deity=character.deity,
            notes=character.notes,
            race=character.race,
            classes=list(character.classes),
            ability_scores=character.ability_scores,
            skills=list(character.skills),
            feats=list(character.feats),
            equipment=list(character.equipment),
            currency=character.currency,
        )

    def missing_fields(self) -> list[str]:
        """List the required fields that block promotion.

        Returns:
            Field names in wizard order (name, race, classes).
        """
        missing: list[str] = []
        if not self.name:
            missing.append("name")
        if not self.race:
            missing.append("race")
        if not self.classes:
            missing.append("classes")
        return missing

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields()

    def build(
        self,
        *,
        character_id: str | None = None,
        created_at: datetime | None = None,
        now: datetime | None = None,
    ) -> Character:
        """Promote the draft to a complete Character.

        Optional selections default to empty, ability scores to all 10s,
        currency to zero and alignment to TN. Recorded hit points come
        from the first hit-die value of the first class, or 0.

        Args:
            character_id: Existing id when re-saving an edited character.
            created_at: Original creation time when re-saving.
            now: Timestamp to stamp as ``updated_at``.

        Returns:
            The complete character.

        Raises:
            ValidationError: If required fields are missing or the
                assembled character violates a model constraint.
        """
        missing = self.missing_fields()
        if missing:
            raise ValidationError(
                "Character draft is incomplete",
                field_name=missing[0],
                details={"missing_fields": missing},
            )

        classes = list(self.classes or [])
        timestamp = now or _utcnow()
        first_hit_points = classes[0].hit_points[0] if classes[0].hit_points else 0

        try:
            return Character(
                id=character_id or generate_character_id(),
                name=self.name,
                player=self.player,
                alignment=self.alignment or Alignment(DEFAULT_ALIGNMENT),
                deity=self.deity,
                notes=self.notes,
                race=self.race,
                classes=classes,
                level=sum(entry.level for entry in classes),
                ability_scores=self.ability_scores or AbilityScoreSet(),
                skills=list(self.skills or []),
                feats=list(self.feats or []),
                equipment=list(self.equipment or []),
                currency=self.currency or Currency(),
                hp=HitPoints(max=first_hit_points, current=first_hit_points),
                created_at=created_at or timestamp,
                updated_at=timestamp,
            )
        except PydanticValidationError as exc:
            raise ValidationError(
                "Character draft failed validation",
                details={"errors": exc.errors(include_url=False)},
            ) from exc


__all__ = [
    "CharacterModel",
    "AbilityScoreSet",
    "CharacterClassEntry",
    "CharacterSkillEntry",
    "CharacterFeatEntry",
    "CharacterEquipmentEntry",
    "Currency",
    "HitPoints",
    "Character",
    "CharacterDraft",
    "generate_character_id",
]

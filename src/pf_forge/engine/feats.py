"""Feat slot budget and selection.

A feat becomes selectable when a slot is free and its prerequisites are
met. A feat that is already selected can always be toggled off.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from pf_forge.core.constants import BASE_FEATS_AT_FIRST_LEVEL, BONUS_FEAT_RACES
from pf_forge.core.logging import get_logger
from pf_forge.engine.prerequisites import PrerequisiteContext, meets_prerequisites
from pf_forge.models.catalog import Catalogs, FeatDefinition
from pf_forge.models.character import CharacterFeatEntry
from pf_forge.models.enums import CatalogName, FeatSourceType

logger = get_logger(__name__)


def feats_available(
    race_id: str | None,
    bonus_feat_races: Iterable[str] = BONUS_FEAT_RACES,
    base_feats: int = BASE_FEATS_AT_FIRST_LEVEL,
) -> int:
    """Count the feat slots of a 1st-level character.

    Args:
        race_id: Selected race id, or None.
        bonus_feat_races: Race ids granting one extra feat.
        base_feats: Slots every character gets.

    Returns:
        ``base_feats + 1`` for a bonus-feat race, else ``base_feats``.
    """
    if race_id and race_id.lower() in {race.lower() for race in bonus_feat_races}:
        return base_feats + 1
    return base_feats


def feats_remaining(feats: Sequence[CharacterFeatEntry], available: int) -> int:
    """Free feat slots. Negative when over-selected."""
    return available - len(feats)


def _is_selected(feats: Sequence[CharacterFeatEntry], feat_id: str) -> bool:
    return any(entry.feat_id == feat_id for entry in feats)


def can_select_feat(
    feats: Sequence[CharacterFeatEntry],
    feat_id: str,
    catalogs: Catalogs,
    context: PrerequisiteContext,
    available: int,
) -> bool:
    """Check whether a feat can be toggled.

    Args:
        feats: Currently selected feats.
        feat_id: Feat to check.
        catalogs: Reference catalogs.
        context: Character state for the prerequisite check.
        available: Total feat slots.

    Returns:
        True if the feat is already selected, or a slot is free and its
        prerequisites are met.

    Raises:
        UnknownCatalogIdError: If an unselected feat id is not in the catalog.
    """
    if _is_selected(feats, feat_id):
        return True
    feat: FeatDefinition = catalogs.lookup(CatalogName.FEATS, feat_id)
    if feats_remaining(feats, available) <= 0:
        return False
    return meets_prerequisites(feat, context)


def toggle_feat(
    feats: Sequence[CharacterFeatEntry],
    feat_id: str,
    catalogs: Catalogs,
    context: PrerequisiteContext,
    available: int,
) -> list[CharacterFeatEntry]:
    """Select a feat, or deselect it if already selected.

    Selection that is not allowed leaves the list unchanged.

    Returns:
        The new feat list.

    Raises:
        UnknownCatalogIdError: If an unselected feat id is not in the catalog.
    """
    if _is_selected(feats, feat_id):
        return [entry for entry in feats if entry.feat_id != feat_id]
    if not can_select_feat(feats, feat_id, catalogs, context, available):
        logger.debug("Feat selection rejected", feat_id=feat_id, selected=len(feats), available=available)
        return list(feats)
    return [
        *feats,
        CharacterFeatEntry(feat_id=feat_id, source_type=FeatSourceType.LEVEL, source_level=1),
    ]


__all__ = [
    "feats_available",
    "feats_remaining",
    "can_select_feat",
    "toggle_feat",
]

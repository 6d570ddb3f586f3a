"""Ability score point buy and modifiers.

The point-buy economy prices each base score from a fixed table (7
through 18). The table is authoritative: scores outside it raise
OutOfRangeError instead of being clamped, because clamping would
silently corrupt the ledger.

Racial modifiers are applied after purchase and are not re-bounded;
final scores above 18 are legitimate.
"""

from __future__ import annotations

from pf_forge.core.constants import (
    DEFAULT_POINT_BUY_BUDGET,
    POINT_BUY_COSTS,
    POINT_BUY_MAX,
    POINT_BUY_MIN,
)
from pf_forge.core.exceptions import OutOfRangeError
from pf_forge.core.logging import get_logger
from pf_forge.models.catalog import RaceDefinition
from pf_forge.models.character import AbilityScoreSet
from pf_forge.models.enums import Ability

logger = get_logger(__name__)


# =============================================================================
# Point Buy
# =============================================================================


def point_cost(score: int) -> int:
    """Get the point-buy cost of a base score.

    Args:
        score: Base ability score.

    Returns:
        Points spent (negative for scores below 10).

    Raises:
        OutOfRangeError: If the score is outside 7..18.
    """
    try:
        return POINT_BUY_COSTS[score]
    except KeyError:
        raise OutOfRangeError(
            "Ability score outside the point-buy table",
            value=score,
            minimum=POINT_BUY_MIN,
            maximum=POINT_BUY_MAX,
        ) from None


def total_spent(scores: AbilityScoreSet) -> int:
    """Sum the point-buy cost of all six base scores."""
    return sum(point_cost(score) for score in scores.as_dict().values())


def points_remaining(scores: AbilityScoreSet, budget: int = DEFAULT_POINT_BUY_BUDGET) -> int:
    """Budget left after purchasing the given base scores.

    The result is not clamped; a negative value means the scores are over
    budget and it is up to the caller to block further increases.
    """
    return budget - total_spent(scores)


def can_increase(
    scores: AbilityScoreSet,
    ability: Ability,
    budget: int = DEFAULT_POINT_BUY_BUDGET,
) -> bool:
    """Check whether one more point can be bought in an ability.

    Args:
        scores: Current base scores.
        ability: Ability to raise.
        budget: Total point-buy budget.

    Returns:
        False at 18; otherwise whether the marginal cost fits the budget.
    """
    current = scores.get(ability)
    if current >= POINT_BUY_MAX:
        return False
    marginal = point_cost(current + 1) - point_cost(current)
    return points_remaining(scores, budget) >= marginal


def can_decrease(scores: AbilityScoreSet, ability: Ability) -> bool:
    return scores.get(ability) > POINT_BUY_MIN


def increase_score(
    scores: AbilityScoreSet,
    ability: Ability,
    budget: int = DEFAULT_POINT_BUY_BUDGET,
) -> AbilityScoreSet:
    """Raise a base score by one if allowed, otherwise return it unchanged."""
    if not can_increase(scores, ability, budget):
        logger.debug("Ability increase rejected", ability=str(ability), score=scores.get(ability))
        return scores
    return scores.with_score(ability, scores.get(ability) + 1)


def decrease_score(scores: AbilityScoreSet, ability: Ability) -> AbilityScoreSet:
    """Lower a base score by one if allowed, otherwise return it unchanged."""
    if not can_decrease(scores, ability):
        logger.debug("Ability decrease rejected", ability=str(ability), score=scores.get(ability))
        return scores
    return scores.with_score(ability, scores.get(ability) - 1)


# =============================================================================
# Modifiers
# =============================================================================


def ability_modifier(score: int) -> int:
    """Calculate the modifier for a final ability score.

    Floor division rounds toward negative infinity, so a 7 gives -2.

    Args:
        score: Final ability score.

    Returns:
        ``floor((score - 10) / 2)``.
    """
    return (score - 10) // 2


def ability_modifiers(scores: AbilityScoreSet) -> dict[Ability, int]:
    return {ability: ability_modifier(score) for ability, score in scores.as_dict().items()}


def racial_modifier(race: RaceDefinition | None, ability: Ability) -> int:
    """Racial adjustment to one ability; 0 when no race is chosen."""
    if race is None:
        return 0
    return race.ability_score_modifiers.get(ability, 0)


def final_score(base: int, racial_mod: int) -> int:
    return base + racial_mod


def final_scores(base_scores: AbilityScoreSet, race: RaceDefinition | None) -> AbilityScoreSet:
    """Apply racial modifiers to every base score."""
    return AbilityScoreSet(
        **{
            ability.field_name: final_score(score, racial_modifier(race, ability))
            for ability, score in base_scores.as_dict().items()
        }
    )


__all__ = [
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
]

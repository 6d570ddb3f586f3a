"""Starting equipment purchase ledger.

The cart is a list of CharacterEquipmentEntry; prices and weights are
resolved from the weapon catalog first, then armor. Amounts are Decimal
gold pieces so fractional prices (12.5 gp) total exactly.

Remaining gold is reported as-is, even when negative. Only
purchase_currency() clamps, because Currency cannot hold a debt.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

from pf_forge.core.constants import DEFAULT_STARTING_GOLD
from pf_forge.core.logging import get_logger
from pf_forge.engine.prerequisites import is_proficient
from pf_forge.models.catalog import Catalogs, ClassDefinition
from pf_forge.models.character import CharacterEquipmentEntry, Currency

logger = get_logger(__name__)

GoldAmount = Decimal | int


# =============================================================================
# Totals
# =============================================================================


def unit_cost(item_id: str, catalogs: Catalogs) -> Decimal:
    """Price of one unit of an item.

    Raises:
        UnknownCatalogIdError: If the id is in neither the weapon nor
            the armor catalog.
    """
    return catalogs.lookup_item(item_id).cost


def total_cost(equipment: Sequence[CharacterEquipmentEntry], catalogs: Catalogs) -> Decimal:
    """Sum price times quantity over the cart.

    Entries whose id is not in the catalogs contribute nothing.
    """
    total = Decimal(0)
    for entry in equipment:
        item = catalogs.find_item(entry.item_id)
        if item is None:
            logger.warning("Equipment not in catalog, contributing zero cost", item_id=entry.item_id)
            continue
        total += item.cost * entry.quantity
    return total


def total_weight(equipment: Sequence[CharacterEquipmentEntry], catalogs: Catalogs) -> float:
    """Carried weight in pounds. Unknown items weigh nothing."""
    weight = 0.0
    for entry in equipment:
        item = catalogs.find_item(entry.item_id)
        if item is not None:
            weight += item.weight * entry.quantity
    return weight


def remaining_gold(
    starting_gold: GoldAmount,
    equipment: Sequence[CharacterEquipmentEntry],
    catalogs: Catalogs,
) -> Decimal:
    """Starting gold minus the cart total. May be negative."""
    return Decimal(starting_gold) - total_cost(equipment, catalogs)


def can_afford(
    item_id: str,
    equipment: Sequence[CharacterEquipmentEntry],
    catalogs: Catalogs,
    starting_gold: GoldAmount = DEFAULT_STARTING_GOLD,
    quantity: int = 1,
) -> bool:
    """Check whether more units of an item fit in the remaining gold.

    Raises:
        UnknownCatalogIdError: If the item id is not in the catalogs.
    """
    return unit_cost(item_id, catalogs) * quantity <= remaining_gold(starting_gold, equipment, catalogs)


# =============================================================================
# Cart Mutations
# =============================================================================


def quantity_of(equipment: Sequence[CharacterEquipmentEntry], item_id: str) -> int:
    for entry in equipment:
        if entry.item_id == item_id:
            return entry.quantity
    return 0


def add_item(
    equipment: Sequence[CharacterEquipmentEntry],
    item_id: str,
    catalogs: Catalogs,
    starting_gold: GoldAmount = DEFAULT_STARTING_GOLD,
) -> list[CharacterEquipmentEntry]:
    """Buy one unit of an item if the remaining gold covers it.

    Args:
        equipment: Current cart.
        item_id: Weapon or armor id.
        catalogs: Reference catalogs.
        starting_gold: Gold available before any purchase.

    Returns:
        The new cart; unchanged when the item is unaffordable.

    Raises:
        UnknownCatalogIdError: If the item id is not in the catalogs.
    """
    if not can_afford(item_id, equipment, catalogs, starting_gold):
        logger.debug(
            "Purchase rejected",
            item_id=item_id,
            remaining=str(remaining_gold(starting_gold, equipment, catalogs)),
        )
        return list(equipment)

    if quantity_of(equipment, item_id) == 0:
        kept = [entry for entry in equipment if entry.item_id != item_id]
        return [*kept, CharacterEquipmentEntry(item_id=item_id, quantity=1, equipped=False)]
    return [
        entry.model_copy(update={"quantity": entry.quantity + 1}) if entry.item_id == item_id else entry
        for entry in equipment
    ]


def remove_item(
    equipment: Sequence[CharacterEquipmentEntry],
    item_id: str,
) -> list[CharacterEquipmentEntry]:
    """Return one unit of an item, dropping the entry when the last unit goes.

    An entry already at quantity 0 is left as it is.
    """
    result: list[CharacterEquipmentEntry] = []
    for entry in equipment:
        if entry.item_id != item_id or entry.quantity == 0:
            result.append(entry)
        elif entry.quantity > 1:
            result.append(entry.model_copy(update={"quantity": entry.quantity - 1}))
    return result


def set_equipped(
    equipment: Sequence[CharacterEquipmentEntry],
    item_id: str,
    equipped: bool,
) -> list[CharacterEquipmentEntry]:
    """Mark an item as worn or carried. Absent items are ignored."""
    return [
        entry.model_copy(update={"equipped": equipped}) if entry.item_id == item_id else entry
        for entry in equipment
    ]


# =============================================================================
# Reporting
# =============================================================================


def non_proficient_items(
    equipment: Sequence[CharacterEquipmentEntry],
    catalogs: Catalogs,
    class_def: ClassDefinition | None,
) -> list[str]:
    """Ids of purchased items the class is not proficient with."""
    flagged: list[str] = []
    for entry in equipment:
        item = catalogs.find_item(entry.item_id)
        if item is not None and not is_proficient(class_def, item):
            flagged.append(entry.item_id)
    return flagged


def purchase_currency(
    starting_gold: GoldAmount,
    equipment: Sequence[CharacterEquipmentEntry],
    catalogs: Catalogs,
) -> Currency:
    """Coins left after purchase, as stored on the character.

    Only gold pieces are tracked; a negative balance is stored as 0 gp.

    Args:
        starting_gold: Gold available before any purchase.
        equipment: Purchased items.
        catalogs: Reference catalogs.

    Returns:
        Currency with the remaining gold.
    """
    remaining = remaining_gold(starting_gold, equipment, catalogs)
    if remaining < 0:
        logger.warning("Equipment exceeds starting gold", remaining=str(remaining))
    return Currency(cp=0, sp=0, gp=max(Decimal(0), remaining), pp=0)


__all__ = [
    "unit_cost",
    "total_cost",
    "total_weight",
    "remaining_gold",
    "can_afford",
    "quantity_of",
    "add_item",
    "remove_item",
    "set_equipped",
    "non_proficient_items",
    "purchase_currency",
]

"""Slot layout grouping and auto-selection."""

import logging
from typing import Callable, Iterable, Optional

from loadout.models import (
    RARITY_ORDER,
    AttachmentItem,
    AttachmentType,
    Rarity,
    RarityRow,
    SlotEntry,
    SlotLayout,
)

logger = logging.getLogger(__name__)


def group_by_rarity(
    items: Iterable[AttachmentItem],
    category: AttachmentType,
) -> dict[Rarity, list[AttachmentItem]]:
    """Bucket the items of one category by rarity, keeping catalog order."""
    grouped: dict[Rarity, list[AttachmentItem]] = {}
    for item in items:
        if item.type is not category:
            continue
        grouped.setdefault(item.rarity, []).append(item)
    return grouped


def build_layout(
    items: Iterable[AttachmentItem],
    category: AttachmentType,
    slots_for: Callable[[Rarity], int],
) -> SlotLayout:
    """Map the items of a category onto rarity rows of fixed capacity.

    Args:
        items: Catalog items in catalog order
        category: Category being displayed
        slots_for: Returns the slot count of a rarity row

    Returns:
        Layout with one row per rarity tier holding at least one item.
        Items beyond a row's capacity are left out.
    """
    grouped = group_by_rarity(items, category)
    rows = []
    for rarity in RARITY_ORDER:
        tier_items = grouped.get(rarity)
        if not tier_items:
            continue
        capacity = slots_for(rarity)
        placed = tier_items[:capacity]
        omitted = len(tier_items) - len(placed)
        if omitted:
            logger.debug(
                "%s row of %s is full: %d item(s) not shown",
                rarity.display_name, category.display_name, omitted,
            )
        slots = tuple(
            SlotEntry(index, placed[index] if index < len(placed) else None)
            for index in range(capacity)
        )
        rows.append(RarityRow(rarity=rarity, slots=slots, omitted=omitted))
    return SlotLayout(category=category, rows=tuple(rows))


def first_available(
    items: Iterable[AttachmentItem],
    category: AttachmentType,
) -> Optional[AttachmentItem]:
    """Lowest-rarity item of a category, first in catalog order on ties."""
    grouped = group_by_rarity(items, category)
    for rarity in RARITY_ORDER:
        if grouped.get(rarity):
            return grouped[rarity][0]
    return None

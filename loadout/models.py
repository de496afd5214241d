"""Data models for the attachment loadout browser."""
from collections.abc import Hashable
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class AttachmentType(Enum):
    """Attachment categories a weapon exposes."""
    SIGHT = "sight"
    MAGAZINE = "magazine"
    TACTICAL = "tactical"
    STOCK = "stock"
    BARREL = "barrel"

    @property
    def display_name(self) -> str:
        return self.name.capitalize()


class Rarity(Enum):
    """Rarity tiers, lowest first."""
    DEFAULT = "default"
    COMMON = "common"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"

    @property
    def rank(self) -> int:
        """Position of the tier in ascending order (Default is 0)."""
        return RARITY_ORDER.index(self)

    @property
    def display_name(self) -> str:
        return self.name.capitalize()

    def __lt__(self, other: "Rarity") -> bool:
        if not isinstance(other, Rarity):
            return NotImplemented
        return self.rank < other.rank


# Ascending order, used for layout rows and auto-selection
RARITY_ORDER: tuple[Rarity, ...] = (
    Rarity.DEFAULT,
    Rarity.COMMON,
    Rarity.RARE,
    Rarity.EPIC,
    Rarity.LEGENDARY,
)


@dataclass(frozen=True)
class AttachmentItem:
    """Immutable catalog entry.

    Attributes:
        id: Unique identifier within the catalog
        type: Attachment category the item belongs to
        rarity: Rarity tier used for grouping
        icon: Display icon reference (may be empty)
        representation: Opaque handle of whatever shows the item on the
            weapon when equipped, or None if nothing does
        name: Display label, defaults to the id
    """
    id: str
    type: AttachmentType
    rarity: Rarity
    icon: str = ""
    representation: Optional[Hashable] = None
    name: str = ""

    @property
    def label(self) -> str:
        return self.name or self.id


@dataclass(frozen=True)
class SlotEntry:
    """One slot position of a rarity row."""
    index: int
    item: Optional[AttachmentItem] = None

    @property
    def is_empty(self) -> bool:
        return self.item is None


@dataclass(frozen=True)
class RarityRow:
    """Slots shown for a single rarity tier.

    `omitted` counts items of the tier that did not fit into the row.
    """
    rarity: Rarity
    slots: tuple[SlotEntry, ...]
    omitted: int = 0

    @property
    def items(self) -> list[AttachmentItem]:
        return [slot.item for slot in self.slots if slot.item is not None]


@dataclass(frozen=True)
class SlotLayout:
    """What the slot grid displays for one category.

    Rows are in ascending rarity order; tiers without items have no row.
    """
    category: AttachmentType
    rows: tuple[RarityRow, ...] = ()

    def row_for(self, rarity: Rarity) -> Optional[RarityRow]:
        for row in self.rows:
            if row.rarity is rarity:
                return row
        return None

    def items(self) -> list[AttachmentItem]:
        """Placed items in display order."""
        return [item for row in self.rows for item in row.items]

    def as_dict(self) -> dict[Rarity, list[tuple[int, Optional[AttachmentItem]]]]:
        return {
            row.rarity: [(slot.index, slot.item) for slot in row.slots]
            for row in self.rows
        }

    @property
    def is_empty(self) -> bool:
        return not self.rows

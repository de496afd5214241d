"""Utility functions for formatting and display."""
from collections.abc import Hashable
from typing import Optional

from rich.text import Text

from .config import RARITY_COLORS
from .models import AttachmentItem, Rarity


def rarity_text(rarity: Rarity) -> Text:
    """Rarity name coloured by tier."""
    return Text(rarity.display_name, style=RARITY_COLORS.get(rarity, ""))


def item_text(item: Optional[AttachmentItem]) -> Text:
    """Item label coloured by its rarity, or a dash when empty."""
    if item is None:
        return Text("-", style="dim")
    return Text(item.label, style=RARITY_COLORS.get(item.rarity, ""))


def format_item(item: Optional[AttachmentItem]) -> str:
    """Plain one-line description of an item."""
    if item is None:
        return "(none)"
    return f"{item.label} [{item.rarity.display_name}]"


def visible_handles(visibility: dict[Hashable, bool]) -> list[str]:
    """Sorted names of the representations marked visible."""
    return sorted(str(handle) for handle, shown in visibility.items() if shown)

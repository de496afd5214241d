"""TUI screens for the attachment loadout browser."""

from .catalog_screen import CatalogScreen
from .loadout_screen import LoadoutScreen, ScreenSelectionView, SlotButton

__all__ = [
    "CatalogScreen",
    "LoadoutScreen",
    "ScreenSelectionView",
    "SlotButton",
]

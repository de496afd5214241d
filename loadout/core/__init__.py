"""Core selection logic for the attachment loadout browser."""

from .base import SelectionView
from .controller import SelectionController
from .layout import build_layout, first_available, group_by_rarity

__all__ = [
    "SelectionView",
    "SelectionController",
    "build_layout",
    "first_available",
    "group_by_rarity",
]

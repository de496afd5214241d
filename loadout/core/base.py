"""Base abstraction for views driven by the selection controller."""

from abc import ABC, abstractmethod
from collections.abc import Hashable
from typing import Optional

from loadout.models import AttachmentItem, SlotLayout


class SelectionView(ABC):
    """Collaborator that presents the controller's state.

    Views receive notifications synchronously, after the controller has
    updated its state. They own all presentation concerns (icons, buttons,
    panels, showing and hiding representations); the controller only emits
    models.
    """

    @abstractmethod
    def render_layout(self, layout: SlotLayout) -> None:
        """Display the slot grid of the opened category.

        Rarity tiers absent from the layout must be hidden.
        """
        pass

    @abstractmethod
    def preview_changed(self, item: Optional[AttachmentItem]) -> None:
        """React to a new preview item (None when nothing is previewed)."""
        pass

    @abstractmethod
    def apply_visibility(self, visibility: dict[Hashable, bool]) -> None:
        """Show or hide representations.

        Args:
            visibility: Mapping of representation handle to visible flag
        """
        pass

    def open_panel(self) -> None:
        """Called when the selection panel should become visible (optional)."""
        pass

    def close_panel(self) -> None:
        """Called when the selection panel should be hidden (optional)."""
        pass

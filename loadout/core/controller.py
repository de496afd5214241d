"""Selection and equip state machine for the attachment browser."""

import logging
from collections.abc import Hashable
from typing import Iterable, Optional, Union

from loadout.catalog import Catalog
from loadout.config import LoadoutConfig
from loadout.models import AttachmentItem, AttachmentType, SlotLayout

from .base import SelectionView
from .layout import build_layout, first_available

logger = logging.getLogger(__name__)


class SelectionController:
    """Tracks the open category, the preview item and the equipped items.

    The preview is the item currently highlighted while browsing an open
    category; it only becomes equipped on `commit_selection`. Closing the
    selection discards an uncommitted preview and publishes visibility
    computed from the equipped items alone.

    Views are notified synchronously after each state change. Caller
    mistakes (unknown ids, items from another category) are logged and
    ignored; no operation raises for them.
    """

    def __init__(
        self,
        catalog: Union[Catalog, Iterable[AttachmentItem]],
        config: Optional[LoadoutConfig] = None,
        views: Iterable[SelectionView] = (),
    ):
        self._catalog = catalog if isinstance(catalog, Catalog) else Catalog(catalog)
        self.config = config or LoadoutConfig()
        self._views: list[SelectionView] = list(views)
        self._open_category: Optional[AttachmentType] = None
        self._preview: Optional[AttachmentItem] = None
        self._equipped: dict[AttachmentType, AttachmentItem] = {}
        self._layout: Optional[SlotLayout] = None
        self._panel_open = False

    # -- views ---------------------------------------------------------

    def attach(self, view: SelectionView) -> None:
        if view not in self._views:
            self._views.append(view)

    def detach(self, view: SelectionView) -> None:
        if view in self._views:
            self._views.remove(view)

    # -- state accessors -----------------------------------------------

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def current_category(self) -> Optional[AttachmentType]:
        return self._open_category

    @property
    def preview_item(self) -> Optional[AttachmentItem]:
        return self._preview

    @property
    def panel_open(self) -> bool:
        return self._panel_open

    @property
    def equipped(self) -> dict[AttachmentType, AttachmentItem]:
        """Copy of the committed item per category."""
        return dict(self._equipped)

    def equipped_item(self, category: AttachmentType) -> Optional[AttachmentItem]:
        return self._equipped.get(category)

    def layout(self) -> Optional[SlotLayout]:
        """Layout computed by the last `open_category` call."""
        return self._layout

    # -- operations ----------------------------------------------------

    def open_category(self, category: AttachmentType) -> SlotLayout:
        """Open a category for browsing.

        The preview starts on the equipped item of the category, or on the
        lowest-rarity item when nothing is equipped.

        Args:
            category: Category to browse

        Returns:
            The recomputed slot layout
        """
        self._open_category = category
        equipped = self._equipped.get(category)
        if equipped is not None and equipped in self._catalog:
            self._preview = equipped
        else:
            self._preview = None

        self._layout = build_layout(self._catalog, category, self.config.slots_for)

        if self._preview is None:
            self._preview = first_available(self._catalog, category)
            if self._preview is not None:
                logger.debug("Auto-selected %s for %s", self._preview.id, category.display_name)

        if not self._panel_open:
            self._panel_open = True
            for view in list(self._views):
                view.open_panel()
        for view in list(self._views):
            view.render_layout(self._layout)
        self._notify_preview()
        return self._layout

    def open_sight(self) -> SlotLayout:
        return self.open_category(AttachmentType.SIGHT)

    def open_magazine(self) -> SlotLayout:
        return self.open_category(AttachmentType.MAGAZINE)

    def open_tactical(self) -> SlotLayout:
        return self.open_category(AttachmentType.TACTICAL)

    def open_stock(self) -> SlotLayout:
        return self.open_category(AttachmentType.STOCK)

    def open_barrel(self) -> SlotLayout:
        return self.open_category(AttachmentType.BARREL)

    def choose_item(self, item_id: str) -> bool:
        """Preview an item of the open category.

        Returns:
            True if the preview changed, False if the id was rejected
        """
        item = self._catalog.get(item_id)
        if item is None:
            logger.warning("Ignoring choice of unknown item %r", item_id)
            return False
        if item.type is not self._open_category:
            logger.warning(
                "Ignoring choice of %s: it is a %s, open category is %s",
                item_id,
                item.type.display_name,
                self._open_category.display_name if self._open_category else "none",
            )
            return False
        self._preview = item
        self._notify_preview()
        return True

    def commit_selection(self) -> Optional[AttachmentItem]:
        """Equip the preview item in the open category.

        Returns:
            The equipped item, or None when nothing was previewed
        """
        if self._preview is None or self._open_category is None:
            return None
        self._equipped[self._open_category] = self._preview
        logger.info("Equipped %s as %s", self._preview.id, self._open_category.display_name)
        return self._preview

    def close_selection(self) -> dict[Hashable, bool]:
        """Publish equipped visibility, then leave browsing mode.

        Any uncommitted preview is discarded.

        Returns:
            The representation visibility that was emitted
        """
        visibility = self.sync_visibility()
        self._open_category = None
        self._preview = None
        self._layout = None
        if self._panel_open:
            self._panel_open = False
            for view in list(self._views):
                view.close_panel()
        return visibility

    def sync_visibility(self) -> dict[Hashable, bool]:
        """Emit visibility for the equipped items without touching selection."""
        visibility = self.representation_visibility()
        for view in list(self._views):
            view.apply_visibility(visibility)
        return visibility

    def replace_catalog(self, catalog: Union[Catalog, Iterable[AttachmentItem]]) -> None:
        """Swap in a reloaded catalog.

        Equipped items are re-bound by id to their new catalog entry. Those
        missing from the new catalog, or moved to another category, are
        dropped, so their category auto-selects on the next open. An open
        category is re-opened against the new catalog.
        """
        self._catalog = catalog if isinstance(catalog, Catalog) else Catalog(catalog)
        for category, item in list(self._equipped.items()):
            replacement = self._catalog.get(item.id)
            if replacement is None or replacement.type is not category:
                logger.warning("Dropping equipped %s: no longer in catalog", item.id)
                del self._equipped[category]
            else:
                self._equipped[category] = replacement
        logger.info("Catalog replaced (%d items)", len(self._catalog))
        if self._open_category is not None:
            self.open_category(self._open_category)

    # -- derived models ------------------------------------------------

    def visibility_model(self) -> dict[str, bool]:
        """Visible flag per catalog item id, from the equipped items only."""
        return self._visibility(self._equipped)

    def preview_visibility(self) -> dict[str, bool]:
        """Like `visibility_model`, with the open category showing its preview."""
        selection = dict(self._equipped)
        if self._open_category is not None:
            selection.pop(self._open_category, None)
            if self._preview is not None:
                selection[self._open_category] = self._preview
        return self._visibility(selection)

    def representation_visibility(self) -> dict[Hashable, bool]:
        """Visible flag per representation handle, for visibility sinks.

        Items without a representation are skipped. A handle shared by
        several items is visible if any equipped item uses it.
        """
        visibility: dict[Hashable, bool] = {}
        for item in self._catalog:
            if item.representation is not None:
                visibility[item.representation] = False
        for item in self._equipped.values():
            if item.representation is not None:
                visibility[item.representation] = True
        return visibility

    def _visibility(self, selection: dict[AttachmentType, AttachmentItem]) -> dict[str, bool]:
        visibility = {item.id: False for item in self._catalog}
        for item in selection.values():
            if item.id in visibility:
                visibility[item.id] = True
        return visibility

    def _notify_preview(self) -> None:
        for view in list(self._views):
            view.preview_changed(self._preview)

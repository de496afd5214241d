"""Attachment selection screen."""
from collections.abc import Hashable
from typing import Optional

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Label, Rule, Static

from loadout.catalog import load_catalog
from loadout.config import ATTACHMENT_HOTKEYS
from loadout.core import SelectionController, SelectionView
from loadout.errors import CatalogError
from loadout.models import RARITY_ORDER, AttachmentItem, AttachmentType, SlotLayout
from loadout.utils import item_text, rarity_text, visible_handles

EMPTY_SLOT_LABEL = "-"


class ScreenSelectionView(SelectionView):
    """Forwards controller notifications to a LoadoutScreen."""

    def __init__(self, screen: "LoadoutScreen"):
        self.screen = screen

    def render_layout(self, layout: SlotLayout) -> None:
        self.screen.show_layout(layout)

    def preview_changed(self, item: Optional[AttachmentItem]) -> None:
        self.screen.show_preview(item)

    def apply_visibility(self, visibility: dict[Hashable, bool]) -> None:
        self.screen.show_weapon(visibility)

    def open_panel(self) -> None:
        self.screen.set_panel_visible(True)

    def close_panel(self) -> None:
        self.screen.set_panel_visible(False)


class SlotButton(Button):
    """Button for one slot position of a rarity row."""

    def __init__(self, rarity_value: str, index: int):
        super().__init__(
            EMPTY_SLOT_LABEL,
            id=f"slot-{rarity_value}-{index}",
            classes="slot-button",
            disabled=True,
        )
        self.item_id: Optional[str] = None

    def assign(self, item: Optional[AttachmentItem]) -> None:
        self.item_id = item.id if item else None
        self.label = Text(item.label) if item else EMPTY_SLOT_LABEL
        self.disabled = item is None
        self.variant = "default"


class LoadoutScreen(Screen):
    """Browse attachments by category and equip one per category.

    Category buttons open the selection panel, which shows one row of slot
    buttons per rarity tier. Clicking a slot previews the item; Equip
    commits it and Close applies the equipped items to the weapon.
    """

    CSS = """
    LoadoutScreen {
        layout: vertical;
    }

    #category-bar {
        height: 3;
        padding: 0 2;
    }

    .category-button {
        margin-right: 1;
    }

    #selection-panel {
        height: auto;
        padding: 1 2;
    }

    #category-title {
        text-style: bold;
        color: $accent;
        margin-bottom: 1;
    }

    .rarity-row {
        height: 3;
    }

    .rarity-label {
        width: 12;
        content-align: left middle;
    }

    .slot-button {
        min-width: 14;
        margin-right: 1;
    }

    #preview-label {
        margin-top: 1;
    }

    #actions {
        height: 3;
        margin-top: 1;
    }

    #weapon-panel {
        padding: 1 2;
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding(ATTACHMENT_HOTKEYS[AttachmentType.SIGHT], "open('sight')", "Sight"),
        Binding(ATTACHMENT_HOTKEYS[AttachmentType.MAGAZINE], "open('magazine')", "Magazine"),
        Binding(ATTACHMENT_HOTKEYS[AttachmentType.TACTICAL], "open('tactical')", "Tactical"),
        Binding(ATTACHMENT_HOTKEYS[AttachmentType.STOCK], "open('stock')", "Stock"),
        Binding(ATTACHMENT_HOTKEYS[AttachmentType.BARREL], "open('barrel')", "Barrel"),
        Binding("e", "equip", "Equip"),
        Binding("c", "close_selection", "Close"),
        Binding("escape", "close_selection", "Close", show=False),
        Binding("r", "reload", "Reload catalog"),
    ]

    def __init__(self, controller: SelectionController):
        super().__init__()
        self.controller = controller
        self.selection_view = ScreenSelectionView(self)

    def compose(self) -> ComposeResult:
        yield Header()

        with Horizontal(id="category-bar"):
            for attachment_type in AttachmentType:
                hotkey = ATTACHMENT_HOTKEYS[attachment_type]
                yield Button(
                    Text(f"[{hotkey}] {attachment_type.display_name}"),
                    id=f"category-{attachment_type.value}",
                    classes="category-button",
                )

        with Container(id="selection-panel"):
            yield Static("", id="category-title")
            with Vertical(id="slot-grid"):
                for rarity in RARITY_ORDER:
                    with Horizontal(id=f"row-{rarity.value}", classes="rarity-row"):
                        yield Label(rarity_text(rarity), classes="rarity-label")
                        for index in range(self.controller.config.slots_for(rarity)):
                            yield SlotButton(rarity.value, index)
            yield Static("", id="preview-label")
            with Horizontal(id="actions"):
                yield Button("Equip", id="equip-button", variant="success")
                yield Button("Close", id="close-button", variant="default")

        yield Rule()
        yield Static("", id="weapon-panel")
        yield Footer()

    def on_mount(self) -> None:
        self.set_panel_visible(False)
        self.controller.attach(self.selection_view)
        self.controller.sync_visibility()

    def on_unmount(self) -> None:
        self.controller.detach(self.selection_view)

    # -- view updates ----------------------------------------------------

    def set_panel_visible(self, visible: bool) -> None:
        self.query_one("#selection-panel").display = visible

    def show_layout(self, layout: SlotLayout) -> None:
        title = self.query_one("#category-title", Static)
        if layout.is_empty:
            title.update(f"{layout.category.display_name}: no attachments available")
        else:
            title.update(layout.category.display_name)

        for rarity in RARITY_ORDER:
            row_widget = self.query_one(f"#row-{rarity.value}", Horizontal)
            row = layout.row_for(rarity)
            row_widget.display = row is not None
            buttons = list(row_widget.query(SlotButton))
            for index, button in enumerate(buttons):
                item = row.slots[index].item if row is not None and index < len(row.slots) else None
                button.assign(item)

    def show_preview(self, item: Optional[AttachmentItem]) -> None:
        label = Text("Preview: ")
        label.append_text(item_text(item))
        self.query_one("#preview-label", Static).update(label)
        for button in self.query(SlotButton):
            selected = item is not None and button.item_id == item.id
            button.variant = "primary" if selected else "default"
        self._show_handles("Previewing", self._preview_handles())

    def show_weapon(self, visibility: dict[Hashable, bool]) -> None:
        self._show_handles("Weapon", visible_handles(visibility))

    def _preview_handles(self) -> list[str]:
        visible_ids = {
            item_id for item_id, shown in self.controller.preview_visibility().items() if shown
        }
        return sorted(
            str(item.representation)
            for item in self.controller.catalog
            if item.id in visible_ids and item.representation is not None
        )

    def _show_handles(self, heading: str, handles: list[str]) -> None:
        text = Text(f"{heading}: ", style="bold")
        text.append(", ".join(handles) if handles else "bare weapon")
        self.query_one("#weapon-panel", Static).update(text)

    # -- input -----------------------------------------------------------

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button press events."""
        button = event.button
        if isinstance(button, SlotButton):
            if button.item_id is not None:
                self.controller.choose_item(button.item_id)
        elif button.id and button.id.startswith("category-"):
            self.action_open(button.id.removeprefix("category-"))
        elif button.id == "equip-button":
            self.action_equip()
        elif button.id == "close-button":
            self.action_close_selection()

    def action_open(self, category: str) -> None:
        self.controller.open_category(AttachmentType(category))

    def action_equip(self) -> None:
        item = self.controller.commit_selection()
        if item is None:
            self.notify("Nothing to equip", severity="warning", timeout=1)
        else:
            self.notify(f"Equipped {item.label}", timeout=1)

    def action_close_selection(self) -> None:
        self.controller.close_selection()

    def action_reload(self) -> None:
        path = self.controller.config.catalog_path
        if path is None:
            self.notify("No catalog file configured", severity="warning")
            return
        try:
            self.controller.replace_catalog(load_catalog(path))
        except CatalogError as exc:
            self.notify(str(exc), title="Catalog error", severity="error")
            return
        self.notify("Catalog reloaded", timeout=1)

"""Read-only catalog overview screen."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.screen import Screen
from textual.widgets import Button, DataTable, Footer, Header, Static

from loadout.core import SelectionController
from loadout.utils import item_text, rarity_text


class CatalogScreen(Screen):
    """Lists every catalog item with its category, rarity and equip state."""

    CSS = """
    CatalogScreen {
        layout: vertical;
    }

    #catalog-container {
        padding: 1 2;
        height: 1fr;
    }

    #title {
        text-align: center;
        text-style: bold;
        color: $accent;
        padding: 1;
    }

    #back-button {
        margin-top: 1;
        width: 100%;
    }
    """

    BINDINGS = [
        Binding("escape", "back", "Back"),
    ]

    def __init__(self, controller: SelectionController):
        super().__init__()
        self.controller = controller

    def compose(self) -> ComposeResult:
        yield Header()

        with Container(id="catalog-container"):
            yield Static(f"Attachment Catalog ({len(self.controller.catalog)} items)", id="title")
            yield DataTable(id="catalog-table")
            yield Button("Back", id="back-button", variant="default")

        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one("#catalog-table", DataTable)
        table.add_columns("Type", "Rarity", "Item", "Id", "Equipped")
        equipped_ids = {item.id for item in self.controller.equipped.values()}
        items = sorted(
            self.controller.catalog,
            key=lambda item: (item.type.display_name, item.rarity.rank),
        )
        for item in items:
            table.add_row(
                item.type.display_name,
                rarity_text(item.rarity),
                item_text(item),
                item.id,
                "yes" if item.id in equipped_ids else "",
                key=item.id,
            )

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "back-button":
            self.action_back()

    def action_back(self) -> None:
        self.app.pop_screen()

"""TUI for the attachment loadout browser using Textual."""
from typing import Optional

from textual.app import App
from textual.binding import Binding

from .catalog import default_catalog, load_catalog
from .config import LoadoutConfig
from .core import SelectionController
from .screens import CatalogScreen, LoadoutScreen


class LoadoutApp(App):
    """Main TUI application."""

    TITLE = "Attachment Loadout"
    CSS = """
    Screen {
        background: $surface;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
        Binding("l", "show_catalog", "Catalog", show=True),
    ]

    def __init__(self, controller: SelectionController):
        super().__init__()
        self.controller = controller

    def on_mount(self) -> None:
        self.push_screen(LoadoutScreen(self.controller))

    def action_show_catalog(self) -> None:
        if not isinstance(self.screen, CatalogScreen):
            self.push_screen(CatalogScreen(self.controller))


def build_controller(config: Optional[LoadoutConfig] = None) -> SelectionController:
    """Controller over the configured catalog file, or the demo catalog."""
    config = config or LoadoutConfig()
    if config.catalog_path is not None:
        catalog = load_catalog(config.catalog_path)
    else:
        catalog = default_catalog()
    return SelectionController(catalog, config=config)


def main(config: Optional[LoadoutConfig] = None):
    """Entry point for the TUI."""
    app = LoadoutApp(build_controller(config))
    app.run()


if __name__ == "__main__":
    main()

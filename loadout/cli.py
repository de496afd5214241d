"""Command-line interface for the attachment loadout browser."""
import argparse
import dataclasses
import json
import logging
import sys
from collections.abc import Hashable
from pathlib import Path
from typing import Optional, TextIO

from .catalog import Catalog, parse_attachment_type
from .config import LoadoutConfig, parse_log_level
from .core import SelectionController, SelectionView
from .errors import LoadoutError
from .logging_config import configure_logging
from .models import RARITY_ORDER, AttachmentItem, AttachmentType, SlotLayout
from .tui import build_controller
from .tui import main as tui_main
from .utils import format_item, visible_handles


class PrintView(SelectionView):
    """Echoes controller notifications (used by --trace).

    Lines go to ``stream``, or stdout when it is None.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def render_layout(self, layout: SlotLayout) -> None:
        print(f"  layout: {layout.category.display_name}, {len(layout.rows)} row(s)", file=self.stream)

    def preview_changed(self, item: Optional[AttachmentItem]) -> None:
        print(f"  preview: {format_item(item)}", file=self.stream)

    def apply_visibility(self, visibility: dict[Hashable, bool]) -> None:
        print(f"  visible: {', '.join(visible_handles(visibility)) or '(none)'}", file=self.stream)

    def open_panel(self) -> None:
        print("  panel opened", file=self.stream)

    def close_panel(self) -> None:
        print("  panel closed", file=self.stream)


def print_catalog(catalog: Catalog) -> None:
    """Print the catalog grouped by attachment type and rarity."""
    print("\n" + "=" * 60)
    print(f"  Attachment Catalog ({len(catalog)} items)")
    print("=" * 60)
    for attachment_type in AttachmentType:
        items = catalog.items_of(attachment_type)
        print(f"\n{attachment_type.display_name}")
        print("-" * 60)
        if not items:
            print("  (no items)")
            continue
        for rarity in RARITY_ORDER:
            for item in items:
                if item.rarity is rarity:
                    print(f"  {rarity.display_name:<10} {item.label:<24} {item.id}")
    print()


def print_layout(layout: SlotLayout, preview: Optional[AttachmentItem]) -> None:
    """Print the slot rows of a category layout."""
    print(f"\n{layout.category.display_name}")
    print("-" * 60)
    if layout.is_empty:
        print("  (no items)")
    for row in layout.rows:
        cells = [slot.item.label if slot.item else "-" for slot in row.slots]
        print(f"  {row.rarity.display_name:<10} | " + " | ".join(cells))
        if row.omitted:
            print(f"  {'':<10}   ({row.omitted} more not shown)")
    print(f"\nPreview: {format_item(preview)}")


def run_actions(
    controller: SelectionController,
    actions: list[str],
    echo: bool = True,
    stream: Optional[TextIO] = None,
) -> None:
    """Replay open/choose/commit/close actions against a controller.

    Raises:
        LoadoutError: If an action cannot be parsed
    """
    for action in actions:
        name, _, argument = action.partition(":")
        name = name.strip().lower()
        if echo:
            print(f"> {action}", file=stream)
        if name == "open":
            controller.open_category(parse_attachment_type(argument))
        elif name == "choose":
            item_id = argument.strip()
            if not controller.choose_item(item_id) and echo:
                if item_id not in controller.catalog:
                    reason = "is not in the catalog"
                elif controller.current_category is None:
                    reason = "cannot be chosen with no category open"
                else:
                    reason = "is not in the open category"
                print(f"  ignored: {item_id!r} {reason}", file=stream)
        elif name == "commit":
            controller.commit_selection()
        elif name == "close":
            controller.close_selection()
        else:
            raise LoadoutError(f"Unknown action: {action!r}")


def print_state(controller: SelectionController, as_json: bool = False) -> None:
    equipped = {
        category.display_name: item.id
        for category, item in controller.equipped.items()
    }
    visibility = controller.visibility_model()
    if as_json:
        print(json.dumps({"equipped": equipped, "visibility": visibility}, indent=2))
        return
    print("\nEquipped:")
    for attachment_type in AttachmentType:
        item = controller.equipped_item(attachment_type)
        print(f"  {attachment_type.display_name:<10} {format_item(item)}")
    shown = [item_id for item_id, visible in visibility.items() if visible]
    print(f"\nVisible: {', '.join(shown) or '(none)'}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Weapon attachment loadout browser",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s                               # Launch the TUI with the demo catalog
  %(prog)s --catalog items.json catalog  # List a catalog file
  %(prog)s --slots 2 layout sight        # Show the sight rows with 2 slots each
  %(prog)s run open:sight choose:acog_4x commit close

Actions for "run":
  open:TYPE     Open a category (sight, magazine, tactical, stock, barrel)
  choose:ID     Preview an item of the open category
  commit        Equip the previewed item
  close         Close the selection and apply visibility
        """,
    )
    parser.add_argument(
        "--catalog",
        type=Path,
        help="Catalog JSON file (default: built-in demo catalog)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("loadout.json"),
        help="Settings JSON file (default: loadout.json)",
    )
    parser.add_argument(
        "--slots",
        type=int,
        help="Slot positions per rarity row",
    )
    parser.add_argument(
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ...)",
    )

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser("catalog", help="List the catalog")
    layout_parser = subparsers.add_parser("layout", help="Show the slot layout of a category")
    layout_parser.add_argument("type", help="Attachment type")
    run_parser = subparsers.add_parser("run", help="Replay selection actions")
    run_parser.add_argument("actions", nargs="+", help="Actions to replay")
    run_parser.add_argument("--trace", action="store_true", help="Print every notification")
    run_parser.add_argument("--json", action="store_true", help="Output final state as JSON")
    subparsers.add_parser("tui", help="Launch the interactive browser (default)")
    return parser


def load_config(args: argparse.Namespace) -> LoadoutConfig:
    config = LoadoutConfig.from_file(args.config)
    if args.catalog is not None:
        config.catalog_path = args.catalog
    if args.slots is not None:
        config = dataclasses.replace(config, slots_per_row=args.slots, row_slots={})
    if args.log_level:
        config.log_level = parse_log_level(args.log_level, config.log_level)
    return config


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entry point.

    Returns:
        Process exit status
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    command = args.command or "tui"

    try:
        config = load_config(args)
        # Textual owns the terminal in TUI mode, keep log output quiet there
        configure_logging(max(config.log_level, logging.WARNING) if command == "tui" else config.log_level)

        if command == "tui":
            tui_main(config)
            return 0

        controller = build_controller(config)
        if command == "catalog":
            print_catalog(controller.catalog)
        elif command == "layout":
            layout = controller.open_category(parse_attachment_type(args.type))
            print_layout(layout, controller.preview_item)
        elif command == "run":
            # Keep stdout a clean JSON document when --json is set
            trace_stream = sys.stderr if args.json else None
            if args.trace:
                controller.attach(PrintView(trace_stream))
            controller.sync_visibility()
            run_actions(
                controller,
                args.actions,
                echo=not args.json or args.trace,
                stream=trace_stream,
            )
            print_state(controller, as_json=args.json)
    except LoadoutError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

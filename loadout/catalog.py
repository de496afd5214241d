"""Attachment catalog loading and lookup.

A catalog file is JSON of the form:

    {"items": [
        {"id": "holo_sight", "type": "Sight", "rarity": "Common",
         "icon": "icons/holo.png", "representation": "mesh/holo",
         "name": "Holo Sight"},
        ...
    ]}

Order matters: items keep their file order inside each rarity row.
"""
import json
import logging
from pathlib import Path
from typing import Iterable, Iterator, Optional

from .config import parse_rarity
from .errors import CatalogError, ConfigError
from .models import AttachmentItem, AttachmentType

logger = logging.getLogger(__name__)


class Catalog:
    """Ordered, read-only collection of attachment items."""

    def __init__(self, items: Iterable[AttachmentItem] = ()):
        self._items: tuple[AttachmentItem, ...] = tuple(items)
        self._by_id: dict[str, AttachmentItem] = {}
        for item in self._items:
            if item.id in self._by_id:
                raise CatalogError(f"Duplicate item id: {item.id!r}")
            self._by_id[item.id] = item

    def get(self, item_id: str) -> Optional[AttachmentItem]:
        return self._by_id.get(item_id)

    def items_of(self, attachment_type: AttachmentType) -> list[AttachmentItem]:
        """Items of one category in catalog order."""
        return [item for item in self._items if item.type is attachment_type]

    def __contains__(self, item: object) -> bool:
        if isinstance(item, AttachmentItem):
            return self._by_id.get(item.id) == item
        return item in self._by_id

    def __iter__(self) -> Iterator[AttachmentItem]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"Catalog({len(self._items)} items)"


def parse_attachment_type(value: str) -> AttachmentType:
    """Match an attachment type by name or value, case-insensitively."""
    key = str(value).strip().lower()
    for attachment_type in AttachmentType:
        if key in (attachment_type.value, attachment_type.name.lower()):
            return attachment_type
    raise CatalogError(f"Unknown attachment type: {value!r}")


def item_from_record(record: dict) -> AttachmentItem:
    """Build an item from one parsed catalog entry."""
    if not isinstance(record, dict):
        raise CatalogError(f"Catalog entry must be an object, got {type(record).__name__}")
    item_id = record.get("id")
    if not item_id:
        raise CatalogError("Catalog entry is missing an id")
    try:
        rarity = parse_rarity(record.get("rarity", "default"))
    except ConfigError as exc:
        raise CatalogError(str(exc)) from exc
    # Representations key the visibility map, so only scalar handles are allowed
    representation = record.get("representation")
    if representation is not None and not isinstance(representation, (str, int)):
        raise CatalogError(
            f"Item {item_id!r} representation must be a string, got {type(representation).__name__}"
        )
    return AttachmentItem(
        id=str(item_id),
        type=parse_attachment_type(record.get("type", "")),
        rarity=rarity,
        icon=str(record.get("icon") or ""),
        representation=representation,
        name=str(record.get("name") or ""),
    )


def catalog_from_records(records: Iterable[dict]) -> Catalog:
    items = []
    for index, record in enumerate(records):
        try:
            items.append(item_from_record(record))
        except CatalogError as exc:
            raise CatalogError(f"Entry {index}: {exc}") from exc
    return Catalog(items)


def load_catalog(path: Path) -> Catalog:
    """Load a catalog from a JSON file.

    Args:
        path: Path to the catalog file

    Returns:
        The loaded catalog

    Raises:
        CatalogError: If the file is missing, malformed, or holds bad entries
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise CatalogError(f"Catalog file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise CatalogError(f"Malformed catalog {path}: {exc}") from exc

    records = data.get("items") if isinstance(data, dict) else data
    if not isinstance(records, list):
        raise CatalogError(f"Catalog {path} must hold a list of items")
    catalog = catalog_from_records(records)
    logger.debug("Loaded %d items from %s", len(catalog), path)
    return catalog


# Demo catalog used when no catalog file is configured
DEFAULT_CATALOG_RECORDS: list[dict] = [
    {"id": "iron_sights", "type": "sight", "rarity": "default", "name": "Iron Sights", "representation": "sight/iron"},
    {"id": "red_dot", "type": "sight", "rarity": "common", "name": "Red Dot", "representation": "sight/red_dot"},
    {"id": "holo_sight", "type": "sight", "rarity": "common", "name": "Holo Sight", "representation": "sight/holo"},
    {"id": "acog_4x", "type": "sight", "rarity": "rare", "name": "4x ACOG", "representation": "sight/acog"},
    {"id": "thermal_scope", "type": "sight", "rarity": "legendary", "name": "Thermal Scope", "representation": "sight/thermal"},
    {"id": "std_mag", "type": "magazine", "rarity": "default", "name": "Standard Mag", "representation": "mag/standard"},
    {"id": "ext_mag", "type": "magazine", "rarity": "rare", "name": "Extended Mag", "representation": "mag/extended"},
    {"id": "drum_mag", "type": "magazine", "rarity": "epic", "name": "Drum Mag", "representation": "mag/drum"},
    {"id": "flashlight", "type": "tactical", "rarity": "common", "name": "Flashlight", "representation": "tac/flashlight"},
    {"id": "laser_sight", "type": "tactical", "rarity": "rare", "name": "Laser Sight", "representation": "tac/laser"},
    {"id": "fixed_stock", "type": "stock", "rarity": "default", "name": "Fixed Stock", "representation": "stock/fixed"},
    {"id": "tactical_stock", "type": "stock", "rarity": "epic", "name": "Tactical Stock", "representation": "stock/tactical"},
    {"id": "compensator", "type": "barrel", "rarity": "common", "name": "Compensator", "representation": "barrel/compensator"},
    {"id": "suppressor", "type": "barrel", "rarity": "rare", "name": "Suppressor", "representation": "barrel/suppressor"},
    {"id": "long_barrel", "type": "barrel", "rarity": "legendary", "name": "Long Barrel", "representation": "barrel/long"},
]


def default_catalog() -> Catalog:
    return catalog_from_records(DEFAULT_CATALOG_RECORDS)

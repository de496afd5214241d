"""Loadout browser configuration and display tables.

Settings are read from an optional JSON file, for example:

    {
        "slotsPerRow": 6,
        "rowSlots": {"legendary": 3},
        "catalog": "catalog.json",
        "logLevel": "INFO"
    }

Unknown keys are ignored. A missing or malformed file falls back to defaults.
"""
import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .errors import ConfigError
from .models import AttachmentType, Rarity

# Slot positions per rarity row in the selection panel
DEFAULT_SLOTS_PER_ROW: int = 6

# Environment override for the log level (e.g. LOADOUT_LOG_LEVEL=DEBUG)
LOG_LEVEL_ENV: str = "LOADOUT_LOG_LEVEL"

# Rich colour used for each rarity tier
RARITY_COLORS: dict[Rarity, str] = {
    Rarity.DEFAULT: "grey70",
    Rarity.COMMON: "green",
    Rarity.RARE: "dodger_blue1",
    Rarity.EPIC: "medium_purple1",
    Rarity.LEGENDARY: "orange1",
}

# Keyboard shortcut opening each attachment category
ATTACHMENT_HOTKEYS: dict[AttachmentType, str] = {
    AttachmentType.SIGHT: "1",
    AttachmentType.MAGAZINE: "2",
    AttachmentType.TACTICAL: "3",
    AttachmentType.STOCK: "4",
    AttachmentType.BARREL: "5",
}


def parse_log_level(value: object, default: int = logging.INFO) -> int:
    """Turn a level name ("debug") or number into a logging level."""
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value:
        level = logging.getLevelName(value.upper())
        if isinstance(level, int):
            return level
    return default


def parse_rarity(value: str) -> Rarity:
    """Match a rarity by name or value, case-insensitively."""
    key = str(value).strip().lower()
    for rarity in Rarity:
        if key in (rarity.value, rarity.name.lower()):
            return rarity
    raise ConfigError(f"Unknown rarity: {value!r}")


def parse_slot_count(value: object) -> int:
    """Turn a settings value into a slot count."""
    if isinstance(value, bool):
        raise ConfigError(f"Invalid slot count: {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid slot count: {value!r}") from exc


@dataclass
class LoadoutConfig:
    """Runtime configuration for the browser."""
    slots_per_row: int = DEFAULT_SLOTS_PER_ROW
    row_slots: dict[Rarity, int] = field(default_factory=dict)
    catalog_path: Optional[Path] = None
    log_level: int = logging.INFO

    def __post_init__(self) -> None:
        if self.slots_per_row < 1:
            raise ConfigError(f"slots_per_row must be positive, got {self.slots_per_row}")
        for rarity, count in self.row_slots.items():
            if count < 1:
                raise ConfigError(f"Slot count for {rarity.display_name} must be positive, got {count}")

    def slots_for(self, rarity: Rarity) -> int:
        """Number of slot positions in the row of a rarity tier."""
        return self.row_slots.get(rarity, self.slots_per_row)

    @classmethod
    def from_dict(cls, data: dict, base_dir: Optional[Path] = None) -> "LoadoutConfig":
        raw_row_slots = data.get("rowSlots") or {}
        if not isinstance(raw_row_slots, dict):
            raise ConfigError(f"rowSlots must be an object, got {type(raw_row_slots).__name__}")
        row_slots = {
            parse_rarity(name): parse_slot_count(count)
            for name, count in raw_row_slots.items()
        }
        catalog = data.get("catalog")
        catalog_path = None
        if catalog:
            catalog_path = Path(catalog)
            if base_dir is not None and not catalog_path.is_absolute():
                catalog_path = base_dir / catalog_path
        return cls(
            slots_per_row=parse_slot_count(data.get("slotsPerRow", DEFAULT_SLOTS_PER_ROW)),
            row_slots=row_slots,
            catalog_path=catalog_path,
            log_level=parse_log_level(data.get("logLevel"), logging.INFO),
        )

    @classmethod
    def from_file(cls, settings_path: Path) -> "LoadoutConfig":
        if not settings_path.exists():
            config = cls()
        else:
            try:
                data = json.loads(settings_path.read_text(encoding="utf-8"))
            except json.JSONDecodeError:
                data = {}
            if not isinstance(data, dict):
                data = {}
            config = cls.from_dict(data, base_dir=settings_path.parent)
        config.log_level = parse_log_level(os.getenv(LOG_LEVEL_ENV), config.log_level)
        return config

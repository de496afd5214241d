"""Exceptions raised by the loadout browser."""


class LoadoutError(Exception):
    """Base class for loadout errors."""


class CatalogError(LoadoutError, ValueError):
    """Catalog data could not be loaded or is inconsistent."""


class ConfigError(LoadoutError, ValueError):
    """A configuration value is invalid."""

"""Weapon attachment loadout browser."""

__version__ = "0.1.0"

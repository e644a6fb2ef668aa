"""Catalog explorer: fan-out fetch plus live, debounced multi-criteria filtering."""

__version__ = "0.1.0"

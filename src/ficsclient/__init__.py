"""FICS client core: server protocol parsing and variant-aware move resolution."""

__version__ = "0.1.0"

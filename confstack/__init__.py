"""Configuration keys, in-memory and file sources, format parsers, typed value conversion and refreshable values."""

__version__ = "0.5.3"
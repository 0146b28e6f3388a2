"""Geospatial query demonstration against MongoDB."""

__version__ = "0.1.0"

"""Ryanair fare scraping and extraction."""

__version__ = "1.0.0"

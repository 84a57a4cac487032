"""Utility modules for farewatch."""

from farewatch.utils.url_builder import build_ryanair_url

__all__ = ["build_ryanair_url"]

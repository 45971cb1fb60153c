"""Command line interface for branch-db-switcher."""

from .dispatcher import main

__all__ = ["main"]

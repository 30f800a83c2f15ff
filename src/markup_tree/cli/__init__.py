"""Command-line interface for markup-tree."""

from .main import main

__all__ = ["main"]

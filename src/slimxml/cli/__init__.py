"""Command-line interface module for slimxml."""

from .main import main

__all__ = ["main"]

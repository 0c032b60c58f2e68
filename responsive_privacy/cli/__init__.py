"""Command-line interface for responsive privacy."""

from .main import cli, main

__all__ = ["cli", "main"]

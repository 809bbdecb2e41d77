"""Command-line interface for ortelius-cli."""

from .app import app, main

__all__ = ["app", "main"]

"""Command line interface for the structure.sql merge driver."""

from .app import app, main

__all__ = ["app", "main"]

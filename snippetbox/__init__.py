"""Snippet storage and placeholder expansion service."""

__version__ = "0.1.0"

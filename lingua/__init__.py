"""Dialect-aware lesson content resolution and answer evaluation."""

__version__ = "0.1.0"

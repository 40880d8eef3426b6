"""Rookery — a chess rules engine for interactive boards."""

__version__ = "0.1.0"

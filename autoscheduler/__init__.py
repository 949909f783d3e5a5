"""Automatic task-to-calendar scheduling engine."""

__version__ = "0.1.0"

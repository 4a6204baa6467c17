"""Nameless TODO: terminal task list with deadlines and live countdowns."""

__version__ = "0.1.0"

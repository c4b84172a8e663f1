"""Personalized puzzle feed ranking."""

__version__ = "0.1.0"

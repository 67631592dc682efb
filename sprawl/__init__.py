"""Sprawl: adversarial search for a territory-growth board game."""

__version__ = "0.1.0"

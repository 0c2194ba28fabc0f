"""Notator: lays out symbolic scores as engraved staff notation."""

__version__ = "0.1.0"

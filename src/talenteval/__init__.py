"""Talent evaluation record keeper."""

__version__ = "0.1.0"

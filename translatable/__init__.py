"""Vertical translations: one column per translated field and locale."""

__version__ = "1.0.0"

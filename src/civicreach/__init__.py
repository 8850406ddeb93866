"""Civic-engagement candidate ranking with proximity-based score enhancement."""

__version__ = "0.1.0"

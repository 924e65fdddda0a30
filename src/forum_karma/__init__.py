"""Vote and karma consistency engine for the forum API."""

__version__ = "0.1.0"

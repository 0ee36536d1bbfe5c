"""CupNote Match Score engine."""

__version__ = "0.1.0"

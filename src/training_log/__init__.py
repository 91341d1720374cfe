"""Personal workout log with double-progression recommendations."""

__version__ = "0.1.0"

"""Real-time and cumulative salary earnings engine."""

__version__ = "0.1.0"

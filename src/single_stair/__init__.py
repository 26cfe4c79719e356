"""Single-stair vs. current-code apartment layout comparison."""

__version__ = "0.1.0"

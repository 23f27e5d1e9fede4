"""Version information for rigid."""

__version__ = "1.0.0"

"""Version information for region-cache."""

__version__ = "1.0.0"

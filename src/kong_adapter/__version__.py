"""Version information for kong_adapter."""

__version__ = "1.2.0"

"""Kong Admin API client and reconciliation support layer."""

from kong_adapter.__version__ import __version__

__all__ = ["__version__"]

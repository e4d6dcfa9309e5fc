"""Weekly shift planning for a single retail location."""

__version__ = "0.1.0"

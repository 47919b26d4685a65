"""Read-only lesson listing service."""

__version__ = "0.1.0"

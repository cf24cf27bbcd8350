"""Waybar output formatting, RON configuration and Linux hardware discovery."""

__version__ = "0.1.0"
__all__ = ["__version__"]
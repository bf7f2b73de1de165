"""Interactive Linux host maintenance console."""

__version__ = "0.1.0"

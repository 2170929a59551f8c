"""taskline: a line-oriented task manager."""

__version__ = "0.1.0"

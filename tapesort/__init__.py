"""Emulated storage tape with a bounded memory window and external merge sort."""

__version__ = "0.1.0"
__all__ = ["cli", "sorter", "tape"]
"""Shortest routes through n-dimensional points under a turning-angle constraint."""

__version__ = "0.1.0"

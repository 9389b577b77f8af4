"""Point file readers."""

from .parser import load_points, parse_points

__all__ = ["load_points", "parse_points"]

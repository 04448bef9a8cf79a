"""Rendering of boards to printable files."""

from .pdf import draw_grid

__all__ = ["draw_grid"]

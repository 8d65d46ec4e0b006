"""
Isometric rendering of generated terrain.
"""

from .isometric import (
    HeightBand,
    ViewParameters,
    cell_colors,
    compute_view_parameters,
    height_color,
    isometric_projection,
)
from .plot import render_png, render_snapshot

__all__ = ['HeightBand', 'ViewParameters', 'cell_colors', 'compute_view_parameters',
           'height_color', 'isometric_projection', 'render_png', 'render_snapshot']

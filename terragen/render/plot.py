"""
Matplotlib rendering of a generated terrain.

The terrain is drawn as a wireframe of grid lines in isometric view,
each line coloured by the height band of its cell, with reference axes
and a status header. Figures are built without pyplot so rendering works
headless (API, tests) as well as inside the interactive viewer.
"""

import io
from typing import Optional

import numpy as np
import structlog
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.collections import LineCollection
from matplotlib.figure import Figure

from ..core.diamond_square import TerrainSnapshot
from ..core.height_range import HeightRange
from .isometric import (
    ISO_ANGLE,
    ROTATION_ANGLE,
    ViewParameters,
    cell_colors,
    compute_view_parameters,
    isometric_projection,
    project_grid,
)

logger = structlog.get_logger()

CONTROLS_TEXT = "SPACE: Regenerate terrain | ESC: Exit"


def terrain_segments(heights: np.ndarray, height_range: HeightRange, view: ViewParameters,
                     iso_angle: float = ISO_ANGLE, rotation_angle: float = ROTATION_ANGLE):
    """
    Screen space line segments of the terrain wireframe.

    Every cell contributes its two leading edges; cells on the far borders
    also contribute the closing edge.

    Returns:
        Tuple (segments, colors) with shapes (M, 2, 2) and (M, 3)
    """
    sx, sy = view.apply(*project_grid(heights, iso_angle, rotation_angle))
    colors = cell_colors(heights, height_range)

    def edges(start, end, edge_colors):
        starts = np.stack([sx[start].ravel(), sy[start].ravel()], axis=-1)
        ends = np.stack([sx[end].ravel(), sy[end].ravel()], axis=-1)
        return np.stack([starts, ends], axis=1), edge_colors.reshape(-1, 3)

    inner = np.s_[:-1, :-1]
    parts = [
        edges(inner, np.s_[1:, :-1], colors),          # (x, y) -> (x+1, y)
        edges(inner, np.s_[:-1, 1:], colors),          # (x, y) -> (x, y+1)
        edges(np.s_[-1, :-1], np.s_[-1, 1:], colors[-1, :]),   # closing edges on x = N-1
        edges(np.s_[:-1, -1], np.s_[1:, -1], colors[:, -1]),   # closing edges on y = N-1
    ]
    segments = np.concatenate([p[0] for p in parts])
    segment_colors = np.concatenate([p[1] for p in parts])
    return segments, segment_colors


def draw_terrain(ax, heights: np.ndarray, height_range: HeightRange, view: ViewParameters,
                 iso_angle: float = ISO_ANGLE, rotation_angle: float = ROTATION_ANGLE,
                 linewidth: float = 0.5) -> LineCollection:
    """Add the terrain wireframe to ``ax``."""
    segments, colors = terrain_segments(heights, height_range, view, iso_angle, rotation_angle)
    lines = LineCollection(segments, colors=colors, linewidths=linewidth)
    ax.add_collection(lines)
    return lines


def draw_reference_axes(ax, size: int, max_height: float, view: ViewParameters,
                        iso_angle: float = ISO_ANGLE, rotation_angle: float = ROTATION_ANGLE) -> None:
    """Draw the X (red), Y (green) and Z (blue) axes from the grid origin."""
    def to_screen(x, y, z):
        return view.apply(*isometric_projection(x, y, z, iso_angle, rotation_angle))

    origin = to_screen(0, 0, 0)
    axes = [
        ("X", to_screen(size * 0.25, 0, 0), "red"),
        ("Y", to_screen(0, size * 0.25, 0), "green"),
        ("Z", to_screen(0, 0, max_height * 0.5), "blue"),
    ]
    for label, end, color in axes:
        ax.plot([origin[0], end[0]], [origin[1], end[1]], color=color, linewidth=1.0)
        ax.text(end[0] + 10, end[1], label, color=color, fontsize=10, va="center")


def draw_status(ax, snapshot: TerrainSnapshot, view: ViewParameters, screen_height: int) -> None:
    """Write the controls, height range and resolution lines at the top."""
    lo, hi = snapshot.height_range
    lines = [
        (CONTROLS_TEXT, 14, "white"),
        (f"Height min: {lo:.1f}  max: {hi:.1f}", 11, "lightgray"),
        (f"Resolution: {snapshot.size}x{snapshot.size} - Scale: {view.scale:.2f}", 11, "lightgray"),
    ]
    for i, (text, fontsize, color) in enumerate(lines):
        y = screen_height - (10 if i == 0 else 20 + i * 20)
        ax.text(10, y, text, color=color, fontsize=fontsize, va="top", ha="left")


def render_snapshot(snapshot: TerrainSnapshot, settings=None, fig: Optional[Figure] = None) -> Figure:
    """
    Render a terrain snapshot into a matplotlib figure.

    Args:
        snapshot: Result of a generation pass
        settings: View settings (screen size, margins, angles); module settings if omitted
        fig: Existing figure to redraw into (cleared first)

    Returns:
        The figure
    """
    if settings is None:
        from ..config import settings

    width, height = settings.screen_width, settings.screen_height
    if fig is None:
        fig = Figure(figsize=(width / 100, height / 100), dpi=100)
    fig.clear()
    fig.set_facecolor("black")

    ax = fig.add_axes([0, 0, 1, 1])
    ax.set_facecolor("black")
    ax.set_xlim(0, width)
    ax.set_ylim(0, height)
    ax.set_axis_off()

    view = compute_view_parameters(
        snapshot.heights,
        width,
        height,
        settings.screen_margin,
        settings.ui_height,
        settings.iso_angle,
        settings.rotation_angle,
    )

    draw_terrain(ax, snapshot.heights, snapshot.height_range, view,
                 settings.iso_angle, settings.rotation_angle)
    draw_reference_axes(ax, snapshot.size, snapshot.height_range.max, view,
                        settings.iso_angle, settings.rotation_angle)
    draw_status(ax, snapshot, view, height)

    logger.debug("Terrain rendered", size=snapshot.size, scale=view.scale)
    return fig


def render_png(snapshot: TerrainSnapshot, settings=None) -> bytes:
    """Render a snapshot to PNG bytes."""
    fig = render_snapshot(snapshot, settings)
    FigureCanvasAgg(fig)
    buffer = io.BytesIO()
    fig.savefig(buffer, format="png", facecolor=fig.get_facecolor())
    return buffer.getvalue()

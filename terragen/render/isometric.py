"""
Isometric projection, view fitting and height colouring.

These helpers turn a finished heightfield into plot coordinates. Plot
coordinates are y-up: a higher elevation is drawn higher on screen.
"""

import math
from enum import Enum
from typing import NamedTuple, Tuple

import numpy as np

from ..core.height_range import HeightRange

ISO_ANGLE = 30.0
ROTATION_ANGLE = 45.0


def isometric_projection(x, y, z, iso_angle: float = ISO_ANGLE, rotation_angle: float = ROTATION_ANGLE):
    """
    Project grid coordinates and elevation onto the 2D view plane.

    The grid is rotated by ``rotation_angle`` about the vertical axis and
    then tilted by ``iso_angle``; elevation is added on the vertical axis.

    Args:
        x, y: Grid coordinates (scalars or arrays)
        z: Elevation (scalar or array broadcastable with x, y)
        iso_angle: Tilt in degrees
        rotation_angle: Rotation in degrees

    Returns:
        Tuple (px, py) of projected coordinates
    """
    rot = math.radians(rotation_angle)
    tilt = math.sin(math.radians(iso_angle))

    x_rot = np.multiply(x, math.cos(rot)) - np.multiply(y, math.sin(rot))
    y_rot = np.multiply(x, math.sin(rot)) + np.multiply(y, math.cos(rot))

    return x_rot, y_rot * tilt + z


def project_grid(heights: np.ndarray, iso_angle: float = ISO_ANGLE, rotation_angle: float = ROTATION_ANGLE):
    """Project every cell of a heightfield; returns (px, py) arrays shaped like ``heights``."""
    xs, ys = np.indices(heights.shape)
    return isometric_projection(xs, ys, heights, iso_angle, rotation_angle)


class ViewParameters(NamedTuple):
    """Scale and offset mapping projected coordinates to screen pixels."""
    scale: float
    offset_x: float
    offset_y: float

    def apply(self, px, py):
        return px * self.scale + self.offset_x, py * self.scale + self.offset_y


def compute_view_parameters(
    heights: np.ndarray,
    screen_width: int = 800,
    screen_height: int = 700,
    margin: int = 50,
    ui_height: int = 90,
    iso_angle: float = ISO_ANGLE,
    rotation_angle: float = ROTATION_ANGLE,
) -> ViewParameters:
    """
    Fit the projected terrain into the screen, keeping its proportions.

    The terrain is centred in the area below the UI band, inside the margins.

    Args:
        heights: Generated heightfield
        screen_width, screen_height: Screen size in pixels
        margin: Empty border kept around the terrain
        ui_height: Band at the top reserved for status text

    Returns:
        ViewParameters(scale, offset_x, offset_y)
    """
    px, py = project_grid(heights, iso_angle, rotation_angle)
    min_x, max_x = float(px.min()), float(px.max())
    min_y, max_y = float(py.min()), float(py.max())

    terrain_width = max_x - min_x
    terrain_height = max_y - min_y

    available_x = screen_width - 2 * margin
    available_y = (screen_height - ui_height) - 2 * margin

    scales = []
    if terrain_width > 0:
        scales.append(available_x / terrain_width)
    if terrain_height > 0:
        scales.append(available_y / terrain_height)
    scale = min(scales) if scales else 1.0

    scaled_width = terrain_width * scale
    scaled_height = terrain_height * scale

    offset_x = (screen_width - scaled_width) / 2.0 - min_x * scale
    offset_y = (screen_height - ui_height - scaled_height) / 2.0 - min_y * scale

    return ViewParameters(scale, offset_x, offset_y)


class HeightBand(Enum):
    """Terrain colour bands, lowest first, with their RGB colour."""
    WATER = (30, 90, 180)
    SAND = (210, 180, 140)
    GRASS = (50, 150, 50)
    ROCK = (120, 100, 80)
    SNOW = (240, 240, 255)

    @property
    def rgb(self) -> Tuple[float, float, float]:
        """Colour as matplotlib 0-1 floats."""
        return tuple(c / 255.0 for c in self.value)


BANDS = list(HeightBand)

# Upper bound (inclusive) of normalized height for each band but the last
BAND_THRESHOLDS = np.array([0.15, 0.35, 0.65, 0.80])

BAND_COLORS = np.array([band.rgb for band in BANDS])


def band_indices(normalized) -> np.ndarray:
    """Index into ``BANDS`` for each normalized height in [0, 1]."""
    return np.digitize(normalized, BAND_THRESHOLDS, right=True)


def height_color(height: float, height_range: HeightRange) -> HeightBand:
    """Colour band of a single elevation."""
    return BANDS[int(band_indices(height_range.normalize(height)))]


def cell_colors(heights: np.ndarray, height_range: HeightRange) -> np.ndarray:
    """
    RGB colour of every grid cell.

    A cell is the quad between four neighbouring vertices; it is coloured by
    the mean of those four elevations.

    Returns:
        Array of shape (N-1, N-1, 3) with 0-1 RGB floats
    """
    average = (heights[:-1, :-1] + heights[1:, :-1] + heights[:-1, 1:] + heights[1:, 1:]) / 4.0
    return BAND_COLORS[band_indices(height_range.normalize(average))]

"""Tests for the terrain viewer script."""

from types import SimpleNamespace

import matplotlib
matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pytest
from terragen.config import Settings
from terragen.core.diamond_square import DiamondSquareConfig, DiamondSquareGenerator
from terragen.core.heightfield import ConfigurationError
from terragen.render.plot import render_snapshot
from visualize_terrain import connect_controls, visualize_terrain


@pytest.fixture
def view_settings():
    """Small screen so rendering stays quick."""
    return Settings(screen_width=200, screen_height=200, ui_height=20, screen_margin=10)


class TestOutputMode:
    """Test writing a single frame without a window."""

    def test_writes_png(self, tmp_path, view_settings):
        """--output saves one PNG frame."""
        output = tmp_path / "terrain.png"
        visualize_terrain(view_settings, DiamondSquareConfig(size=17), seed="viewer", output=output)

        assert output.exists()
        assert output.read_bytes().startswith(b"\x89PNG")

    def test_bad_config(self, tmp_path, view_settings):
        """Malformed sizes fail before anything is written."""
        output = tmp_path / "terrain.png"
        with pytest.raises(ConfigurationError):
            visualize_terrain(view_settings, DiamondSquareConfig(size=16), output=output)
        assert not output.exists()


class TestControls:
    """Test the keyboard bindings of the interactive window."""

    @pytest.fixture
    def window(self, view_settings):
        """Pyplot figure showing a seeded terrain."""
        generator = DiamondSquareGenerator(DiamondSquareConfig(size=9), seed="keys")
        fig = plt.figure()
        render_snapshot(generator.regenerate(), view_settings, fig)
        on_key = connect_controls(fig, generator, view_settings)
        yield fig, generator, on_key
        plt.close(fig)

    def test_space_regenerates(self, window):
        """SPACE draws a new terrain into the same figure."""
        fig, generator, on_key = window
        before = generator.snapshot.heights

        on_key(SimpleNamespace(key=" "))

        assert not np.array_equal(generator.snapshot.heights, before)
        assert len(fig.axes) == 1

    @pytest.mark.parametrize("key", ["escape", "q"])
    def test_quit_keys_close_window(self, window, key):
        """ESC and q both close the figure."""
        fig, _, on_key = window
        on_key(SimpleNamespace(key=key))
        assert not plt.fignum_exists(fig.number)

    def test_other_keys_ignored(self, window):
        """Unbound keys leave the terrain alone."""
        fig, generator, on_key = window
        before = generator.snapshot

        on_key(SimpleNamespace(key="x"))

        assert generator.snapshot is before
        assert plt.fignum_exists(fig.number)

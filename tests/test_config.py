"""Tests for configuration module."""

import pytest
from pydantic import ValidationError

from terragen.config import Settings
from terragen.core.diamond_square import DiamondSquareConfig


class TestSettings:
    """Tests for the environment backed settings."""

    def test_default_values(self, monkeypatch):
        """Defaults reproduce the classic 257 grid in an 800x700 window."""
        for name in ("GRID_SIZE", "INITIAL_AMPLITUDE", "ROUGHNESS", "SEED"):
            monkeypatch.delenv(f"TERRAGEN_{name}", raising=False)
        config = Settings()
        assert config.grid_size == 257
        assert config.initial_amplitude == 50.0
        assert config.roughness == 1.20
        assert config.seed is None
        assert config.screen_width == 800
        assert config.screen_height == 700
        assert config.ui_height == 90
        assert config.screen_margin == 50
        assert config.iso_angle == 30.0
        assert config.rotation_angle == 45.0

    def test_environment_override(self, monkeypatch):
        """TERRAGEN_* variables override the defaults."""
        monkeypatch.setenv("TERRAGEN_GRID_SIZE", "65")
        monkeypatch.setenv("TERRAGEN_ROUGHNESS", "0.8")
        monkeypatch.setenv("TERRAGEN_SEED", "valley")
        config = Settings()
        assert config.grid_size == 65
        assert config.roughness == 0.8
        assert config.seed == "valley"

    @pytest.mark.parametrize("size", [0, 2, 64, 256])
    def test_invalid_grid_size(self, size):
        """Grid sizes must be 2^k + 1."""
        with pytest.raises(ValidationError):
            Settings(grid_size=size)

    def test_invalid_grid_size_from_environment(self, monkeypatch):
        """Bad environment values are rejected too."""
        monkeypatch.setenv("TERRAGEN_GRID_SIZE", "100")
        with pytest.raises(ValidationError):
            Settings()

    def test_negative_amplitude(self):
        """Amplitude cannot be negative."""
        with pytest.raises(ValidationError):
            Settings(initial_amplitude=-1.0)

    def test_screen_dimensions_positive(self):
        """Zero sized windows are rejected."""
        with pytest.raises(ValidationError):
            Settings(screen_width=0)

    def test_log_format(self):
        """Only json and console formats exist."""
        assert Settings(log_format="CONSOLE").log_format == "console"
        with pytest.raises(ValidationError):
            Settings(log_format="xml")

    def test_generation_config_from_settings(self):
        """Settings convert into a generation config."""
        config = DiamondSquareConfig.from_settings(
            Settings(grid_size=129, initial_amplitude=25.0, roughness=1.5)
        )
        assert config == DiamondSquareConfig(size=129, initial_amplitude=25.0, roughness=1.5)
        assert config.validate() == []

"""Configuration management."""

import os
from pathlib import Path
from typing import Optional

from dotenv import dotenv_values
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.heightfield import is_valid_size

# Explicitly load .env for local/dev environments only if values are missing from the environment
BASE_DIR = Path(__file__).resolve().parent.parent
env_file = BASE_DIR / ".env"

if env_file.exists():
    file_env = dotenv_values(env_file)
    for k, v in file_env.items():
        if k not in os.environ and v is not None:
            os.environ[k] = v


class Settings(BaseSettings):
    """Application settings pulled from TERRAGEN_* environment variables."""

    # Generation
    grid_size: int = Field(default=257, description="Grid side length, 2^k + 1")
    initial_amplitude: float = Field(default=50.0, ge=0, description="Noise amplitude of the first level")
    roughness: float = Field(default=1.20, description="Amplitude decay exponent per level")
    seed: Optional[str] = Field(default=None, description="Seed for the first terrain (time based if unset)")

    # View
    screen_width: int = Field(default=800, gt=0, description="Window width in pixels")
    screen_height: int = Field(default=700, gt=0, description="Window height in pixels")
    ui_height: int = Field(default=90, ge=0, description="Space reserved for status text at the top")
    screen_margin: int = Field(default=50, ge=0, description="Border margin in pixels")
    iso_angle: float = Field(default=30.0, description="Isometric tilt angle in degrees")
    rotation_angle: float = Field(default=45.0, description="Rotation about the vertical axis in degrees")

    # API
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")
    max_api_grid_size: int = Field(default=513, description="Largest grid the API will generate")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="json", description="Logging format (json or console)")

    model_config = SettingsConfigDict(
        env_prefix="TERRAGEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("grid_size", "max_api_grid_size")
    @classmethod
    def check_grid_size(cls, value: int) -> int:
        if not is_valid_size(value):
            raise ValueError(f"grid size must be 2^k + 1 with k >= 1, got {value}")
        return value

    @field_validator("log_format")
    @classmethod
    def check_log_format(cls, value: str) -> str:
        value = value.lower()
        if value not in ("json", "console"):
            raise ValueError("log_format must be 'json' or 'console'")
        return value


# Instantiate singleton settings object
settings = Settings()

#!/usr/bin/env python3
"""
Interactive isometric terrain viewer.

Opens a window with a Diamond-Square terrain. SPACE regenerates the
terrain, ESC or q closes the window. With --output a single frame is
written to a PNG file instead.
"""

import sys
from pathlib import Path

import structlog

sys.path.append(str(Path(__file__).parent))

from terragen.config import settings
from terragen.core.diamond_square import DiamondSquareConfig, DiamondSquareGenerator
from terragen.core.heightfield import ConfigurationError
from terragen.logging_config import configure_logging
from terragen.render.plot import render_png, render_snapshot

logger = structlog.get_logger()

REGENERATE_KEYS = (" ",)
QUIT_KEYS = ("escape", "q")


def visualize_terrain(view_settings, config, seed=None, output=None):
    """
    Generate a terrain and show it, or save it when ``output`` is given.

    Args:
        view_settings: Settings with screen size, margins and angles
        config: DiamondSquareConfig for the generator
        seed: Optional seed for the first terrain
        output: Optional PNG path; skips the interactive window
    """
    generator = DiamondSquareGenerator(config, seed=seed)
    snapshot = generator.regenerate()

    if output:
        Path(output).write_bytes(render_png(snapshot, view_settings))
        print(f"Terrain saved to: {output}")
        return

    import matplotlib.pyplot as plt

    fig = plt.figure(
        figsize=(view_settings.screen_width / 100, view_settings.screen_height / 100),
        dpi=100,
    )
    fig.canvas.manager.set_window_title("3D World - Virtual Mountains")
    render_snapshot(snapshot, view_settings, fig)

    connect_controls(fig, generator, view_settings)
    plt.show()


def connect_controls(fig, generator, view_settings):
    """Bind SPACE to regenerate and ESC or q to close on a pyplot figure."""
    import matplotlib.pyplot as plt

    def on_key(event):
        if event.key in REGENERATE_KEYS:
            logger.info("Regenerating terrain")
            render_snapshot(generator.regenerate(), view_settings, fig)
            fig.canvas.draw_idle()
        elif event.key in QUIT_KEYS:
            plt.close(fig)

    fig.canvas.mpl_connect("key_press_event", on_key)
    return on_key


def main():
    import argparse

    parser = argparse.ArgumentParser(description="Generate and view Diamond-Square terrain")
    parser.add_argument("--size", type=int, default=settings.grid_size,
                        help="Grid side length, 2^k + 1 (default: %(default)s)")
    parser.add_argument("--amplitude", type=float, default=settings.initial_amplitude,
                        help="Initial noise amplitude (default: %(default)s)")
    parser.add_argument("--roughness", type=float, default=settings.roughness,
                        help="Amplitude decay exponent (default: %(default)s)")
    parser.add_argument("--seed", default=settings.seed,
                        help="Seed for the first terrain (time based if omitted)")
    parser.add_argument("--output", help="Write a PNG here instead of opening a window")

    args = parser.parse_args()

    configure_logging(settings.log_level, "console")

    config = DiamondSquareConfig(size=args.size, initial_amplitude=args.amplitude, roughness=args.roughness)
    try:
        visualize_terrain(settings, config, seed=args.seed, output=args.output)
    except ConfigurationError as e:
        parser.error(str(e))


if __name__ == "__main__":
    main()

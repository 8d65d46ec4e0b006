#!/usr/bin/env python3
"""
Simple demo script showing Diamond-Square generation and roughness.
"""

import numpy as np
from terragen.core import DiamondSquareConfig, DiamondSquareGenerator, amplitude_schedule
from terragen.render import HeightBand
from terragen.render.isometric import BANDS, band_indices


def main():
    """Demonstrate terrain generation."""
    print("Terragen Diamond-Square Demo")
    print("=" * 40)

    size = 129
    print(f"\nAmplitude per level for a {size}x{size} grid:")
    for roughness in (0.8, 1.2, 1.6):
        schedule = amplitude_schedule(size, 50.0, roughness)
        print(f"  roughness {roughness}: " + ", ".join(f"{a:.2f}" for a in schedule))

    # Same seed, different roughness
    for roughness in (0.8, 1.2, 1.6):
        print(f"\nRoughness {roughness}:")
        print("-" * 30)

        config = DiamondSquareConfig(size=size, initial_amplitude=50.0, roughness=roughness)
        generator = DiamondSquareGenerator(config, seed="demo123")
        snapshot = generator.regenerate()
        heights = snapshot.heights

        # Neighbouring cells differ more on rough terrain
        step = np.abs(np.diff(heights, axis=0)).mean()

        print(f"  Height range: {snapshot.height_range.min:.1f} to {snapshot.height_range.max:.1f}")
        print(f"  Average elevation: {np.mean(heights):.1f}")
        print(f"  Mean neighbour step: {step:.2f}")
        print(f"  Generated in {snapshot.generation_time_seconds * 1000:.1f} ms")

        # Show band distribution
        bands = band_indices(snapshot.height_range.normalize(heights))
        counts = np.bincount(bands.ravel(), minlength=len(BANDS))
        print("  Height bands:")
        for band, count in zip(BANDS, counts):
            bar = '#' * int(count / counts.max() * 20)
            print(f"    {band.name:<6}: {bar} ({count})")

    print(f"\nBands available: {', '.join(b.name.lower() for b in HeightBand)}")


if __name__ == "__main__":
    main()

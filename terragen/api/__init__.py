"""HTTP API for on-demand terrain generation."""

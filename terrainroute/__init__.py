"""Terrain-sensitive routing building blocks: tiling, tile downloads and cost feature graphs."""

__version__ = "1.0.0"
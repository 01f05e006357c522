"""Textured grid raycaster that plays maze levels from .cub scene files."""

__version__ = "0.1.0"
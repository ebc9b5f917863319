"""Raycasting first-person viewer for .cub scenes with XPM textures."""

__version__ = "0.1.0"
__all__ = ["colors", "image", "xpm", "scene", "raycast", "renderer", "app"]
"""Grid-maze raycasting with texture mapping, palette light-sourcing and PCX tools."""

__version__ = "1.0.0"
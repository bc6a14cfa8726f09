"""Convert GPX track recordings into 2D vector route paths."""

__version__ = "0.1.0"

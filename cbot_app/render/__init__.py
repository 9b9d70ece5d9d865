"""
Raster rendering of table layouts.
"""
from .raster import TableRenderer

__all__ = ["TableRenderer"]

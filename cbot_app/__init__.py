"""
CBOT App - Grain futures and FX snapshot service

Reads raw Broadcast feed entries for the CBOT soybean and corn curves and the
B3 dollar/euro quotes from a shared Redis cache, and serves them as a JSON
snapshot and as rendered per-commodity table images.
"""

__version__ = "0.1.0"
__author__ = "CBOT App Team"

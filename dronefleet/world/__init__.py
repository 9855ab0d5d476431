"""Servers and nearest-server coverage of the simulated plane.

Components:
    Server: Named, positioned and coloured service point
    VoronoiClassifier: Nearest-server classification, lookup by name, coverage map
    Color: RGB tuple alias, with parse/adjust helpers
"""

from .color import Color, adjust_lightness, lightness, parse_color, to_hex
from .server import Server
from .voronoi import VoronoiClassifier

__all__ = [
    "Color",
    "Server",
    "VoronoiClassifier",
    "adjust_lightness",
    "lightness",
    "parse_color",
    "to_hex",
]

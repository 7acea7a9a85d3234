# Price Dashboard - Charts Package
"""
Price chart geometry and rendering.

- Geometry: line path, fill mask, markers and axis ticks
- Generator: SVG markup and matplotlib PNG output
"""

from .geometry import build_chart_geometry
from .generator import ChartGenerator

__all__ = [
    "build_chart_geometry",
    "ChartGenerator",
]

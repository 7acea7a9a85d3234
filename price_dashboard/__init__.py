# Price Dashboard - Main Package
"""
Price Dashboard: chart geometry and display formatting for a share price page.

This package provides:
- Chart Geometry Builder: price series to vector drawing primitives
- Formatter Suite: quote fields to en-IN display strings
- Chart Generator: SVG and PNG rendering of the primitives
- Web API: FastAPI endpoints over the above
"""

__version__ = "1.0.0"

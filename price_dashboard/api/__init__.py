# Price Dashboard - API Package
"""
FastAPI route handlers for the web API.

Routers:
- chart: Chart geometry, SVG and PNG endpoints
- quote: Quote summary endpoints
"""

from . import chart
from . import quote

__all__ = [
    "chart",
    "quote",
]

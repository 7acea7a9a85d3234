"""
Chart API endpoints.

Turns a posted price series into chart geometry, SVG markup or a PNG image.
"""

import logging
from typing import Union

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from ..charts.generator import ChartGenerator
from ..config import default_layout, display_timezone, get_settings
from ..models import ChartSnapshot, DrawingPrimitives, InsufficientData

router = APIRouter()
logger = logging.getLogger(__name__)


def get_chart_generator() -> ChartGenerator:
    """Chart generator configured from the current settings."""
    settings = get_settings()
    return ChartGenerator(
        layout=default_layout(settings),
        tz=display_timezone(settings),
    )


@router.post("/geometry", response_model=Union[DrawingPrimitives, InsufficientData])
async def get_chart_geometry(snapshot: ChartSnapshot):
    """Get drawing primitives for a price series."""
    try:
        return get_chart_generator().build(snapshot)
    except Exception as e:
        logger.error(f"Error building chart geometry: {e}")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to build chart geometry: {str(e)}"
        )


@router.post("/svg")
async def get_chart_svg(snapshot: ChartSnapshot):
    """Get the price chart as SVG markup."""
    try:
        generator = get_chart_generator()
        svg = generator.render_svg(generator.build(snapshot))
    except Exception as e:
        logger.error(f"Error rendering chart SVG: {e}")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to render chart: {str(e)}"
        )
    return Response(content=svg, media_type="image/svg+xml")


@router.post("/png")
async def get_chart_png(snapshot: ChartSnapshot, ticker: str = "STOCK"):
    """Get the price chart as a base64-encoded PNG data URL."""
    ticker = ticker.strip().upper()

    try:
        image = get_chart_generator().generate_price_chart(snapshot, ticker=ticker)
        return {"ticker": ticker, "image": image}
    except Exception as e:
        logger.error(f"Error generating chart image for {ticker}: {e}")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to generate chart image: {str(e)}"
        )

"""
Application configuration.

Settings are read from the environment after loading the project .env file.
"""

import os
import math
import logging
from datetime import timezone, tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import BaseModel

from .models import ChartLayout, Padding

logger = logging.getLogger(__name__)

# Path to .env file
ENV_PATH = Path(__file__).parent.parent / ".env"

DEFAULTS = {
    "CHART_WIDTH": 760,
    "CHART_HEIGHT": 240,
    "CHART_PADDING_TOP": 24,
    "CHART_PADDING_RIGHT": 20,
    "CHART_PADDING_BOTTOM": 40,
    "CHART_PADDING_LEFT": 60,
}


class AppSettings(BaseModel):
    """Runtime settings for the dashboard service."""
    chart_width: float = DEFAULTS["CHART_WIDTH"]
    chart_height: float = DEFAULTS["CHART_HEIGHT"]
    padding_top: float = DEFAULTS["CHART_PADDING_TOP"]
    padding_right: float = DEFAULTS["CHART_PADDING_RIGHT"]
    padding_bottom: float = DEFAULTS["CHART_PADDING_BOTTOM"]
    padding_left: float = DEFAULTS["CHART_PADDING_LEFT"]
    display_timezone: str = "Asia/Kolkata"
    log_level: str = "INFO"


def _env_number(name: str) -> float:
    """Read a positive number from the environment, falling back to its default."""
    default = DEFAULTS[name]
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Invalid value for {name}: {raw!r}, using {default}")
        return default
    if not math.isfinite(value) or value < 0 or (value == 0 and name in ("CHART_WIDTH", "CHART_HEIGHT")):
        logger.warning(f"Out of range value for {name}: {raw!r}, using {default}")
        return default
    return value


def get_settings() -> AppSettings:
    """Get current application settings."""
    load_dotenv(ENV_PATH)

    return AppSettings(
        chart_width=_env_number("CHART_WIDTH"),
        chart_height=_env_number("CHART_HEIGHT"),
        padding_top=_env_number("CHART_PADDING_TOP"),
        padding_right=_env_number("CHART_PADDING_RIGHT"),
        padding_bottom=_env_number("CHART_PADDING_BOTTOM"),
        padding_left=_env_number("CHART_PADDING_LEFT"),
        display_timezone=os.getenv("DISPLAY_TIMEZONE", "Asia/Kolkata"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def default_layout(settings: AppSettings = None) -> ChartLayout:
    """Build the chart layout from settings."""
    settings = settings or get_settings()
    layout = ChartLayout(
        width=settings.chart_width,
        height=settings.chart_height,
        padding=Padding(
            top=settings.padding_top,
            right=settings.padding_right,
            bottom=settings.padding_bottom,
            left=settings.padding_left,
        ),
    )
    if layout.usable_width <= 0 or layout.usable_height <= 0:
        logger.warning(
            f"Padding leaves no plot area on a {layout.width:g}x{layout.height:g} canvas, "
            f"using default padding"
        )
        layout = ChartLayout(width=layout.width, height=layout.height)
        if layout.usable_width <= 0 or layout.usable_height <= 0:
            logger.warning("Canvas too small for default padding, using default layout")
            layout = ChartLayout()
    return layout


def display_timezone(settings: AppSettings = None) -> tzinfo:
    """Resolve the configured display time zone, UTC if unknown."""
    settings = settings or get_settings()
    try:
        return ZoneInfo(settings.display_timezone)
    except (ZoneInfoNotFoundError, ValueError) as e:
        logger.warning(f"Unknown time zone {settings.display_timezone!r}: {e}, using UTC")
        return timezone.utc

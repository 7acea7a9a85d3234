# Price Dashboard - Chart Geometry
"""
Turn an ordered price series into drawing primitives.

The output describes:
- A polyline through every close, evenly spaced by index
- A closed fill-mask path (polyline plus the two baseline corners)
- One marker per point, the latest one emphasized
- Three y-axis ticks (max, midpoint, min) and three x-axis ticks
"""

import logging
from datetime import tzinfo
from typing import List, Optional

import numpy as np

from ..formatting import (
    CURRENCY_SYMBOL,
    format_axis_price,
    format_coordinate,
    format_date_label,
    to_fixed,
)
from ..models import (
    AxisLabel,
    ChartLayout,
    ChartResult,
    ChartSnapshot,
    DrawingPrimitives,
    InsufficientData,
    Marker,
    PlotArea,
    XAxisLabels,
)

logger = logging.getLogger(__name__)

MIN_POINTS = 2

MARKER_STYLES = {
    'last': {'radius': 4, 'fill': '#4338ca', 'opacity': 1},
    'default': {'radius': 2, 'fill': '#6366f1', 'opacity': 0.4},
}

Y_LABEL_X = 12
X_LABEL_OFFSET = 24


def _map_coordinates(closes: np.ndarray, layout: ChartLayout,
                     min_close: float, y_range: float, flat: bool):
    """Map closes to canvas coordinates.

    Returns:
        Tuple of x and y arrays
    """
    pad = layout.padding
    n = len(closes)
    idx = np.arange(n, dtype=float)
    xs = pad.left + (idx / (n - 1)) * layout.usable_width

    if flat:
        ratios = np.full(n, 0.5)
    else:
        ratios = (closes - min_close) / y_range
    ys = pad.top + layout.usable_height - ratios * layout.usable_height
    return xs, ys


def build_line_path(xs, ys) -> str:
    """One move-to followed by a line-to per remaining point."""
    commands = []
    for i, (x, y) in enumerate(zip(xs, ys)):
        command = "M" if i == 0 else "L"
        commands.append(f"{command}{to_fixed(float(x), 2)} {to_fixed(float(y), 2)}")
    return " ".join(commands)


def build_fill_mask_path(line_path: str, layout: ChartLayout) -> str:
    """Close the line path along the baseline: bottom-right, bottom-left, back to start."""
    right = format_coordinate(layout.padding.left + layout.usable_width)
    left = format_coordinate(layout.padding.left)
    baseline = format_coordinate(layout.baseline_y)
    return f"{line_path} L{right} {baseline} L{left} {baseline} Z"


def _build_markers(xs, ys) -> List[Marker]:
    last_index = len(xs) - 1
    markers = []
    for i, (x, y) in enumerate(zip(xs, ys)):
        is_last = i == last_index
        style = MARKER_STYLES['last' if is_last else 'default']
        markers.append(Marker(x=float(x), y=float(y), is_last=is_last, **style))
    return markers


def _build_y_labels(layout: ChartLayout, min_close: float, max_close: float,
                    y_range: float) -> List[AxisLabel]:
    top = layout.padding.top
    height = layout.usable_height
    ticks = [
        (max_close, top + 12),
        (min_close + y_range / 2, top + height / 2 + 6),
        (min_close, top + height + 12),
    ]
    return [
        AxisLabel(
            value=value,
            text=f"{CURRENCY_SYMBOL}{format_axis_price(value)}",
            x=Y_LABEL_X,
            y=y,
            anchor='start',
        )
        for value, y in ticks
    ]


def _build_x_labels(timestamps: List[int], layout: ChartLayout,
                    tz: Optional[tzinfo]) -> XAxisLabels:
    left = layout.padding.left
    width = layout.usable_width
    y = layout.baseline_y + X_LABEL_OFFSET

    def label(timestamp: int, x: float, anchor: str) -> AxisLabel:
        return AxisLabel(
            value=timestamp,
            text=format_date_label(timestamp, tz),
            x=x,
            y=y,
            anchor=anchor,
        )

    return XAxisLabels(
        first=label(timestamps[0], left, 'start'),
        mid=label(timestamps[len(timestamps) // 2], left + width / 2, 'middle'),
        last=label(timestamps[-1], left + width, 'end'),
    )


def build_chart_geometry(snapshot: ChartSnapshot,
                         layout: Optional[ChartLayout] = None,
                         tz: Optional[tzinfo] = None) -> ChartResult:
    """Build drawing primitives for a price series.

    Args:
        snapshot: Price points ordered by ascending timestamp
        layout: Canvas size and padding, defaults to 760x240
        tz: Time zone for the x-axis date labels, UTC when omitted

    Returns:
        DrawingPrimitives, or InsufficientData for fewer than two points
    """
    layout = layout or ChartLayout()
    points = snapshot.points

    if len(points) < MIN_POINTS:
        logger.debug(f"Insufficient data for chart: {len(points)} point(s)")
        return InsufficientData(point_count=len(points))

    closes = np.array([p.close for p in points], dtype=float)
    timestamps = [p.timestamp for p in points]

    min_close = float(closes.min())
    max_close = float(closes.max())
    y_range = max_close - min_close
    flat = y_range == 0
    if flat:
        logger.debug("Flat series, substituting unit price range")
        y_range = 1.0

    xs, ys = _map_coordinates(closes, layout, min_close, y_range, flat)
    line_path = build_line_path(xs, ys)

    return DrawingPrimitives(
        view_box=layout.view_box,
        width=layout.width,
        height=layout.height,
        plot_area=PlotArea(
            x=layout.padding.left,
            y=layout.padding.top,
            width=layout.usable_width,
            height=layout.usable_height,
        ),
        min_close=min_close,
        max_close=max_close,
        y_range=y_range,
        line_path=line_path,
        fill_mask_path=build_fill_mask_path(line_path, layout),
        markers=_build_markers(xs, ys),
        y_axis_labels=_build_y_labels(layout, min_close, max_close, y_range),
        x_axis_labels=_build_x_labels(timestamps, layout, tz),
    )

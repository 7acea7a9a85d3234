# Price Dashboard - Chart Generator
"""
Render price chart primitives.

Outputs:
- SVG markup for the dashboard page (gradient fill through a mask)
- PNG image via matplotlib for reports and downloads
"""

import os
import io
import base64
import logging
from datetime import datetime, tzinfo
from typing import List, Optional
from xml.sax.saxutils import escape, quoteattr

import matplotlib
matplotlib.use('Agg')  # Use non-interactive backend
import matplotlib.pyplot as plt
from matplotlib.colors import to_rgb
from matplotlib.patches import Polygon
import numpy as np

from ..formatting import format_coordinate as num
from ..models import ChartLayout, ChartResult, ChartSnapshot, DrawingPrimitives
from .geometry import build_chart_geometry

logger = logging.getLogger(__name__)


class ChartGenerator:
    """Generate price charts from a snapshot."""

    def __init__(self, layout: Optional[ChartLayout] = None,
                 tz: Optional[tzinfo] = None, charts_dir: str = "charts"):
        """Initialize chart generator.

        Args:
            layout: Canvas size and padding
            tz: Time zone for date labels
            charts_dir: Directory to save chart images
        """
        self.layout = layout or ChartLayout()
        self.tz = tz
        self.charts_dir = charts_dir

        self.colors = {
            'gradient': '#4f46e5',   # Fill gradient
            'line': '#4338ca',       # Price line
            'background': '#ffffff',
            'axis': '#475467',       # Axis label text
        }
        self.gradient_opacity = (0.32, 0.0)

    def build(self, snapshot: ChartSnapshot) -> ChartResult:
        """Build geometry with this generator's layout."""
        return build_chart_geometry(snapshot, self.layout, self.tz)

    # ===========================================
    # SVG
    # ===========================================

    def render_svg(self, result: ChartResult) -> str:
        """Render primitives as an SVG document.

        Args:
            result: Output of build_chart_geometry

        Returns:
            SVG markup
        """
        if not isinstance(result, DrawingPrimitives):
            return self._render_insufficient_svg(result.message)

        lines: List[str] = []
        lines.append(
            f'<svg xmlns="http://www.w3.org/2000/svg" class="price-chart" '
            f'viewBox="{result.view_box}" role="img" aria-label="Price chart">'
        )

        # Gradient and the under-curve mask
        top_opacity, bottom_opacity = self.gradient_opacity
        lines.append('<defs>')
        lines.append('<linearGradient id="priceGradient" x1="0%" y1="0%" x2="0%" y2="100%">')
        lines.append(f'<stop offset="0%" stop-color="{self.colors["gradient"]}" '
                     f'stop-opacity="{num(top_opacity)}" />')
        lines.append(f'<stop offset="100%" stop-color="{self.colors["gradient"]}" '
                     f'stop-opacity="{num(bottom_opacity)}" />')
        lines.append('</linearGradient>')
        lines.append('<mask id="priceMask">')
        lines.append(f'<path d="{result.fill_mask_path}" fill="white" stroke="white" '
                     f'stroke-width="0" />')
        lines.append('</mask>')
        lines.append('</defs>')

        lines.append(f'<rect width="100%" height="100%" fill="{self.colors["background"]}" '
                     f'rx="16" ry="16" />')
        area = result.plot_area
        lines.append(
            f'<rect x="{num(area.x)}" y="{num(area.y)}" width="{num(area.width)}" '
            f'height="{num(area.height)}" fill="url(#priceGradient)" mask="url(#priceMask)" />'
        )
        lines.append(f'<path d="{result.line_path}" class="price-line" '
                     f'stroke="{self.colors["line"]}" fill="none" />')

        for marker in result.markers:
            lines.append(
                f'<circle cx="{num(marker.x)}" cy="{num(marker.y)}" r="{num(marker.radius)}" '
                f'fill="{marker.fill}" opacity="{num(marker.opacity)}" />'
            )

        for label in result.y_axis_labels + result.x_axis_labels.as_list():
            anchor = ''
            if label.anchor != 'start':
                anchor = f' text-anchor="{label.anchor}"'
            lines.append(
                f'<text x="{num(label.x)}" y="{num(label.y)}" class="chart-axis"{anchor}>'
                f'{escape(label.text)}</text>'
            )

        lines.append('</svg>')
        return "\n".join(lines)

    def _render_insufficient_svg(self, message: str) -> str:
        """Same-size SVG holding only the fallback message."""
        width, height = self.layout.width, self.layout.height
        return "\n".join([
            f'<svg xmlns="http://www.w3.org/2000/svg" class="price-chart" '
            f'viewBox="{self.layout.view_box}" role="img" aria-label={quoteattr(message)}>',
            f'<text x="{num(width / 2)}" y="{num(height / 2)}" class="chart-axis" '
            f'text-anchor="middle">{escape(message)}</text>',
            '</svg>',
        ])

    # ===========================================
    # PNG
    # ===========================================

    def _ensure_dir(self, ticker: str) -> str:
        """Ensure chart directory exists for ticker."""
        ticker_dir = os.path.join(self.charts_dir, ticker.upper())
        os.makedirs(ticker_dir, exist_ok=True)
        return ticker_dir

    def _save_or_encode(self, fig: plt.Figure, ticker: str, chart_name: str,
                        save_to_file: bool = False) -> str:
        """Save chart to file or return base64 encoded image.

        Args:
            fig: Matplotlib figure
            ticker: Stock ticker
            chart_name: Name of the chart
            save_to_file: Whether to save to file

        Returns:
            File path or base64 encoded image
        """
        # No bbox_inches="tight": the PNG keeps the fixed canvas size
        if save_to_file:
            ticker_dir = self._ensure_dir(ticker)
            date_str = datetime.now().strftime("%Y-%m-%d")
            filepath = os.path.join(ticker_dir, f"{date_str}_{chart_name}.png")
            fig.savefig(filepath, dpi=150, facecolor='white', edgecolor='none')
            plt.close(fig)
            return filepath
        else:
            buf = io.BytesIO()
            fig.savefig(buf, format='png', dpi=150, facecolor='white', edgecolor='none')
            buf.seek(0)
            img_base64 = base64.b64encode(buf.read()).decode('utf-8')
            plt.close(fig)
            return f"data:image/png;base64,{img_base64}"

    def _gradient_image(self) -> np.ndarray:
        """Vertical RGBA gradient, opaque end at the top."""
        rgb = to_rgb(self.colors['gradient'])
        top_opacity, bottom_opacity = self.gradient_opacity
        rows = 256
        image = np.zeros((rows, 1, 4))
        image[:, :, :3] = rgb
        image[:, 0, 3] = np.linspace(top_opacity, bottom_opacity, rows)
        return image

    def generate_price_chart(self, snapshot: ChartSnapshot,
                             ticker: str = "STOCK",
                             save_to_file: bool = False) -> str:
        """Generate the price chart as a PNG image.

        Args:
            snapshot: Price series
            ticker: Stock ticker symbol
            save_to_file: Whether to save to file

        Returns:
            File path or base64 encoded image
        """
        layout = self.layout
        fig = plt.figure(figsize=(layout.width / 100, layout.height / 100))
        ax = fig.add_axes([0, 0, 1, 1])
        ax.set_xlim(0, layout.width)
        ax.set_ylim(layout.height, 0)  # Screen coordinates, y grows downward
        ax.axis('off')

        result = self.build(snapshot)
        if not isinstance(result, DrawingPrimitives):
            ax.text(layout.width / 2, layout.height / 2, result.message,
                    ha='center', va='center', fontsize=10, color=self.colors['axis'])
            return self._save_or_encode(fig, ticker, 'price_chart', save_to_file)

        xs = [m.x for m in result.markers]
        ys = [m.y for m in result.markers]
        area = result.plot_area

        # Gradient clipped to the region between the line and the baseline
        polygon = Polygon(
            list(zip(xs, ys)) + [(area.x + area.width, layout.baseline_y),
                                 (area.x, layout.baseline_y)],
            closed=True, facecolor='none', edgecolor='none',
        )
        ax.add_patch(polygon)
        image = ax.imshow(
            self._gradient_image(), aspect='auto', interpolation='bicubic',
            extent=(area.x, area.x + area.width, area.y + area.height, area.y),
        )
        image.set_clip_path(polygon)

        ax.plot(xs, ys, color=self.colors['line'], linewidth=2)
        for marker in result.markers:
            ax.scatter([marker.x], [marker.y], s=(marker.radius * 2) ** 2,
                       color=marker.fill, alpha=marker.opacity, zorder=3)

        align = {'start': 'left', 'middle': 'center', 'end': 'right'}
        for label in result.y_axis_labels + result.x_axis_labels.as_list():
            ax.text(label.x, label.y, label.text, ha=align[label.anchor],
                    va='baseline', fontsize=8, color=self.colors['axis'])

        # Keep the view fixed after imshow adjusted the limits
        ax.set_xlim(0, layout.width)
        ax.set_ylim(layout.height, 0)

        logger.debug(f"Rendered PNG price chart for {ticker} ({len(xs)} points)")
        return self._save_or_encode(fig, ticker, 'price_chart', save_to_file)

# Price Dashboard - Quote Summary
"""
Build the display strings shown next to the price chart.

The summary covers:
- Last traded price with the day's change
- Day range and previous close
- Market profile (market cap, volume, average volume)
- Valuation ratios
- 52-week range
"""

import logging
from datetime import tzinfo
from typing import List, Optional, Tuple

from ..formatting import (
    PLACEHOLDER,
    abbreviate_number,
    format_change,
    format_currency,
    format_percent,
    format_ratio,
    format_timestamp,
    format_volume,
    is_present,
)
from ..models import QuoteSnapshot, QuoteSummary

logger = logging.getLogger(__name__)

FEED_UNAVAILABLE = "Live feed unavailable"
FEED_NOTICE = (
    "Unable to reach the market data provider right now. Historical series will "
    "appear once the connection is restored."
)


def _has_live_data(snapshot: QuoteSnapshot) -> bool:
    price = snapshot.quote.price
    return len(snapshot.chart.points) > 0 and price is not None and price > 0


def build_quote_summary(snapshot: QuoteSnapshot, tz: Optional[tzinfo] = None) -> QuoteSummary:
    """Format every scalar quote field for display.

    Args:
        snapshot: Quote and price series for one render
        tz: Display time zone for the quote timestamp

    Returns:
        QuoteSummary with placeholder strings for missing fields
    """
    quote = snapshot.quote
    has_live_data = _has_live_data(snapshot)
    if not has_live_data:
        logger.debug("No live quote data, rendering fallback summary")

    if has_live_data:
        delta = f"{format_change(quote.change)} ({format_percent(quote.change_percent)})"
    else:
        delta = FEED_UNAVAILABLE

    trading_range = None
    if is_present(quote.fifty_two_week_high) and is_present(quote.fifty_two_week_low):
        trading_range = (
            f"52-week range spans {format_currency(quote.fifty_two_week_low)} "
            f"– {format_currency(quote.fifty_two_week_high)}."
        )

    # NaN compares false, so it renders as negative
    change_class = 'positive' if quote.change is None or quote.change >= 0 else 'negative'

    return QuoteSummary(
        has_live_data=has_live_data,
        last_traded_price=format_currency(quote.price) if has_live_data else PLACEHOLDER,
        change_class=change_class,
        delta=delta,
        as_of=f"As of {format_timestamp(quote.timestamp, tz)} ({quote.currency or PLACEHOLDER})",
        day_range=f"{format_currency(quote.day_low)} – {format_currency(quote.day_high)}",
        previous_close=format_currency(quote.previous_close),
        open=format_currency(quote.open),
        fifty_two_week_high=format_currency(quote.fifty_two_week_high),
        fifty_two_week_low=format_currency(quote.fifty_two_week_low),
        market_cap=abbreviate_number(quote.market_cap),
        volume=format_volume(quote.volume),
        average_volume=format_volume(quote.average_volume),
        trailing_pe=format_ratio(quote.trailing_pe),
        forward_pe=format_ratio(quote.forward_pe),
        trading_range=trading_range,
        feed_notice=None if has_live_data else FEED_NOTICE,
    )


def summary_rows(summary: QuoteSummary) -> List[Tuple[str, str]]:
    """Metric/value rows in display order."""
    return [
        ("Last Traded Price", summary.last_traded_price),
        ("Change", summary.delta),
        ("Day Range", summary.day_range),
        ("Prev Close", summary.previous_close),
        ("Opening Price", summary.open),
        ("52 Week High", summary.fifty_two_week_high),
        ("52 Week Low", summary.fifty_two_week_low),
        ("Market Cap", summary.market_cap),
        ("Volume", summary.volume),
        ("Avg Vol (3M)", summary.average_volume),
        ("Trailing P/E", summary.trailing_pe),
        ("Forward P/E", summary.forward_pe),
    ]


def render_markdown(summary: QuoteSummary, title: str = "Share Price Snapshot") -> str:
    """Render the summary as a markdown metrics table."""
    lines = []

    lines.append(f"# {title}")
    lines.append("")
    lines.append(f"**{summary.as_of}**")
    lines.append("")

    lines.append("| Metric | Value |")
    lines.append("|--------|-------|")
    for metric, value in summary_rows(summary):
        lines.append(f"| {metric} | {value} |")
    lines.append("")

    if summary.trading_range:
        lines.append(f"- {summary.trading_range}")
        lines.append("")

    if summary.feed_notice:
        lines.append(f"*{summary.feed_notice}*")
        lines.append("")

    return "\n".join(lines)

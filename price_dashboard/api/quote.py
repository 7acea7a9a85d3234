"""
Quote API endpoints.

Formats the scalar fields of a posted quote snapshot for display.
"""

import logging

from fastapi import APIRouter, HTTPException

from ..config import display_timezone
from ..models import QuoteSnapshot, QuoteSummary
from ..reports.summary import build_quote_summary, render_markdown

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/summary", response_model=QuoteSummary)
async def get_quote_summary(snapshot: QuoteSnapshot):
    """Get display strings for a quote snapshot."""
    try:
        return build_quote_summary(snapshot, display_timezone())
    except Exception as e:
        logger.error(f"Error building quote summary: {e}")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to build quote summary: {str(e)}"
        )


@router.post("/report")
async def get_quote_report(snapshot: QuoteSnapshot, title: str = "Share Price Snapshot"):
    """Get the quote summary as a markdown report."""
    try:
        summary = build_quote_summary(snapshot, display_timezone())
        return {"title": title, "markdown": render_markdown(summary, title)}
    except Exception as e:
        logger.error(f"Error rendering quote report: {e}")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to render quote report: {str(e)}"
        )

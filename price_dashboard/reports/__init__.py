# Price Dashboard - Reports Package
"""
Quote summaries for the dashboard cards and markdown reports.
"""

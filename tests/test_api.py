import asyncio
import json

import pytest

from price_dashboard.main import server_error_handler

from .conftest import DAY_MS, T0

POINTS = [
    {"timestamp": T0, "close": 100},
    {"timestamp": T0 + DAY_MS, "close": 110},
    {"timestamp": T0 + 2 * DAY_MS, "close": 90},
    {"timestamp": T0 + 3 * DAY_MS, "close": 120},
]


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "healthy"


def test_chart_geometry(client):
    r = client.post("/api/chart/geometry", json={"points": POINTS})
    assert r.status_code == 200
    data = r.json()
    assert data["kind"] == "chart"
    assert data["view_box"] == "0 0 760 240"
    assert data["line_path"] == "M60.00 141.33 L286.67 82.67 L513.33 200.00 L740.00 24.00"
    assert len(data["markers"]) == 4
    assert data["x_axis_labels"]["mid"]["text"] == "16 Nov"


def test_chart_geometry_insufficient_data(client):
    r = client.post("/api/chart/geometry", json={"points": POINTS[:1]})
    assert r.status_code == 200
    data = r.json()
    assert data["kind"] == "insufficient_data"
    assert data["point_count"] == 1
    assert "line_path" not in data


def test_chart_geometry_uses_configured_layout(client, monkeypatch):
    monkeypatch.setenv("CHART_WIDTH", "400")
    r = client.post("/api/chart/geometry", json={"points": POINTS})
    assert r.json()["view_box"] == "0 0 400 240"


@pytest.mark.parametrize("raw", ["nan", "inf"])
def test_chart_geometry_ignores_non_finite_width(client, monkeypatch, raw):
    monkeypatch.setenv("CHART_WIDTH", raw)
    r = client.post("/api/chart/geometry", json={"points": POINTS})
    assert r.status_code == 200
    assert r.json()["view_box"] == "0 0 760 240"


def test_chart_geometry_rejects_bad_payload(client):
    r = client.post("/api/chart/geometry", json={"points": [{"timestamp": T0, "close": "abc"}]})
    assert r.status_code == 422


def test_chart_svg(client):
    r = client.post("/api/chart/svg", json={"points": POINTS})
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("image/svg+xml")
    assert 'viewBox="0 0 760 240"' in r.text
    assert r.text.count("<circle") == 4


def test_chart_png(client):
    r = client.post("/api/chart/png", params={"ticker": " intellect "}, json={"points": POINTS})
    assert r.status_code == 200
    data = r.json()
    assert data["ticker"] == "INTELLECT"
    assert data["image"].startswith("data:image/png;base64,")


def test_quote_summary(client):
    payload = {
        "quote": {
            "price": 1234.5,
            "change": -4.5,
            "changePercent": -0.36,
            "currency": "INR",
            "timestamp": 1_700_000_000,
            "marketCap": 1e7,
            "volume": 999,
        },
        "chart": {"points": POINTS},
    }
    r = client.post("/api/quote/summary", json=payload)
    assert r.status_code == 200
    data = r.json()
    assert data["has_live_data"] is True
    assert data["last_traded_price"] == "₹1,234.50"
    assert data["delta"] == "-4.50 (-0.36%)"
    assert data["change_class"] == "negative"
    assert data["as_of"] == "As of 14 Nov 2023, 10:13 pm (INR)"
    assert data["market_cap"] == "1.00 Cr"
    assert data["volume"] == "999"
    assert data["day_range"] == "– – –"


def test_quote_summary_without_feed(client):
    r = client.post("/api/quote/summary", json={})
    assert r.status_code == 200
    data = r.json()
    assert data["has_live_data"] is False
    assert data["delta"] == "Live feed unavailable"
    assert data["feed_notice"]


def test_quote_report(client):
    r = client.post("/api/quote/report", params={"title": "INTELLECT"},
                    json={"quote": {"price": 10, "volume": 1500}, "chart": {"points": POINTS}})
    assert r.status_code == 200
    data = r.json()
    assert data["title"] == "INTELLECT"
    assert "| Volume | 1.50 K |" in data["markdown"]


def test_unknown_route(client):
    r = client.get("/api/unknown")
    assert r.status_code == 404
    assert r.json() == {"success": False, "message": "Resource not found"}


def test_server_error_envelope():
    response = asyncio.run(server_error_handler(None, RuntimeError("boom")))
    assert response.status_code == 500
    assert json.loads(response.body) == {"success": False, "message": "Internal server error"}

import pytest
from fastapi.testclient import TestClient

from price_dashboard.models import ChartSnapshot, PricePoint

DAY_MS = 86_400_000
T0 = 1_700_000_000_000  # 14 Nov 2023 22:13:20 UTC


def make_snapshot(*closes, start=T0, step=DAY_MS) -> ChartSnapshot:
    return ChartSnapshot(points=[
        PricePoint(timestamp=start + i * step, close=close)
        for i, close in enumerate(closes)
    ])


@pytest.fixture(autouse=True)
def utc_display(monkeypatch):
    monkeypatch.setenv("DISPLAY_TIMEZONE", "UTC")


@pytest.fixture
def client():
    from price_dashboard.main import app
    return TestClient(app)


@pytest.fixture
def four_point_snapshot() -> ChartSnapshot:
    return make_snapshot(100, 110, 90, 120)

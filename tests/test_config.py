from datetime import timezone
from zoneinfo import ZoneInfo

import pytest

from price_dashboard.config import (
    AppSettings,
    default_layout,
    display_timezone,
    get_settings,
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("CHART_WIDTH", "CHART_HEIGHT", "CHART_PADDING_TOP", "CHART_PADDING_RIGHT",
                 "CHART_PADDING_BOTTOM", "CHART_PADDING_LEFT", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_default_layout(clean_env):
    layout = default_layout()

    assert (layout.width, layout.height) == (760, 240)
    assert (layout.padding.top, layout.padding.right,
            layout.padding.bottom, layout.padding.left) == (24, 20, 40, 60)
    assert layout.usable_width == 680
    assert layout.usable_height == 176
    assert layout.baseline_y == 200


def test_layout_from_environment(clean_env):
    clean_env.setenv("CHART_WIDTH", "500")
    clean_env.setenv("CHART_PADDING_LEFT", "40")

    layout = default_layout()

    assert layout.width == 500
    assert layout.padding.left == 40
    assert layout.usable_width == 440


@pytest.mark.parametrize("raw", ["abc", "-10", "0", "nan", "inf", "-inf"])
def test_invalid_width_falls_back(clean_env, raw):
    clean_env.setenv("CHART_WIDTH", raw)
    assert get_settings().chart_width == 760


def test_non_finite_padding_falls_back(clean_env):
    clean_env.setenv("CHART_PADDING_LEFT", "nan")
    assert get_settings().padding_left == 60


def test_padding_wider_than_canvas_uses_default_padding(clean_env):
    clean_env.setenv("CHART_PADDING_LEFT", "800")

    layout = default_layout()

    assert layout.width == 760
    assert layout.padding.left == 60
    assert layout.usable_width == 680


def test_padding_taller_than_canvas_uses_default_padding(clean_env):
    clean_env.setenv("CHART_HEIGHT", "100")
    clean_env.setenv("CHART_PADDING_TOP", "80")

    layout = default_layout()

    assert layout.height == 100
    assert layout.padding.top == 24
    assert layout.usable_height == 36


def test_canvas_too_small_for_default_padding_uses_default_layout(clean_env):
    clean_env.setenv("CHART_HEIGHT", "50")

    layout = default_layout()

    assert (layout.width, layout.height) == (760, 240)
    assert layout.usable_height == 176


def test_zero_padding_is_allowed(clean_env):
    clean_env.setenv("CHART_PADDING_TOP", "0")
    assert get_settings().padding_top == 0


def test_log_level_is_upper_cased(clean_env):
    clean_env.setenv("LOG_LEVEL", "debug")
    assert get_settings().log_level == "DEBUG"


def test_display_timezone_utc():
    assert display_timezone(AppSettings(display_timezone="UTC")) == ZoneInfo("UTC")


def test_unknown_timezone_falls_back_to_utc():
    assert display_timezone(AppSettings(display_timezone="Not/AZone")) == timezone.utc

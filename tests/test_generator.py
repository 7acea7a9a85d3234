import base64
import os
import xml.etree.ElementTree as ET

from price_dashboard.charts.generator import ChartGenerator
from price_dashboard.charts.geometry import build_chart_geometry

from .conftest import make_snapshot

SVG_NS = "{http://www.w3.org/2000/svg}"


def test_render_svg_structure(four_point_snapshot):
    generator = ChartGenerator()
    result = generator.build(four_point_snapshot)
    svg = generator.render_svg(result)

    root = ET.fromstring(svg)
    assert root.get("viewBox") == "0 0 760 240"

    mask_path = root.find(f"{SVG_NS}defs/{SVG_NS}mask/{SVG_NS}path")
    assert mask_path.get("d") == result.fill_mask_path

    line = root.find(f"{SVG_NS}path")
    assert line.get("d") == result.line_path
    assert line.get("class") == "price-line"
    assert line.get("fill") == "none"

    gradient_rect = [r for r in root.findall(f"{SVG_NS}rect") if r.get("mask")]
    assert len(gradient_rect) == 1
    assert gradient_rect[0].get("mask") == "url(#priceMask)"
    assert gradient_rect[0].get("fill") == "url(#priceGradient)"
    assert (gradient_rect[0].get("x"), gradient_rect[0].get("width")) == ("60", "680")


def test_render_svg_markers_and_labels(four_point_snapshot):
    generator = ChartGenerator()
    root = ET.fromstring(generator.render_svg(generator.build(four_point_snapshot)))

    circles = root.findall(f"{SVG_NS}circle")
    assert len(circles) == 4
    assert [c.get("r") for c in circles] == ["2", "2", "2", "4"]
    assert circles[-1].get("opacity") == "1"
    assert circles[0].get("opacity") == "0.4"

    texts = root.findall(f"{SVG_NS}text")
    assert [t.text for t in texts][:3] == ["₹120.00", "₹105.00", "₹90.00"]
    assert [t.get("text-anchor") for t in texts][3:] == [None, "middle", "end"]


def test_render_svg_insufficient_data():
    generator = ChartGenerator()
    svg = generator.render_svg(generator.build(make_snapshot(100)))

    root = ET.fromstring(svg)
    assert root.get("viewBox") == "0 0 760 240"
    assert root.find(f"{SVG_NS}path") is None
    assert root.find(f"{SVG_NS}text").text == "Not enough data to render the chart."


def test_render_svg_is_stable(four_point_snapshot):
    generator = ChartGenerator()
    result = build_chart_geometry(four_point_snapshot)
    assert generator.render_svg(result) == generator.render_svg(result)


def test_generate_price_chart_png(four_point_snapshot):
    image = ChartGenerator().generate_price_chart(four_point_snapshot)

    assert image.startswith("data:image/png;base64,")
    raw = base64.b64decode(image.split(",", 1)[1])
    assert raw[:8] == b"\x89PNG\r\n\x1a\n"


def test_generate_price_chart_png_keeps_canvas_size(four_point_snapshot):
    image = ChartGenerator().generate_price_chart(four_point_snapshot)
    raw = base64.b64decode(image.split(",", 1)[1])

    # IHDR width and height at 150 dpi
    width = int.from_bytes(raw[16:20], "big")
    height = int.from_bytes(raw[20:24], "big")
    assert abs(width - 1140) <= 1
    assert abs(height - 360) <= 1


def test_generate_price_chart_png_insufficient():
    image = ChartGenerator().generate_price_chart(make_snapshot())
    assert image.startswith("data:image/png;base64,")


def test_generate_price_chart_saves_file(tmp_path, four_point_snapshot):
    generator = ChartGenerator(charts_dir=str(tmp_path))
    path = generator.generate_price_chart(four_point_snapshot, ticker="intellect",
                                          save_to_file=True)

    assert os.path.exists(path)
    assert os.path.dirname(path) == os.path.join(str(tmp_path), "INTELLECT")
    assert path.endswith("_price_chart.png")

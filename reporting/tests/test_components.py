from __future__ import annotations

import base64

from reporting.components import data_table, headline_block, inputs_block, value_with_unit
from reporting.config import ReportConfig
from reporting.logo import logo_data_uri, logo_png, render_badge_png
from reporting.schema import InputGroup, ResultItem, SectionItem
from reporting.styles import build_stylesheet, hex_to_rgb

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def test_value_with_unit():
    assert value_with_unit(ResultItem(label="Q", value="1200", unit="W")) == "1200 W"
    assert value_with_unit(ResultItem(label="Q", value="1200")) == "1200 "


def test_data_table_empty():
    assert data_table([]) == '<table class="data-table"></table>'


def test_data_table_plain_items_never_highlighted():
    html = data_table([ResultItem(label="Area", value="24", unit="m²")])
    assert "highlighted-row" not in html


def test_data_table_highlight():
    html = data_table([SectionItem(label="Q", value="1", unit="W", isHighlighted=True)])
    assert html.startswith('<table class="data-table"><tr class="highlighted-row">')


def test_headline_block_empty_is_blank():
    assert headline_block([], "Final Results") == ""


def test_inputs_block_title_escaped():
    html = inputs_block([InputGroup(title="Walls & Roof")], "Inputs")
    assert "Walls &amp; Roof" in html


def test_stylesheet_sections_are_optional():
    cfg = ReportConfig()
    bare = build_stylesheet(cfg, with_headline=False, with_inputs=False)
    full = build_stylesheet(cfg, with_headline=True, with_inputs=True)

    assert ".final-results-section" not in bare
    assert ".inputs-grid" not in bare
    assert ".final-results-section" in full
    assert ".inputs-grid" in full
    assert "rgba(37, 99, 235, 0.08)" in bare


def test_round_logo_style():
    css = build_stylesheet(ReportConfig(logo_style="ROUND"), with_headline=False, with_inputs=False)
    assert "border-radius: 50%" in css


def test_hex_to_rgb():
    assert hex_to_rgb("#2563eb") == "37, 99, 235"


def test_generated_badge_is_png_and_stable():
    png = render_badge_png("E", "#2563eb", "SQUARE")
    assert png.startswith(PNG_SIGNATURE)
    render_badge_png.cache_clear()
    assert render_badge_png("E", "#2563eb", "SQUARE") == png
    assert render_badge_png("E", "#2563eb", "ROUND") != png


def test_logo_path_overrides_badge(tmp_path):
    logo = tmp_path / "logo.png"
    logo.write_bytes(render_badge_png("X", "#000000", "ROUND"))
    cfg = ReportConfig(logo_path=logo)

    assert logo_png(cfg) == logo.read_bytes()
    uri = logo_data_uri(cfg)
    assert uri.startswith("data:image/png;base64,")
    assert base64.b64decode(uri.split(",", 1)[1]) == logo.read_bytes()

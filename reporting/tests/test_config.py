from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from reporting.config import ReportConfig
from reporting.renderer import load_config_from_yaml


def test_defaults_match_compact_layout():
    cfg = ReportConfig()
    assert cfg.density == "COMPACT"
    assert (cfg.columns, cfg.final_results_columns, cfg.input_columns) == (2, 2, 3)
    assert cfg.page_size == "A4"
    assert cfg.page_margin_mm == 10.0


def test_load_config_from_yaml(tmp_path: Path):
    path = tmp_path / "report.yaml"
    path.write_text(
        "density: STANDARD\n"
        "columns: 3\n"
        "logo_style: ROUND\n"
        "brand_name: Acme HVAC\n"
        "brand_color: '#0f766e'\n",
        encoding="utf-8",
    )
    cfg = load_config_from_yaml(path)
    assert cfg.density == "STANDARD"
    assert cfg.columns == 3
    assert cfg.logo_style == "ROUND"
    assert cfg.brand_name == "Acme HVAC"
    assert cfg.brand_color == "#0f766e"


def test_empty_yaml_gives_defaults(tmp_path: Path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config_from_yaml(path) == ReportConfig()


@pytest.mark.parametrize("field,value", [("columns", 5), ("input_columns", 1), ("density", "DETAILED"), ("brand_color", "blue")])
def test_invalid_layout_values_rejected(field, value):
    with pytest.raises(ValidationError):
        ReportConfig(**{field: value})

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from .config import ReportConfig


@dataclass(frozen=True)
class Palette:
    accent_dark: str
    accent_deep: str
    text_primary: str
    text_label: str
    muted: str
    divider: str
    row_divider: str
    section_bg: str
    panel_bg: str
    highlight_bg: str


PALETTE = Palette(
    accent_dark="#1e40af",
    accent_deep="#1d4ed8",
    text_primary="#000000",
    text_label="#374151",
    muted="#64748b",
    divider="#e2e8f0",
    row_divider="#f1f5f9",
    section_bg="#f1f5f9",
    panel_bg="#f8fafc",
    highlight_bg="#eff6ff",
)


@dataclass(frozen=True)
class Typography:
    """Font sizes (px) and spacing (mm) for one density level."""

    body: float
    brand: float
    title: float
    headline_title: float
    headline_label: float
    headline_value: float
    section_title: float
    table: float
    input_title: float
    footer: float
    watermark: float
    logo: float
    gap: float
    pad: float
    print_scale: float


DENSITIES: Dict[str, Typography] = {
    "COMPACT": Typography(
        body=11, brand=20, title=18, headline_title=12, headline_label=9, headline_value=11,
        section_title=9, table=8, input_title=8, footer=9, watermark=36, logo=35,
        gap=3, pad=1.5, print_scale=0.8,
    ),
    "STANDARD": Typography(
        body=12, brand=22, title=22, headline_title=13, headline_label=10, headline_value=14,
        section_title=11, table=10, input_title=10, footer=10, watermark=48, logo=44,
        gap=5, pad=2.5, print_scale=0.85,
    ),
}

FONT_STACK = "Arial, Helvetica, sans-serif"


def _px(value: float) -> str:
    return f"{round(value, 2):g}px"


def _mm(value: float) -> str:
    return f"{round(value, 2):g}mm"


def hex_to_rgb(color: str) -> str:
    color = color.lstrip("#")
    return ", ".join(str(int(color[i : i + 2], 16)) for i in (0, 2, 4))


def typography_for(config: ReportConfig) -> Typography:
    return DENSITIES[config.density]


def build_stylesheet(config: ReportConfig, *, with_headline: bool, with_inputs: bool) -> str:
    """Return the inline CSS for one document.

    Rules for the headline block and the inputs region are only emitted when
    the document contains them.
    """

    ty = typography_for(config)
    p = PALETTE
    accent = config.brand_color
    rgb = hex_to_rgb(accent)
    radius = "50%" if config.logo_style == "ROUND" else "4px"
    s = ty.print_scale

    css = f"""
* {{ margin: 0; padding: 0; box-sizing: border-box; }}

@page {{ size: {config.page_size}; margin: {_mm(config.page_margin_mm)}; }}

body {{
  font-family: {FONT_STACK};
  line-height: 1.3;
  color: {p.text_primary};
  background: #ffffff;
  font-size: {_px(ty.body)};
}}

.header {{
  display: flex;
  justify-content: space-between;
  align-items: center;
  margin-bottom: {_mm(ty.gap * 2)};
  padding-bottom: {_mm(ty.gap)};
  border-bottom: 2px solid {accent};
}}
.brand-section {{ display: flex; align-items: center; gap: 8px; }}
.logo {{ width: {_px(ty.logo)}; height: {_px(ty.logo)}; border-radius: {radius}; }}
.brand-title {{
  font-size: {_px(ty.brand)};
  font-weight: bold;
  color: {accent};
  text-transform: uppercase;
  letter-spacing: 1px;
}}
.date-section {{ text-align: right; font-size: {_px(ty.body)}; color: {p.muted}; }}

.main-title {{
  text-align: center;
  font-size: {_px(ty.title)};
  font-weight: bold;
  margin-bottom: {_mm(ty.gap * 2)};
  text-transform: uppercase;
  letter-spacing: 1px;
  color: {p.accent_dark};
}}

.main-content {{
  display: grid;
  grid-template-columns: repeat({config.columns}, 1fr);
  gap: {_mm(ty.gap)};
}}
.section {{
  margin-bottom: {_mm(ty.gap)};
  border: 1px solid {p.divider};
  border-radius: 3px;
  overflow: hidden;
}}
.section-header {{
  background: {p.section_bg};
  padding: {_mm(ty.pad)} {_mm(ty.pad + 0.5)};
  border-bottom: 1px solid {p.divider};
}}
.section-title {{
  font-size: {_px(ty.section_title)};
  font-weight: bold;
  color: {p.accent_dark};
  text-transform: uppercase;
  letter-spacing: 0.5px;
}}
.section-content {{ padding: {_mm(ty.pad)} {_mm(ty.pad + 0.5)}; background: #fff; }}

.data-table {{ width: 100%; border-collapse: collapse; font-size: {_px(ty.table)}; }}
.data-table tr {{ border-bottom: 1px solid {p.row_divider}; }}
.data-table tr:last-child {{ border-bottom: none; }}
.data-table tr.highlighted-row {{ background: {p.highlight_bg}; font-weight: bold; }}
.table-label {{ padding: 1mm 1.5mm; color: {p.text_label}; font-size: {_px(ty.table)}; width: 65%; }}
.table-value {{
  padding: 1mm 1.5mm;
  color: {accent};
  font-weight: 600;
  font-size: {_px(ty.table)};
  text-align: right;
  width: 35%;
}}
.highlighted-row .table-label {{ color: {p.accent_dark}; font-weight: bold; }}
.highlighted-row .table-value {{ color: {p.accent_deep}; font-weight: bold; }}

.watermark {{
  position: fixed;
  top: 50%;
  left: 50%;
  transform: translate(-50%, -50%) rotate(-45deg);
  font-size: {_px(ty.watermark)};
  color: rgba({rgb}, 0.08);
  font-weight: bold;
  z-index: -1;
  pointer-events: none;
}}

.footer-note {{
  text-align: center;
  margin-top: {_mm(ty.gap)};
  padding: 2mm;
  background: {p.panel_bg};
  border-radius: 4px;
  border: 1px solid {p.divider};
}}
.footer-text {{ font-size: {_px(ty.footer)}; color: {p.muted}; font-weight: 500; }}
"""

    if with_headline:
        css += f"""
.final-results-section {{
  margin-bottom: {_mm(ty.gap + 1)};
  border: 2px solid {accent};
  border-radius: 4px;
  overflow: hidden;
  background: {p.panel_bg};
}}
.final-results-header {{ background: {accent}; padding: 2mm 3mm; text-align: center; }}
.final-results-title {{
  font-size: {_px(ty.headline_title)};
  font-weight: bold;
  color: white;
  text-transform: uppercase;
  letter-spacing: 0.5px;
}}
.final-results-content {{ padding: 2mm; background: white; }}
.final-results-grid {{
  display: grid;
  grid-template-columns: repeat({config.final_results_columns}, 1fr);
  gap: 1mm;
}}
.final-result-item {{ padding: {_mm(ty.pad)}; background: {p.highlight_bg}; border-radius: 3px; text-align: center; }}
.final-result-label {{ font-size: {_px(ty.headline_label)}; color: {p.accent_dark}; font-weight: 600; margin-bottom: 1mm; }}
.final-result-value {{ font-size: {_px(ty.headline_value)}; color: {accent}; font-weight: bold; }}
"""

    if with_inputs:
        css += f"""
.inputs-section {{ margin-top: {_mm(ty.gap - 1)}; }}
.inputs-title {{
  font-size: {_px(ty.section_title)};
  font-weight: bold;
  color: {p.accent_dark};
  text-transform: uppercase;
  margin-bottom: 1mm;
}}
.inputs-grid {{
  display: grid;
  grid-template-columns: repeat({config.input_columns}, 1fr);
  gap: {_mm(ty.gap - 1)};
}}
.input-group {{ border: 1px solid {p.divider}; border-radius: 3px; overflow: hidden; }}
.input-group-header {{ background: {p.panel_bg}; padding: 1mm {_mm(ty.pad + 0.5)}; border-bottom: 1px solid {p.divider}; }}
.input-group-title {{ font-size: {_px(ty.input_title)}; font-weight: bold; color: {p.accent_dark}; text-transform: uppercase; }}
.input-group-content {{ padding: 1mm {_mm(ty.pad + 0.5)}; background: white; }}
"""

    css += f"""
@media print {{
  body {{ font-size: {_px(ty.body * s)}; -webkit-print-color-adjust: exact; print-color-adjust: exact; }}
  .brand-title {{ font-size: {_px(ty.brand * s)}; }}
  .main-title {{ font-size: {_px(ty.title * s)}; }}
  .section-title {{ font-size: {_px(ty.section_title * s)}; }}
  .table-label, .table-value {{ font-size: {_px(ty.table * s)}; }}
  .main-content {{ gap: {_mm(ty.gap * s)}; }}
  .section {{ break-inside: avoid; page-break-inside: avoid; }}
  .watermark {{ display: block; color: rgba({rgb}, 0.05); }}
"""
    if with_headline:
        css += f"""  .final-result-label {{ font-size: {_px(ty.headline_label * s)}; }}
  .final-result-value {{ font-size: {_px(ty.headline_value * s)}; }}
"""
    if with_inputs:
        css += f"""  .input-group-title {{ font-size: {_px(ty.input_title * s)}; }}
  .inputs-grid {{ gap: {_mm((ty.gap - 1) * s)}; }}
"""
    css += "}\n"
    return css

from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field


class ReportConfig(BaseModel):
    """Layout and branding options for the calculation report."""

    density: Literal["COMPACT", "STANDARD"] = "COMPACT"

    # Grid column counts per region
    columns: Literal[2, 3, 4] = 2
    final_results_columns: Literal[2, 3, 4] = 2
    input_columns: Literal[2, 3, 4] = 3

    logo_style: Literal["SQUARE", "ROUND"] = "SQUARE"
    logo_path: Optional[Path] = Field(default=None, description="PNG embedded instead of the generated badge")

    brand_name: str = "Enzo CoolCalc"
    brand_initial: str = Field(default="E", min_length=1, max_length=2)
    brand_color: str = Field(default="#2563eb", pattern=r"^#[0-9a-fA-F]{6}$")
    watermark_text: str = "EXPO"
    footer_text: str = "Professional Heat Load Calculations - Powered by Enzo"
    headline_title: str = "Final Results"
    inputs_title: str = "Input Parameters"

    # Page geometry handed to the PDF engine through @page
    page_size: str = "A4"
    page_margin_mm: float = 10.0

    output_dir: Path = Path("./out")
    file_name_template: str = "{title}__{date}.pdf"
    override_file_name: Optional[str] = Field(default=None, description="Optional explicit output file name")

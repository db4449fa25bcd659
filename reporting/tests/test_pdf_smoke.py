from __future__ import annotations

import asyncio
from datetime import datetime
from pathlib import Path

import pytest

from reporting.engines import WeasyPrintEngine
from reporting.renderer import render_report_html


def _weasyprint_present() -> bool:
    try:
        import weasyprint  # noqa: F401
    except (ImportError, OSError):
        return False
    return True


def test_generate_pdf_smoke(tmp_path: Path):
    if not _weasyprint_present():
        pytest.skip("WeasyPrint or its system libraries are not installed")
    from pypdf import PdfReader

    sample = {
        "title": "Cooling Load",
        "subtitle": "",
        "finalResults": [{"label": "Total Load", "value": "4.2", "unit": "kW"}],
        "sections": [
            {
                "title": "Zone A",
                "items": [
                    {"label": "Sensible Heat", "value": "1200", "unit": "W", "isHighlighted": True},
                    {"label": "Latent Heat", "value": "300", "unit": "W"},
                ],
            }
        ],
        "inputs": [{"title": "Room", "items": [{"label": "Area", "value": "24", "unit": "m2"}]}],
    }
    html = render_report_html(sample, generated_at=datetime(2026, 1, 16))

    engine = WeasyPrintEngine(output_dir=tmp_path)
    pdf_path = asyncio.run(engine.render_to_file(html, "cooling.pdf"))

    assert pdf_path == tmp_path / "cooling.pdf"
    reader = PdfReader(str(pdf_path))
    text = "\n".join(page.extract_text() or "" for page in reader.pages)
    assert "Sensible Heat" in text
    assert "1200 W" in text

    # A4 in points
    box = reader.pages[0].mediabox
    assert round(float(box.width)) == 595
    assert round(float(box.height)) == 842


def test_engine_uses_fresh_directory_per_call(monkeypatch):
    written = []
    monkeypatch.setattr("reporting.engines.html_to_pdf_bytes", lambda html, base_url=None: b"%PDF-1.7")

    engine = WeasyPrintEngine()
    for _ in range(2):
        path = asyncio.run(engine.render_to_file("<html></html>", "same.pdf"))
        written.append(path)

    assert written[0] != written[1]
    assert all(p.read_bytes() == b"%PDF-1.7" for p in written)


def test_fixed_output_dir_never_overwrites(tmp_path: Path, monkeypatch):
    monkeypatch.setattr("reporting.engines.html_to_pdf_bytes", lambda html, base_url=None: html.encode("utf-8"))
    engine = WeasyPrintEngine(output_dir=tmp_path)

    async def both():
        return await asyncio.gather(
            engine.render_to_file("first", "Cooling_Load__2026-01-16.pdf"),
            engine.render_to_file("second", "Cooling_Load__2026-01-16.pdf"),
        )

    paths = asyncio.run(both())

    assert sorted(p.name for p in paths) == ["Cooling_Load__2026-01-16-2.pdf", "Cooling_Load__2026-01-16.pdf"]
    assert sorted(p.read_bytes() for p in paths) == [b"first", b"second"]


def test_render_to_bytes_leaves_no_files(tmp_path: Path, monkeypatch):
    monkeypatch.setattr("reporting.engines.html_to_pdf_bytes", lambda html, base_url=None: b"%PDF-1.7")
    monkeypatch.setattr("tempfile.tempdir", str(tmp_path))

    assert asyncio.run(WeasyPrintEngine().render_to_bytes("<html></html>")) == b"%PDF-1.7"
    assert list(tmp_path.iterdir()) == []

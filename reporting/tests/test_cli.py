from __future__ import annotations

import json
from pathlib import Path

import pytest

from reporting import cli


def _write_payload(tmp_path: Path, payload: dict) -> Path:
    path = tmp_path / "payload.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_html_only(tmp_path: Path, capsys):
    src = _write_payload(
        tmp_path,
        {"title": "Cooling Load", "sections": [{"title": "Zone A", "items": [{"label": "Q", "value": "1", "unit": "W"}]}]},
    )
    out_dir = tmp_path / "out"

    assert cli.main(["--input", str(src), "--out", str(out_dir), "--html-only", "--columns", "3"]) == 0

    printed = Path(capsys.readouterr().out.strip())
    assert printed.parent == out_dir
    assert printed.suffix == ".html"
    html = printed.read_text(encoding="utf-8")
    assert "Zone A" in html
    assert "repeat(3, 1fr)" in html


def test_invalid_payload_exits_with_error(tmp_path: Path):
    src = _write_payload(tmp_path, {"title": "No sections"})
    with pytest.raises(SystemExit) as exc:
        cli.main(["--input", str(src), "--html-only"])
    assert exc.value.code == 1


def test_export_failure_returns_nonzero(tmp_path: Path, monkeypatch):
    class _Broken:
        def __init__(self, *args, **kwargs):
            pass

        async def render_to_file(self, html, file_name):
            raise RuntimeError("no engine")

    monkeypatch.setattr(cli, "WeasyPrintEngine", _Broken)
    src = _write_payload(tmp_path, {"title": "T", "sections": []})
    assert cli.main(["--input", str(src), "--out", str(tmp_path)]) == 1


def test_export_to_outbox(tmp_path: Path, monkeypatch, capsys):
    class _FakeEngine:
        def __init__(self, output_dir=None, base_url=None):
            self.output_dir = output_dir

        async def render_to_file(self, html, file_name):
            self.output_dir.mkdir(parents=True, exist_ok=True)
            path = self.output_dir / file_name
            path.write_bytes(b"%PDF-1.7")
            return path

    monkeypatch.setattr(cli, "WeasyPrintEngine", _FakeEngine)
    src = _write_payload(tmp_path, {"title": "T", "sections": []})
    outbox = tmp_path / "outbox"

    code = cli.main(["--input", str(src), "--out", str(tmp_path / "pdf"), "--share", "directory", "--outbox", str(outbox)])

    assert code == 0
    printed = Path(capsys.readouterr().out.strip())
    assert (outbox / printed.name).exists()

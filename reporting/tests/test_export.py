from __future__ import annotations

import asyncio
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from reporting.export import (
    FAILURE_MESSAGE,
    UNAVAILABLE_MESSAGE,
    ExportFailure,
    ExportUnavailable,
    RecordingNotifier,
    export_report,
)
from reporting.sharing import ShareRequest

NOW = datetime(2026, 1, 16, 10, 0, 0)

PAYLOAD = {
    "title": "Cooling Load",
    "subtitle": "",
    "sections": [{"title": "Zone A", "items": [{"label": "Sensible Heat", "value": "1200", "unit": "W"}]}],
}


class FakeEngine:
    def __init__(self, tmp_path: Path, fail: bool = False):
        self.tmp_path = tmp_path
        self.fail = fail
        self.calls: List[tuple[str, str]] = []

    async def render_to_file(self, html: str, file_name: str) -> Path:
        self.calls.append((html, file_name))
        if self.fail:
            raise OSError("disk full")
        path = self.tmp_path / file_name
        path.write_bytes(b"%PDF-1.7 fake")
        return path


class FakeShare:
    def __init__(self, available: bool = True, error: Optional[Exception] = None):
        self.available = available
        self.error = error
        self.requests: List[ShareRequest] = []

    async def is_available(self) -> bool:
        return self.available

    async def share(self, request: ShareRequest) -> None:
        if self.error is not None:
            raise self.error
        self.requests.append(request)


def _run(engine, share, notifier, payload=PAYLOAD):
    return asyncio.run(export_report(payload, engine=engine, share=share, notifier=notifier, clock=lambda: NOW))


def test_export_shares_pdf(tmp_path: Path):
    engine, share, notifier = FakeEngine(tmp_path), FakeShare(), RecordingNotifier()
    result = _run(engine, share, notifier)

    assert result.ok
    assert result.error is None
    assert result.path == tmp_path / "Cooling_Load__2026-01-16.pdf"
    assert notifier.alerts == []

    html, file_name = engine.calls[0]
    assert "Sensible Heat" in html
    assert "16 Jan 2026" in html
    assert file_name == "Cooling_Load__2026-01-16.pdf"

    (request,) = share.requests
    assert request.path == result.path
    assert request.mime_type == "application/pdf"
    assert request.dialog_title == "Share Cooling Load"
    assert request.uti == "com.adobe.pdf"


def test_dialog_title_uses_raw_title(tmp_path: Path):
    share = FakeShare()
    payload = dict(PAYLOAD, title="Heat & Cool")
    _run(FakeEngine(tmp_path), share, RecordingNotifier(), payload)
    assert share.requests[0].dialog_title == "Share Heat & Cool"


def test_share_unavailable_is_distinct_notice(tmp_path: Path):
    share, notifier = FakeShare(available=False), RecordingNotifier()
    result = _run(FakeEngine(tmp_path), share, notifier)

    assert not result.ok
    assert isinstance(result.error, ExportUnavailable)
    assert result.path is not None and result.path.exists()
    assert notifier.alerts == [("Error", UNAVAILABLE_MESSAGE)]
    assert share.requests == []


def test_engine_failure_gives_one_generic_notice(tmp_path: Path):
    share, notifier = FakeShare(), RecordingNotifier()
    result = _run(FakeEngine(tmp_path, fail=True), share, notifier)

    assert not result.ok
    assert isinstance(result.error, ExportFailure)
    assert isinstance(result.error.__cause__, OSError)
    assert notifier.alerts == [("Error", FAILURE_MESSAGE)]
    assert share.requests == []


def test_share_failure_gives_same_generic_notice(tmp_path: Path):
    notifier = RecordingNotifier()
    result = _run(FakeEngine(tmp_path), FakeShare(error=RuntimeError("S3 upload failed")), notifier)

    assert isinstance(result.error, ExportFailure)
    assert isinstance(result.error.__cause__, RuntimeError)
    assert notifier.alerts == [("Error", FAILURE_MESSAGE)]


def test_invalid_payload_is_contained(tmp_path: Path):
    engine, notifier = FakeEngine(tmp_path), RecordingNotifier()
    result = _run(engine, FakeShare(), notifier, payload={"title": "No sections"})

    assert isinstance(result.error, ExportFailure)
    assert engine.calls == []
    assert notifier.alerts == [("Error", FAILURE_MESSAGE)]


def test_without_share_target_keeps_file(tmp_path: Path):
    notifier = RecordingNotifier()
    result = _run(FakeEngine(tmp_path), None, notifier)

    assert result.ok
    assert result.path.exists()
    assert notifier.alerts == []


def test_concurrent_exports_are_independent(tmp_path: Path):
    share = FakeShare()

    async def both():
        a = export_report(dict(PAYLOAD, title="Zone A"), engine=FakeEngine(tmp_path), share=share, clock=lambda: NOW)
        b = export_report(dict(PAYLOAD, title="Zone B"), engine=FakeEngine(tmp_path), share=share, clock=lambda: NOW)
        return await asyncio.gather(a, b)

    ra, rb = asyncio.run(both())
    assert ra.ok and rb.ok
    assert ra.path != rb.path
    assert sorted(r.dialog_title for r in share.requests) == ["Share Zone A", "Share Zone B"]

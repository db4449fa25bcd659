from __future__ import annotations
import datetime as dt
import tempfile
from functools import lru_cache
from pathlib import Path
from typing import Callable, Iterator, Literal, Optional
from urllib.parse import quote

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import HTMLResponse, Response

from reporting.config import ReportConfig
from reporting.engines import PdfEngine, WeasyPrintEngine
from reporting.export import RecordingNotifier, export_report
from reporting.renderer import load_config_from_yaml, render_report_html, report_file_name
from reporting.sharing import ShareTarget, build_share_target
from schemas import ExportData, ExportNotice, ExportOut, ReportRequest
from settings import (
    EMAIL_TO,
    REPORT_CONFIG_PATH,
    REPORT_OUTPUT_DIR,
    S3_BUCKET,
    S3_PREFIX,
    SHARE_OUTBOX_DIR,
    SHARE_TARGET,
)


router = APIRouter(prefix="/api")


# --------------------- Dependencies ---------------------
@lru_cache()
def _base_config() -> ReportConfig:
    if REPORT_CONFIG_PATH is not None:
        return load_config_from_yaml(REPORT_CONFIG_PATH)
    return ReportConfig()


def get_report_config(
    density: Optional[Literal["COMPACT", "STANDARD"]] = Query(default=None, description="Layout density override"),
    columns: Optional[int] = Query(default=None, ge=2, le=4, description="Output grid columns override"),
) -> ReportConfig:
    overrides = {}
    if density is not None:
        overrides["density"] = density
    if columns is not None:
        overrides["columns"] = columns
    return _base_config().model_copy(update=overrides)


def get_engine() -> Iterator[PdfEngine]:
    """Engine for one request; without REPORT_OUTPUT_DIR its files live only as long as the request."""
    if REPORT_OUTPUT_DIR is not None:
        yield WeasyPrintEngine(output_dir=REPORT_OUTPUT_DIR)
        return
    with tempfile.TemporaryDirectory(prefix="report-") as tmp:
        yield WeasyPrintEngine(output_dir=Path(tmp))


def get_share_target() -> Optional[ShareTarget]:
    return build_share_target(
        SHARE_TARGET,
        outbox_dir=SHARE_OUTBOX_DIR,
        s3_bucket=S3_BUCKET or None,
        s3_prefix=S3_PREFIX,
        email_to=EMAIL_TO or None,
    )


def get_clock() -> Callable[[], dt.datetime]:
    return dt.datetime.now


def _content_disposition(file_name: str) -> str:
    # header values go out as latin-1; RFC 6266 carries the real name in filename*
    fallback = file_name.encode("ascii", "replace").decode("ascii").replace("?", "_")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(file_name)}"


_EXAMPLES = {"sample": {"summary": "Sample", "value": ReportRequest.model_config["json_schema_extra"]["examples"][0]}}


# --------------- Reports -----------------
@router.post("/reports/html", response_class=HTMLResponse, tags=["Reports"], summary="Render the report as a printable HTML document")
def report_html(
    payload: ReportRequest = Body(..., openapi_examples=_EXAMPLES),
    config: ReportConfig = Depends(get_report_config),
    clock: Callable[[], dt.datetime] = Depends(get_clock),
) -> HTMLResponse:
    return HTMLResponse(render_report_html(payload, config, generated_at=clock()))


@router.post(
    "/reports/pdf",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}}},
    tags=["Reports"],
    summary="Render the report as an A4 PDF",
)
async def report_pdf(
    payload: ReportRequest = Body(..., openapi_examples=_EXAMPLES),
    config: ReportConfig = Depends(get_report_config),
    engine: PdfEngine = Depends(get_engine),
    clock: Callable[[], dt.datetime] = Depends(get_clock),
) -> Response:
    now = clock()
    file_name = report_file_name(payload, config, now)
    pdf = await engine.render_to_bytes(render_report_html(payload, config, generated_at=now))
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": _content_disposition(file_name)},
    )


@router.post("/reports/export", response_model=ExportOut, tags=["Reports"], summary="Render the report to PDF and hand it to the configured share target")
async def report_export(
    payload: ReportRequest = Body(..., openapi_examples=_EXAMPLES),
    config: ReportConfig = Depends(get_report_config),
    engine: PdfEngine = Depends(get_engine),
    share: Optional[ShareTarget] = Depends(get_share_target),
    clock: Callable[[], dt.datetime] = Depends(get_clock),
) -> ExportOut:
    notifier = RecordingNotifier()
    result = await export_report(payload, engine=engine, share=share, notifier=notifier, config=config, clock=clock)
    return ExportOut(
        data=ExportData(
            ok=result.ok,
            fileName=result.path.name if result.path else None,
            notices=[ExportNotice(title=t, message=m) for t, m in notifier.alerts],
        )
    )

"""Render a report, turn it into a PDF and hand the file to a share target.

Failures never escape :func:`export_report`; they come back inside the
:class:`ExportResult` and the user sees exactly one notice.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple, Union

from .config import ReportConfig
from .engines import PdfEngine
from .renderer import coerce_payload, render_report_html, report_file_name
from .schema import ReportPayload
from .sharing import PDF_MIME_TYPE, PDF_UTI, ShareRequest, ShareTarget

logger = logging.getLogger(__name__)

ALERT_TITLE = "Error"
UNAVAILABLE_MESSAGE = "Sharing is not available on this device"
FAILURE_MESSAGE = "Failed to generate PDF. Please try again."


class ExportError(Exception):
    """Base class for export problems reported back to the caller."""


class ExportUnavailable(ExportError):
    """The share target cannot take the file on this device."""


class ExportFailure(ExportError):
    """PDF generation or sharing raised; the original error is the cause."""


class Notifier(Protocol):
    def alert(self, title: str, message: str) -> None: ...


class LoggingNotifier:
    def alert(self, title: str, message: str) -> None:
        logger.warning("%s: %s", title, message)


@dataclass
class RecordingNotifier:
    alerts: List[Tuple[str, str]] = field(default_factory=list)

    def alert(self, title: str, message: str) -> None:
        self.alerts.append((title, message))


@dataclass(frozen=True)
class ExportResult:
    ok: bool
    path: Optional[Path] = None
    error: Optional[ExportError] = None


class ReportExporter:
    def __init__(
        self,
        engine: PdfEngine,
        share: Optional[ShareTarget],
        notifier: Optional[Notifier] = None,
        config: Optional[ReportConfig] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.engine = engine
        self.share = share
        self.notifier = notifier or LoggingNotifier()
        self.config = config or ReportConfig()
        self.clock = clock or datetime.now

    async def export(self, payload: Union[ReportPayload, Dict[str, Any]]) -> ExportResult:
        try:
            data = coerce_payload(payload)
            generated_at = self.clock()
            html = render_report_html(data, self.config, generated_at=generated_at)

            path = await self.engine.render_to_file(html, report_file_name(data, self.config, generated_at))

            if self.share is None:
                return ExportResult(ok=True, path=path)

            if not await self.share.is_available():
                logger.info("Share target %s unavailable for %s", type(self.share).__name__, path)
                self.notifier.alert(ALERT_TITLE, UNAVAILABLE_MESSAGE)
                return ExportResult(ok=False, path=path, error=ExportUnavailable(UNAVAILABLE_MESSAGE))

            await self.share.share(
                ShareRequest(
                    path=path,
                    mime_type=PDF_MIME_TYPE,
                    dialog_title=f"Share {data.title}",
                    uti=PDF_UTI,
                )
            )
        except Exception as exc:
            logger.exception("Error generating PDF")
            self.notifier.alert(ALERT_TITLE, FAILURE_MESSAGE)
            failure = ExportFailure(FAILURE_MESSAGE)
            failure.__cause__ = exc
            return ExportResult(ok=False, error=failure)

        return ExportResult(ok=True, path=path)


async def export_report(
    payload: Union[ReportPayload, Dict[str, Any]],
    *,
    engine: PdfEngine,
    share: Optional[ShareTarget],
    notifier: Optional[Notifier] = None,
    config: Optional[ReportConfig] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> ExportResult:
    """Public API: render, convert to PDF and share one report."""

    exporter = ReportExporter(engine, share, notifier=notifier, config=config, clock=clock)
    return await exporter.export(payload)

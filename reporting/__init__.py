"""Calculation report rendering (HTML) and PDF export."""

from .config import ReportConfig
from .export import ExportFailure, ExportResult, ExportUnavailable, export_report
from .renderer import render_report_html
from .schema import ReportDataError, ReportPayload

__all__ = [
    "ExportFailure",
    "ExportResult",
    "ExportUnavailable",
    "ReportConfig",
    "ReportDataError",
    "ReportPayload",
    "export_report",
    "render_report_html",
]

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from html import escape

from .config import ReportConfig
from .logo import logo_data_uri


@dataclass(frozen=True)
class LayoutContext:
    config: ReportConfig
    report_title: str
    date_label: str


def fmt_date(value: datetime | date) -> str:
    d = value.date() if isinstance(value, datetime) else value
    return f"{d.day} {d.strftime('%b')} {d.year}"


def make_context(config: ReportConfig, report_title: str, generated_at: datetime) -> LayoutContext:
    return LayoutContext(config=config, report_title=report_title, date_label=fmt_date(generated_at))


def header_html(ctx: LayoutContext) -> str:
    cfg = ctx.config
    return (
        '<div class="header">'
        '<div class="brand-section">'
        f'<img class="logo" src="{logo_data_uri(cfg)}" alt="{escape(cfg.brand_initial)}">'
        f'<div class="brand-title">{escape(cfg.brand_name)}</div>'
        "</div>"
        f'<div class="date-section">{escape(ctx.date_label)}</div>'
        "</div>"
    )


def footer_html(ctx: LayoutContext) -> str:
    return f'<div class="footer-note"><div class="footer-text">{escape(ctx.config.footer_text)}</div></div>'


def wrap_document(ctx: LayoutContext, css: str, body: str) -> str:
    """Place the body between the fixed shell pieces: watermark, header, title and footer."""

    title = escape(ctx.report_title)
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        "<head>\n"
        '<meta charset="utf-8">\n'
        f"<title>{title}</title>\n"
        f"<style>{css}</style>\n"
        "</head>\n"
        "<body>\n"
        f'<div class="watermark">{escape(ctx.config.watermark_text)}</div>\n'
        f"{header_html(ctx)}\n"
        f'<div class="main-title">{title}</div>\n'
        f"{body}\n"
        f"{footer_html(ctx)}\n"
        "</body>\n"
        "</html>\n"
    )

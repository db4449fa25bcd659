from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError

from .components import headline_block, inputs_block, section_block
from .config import ReportConfig
from .layout import make_context, wrap_document
from .schema import ReportDataError, ReportPayload
from .styles import build_stylesheet

logger = logging.getLogger(__name__)


def coerce_payload(payload: Union[ReportPayload, Dict[str, Any]]) -> ReportPayload:
    if isinstance(payload, ReportPayload):
        return payload
    try:
        return ReportPayload.model_validate(payload)
    except ValidationError as exc:
        raise ReportDataError(f"Invalid report payload: {exc}") from exc


def render_report_html(
    payload: Union[ReportPayload, Dict[str, Any]],
    config: Optional[ReportConfig] = None,
    *,
    generated_at: datetime,
) -> str:
    """Public API: turn a report payload into a self-contained HTML document.

    The result depends only on the arguments; ``generated_at`` supplies the
    date shown in the header.
    """

    data = coerce_payload(payload)
    config = config or ReportConfig()

    with_headline = bool(data.finalResults)
    with_inputs = data.inputs is not None

    # Region order STRICT: headline, outputs, inputs
    parts = []
    if with_headline:
        parts.append(headline_block(data.finalResults, config.headline_title))
    parts.append('<div class="main-content">' + "".join(section_block(s) for s in data.sections) + "</div>")
    if with_inputs:
        parts.append(inputs_block(data.inputs, config.inputs_title))

    css = build_stylesheet(config, with_headline=with_headline, with_inputs=with_inputs)
    ctx = make_context(config, data.title, generated_at)
    html = wrap_document(ctx, css, "\n".join(parts))

    logger.debug(
        "Rendered report %r: %d section(s), headline=%s, inputs=%s, %d bytes",
        data.title,
        len(data.sections),
        with_headline,
        with_inputs,
        len(html),
    )
    return html


def _sanitize_filename(name: str) -> str:
    invalid = '<>:/\\|?*"'
    return "".join("-" if ch in invalid else ch for ch in name).strip() or "report"


def report_file_name(payload: ReportPayload, config: ReportConfig, generated_at: datetime) -> str:
    if config.override_file_name:
        file_name = config.override_file_name
    else:
        file_name = config.file_name_template.format(
            title="_".join(payload.title.split()),
            date=generated_at.date().isoformat(),
        )
    file_name = _sanitize_filename(file_name)
    if not file_name.lower().endswith(".pdf"):
        file_name += ".pdf"
    return file_name


def load_config_from_yaml(path: Path) -> ReportConfig:
    raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return ReportConfig.model_validate(raw)

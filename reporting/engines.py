from __future__ import annotations

import asyncio
import logging
import tempfile
from pathlib import Path
from typing import BinaryIO, Optional, Protocol, Tuple

logger = logging.getLogger(__name__)


class PdfEngine(Protocol):
    async def render_to_file(self, html: str, file_name: str) -> Path: ...

    async def render_to_bytes(self, html: str) -> bytes: ...


def html_to_pdf_bytes(html: str, base_url: Optional[str] = None) -> bytes:
    """Convert HTML to PDF bytes using WeasyPrint."""
    try:
        from weasyprint import HTML  # type: ignore
    except (ImportError, OSError) as exc:
        raise RuntimeError(
            "PDF export requires WeasyPrint. Install with: 'pip install weasyprint' "
            "and ensure system libraries (pango, harfbuzz) are present."
        ) from exc
    return HTML(string=html, base_url=base_url or ".").write_pdf()


def _open_unique(directory: Path, file_name: str) -> Tuple[Path, BinaryIO]:
    """Create ``file_name`` in ``directory``, or ``<stem>-2<suffix>``, ``-3``... if taken.

    Exclusive creation keeps two concurrent calls off the same path.
    """
    path = directory / file_name
    n = 1
    while True:
        try:
            return path, path.open("xb")
        except FileExistsError:
            n += 1
            path = directory / f"{Path(file_name).stem}-{n}{Path(file_name).suffix}"


class WeasyPrintEngine:
    """Renders HTML into a PDF file.

    Without ``output_dir`` every call writes into its own temporary directory,
    which the caller owns. With ``output_dir`` a name already on disk gets a
    numeric suffix instead of being overwritten.
    """

    def __init__(self, output_dir: Optional[Path] = None, base_url: Optional[str] = None):
        self.output_dir = output_dir
        self.base_url = base_url

    def _target_dir(self) -> Path:
        if self.output_dir is None:
            return Path(tempfile.mkdtemp(prefix="report-"))
        self.output_dir.mkdir(parents=True, exist_ok=True)
        return self.output_dir

    def _write(self, html: str, file_name: str) -> Path:
        pdf = html_to_pdf_bytes(html, self.base_url)
        out_path, fh = _open_unique(self._target_dir(), file_name)
        with fh:
            fh.write(pdf)
        logger.info("PDF written to %s (%d bytes)", out_path, len(pdf))
        return out_path

    async def render_to_file(self, html: str, file_name: str) -> Path:
        return await asyncio.to_thread(self._write, html, file_name)

    async def render_to_bytes(self, html: str) -> bytes:
        return await asyncio.to_thread(html_to_pdf_bytes, html, self.base_url)

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from .config import ReportConfig
from .engines import WeasyPrintEngine
from .export import export_report
from .renderer import coerce_payload, load_config_from_yaml, render_report_html, report_file_name
from .schema import ReportDataError
from .sharing import SHARE_TARGETS, build_share_target


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Render a calculation report JSON into HTML or PDF.")
    parser.add_argument("--input", type=Path, required=True, help="Path to report payload JSON")
    parser.add_argument("--out", type=Path, default=None, help="Output directory (overrides config.output_dir)")
    parser.add_argument("--config", type=Path, default=None, help="Optional YAML config file")
    parser.add_argument("--density", choices=["COMPACT", "STANDARD"], default=None)
    parser.add_argument("--columns", type=int, choices=[2, 3, 4], default=None)
    parser.add_argument("--html-only", action="store_true", help="Write the HTML document and stop")
    parser.add_argument("--share", choices=SHARE_TARGETS, default="none", help="Where to hand the PDF")
    parser.add_argument("--outbox", type=Path, default=None, help="Outbox directory for --share directory")
    parser.add_argument("--s3-bucket", default=None)
    parser.add_argument("--email-to", default=None)
    parser.add_argument("-v", "--verbose", action="store_true")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cfg = load_config_from_yaml(args.config) if args.config else ReportConfig()
    if args.out is not None:
        cfg.output_dir = args.out
    if args.density is not None:
        cfg.density = args.density
    if args.columns is not None:
        cfg.columns = args.columns

    try:
        payload = coerce_payload(json.loads(args.input.read_text(encoding="utf-8")))
    except (ReportDataError, json.JSONDecodeError) as exc:
        parser.exit(1, f"error: {exc}\n")

    if args.html_only:
        now = datetime.now()
        html = render_report_html(payload, cfg, generated_at=now)
        cfg.output_dir.mkdir(parents=True, exist_ok=True)
        out_path = cfg.output_dir / Path(report_file_name(payload, cfg, now)).with_suffix(".html").name
        out_path.write_text(html, encoding="utf-8")
        print(str(out_path))
        return 0

    share = build_share_target(args.share, outbox_dir=args.outbox, s3_bucket=args.s3_bucket, email_to=args.email_to)
    result = asyncio.run(
        export_report(payload, engine=WeasyPrintEngine(output_dir=cfg.output_dir), share=share, config=cfg)
    )
    if not result.ok:
        return 1
    print(str(result.path))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

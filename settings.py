from __future__ import annotations
import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()


APP_NAME = os.getenv("APP_NAME", "CoolCalc Report Service")
APP_VERSION = os.getenv("APP_VERSION", "1.0.0")
DEBUG = os.getenv("DEBUG", "false").lower() in {"1","true","yes","on"}
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG" if DEBUG else "INFO").upper()

CORS_ALLOW_ORIGINS: List[str] = [o.strip() for o in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",") if o.strip()]
TRUSTED_HOSTS: List[str] = [h.strip() for h in os.getenv("TRUSTED_HOSTS", "*").split(",") if h.strip()]
GZIP_MIN_SIZE = int(os.getenv("GZIP_MIN_SIZE", "1000"))
REQUEST_LOGGING = os.getenv("REQUEST_LOGGING", "basic").lower()  # "off" | "basic" | "full"

# Rendering
REPORT_CONFIG_PATH: Optional[Path] = Path(os.environ["REPORT_CONFIG_PATH"]) if os.getenv("REPORT_CONFIG_PATH") else None
REPORT_OUTPUT_DIR: Optional[Path] = Path(os.environ["REPORT_OUTPUT_DIR"]) if os.getenv("REPORT_OUTPUT_DIR") else None

# Sharing
SHARE_TARGET = os.getenv("SHARE_TARGET", "directory").lower()  # none | desktop | directory | s3 | email
SHARE_OUTBOX_DIR = Path(os.getenv("SHARE_OUTBOX_DIR", "./outbox"))
S3_BUCKET = os.getenv("S3_BUCKET", "")
S3_PREFIX = os.getenv("S3_PREFIX", "reports")
EMAIL_TO = os.getenv("EMAIL_TO", "")

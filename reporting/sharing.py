from __future__ import annotations

import asyncio
import logging
import os
import shutil
import smtplib
import subprocess
import sys
from dataclasses import dataclass
from email.message import EmailMessage
from pathlib import Path
from typing import List, Optional, Protocol

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"
PDF_UTI = "com.adobe.pdf"


@dataclass(frozen=True)
class ShareRequest:
    path: Path
    mime_type: str = PDF_MIME_TYPE
    dialog_title: str = ""
    uti: Optional[str] = None  # platform file type identifier, used where the target understands it


class ShareTarget(Protocol):
    async def is_available(self) -> bool: ...

    async def share(self, request: ShareRequest) -> None: ...


class DesktopShare:
    """Hands the file to the platform's default viewer."""

    def _opener(self) -> Optional[List[str]]:
        if sys.platform == "darwin":
            return ["open"]
        if sys.platform.startswith("linux"):
            exe = shutil.which("xdg-open")
            return [exe] if exe else None
        return None

    async def is_available(self) -> bool:
        if sys.platform.startswith("win"):
            return hasattr(os, "startfile")
        return self._opener() is not None

    def _open(self, request: ShareRequest) -> None:
        if sys.platform.startswith("win"):
            os.startfile(str(request.path))  # type: ignore[attr-defined]
            return
        cmd = self._opener()
        if cmd is None:
            raise RuntimeError("No desktop opener found")
        subprocess.run([*cmd, str(request.path)], check=True)

    async def share(self, request: ShareRequest) -> None:
        logger.info("Opening %s (%s) with the desktop viewer", request.path, request.uti or request.mime_type)
        await asyncio.to_thread(self._open, request)


class DirectoryShare:
    """Drops the file into an outbox directory picked up by another process."""

    def __init__(self, outbox: Path):
        self.outbox = Path(outbox)

    async def is_available(self) -> bool:
        try:
            self.outbox.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.warning("Outbox %s unusable: %s", self.outbox, exc)
            return False
        return os.access(self.outbox, os.W_OK)

    async def share(self, request: ShareRequest) -> None:
        target = self.outbox / request.path.name
        await asyncio.to_thread(shutil.copy2, request.path, target)
        logger.info("Copied %s to outbox %s", request.path.name, self.outbox)


class S3Share:
    """Uploads the file to S3 with content type and server-side encryption set."""

    def __init__(
        self,
        bucket: Optional[str],
        prefix: str = "reports",
        sse: Optional[str] = "AES256",  # or "aws:kms"
        kms_key_id: Optional[str] = None,
    ):
        self.bucket = bucket
        self.prefix = prefix.strip("/")
        self.sse = sse
        self.kms_key_id = kms_key_id

    def key_for(self, path: Path) -> str:
        return f"{self.prefix}/{path.name}" if self.prefix else path.name

    async def is_available(self) -> bool:
        if not self.bucket:
            return False
        # the credential chain may hit disk or the instance metadata endpoint
        return await asyncio.to_thread(lambda: boto3.session.Session().get_credentials() is not None)

    def _upload(self, request: ShareRequest) -> None:
        extra_args = {"ContentType": request.mime_type}
        if self.sse:
            extra_args["ServerSideEncryption"] = self.sse
        if self.sse == "aws:kms" and self.kms_key_id:
            extra_args["SSEKMSKeyId"] = self.kms_key_id

        key = self.key_for(request.path)
        s3 = boto3.client("s3")
        try:
            s3.upload_file(str(request.path), self.bucket, key, ExtraArgs=extra_args)
        except (ClientError, BotoCoreError) as e:
            raise RuntimeError(f"S3 upload failed: s3://{self.bucket}/{key}") from e
        logger.info("Uploaded %s to s3://%s/%s", request.path.name, self.bucket, key)

    async def share(self, request: ShareRequest) -> None:
        await asyncio.to_thread(self._upload, request)


class EmailShare:
    """Mails the file as an attachment; SMTP settings default to the environment."""

    def __init__(
        self,
        to_email: Optional[str],
        smtp_host: Optional[str] = None,
        smtp_port: Optional[int] = None,
        smtp_user: Optional[str] = None,
        smtp_pass: Optional[str] = None,
        from_email: Optional[str] = None,
        from_name: Optional[str] = None,
    ):
        self.to_email = to_email
        self.smtp_host = smtp_host or os.getenv("SMTP_HOST", "smtp.gmail.com")
        self.smtp_port = smtp_port or int(os.getenv("SMTP_PORT", "587"))
        self.smtp_user = smtp_user if smtp_user is not None else os.getenv("SMTP_USER", "")
        self.smtp_pass = smtp_pass if smtp_pass is not None else os.getenv("SMTP_PASS", "")
        self.from_email = from_email or os.getenv("EMAIL_FROM", "") or self.smtp_user
        self.from_name = from_name if from_name is not None else os.getenv("EMAIL_FROM_NAME", "")

    async def is_available(self) -> bool:
        return bool(self.to_email and self.smtp_user and self.from_email)

    def build_message(self, request: ShareRequest) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = f"{self.from_name} <{self.from_email}>" if self.from_name else self.from_email
        msg["To"] = self.to_email
        msg["Subject"] = request.dialog_title or request.path.stem
        msg.set_content(f"{request.path.name} is attached.", subtype="plain", charset="utf-8")

        maintype, _, subtype = request.mime_type.partition("/")
        msg.add_attachment(
            request.path.read_bytes(),
            maintype=maintype,
            subtype=subtype or "octet-stream",
            filename=request.path.name,
        )
        return msg

    def _send(self, request: ShareRequest) -> None:
        msg = self.build_message(request)
        with smtplib.SMTP(self.smtp_host, self.smtp_port) as server:
            server.starttls()
            server.login(self.smtp_user, self.smtp_pass)
            server.send_message(msg)
        logger.info("Mailed %s to %s", request.path.name, self.to_email)

    async def share(self, request: ShareRequest) -> None:
        await asyncio.to_thread(self._send, request)


SHARE_TARGETS = ("none", "desktop", "directory", "s3", "email")


def build_share_target(
    name: str,
    *,
    outbox_dir: Optional[Path] = None,
    s3_bucket: Optional[str] = None,
    s3_prefix: str = "reports",
    email_to: Optional[str] = None,
) -> Optional[ShareTarget]:
    """Map a target name to a share target; ``none`` means keep the file only."""

    name = name.lower()
    if name == "none":
        return None
    if name == "desktop":
        return DesktopShare()
    if name == "directory":
        return DirectoryShare(outbox_dir or Path("./outbox"))
    if name == "s3":
        return S3Share(s3_bucket, prefix=s3_prefix)
    if name == "email":
        return EmailShare(email_to)
    raise ValueError(f"Unknown share target {name!r}; expected one of {', '.join(SHARE_TARGETS)}")

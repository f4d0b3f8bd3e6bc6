"""
Publishers - push a finished artifact to the remote file store.

The production store is only reachable over FTP. Artifacts land under a
date-partitioned path such as ``SS_DL/17102026/my-deck.pdf``; missing
directories are created on the way down.
"""

import ftplib
import logging
import shutil
from datetime import datetime
from pathlib import Path
from typing import Optional, Protocol

from src.core.config import Settings
from src.core.errors import PublishError

logger = logging.getLogger(__name__)


def build_remote_path(root: str, filename: str, now: Optional[datetime] = None) -> str:
    """``<root>/<DDMMYYYY>/<filename>``"""
    now = now or datetime.now()
    parts = [root.strip("/"), now.strftime("%d%m%Y"), filename]
    return "/".join(p for p in parts if p)


class Publisher(Protocol):
    """Stores a local file at ``remote_path``; raises PublishError on failure."""

    def publish(self, local_file: Path, remote_path: str) -> None:  # pragma: no cover - interface
        ...


class FTPPublisher:
    """Single-attempt FTP upload."""

    def __init__(
        self,
        host: str,
        user: str,
        password: str,
        port: int = 21,
        timeout: float = 10.0,
    ):
        self.host = host
        self.user = user
        self.password = password
        self.port = port
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "FTPPublisher":
        return cls(
            host=settings.ftp_host,
            user=settings.ftp_user,
            password=settings.ftp_pass,
            port=settings.ftp_port,
            timeout=settings.ftp_connect_timeout,
        )

    def _connect(self) -> ftplib.FTP:
        # The timeout applies to connect and to every later blocking socket call.
        ftp = ftplib.FTP(timeout=self.timeout)
        ftp.connect(self.host, self.port)
        try:
            ftp.login(self.user, self.password)
        except ftplib.all_errors:
            ftp.close()
            raise
        return ftp

    @staticmethod
    def _enter_directories(ftp: ftplib.FTP, directory: str) -> None:
        """``cwd`` into ``directory`` from the root, creating missing segments."""
        ftp.cwd("/")
        for segment in directory.split("/"):
            if not segment:
                continue
            try:
                ftp.cwd(segment)
            except ftplib.error_perm:
                ftp.mkd(segment)
                ftp.cwd(segment)

    def publish(self, local_file: Path, remote_path: str) -> None:
        if not self.host:
            raise PublishError("FTP upload failed: remote store is not configured")

        directory, _, filename = remote_path.rpartition("/")
        logger.info(f"Uploading {Path(local_file).name} to ftp://{self.host}:{self.port}/{remote_path}")

        try:
            ftp = self._connect()
            try:
                self._enter_directories(ftp, directory)
                with open(local_file, "rb") as fh:
                    ftp.storbinary(f"STOR {filename}", fh)
            finally:
                try:
                    ftp.quit()
                except ftplib.all_errors:
                    ftp.close()
        except ftplib.all_errors as e:
            logger.error(f"FTP upload of {remote_path} failed: {e}")
            raise PublishError(f"FTP upload failed: {e}") from e

        logger.info(f"✓ Uploaded {remote_path}")


class LocalDirectoryPublisher:
    """Copies artifacts into a local directory tree instead of a remote store."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def publish(self, local_file: Path, remote_path: str) -> None:
        destination = self.root / remote_path
        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(local_file, destination)
        except OSError as e:
            raise PublishError(f"Local publish failed: {e}") from e
        logger.info(f"✓ Saved {destination}")

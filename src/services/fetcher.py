"""
Bounded fetcher - downloads slide images in parallel under a concurrency ceiling.

Every image is normalized to an RGB JPEG in its own temporary file. A batch
either succeeds completely or leaves nothing behind: when any single fetch
fails, the files already written by its siblings are removed before the
error is raised.
"""

import asyncio
import io
import logging
import os
import tempfile
import time
from pathlib import Path
from typing import Iterable, Optional, Sequence

import aiohttp
from PIL import Image

from src.core.errors import UpstreamError
from src.models.slide import FetchedImage

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_TIMEOUT = 20.0
DEFAULT_JPEG_QUALITY = 90


class ImageFetchError(Exception):
    """A single slide image could not be fetched or decoded."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"error fetching image {url}: {reason}")
        self.url = url
        self.reason = reason


def remove_files(paths: Iterable[Optional[Path]]) -> None:
    """Delete local files, ignoring ones that are already gone."""
    for path in paths:
        if path is None:
            continue
        try:
            Path(path).unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Could not remove temporary file {path}: {e}")


class BoundedFetcher:
    """Fetches slide images with all-or-nothing semantics."""

    def __init__(
        self,
        timeout: float = DEFAULT_IMAGE_TIMEOUT,
        jpeg_quality: int = DEFAULT_JPEG_QUALITY,
        temp_dir: Optional[Path] = None,
        user_agent: Optional[str] = None,
    ):
        self.timeout = timeout
        self.jpeg_quality = jpeg_quality
        self.temp_dir = temp_dir
        self.headers = {"User-Agent": user_agent} if user_agent else {}

    async def fetch_all(self, urls: Sequence[str], max_concurrency: int) -> list[Path]:
        """
        Fetch every URL and return local JPEG paths in input order.

        Args:
            urls: Image URLs, in the order the output must follow
            max_concurrency: Maximum number of fetches in flight at once

        Returns:
            One local path per URL; ``result[i]`` holds ``urls[i]``

        Raises:
            UpstreamError: if any fetch failed; no temporary file survives
        """
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        if not urls:
            return []

        logger.info(f"Fetching {len(urls)} images (concurrency ceiling {max_concurrency})")
        start = time.time()

        semaphore = asyncio.Semaphore(max_concurrency)
        slots: list[Optional[FetchedImage]] = [None] * len(urls)

        # The semaphore is the only admission gate, so the connector is unbounded.
        connector = aiohttp.TCPConnector(limit=0)
        timeout = aiohttp.ClientTimeout(total=self.timeout)

        try:
            async with aiohttp.ClientSession(
                connector=connector, timeout=timeout, headers=self.headers
            ) as http_session:
                outcomes = await asyncio.gather(
                    *(
                        self._fetch_into_slot(http_session, semaphore, slots, i, url)
                        for i, url in enumerate(urls)
                    ),
                    return_exceptions=True,
                )
        except BaseException:
            remove_files(image.local_path for image in slots if image)
            raise

        failures = [outcome for outcome in outcomes if isinstance(outcome, BaseException)]
        if failures:
            remove_files(image.local_path for image in slots if image)
            logger.warning(f"{len(failures)}/{len(urls)} image fetches failed; discarded the batch")
            raise UpstreamError(f"Failed to fetch images: {failures[0]}")

        logger.info(f"✓ Fetched {len(urls)} images in {time.time() - start:.2f}s")
        return [image.local_path for image in slots]

    async def _fetch_into_slot(
        self,
        http_session: aiohttp.ClientSession,
        semaphore: asyncio.Semaphore,
        slots: list[Optional[FetchedImage]],
        index: int,
        url: str,
    ) -> None:
        """Fetch one image and store it at ``slots[index]``."""
        async with semaphore:
            body = await self._download(http_session, url)
            loop = asyncio.get_running_loop()
            try:
                path = await loop.run_in_executor(None, self._store_jpeg, body)
            except (OSError, ValueError, Image.DecompressionBombError) as e:
                logger.warning(f"Could not decode image {url}: {e}")
                raise ImageFetchError(url, f"cannot decode image ({e})") from e
            slots[index] = FetchedImage(source_url=url, local_path=path)

    async def _download(self, http_session: aiohttp.ClientSession, url: str) -> bytes:
        """Issue the single GET for ``url``; no retries."""
        try:
            async with http_session.get(url) as resp:
                if not 200 <= resp.status < 300:
                    logger.warning(f"Image fetch returned status {resp.status}: {url}")
                    raise ImageFetchError(url, f"status {resp.status}")
                return await resp.read()
        except asyncio.TimeoutError as e:
            logger.warning(f"Image fetch timed out after {self.timeout}s: {url}")
            raise ImageFetchError(url, f"timed out after {self.timeout:g}s") from e
        except aiohttp.ClientError as e:
            logger.warning(f"Image fetch failed: {url}: {e}")
            raise ImageFetchError(url, str(e) or type(e).__name__) from e

    def _store_jpeg(self, body: bytes) -> Path:
        """Decode ``body`` and write it as a JPEG to a fresh temporary file."""
        with Image.open(io.BytesIO(body)) as img:
            rgb = img.convert("RGB")

        fd, name = tempfile.mkstemp(prefix="slide-", suffix=".jpg", dir=self.temp_dir)
        path = Path(name)
        try:
            with os.fdopen(fd, "wb") as fh:
                rgb.save(fh, format="JPEG", quality=self.jpeg_quality)
        except BaseException:
            path.unlink(missing_ok=True)
            raise
        return path

"""
Manifest resolver - turns a presentation page into per-slide image URLs.

SlideShare renders every slide as an ``<img data-testid="vertical-slide-image">``
whose ``srcset`` lists the same slide at several widths::

    srcset="https://image.slidesharecdn.com/.../1/deck-1-320.jpg 320w,
            https://image.slidesharecdn.com/.../1/deck-1-638.jpg 638w,
            https://image.slidesharecdn.com/.../1/deck-1-2048.jpg 2048w"
"""

import asyncio
import logging
from typing import Optional
from urllib.parse import urlparse

import aiohttp
from bs4 import BeautifulSoup

from src.core.errors import InputError, NotFoundError, ParseError, UpstreamError
from src.models.slide import SlideManifest, SlideManifestEntry

logger = logging.getLogger(__name__)

SLIDE_IMAGE_SELECTOR = "img[data-testid='vertical-slide-image']"


def validate_source_url(url: str, allowed_hosts: list[str]) -> str:
    """Check that ``url`` points at a supported presentation host."""
    if not url or not url.strip():
        raise InputError("Url can't be empty")

    try:
        parsed = urlparse(url.strip())
    except ValueError as e:
        raise InputError("Invalid URL") from e

    if not parsed.scheme or not parsed.netloc:
        raise InputError("Invalid URL")

    if parsed.hostname not in allowed_hosts:
        raise InputError("Invalid SlideShare URL")

    return url.strip()


def doc_short_name(url: str) -> str:
    """
    Short document name used for the artifact file.

    SlideShare URLs look like ``/slideshow/<doc-short-name>/<numeric-id>``,
    so the name is the second-to-last path segment.
    """
    parts = urlparse(url).path.strip("/").split("/")
    if len(parts) < 2 or not parts[-2]:
        raise InputError("Invalid SlideShare URL format")
    return parts[-2]


def parse_srcset(srcset: str) -> dict[int, str]:
    """Parse ``"<url> <N>w, ..."`` into ``{N: url}``, ignoring malformed candidates."""
    resolutions: dict[int, str] = {}
    for candidate in srcset.split(","):
        parts = candidate.split()
        if len(parts) != 2:
            continue
        url, descriptor = parts
        if not descriptor.endswith("w"):
            continue
        try:
            width = int(descriptor[:-1])
        except ValueError:
            continue
        resolutions[width] = url
    return resolutions


def parse_manifest(html: str) -> SlideManifest:
    """Extract the page title and ordered slide resolutions from page HTML."""
    try:
        soup = BeautifulSoup(html, "html.parser")
    except Exception as e:
        raise ParseError("Failed to parse HTML") from e

    title_tag = soup.find("title")
    title = title_tag.get_text() if title_tag else ""

    slides = []
    for img in soup.select(SLIDE_IMAGE_SELECTOR):
        srcset = img.get("srcset")
        if not srcset:
            continue
        resolutions = parse_srcset(srcset)
        if resolutions:
            slides.append(SlideManifestEntry(resolutions=resolutions))

    if not slides:
        raise NotFoundError("No slide images found")

    return SlideManifest(title=title, slides=tuple(slides))


class ManifestResolver:
    """Fetches a presentation page and parses its slide manifest."""

    def __init__(self, timeout: float = 30.0, user_agent: Optional[str] = None):
        self.timeout = timeout
        self.headers = {"User-Agent": user_agent} if user_agent else {}

    async def fetch_page(self, page_url: str) -> str:
        """Download the page HTML."""
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        try:
            async with aiohttp.ClientSession(timeout=timeout, headers=self.headers) as http_session:
                async with http_session.get(page_url) as resp:
                    if not 200 <= resp.status < 300:
                        logger.warning(f"Presentation page returned status {resp.status}: {page_url}")
                        raise UpstreamError("Failed to fetch the presentation page")
                    return await resp.text()
        except UnicodeDecodeError as e:
            logger.warning(f"Presentation page {page_url} is not valid text: {e}")
            raise ParseError("Failed to parse HTML") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"Presentation page fetch failed for {page_url}: {e}")
            raise UpstreamError("Failed to fetch the presentation page") from e

    async def resolve(self, page_url: str) -> SlideManifest:
        """Return the slide manifest for ``page_url``."""
        html = await self.fetch_page(page_url)
        manifest = parse_manifest(html)
        logger.info(f"Resolved {len(manifest)} slides from {page_url}")
        return manifest

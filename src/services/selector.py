"""Resolution selection - picks one image URL per slide for a quality tier."""

import logging
from typing import Sequence

from src.core.errors import NotFoundError
from src.models.slide import QualityTier, SlideManifestEntry, SlideSelection

logger = logging.getLogger(__name__)


def select_resolution(
    slides: Sequence[SlideManifestEntry],
    tier: QualityTier,
) -> SlideSelection:
    """
    Project each slide onto the image URL at the tier's width.

    Slides that don't offer the width are dropped silently; only an empty
    result is an error.
    """
    width = tier.width
    urls = [url for url in (slide.url_for(width) for slide in slides) if url]

    if not urls:
        raise NotFoundError(f"No {width}px resolution slides found")

    skipped = len(slides) - len(urls)
    if skipped:
        logger.info(f"Skipped {skipped}/{len(slides)} slides without a {width}px image")

    return SlideSelection(urls=tuple(urls), thumbnail=urls[0])

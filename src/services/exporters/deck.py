"""Slide-deck exporter - one full-bleed picture slide per image."""

import logging
from pathlib import Path
from typing import Optional, Sequence

from pptx import Presentation

from src.core.errors import ExportError

from .base import temporary_artifact

logger = logging.getLogger(__name__)

# Index of the "Blank" layout in the default python-pptx template
BLANK_LAYOUT_INDEX = 6


class DeckExporter:
    """Builds a PPTX whose slides are the fetched slide images."""

    extension = "pptx"

    def __init__(self, fetch_concurrency: int = 10, temp_dir: Optional[Path] = None):
        self.fetch_concurrency = fetch_concurrency
        self.temp_dir = temp_dir

    def build(self, image_paths: Sequence[Path]) -> Path:
        """Write the deck to a temporary file and return its path."""
        prs = Presentation()
        layout = prs.slide_layouts[BLANK_LAYOUT_INDEX]

        for image_path in image_paths:
            try:
                slide = prs.slides.add_slide(layout)
                slide.shapes.add_picture(
                    str(image_path),
                    0,
                    0,
                    width=prs.slide_width,
                    height=prs.slide_height,
                )
            except Exception as e:
                raise ExportError(f"Failed to add image to slide: {e}") from e

        with temporary_artifact(".pptx", self.temp_dir) as pptx_path:
            try:
                prs.save(str(pptx_path))
            except Exception as e:
                raise ExportError(f"Failed to save PPTX: {e}") from e

        logger.info(f"Built PPTX with {len(image_paths)} slides: {pptx_path.name}")
        return pptx_path

"""
PDF exporter - one A4 page per slide image.

Each image is scaled uniformly to fit inside the page and anchored at the
top-left corner. Geometry is worked out in millimetres and converted to PDF
points only when the page is written.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

import fitz  # PyMuPDF
from PIL import Image

from src.core.errors import ExportError

from .base import temporary_artifact

logger = logging.getLogger(__name__)

A4_WIDTH_MM = 210.0
A4_HEIGHT_MM = 297.0
POINTS_PER_MM = 72 / 25.4


@dataclass(frozen=True)
class PageLayout:
    """Placement of one image on its page, in millimetres."""

    image_path: Path
    scale: float
    width_mm: float
    height_mm: float

    @property
    def rect(self) -> fitz.Rect:
        return fitz.Rect(0, 0, self.width_mm * POINTS_PER_MM, self.height_mm * POINTS_PER_MM)


def fit_to_page(
    width_px: int,
    height_px: int,
    page_width: float = A4_WIDTH_MM,
    page_height: float = A4_HEIGHT_MM,
) -> float:
    """Uniform scale factor that fits an image entirely inside the page."""
    return min(page_width / width_px, page_height / height_px)


def read_image_size(path: Path) -> tuple[int, int]:
    """Pixel dimensions from the image header, without decoding pixel data."""
    with Image.open(path) as img:
        return img.size


class PDFExporter:
    """Lays out slide images one per A4 page."""

    extension = "pdf"

    def __init__(self, fetch_concurrency: int = 25000, temp_dir: Optional[Path] = None):
        self.fetch_concurrency = fetch_concurrency
        self.temp_dir = temp_dir

    def layout(self, image_paths: Sequence[Path]) -> list[PageLayout]:
        """Compute per-page placement for ``image_paths`` in order."""
        pages = []
        for path in image_paths:
            width_px, height_px = read_image_size(path)
            scale = fit_to_page(width_px, height_px)
            pages.append(PageLayout(
                image_path=Path(path),
                scale=scale,
                width_mm=width_px * scale,
                height_mm=height_px * scale,
            ))
        return pages

    def build(self, image_paths: Sequence[Path]) -> Path:
        """Write the PDF to a temporary file and return its path."""
        if not image_paths:
            raise ExportError("No images to convert to PDF")

        try:
            pages = self.layout(image_paths)
        except OSError as e:
            raise ExportError(f"Failed to read slide image: {e}") from e

        with temporary_artifact(".pdf", self.temp_dir) as pdf_path:
            doc = fitz.open()
            try:
                for page_layout in pages:
                    page = doc.new_page(
                        width=A4_WIDTH_MM * POINTS_PER_MM,
                        height=A4_HEIGHT_MM * POINTS_PER_MM,
                    )
                    page.insert_image(page_layout.rect, filename=str(page_layout.image_path))
                doc.save(str(pdf_path))
            except (RuntimeError, ValueError, OSError) as e:
                raise ExportError(str(e)) from e
            finally:
                doc.close()

        logger.info(f"Built PDF with {len(pages)} pages: {pdf_path.name}")
        return pdf_path

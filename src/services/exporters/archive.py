"""Archive exporter - slide images stored verbatim in a ZIP file."""

import logging
import shutil
import zipfile
from pathlib import Path
from typing import Optional, Sequence

from src.core.errors import ExportError

from .base import temporary_artifact

logger = logging.getLogger(__name__)


def entry_name(index: int) -> str:
    """Archive member name for the slide at 0-based ``index``."""
    return f"image_{index + 1}.jpg"


class ArchiveExporter:
    """Packs slide JPEGs into an uncompressed ZIP archive."""

    extension = "zip"

    def __init__(self, fetch_concurrency: int = 10, temp_dir: Optional[Path] = None):
        self.fetch_concurrency = fetch_concurrency
        self.temp_dir = temp_dir

    def build(self, image_paths: Sequence[Path]) -> Path:
        """Write the archive to a temporary file and return its path."""
        with temporary_artifact(".zip", self.temp_dir) as zip_path:
            try:
                with zipfile.ZipFile(zip_path, "w", compression=zipfile.ZIP_STORED) as zf:
                    for i, image_path in enumerate(image_paths):
                        # Images are already JPEG; copy bytes as-is.
                        with open(image_path, "rb") as src, zf.open(entry_name(i), "w") as dst:
                            shutil.copyfileobj(src, dst)
            except (OSError, zipfile.BadZipFile) as e:
                raise ExportError(f"Failed to write zip archive: {e}") from e

        logger.info(f"Built ZIP with {len(image_paths)} images: {zip_path.name}")
        return zip_path

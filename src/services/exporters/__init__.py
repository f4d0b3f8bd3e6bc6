"""Exporters that turn fetched slide images into downloadable artifacts."""

from src.core.config import Settings
from src.core.errors import InputError
from src.models.conversion import ConversionType

from .archive import ArchiveExporter
from .base import Exporter, temporary_artifact
from .deck import DeckExporter
from .pdf import PageLayout, PDFExporter


def get_exporter(conversion_type: ConversionType, settings: Settings) -> Exporter:
    """Return the exporter for ``conversion_type`` configured from ``settings``."""
    if conversion_type is ConversionType.PDF:
        return PDFExporter(settings.pdf_fetch_concurrency, settings.temp_dir)
    if conversion_type is ConversionType.PPTX:
        return DeckExporter(settings.pptx_fetch_concurrency, settings.temp_dir)
    if conversion_type is ConversionType.IMAGES_ZIP:
        return ArchiveExporter(settings.zip_fetch_concurrency, settings.temp_dir)
    raise InputError("Unsupported conversion type")


__all__ = [
    "Exporter",
    "PDFExporter",
    "PageLayout",
    "DeckExporter",
    "ArchiveExporter",
    "get_exporter",
    "temporary_artifact",
]

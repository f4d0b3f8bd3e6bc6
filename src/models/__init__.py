"""Typed models for slide manifests and conversion payloads."""

from .slide import (
    FetchedImage,
    QualityTier,
    SlideManifest,
    SlideManifestEntry,
    SlideSelection,
)
from .conversion import (
    ConversionType,
    ConvertData,
    ConvertResponse,
    ErrorResponse,
    ExportResult,
)

__all__ = [
    # Slide models
    "QualityTier",
    "SlideManifestEntry",
    "SlideManifest",
    "SlideSelection",
    "FetchedImage",
    # Conversion models
    "ConversionType",
    "ExportResult",
    "ConvertData",
    "ConvertResponse",
    "ErrorResponse",
]

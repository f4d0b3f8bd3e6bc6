"""Service layer for SlideGrab."""

from .fetcher import BoundedFetcher, remove_files
from .manifest import ManifestResolver, parse_manifest
from .pipeline import ConversionPipeline, get_conversion_pipeline
from .publisher import FTPPublisher, LocalDirectoryPublisher, Publisher
from .selector import select_resolution

__all__ = [
    "BoundedFetcher",
    "remove_files",
    "ManifestResolver",
    "parse_manifest",
    "select_resolution",
    "Publisher",
    "FTPPublisher",
    "LocalDirectoryPublisher",
    "ConversionPipeline",
    "get_conversion_pipeline",
]

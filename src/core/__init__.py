"""Core configuration module for SlideGrab."""

from .config import Settings, get_settings
from .errors import (
    ExportError,
    InputError,
    NotFoundError,
    ParseError,
    PipelineError,
    PublishError,
    UpstreamError,
)
from .logging import setup_logging

__all__ = [
    "Settings",
    "get_settings",
    "setup_logging",
    "PipelineError",
    "InputError",
    "NotFoundError",
    "UpstreamError",
    "ParseError",
    "ExportError",
    "PublishError",
]

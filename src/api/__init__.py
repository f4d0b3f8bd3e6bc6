"""API routes for SlideGrab."""

from .routes import convert

__all__ = [
    "convert",
]

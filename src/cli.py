#!/usr/bin/env python3
"""
SlideGrab CLI - run one conversion without the HTTP server.

Usage:
    python -m src.cli https://www.slideshare.net/slideshow/my-deck/123456
    python -m src.cli URL --type pptx --quality sd
    python -m src.cli URL --type images_zip --output-dir ./downloads
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

from src.core import PipelineError, get_settings, setup_logging
from src.models.conversion import ConversionType
from src.models.slide import QualityTier
from src.services.pipeline import ConversionPipeline
from src.services.publisher import LocalDirectoryPublisher

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="SlideGrab - download a SlideShare presentation as PDF, PPTX or ZIP",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m src.cli URL                              # HD PDF, uploaded via FTP
  python -m src.cli URL --type pptx --quality sd     # SD PowerPoint deck
  python -m src.cli URL --output-dir ./downloads     # Keep the artifact locally
        """
    )
    parser.add_argument("url", help="SlideShare presentation URL")
    parser.add_argument(
        "--type", "-t",
        dest="conversion_type",
        choices=["pdf", "pptx", "images_zip"],
        default="pdf",
        help="Output format (default: pdf)"
    )
    parser.add_argument(
        "--quality", "-q",
        choices=["hd", "sd"],
        default="hd",
        help="Slide image quality (default: hd)"
    )
    parser.add_argument(
        "--output-dir", "-o",
        type=Path,
        help="Save the artifact under this directory instead of uploading it"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )
    return parser


async def run(
    url: str,
    conversion_type: ConversionType,
    quality: QualityTier,
    output_dir: Optional[Path] = None,
) -> str:
    """Run the pipeline once and return the JSON response body."""
    settings = get_settings()
    publisher = LocalDirectoryPublisher(output_dir) if output_dir else None
    pipeline = ConversionPipeline(settings, publisher=publisher)
    response = await pipeline.convert(url, conversion_type, quality)
    return response.model_dump_json(indent=2)


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else get_settings().log_level)

    try:
        body = asyncio.run(run(
            args.url,
            ConversionType.parse(args.conversion_type),
            QualityTier.parse(args.quality),
            output_dir=args.output_dir,
        ))
    except PipelineError as e:
        print(f"Error ({e.status_code}): {e.detail}", file=sys.stderr)
        return 1

    print(body)
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Conversion pipeline - from a presentation URL to a published artifact.

Stages run strictly in order and the first failure aborts the rest:

    validate URL -> resolve manifest -> select resolution -> fetch images
        -> export -> publish -> build response

Temporary files are removed by the stage that created them, whether or not
a later stage fails.
"""

import asyncio
import logging
import time
from datetime import datetime
from functools import lru_cache
from pathlib import Path
from typing import Callable, Optional, Sequence

from src.core.config import Settings, get_settings
from src.core.errors import ExportError, PipelineError, PublishError
from src.models.conversion import ConversionType, ConvertData, ConvertResponse, ExportResult
from src.models.slide import QualityTier

from .exporters import Exporter, get_exporter
from .fetcher import BoundedFetcher, remove_files
from .manifest import ManifestResolver, doc_short_name, validate_source_url
from .publisher import FTPPublisher, Publisher, build_remote_path
from .selector import select_resolution

logger = logging.getLogger(__name__)


class ConversionPipeline:
    """Runs one conversion request end to end."""

    def __init__(
        self,
        settings: Settings,
        resolver: Optional[ManifestResolver] = None,
        fetcher: Optional[BoundedFetcher] = None,
        publisher: Optional[Publisher] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.settings = settings
        self.resolver = resolver or ManifestResolver(
            timeout=settings.page_timeout,
            user_agent=settings.user_agent,
        )
        self.fetcher = fetcher or BoundedFetcher(
            timeout=settings.image_timeout,
            jpeg_quality=settings.jpeg_quality,
            temp_dir=settings.temp_dir,
            user_agent=settings.user_agent,
        )
        self.publisher = publisher or FTPPublisher.from_settings(settings)
        self.clock = clock

    async def convert(
        self,
        url: str,
        conversion_type: ConversionType,
        quality: QualityTier = QualityTier.HD,
    ) -> ConvertResponse:
        """
        Convert the presentation at ``url`` and publish it.

        Raises:
            PipelineError: classified failure of whichever stage broke
        """
        start = time.time()
        source_url = validate_source_url(url, self.settings.allowed_hosts)
        short_name = doc_short_name(source_url)
        exporter = get_exporter(conversion_type, self.settings)

        logger.info(f"Converting {source_url} to {conversion_type.value} ({quality.value})")

        manifest = await self.resolver.resolve(source_url)
        selection = select_resolution(manifest.slides, quality)

        filename = f"{short_name}.{exporter.extension}"
        result = await self._fetch_export_publish(selection.urls, exporter, filename)

        base = self.settings.base_url
        logger.info(
            f"✓ {conversion_type.value} for {short_name}: {len(selection.urls)} slides, "
            f"{result.size_bytes} bytes in {time.time() - start:.2f}s"
        )
        return ConvertResponse(
            message=conversion_type.success_message,
            data=ConvertData(
                thumbnail=selection.thumbnail,
                quality=quality,
                conversion_type=conversion_type,
                slides_download_link=f"{base}/{result.remote_path}",
                file_name=Path(result.remote_path).name,
                size=result.size_bytes,
                title=manifest.title,
            ),
        )

    async def _fetch_export_publish(
        self,
        urls: Sequence[str],
        exporter: Exporter,
        filename: str,
    ) -> ExportResult:
        loop = asyncio.get_running_loop()
        image_paths = await self.fetcher.fetch_all(urls, exporter.fetch_concurrency)
        try:
            artifact = await loop.run_in_executor(None, self._export, exporter, image_paths)
        finally:
            remove_files(image_paths)

        try:
            size = artifact.stat().st_size
            remote_path = build_remote_path(self.settings.remote_root, filename, self.clock())
            await loop.run_in_executor(None, self._publish, artifact, remote_path)
        finally:
            remove_files([artifact])

        return ExportResult(remote_path=remote_path, size_bytes=size)

    @staticmethod
    def _export(exporter: Exporter, image_paths: Sequence[Path]) -> Path:
        try:
            return exporter.build(image_paths)
        except PipelineError:
            raise
        except Exception as e:
            logger.exception(f"{type(exporter).__name__} failed")
            raise ExportError(str(e)) from e

    def _publish(self, artifact: Path, remote_path: str) -> None:
        try:
            self.publisher.publish(artifact, remote_path)
        except PipelineError:
            raise
        except Exception as e:
            logger.exception(f"Publishing {remote_path} failed")
            raise PublishError(f"FTP upload failed: {e}") from e


@lru_cache()
def get_conversion_pipeline() -> ConversionPipeline:
    """Get the process-wide pipeline built from the cached settings."""
    return ConversionPipeline(get_settings())

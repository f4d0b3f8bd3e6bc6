"""Shared exporter plumbing."""

import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Protocol, Sequence


class Exporter(Protocol):
    """Builds one local artifact from normalized slide images."""

    extension: str
    fetch_concurrency: int

    def build(self, image_paths: Sequence[Path]) -> Path:  # pragma: no cover - interface
        ...


@contextmanager
def temporary_artifact(suffix: str, temp_dir: Optional[Path] = None) -> Iterator[Path]:
    """
    Reserve a uniquely named artifact file.

    The file is removed if the body raises; on success ownership passes to
    the caller.
    """
    fd, name = tempfile.mkstemp(prefix="slides-", suffix=suffix, dir=temp_dir)
    os.close(fd)
    path = Path(name)
    try:
        yield path
    except BaseException:
        path.unlink(missing_ok=True)
        raise

"""Shared test helpers: synthetic images and a local image server."""
import asyncio
import io
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from aiohttp import web
from aiohttp.test_utils import TestServer
from PIL import Image


@dataclass
class FakeImage:
    """A response the local image server hands out."""
    body: bytes
    delay: float = 0.0
    status: int = 200
    content_type: str = "image/png"


def make_image_bytes(size=(64, 48), fmt="PNG", color=(200, 30, 30), mode="RGB") -> bytes:
    """Encode a solid-colour image in ``fmt``."""
    buffer = io.BytesIO()
    Image.new(mode, size, color).save(buffer, format=fmt)
    return buffer.getvalue()


def make_jpeg_file(path: Path, size=(64, 48), color=(30, 120, 200)) -> Path:
    """Write a JPEG like the ones the fetcher produces."""
    path.write_bytes(make_image_bytes(size=size, fmt="JPEG", color=color))
    return path


class ImageServer:
    """Serves ``FakeImage`` entries at ``/img/<name>`` and tracks concurrency."""

    def __init__(self, images: dict[str, FakeImage]):
        self.images = images
        self.in_flight = 0
        self.max_in_flight = 0
        self.requests: list[str] = []
        self.server: Optional[TestServer] = None

    async def handle(self, request: web.Request) -> web.StreamResponse:
        name = request.match_info["name"]
        self.requests.append(name)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            image = self.images.get(name)
            if image is None:
                return web.Response(status=404)
            if image.delay:
                await asyncio.sleep(image.delay)
            return web.Response(body=image.body, status=image.status, content_type=image.content_type)
        finally:
            self.in_flight -= 1

    def url(self, name: str) -> str:
        return str(self.server.make_url(f"/img/{name}"))


@asynccontextmanager
async def serve_images(images: dict[str, FakeImage]):
    """Run a local HTTP server for the duration of the block."""
    image_server = ImageServer(images)
    app = web.Application()
    app.router.add_get("/img/{name}", image_server.handle)
    server = TestServer(app, host="127.0.0.1")
    await server.start_server()
    image_server.server = server
    try:
        yield image_server
    finally:
        await server.close()


def list_files(directory: Path) -> list[Path]:
    """Every file left under ``directory``."""
    return sorted(p for p in directory.rglob("*") if p.is_file())

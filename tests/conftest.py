"""Shared fixtures: generated fonts, settings, asset directories and a fake font server."""

import threading
from collections.abc import Callable
from functools import lru_cache
from io import BytesIO
from pathlib import Path

import httpx
import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from fontpatch.config import FontPatchSettings, StorageConfig
from fontpatch.io import DirectoryAssetSource


@lru_cache(maxsize=None)
def _build_font(family_name: str) -> bytes:
    """Build a minimal TrueType font whose family name is ``family_name``."""
    glyph_order = [".notdef", "A"]

    fb = FontBuilder(1000, isTTF=True)
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap({ord("A"): "A"})

    glyphs = {}
    for name in glyph_order:
        pen = TTGlyphPen(None)
        pen.moveTo((100, 0))
        pen.lineTo((100, 700))
        pen.lineTo((500, 700))
        pen.lineTo((500, 0))
        pen.closePath()
        glyphs[name] = pen.glyph()
    fb.setupGlyf(glyphs)

    fb.setupHorizontalMetrics({name: (600, 100) for name in glyph_order})
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": family_name, "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=800, usWinAscent=800, usWinDescent=200)
    fb.setupPost()

    buffer = BytesIO()
    fb.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def make_font() -> Callable[[str], bytes]:
    """Factory for font file bytes with a given family name."""
    return _build_font


@pytest.fixture
def settings(tmp_path: Path) -> FontPatchSettings:
    """Settings rooted in a temporary data directory."""
    return FontPatchSettings(storage=StorageConfig(app_data_root=tmp_path / "data"))


@pytest.fixture
def assets_dir(tmp_path: Path) -> Path:
    """Empty bundled asset directory with a ``fonts/`` folder."""
    root = tmp_path / "assets"
    (root / "fonts").mkdir(parents=True)
    return root


@pytest.fixture
def asset_source(assets_dir: Path) -> DirectoryAssetSource:
    """Asset source over ``assets_dir``."""
    return DirectoryAssetSource(assets_dir)


class FontServer:
    """In-memory HTTP server for font downloads.

    Routes map a URL to ``(status_code, body)``; every request is recorded.
    """

    def __init__(self) -> None:
        self.routes: dict[str, tuple[int, bytes]] = {}
        self.failures: dict[str, Exception] = {}
        self.requests: list[httpx.Request] = []
        self._lock = threading.Lock()

    def add(self, url: str, body: bytes, status_code: int = 200) -> None:
        self.routes[url] = (status_code, body)

    def fail(self, url: str, error: Exception) -> None:
        self.failures[url] = error

    def calls_to(self, url: str) -> int:
        return sum(1 for request in self.requests if str(request.url) == url)

    def handler(self, request: httpx.Request) -> httpx.Response:
        with self._lock:
            self.requests.append(request)
        url = str(request.url)
        if url in self.failures:
            raise self.failures[url]
        status_code, body = self.routes.get(url, (404, b"not found"))
        return httpx.Response(status_code, content=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def font_server() -> FontServer:
    """Fake font server; pass ``font_server.transport`` to downloaders."""
    return FontServer()

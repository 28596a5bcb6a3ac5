"""Pytest configuration and fixtures for WeinBlog tests."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from weinblog.catalog import Catalog
from weinblog.models import WineRecord
from weinblog.services import ScanDebouncer, SourceUrlStore, WineMatcher


def make_wine(id: str, name: str, country: str, region: str, grapes=(), color="white", **extra) -> WineRecord:
    """Build a catalog record with only the fields a test cares about."""
    return WineRecord(
        id=id,
        name=name,
        country=country,
        region=region,
        grapes=tuple(grapes),
        color=color,
        **extra,
    )


@pytest.fixture
def sample_wines() -> list[WineRecord]:
    """A small catalog covering the matching edge cases.

    - wine 3 mentions Riesling only in its German grape list
    - wine 5 ("Prosecco Rosé") precedes the plain Prosecco (id 12)
    - wines 5 and 12 share one scan code
    """
    return [
        make_wine(
            "1", "Mosel Elbling", "Germany", "Mosel", ["Elbling"],
            name_de="Mosel Elbling", country_de="Deutschland", region_de="Mosel",
            grapes_de=("Elbling",),
            scan_codes=frozenset({"WEIN-MOS-001", "4001234567890"}),
        ),
        make_wine(
            "2", "Rheingau Riesling", "Germany", "Rheingau", ["Riesling"],
            name_de="Rheingau Riesling Trocken", country_de="Deutschland", region_de="Rheingau",
            grapes_de=("Riesling",),
            name_zh="莱茵高雷司令", country_zh="德国", region_zh="莱茵高", grapes_zh=("雷司令",),
            scan_codes=frozenset({"WEIN-RHG-002"}),
        ),
        make_wine(
            "3", "Schloss Cuvée", "Germany", "Pfalz", ["White Blend"],
            name_de="Schlosscuvée", country_de="Deutschland", region_de="Pfalz",
            grapes_de=("Riesling",),
        ),
        make_wine(
            "5", "Prosecco Rosé", "Italy", "Veneto", ["Glera", "Pinot Noir"],
            color="rose", style="sparkling",
            scan_codes=frozenset({"SHARED-CODE"}),
        ),
        make_wine(
            "12", "Prosecco", "Italy", "Veneto", ["Glera"],
            style="sparkling", price="budget",
            scan_codes=frozenset({"WEIN-VEN-012", "SHARED-CODE"}),
        ),
        make_wine(
            "7", "Rioja Reserva", "Spain", "Rioja", ["Tempranillo"],
            color="red", price="premium",
        ),
    ]


@pytest.fixture
def catalog(sample_wines) -> Catalog:
    return Catalog(sample_wines)


@pytest.fixture
def matcher(catalog) -> WineMatcher:
    return WineMatcher(catalog)


@pytest.fixture
def sample_image_bytes() -> bytes:
    """Create sample image bytes for testing."""
    # Minimal valid PNG (1x1 pixel, red)
    png_data = bytes([
        0x89, 0x50, 0x4E, 0x47, 0x0D, 0x0A, 0x1A, 0x0A,  # PNG signature
        0x00, 0x00, 0x00, 0x0D,  # IHDR length
        0x49, 0x48, 0x44, 0x52,  # IHDR
        0x00, 0x00, 0x00, 0x01,  # width: 1
        0x00, 0x00, 0x00, 0x01,  # height: 1
        0x08, 0x02,  # bit depth: 8, color type: RGB
        0x00, 0x00, 0x00,  # compression, filter, interlace
        0x90, 0x77, 0x53, 0xDE,  # CRC
        0x00, 0x00, 0x00, 0x0C,  # IDAT length
        0x49, 0x44, 0x41, 0x54,  # IDAT
        0x08, 0xD7, 0x63, 0xF8, 0xFF, 0xFF, 0x3F, 0x00,  # compressed data
        0x05, 0xFE, 0x02, 0xFE,  # CRC
        0xA3, 0x1A, 0x8D, 0xEB,  # CRC
        0x00, 0x00, 0x00, 0x00,  # IEND length
        0x49, 0x45, 0x4E, 0x44,  # IEND
        0xAE, 0x42, 0x60, 0x82,  # CRC
    ])
    return png_data


class FakeOCRService:
    """Stands in for Tesseract with a fixed recognition result."""

    def __init__(self, text: str = "", available: bool = True) -> None:
        self.text = text
        self.available = available
        self.calls = 0

    def is_available(self) -> bool:
        return self.available

    async def extract_text_from_bytes(self, image_data: bytes) -> str:
        self.calls += 1
        return self.text


# Create a test-specific app to avoid loading the bundled catalog at startup
def create_test_app():
    """Create a FastAPI app configured for testing (no startup lifespan)."""
    from fastapi import FastAPI

    from weinblog import __version__
    from weinblog.main import app as main_app
    from weinblog.main import limiter

    @asynccontextmanager
    async def test_lifespan(app: FastAPI):
        yield

    test_app = FastAPI(
        title="WeinBlog Test",
        version=__version__,
        lifespan=test_lifespan,
    )
    test_app.state.limiter = limiter

    # Copy all routes from the main app
    for route in main_app.routes:
        test_app.routes.append(route)

    return test_app


# Test app singleton for the session
_test_app = None


def get_test_app():
    """Get the test app singleton."""
    global _test_app
    if _test_app is None:
        _test_app = create_test_app()
    return _test_app


@pytest.fixture
def source_url_store(tmp_path: Path) -> SourceUrlStore:
    return SourceUrlStore(tmp_path / "source_urls.json")


@pytest.fixture
def fake_ocr() -> FakeOCRService:
    return FakeOCRService()


@pytest_asyncio.fixture(scope="function")
async def client(catalog, source_url_store, fake_ocr) -> AsyncGenerator[AsyncClient, None]:
    """Async test client over the sample catalog with fresh per-test state."""
    app = get_test_app()
    app.state.catalog = catalog
    app.state.matcher = WineMatcher(catalog)
    app.state.source_urls = source_url_store
    app.state.scan_debouncer = ScanDebouncer(window_seconds=1.0)
    app.state.ocr_service = fake_ocr

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

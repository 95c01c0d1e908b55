"""
Test Configuration
==================

Pytest configuration with fixtures shared by unit and integration tests.
Provides test settings, a mocked Playwright engine, and sample pages.
"""

import pytest
import structlog
from pathlib import Path
from types import SimpleNamespace
from typing import Generator
from unittest.mock import AsyncMock, MagicMock, patch

from pagepdf.config.settings import Settings
from pagepdf.models.schemas import LocalFileSource, UrlSource

SAMPLE_PDF = b"%PDF-1.4\n%test\n1 0 obj\n<<>>\nendobj\ntrailer\n<<>>\n%%EOF\n"

SAMPLE_HTML = """<!DOCTYPE html>
<html>
  <head><title>pagepdf test</title></head>
  <body><h1>Hello PDF</h1><p>Rendered by pagepdf.</p></body>
</html>
"""


@pytest.fixture(scope="session", autouse=True)
def configure_test_logging() -> None:
    """Route structlog through stdlib logging so nothing is printed to stdout."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


@pytest.fixture
def test_settings() -> Settings:
    """Settings with short timeouts for fast tests."""
    return Settings(
        environment="testing",
        log_level="DEBUG",
        navigation_timeout=2000,
        network_idle_ms=20,
    )


@pytest.fixture
def sample_html(tmp_path: Path) -> Path:
    """A small local HTML page."""
    page = tmp_path / "page.html"
    page.write_text(SAMPLE_HTML, encoding="utf-8")
    return page


@pytest.fixture
def url_source() -> UrlSource:
    return UrlSource(url="https://example.com")


@pytest.fixture
def file_source(sample_html: Path) -> LocalFileSource:
    return LocalFileSource(path=str(sample_html), uri=sample_html.as_uri())


@pytest.fixture
def mock_page() -> MagicMock:
    """Playwright page double: sync ``on``, awaitable navigation and capture."""
    page = MagicMock()
    page.goto = AsyncMock(return_value=MagicMock(ok=True, status=200))
    page.emulate_media = AsyncMock()
    page.pdf = AsyncMock(return_value=SAMPLE_PDF)
    return page


@pytest.fixture
def mock_engine(mock_page: MagicMock) -> Generator[SimpleNamespace, None, None]:
    """Patch ``async_playwright`` in the session module with a mocked engine."""
    mock_browser = AsyncMock()
    mock_browser.new_page = AsyncMock(return_value=mock_page)

    mock_playwright = MagicMock()
    mock_playwright.chromium.launch = AsyncMock(return_value=mock_browser)
    mock_playwright.stop = AsyncMock()

    with patch("pagepdf.core.rendering.session.async_playwright") as mock_async_playwright:
        mock_async_playwright.return_value.start = AsyncMock(return_value=mock_playwright)
        yield SimpleNamespace(
            factory=mock_async_playwright,
            playwright=mock_playwright,
            browser=mock_browser,
            page=mock_page,
        )

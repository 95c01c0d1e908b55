"""
Integration Test Configuration
==============================

Real-browser fixtures. Integration tests are skipped when Chromium cannot be
launched on this host.
"""

import asyncio

import pytest
from playwright.async_api import async_playwright


async def _launch_chromium() -> None:
    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=True, args=["--no-sandbox"])
        await browser.close()


@pytest.fixture(scope="session")
def chromium() -> None:
    """Skip when Playwright's Chromium build is missing."""
    try:
        asyncio.run(_launch_chromium())
    except Exception as exc:
        hint = "Try:  python -m playwright install --with-deps chromium"
        pytest.skip(f"Chromium not available on this host - {hint} ({exc})")

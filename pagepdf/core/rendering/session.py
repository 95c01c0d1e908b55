"""
Render Session
==============

Playwright-based PDF rendering of a single page. Owns the browser for the
duration of one render: launch, navigate, emulate media, delay, render, close.
The browser is released on every exit path.
"""

from typing import Optional, Dict, Any, List, AsyncGenerator, Iterator, Tuple
import asyncio
import os
from contextlib import asynccontextmanager, contextmanager

from playwright.async_api import async_playwright, Browser, Error as PlaywrightError, Page

from pagepdf.config.logging import get_logger
from pagepdf.config.settings import Settings, get_settings
from pagepdf.core.errors import (
    EngineLaunchError,
    MediaEmulationError,
    NavigationError,
    RenderError,
)
from pagepdf.core.rendering.network import InflightRequestTracker
from pagepdf.models.schemas import RenderConfig, RenderSource, SessionState, WaitUntil

logger = get_logger(__name__)

# WaitUntil -> (Playwright wait_until, max in-flight requests for the extra idle window)
WAIT_CONDITIONS: Dict[WaitUntil, Tuple[str, Optional[int]]] = {
    WaitUntil.LOAD: ("load", None),
    WaitUntil.DOMCONTENTLOADED: ("domcontentloaded", None),
    WaitUntil.NETWORKIDLE0: ("networkidle", None),
    WaitUntil.NETWORKIDLE2: ("load", 2),
}


@contextmanager
def engine_debug_output(enabled: bool, debug_filter: str) -> Iterator[None]:
    """
    Route the browser process output through the Playwright driver's stderr.

    The driver reads ``DEBUG`` when it starts, so this must wrap the launch.
    """
    if not enabled:
        yield
        return

    previous = os.environ.get("DEBUG")
    os.environ["DEBUG"] = debug_filter
    try:
        yield
    finally:
        if previous is None:
            os.environ.pop("DEBUG", None)
        else:
            os.environ["DEBUG"] = previous


class RenderSession:
    """One headless Chromium instance rendering one page to PDF."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.logger: Any = logger.bind(component="render_session")  # structlog.BoundLoggerBase
        self.state: Optional[SessionState] = None
        self.history: List[SessionState] = []

    def _enter(self, state: SessionState) -> None:
        self.state = state
        self.history.append(state)
        self.logger.debug("Session state changed", state=state.value)

    async def run(self, source: RenderSource, config: RenderConfig) -> bytes:
        """
        Render a page to PDF.

        Args:
            source: Page to load
            config: Rendering options

        Returns:
            PDF bytes

        Raises:
            EngineLaunchError: If Playwright or Chromium cannot start
            NavigationError: If the page fails to load
            RenderError: If media emulation or PDF capture fails
        """
        self.state = None
        self.history = []

        with engine_debug_output(config.debug, self.settings.engine_debug_filter):
            async with self._open_page() as page:
                if config.debug:
                    self._attach_page_diagnostics(page)

                await self._navigate(page, source, config)
                await self._emulate_media(page, config)

                if config.debug:
                    self.logger.info(
                        "Render options",
                        source=source.navigation_url,
                        config=config.model_dump(mode="json"),
                        pdf_options=config.pdf_options(),
                    )

                await self._delay(config)
                return await self._render(page, config)

    @asynccontextmanager
    async def _open_page(self) -> AsyncGenerator[Page, None]:
        """Launch Chromium and open a page, closing both when the block exits."""
        playwright = None
        browser: Optional[Browser] = None

        try:
            playwright = await async_playwright().start()
            browser = await playwright.chromium.launch(
                headless=self.settings.playwright_headless,
                args=list(self.settings.browser_args),
            )
            page = await browser.new_page()
        except Exception as e:
            self.logger.error("Failed to launch browser", error=str(e))
            self._enter(SessionState.FAILED)
            await self._close(playwright, browser)
            raise EngineLaunchError(f"Browser launch failed: {e}") from e

        self._enter(SessionState.LAUNCHED)
        try:
            yield page
        except BaseException:
            self._enter(SessionState.FAILED)
            raise
        finally:
            await self._close(playwright, browser)

    async def _close(self, playwright: Any, browser: Optional[Browser]) -> None:
        """Release the browser and the Playwright driver. Close errors are logged only."""
        if browser is not None:
            try:
                await browser.close()
            except Exception as e:
                self.logger.warning("Browser close failed", error=str(e))

        if playwright is not None:
            try:
                await playwright.stop()
            except Exception as e:
                self.logger.warning("Playwright stop failed", error=str(e))

        self._enter(SessionState.CLOSED)

    def _attach_page_diagnostics(self, page: Page) -> None:
        page.on(
            "console",
            lambda message: self.logger.info(
                "Page console", type=message.type, text=message.text
            ),
        )
        page.on("pageerror", lambda error: self.logger.warning("Page error", error=str(error)))

    async def _navigate(self, page: Page, source: RenderSource, config: RenderConfig) -> None:
        url = source.navigation_url
        wait_until, max_inflight = WAIT_CONDITIONS[config.wait_until]
        timeout = self.settings.navigation_timeout

        tracker = None
        if max_inflight is not None:
            tracker = InflightRequestTracker()
            tracker.attach(page)

        self.logger.debug("Navigating", url=url, wait_until=config.wait_until.value)
        loop = asyncio.get_running_loop()
        started = loop.time()

        try:
            response = await page.goto(url, wait_until=wait_until, timeout=timeout)
        except PlaywrightError as e:
            raise NavigationError(f"Navigation to {url} failed: {e}") from e

        if tracker is not None:
            remaining: Optional[float] = None
            if timeout:
                remaining = max(timeout / 1000 - (loop.time() - started), 0)
            try:
                await asyncio.wait_for(
                    tracker.wait_for_idle(max_inflight, self.settings.network_idle_ms),
                    remaining,
                )
            except asyncio.TimeoutError as e:
                raise NavigationError(
                    f"Navigation to {url} failed: {config.wait_until.value} not reached "
                    f"within {timeout}ms"
                ) from e

        if response is not None and not response.ok:
            self.logger.warning("Page responded with an error status", url=url, status=response.status)

        self._enter(SessionState.NAVIGATED)

    async def _emulate_media(self, page: Page, config: RenderConfig) -> None:
        if config.emulate_media_type:
            try:
                await page.emulate_media(media=config.emulate_media_type)
            except PlaywrightError as e:
                raise MediaEmulationError(
                    f"Cannot emulate media type {config.emulate_media_type!r}: {e}"
                ) from e

        self._enter(SessionState.MEDIA_EMULATED)

    async def _delay(self, config: RenderConfig) -> None:
        if config.delay_ms > 0:
            self.logger.debug("Delaying render", delay_ms=config.delay_ms)
            await asyncio.sleep(config.delay_ms / 1000)

        self._enter(SessionState.DELAYED)

    async def _render(self, page: Page, config: RenderConfig) -> bytes:
        try:
            pdf_bytes = await page.pdf(**config.pdf_options())
        except PlaywrightError as e:
            raise RenderError(f"PDF generation failed: {e}") from e

        self._enter(SessionState.RENDERED)
        self.logger.info("Generated PDF", file_size=len(pdf_bytes))
        return pdf_bytes


async def render_pdf(
    source: RenderSource, config: RenderConfig, settings: Optional[Settings] = None
) -> bytes:
    """Render ``source`` to PDF bytes in a fresh session."""
    session = RenderSession(settings)
    return await session.run(source, config)

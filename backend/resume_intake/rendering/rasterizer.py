"""
DocumentRasterizer — drives headless Chromium (Playwright) to print HTML to PDF.

Every call launches its own disposable browser and closes it on every
exit path, so concurrent requests never share an engine instance.

The browser launcher is injected; production uses `chromium_launcher()`,
tests pass a fake that counts launches and closes.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Protocol

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from resume_intake.core.config import Settings
from resume_intake.core.logging import get_logger
from resume_intake.pipeline.errors import (
    EmptyInputError,
    RenderFailureError,
    RenderTimeoutError,
)

logger = get_logger(__name__)

IMAGES_COMPLETE_JS = "() => Array.from(document.images).every((img) => img.complete)"


class BrowserHandle(Protocol):
    """Minimal surface the rasterizer needs from a launched browser."""

    async def new_page(self, **kwargs: Any) -> Any: ...

    async def close(self) -> None: ...


BrowserLauncher = Callable[[], Awaitable[BrowserHandle]]


@dataclass(frozen=True)
class RasterizerOptions:
    """Page, timing and print options for one rasterizer."""

    page_format: str = "A4"
    margin: str = "12mm"
    viewport_width: int = 1200
    viewport_height: int = 800
    timeout_ms: int = 60_000
    settle_delay_ms: int = 5_000
    wait_for_images: bool = True

    @classmethod
    def from_settings(cls, settings: Settings) -> RasterizerOptions:
        return cls(
            page_format=settings.PDF_PAGE_FORMAT,
            margin=settings.PDF_MARGIN,
            viewport_width=settings.PDF_VIEWPORT_WIDTH,
            viewport_height=settings.PDF_VIEWPORT_HEIGHT,
            timeout_ms=settings.PDF_TIMEOUT_MS,
            settle_delay_ms=settings.PDF_SETTLE_DELAY_MS,
            wait_for_images=settings.PDF_WAIT_FOR_IMAGES,
        )

    @property
    def timeout_s(self) -> float:
        return self.timeout_ms / 1000


# ═══════════════════════════════════════════════════════════
#  Production launcher
# ═══════════════════════════════════════════════════════════

class ChromiumHandle:
    """Launched Chromium plus the Playwright driver that owns it."""

    def __init__(self, playwright, browser) -> None:
        self._playwright = playwright
        self._browser = browser

    async def new_page(self, **kwargs: Any):
        return await self._browser.new_page(**kwargs)

    async def close(self) -> None:
        try:
            await self._browser.close()
        finally:
            await self._playwright.stop()


def chromium_launcher(no_sandbox: bool = True) -> BrowserLauncher:
    """Build a launcher that starts a fresh headless Chromium per call."""

    async def launch_chromium() -> ChromiumHandle:
        args = ["--no-sandbox", "--disable-setuid-sandbox"] if no_sandbox else []
        playwright = await async_playwright().start()
        try:
            browser = await playwright.chromium.launch(headless=True, args=args)
        except BaseException:
            await playwright.stop()
            raise
        return ChromiumHandle(playwright, browser)

    return launch_chromium


# ═══════════════════════════════════════════════════════════
#  Rasterizer
# ═══════════════════════════════════════════════════════════

class DocumentRasterizer:
    """Turns an HTML string into paginated PDF bytes."""

    def __init__(
        self,
        launcher: BrowserLauncher | None = None,
        options: RasterizerOptions | None = None,
    ) -> None:
        self._launch = launcher or chromium_launcher()
        self.options = options or RasterizerOptions()

    async def rasterize(self, html: str) -> bytes:
        if not html or not html.strip():
            raise EmptyInputError("HTML to rasterize is empty")

        opts = self.options
        log = logger.bind(html_length=len(html), timeout_ms=opts.timeout_ms)

        try:
            browser = await self._launch()
        except Exception as exc:
            raise RenderFailureError(f"Browser launch failed: {exc}") from exc

        try:
            page = await browser.new_page(
                viewport={"width": opts.viewport_width, "height": opts.viewport_height},
            )
            await page.set_content(html, wait_until="networkidle", timeout=opts.timeout_ms)

            if opts.wait_for_images:
                await self._wait_for_images(page, log)
            if opts.settle_delay_ms > 0:
                await page.wait_for_timeout(opts.settle_delay_ms)

            pdf = await asyncio.wait_for(
                page.pdf(
                    format=opts.page_format,
                    print_background=True,
                    margin={
                        "top": opts.margin,
                        "right": opts.margin,
                        "bottom": opts.margin,
                        "left": opts.margin,
                    },
                ),
                timeout=opts.timeout_s,
            )
        except (PlaywrightTimeoutError, asyncio.TimeoutError) as exc:
            log.error("PDF rendering timed out", error=str(exc))
            raise RenderTimeoutError(
                f"Rendering exceeded {opts.timeout_ms} ms",
                details={"timeout_ms": opts.timeout_ms},
            ) from exc
        except PlaywrightError as exc:
            log.error("Browser engine fault", error=str(exc))
            raise RenderFailureError(f"Browser engine fault: {exc}") from exc
        except Exception as exc:
            log.exception("Unexpected rasterization error", error=str(exc))
            raise RenderFailureError(f"Unexpected: {exc}") from exc
        finally:
            await self._dispose(browser, log)

        if not pdf:
            raise RenderFailureError("Browser returned an empty PDF")

        log.info("PDF rendered", size_bytes=len(pdf))
        return bytes(pdf)

    async def _wait_for_images(self, page, log) -> None:
        """Bounded wait for <img> decode; a timeout here only warns."""
        try:
            await page.wait_for_function(IMAGES_COMPLETE_JS, timeout=self.options.timeout_ms)
        except PlaywrightTimeoutError:
            log.warning("Images still loading after timeout, printing anyway")

    async def _dispose(self, browser: BrowserHandle, log) -> None:
        try:
            await browser.close()
        except Exception as exc:
            log.warning("Browser close failed", error=str(exc))

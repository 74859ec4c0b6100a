"""Browser session for Playwright automation.

Owns one Chromium process, one isolated context and one page for the
lifetime of a scenario run, together with the logs of dialogs and
downloads observed on that page.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any, Literal

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from star_editor_e2e.browser.events import DownloadCapture, EventLog
from star_editor_e2e.browser.geometry import interpolate, relative_point
from star_editor_e2e.browser.polling import poll_until
from star_editor_e2e.config import (
    DEFAULT_DOWNLOAD_TIMEOUT_MS,
    DEFAULT_NAVIGATION_TIMEOUT_MS,
    DEFAULT_POLL_INTERVAL_MS,
    DEFAULT_READY_TIMEOUT_MS,
)
from star_editor_e2e.models import (
    BoundingBox,
    DownloadError,
    NavigationError,
    Point,
    ResourceError,
    WaitTimeoutError,
)

if TYPE_CHECKING:
    from playwright.async_api import Browser, BrowserContext, Dialog, Download, Page, Playwright

logger = logging.getLogger(__name__)

MouseButton = Literal["left", "right", "middle"]
WaitUntil = Literal["commit", "domcontentloaded", "load", "networkidle"]


class BrowserSession:
    """One isolated browsing context and page.

    Use :meth:`open` to acquire a session; it is closed on every exit path.

    Attributes:
        dialogs: Messages of every dialog shown by the page, in order
        downloads: Every download started by the page, in order
    """

    def __init__(self, poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS) -> None:
        """Initialize an unstarted session.

        Args:
            poll_interval_ms: Interval between readiness checks
        """
        self.poll_interval_ms = poll_interval_ms
        self.dialogs: EventLog[str] = EventLog()
        self.downloads: EventLog[Download] = EventLog()
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None
        self._page: Page | None = None
        self._closed = False

    @classmethod
    @asynccontextmanager
    async def open(
        cls,
        headless: bool = True,
        poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS,
    ) -> AsyncGenerator[BrowserSession]:
        """Launch Chromium and yield a ready session.

        Launch failures propagate. The session is closed when the block
        exits, whether normally or by an exception.

        Args:
            headless: Run Chromium without a window
            poll_interval_ms: Interval between readiness checks

        Yields:
            Started BrowserSession
        """
        session = cls(poll_interval_ms=poll_interval_ms)
        try:
            await session.start(headless=headless)
            yield session
        finally:
            await session.close()

    async def start(self, headless: bool = True) -> None:
        """Start Playwright, launch the browser and open a fresh context and page."""
        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(headless=headless)
        # Fresh context: no cookies or storage shared with earlier runs
        self._context = await self._browser.new_context(accept_downloads=True)
        self._page = await self._context.new_page()
        self._page.on("dialog", self._on_dialog)
        self._page.on("download", self._on_download)
        logger.info("Browser session started (headless=%s)", headless)

    @property
    def page(self) -> Page:
        if self._page is None:
            raise RuntimeError("Browser session is not started")
        return self._page

    async def _on_dialog(self, dialog: Dialog) -> None:
        # An unanswered dialog blocks every later interaction
        self.dialogs.append(dialog.message)
        logger.info("Dialog captured (%s): %s", dialog.type, dialog.message)
        await dialog.accept()

    def _on_download(self, download: Download) -> None:
        self.downloads.append(download)
        logger.info("Download captured: %s", download.suggested_filename)

    async def navigate(
        self,
        url: str,
        wait_until: WaitUntil = "domcontentloaded",
        timeout_ms: int = DEFAULT_NAVIGATION_TIMEOUT_MS,
    ) -> None:
        """Load ``url`` and wait for the given load state.

        Raises:
            NavigationError: If the load fails or times out
            ResourceError: If the server answers with an error status
        """
        logger.debug("Navigating to %s (wait_until=%s)", url, wait_until)
        try:
            response = await self.page.goto(url, wait_until=wait_until, timeout=timeout_ms)
        except PlaywrightError as e:
            raise NavigationError(f"Failed to load {url}: {e}", details={"url": url}) from e

        if response is not None and response.status >= 400:
            raise ResourceError(
                f"Server answered {response.status} for {url}",
                details={"url": url, "status_code": response.status},
            )

    async def wait_for_selector(self, selector: str, timeout_ms: int = DEFAULT_READY_TIMEOUT_MS) -> None:
        """Wait until an element matching ``selector`` is attached to the DOM.

        Raises:
            WaitTimeoutError: If no element appears in time
        """

        async def present() -> bool:
            return await self.page.locator(selector).count() > 0

        await poll_until(present, timeout_ms, self.poll_interval_ms, description=f"selector {selector!r}")

    async def wait_for_predicate(self, expression: str, timeout_ms: int = DEFAULT_READY_TIMEOUT_MS) -> None:
        """Wait until the page-side ``expression`` evaluates truthy.

        Args:
            expression: JavaScript expression or function source
            timeout_ms: Maximum time to wait

        Raises:
            WaitTimeoutError: If the predicate stays falsy
        """

        async def holds() -> bool:
            return bool(await self.page.evaluate(expression))

        await poll_until(holds, timeout_ms, self.poll_interval_ms, description="page predicate")

    async def settle(self, duration_ms: int) -> None:
        """Wait unconditionally for rendering that exposes no readiness signal."""
        logger.debug("Settling for %dms", duration_ms)
        await asyncio.sleep(duration_ms / 1000)

    async def bounding_box(self, selector: str) -> BoundingBox | None:
        """Get the viewport rectangle of the first element matching ``selector``.

        Returns:
            The rectangle, or None if the element is not rendered
        """
        raw = await self.page.locator(selector).first.bounding_box()
        if raw is None:
            return None
        return BoundingBox.model_validate(dict(raw))

    async def click_at_relative(
        self,
        selector: str,
        rel_x: float,
        rel_y: float,
        button: MouseButton = "left",
    ) -> Point:
        """Click at a fractional position inside the element's current box.

        The box is measured again on every call since earlier actions may
        have changed the layout.

        Returns:
            The viewport point that was clicked

        Raises:
            AssertionError: If the element has no bounding box
        """
        box = await self.bounding_box(selector)
        if box is None:
            raise AssertionError(f"Element {selector} has no bounding box")
        point = relative_point(box, rel_x, rel_y)
        logger.debug("Click %s at (%.1f, %.1f) relative (%.2f, %.2f)", button, point.x, point.y, rel_x, rel_y)
        await self.page.mouse.click(point.x, point.y, button=button)
        return point

    async def click(self, selector: str, button: MouseButton = "left", nth: int | None = None) -> None:
        """Click an element, optionally the ``nth`` match (0-based).

        Raises:
            WaitTimeoutError: If the element never becomes clickable
        """
        locator = self.page.locator(selector)
        if nth is not None:
            locator = locator.nth(nth)
        try:
            await locator.click(button=button)
        except PlaywrightTimeoutError as e:
            raise WaitTimeoutError(
                f"Timed out clicking {selector}: {e}",
                details={"selector": selector, "nth": nth},
            ) from e

    async def drag_by(self, start: Point, dx: float, dy: float, steps: int) -> None:
        """Press at ``start``, move in ``steps`` increments by (dx, dy), release."""
        mouse = self.page.mouse
        await mouse.move(start.x, start.y)
        await mouse.down()
        for point in interpolate(start, dx, dy, steps):
            await mouse.move(point.x, point.y)
        await mouse.up()
        logger.debug("Dragged from (%.1f, %.1f) by (%s, %s) in %d steps", start.x, start.y, dx, dy, steps)

    async def fill(self, selector: str, text: str) -> None:
        """Type ``text`` into an input so that its input listeners fire.

        Raises:
            WaitTimeoutError: If the input never becomes editable
        """
        try:
            await self.page.fill(selector, text)
        except PlaywrightTimeoutError as e:
            raise WaitTimeoutError(f"Timed out filling {selector}: {e}", details={"selector": selector}) from e

    async def text_content(self, selector: str) -> str | None:
        return await self.page.locator(selector).text_content()

    async def evaluate(self, expression: str, arg: Any = None) -> Any:
        """Run a read-only page-side query and return its result."""
        return await self.page.evaluate(expression, arg)

    @asynccontextmanager
    async def expect_download(
        self, timeout_ms: int = DEFAULT_DOWNLOAD_TIMEOUT_MS
    ) -> AsyncGenerator[DownloadCapture]:
        """Wait for the download triggered inside the block.

        The wait is armed before the block runs, so the triggering action
        belongs inside it::

            async with session.expect_download() as capture:
                await session.click("#btn-export")
            capture.suggested_filename

        Raises:
            DownloadError: If no download starts within ``timeout_ms``
        """
        capture = DownloadCapture()
        triggered = False
        try:
            async with self.page.expect_download(timeout=timeout_ms) as download_info:
                yield capture
                triggered = True
            capture.download = await download_info.value
        except PlaywrightTimeoutError as e:
            if not triggered:
                raise
            raise DownloadError(
                f"No download observed within {timeout_ms}ms",
                details={"timeout_ms": timeout_ms},
            ) from e

    async def close(self) -> None:
        """Close context, browser and Playwright, in that order.

        Safe to call more than once; only the first call releases anything.
        Every release step is attempted; the first failure is re-raised.
        """
        if self._closed:
            return
        self._closed = True

        errors: list[Exception] = []
        for label, release in (
            ("context", self._context.close if self._context else None),
            ("browser", self._browser.close if self._browser else None),
            ("playwright", self._playwright.stop if self._playwright else None),
        ):
            if release is None:
                continue
            try:
                await release()
            except Exception as e:  # noqa: BLE001 - later resources must still be released
                logger.warning("Failed to close %s: %s: %s", label, type(e).__name__, e)
                errors.append(e)

        self._page = None
        self._context = None
        self._browser = None
        self._playwright = None
        logger.info("Browser session closed")

        if errors:
            raise errors[0]

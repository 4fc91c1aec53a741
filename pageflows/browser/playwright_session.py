"""Playwright backed session for running workflows against a real browser.

The session owns the Playwright driver, browser, context and page it starts.
Lookups rely on the Locator API (label, placeholder, role, text) before
falling back to raw CSS selectors so workflows can name fields the way a user
sees them.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import Callable

from playwright.sync_api import (
    Browser,
    BrowserContext,
    Locator,
    Page,
    Playwright,
    TimeoutError as PlaywrightTimeoutError,
    Error as PlaywrightError,
    sync_playwright,
)

from pageflows.config import SessionSettings
from pageflows.core.errors import BrowserError
from pageflows.core.logger import get_logger
from pageflows.core.paths import ensure_work_dirs


class PlaywrightSession:
    """Session implementation driving a Chromium page.

    Pass ``page`` to drive an already open page; the session then never
    starts or stops Playwright itself.
    """

    def __init__(
        self,
        settings: SessionSettings | None = None,
        *,
        page: Page | None = None,
    ) -> None:
        self.logger = get_logger()
        self.settings = settings or SessionSettings()
        self.screenshots_dir = self.settings.screenshots_dir or ensure_work_dirs()["shot"]
        self.screenshots_dir.mkdir(parents=True, exist_ok=True)

        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None
        self._page: Page | None = page
        self._owns_page = page is None
        if page is not None:
            page.set_default_timeout(self.settings.default_timeout_ms)

    # ------------------------------------------------------------------
    # Lifecycle helpers
    def __enter__(self) -> "PlaywrightSession":
        self.ensure_ready()
        return self

    def __exit__(self, exc_type, exc, _tb) -> bool:
        if exc is not None:
            self.logger.error("Session failed: %s", exc)
            self._record_failure_artifacts("exception")
        self.close()
        return False

    def ensure_ready(self) -> Page:
        """Ensure the browser context and page are initialised."""
        if self._page is not None:
            return self._page

        try:
            self._playwright = sync_playwright().start()
        except Exception as exc:  # noqa: BLE001
            raise BrowserError("Playwright failed to start, run: python -m playwright install chromium") from exc

        self._browser = self._launch_browser(self._playwright)
        try:
            self._context = self._new_context(self._browser)
            page = self._context.new_page()
            page.set_default_timeout(self.settings.default_timeout_ms)
        except Exception:
            self.close()
            raise

        self._page = page
        return page

    def close(self) -> None:
        """Release Playwright resources started by this session."""
        if not self._owns_page:
            self._page = None
            return
        for label, closer in (
            ("BrowserContext", self._context and self._context.close),
            ("Browser", self._browser and self._browser.close),
            ("Playwright", self._playwright and self._playwright.stop),
        ):
            if not closer:
                continue
            try:
                closer()
            except Exception:  # noqa: BLE001
                self.logger.warning("Failed to close %s", label, exc_info=True)

        self._context = None
        self._browser = None
        self._playwright = None
        self._page = None

    @property
    def page(self) -> Page:
        return self.ensure_ready()

    @property
    def current_url(self) -> str:
        return self.page.url

    # ------------------------------------------------------------------
    # Capabilities
    def navigate(self, url: str) -> Page:
        """Open ``url``, resolving relative paths against ``base_url``.

        Raises:
            BrowserError: Navigation timed out or failed.
        """

        page = self.ensure_ready()
        target = self.settings.url_for(url)
        self.logger.info("Navigate: %s", target)
        try:
            page.goto(target, wait_until="domcontentloaded")
        except PlaywrightTimeoutError as exc:
            self._record_failure_artifacts("navigate-timeout")
            raise BrowserError(f"Navigation timed out: {target}") from exc
        except PlaywrightError as exc:
            self._record_failure_artifacts("navigate-error")
            raise BrowserError(f"Navigation failed: {target}") from exc
        return page

    def fill(self, field: str, value: str) -> None:
        """Fill a form field found by label, placeholder or CSS selector."""

        page = self.ensure_ready()
        locator = self._first_match(
            (
                lambda: page.get_by_label(field, exact=True),
                lambda: page.get_by_placeholder(field, exact=True),
                lambda: page.locator(field),
            )
        )
        self.logger.debug("Fill %s", field)
        locator.fill(value)

    def click(self, target: str) -> None:
        """Click a button, link, text node or CSS selector named ``target``."""

        page = self.ensure_ready()
        locator = self._first_match(
            (
                lambda: page.get_by_role("button", name=target, exact=True),
                lambda: page.get_by_role("link", name=target, exact=True),
                lambda: page.get_by_text(target, exact=True),
                lambda: page.locator(target),
            )
        )
        self.logger.debug("Click %s", target)
        locator.click()

    def submit(self) -> None:
        page = self.ensure_ready()
        self.logger.debug("Submit via %s", self.settings.submit_selector)
        page.locator(self.settings.submit_selector).first.click()

    def assert_text(self, text: str, *, timeout_ms: int | None = None) -> Locator:
        """Wait for ``text`` to become visible.

        Raises:
            AssertionError: The text did not appear in time.
        """

        page = self.ensure_ready()
        locator = page.get_by_text(text)
        try:
            locator.first.wait_for(state="visible", timeout=timeout_ms or self.settings.default_timeout_ms)
        except PlaywrightTimeoutError as exc:
            self._record_failure_artifacts("assert-text")
            raise AssertionError(f"Expected text not found on {page.url}: {text!r}") from exc
        return locator

    def screenshot(self, label: str = "shot") -> Path:
        page = self.ensure_ready()
        out = self.screenshots_dir / f"{label}_{time.strftime('%Y%m%d-%H%M%S')}.png"
        page.screenshot(path=str(out), full_page=True)
        self.logger.info("Screenshot saved: %s", out)
        return out

    # ------------------------------------------------------------------
    # Internal helpers
    def _first_match(self, candidates: tuple[Callable[[], Locator], ...]) -> Locator:
        # The last candidate is returned unchecked so Playwright reports the miss.
        for build in candidates[:-1]:
            locator = build()
            try:
                if locator.count() > 0:
                    return locator.first
            except PlaywrightError:
                continue
        return candidates[-1]().first

    def _launch_browser(self, playwright: Playwright) -> Browser:
        last_exc: PlaywrightError | None = None
        for channel in (None, "msedge", "chrome"):
            try:
                if channel is None:
                    return playwright.chromium.launch(headless=self.settings.headless)
                return playwright.chromium.launch(headless=self.settings.headless, channel=channel)
            except PlaywrightError as exc:
                last_exc = exc
                continue
        playwright.stop()
        self._playwright = None
        raise BrowserError(
            "Could not launch Chromium, run python -m playwright install chromium or install Edge/Chrome"
        ) from last_exc

    def _new_context(self, browser: Browser) -> BrowserContext:
        storage_state: str | None = None
        state_path = self.settings.storage_state
        if state_path is not None:
            if state_path.exists():
                storage_state = str(state_path)
                self.logger.info("Loading storage state: %s", storage_state)
            else:
                self.logger.warning("Storage state not found, starting fresh: %s", state_path)
        context = browser.new_context(storage_state=storage_state, base_url=self.settings.base_url)
        context.set_default_timeout(self.settings.default_timeout_ms)
        return context

    def _record_failure_artifacts(self, label: str) -> None:
        page = self._page
        if page is None:
            return
        snap_path = self.screenshots_dir / f"{label}_{time.strftime('%Y%m%d-%H%M%S')}.png"
        try:
            page.screenshot(path=str(snap_path), full_page=True)
            self.logger.info("Failure screenshot saved: %s", snap_path)
        except PlaywrightError:
            self.logger.warning("Screenshot failed", exc_info=True)

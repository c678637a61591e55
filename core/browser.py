# core/browser.py
'''
Copyright 2025 Aaron Vose (avose@aaronvose.net)
Licensed under the LGPL v2.1; see the file 'LICENSE' for details.
'''
from __future__ import annotations

from typing import Optional, Tuple

from playwright.sync_api import sync_playwright

from core.log import Log

__all__ = ["DEFAULT_START_URL", "BrowserSession"]

DEFAULT_START_URL = "https://www.asda.com/"


class BrowserSession:
    """
    A visible Chromium window driven through Playwright's sync API.

    Playwright objects are bound to the thread that created them, so every
    method must run on the same thread (the app uses its IOWorker).
    """

    def __init__(self, start_url: Optional[str] = DEFAULT_START_URL, headless: bool = False):
        self.start_url = start_url
        self.headless = headless
        self._playwright = None
        self._browser = None
        self._page = None

    @property
    def is_running(self) -> bool:
        return self._page is not None

    def launch(self) -> "BrowserSession":
        """Start the browser and open the start page. Returns self."""
        self._playwright = sync_playwright().start()
        try:
            self._browser = self._playwright.chromium.launch(
                headless=self.headless,
                args=["--disable-blink-features=AutomationControlled", "--start-maximized"],
            )
            context = self._browser.new_context(no_viewport=True)
            self._page = context.new_page()
            if self.start_url:
                self._page.goto(self.start_url)
        except Exception:
            self.close()
            raise
        Log.debug(f"Browser launched at {self.start_url}.", 1)
        return self

    def _require_page(self):
        if self._page is None:
            raise RuntimeError("Browser is not running")
        return self._page

    def navigate(self, url: str) -> None:
        self._require_page().goto(url)
        Log.debug(f"Browser navigated to {url}.", 1)

    def get_title(self) -> str:
        return self._require_page().title()

    def get_current_url(self) -> str:
        return self._require_page().url

    def active_document(self) -> Tuple[str, str]:
        """(title, url) of the page currently shown."""
        return self.get_title(), self.get_current_url()

    def close(self) -> None:
        browser, playwright = self._browser, self._playwright
        self._page = self._browser = self._playwright = None
        try:
            if browser is not None:
                browser.close()
        finally:
            if playwright is not None:
                playwright.stop()

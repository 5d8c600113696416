import logging
from typing import Optional

from playwright.sync_api import sync_playwright, Page, Browser, BrowserContext, Locator
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from .engine import EngineError, EngineTimeout, parse_selector

logger = logging.getLogger("pwcycle")


def to_playwright_selector(selector: str) -> str:
    strategy, value = parse_selector(selector)
    if strategy == "xpath":
        return f"xpath={value}"
    if strategy == "link":
        escaped = value.replace('"', '\\"')
        return f'a:text-is("{escaped}")'
    return value


class PlaywrightEngine:
    def __init__(self, wait_timeout_ms: int = 10000):
        self.wait_timeout_ms = wait_timeout_ms
        self._pw = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    def start(self, headless: bool = True, user_data_dir: Optional[str] = None) -> None:
        launch_args = {"headless": headless}
        try:
            self._pw = sync_playwright().start()
            if user_data_dir:
                self._context = self._pw.chromium.launch_persistent_context(user_data_dir, **launch_args)
                pages = self._context.pages
                self._page = pages[0] if pages else self._context.new_page()
            else:
                self._browser = self._pw.chromium.launch(**launch_args)
                self._context = self._browser.new_context()
                self._page = self._context.new_page()
        except PlaywrightError as e:
            self.stop()
            raise EngineError(f"Could not start Chromium: {e.message}")
        except Exception as e:
            # driver process failures surface as plain exceptions from start()
            self.stop()
            raise EngineError(f"Could not start Playwright: {e}")
        self._page.set_default_timeout(self.wait_timeout_ms)

    def stop(self) -> None:
        if self._context:
            self._context.close()
        if self._browser:
            self._browser.close()
        if self._pw:
            self._pw.stop()
        self._page = None
        self._context = None
        self._browser = None
        self._pw = None

    @property
    def page(self) -> Page:
        if self._page is None:
            raise EngineError("Playwright engine is not started")
        return self._page

    def _locate(self, selector: str) -> Locator:
        return self.page.locator(to_playwright_selector(selector)).first

    def goto(self, url: str) -> None:
        self.page.goto(url, wait_until="load")

    def type(self, selector: str, value: str, clear: bool = True) -> None:
        self.wait_for(selector, self.wait_timeout_ms)
        locator = self._locate(selector)
        if clear:
            locator.fill(value)
        else:
            locator.press_sequentially(value)

    def click(self, selector: str) -> None:
        self.wait_for(selector, self.wait_timeout_ms)
        self._locate(selector).click()

    def wait_for(self, selector: str, timeout_ms: int = 10000) -> None:
        try:
            self._locate(selector).wait_for(state="visible", timeout=timeout_ms)
        except PlaywrightTimeoutError:
            raise EngineTimeout(f"Timeout waiting for selector: {selector}")

    def is_visible(self, selector: str, timeout_ms: int = 10000) -> bool:
        try:
            self.wait_for(selector, timeout_ms)
            return True
        except EngineTimeout:
            logger.debug(f"[playwright] {selector} not visible after {timeout_ms}ms")
            return False

    def clear_cookies(self) -> None:
        if self._context is None:
            raise EngineError("Playwright engine is not started")
        self._context.clear_cookies()

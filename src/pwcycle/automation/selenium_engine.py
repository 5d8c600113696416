import logging
from typing import Optional, Tuple

from selenium import webdriver
from selenium.common.exceptions import TimeoutException, WebDriverException
from selenium.webdriver.chrome.options import Options as ChromeOptions
from selenium.webdriver.common.by import By
from selenium.webdriver.support import expected_conditions as EC
from selenium.webdriver.support.ui import WebDriverWait

from .engine import EngineError, EngineTimeout, parse_selector

logger = logging.getLogger("pwcycle")

_STRATEGIES = {
    "css": By.CSS_SELECTOR,
    "xpath": By.XPATH,
    "link": By.LINK_TEXT,
}


class SeleniumEngine:
    def __init__(self, wait_timeout_ms: int = 10000):
        self.wait_timeout_ms = wait_timeout_ms
        self._driver: Optional[webdriver.Chrome] = None

    def start(self, headless: bool = True, user_data_dir: Optional[str] = None) -> None:
        options = ChromeOptions()
        if headless:
            options.add_argument("--headless=new")
            options.add_argument("--disable-gpu")
        if user_data_dir:
            options.add_argument(f"--user-data-dir={user_data_dir}")
        try:
            self._driver = webdriver.Chrome(options=options)
        except WebDriverException as e:
            raise EngineError(f"Could not start Chrome: {e.msg or e}")

    def stop(self) -> None:
        if self._driver:
            self._driver.quit()
            self._driver = None

    @property
    def driver(self) -> webdriver.Chrome:
        if self._driver is None:
            raise EngineError("Selenium engine is not started")
        return self._driver

    @staticmethod
    def _locator(selector: str) -> Tuple[str, str]:
        strategy, value = parse_selector(selector)
        return _STRATEGIES[strategy], value

    def _visible(self, selector: str, timeout_ms: Optional[int] = None):
        timeout_ms = timeout_ms or self.wait_timeout_ms
        try:
            return WebDriverWait(self.driver, timeout_ms / 1000.0).until(
                EC.visibility_of_element_located(self._locator(selector))
            )
        except TimeoutException:
            raise EngineTimeout(f"Timeout waiting for selector: {selector}")

    def goto(self, url: str) -> None:
        self.driver.get(url)

    def type(self, selector: str, value: str, clear: bool = True) -> None:
        elem = self._visible(selector)
        if clear:
            elem.clear()
        elem.send_keys(value)

    def click(self, selector: str) -> None:
        try:
            elem = WebDriverWait(self.driver, self.wait_timeout_ms / 1000.0).until(
                EC.element_to_be_clickable(self._locator(selector))
            )
        except TimeoutException:
            raise EngineTimeout(f"Timeout waiting for clickable selector: {selector}")
        elem.click()

    def wait_for(self, selector: str, timeout_ms: int = 10000) -> None:
        self._visible(selector, timeout_ms)

    def is_visible(self, selector: str, timeout_ms: int = 10000) -> bool:
        try:
            self._visible(selector, timeout_ms)
            return True
        except EngineTimeout:
            logger.debug(f"[selenium] {selector} not visible after {timeout_ms}ms")
            return False

    def clear_cookies(self) -> None:
        self.driver.delete_all_cookies()

from typing import Protocol, Optional, Tuple


# Selector strings are CSS unless prefixed with one of these
XPATH_PREFIX = "xpath="
LINK_PREFIX = "link="


class EngineError(Exception):
    """The browser engine could not perform an action."""
    pass


class EngineTimeout(EngineError, TimeoutError):
    """A wait on a selector ran out of time."""
    pass


def parse_selector(selector: str) -> Tuple[str, str]:
    """Split a selector into ``(strategy, value)``; strategy is css, xpath or link."""
    if selector.startswith(XPATH_PREFIX):
        return "xpath", selector[len(XPATH_PREFIX):]
    if selector.startswith(LINK_PREFIX):
        return "link", selector[len(LINK_PREFIX):]
    return "css", selector


class AutomationEngine(Protocol):
    def start(self, headless: bool = True, user_data_dir: Optional[str] = None) -> None:
        ...

    def stop(self) -> None:
        ...

    def goto(self, url: str) -> None:
        ...

    def type(self, selector: str, value: str, clear: bool = True) -> None:
        ...

    def click(self, selector: str) -> None:
        ...

    def wait_for(self, selector: str, timeout_ms: int = 10000) -> None:
        ...

    def is_visible(self, selector: str, timeout_ms: int = 10000) -> bool:
        ...

    def clear_cookies(self) -> None:
        ...

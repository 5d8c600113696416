"""Page objects over a SiteProfile's locators."""

from urllib.parse import urljoin

from .engine import AutomationEngine
from .sites.base_site import SiteProfile


class _Page:
    def __init__(self, engine: AutomationEngine, site: SiteProfile, base_url: str, timeout_ms: int = 10000):
        self.engine = engine
        self.site = site
        self.base_url = base_url
        self.timeout_ms = timeout_ms

    def url(self, path: str) -> str:
        return urljoin(self.base_url.rstrip("/") + "/", path.lstrip("/"))


class LoginPage(_Page):
    def open(self) -> None:
        self.engine.goto(self.url(self.site.login_path))
        self.engine.wait_for(self.site.username_input, timeout_ms=self.timeout_ms)

    def revisit(self) -> None:
        self.engine.goto(self.url(self.site.login_path))

    def login(self, username: str, password: str) -> None:
        self.engine.type(self.site.username_input, username)
        self.engine.type(self.site.password_input, password)
        self.engine.click(self.site.login_button)

    def is_displayed(self) -> bool:
        return self.engine.is_visible(self.site.username_input, timeout_ms=self.timeout_ms)


class HomePage(_Page):
    def open(self) -> None:
        self.engine.goto(self.url(self.site.home_path))

    def is_logged_in(self) -> bool:
        return self.engine.is_visible(self.site.user_nav_button, timeout_ms=self.timeout_ms)

    def logout(self) -> None:
        self.engine.click(self.site.user_nav_button)
        self.engine.click(self.site.logout_link)


class ChangePasswordPage(_Page):
    def open(self) -> None:
        self.engine.goto(self.url(self.site.change_password_path))
        self.engine.wait_for(self.site.current_password_input, timeout_ms=self.timeout_ms)

    def change_password(self, current_password: str, new_password: str, security_answer: str) -> None:
        self.engine.type(self.site.current_password_input, current_password)
        self.engine.type(self.site.new_password_input, new_password)
        self.engine.type(self.site.confirm_password_input, new_password)
        self.engine.type(self.site.security_answer_input, security_answer)
        self.engine.click(self.site.change_password_button)

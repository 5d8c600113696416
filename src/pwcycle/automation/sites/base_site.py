from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class SiteProfile:
    """Locators and deep-link paths of one target application.

    Paths are relative to the configured base URL. Selectors follow the
    engine selector syntax (CSS, ``xpath=`` or ``link=``).
    """
    name: str
    login_path: str
    change_password_path: str
    home_path: str

    # login surface
    username_input: str
    password_input: str
    login_button: str

    # authenticated surface
    user_nav_button: str
    logout_link: str

    # change-password surface
    current_password_input: str
    new_password_input: str
    confirm_password_input: str
    security_answer_input: str
    change_password_button: str


SITES: Dict[str, SiteProfile] = {}


def register_site(profile: SiteProfile) -> SiteProfile:
    SITES[profile.name.lower()] = profile
    return profile


def get_site(name: str) -> SiteProfile:
    try:
        return SITES[name.lower()]
    except KeyError:
        raise KeyError(f"Unknown site profile '{name}' (known: {', '.join(sorted(SITES))})")

"""Site profiles: locators and paths of the applications a flow can drive."""

from .base_site import SiteProfile, SITES, get_site, register_site
from .salesforce import SALESFORCE

__all__ = ['SiteProfile', 'SITES', 'SALESFORCE', 'get_site', 'register_site']

"""pwcycle core - fixtures, configuration and the run's value types.

Nothing in here touches a browser; the automation package consumes these.
"""

from .models import CredentialRecord, SecretState, FixtureSet
from .fixtures import FixtureError, load_usernames, load_secret, load_fixtures
from .config import CycleConfig, ConfigError, FailurePolicy, load_config

__all__ = [
    'CredentialRecord',
    'SecretState',
    'FixtureSet',
    'FixtureError',
    'load_usernames',
    'load_secret',
    'load_fixtures',
    'CycleConfig',
    'ConfigError',
    'FailurePolicy',
    'load_config',
]

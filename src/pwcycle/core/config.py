"""
Run configuration.

Settings are resolved from several sources, highest priority first:

    1. Explicit overrides (CLI options)
    2. Environment variables (PWCYCLE_*)
    3. JSON config file (``--config``)
    4. Built-in defaults

Environment variable mapping:
    PWCYCLE_BASE_URL         -> base_url
    PWCYCLE_DATA_DIR         -> data_dir
    PWCYCLE_ENGINE           -> engine
    PWCYCLE_HEADLESS         -> headless
    PWCYCLE_WAIT_TIMEOUT_MS  -> wait_timeout_ms
    PWCYCLE_ON_FAILURE       -> on_failure
    PWCYCLE_SECURITY_ANSWER  -> security_answer
"""
import json
import logging
import os
from dataclasses import dataclass, fields, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

logger = logging.getLogger("pwcycle")

ENV_PREFIX = "PWCYCLE_"
ENGINES = ("selenium", "playwright")


class ConfigError(Exception):
    """Raised when a configuration value cannot be used."""
    pass


class FailurePolicy(str, Enum):
    # One credential failing does not stop the others
    CONTINUE = "continue"
    # The first failed credential ends the run; the rest are reported skipped
    ABORT = "abort"


@dataclass(frozen=True)
class CycleConfig:
    base_url: str = "https://login.salesforce.com"
    data_dir: str = "data"
    usernames_file: str = "passwords.csv"
    password_file: str = "password.txt"
    new_password_file: str = "newPassword.txt"
    username_column: str = "Username"
    engine: str = "selenium"
    headless: bool = True
    wait_timeout_ms: int = 10000
    on_failure: FailurePolicy = FailurePolicy.CONTINUE
    security_answer: str = "Juno Beach"

    @property
    def data_path(self) -> Path:
        return Path(self.data_dir).expanduser()

    def fixture_path(self, name: str) -> Path:
        return self.data_path / name

    def to_dict(self) -> Dict[str, Any]:
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data['on_failure'] = self.on_failure.value
        return data


def _parse_bool(value: Union[str, bool]) -> bool:
    if isinstance(value, bool):
        return value
    lowered = str(value).strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ConfigError(f"Not a boolean: {value!r}")


def _coerce(name: str, value: Any) -> Any:
    """Convert a raw value (from JSON, env or CLI) to the field's type."""
    if name == "headless":
        return _parse_bool(value)
    if name == "wait_timeout_ms":
        if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
            raise ConfigError(f"wait_timeout_ms must be an integer, got {value!r}")
        try:
            timeout = int(value)
        except (TypeError, ValueError):
            raise ConfigError(f"wait_timeout_ms must be an integer, got {value!r}")
        if timeout <= 0:
            raise ConfigError("wait_timeout_ms must be positive")
        return timeout
    if name == "on_failure":
        try:
            return FailurePolicy(str(value).lower())
        except ValueError:
            choices = ", ".join(p.value for p in FailurePolicy)
            raise ConfigError(f"on_failure must be one of: {choices}")
    if name == "engine":
        engine = str(value).lower()
        if engine not in ENGINES:
            raise ConfigError(f"engine must be one of: {', '.join(ENGINES)}")
        return engine
    return str(value)


def _load_file(path: Path) -> Dict[str, Any]:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}")
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Could not read config file {path}: {e}")
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")
    return data


def _load_env() -> Dict[str, str]:
    values = {}
    for f in fields(CycleConfig):
        raw = os.environ.get(ENV_PREFIX + f.name.upper())
        if raw is not None:
            values[f.name] = raw
    return values


def load_config(path: Optional[Union[str, Path]] = None, **overrides: Any) -> CycleConfig:
    """Build a CycleConfig from defaults, an optional JSON file, env and overrides.

    Overrides whose value is ``None`` are ignored so CLI options that were not
    given fall through to the lower layers.
    """
    known = {f.name for f in fields(CycleConfig)}
    merged: Dict[str, Any] = {}

    if path is not None:
        file_values = _load_file(Path(path))
        unknown = sorted(set(file_values) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
        merged.update(file_values)
        logger.debug(f"[config] loaded {len(file_values)} values from {path}")

    merged.update(_load_env())
    merged.update({k: v for k, v in overrides.items() if v is not None})

    unknown = sorted(set(merged) - known)
    if unknown:
        raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")

    return replace(CycleConfig(), **{k: _coerce(k, v) for k, v in merged.items()})

"""File-backed fixtures: the usernames table and the two password files."""

import csv
import logging
from pathlib import Path
from typing import List, Union

from .models import FixtureSet

logger = logging.getLogger("pwcycle")

PathLike = Union[str, Path]


class FixtureError(Exception):
    """A fixture file is missing, unreadable, malformed or empty."""
    pass


def load_usernames(path: PathLike, column: str = "Username", delimiter: str = ",") -> List[str]:
    """Return the ``column`` values of a delimited file, in file order.

    Duplicates are kept. Blank lines, and rows whose ``column`` value is blank,
    are skipped.

    Raises:
        FixtureError: If the file cannot be read, has no such column or no rows
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8-sig', newline='') as f:
            reader = csv.DictReader(f, delimiter=delimiter)
            header = reader.fieldnames or []
            if column not in header:
                raise FixtureError(f"{path}: no '{column}' column (header: {', '.join(header) or 'none'})")
            usernames = []
            for row in reader:
                username = (row.get(column) or "").strip()
                if not username:
                    if any((v or "").strip() for v in row.values() if isinstance(v, str)):
                        logger.warning(f"[fixtures] {path}:{reader.line_num}: blank {column}, row skipped")
                    continue
                usernames.append(username)
    except FileNotFoundError:
        raise FixtureError(f"Usernames file not found: {path}")
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise FixtureError(f"Could not read usernames file {path}: {e}")

    if not usernames:
        raise FixtureError(f"{path}: no username records")
    logger.debug(f"[fixtures] loaded {len(usernames)} usernames from {path}")
    return usernames


def load_secret(path: PathLike) -> str:
    """Read a single-value secret file, trimmed of surrounding whitespace."""
    path = Path(path)
    try:
        value = path.read_text(encoding='utf-8').strip()
    except FileNotFoundError:
        raise FixtureError(f"Secret file not found: {path}")
    except (OSError, UnicodeDecodeError) as e:
        raise FixtureError(f"Could not read secret file {path}: {e}")
    if not value:
        raise FixtureError(f"Secret file is empty: {path}")
    return value


def load_fixtures(config) -> FixtureSet:
    """Load the usernames and both passwords from ``config``'s data directory."""
    return FixtureSet(
        usernames=load_usernames(config.fixture_path(config.usernames_file), column=config.username_column),
        password=load_secret(config.fixture_path(config.password_file)),
        new_password=load_secret(config.fixture_path(config.new_password_file)),
    )

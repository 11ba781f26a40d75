# breakin/lookup.py
import logging
from pathlib import Path
from typing import FrozenSet, Tuple

from .errors import LoadError

logger = logging.getLogger(__name__)


def load_lookup(path) -> FrozenSet[str]:
    """
    Load every whitespace separated token in a file into a frozen set.

    Tokens are kept verbatim, there is no comment or escape syntax.
    Raises LoadError if the file cannot be opened or read.
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            entries = frozenset(f.read().split())
    except (OSError, UnicodeDecodeError) as e:
        raise LoadError(path, str(e)) from e

    logger.info("Loaded %d entries from %s", len(entries), path)
    return entries


def load_lookups(config) -> Tuple[FrozenSet[str], FrozenSet[str]]:
    """Return (authorized_users, banned_ips) for a DetectorConfig."""
    authorized = load_lookup(config.authorized_users_file)
    banned = load_lookup(config.banned_ips_file)
    return authorized, banned

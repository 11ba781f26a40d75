# breakin/parsers.py
import calendar
import logging
import re
from urllib.parse import urlsplit

from .errors import ConfigError
from .models import UrlParts

logger = logging.getLogger(__name__)

# Year assumed for syslog timestamps, which carry none
DEFAULT_YEAR = 2021

FAILED_MARKER = "Failed"

# Month abbreviations mapped explicitly so parsing never depends on the locale
MONTHS = {
    "Jan": 1, "Feb": 2, "Mar": 3, "Apr": 4, "May": 5, "Jun": 6,
    "Jul": 7, "Aug": 8, "Sep": 9, "Oct": 10, "Nov": 11, "Dec": 12,
}

# "Jun 10 03:32:36 host sshd[1234]: ..." (syslog pads single-digit days)
# Deliberately lenient, this is not validation: loose widths and leading
# blanks are accepted and whatever matches is converted
TIMESTAMP_RE = re.compile(
    r"^\s*(?P<mon>[A-Za-z]{3})\s+(?P<day>\d{1,2})\s+"
    r"(?P<hour>\d{1,2}):(?P<minute>\d{1,2}):(?P<second>\d{1,2})"
)

# The user id is the 5 characters found this far past the "sshd" tag
USER_TAG = "sshd"
USER_OFFSET = 5
USER_WIDTH = 5


def to_seconds(timestamp: str, year: int = DEFAULT_YEAR) -> int:
    """
    Convert a "Mon DD HH:MM:SS" prefix to UTC seconds since the epoch.

    Anything after the prefix is ignored, so a whole log line can be passed.
    Bad input does not raise: a prefix that does not match gives 0, and
    out of range fields (e.g. "Feb 31") roll over into the next unit.
    """
    m = TIMESTAMP_RE.match(timestamp)
    if not m:
        logger.debug("Unparseable timestamp %r", timestamp[:15])
        return 0

    month = MONTHS.get(m.group("mon").title())
    if month is None:
        logger.debug("Unknown month in timestamp %r", timestamp[:15])
        return 0

    return calendar.timegm(
        (
            year,
            month,
            int(m.group("day")),
            int(m.group("hour")),
            int(m.group("minute")),
            int(m.group("second")),
            0,
            0,
            0,
        )
    )


def extract_user(line: str) -> str:
    """Return the 5 character user id that follows the sshd tag."""
    start = line.find(USER_TAG) + USER_OFFSET
    return line[start:start + USER_WIDTH]


def is_failed_attempt(line: str, marker: str = FAILED_MARKER) -> bool:
    return marker in line


def break_down_url(url: str) -> UrlParts:
    """
    Split a URL into hostname, port and path.

    The port defaults to "80" and the path to "/". Raises ConfigError when
    no hostname can be found, so callers can reject the URL before fetching.
    """
    parts = urlsplit(url.strip())
    if not parts.hostname:
        raise ConfigError(f"Cannot find a host in URL: {url!r}")

    try:
        port = parts.port
    except ValueError as e:
        raise ConfigError(f"Invalid port in URL {url!r}: {e}") from e

    path = parts.path or "/"
    if parts.query:
        path = f"{path}?{parts.query}"

    return UrlParts(
        hostname=parts.hostname,
        port=str(port) if port is not None else "80",
        path=path,
    )

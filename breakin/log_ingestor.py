# breakin/log_ingestor.py
import logging
from pathlib import Path
from typing import Iterable, Iterator

import requests

from .config import REQUEST_TIMEOUT
from .parsers import break_down_url

logger = logging.getLogger(__name__)


def iter_log_lines(lines: Iterable[str], skip_header: bool = True) -> Iterator[str]:
    """
    Yield the data lines of a log stream.

    With skip_header, the leading block of non-empty lines and the blank
    line ending it are dropped first (the header of a raw HTTP response).
    Data stops at the first empty line or at the end of input.
    """
    it = iter(lines)

    if skip_header:
        for line in it:
            if not line.rstrip("\r\n"):
                break

    for line in it:
        line = line.rstrip("\r\n")
        if not line:
            return
        yield line


def fetch_log_lines(url: str, timeout: int = REQUEST_TIMEOUT) -> Iterator[str]:
    """
    Fetch a log over HTTP with a single GET and yield its data lines.

    requests consumes the response headers itself, so the body is read
    without header skipping. The body is split as a whole: splitting per
    chunk can invent a blank line where a CRLF straddles a chunk edge.
    Network and HTTP errors propagate as requests.RequestException.
    """
    parts = break_down_url(url)
    logger.info("Fetching %s from %s:%s", parts.path, parts.hostname, parts.port)

    with requests.get(
        url,
        headers={"Connection": "close"},
        timeout=timeout,
    ) as response:
        response.raise_for_status()
        if response.encoding is None:
            response.encoding = "utf-8"
        yield from iter_log_lines(
            response.text.splitlines(),
            skip_header=False,
        )


def read_capture(path) -> Iterator[str]:
    """Yield the data lines of a raw HTTP response saved to disk."""
    path = Path(path)
    logger.info("Reading captured response from %s", path)
    with path.open("r", encoding="utf-8", errors="replace") as f:
        yield from iter_log_lines(f, skip_header=True)

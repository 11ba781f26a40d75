# tests/test_log_ingestor.py
import io

import pytest
import requests

from breakin import log_ingestor
from breakin.log_ingestor import fetch_log_lines, iter_log_lines, read_capture

RAW_RESPONSE = [
    "HTTP/1.1 200 OK\r\n",
    "Content-Type: text/plain\r\n",
    "Connection: close\r\n",
    "\r\n",
    "Aug 29 11:01:01 host sshd[12345]: Failed password\n",
    "Aug 29 11:01:02 host sshd[12345]: Failed password\n",
]


class FakeResponse:
    def __init__(self, lines, status=200):
        self.lines = lines
        self.status = status
        self.encoding = None
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True
        return False

    def raise_for_status(self):
        if self.status >= 400:
            raise requests.HTTPError(f"{self.status} error")

    @property
    def text(self):
        return "\n".join(self.lines) + "\n"


def test_header_block_is_skipped():
    lines = list(iter_log_lines(RAW_RESPONSE))
    assert lines == [
        "Aug 29 11:01:01 host sshd[12345]: Failed password",
        "Aug 29 11:01:02 host sshd[12345]: Failed password",
    ]


def test_data_stops_at_first_empty_line():
    lines = list(iter_log_lines(["a", "b", "", "c"], skip_header=False))
    assert lines == ["a", "b"]


def test_only_header_yields_nothing():
    assert list(iter_log_lines(["HTTP/1.1 200 OK", "Host: x"])) == []


def test_fetch_log_lines(monkeypatch):
    calls = {}
    response = FakeResponse(["line one", "line two", "", "ignored"])

    def fake_get(url, **kwargs):
        calls["url"] = url
        calls.update(kwargs)
        return response

    monkeypatch.setattr(log_ingestor.requests, "get", fake_get)

    lines = list(fetch_log_lines("http://logs.example.com/auth.txt", timeout=5))
    assert lines == ["line one", "line two"]
    assert calls["url"] == "http://logs.example.com/auth.txt"
    assert calls["headers"] == {"Connection": "close"}
    assert calls["timeout"] == 5
    assert response.closed


def test_fetch_log_lines_http_error(monkeypatch):
    monkeypatch.setattr(
        log_ingestor.requests, "get", lambda url, **kw: FakeResponse([], status=404)
    )
    with pytest.raises(requests.HTTPError):
        list(fetch_log_lines("http://logs.example.com/missing.txt"))


def test_read_capture(tmp_path):
    path = tmp_path / "capture.txt"
    path.write_bytes("".join(RAW_RESPONSE).encode("utf-8"))

    assert len(list(read_capture(path))) == 2


def test_fetch_keeps_lines_when_crlf_straddles_chunk_edge(monkeypatch):
    # first line's "\r" is byte 511 and its "\n" byte 512
    first = "Aug 29 11:01:00 host sshd[12345]: Failed password "
    first = first.ljust(511, "x")
    lines = [first] + [
        f"Aug 29 11:01:0{n} host sshd[12345]: Failed password" for n in range(1, 6)
    ]
    body = "".join(line + "\r\n" for line in lines).encode("utf-8")
    assert body[511:513] == b"\r\n"

    response = requests.Response()
    response.status_code = 200
    response.encoding = "utf-8"
    response.raw = io.BytesIO(body)
    monkeypatch.setattr(log_ingestor.requests, "get", lambda url, **kw: response)

    fetched = list(fetch_log_lines("http://logs.example.com/auth.txt"))
    assert fetched == lines

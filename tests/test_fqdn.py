import threading
import time
import urllib.request
from concurrent.futures import ThreadPoolExecutor
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from suffixfqdn.errors import (
    InvalidTLDError,
    InvalidURLError,
    PublicSuffixDownloadError,
    PublicSuffixFormatError,
    PublicSuffixParseError,
)
from suffixfqdn.fqdn import FQDN
from suffixfqdn.options import Options

_PADDING = "".join(f"// padding line {i:05d} {'.' * 60}\n" for i in range(600))

PSL = (
    "// The Public Suffix List\n"
    "// https://publicsuffix.org/list/public_suffix_list.dat\n\n"
    "// ===BEGIN ICANN DOMAINS===\n"
    "com\norg\nnet\nuk\nco.uk\nio\ngoogle\nau\ngov.au\n*.ck\n!www.ck\n"
    + _PADDING
    + "// ===END ICANN DOMAINS===\n\n"
    "// ===BEGIN PRIVATE DOMAINS===\n"
    "github.io\nblogspot.com\n"
    "// ===END PRIVATE DOMAINS===\n"
)

SMALL_PSL = b"""// The Public Suffix List
// https://publicsuffix.org/list/public_suffix_list.dat

// ===BEGIN ICANN DOMAINS===
com
co.uk
org
// ===END ICANN DOMAINS===

// ===BEGIN PRIVATE DOMAINS===
github.io
amazonaws.com
// ===END PRIVATE DOMAINS===
"""


class _Handler(BaseHTTPRequestHandler):
    def do_GET(self):
        self.server.user_agents.append(self.headers.get("User-Agent", ""))
        if self.path == "/error":
            status, body = 500, b""
        elif self.path == "/small":
            status, body = 200, SMALL_PSL
        elif self.path == "/notpsl":
            status, body = 200, b"not the list\n" * 4000
        elif self.path == "/slow":
            time.sleep(0.5)
            status, body = 200, PSL.encode()
        else:
            status, body = 200, PSL.encode()
        self.send_response(status)
        self.send_header("Content-Type", "text/plain")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, *args):
        pass


@pytest.fixture(scope="module")
def server():
    httpd = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    httpd.user_agents = []
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{httpd.server_address[1]}", httpd
    httpd.shutdown()
    httpd.server_close()


def _opener():
    return urllib.request.build_opener(urllib.request.ProxyHandler({}))


@pytest.fixture(scope="module")
def psl_file(tmp_path_factory):
    path = tmp_path_factory.mktemp("psl") / "public_suffix_list.dat"
    path.write_text(PSL)
    return str(path)


@pytest.fixture(scope="module")
def fqdn(psl_file):
    return FQDN(Options(public_suffix_file=psl_file))


@pytest.mark.parametrize(
    "domain, count, expected",
    [
        ("example.com", 1, "com"),
        ("example.co.uk", 2, "co.uk"),
        ("sub.example.co.uk", 3, "example.co.uk"),
        ("deep.sub.example.co.uk", 4, "sub.example.co.uk"),
        ("very.deep.sub.example.co.uk", 5, "deep.sub.example.co.uk"),
    ],
)
def test_guess(fqdn, domain, count, expected):
    assert fqdn.guess(domain, count) == expected


@pytest.mark.parametrize(
    "domain, count", [("invalid", 1), ("", 1), ("example.com", 3)]
)
def test_guess_errors(fqdn, domain, count):
    with pytest.raises(InvalidURLError):
        fqdn.guess(domain, count)


@pytest.mark.parametrize(
    "url, remove, expected, has",
    [
        ("http://example.com", True, "example.com", True),
        ("https://example.com", True, "example.com", True),
        ("ftp://example.com", True, "example.com", True),
        ("fake://example.com", True, "example.com", True),
        ("example.com", True, "example.com", False),
        ("http://example.com", False, "http://example.com", True),
    ],
)
def test_has_scheme(fqdn, url, remove, expected, has):
    assert fqdn.has_scheme(url, remove) == (expected, has)


@pytest.mark.parametrize(
    "url, expected",
    [
        ("example.com", "example.com"),
        ("www.example.com", "example.com"),
        ("blog.www.example.com", "example.com"),
        ("https://example.com", "example.com"),
        ("https://example.com/path/to/resource", "example.com"),
        ("https://example.com?foo=bar", "example.com"),
        ("https://example.com:8080", "example.com"),
        ("example.co.uk", "example.co.uk"),
        ("www.example.co.uk", "example.co.uk"),
    ],
)
def test_get_fqdn(fqdn, url, expected):
    assert fqdn.get_fqdn(url) == expected


@pytest.mark.parametrize("url", ["invalid", "", ".", ".com", "example.com:abc"])
def test_get_fqdn_invalid_url(fqdn, url):
    with pytest.raises(InvalidURLError, match="invalid URL"):
        fqdn.get_fqdn(url)


def test_get_fqdn_unknown_suffix(fqdn):
    with pytest.raises(InvalidTLDError):
        fqdn.get_fqdn("example.unknownsuffix")


def test_find_tld(fqdn):
    assert fqdn.find_tld("www.example.co.uk") == "co.uk"
    assert fqdn.find_tld("example.com") == "com"
    assert fqdn.find_tld("example.nothere") is None


def test_wildcards_exceptions_and_private_skipped(fqdn):
    assert fqdn.find_tld("foo.ck") is None
    assert fqdn.get_fqdn("foo.github.io") == "github.io"


def test_private_suffixes_allowed(psl_file):
    manager = FQDN(Options(public_suffix_file=psl_file, allow_private_tlds=True))
    assert manager.get_fqdn("foo.github.io") == "foo.github.io"
    assert manager.find_tld("a.blogspot.com") == "blogspot.com"


def test_parse_public_suffix_data(psl_file):
    manager = FQDN(Options(public_suffix_file=psl_file))
    manager.parse_public_suffix_data(SMALL_PSL)
    assert manager.total == 3
    assert manager.find_tld("x.github.io") is None

    with pytest.raises(PublicSuffixFormatError):
        manager.parse_public_suffix_data(b"This is not the public suffix list")
    with pytest.raises(PublicSuffixFormatError):
        manager.parse_public_suffix_data(b"")
    assert manager.total == 3


def test_parse_with_private(psl_file):
    manager = FQDN(Options(public_suffix_file=psl_file, allow_private_tlds=True))
    manager.parse_public_suffix_data(SMALL_PSL.decode())
    assert manager.total == 5


def test_tidy_counts(fqdn):
    before = fqdn.total
    fqdn.tidy()
    assert fqdn.total == before
    assert fqdn.total == 11 - 2


def test_load_without_path(fqdn):
    with pytest.raises(PublicSuffixDownloadError, match="no file path provided"):
        fqdn.load_public_suffix_from_file("")


def test_missing_file(tmp_path):
    with pytest.raises(PublicSuffixDownloadError, match="failed to initialize FQDN manager"):
        FQDN(Options(public_suffix_file=str(tmp_path / "missing.dat")))


def test_download(server, psl_file):
    base, httpd = server
    manager = FQDN(Options(public_suffix_url=base + "/list", opener=_opener()))
    assert manager.get_fqdn("www.example.co.uk") == "example.co.uk"
    assert any("suffixfqdn" in agent for agent in httpd.user_agents)


def test_download_status_error(server, psl_file):
    base, _ = server
    with pytest.raises(PublicSuffixDownloadError) as info:
        FQDN(Options(public_suffix_url=base + "/error", opener=_opener()))
    assert "failed to initialize FQDN manager" in str(info.value)
    assert "unexpected status code: 500" in str(info.value)


def test_download_too_small(server, psl_file):
    base, _ = server
    manager = FQDN(Options(public_suffix_file=psl_file, opener=_opener()))
    with pytest.raises(PublicSuffixParseError, match="too small"):
        manager.download_public_suffix_file(base + "/small")


def test_download_wrong_format(server, psl_file):
    base, _ = server
    manager = FQDN(Options(public_suffix_file=psl_file, opener=_opener()))
    with pytest.raises(PublicSuffixFormatError):
        manager.download_public_suffix_file(base + "/notpsl")


def test_download_cancelled(server, psl_file):
    base, _ = server
    event = threading.Event()
    manager = FQDN(
        Options(public_suffix_file=psl_file, opener=_opener(), cancel_event=event)
    )
    timer = threading.Timer(0.1, event.set)
    timer.start()
    try:
        with pytest.raises(PublicSuffixDownloadError, match="cancelled"):
            manager.download_public_suffix_file(base + "/slow")
    finally:
        timer.cancel()


def test_download_already_cancelled(server, psl_file):
    base, _ = server
    event = threading.Event()
    manager = FQDN(
        Options(public_suffix_file=psl_file, opener=_opener(), cancel_event=event)
    )
    event.set()
    with pytest.raises(PublicSuffixDownloadError, match="cancelled"):
        manager.download_public_suffix_file(base + "/list")


def test_concurrent_lookups(fqdn):
    urls = ["www.example.com", "blog.example.co.uk"] * 25
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(fqdn.get_fqdn, urls))
    assert results == ["example.com", "example.co.uk"] * 25
"""Registrable-domain extraction backed by the public suffix list."""

from __future__ import annotations

import concurrent.futures
import ssl
import threading
import urllib.error
import urllib.parse
import urllib.request
from pathlib import Path

from .errors import (
    InvalidTLDError,
    InvalidURLError,
    PublicSuffixDownloadError,
    PublicSuffixFormatError,
    PublicSuffixParseError,
    TLDError,
)
from .etld import ETLD
from .options import (
    DEFAULT_TIMEOUT,
    ETLD_GROUP_MAX,
    MIN_DATA_SIZE,
    PUBLIC_SUFFIX_FILE_URL,
    Options,
    default_options,
)

_SCHEMES = ("http://", "https://", "ftp://", "ws://", "wss://", "fake://")
_PLACEHOLDER_SCHEME = "fake://"
_MAX_DOWNLOAD = 10 * 1024 * 1024
_USER_AGENT = "suffixfqdn/1.0"
_CANCEL_POLL = 0.05
_HEADER_LINES = 10


def _empty_groups() -> list[ETLD]:
    return [ETLD(dots) for dots in range(ETLD_GROUP_MAX)]


def _default_opener() -> urllib.request.OpenerDirector:
    context = ssl.create_default_context()
    context.minimum_version = ssl.TLSVersion.TLSv1_2
    return urllib.request.build_opener(urllib.request.HTTPSHandler(context=context))


def _fetch(
    opener: urllib.request.OpenerDirector,
    request: urllib.request.Request,
    timeout: float,
) -> bytes:
    try:
        with opener.open(request, timeout=timeout) as response:
            if response.status != 200:
                raise PublicSuffixDownloadError(
                    f"unexpected status code: {response.status} {response.reason}"
                )
            try:
                return response.read(_MAX_DOWNLOAD)
            except OSError as exc:
                raise PublicSuffixParseError(str(exc)) from exc
    except TLDError:
        raise
    except urllib.error.HTTPError as exc:
        raise PublicSuffixDownloadError(
            f"unexpected status code: {exc.code} {exc.reason}"
        ) from exc
    except (urllib.error.URLError, OSError, ValueError) as exc:
        raise PublicSuffixDownloadError(str(exc)) from exc


class FQDN:
    """Finds the registrable domain of URLs using a loaded suffix list.

    The list is loaded when the object is created, from
    ``options.public_suffix_file`` if set, otherwise downloaded from
    ``options.public_suffix_url``.
    """

    def __init__(self, options: Options | None = None) -> None:
        self.options = options if options is not None else default_options()
        self._lock = threading.RLock()
        self._groups = _empty_groups()
        self._total = 0
        try:
            if self.options.public_suffix_file:
                self.load_public_suffix_from_file(self.options.public_suffix_file)
            else:
                self.download_public_suffix_file(self.options.public_suffix_url)
        except TLDError as exc:
            context = "failed to initialize FQDN manager"
            if exc.context:
                context = f"{context}: {exc.context}"
            raise type(exc)(context) from exc

    @property
    def total(self) -> int:
        """Number of suffixes currently loaded."""
        with self._lock:
            return self._total

    def tidy(self) -> None:
        """Sort every suffix group and recount the total."""
        with self._lock:
            for group in self._groups:
                group.sort()
            self._total = sum(len(group) for group in self._groups)

    def has_scheme(self, url: str, remove: bool) -> tuple[str, bool]:
        """Report whether ``url`` starts with a known scheme, optionally stripping it."""
        for scheme in _SCHEMES:
            if url.startswith(scheme):
                return (url[len(scheme):] if remove else url), True
        return url, False

    def guess(self, domain: str, count: int) -> str:
        """Return the last ``count`` labels of ``domain`` as a candidate suffix."""
        if not domain or domain.count(".") < 1 or len(domain) < 3:
            raise InvalidURLError()
        groups = domain.split(".")
        if 1 <= count <= ETLD_GROUP_MAX and len(groups) >= count:
            return ".".join(groups[-count:])
        raise InvalidURLError("unable to make a guess")

    def find_tld(self, host: str) -> str | None:
        """Return the longest known suffix of ``host``, or ``None``."""
        with self._lock:
            for count in range(host.count("."), 0, -1):
                try:
                    candidate = self.guess(host, count)
                except InvalidURLError:
                    continue
                found = self._groups[count - 1].search(candidate)
                if found is not None:
                    return found
        return None

    def get_fqdn(self, src_url: str) -> str:
        """Return the registrable domain (name plus public suffix) of ``src_url``."""
        if not src_url or len(src_url) < 4 or "." not in src_url:
            raise InvalidURLError()

        src_url, had_scheme = self.has_scheme(src_url, False)
        if not had_scheme:
            src_url = _PLACEHOLDER_SCHEME + src_url

        try:
            parsed = urllib.parse.urlsplit(src_url)
            port = parsed.port
        except ValueError as exc:
            raise InvalidURLError(str(exc)) from exc

        host, _ = self.has_scheme(src_url, True)
        if port is not None:
            raw_port = parsed.netloc.rpartition(":")[2]
            host = host.replace(":" + raw_port, "", 1)
        if parsed.query:
            host = host.replace("?" + parsed.query, "", 1)
        if parsed.path not in ("", "/"):
            host = host.replace(parsed.path, "", 1)

        suffix = self.find_tld(host)
        if suffix is None:
            raise InvalidTLDError()

        domain_part = host.replace("." + suffix, "", 1)
        if not domain_part:
            raise InvalidURLError()
        return domain_part.rpartition(".")[2] + "." + suffix

    def load_public_suffix_from_file(self, file_path: str) -> None:
        """Load and parse the public suffix list from a local file."""
        if not file_path:
            raise PublicSuffixDownloadError("no file path provided")
        try:
            data = Path(file_path).read_bytes()
        except OSError as exc:
            raise PublicSuffixDownloadError(str(exc)) from exc
        self.parse_public_suffix_data(data)

    def download_public_suffix_file(self, file_url: str) -> None:
        """Download and parse the public suffix list from ``file_url``."""
        url = file_url or PUBLIC_SUFFIX_FILE_URL
        timeout = self.options.timeout or DEFAULT_TIMEOUT
        opener = self.options.opener or _default_opener()
        try:
            request = urllib.request.Request(
                url, headers={"User-Agent": _USER_AGENT}, method="GET"
            )
        except ValueError as exc:
            raise PublicSuffixDownloadError(str(exc)) from exc

        data = self._fetch_cancellable(opener, request, timeout)
        if len(data) < MIN_DATA_SIZE:
            raise PublicSuffixParseError(
                "response data size too small for public suffix file"
            )
        self.parse_public_suffix_data(data)

    def _fetch_cancellable(
        self,
        opener: urllib.request.OpenerDirector,
        request: urllib.request.Request,
        timeout: float,
    ) -> bytes:
        event = self.options.cancel_event
        if event is None:
            return _fetch(opener, request, timeout)
        if event.is_set():
            raise PublicSuffixDownloadError("download cancelled")
        executor = concurrent.futures.ThreadPoolExecutor(max_workers=1)
        try:
            future = executor.submit(_fetch, opener, request, timeout)
            while True:
                try:
                    return future.result(timeout=_CANCEL_POLL)
                except concurrent.futures.TimeoutError:
                    if event.is_set():
                        raise PublicSuffixDownloadError("download cancelled") from None
        finally:
            executor.shutdown(wait=False)

    def parse_public_suffix_data(self, data: bytes | str) -> None:
        """Replace the loaded suffixes with those found in ``data``."""
        if isinstance(data, (bytes, bytearray)):
            text = bytes(data).decode("utf-8", errors="replace")
        else:
            text = data
        lines = text.split("\n")

        if not any(PUBLIC_SUFFIX_FILE_URL in line for line in lines[:_HEADER_LINES]):
            raise PublicSuffixFormatError()

        groups = _empty_groups()
        icann = False
        for line in lines:
            if not line:
                continue
            if "===BEGIN ICANN DOMAINS===" in line:
                icann = True
                continue
            if "===END ICANN DOMAINS===" in line:
                icann = False
                continue
            if not self.options.allow_private_tlds and not icann:
                continue
            if line.startswith(("//", "*", "!")):
                continue
            suffix = line.strip().lower()
            if not suffix:
                continue
            dots = suffix.count(".")
            if dots < ETLD_GROUP_MAX:
                groups[dots].add(suffix)

        with self._lock:
            self._groups = groups
            self.tidy()
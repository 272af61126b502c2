"""Settings for loading the public suffix list."""

from __future__ import annotations

import threading
import urllib.request
from dataclasses import dataclass

#: Maximum number of dot-separated labels in a recognised suffix.
ETLD_GROUP_MAX = 5

#: Where the public suffix list is downloaded from by default.
PUBLIC_SUFFIX_FILE_URL = "https://publicsuffix.org/list/public_suffix_list.dat"

#: Smallest size, in bytes, that a downloaded list may have.
MIN_DATA_SIZE = 32768

#: Timeout, in seconds, used for HTTP requests when none is given.
DEFAULT_TIMEOUT = 10.0


@dataclass
class Options:
    """Options for the FQDN manager.

    ``timeout`` is in seconds; ``opener`` replaces the default HTTP opener;
    ``cancel_event``, when set, aborts a download in progress.
    """

    allow_private_tlds: bool = False
    timeout: float = DEFAULT_TIMEOUT
    opener: urllib.request.OpenerDirector | None = None
    public_suffix_url: str = PUBLIC_SUFFIX_FILE_URL
    public_suffix_file: str = ""
    cancel_event: threading.Event | None = None


def default_options() -> Options:
    """Return a fresh set of default options."""
    return Options()
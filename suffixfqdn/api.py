"""Module-level helpers sharing one lazily created FQDN manager."""

from __future__ import annotations

import threading

from .errors import TLDError
from .fqdn import FQDN
from .options import Options, default_options


class _Registry:
    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.initialized = False
        self.manager: FQDN | None = None
        self.error: TLDError | None = None


_registry = _Registry()


def init(options: Options | None = None) -> None:
    """Create the shared manager once; later calls keep the first outcome.

    Raises the error from the first initialisation if it failed.
    """
    with _registry.lock:
        if not _registry.initialized:
            try:
                _registry.manager = FQDN(options)
            except TLDError as exc:
                _registry.error = exc
            _registry.initialized = True
        error = _registry.error
    if error is not None:
        raise error


def reset() -> None:
    """Forget the shared manager so that the next call initialises again."""
    with _registry.lock:
        _registry.initialized = False
        _registry.manager = None
        _registry.error = None


def get_fqdn(url: str) -> str:
    """Return the registrable domain of ``url`` using the shared manager."""
    manager = _registry.manager
    if manager is None:
        init(default_options())
        manager = _registry.manager
    assert manager is not None
    return manager.get_fqdn(url)


def validate_origin(origin: str, allowed_origins) -> bool:
    """Tell whether the registrable domain of ``origin`` is among ``allowed_origins``."""
    try:
        domain = get_fqdn(origin)
    except TLDError:
        return False
    return domain in allowed_origins
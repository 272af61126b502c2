"""Thread-safe sorted list of effective top-level domains."""

from __future__ import annotations

import bisect
import threading


class ETLD:
    """Effective TLDs that share the same number of dots."""

    def __init__(self, dots: int = 0) -> None:
        self.dots = dots
        self._items: list[str] = []
        self._lock = threading.RLock()

    @property
    def items(self) -> list[str]:
        """A snapshot of the stored suffixes, in their current order."""
        with self._lock:
            return list(self._items)

    def add(self, value: str, sort_list: bool = False) -> bool:
        """Append ``value`` unless already present; return whether it was added."""
        with self._lock:
            if value in self._items:
                return False
            self._items.append(value)
            if sort_list:
                self.sort()
            return True

    def sort(self) -> None:
        """Sort the stored suffixes in place."""
        with self._lock:
            self._items.sort()

    def search(self, value: str) -> str | None:
        """Binary-search the (sorted) list; return the match or ``None``."""
        with self._lock:
            idx = bisect.bisect_left(self._items, value)
            if idx < len(self._items) and self._items[idx] == value:
                return self._items[idx]
            return None

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __contains__(self, value: object) -> bool:
        return isinstance(value, str) and self.search(value) is not None

    def __repr__(self) -> str:
        return f"ETLD(dots={self.dots}, count={len(self)})"
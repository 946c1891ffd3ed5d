"""
In-memory memo for loaded resources.

The cache is owned by whoever composes the services and passed in; there is no
module-level instance. Entries are never replaced: the first value stored for
a key wins and later loads for the same key are discarded.
"""

from collections.abc import Callable
from typing import Any


class ResourceCache:
    """Append-only key/value store."""

    def __init__(self) -> None:
        self._entries: dict[str, Any] = {}

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> Any | None:
        return self._entries.get(key)

    def add(self, key: str, value: Any) -> Any:
        """Store ``value`` unless the key is taken; return the stored value."""
        return self._entries.setdefault(key, value)

    def get_or_load(self, key: str, loader: Callable[[], Any]) -> Any:
        """
        Return the cached value, calling ``loader`` on a miss.

        Two callers racing on the same key may both run ``loader``; both get
        back whichever value was stored first.
        """
        if key in self._entries:
            return self._entries[key]
        return self.add(key, loader())

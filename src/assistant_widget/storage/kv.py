"""Key-value persistence capability for small pieces of widget state."""

from typing import Dict, Optional, Protocol


class KeyValueStore(Protocol):
    """Minimal string key-value capability."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryStore:
    """Process-local store. Used in tests and non-interactive runs."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

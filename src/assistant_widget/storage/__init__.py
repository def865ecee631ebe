"""Storage module for persisted widget state.

``QSettingsStore`` lives in ``storage.qsettings`` so the core stays importable without Qt.
"""

from .kv import KeyValueStore, MemoryStore

__all__ = [
    "KeyValueStore",
    "MemoryStore",
]

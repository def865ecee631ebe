"""KeyValueStore backed by QSettings."""

from pathlib import Path
from typing import Optional, Union

from PyQt6.QtCore import QSettings

from ..config.settings import APP_NAME


class QSettingsStore:
    """Store backed by QSettings (registry, plist or INI depending on platform).

    Args:
        path: Optional INI file. When omitted the native per-user location
            for ``(organization, application)`` is used.
        organization: QSettings organization name
        application: QSettings application name
    """

    def __init__(
        self,
        path: Optional[Union[str, Path]] = None,
        organization: str = APP_NAME,
        application: str = "widget",
    ):
        if path is not None:
            self._settings = QSettings(str(path), QSettings.Format.IniFormat)
        else:
            self._settings = QSettings(organization, application)

    def get(self, key: str) -> Optional[str]:
        value = self._settings.value(key, None)
        if value is None:
            return None
        return str(value)

    def set(self, key: str, value: str) -> None:
        self._settings.setValue(key, value)
        self._settings.sync()
        if self._settings.status() != QSettings.Status.NoError:
            raise OSError(f"Failed to write setting '{key}': {self._settings.status().name}")

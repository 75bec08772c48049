"""
Preferences module.

Host preference storage consumed by the machine translation connectors. Values
live in a flat YAML mapping on disk and every write goes straight through to
the file so that concurrent readers always see the last confirmed settings.
"""

import os
import logging
import threading
from typing import Any, Dict, Optional

import yaml


class PreferencesError(Exception):
    """Custom exception for preference file errors."""
    pass


class Preferences:
    """
    YAML backed key/value preference store.

    Attributes:
        path (str): Location of the preferences file.
        logger: Logger instance for preference operations.
    """

    def __init__(self, path: Optional[str] = "preferences.yaml"):
        """
        Initializes the store and loads any existing preferences.

        Args:
            path: Preferences file. ``None`` keeps everything in memory only.
        """
        self.path = path
        self.logger = logging.getLogger(__name__)
        self._lock = threading.RLock()
        self._values: Dict[str, Any] = {}
        self.load()

    def load(self) -> None:
        """Reloads preferences from disk, replacing the in-memory values."""
        with self._lock:
            if not self.path or not os.path.exists(self.path):
                self._values = {}
                return
            try:
                with open(self.path, "r", encoding="utf-8") as f:
                    data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                self.logger.error(f"Error parsing preferences file {self.path}: {e}")
                raise PreferencesError(f"Invalid preferences file {self.path}: {e}") from e
            if data is None:
                data = {}
            if not isinstance(data, dict):
                raise PreferencesError(f"Preferences file {self.path} must contain a mapping")
            self._values = data
            self.logger.debug(f"Loaded {len(data)} preferences from {self.path}")

    def save(self) -> None:
        """Writes the current preferences to disk."""
        with self._lock:
            if not self.path:
                return
            directory = os.path.dirname(os.path.abspath(self.path))
            os.makedirs(directory, exist_ok=True)
            tmp_path = f"{self.path}.tmp"
            try:
                with open(tmp_path, "w", encoding="utf-8") as f:
                    yaml.safe_dump(self._values, f, default_flow_style=False, allow_unicode=True)
                os.replace(tmp_path, self.path)
            finally:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)

    def get_preference_default(self, key: str, default: Any = None) -> Any:
        """
        Returns the stored value for ``key`` or ``default`` when it is not set.

        Stored values are returned as strings, like the host dialogs write them.
        """
        with self._lock:
            value = self._values.get(key)
        if value is None:
            return default
        return str(value)

    def set_preference(self, key: str, value: Any) -> None:
        """Stores a preference and persists the file."""
        if not key:
            raise ValueError("Preference key cannot be empty.")
        with self._lock:
            self._values[key] = value if isinstance(value, bool) else str(value)
            self.save()
        self.logger.debug(f"Preference '{key}' updated")

    def remove_preference(self, key: str) -> None:
        with self._lock:
            if self._values.pop(key, None) is not None:
                self.save()

    def is_preference(self, key: str) -> bool:
        """Returns True when the preference holds a true boolean flag."""
        with self._lock:
            value = self._values.get(key)
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() == "true"

    def existing(self, key: str) -> bool:
        with self._lock:
            return key in self._values

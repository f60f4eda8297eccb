"""
Small key-value preferences store backed by a JSON file.

Holds durable flags such as the authentication lockout. Reads fall back to
defaults when the file is missing or unreadable; writes are atomic.
"""

import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Union

from bucketlist.core.storage import atomic_write_bytes

logger = logging.getLogger(__name__)


class PreferencesStore:
    """Durable string-keyed settings, loaded once and written through on change."""

    def __init__(self, path: Union[str, Path], file_mode: int = 0o600):
        self.path = Path(path)
        self.file_mode = file_mode
        self._lock = threading.Lock()
        self._values: Dict[str, Any] = self._read()

    def _read(self) -> Dict[str, Any]:
        try:
            raw = json.loads(self.path.read_bytes())
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable preferences file {self.path}: {e}")
            return {}
        if not isinstance(raw, dict):
            logger.warning(f"Ignoring malformed preferences file {self.path}")
            return {}
        return raw

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._values.get(key, default)

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self.get(key, default)
        return value if isinstance(value, bool) else default

    def set(self, key: str, value: Any) -> bool:
        """
        Store ``value`` under ``key`` and write the file.

        Returns:
            True if the value reached disk, False if only memory was updated
        """
        with self._lock:
            self._values[key] = value
            payload = json.dumps(self._values, sort_keys=True).encode("utf-8")
            try:
                atomic_write_bytes(self.path, payload, mode=self.file_mode)
            except OSError as e:
                logger.error(f"Unable to save preference '{key}': {e}")
                return False
        return True

    def set_bool(self, key: str, value: bool) -> bool:
        return self.set(key, bool(value))

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return dict(self._values)

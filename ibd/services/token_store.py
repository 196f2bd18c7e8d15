"""
Local key-value storage for the API client.

A small JSON file plays the part browser local storage plays for the web
frontend: it holds the user token plus the theme and preference values.
Every read goes back to the file, so a token written by another process
is picked up by the next request.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from ..config import settings

logger = logging.getLogger(__name__)

THEME_KEY = "ibd_theme"
PREFERENCES_KEY = "ibd_preferences"


class TokenStoreError(Exception):
    """The storage file exists but cannot be read or parsed"""


class TokenStore:
    """JSON-file backed key-value store with string values"""

    def __init__(self, path: Optional[str] = None, token_key: Optional[str] = None):
        self.path = Path(path or settings.token_store_path).expanduser()
        self.token_key = token_key or settings.token_storage_key

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise TokenStoreError(f"Cannot read storage file {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise TokenStoreError(f"Storage file {self.path} does not hold a JSON object")
        return data

    def _write(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            with tmp_path.open("w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
        except (OSError, TypeError, ValueError):
            tmp_path.unlink(missing_ok=True)
            raise
        tmp_path.replace(self.path)

    # ==================
    # Key-value access
    # ==================

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)

    def clear(self) -> None:
        """Remove token, theme and preferences"""
        data = self._read()
        for key in (self.token_key, THEME_KEY, PREFERENCES_KEY):
            data.pop(key, None)
        self._write(data)

    # ==================
    # Token management
    # ==================

    def get_token(self) -> Optional[str]:
        return self.get(self.token_key)

    def set_token(self, token: str) -> None:
        self.set(self.token_key, token)

    def remove_token(self) -> None:
        self.remove(self.token_key)

    # ==================
    # Theme / preferences
    # ==================

    def get_theme(self) -> Optional[str]:
        return self.get(THEME_KEY)

    def set_theme(self, theme: str) -> None:
        self.set(THEME_KEY, theme)

    def get_preferences(self) -> Dict[str, Any]:
        """Stored preferences, or {} when missing or unreadable"""
        try:
            raw = self.get(PREFERENCES_KEY)
            return json.loads(raw) if raw else {}
        except (TokenStoreError, TypeError, ValueError) as e:
            logger.warning(f"Ignoring unreadable preferences: {e}")
            return {}

    def set_preferences(self, preferences: Dict[str, Any]) -> None:
        self.set(PREFERENCES_KEY, json.dumps(preferences))

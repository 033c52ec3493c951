"""Caller-side state: prompt history, favorites, dark mode, latest previews.

Persistence goes through an injected `KeyValueStore` so the orchestrator
itself never touches storage.
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, List, Optional, Protocol

from svgcompare import config
from svgcompare import logger as logger_mod

from .orchestrator import GenerationOrchestrator, GenerationResultSet

log = logger_mod.get_logger()

HISTORY_KEY = "promptHistory"
FAVORITES_KEY = "favorites"
DARK_MODE_KEY = "darkMode"


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError


class MemoryStore:
    def __init__(self, data: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(data or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore:
    """Stores every key in one JSON object on disk."""

    def __init__(self, path: str = config.STATE_FILE) -> None:
        self.path = path

    def _read(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            log.warning(f"Ignoring unreadable state file {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)


def _load(store: KeyValueStore, key: str, default: Any) -> Any:
    raw = store.get(key)
    if raw is None:
        return default
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        log.warning(f"Ignoring corrupt stored value for {key!r}")
        return default
    return value if isinstance(value, type(default)) else default


class AppState:
    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        *,
        history_limit: int = config.HISTORY_LIMIT,
    ) -> None:
        self._store = store or MemoryStore()
        self._history_limit = history_limit
        self.history: List[str] = _load(self._store, HISTORY_KEY, [])
        self.favorites: Dict[str, str] = _load(self._store, FAVORITES_KEY, {})
        self.dark_mode: bool = _load(self._store, DARK_MODE_KEY, False)
        self.previews: Optional[GenerationResultSet] = None

    def _save(self, key: str, value: Any) -> None:
        self._store.set(key, json.dumps(value))

    def add_to_history(self, prompt: str) -> None:
        if not prompt or prompt in self.history:
            return
        self.history = [prompt, *self.history][: self._history_limit]
        self._save(HISTORY_KEY, self.history)

    def add_to_favorites(self, title: str, svg: str) -> None:
        self.favorites = {**self.favorites, title: svg}
        self._save(FAVORITES_KEY, self.favorites)

    def remove_from_favorites(self, title: str) -> None:
        self.favorites = {k: v for k, v in self.favorites.items() if k != title}
        self._save(FAVORITES_KEY, self.favorites)

    def toggle_dark_mode(self) -> bool:
        self.dark_mode = not self.dark_mode
        self._save(DARK_MODE_KEY, self.dark_mode)
        return self.dark_mode

    def generate(
        self, prompt: str, orchestrator: GenerationOrchestrator
    ) -> GenerationResultSet:
        """Run a generation, remember the prompt and keep the new previews."""

        result = orchestrator.generate_all(prompt)
        self.add_to_history(prompt.strip())
        self.previews = result
        return result

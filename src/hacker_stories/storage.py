from __future__ import annotations

import json
import logging
import os
from typing import Callable, Dict, List, Optional

logger = logging.getLogger("hacker_stories")


class KeyValueStore:
    """String values by key, kept in a single JSON object file."""

    def __init__(self, path: str):
        self.path = path

    def _read(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r") as f:
                data = json.load(f)
        except (IOError, json.JSONDecodeError) as e:
            logger.warning("Failed to read state file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring state file %s: expected a JSON object", self.path)
            return {}
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        try:
            os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
            with open(self.path, "w") as f:
                json.dump(data, f)
            logger.debug("Stored %s=%r in %s", key, value, self.path)
        except IOError as e:
            logger.warning("Failed to write state file %s: %s", self.path, e)


class SemiPersistentState:
    """A string value read once from a KeyValueStore and written back on change.

    A stored empty string counts as absent, so the value falls back to
    ``initial``. Writes happen through an ordinary change observer; callers
    may subscribe their own observers the same way.
    """

    def __init__(self, store: KeyValueStore, key: str, initial: str):
        self.store = store
        self.key = key
        self._value = store.get(key) or initial
        self._observers: List[Callable[[str], None]] = []
        self.subscribe(self._persist)

    @property
    def value(self) -> str:
        return self._value

    def set(self, value: str) -> None:
        if value == self._value:
            return
        self._value = value
        for observer in list(self._observers):
            observer(value)

    def subscribe(self, observer: Callable[[str], None]) -> None:
        self._observers.append(observer)

    def _persist(self, value: str) -> None:
        self.store.set(self.key, value)

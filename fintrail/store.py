"""A small persistent key/value store kept in a JSON file."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Union

PathLike = Union[str, "os.PathLike[str]"]

ONBOARDED_KEY = "is_onboarded"


class Store:
    """JSON-backed settings; changes are written by ``save``."""

    def __init__(self, path: PathLike, data: dict[str, Any] | None = None) -> None:
        self.path = Path(path)
        self._data: dict[str, Any] = dict(data or {})

    @classmethod
    def load(cls, path: PathLike) -> Store:
        """Read the store at ``path``; a missing file gives an empty store."""
        file = Path(path)
        try:
            text = file.read_text(encoding="utf-8")
        except FileNotFoundError:
            return cls(file)
        data = json.loads(text) if text.strip() else {}
        if not isinstance(data, dict):
            raise ValueError(f"store file {file} does not hold a JSON object")
        return cls(file, data)

    def get(self, key: str) -> Any:
        """Return the value for ``key``, or None if it is unset."""
        return self._data.get(key)

    def set(self, key: str, value: Any) -> None:
        """Set ``key``; the value must be JSON-serialisable."""
        self._data[key] = json.loads(json.dumps(value))

    def save(self) -> None:
        """Write the store to its file atomically."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(json.dumps(self._data, indent=2), encoding="utf-8")
        os.replace(tmp, self.path)

    def __contains__(self, key: object) -> bool:
        return key in self._data


def ensure_onboarding_flag(store: Store) -> bool:
    """Set the onboarding flag to False if absent and return its value."""
    if store.get(ONBOARDED_KEY) is None:
        store.set(ONBOARDED_KEY, False)
    return store.get(ONBOARDED_KEY)
from __future__ import annotations

import copy
import json
import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from threading import RLock
from typing import Any, Dict, Iterator, List, Optional

logger = logging.getLogger(__name__)

Collections = Dict[str, Dict[str, dict]]


class JsonFileStore:
    """Development datastore: every collection kept in one JSON file.

    Documents are plain dicts keyed by id inside a named collection. All
    reads and writes go through a process-wide lock; `transaction()` works on
    a copy and only replaces (and saves) the live data when the block exits
    without an exception.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._lock = RLock()
        self._data: Collections = self._load()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> Collections:
        if not self._path.exists():
            logger.info("No data file at %s, starting fresh", self._path)
            return {}
        with self._path.open("r", encoding="utf-8") as fh:
            raw = json.load(fh)
        if not isinstance(raw, dict):
            raise ValueError(f"Data file {self._path} must contain a JSON object")
        logger.info("Loaded data file %s", self._path)
        return {str(name): dict(docs) for name, docs in raw.items()}

    def _save(self, data: Collections) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=".store-", suffix=".json", dir=str(self._path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self._path)
        except Exception:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    @contextmanager
    def transaction(self) -> Iterator[Collections]:
        with self._lock:
            working = copy.deepcopy(self._data)
            yield working
            self._save(working)
            self._data = working

    def get(self, collection: str, doc_id: str) -> Optional[dict]:
        with self._lock:
            doc = self._data.get(collection, {}).get(doc_id)
            return copy.deepcopy(doc) if doc is not None else None

    def all(self, collection: str) -> List[dict]:
        with self._lock:
            return [copy.deepcopy(d) for d in self._data.get(collection, {}).values()]

    def find_one(self, collection: str, **fields: Any) -> Optional[dict]:
        with self._lock:
            for doc in self._data.get(collection, {}).values():
                if all(doc.get(k) == v for k, v in fields.items()):
                    return copy.deepcopy(doc)
            return None

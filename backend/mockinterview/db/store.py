"""
Document store backing the `interviews` and `feedback` collections.

Documents live in one JSON file per store, rewritten atomically on every
write. Passing `path=None` keeps everything in memory (tests, QA mode).
"""
from __future__ import annotations

import copy
import json
import logging
import uuid
from pathlib import Path
from threading import Lock
from typing import Any, Iterable

from mockinterview.errors import PersistenceError

logger = logging.getLogger("mockinterview.db.store")

Filter = tuple[str, str, Any]

_OPERATORS = {
    "==": lambda left, right: left == right,
    "!=": lambda left, right: left != right,
}


class Collection:
    def __init__(self, store: "JsonDocumentStore", name: str):
        self._store = store
        self.name = name

    def create(self, data: dict[str, Any]) -> str:
        doc_id = uuid.uuid4().hex[:20]
        self._store._write(self.name, doc_id, dict(data or {}))
        return doc_id

    def set(self, doc_id: str, data: dict[str, Any]) -> str:
        key = str(doc_id or "").strip()
        if not key:
            raise PersistenceError(f"{self.name}: document id is required")
        self._store._write(self.name, key, dict(data or {}))
        return key

    def get(self, doc_id: str) -> dict[str, Any] | None:
        return self._store._read(self.name, str(doc_id or "").strip())

    def update(self, doc_id: str, patch: dict[str, Any]) -> None:
        self._store._patch(self.name, str(doc_id or "").strip(), dict(patch or {}))

    def delete(self, doc_id: str) -> None:
        self._store._remove(self.name, str(doc_id or "").strip())

    def query(
        self,
        filters: Iterable[Filter] = (),
        order_by: tuple[str, str] | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        checks = []
        for field, op, value in filters:
            if op not in _OPERATORS:
                raise PersistenceError(f"Unsupported filter operator: {op}")
            checks.append((field, _OPERATORS[op], value))

        rows = []
        for doc_id, data in self._store._snapshot(self.name):
            if all(compare(data.get(field), value) for field, compare, value in checks):
                rows.append({"id": doc_id, **data})

        if order_by:
            field, direction = order_by
            rows.sort(key=lambda row: str(row.get(field) or ""), reverse=str(direction).lower() == "desc")
        if limit is not None:
            rows = rows[: max(0, int(limit))]
        return rows


class JsonDocumentStore:
    def __init__(self, path: Path | str | None = None):
        self._lock = Lock()
        self._path = Path(path) if path else None
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}
        self._load()

    def collection(self, name: str) -> Collection:
        return Collection(self, name)

    def _load(self) -> None:
        if self._path is None or not self._path.exists():
            self._collections = {}
            return
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except Exception as exc:
            logger.warning("store load failed | path=%s err=%s", self._path, exc)
            payload = {}
        if isinstance(payload, dict):
            self._collections = {
                str(name): {str(k): v for k, v in docs.items() if isinstance(v, dict)}
                for name, docs in payload.items()
                if isinstance(docs, dict)
            }
        else:
            self._collections = {}

    def _persist(self, collections: dict[str, dict[str, dict[str, Any]]]) -> None:
        if self._path is None:
            return
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            temp_path = self._path.with_suffix(".tmp")
            temp_path.write_text(json.dumps(collections, ensure_ascii=False), encoding="utf-8")
            temp_path.replace(self._path)
        except OSError as exc:
            raise PersistenceError(f"store write failed: {exc}") from exc

    def _commit(self, name: str, docs: dict[str, dict[str, Any]]) -> None:
        # Memory only changes once the file write has succeeded. Caller holds the lock.
        updated = dict(self._collections)
        updated[name] = docs
        self._persist(updated)
        self._collections = updated

    def _write(self, name: str, doc_id: str, data: dict[str, Any]) -> None:
        with self._lock:
            docs = dict(self._collections.get(name, {}))
            docs[doc_id] = copy.deepcopy(data)
            self._commit(name, docs)

    def _read(self, name: str, doc_id: str) -> dict[str, Any] | None:
        with self._lock:
            data = self._collections.get(name, {}).get(doc_id)
            return copy.deepcopy(data) if isinstance(data, dict) else None

    def _patch(self, name: str, doc_id: str, patch: dict[str, Any]) -> None:
        with self._lock:
            docs = dict(self._collections.get(name, {}))
            if doc_id not in docs:
                raise PersistenceError(f"{name}/{doc_id} does not exist")
            docs[doc_id] = {**docs[doc_id], **copy.deepcopy(patch)}
            self._commit(name, docs)

    def _remove(self, name: str, doc_id: str) -> None:
        with self._lock:
            docs = dict(self._collections.get(name, {}))
            if docs.pop(doc_id, None) is not None:
                self._commit(name, docs)

    def _snapshot(self, name: str) -> list[tuple[str, dict[str, Any]]]:
        with self._lock:
            return [(k, copy.deepcopy(v)) for k, v in self._collections.get(name, {}).items()]


_default_store: JsonDocumentStore | None = None


def get_store() -> JsonDocumentStore:
    global _default_store
    if _default_store is None:
        from core.config import DATA_DIR, QA_MODE

        _default_store = JsonDocumentStore(None if QA_MODE else DATA_DIR / "documents.json")
    return _default_store


def set_store(store: JsonDocumentStore | None) -> None:
    global _default_store
    _default_store = store

"""
In-process stand-in for the Firestore client used when USE_MOCK_DB is enabled.

Implements the subset of the client API the services rely on:
collection(name).document(id).set/get/update and collection.where/limit/stream,
plus the SERVER_TIMESTAMP and Increment transforms.
State is optionally mirrored to a JSON file so local runs survive restarts.
"""

import copy
import json
import logging
import os
import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from firebase_admin import firestore
from google.api_core.exceptions import NotFound

logger = logging.getLogger(__name__)

_DATETIME_KEY = "__datetime__"


def _encode(value: Any) -> Any:
    if isinstance(value, datetime):
        return {_DATETIME_KEY: value.isoformat()}
    if isinstance(value, dict):
        return {k: _encode(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_encode(v) for v in value]
    return value


def _decode(value: Any) -> Any:
    if isinstance(value, dict):
        if set(value.keys()) == {_DATETIME_KEY}:
            return datetime.fromisoformat(value[_DATETIME_KEY])
        return {k: _decode(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_decode(v) for v in value]
    return value


def _apply_transforms(current: Dict[str, Any], data: Dict[str, Any]) -> Dict[str, Any]:
    """Resolve Firestore sentinels against the currently stored document."""
    resolved = {}
    for key, value in data.items():
        if value is firestore.SERVER_TIMESTAMP:
            resolved[key] = datetime.now(timezone.utc)
        elif isinstance(value, firestore.Increment):
            resolved[key] = (current.get(key) or 0) + value.value
        else:
            resolved[key] = copy.deepcopy(value)
    return resolved


class MockDocumentSnapshot:
    def __init__(self, doc_id: str, data: Optional[Dict[str, Any]]):
        self.id = doc_id
        self._data = data

    @property
    def exists(self) -> bool:
        return self._data is not None

    def to_dict(self) -> Optional[Dict[str, Any]]:
        return copy.deepcopy(self._data) if self._data is not None else None


class MockDocumentReference:
    def __init__(self, db: "MockFirestore", collection: str, doc_id: str):
        self._db = db
        self._collection = collection
        self.id = doc_id

    def set(self, data: Dict[str, Any], merge: bool = False) -> None:
        with self._db._lock:
            docs = self._db._data.setdefault(self._collection, {})
            current = docs.get(self.id, {}) if merge else {}
            updated = dict(current)
            updated.update(_apply_transforms(current, data))
            docs[self.id] = updated
            self._db._flush()

    def update(self, data: Dict[str, Any]) -> None:
        with self._db._lock:
            docs = self._db._data.setdefault(self._collection, {})
            if self.id not in docs:
                raise NotFound(f"No document to update: {self._collection}/{self.id}")
            current = docs[self.id]
            current.update(_apply_transforms(current, data))
            self._db._flush()

    def get(self) -> MockDocumentSnapshot:
        with self._db._lock:
            data = self._db._data.get(self._collection, {}).get(self.id)
            return MockDocumentSnapshot(self.id, copy.deepcopy(data))


class MockQuery:
    _OPERATORS = {
        "==": lambda a, b: a == b,
        "!=": lambda a, b: a != b,
        "<": lambda a, b: a is not None and a < b,
        "<=": lambda a, b: a is not None and a <= b,
        ">": lambda a, b: a is not None and a > b,
        ">=": lambda a, b: a is not None and a >= b,
        "in": lambda a, b: a in b,
        "array_contains": lambda a, b: isinstance(a, list) and b in a,
    }

    def __init__(self, db: "MockFirestore", collection: str, filters=None, limit_count: Optional[int] = None):
        self._db = db
        self._collection = collection
        self._filters = filters or []
        self._limit = limit_count

    def where(self, field_path: str, op_string: str, value: Any) -> "MockQuery":
        if op_string not in self._OPERATORS:
            raise ValueError(f"Unsupported operator in mock Firestore: {op_string}")
        return MockQuery(self._db, self._collection, self._filters + [(field_path, op_string, value)], self._limit)

    def limit(self, count: int) -> "MockQuery":
        return MockQuery(self._db, self._collection, self._filters, count)

    def stream(self) -> List[MockDocumentSnapshot]:
        with self._db._lock:
            docs = self._db._data.get(self._collection, {})
            results = []
            for doc_id, data in docs.items():
                if all(self._OPERATORS[op](data.get(field), value) for field, op, value in self._filters):
                    results.append(MockDocumentSnapshot(doc_id, copy.deepcopy(data)))
                if self._limit is not None and len(results) >= self._limit:
                    break
            return results


class MockCollectionReference(MockQuery):
    def __init__(self, db: "MockFirestore", collection: str):
        super().__init__(db, collection)
        self.id = collection

    def document(self, doc_id: Optional[str] = None) -> MockDocumentReference:
        return MockDocumentReference(self._db, self._collection, doc_id or uuid.uuid4().hex[:20])


class MockFirestore:
    """Dictionary-backed Firestore look-alike, optionally persisted to JSON."""

    def __init__(self, path: Optional[str] = None):
        self._path = path
        self._lock = threading.RLock()
        self._data: Dict[str, Dict[str, Dict[str, Any]]] = {}
        if path and os.path.exists(path):
            try:
                with open(path, "r", encoding="utf-8") as f:
                    self._data = _decode(json.load(f))
                logger.info(f"Loaded mock Firestore state from {path}")
            except (OSError, json.JSONDecodeError) as e:
                logger.warning(f"Could not read mock DB file {path}: {e}. Starting empty.")

    def collection(self, name: str) -> MockCollectionReference:
        return MockCollectionReference(self, name)

    def _flush(self) -> None:
        if not self._path:
            return
        with open(self._path, "w", encoding="utf-8") as f:
            json.dump(_encode(self._data), f, indent=2)


def get_mock_db(path: Optional[str] = None) -> MockFirestore:
    return MockFirestore(path)

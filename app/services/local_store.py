"""
File-backed data store that persists across process restarts.
Replaces Firestore with a JSON-file-backed dict store.
Used when no Firebase credentials are found.
"""

import copy
import json
import threading
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from app.utils.logger import get_logger

logger = get_logger(__name__)


def _json_serial(obj):
    """JSON serializer for objects not serializable by default."""
    if isinstance(obj, datetime):
        return obj.isoformat()
    raise TypeError(f"Type {type(obj)} not serializable")


class LocalStore:
    """File-backed data store that mimics the Firestore operations we use.

    With ``data_dir=None`` the store lives in memory only.
    """

    def __init__(self, data_dir: Optional[Path] = None):
        self.collections: Dict[str, Dict[str, dict]] = {}
        self._lock = threading.RLock()
        self._data_dir = Path(data_dir) if data_dir else None

        if self._data_dir is not None:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            self._load_data()

    def _load_data(self):
        """Load every ``<collection>.json`` file from the data dir."""
        for path in sorted(self._data_dir.glob("*.json")):
            with open(path) as f:
                documents = json.load(f)
            if isinstance(documents, list):
                # Seed exports are lists of documents carrying their own id
                documents = {
                    doc.pop("id", str(uuid.uuid4())): doc for doc in documents
                }
            self.collections[path.stem] = documents
            logger.debug(f"Loaded {len(documents)} documents into {path.stem}")

    def _persist_collection(self, name: str):
        """Write a collection to disk as JSON."""
        path = self._data_dir / f"{name}.json"
        with open(path, "w") as f:
            json.dump(self.collections.get(name, {}), f, indent=2, default=_json_serial)

    def _persist(self, collection_name: str):
        """Persist after write operations when file-backed."""
        if self._data_dir is None:
            return
        try:
            self._persist_collection(collection_name)
        except OSError as e:
            logger.error(f"Failed to persist collection {collection_name}: {e}")

    def collection(self, name: str) -> "CollectionRef":
        with self._lock:
            self.collections.setdefault(name, {})
        return CollectionRef(self, name)

    def transaction(self) -> "LocalTransaction":
        return LocalTransaction(self)

    def run_transaction(self, func: Callable[..., Any], *args, **kwargs) -> Any:
        """Run ``func(transaction, ...)`` with exclusive access to the store.

        Writes buffered on the transaction are applied only if ``func``
        returns without raising.
        """
        with self._lock:
            transaction = self.transaction()
            result = func(transaction, *args, **kwargs)
            transaction.commit()
            return result


class LocalTransaction:
    """Buffers writes and applies them together on commit."""

    def __init__(self, store: LocalStore):
        self._store = store
        self._writes: List[Tuple[str, "DocumentRef", dict]] = []

    def set(self, ref: "DocumentRef", data: dict, merge: bool = False):
        self._writes.append(("merge" if merge else "set", ref, copy.deepcopy(data)))

    def update(self, ref: "DocumentRef", data: dict):
        if not ref.get().exists:
            raise KeyError(f"No document to update: {ref.path}")
        self._writes.append(("update", ref, copy.deepcopy(data)))

    def commit(self):
        with self._store._lock:
            touched = set()
            for kind, ref, data in self._writes:
                documents = self._store.collections.setdefault(ref.collection_name, {})
                if kind == "set":
                    documents[ref.id] = data
                else:
                    documents.setdefault(ref.id, {}).update(data)
                touched.add(ref.collection_name)
            self._writes.clear()
            for name in touched:
                self._store._persist(name)


class CollectionRef:
    """Mimics Firestore collection reference.

    Supports the query surface the CRUD layer uses: equality filters and
    ``limit``.
    """

    def __init__(self, store: LocalStore, name: str):
        self._store = store
        self._name = name
        self._filters: List[Tuple[str, Any]] = []
        self._limit_val: Optional[int] = None

    @property
    def id(self) -> str:
        return self._name

    def document(self, doc_id: Optional[str] = None) -> "DocumentRef":
        return DocumentRef(self._store, self._name, doc_id or uuid.uuid4().hex)

    def _copy(self) -> "CollectionRef":
        new_ref = CollectionRef(self._store, self._name)
        new_ref._filters = list(self._filters)
        new_ref._limit_val = self._limit_val
        return new_ref

    def where(self, field: Optional[str] = None, op: Optional[str] = None, value=None, *, filter=None) -> "CollectionRef":
        if filter is not None:
            field, op, value = filter.field_path, filter.op_string, filter.value
        if op != "==":
            raise ValueError(f"Unsupported filter operator for LocalStore: {op!r}")
        new_ref = self._copy()
        new_ref._filters.append((field, value))
        return new_ref

    def limit(self, count: int) -> "CollectionRef":
        new_ref = self._copy()
        new_ref._limit_val = count
        return new_ref

    def get(self) -> List["DocumentSnapshot"]:
        with self._store._lock:
            results = [
                (doc_id, copy.deepcopy(doc))
                for doc_id, doc in self._store.collections.get(self._name, {}).items()
            ]

        for field, value in self._filters:
            results = [(doc_id, doc) for doc_id, doc in results if doc.get(field) == value]

        if self._limit_val:
            results = results[: self._limit_val]

        return [
            DocumentSnapshot(DocumentRef(self._store, self._name, doc_id), doc)
            for doc_id, doc in results
        ]

    def add(self, data: dict) -> Tuple[datetime, "DocumentRef"]:
        """Create a document with a generated ID, as Firestore's ``add`` does."""
        ref = self.document()
        ref.set(data)
        return datetime.now(), ref


class DocumentRef:
    """Mimics Firestore document reference."""

    def __init__(self, store: LocalStore, collection_name: str, doc_id: str):
        self._store = store
        self.collection_name = collection_name
        self._id = doc_id

    @property
    def id(self):
        return self._id

    @property
    def path(self) -> str:
        return f"{self.collection_name}/{self._id}"

    def get(self, transaction: Optional[LocalTransaction] = None) -> "DocumentSnapshot":
        with self._store._lock:
            doc = self._store.collections.get(self.collection_name, {}).get(self._id)
            return DocumentSnapshot(self, copy.deepcopy(doc))

    def set(self, data: dict, merge: bool = False):
        with self._store._lock:
            documents = self._store.collections.setdefault(self.collection_name, {})
            if merge and self._id in documents:
                documents[self._id].update(copy.deepcopy(data))
            else:
                documents[self._id] = copy.deepcopy(data)
            self._store._persist(self.collection_name)

    def update(self, data: dict):
        with self._store._lock:
            documents = self._store.collections.setdefault(self.collection_name, {})
            if self._id not in documents:
                raise KeyError(f"No document to update: {self.path}")
            documents[self._id].update(copy.deepcopy(data))
            self._store._persist(self.collection_name)

    def delete(self):
        with self._store._lock:
            self._store.collections.get(self.collection_name, {}).pop(self._id, None)
            self._store._persist(self.collection_name)


class DocumentSnapshot:
    """Mimics Firestore document snapshot."""

    def __init__(self, reference: DocumentRef, data: Optional[dict]):
        self.reference = reference
        self.id = reference.id
        self._data = data

    @property
    def exists(self) -> bool:
        return self._data is not None

    def to_dict(self) -> Optional[dict]:
        return self._data

    def get(self, field: str, default=None):
        if self._data is None:
            return default
        return self._data.get(field, default)

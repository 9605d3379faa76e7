"""
JSON collection helpers shared by every store.

Each collection is a single JSON file holding a list of documents.
Writes go through a temp file in the same directory and are moved into
place, so a reader never sees a half-written collection. Every
read-modify-write runs inside `locked_collection`, which serialises
writers to the same file within the process.
"""

import json
import logging
import os
import shutil
import tempfile
import threading
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Dict, Iterator, List, Optional

from marketplace.config import settings

logger = logging.getLogger(__name__)

_locks: Dict[str, threading.RLock] = {}
_locks_guard = threading.Lock()


class CorruptedCollectionError(ValueError):
    """A collection file exists but does not hold a JSON list."""


def collection_path(name: str) -> str:
    return os.path.join(settings.data_dir, f"{name}.json")


def _lock_for(path: str) -> threading.RLock:
    key = os.path.abspath(path)
    with _locks_guard:
        if key not in _locks:
            _locks[key] = threading.RLock()
        return _locks[key]


def load_collection(path: str) -> List[Dict]:
    if not os.path.exists(path):
        return []

    with open(path, "r", encoding="utf-8") as f:
        content = f.read().strip()
    if not content:
        return []
    try:
        documents = json.loads(content)
    except json.JSONDecodeError as exc:
        logger.error("Corrupted collection file %s", path)
        raise CorruptedCollectionError(f"Corrupted collection file {path}") from exc
    if not isinstance(documents, list):
        logger.error("Collection file %s does not hold a list", path)
        raise CorruptedCollectionError(f"Collection file {path} does not hold a list")
    return documents


def save_collection(path: str, documents: List[Dict]) -> None:
    """Atomically replace the collection at `path`."""
    directory = os.path.dirname(path) or "."
    os.makedirs(directory, exist_ok=True)
    tmp_fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
    os.close(tmp_fd)

    try:
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(documents, f, indent=2)
        shutil.move(tmp_path, path)
    finally:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)


@contextmanager
def locked_collection(path: str) -> Iterator[List[Dict]]:
    """
    Load the collection under its lock and save it when the block exits cleanly.

    An exception inside the block leaves the file as it was.
    """
    with _lock_for(path):
        documents = load_collection(path)
        yield documents
        save_collection(path, documents)


def find_by_id(documents: List[Dict], doc_id: str) -> Optional[Dict]:
    return next((d for d in documents if d["id"] == doc_id), None)


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()

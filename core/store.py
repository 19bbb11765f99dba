"""
Local Document Store
JSON-file stand-in for the hosted document database. One file holds named
collections of documents keyed by id:

    {"resources": {"<id>": {...}}, "accessRequests": {...}, "visitationLogs": {...}}

Reads return copies with the document id merged in as "id".
"""
from __future__ import annotations

import copy
import json
import logging
import os
import secrets
import string
import tempfile
import threading
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


RESOURCES = "resources"
ACCESS_REQUESTS = "accessRequests"
VISITATION_LOGS = "visitationLogs"

_ID_ALPHABET = string.ascii_letters + string.digits
_ID_LENGTH = 20


class StoreError(Exception):
    """The store file could not be read or written."""


def new_document_id() -> str:
    """Random 20-character alphanumeric id."""
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_LENGTH))


class ResourceStore:
    """
    Collections of JSON documents persisted to a single file.

    Example:
        store = ResourceStore("data/resource_guide.json")
        ref = store.add_resource({"name": "Alpha Shelter"})
        store.update_resource(ref["id"], {"entryStatus": "complete"})
    """

    def __init__(self, path: str):
        self.path = path
        self._lock = threading.Lock()

    # -------------------------------------------------------------------------
    # Resources
    # -------------------------------------------------------------------------

    def get_resources(self) -> List[Dict[str, Any]]:
        return self._list(RESOURCES)

    def get_resource(self, resource_id: str) -> Dict[str, Any]:
        return self._get(RESOURCES, resource_id)

    def add_resource(self, data: Dict[str, Any]) -> Dict[str, str]:
        return {"id": self._add(RESOURCES, data)}

    def update_resource(self, resource_id: str, updates: Dict[str, Any]) -> None:
        self._update(RESOURCES, resource_id, updates)

    def delete_resource(self, resource_id: str) -> None:
        self._delete(RESOURCES, resource_id)

    # -------------------------------------------------------------------------
    # Access requests
    # -------------------------------------------------------------------------

    def get_access_requests(self) -> List[Dict[str, Any]]:
        return self._list(ACCESS_REQUESTS)

    def create_access_request(self, data: Dict[str, Any]) -> Dict[str, str]:
        return {"id": self._add(ACCESS_REQUESTS, data)}

    def update_access_request(self, request_id: str, updates: Dict[str, Any]) -> None:
        self._update(ACCESS_REQUESTS, request_id, updates)

    # -------------------------------------------------------------------------
    # Visitation logs
    # -------------------------------------------------------------------------

    def get_visitation_logs(self, visitation_id: Optional[str] = None) -> List[Dict[str, Any]]:
        logs = self._list(VISITATION_LOGS)
        if visitation_id is None:
            return logs
        return [log for log in logs if log.get("visitationId") == visitation_id]

    def add_visitation_log(self, entry: Dict[str, Any]) -> Dict[str, str]:
        """Keeps the entry's own "log-<millis>" id unless that id is already taken."""
        return {"id": self._add(VISITATION_LOGS, entry, preferred_id=entry.get("id"))}

    # -------------------------------------------------------------------------
    # Collection primitives
    # -------------------------------------------------------------------------

    def _list(self, collection: str) -> List[Dict[str, Any]]:
        with self._lock:
            docs = self._read().get(collection, {})
        return [{"id": doc_id, **copy.deepcopy(doc)} for doc_id, doc in docs.items()]

    def _get(self, collection: str, doc_id: str) -> Dict[str, Any]:
        with self._lock:
            docs = self._read().get(collection, {})
        if doc_id not in docs:
            raise KeyError(f"No document {doc_id!r} in {collection}")
        return {"id": doc_id, **copy.deepcopy(docs[doc_id])}

    def _add(self, collection: str, data: Dict[str, Any], preferred_id: Optional[str] = None) -> str:
        doc = {k: v for k, v in data.items() if k != "id"}
        with self._lock:
            contents = self._read()
            docs = contents.setdefault(collection, {})
            doc_id = preferred_id or new_document_id()
            while doc_id in docs:
                doc_id = new_document_id()
            docs[doc_id] = copy.deepcopy(doc)
            self._write(contents)
        logger.info("Added %s/%s", collection, doc_id)
        return doc_id

    def _update(self, collection: str, doc_id: str, updates: Dict[str, Any]) -> None:
        with self._lock:
            contents = self._read()
            docs = contents.get(collection, {})
            if doc_id not in docs:
                raise KeyError(f"No document {doc_id!r} in {collection}")
            docs[doc_id].update({k: copy.deepcopy(v) for k, v in updates.items() if k != "id"})
            self._write(contents)
        logger.info("Updated %s/%s (%s)", collection, doc_id, ", ".join(sorted(updates)))

    def _delete(self, collection: str, doc_id: str) -> None:
        with self._lock:
            contents = self._read()
            docs = contents.get(collection, {})
            if doc_id not in docs:
                raise KeyError(f"No document {doc_id!r} in {collection}")
            del docs[doc_id]
            self._write(contents)
        logger.info("Deleted %s/%s", collection, doc_id)

    # -------------------------------------------------------------------------
    # File I/O
    # -------------------------------------------------------------------------

    def _read(self) -> Dict[str, Dict[str, Dict[str, Any]]]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                contents = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"Could not read store {self.path}: {e}") from e
        if not isinstance(contents, dict):
            raise StoreError(f"Store {self.path} does not contain a JSON object")
        return contents

    def _write(self, contents: Dict[str, Any]) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(contents, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise StoreError(f"Could not write store {self.path}: {e}") from e

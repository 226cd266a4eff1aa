"""In-memory submission store, for tests and throwaway sessions."""

import copy
import logging
import threading
from typing import Any

from mentor_diagnosis.exceptions import PersistenceError

from .adapter import MODULE_DATA_KEYS, Identity, has_progress

logger = logging.getLogger(__name__)


class InMemorySubmissionStore:
    """Keeps the latest snapshot per (email, module) and a log of every submit."""

    def __init__(self):
        self._lock = threading.Lock()
        self._data: dict[str, dict[str, Any]] = {}
        self.calls: list[tuple[Identity, str, dict[str, Any]]] = []

    def submit(self, identity: Identity, module_name: str, payload: dict[str, Any]) -> None:
        if not identity.email:
            raise PersistenceError("Email required")
        if module_name not in MODULE_DATA_KEYS:
            raise PersistenceError(f"Unknown module: {module_name}")
        with self._lock:
            stored = copy.deepcopy(payload)
            self.calls.append((identity, module_name, stored))
            user = self._data.setdefault(identity.email, {"user_name": identity.name})
            user["user_name"] = identity.name
            user[module_name] = stored
        logger.debug(f"Stored {module_name} for {identity.email}")

    def load_snapshots(self, email: str) -> dict[str, dict[str, Any]]:
        with self._lock:
            user = self._data.get(email, {})
            return {m: copy.deepcopy(user[m]) for m in MODULE_DATA_KEYS if user.get(m)}

    def list_summaries(self) -> list[dict[str, Any]]:
        with self._lock:
            return [
                {
                    "user_email": email,
                    "user_name": user.get("user_name", ""),
                    "progress": {m: has_progress(user.get(m)) for m in MODULE_DATA_KEYS},
                }
                for email, user in self._data.items()
            ]

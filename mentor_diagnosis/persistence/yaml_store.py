"""YAML-backed submission store.

Keeps every user's latest module snapshots in a single YAML file, upserted
by email. This is the default backend for local runs and the Streamlit app.
"""

import logging
import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import yaml

from mentor_diagnosis.exceptions import PersistenceError

from .adapter import MODULE_DATA_KEYS, Identity, has_progress

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass
class Submission:
    """All data stored for one user.

    Each ``*_data`` slot holds the latest session snapshot of that module,
    or None if the module was never saved.
    """

    id: str
    user_email: str
    user_name: str
    created_at: str
    updated_at: str
    module_data: dict[str, dict[str, Any] | None] = field(
        default_factory=lambda: {module: None for module in MODULE_DATA_KEYS}
    )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "user_email": self.user_email,
            "user_name": self.user_name,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
        for module, key in MODULE_DATA_KEYS.items():
            data[key] = self.module_data.get(module)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Submission":
        return cls(
            id=str(data.get("id", "")),
            user_email=data.get("user_email", ""),
            user_name=data.get("user_name", ""),
            created_at=data.get("created_at", ""),
            updated_at=data.get("updated_at", ""),
            module_data={module: data.get(key) for module, key in MODULE_DATA_KEYS.items()},
        )

    def progress(self) -> dict[str, bool]:
        return {module: has_progress(self.module_data.get(module)) for module in MODULE_DATA_KEYS}


class YamlSubmissionStore:
    """Manages the submissions YAML file.

    Example submissions.yaml:
        submissions:
          - id: "3f9c2a1b"
            user_email: "ana@example.com"
            user_name: "Ana"
            created_at: "2025-01-15T10:00:00Z"
            updated_at: "2025-01-15T12:00:00Z"
            mentor_data:
              module: mentor
              status: todo
              started: true
              step: 3
              answers: {...}
            mentee_data: null
            method_data: null
            delivery_data: null
    """

    def __init__(self, path: Path | str):
        """Initialize the store.

        Args:
            path: Path to the YAML file (created on first submit)
        """
        self.path = Path(path)
        self._lock = threading.Lock()

    def exists(self) -> bool:
        return self.path.exists()

    def _read(self) -> list[Submission]:
        if not self.exists():
            return []
        with open(self.path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return [Submission.from_dict(item) for item in data.get("submissions", []) or []]

    def _write(self, submissions: list[Submission]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(
                {"submissions": [s.to_dict() for s in submissions]},
                f,
                default_flow_style=False,
                sort_keys=False,
                allow_unicode=True,
            )
        tmp_path.replace(self.path)

    def submit(self, identity: Identity, module_name: str, payload: dict[str, Any]) -> None:
        """Upsert ``payload`` as ``module_name``'s data for ``identity``.

        Raises:
            PersistenceError: If the identity has no email or the module is unknown
        """
        if not identity.email:
            raise PersistenceError("Email required")
        if module_name not in MODULE_DATA_KEYS:
            raise PersistenceError(f"Unknown module: {module_name}")

        with self._lock:
            submissions = self._read()
            submission = next((s for s in submissions if s.user_email == identity.email), None)
            now = _now()
            if submission is None:
                submission = Submission(
                    id=uuid.uuid4().hex[:8],
                    user_email=identity.email,
                    user_name=identity.name,
                    created_at=now,
                    updated_at=now,
                )
                submissions.append(submission)
                logger.info(f"New submission created for {identity.email}")

            submission.updated_at = now
            submission.user_name = identity.name
            submission.module_data[module_name] = payload
            self._write(submissions)

    def load(self, email: str) -> Submission | None:
        """Load one user's submission, or None."""
        with self._lock:
            return next((s for s in self._read() if s.user_email == email), None)

    def load_snapshots(self, email: str) -> dict[str, dict[str, Any]]:
        """Stored module snapshots for ``email``, keyed by module name."""
        submission = self.load(email)
        if submission is None:
            return {}
        return {module: data for module, data in submission.module_data.items() if data}

    def list_summaries(self) -> list[dict[str, Any]]:
        """Summary of every submission with per-module has-progress flags."""
        with self._lock:
            submissions = self._read()
        return [
            {
                "id": s.id,
                "user_email": s.user_email,
                "user_name": s.user_name,
                "updated_at": s.updated_at,
                "progress": s.progress(),
            }
            for s in submissions
        ]

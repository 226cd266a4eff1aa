"""Persistence adapters for module submissions.

The engine depends only on ``PersistenceAdapter.submit``; the YAML store is
the default backend and the in-memory store backs tests.
"""

from mentor_diagnosis.persistence.adapter import Identity, PersistenceAdapter, has_progress
from mentor_diagnosis.persistence.memory_store import InMemorySubmissionStore
from mentor_diagnosis.persistence.yaml_store import Submission, YamlSubmissionStore

__all__ = [
    "Identity",
    "InMemorySubmissionStore",
    "PersistenceAdapter",
    "Submission",
    "YamlSubmissionStore",
    "has_progress",
]

"""Persistence adapter contract.

The wizard only ever needs one operation: hand a module's snapshot to the
backend for a given user. Callers never wait on or inspect the outcome.
"""

from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict


class Identity(BaseModel):
    """Logged-in user, as supplied by the auth collaborator.

    Treated as an opaque read-only context value by the engine.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    email: str


@runtime_checkable
class PersistenceAdapter(Protocol):
    """Anything that can receive module submissions."""

    def submit(self, identity: Identity, module_name: str, payload: dict[str, Any]) -> None:
        """Store ``payload`` as the latest data of ``module_name`` for ``identity``."""
        ...


# Keys of the per-module data slots on a stored submission
MODULE_DATA_KEYS: dict[str, str] = {
    "mentor": "mentor_data",
    "mentee": "mentee_data",
    "method": "method_data",
    "delivery": "delivery_data",
}


def has_progress(snapshot: dict[str, Any] | None) -> bool:
    """Whether a stored module snapshot shows the module was started."""
    if not snapshot:
        return False
    return bool(snapshot.get("started")) or snapshot.get("status", "todo") != "todo"

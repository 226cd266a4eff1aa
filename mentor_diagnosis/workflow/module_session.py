"""Per-module wizard state as one immutable value.

A ModuleSession bundles everything the wizard knows about one module: its
answers, the step cursor, the lifecycle status, and whether the user has
started it. Every change returns a new session, and the whole session is
persisted as a single snapshot.

Edits are refused (the same session is returned) once the module has left
``todo``, so no editing surface needs its own read-only checks.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any

from pydantic import BaseModel

from mentor_diagnosis.answers.base import set_path
from mentor_diagnosis.config import ModuleId, ModuleStatus
from mentor_diagnosis.exceptions import UnknownOperation

from .module_registry import get_module
from .sequencer import max_steps, resume_step
from .validation_gate import can_advance

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModuleSession:
    """Wizard state of one module.

    Attributes:
        module: Which module this is
        answers: The module's answer record
        step: Current step cursor (``max_steps + 1`` is the completion view)
        status: Lifecycle status
        started: Set on the first edit that actually changed the answers
        touched: Dotted paths / operation names that have been edited
    """

    module: ModuleId
    answers: BaseModel
    step: int = 1
    status: ModuleStatus = ModuleStatus.TODO
    started: bool = False
    touched: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def new(cls, module: ModuleId | str) -> "ModuleSession":
        meta = get_module(module)
        return cls(module=meta.module_id, answers=meta.initial_answers())

    # ------------------------------------------------------------------
    # Derived properties
    # ------------------------------------------------------------------

    @property
    def branch(self) -> str | None:
        branch_field = get_module(self.module).branch_field
        return getattr(self.answers, branch_field) if branch_field else None

    @property
    def is_read_only(self) -> bool:
        return self.status is not ModuleStatus.TODO

    @property
    def max_steps(self) -> int:
        return max_steps(self.module, self.answers)

    @property
    def at_completion_view(self) -> bool:
        return self.step > self.max_steps

    @property
    def in_progress(self) -> bool:
        """Derived label: still editable and already started."""
        return self.status is ModuleStatus.TODO and self.started

    @property
    def has_progress(self) -> bool:
        """Whether the dashboard should treat the module as started."""
        return self.status is not ModuleStatus.TODO or self.started

    def can_advance(self) -> bool:
        return can_advance(self.module, self.step, self.answers, self.status)

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------

    def _with_answers(self, answers: BaseModel, touched: str) -> "ModuleSession":
        if self.is_read_only:
            logger.debug(f"{self.module.value} is {self.status.value}; edit to {touched} ignored")
            return self
        if answers == self.answers:
            return self
        updated = replace(
            self,
            answers=answers,
            started=True,
            touched=self.touched | {touched},
        )
        if updated.branch != self.branch:
            # A new branch may have fewer steps; never leave the cursor past its resume point
            updated = replace(updated, step=min(self.step, resume_step(self.module, answers)))
        return updated

    def set_field(self, path: str, value: Any) -> "ModuleSession":
        """Replace one answer field by dotted path.

        Setting the module's branch field goes through the module's branch
        setter so the abandoned branch is cleared, and the cursor is pulled
        back to the new branch's resume step if it was further along.

        Raises:
            InvalidAnswerPath: If the path does not exist
            ValidationError: If the value is not valid for the field
        """
        if self.is_read_only:
            return self._with_answers(self.answers, path)
        meta = get_module(self.module)
        if meta.branch_field is not None and path == meta.branch_field:
            answers = meta.set_branch(self.answers, value)
        else:
            answers = set_path(self.answers, path, value)
        return self._with_answers(answers, path)

    def apply_operation(self, name: str, **kwargs: Any) -> "ModuleSession":
        """Run a named collection operation (e.g. ``add_persona``).

        Raises:
            UnknownOperation: If the module has no operation with that name
        """
        operation = get_module(self.module).operations.get(name)
        if operation is None:
            raise UnknownOperation(f"{self.module.value} has no operation '{name}'")
        if self.is_read_only:
            return self._with_answers(self.answers, name)
        return self._with_answers(operation(self.answers, **kwargs), name)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def resume(self) -> "ModuleSession":
        """Move the cursor to where a returning user should land."""
        return replace(self, step=resume_step(self.module, self.answers))

    def advance(self) -> "ModuleSession":
        """Move forward one step if the gate allows it.

        From the last step this lands on the completion view.
        """
        if self.at_completion_view or not self.can_advance():
            return self
        return replace(self, step=self.step + 1)

    def back(self) -> "ModuleSession":
        return replace(self, step=max(1, self.step - 1))

    def go_to(self, step: int) -> "ModuleSession":
        """Jump to ``step`` (used by "edit" links on the completion view).

        Only steps up to the current resume position are reachable, so the
        gates cannot be bypassed by jumping ahead.
        """
        reachable = min(resume_step(self.module, self.answers), self.max_steps + 1)
        if self.is_read_only:
            reachable = self.max_steps + 1
        if step < 1 or step > reachable:
            logger.debug(f"{self.module.value}: step {step} not reachable (max {reachable})")
            return self
        return replace(self, step=step)

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    def with_status(self, status: ModuleStatus) -> "ModuleSession":
        return replace(self, status=status)

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    def snapshot(self) -> dict[str, Any]:
        """Serializable snapshot of the whole session."""
        return {
            "module": self.module.value,
            "branch": self.branch,
            "step": self.step,
            "status": self.status.value,
            "started": self.started,
            "touched": sorted(self.touched),
            "answers": self.answers.model_dump(mode="json"),
        }

    @classmethod
    def from_snapshot(cls, data: dict[str, Any]) -> "ModuleSession":
        """Rebuild a session from :meth:`snapshot` output."""
        meta = get_module(data["module"])
        return cls(
            module=meta.module_id,
            answers=meta.answers_model.model_validate(data.get("answers") or {}),
            step=int(data.get("step", 1)),
            status=ModuleStatus(data.get("status", ModuleStatus.TODO.value)),
            started=bool(data.get("started", False)),
            touched=frozenset(data.get("touched") or ()),
        )

"""Base classes for module step checklists.

A checklist is an ordered list of steps for one module. Each step carries two
predicates over the module's answers:

- ``is_present``: is the minimum content for this step saved? Used to derive
  where a returning user resumes.
- ``can_advance``: may the user move forward from this step? Usually stricter
  than ``is_present`` (length thresholds, every collection item complete).

Branching modules return a different step list depending on the branch
answer; with the branch unset the list holds only the branch question.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from mentor_diagnosis.config import ModuleId

logger = logging.getLogger(__name__)


# =============================================================================
# Step Rule
# =============================================================================


@dataclass(frozen=True)
class StepRule:
    """One step of a module's sequence.

    Attributes:
        title: Human-readable step title
        is_present: Predicate for "this step's minimum content is saved"
        can_advance: Predicate for "the user may move past this step"
    """

    title: str
    is_present: Callable[[Any], bool]
    can_advance: Callable[[Any], bool]


# =============================================================================
# Checklist Result
# =============================================================================


@dataclass
class ChecklistResult:
    """Result of walking a module's checklist.

    Attributes:
        resume_step: Step the user should land on (``max_steps + 1`` when
            every step is present, meaning the completion view)
        max_steps: Number of steps in the current branch
        branch: Branch answer the sequence was chosen from, if any
        details: Per-step presence and gate results
    """

    resume_step: int
    max_steps: int
    branch: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def is_complete(self) -> bool:
        return self.resume_step > self.max_steps


# =============================================================================
# Base Checklist
# =============================================================================


class ModuleChecklist:
    """Base class for a module's step checklist.

    Subclasses implement ``steps()``; branching modules also set
    ``branch_field``.
    """

    module_id: ModuleId
    branch_field: str | None = None

    def branch(self, answers: Any) -> str | None:
        if self.branch_field is None:
            return None
        return getattr(answers, self.branch_field)

    def steps(self, answers: Any) -> list[StepRule]:
        """Return the ordered steps for the current branch.

        Raises:
            NotImplementedError: Subclasses must implement this method
        """
        raise NotImplementedError("Subclasses must implement steps()")

    def max_steps(self, answers: Any) -> int:
        return len(self.steps(answers))

    def resume_step(self, answers: Any) -> int:
        """First step whose minimum content is missing, or ``max_steps + 1``."""
        steps = self.steps(answers)
        for index, rule in enumerate(steps, start=1):
            if not rule.is_present(answers):
                return index
        return len(steps) + 1

    def can_advance(self, step: int, answers: Any) -> bool:
        """Gate for moving forward from ``step``. Unknown steps never pass."""
        steps = self.steps(answers)
        if step < 1 or step > len(steps):
            return False
        return bool(steps[step - 1].can_advance(answers))

    def evaluate(self, answers: Any) -> ChecklistResult:
        """Walk every step and report presence and gate results."""
        steps = self.steps(answers)
        details = {
            index: {
                "title": rule.title,
                "present": bool(rule.is_present(answers)),
                "can_advance": bool(rule.can_advance(answers)),
            }
            for index, rule in enumerate(steps, start=1)
        }
        result = ChecklistResult(
            resume_step=self.resume_step(answers),
            max_steps=len(steps),
            branch=self.branch(answers),
            details=details,
        )
        logger.debug(
            f"{self.module_id.value} checklist: resume={result.resume_step}/{result.max_steps}"
        )
        return result

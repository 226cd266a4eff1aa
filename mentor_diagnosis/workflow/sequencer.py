"""Step sequencing for the diagnostic modules.

Derives, purely from saved answers, which step a returning user lands on.
The completion view is represented by ``max_steps + 1``.
"""

from typing import Any

from mentor_diagnosis.config import ModuleId

from .step_checklists import ChecklistResult, get_checklist


def resume_step(module: ModuleId | str, answers: Any) -> int:
    """Step a returning user should land on.

    Walks the module's checklist in order and returns the first step whose
    minimum content is missing. When every step is present, returns
    ``max_steps + 1`` (the completion view). With the branch answer unset the
    sequence is just the branch question, so the result is 1.
    """
    return get_checklist(module).resume_step(answers)


def max_steps(module: ModuleId | str, answers: Any) -> int:
    """Number of steps in the module's current branch."""
    return get_checklist(module).max_steps(answers)


def completion_step(module: ModuleId | str, answers: Any) -> int:
    return max_steps(module, answers) + 1


def step_titles(module: ModuleId | str, answers: Any) -> list[str]:
    return [rule.title for rule in get_checklist(module).steps(answers)]


def describe_progress(module: ModuleId | str, answers: Any) -> ChecklistResult:
    """Full per-step breakdown, for progress bars and debugging."""
    return get_checklist(module).evaluate(answers)

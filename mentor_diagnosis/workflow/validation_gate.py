"""Forward-navigation gate.

Validation failures are not errors: the gate is a boolean and the UI simply
disables the "next" control.
"""

from typing import Any

from mentor_diagnosis.config import ModuleId, ModuleStatus

from .step_checklists import get_checklist


def can_advance(
    module: ModuleId | str,
    step: int,
    answers: Any,
    status: ModuleStatus = ModuleStatus.TODO,
) -> bool:
    """Whether the user may move forward from ``step``.

    A module that is no longer editable (under review or completed) never
    blocks navigation, since its content is frozen for inspection.
    Steps outside the current branch's range return False.
    """
    if status is not ModuleStatus.TODO:
        return True
    return get_checklist(module).can_advance(step, answers)

"""Step checklists for the diagnostic modules.

Each module has a dedicated checklist that lists its steps (per branch) with
a resume predicate and a forward gate for each. One file per module.
"""

import logging

from mentor_diagnosis.config import ModuleId

from .base import ChecklistResult, ModuleChecklist, StepRule
from .delivery import DeliveryChecklist
from .mentee import MenteeChecklist
from .mentor import MentorChecklist
from .method import MethodChecklist

logger = logging.getLogger(__name__)

# Registry of checklists
_CHECKLISTS: dict[ModuleId, ModuleChecklist] = {
    ModuleId.MENTOR: MentorChecklist(),
    ModuleId.MENTEE: MenteeChecklist(),
    ModuleId.METHOD: MethodChecklist(),
    ModuleId.DELIVERY: DeliveryChecklist(),
}


def get_checklist(module: ModuleId | str) -> ModuleChecklist:
    """Get the checklist for a module.

    Args:
        module: ModuleId or its string value

    Returns:
        The module's ModuleChecklist

    Raises:
        ValueError: If the module is not recognized
    """
    if isinstance(module, str):
        module = ModuleId(module) if module in ModuleId.values() else None
    checklist = _CHECKLISTS.get(module)
    if checklist is None:
        raise ValueError(f"No checklist registered for module: {module}")
    return checklist


__all__ = [
    "ChecklistResult",
    "DeliveryChecklist",
    "MenteeChecklist",
    "MentorChecklist",
    "MethodChecklist",
    "ModuleChecklist",
    "StepRule",
    "get_checklist",
]

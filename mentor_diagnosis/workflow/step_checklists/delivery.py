"""Step checklist for the Delivery module.

Delivery has no separate resume predicates; a step counts as present exactly
when its gate passes.
"""

from mentor_diagnosis.answers.base import filled
from mentor_diagnosis.answers.delivery import DeliveryAnswers
from mentor_diagnosis.config import OTHER_ENGAGEMENT_OPTION, ModuleId

from .base import ModuleChecklist, StepRule


def _identity_ready(a: DeliveryAnswers) -> bool:
    return filled(a.group_name) and filled(a.unique_objective)


def _mandatory_ready(a: DeliveryAnswers) -> bool:
    m = a.mandatory
    if m.frequency is None or not m.online_engagement or not filled(m.community_rules):
        return False
    if OTHER_ENGAGEMENT_OPTION in m.online_engagement and not filled(m.other_engagement_text):
        return False
    return True


def _overdelivery_ready(a: DeliveryAnswers) -> bool:
    o = a.overdelivery
    if o.has_individual is None:
        return False
    if o.has_individual == "yes" and not (filled(o.individual_details) and filled(o.frequency)):
        return False
    return all(filled(acc.pillar) and filled(acc.acceleration) for acc in o.accelerators)


_STEPS: list[StepRule] = [
    StepRule(title="Group identity", is_present=_identity_ready, can_advance=_identity_ready),
    StepRule(title="Mandatory delivery", is_present=_mandatory_ready, can_advance=_mandatory_ready),
    StepRule(title="Overdelivery", is_present=_overdelivery_ready, can_advance=_overdelivery_ready),
]


class DeliveryChecklist(ModuleChecklist):
    """Three fixed steps, no branch."""

    module_id = ModuleId.DELIVERY

    def steps(self, answers: DeliveryAnswers) -> list[StepRule]:
        return _STEPS

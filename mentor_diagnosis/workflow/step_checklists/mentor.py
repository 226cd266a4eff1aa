"""Step checklist for the Mentor module."""

from mentor_diagnosis.answers.base import filled, longer_than
from mentor_diagnosis.answers.mentor import MentorAnswers
from mentor_diagnosis.config import ModuleId

from .base import ModuleChecklist, StepRule


def _podium(a: MentorAnswers) -> list[str]:
    return [a.step3.first, a.step3.second, a.step3.third]


def _culture(a: MentorAnswers) -> list[str]:
    return [a.step4.mission, a.step4.vision, a.step4.values]


def _has_social_proof(a: MentorAnswers) -> bool:
    return len(a.step6.testimonials) > 0 or a.step6.has_no_testimonials


_STEPS: list[StepRule] = [
    StepRule(
        title="Elevator pitch",
        is_present=lambda a: filled(a.step1.field4),
        can_advance=lambda a: filled(a.step1.field4),
    ),
    StepRule(
        title="Timeline",
        is_present=lambda a: len(a.step2.moments) > 0,
        can_advance=lambda a: len(a.step2.moments) > 0,
    ),
    StepRule(
        title="Podium",
        is_present=lambda a: all(_podium(a)),
        can_advance=lambda a: all(filled(v) for v in _podium(a)),
    ),
    StepRule(
        title="Culture",
        is_present=lambda a: all(_culture(a)),
        can_advance=lambda a: all(filled(v) for v in _culture(a)),
    ),
    StepRule(
        title="Strategic positioning",
        is_present=lambda a: longer_than(a.step5.text, 5),
        can_advance=lambda a: longer_than(a.step5.text, 5),
    ),
    StepRule(
        title="Testimonials",
        is_present=_has_social_proof,
        can_advance=_has_social_proof,
    ),
    StepRule(
        title="Market differentiation",
        is_present=lambda a: bool(a.step7.market_standard and a.step7.my_difference),
        can_advance=lambda a: (
            longer_than(a.step7.market_standard, 5) and longer_than(a.step7.my_difference, 5)
        ),
    ),
]


class MentorChecklist(ModuleChecklist):
    """Seven fixed steps, no branch."""

    module_id = ModuleId.MENTOR

    def steps(self, answers: MentorAnswers) -> list[StepRule]:
        return _STEPS

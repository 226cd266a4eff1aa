"""Step checklist for the Method module.

Sequences:
    stage unset:        [stage question]
    stage "structured": [stage, method definition]
    stage "none"/"idea": [stage, purpose, journey map, x-ray]

The resume predicates compare raw lengths; the gates compare stripped text.
"""

from mentor_diagnosis.answers.method import MethodAnswers, is_structured
from mentor_diagnosis.config import MIN_METHOD_JOURNEY_STAGES, MIN_PILLARS, ModuleId

from .base import ModuleChecklist, StepRule


def _text(value: str, strip: bool) -> str:
    return value.strip() if strip else value


def _definition_valid(a: MethodAnswers, strip: bool) -> bool:
    if len(_text(a.name, strip)) < 5 or len(_text(a.transformation, strip)) < 30:
        return False
    if len(a.pillars) < MIN_PILLARS:
        return False
    return all(
        len(_text(p.what, strip)) >= 10
        and len(_text(p.why, strip)) >= 15
        and len(_text(p.how, strip)) >= 15
        for p in a.pillars
    )


def _purpose_valid(a: MethodAnswers, strip: bool) -> bool:
    point_a, point_b = a.purpose.point_a, a.purpose.point_b
    fields = [
        point_a.pain,
        point_a.failed,
        point_a.limit,
        point_b.worth,
        point_b.ability,
        point_b.feeling,
    ]
    return all(len(_text(v, strip)) > 3 for v in fields)


def _journey_valid(a: MethodAnswers, strip: bool) -> bool:
    return len(a.journey_map) >= MIN_METHOD_JOURNEY_STAGES and all(
        len(_text(s.title, strip)) > 3 and len(_text(s.importance, strip)) > 3
        for s in a.journey_map
    )


def _xray_valid(a: MethodAnswers, strip: bool) -> bool:
    return all(
        len(_text(s.problems, strip)) > 5 and len(_text(s.solutions, strip)) > 5
        for s in a.journey_map
    )


_STAGE_STEP = StepRule(
    title="Method stage",
    is_present=lambda a: a.stage is not None,
    can_advance=lambda a: a.stage is not None,
)

_STRUCTURED_STEPS: list[StepRule] = [
    _STAGE_STEP,
    StepRule(
        title="Method definition",
        is_present=lambda a: _definition_valid(a, strip=False),
        can_advance=lambda a: _definition_valid(a, strip=True),
    ),
]

_FROM_ZERO_STEPS: list[StepRule] = [
    _STAGE_STEP,
    StepRule(
        title="Purpose: point A to point B",
        is_present=lambda a: _purpose_valid(a, strip=False),
        can_advance=lambda a: _purpose_valid(a, strip=True),
    ),
    StepRule(
        title="Journey map",
        is_present=lambda a: _journey_valid(a, strip=False),
        can_advance=lambda a: _journey_valid(a, strip=True),
    ),
    StepRule(
        title="X-ray",
        is_present=lambda a: _xray_valid(a, strip=False),
        can_advance=lambda a: _xray_valid(a, strip=True),
    ),
]


class MethodChecklist(ModuleChecklist):
    """Branches on ``stage``: 2 steps for "structured", 4 otherwise."""

    module_id = ModuleId.METHOD
    branch_field = "stage"

    def steps(self, answers: MethodAnswers) -> list[StepRule]:
        if answers.stage is None:
            return [_STAGE_STEP]
        if is_structured(answers.stage):
            return _STRUCTURED_STEPS
        return _FROM_ZERO_STEPS

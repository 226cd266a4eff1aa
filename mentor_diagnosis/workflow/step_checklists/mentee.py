"""Step checklist for the Mentee module.

Sequences:
    has_clients unset: [branch question]
    has_clients "no":  [branch, demographics, transformation, decision
                        mountain, consumption journey, ICP target]
    has_clients "yes": [branch, personas radar, fan/hater, community impact,
                        ICP synthesis]
"""

from mentor_diagnosis.answers.base import filled, longer_than
from mentor_diagnosis.answers.mentee import (
    MenteeAnswers,
    demographics_question_complete,
    empathy_map_started,
)
from mentor_diagnosis.config import MIN_CONSUMPTION_STEPS, MIN_TARGET_ARROWS, ModuleId

from .base import ModuleChecklist, StepRule

# =============================================================================
# Gates
# =============================================================================


def _demographics_ready(a: MenteeAnswers) -> bool:
    return all(demographics_question_complete(a, q) for q in range(1, 8))


def _transformation_ready(a: MenteeAnswers) -> bool:
    t = a.transformation
    fields = [t.before.metrics, t.before.context, t.after.metrics, t.after.context]
    return all(longer_than(v, 5) for v in fields)


def _decision_mountain_ready(a: MenteeAnswers) -> bool:
    m = a.decision_mountain
    return all(longer_than(v, 3) for v in (m.motivation, m.barriers, m.overcoming))


def _consumption_journey_ready(a: MenteeAnswers) -> bool:
    journey = a.consumption_journey
    return (
        filled(journey.discovery_channel)
        and len(journey.steps) >= MIN_CONSUMPTION_STEPS
        and all(filled(s.title) and filled(s.description) for s in journey.steps)
    )


def _icp_target_ready(a: MenteeAnswers) -> bool:
    target = a.icp_target
    return (
        longer_than(target.center_phrase, 3)
        and len(target.arrows) >= MIN_TARGET_ARROWS
        and all(filled(arrow.text) for arrow in target.arrows)
    )


def _personas_ready(a: MenteeAnswers) -> bool:
    return len(a.personas) >= 1 and all(
        filled(p.name)
        and filled(p.description)
        and filled(p.current_situation)
        and filled(p.problem)
        and filled(p.objective)
        for p in a.personas
    )


def _fan_hater_ready(a: MenteeAnswers) -> bool:
    return empathy_map_started(a.fan_hater_map.fan) and empathy_map_started(a.fan_hater_map.hater)


def _community_impact_ready(a: MenteeAnswers) -> bool:
    ci = a.community_impact
    sides = [ci.community.positive, ci.community.negative, ci.impact.positive, ci.impact.negative]
    return all(longer_than(v, 3) for v in sides)


def _synthesis_ready(a: MenteeAnswers) -> bool:
    return len(a.icp_synthesis.phrase) >= 20


# =============================================================================
# Sequences
# =============================================================================

_BRANCH_STEP = StepRule(
    title="Do you already have clients?",
    is_present=lambda a: a.has_clients is not None,
    can_advance=lambda a: a.has_clients is not None,
)

_NO_CLIENTS_STEPS: list[StepRule] = [
    _BRANCH_STEP,
    StepRule(
        title="Demographics",
        is_present=lambda a: bool(a.demographics.detailed_profile),
        can_advance=_demographics_ready,
    ),
    StepRule(
        title="Transformation",
        is_present=lambda a: bool(a.transformation.before.metrics),
        can_advance=_transformation_ready,
    ),
    StepRule(
        title="Decision mountain",
        is_present=lambda a: bool(a.decision_mountain.motivation),
        can_advance=_decision_mountain_ready,
    ),
    StepRule(
        title="Consumption journey",
        is_present=lambda a: len(a.consumption_journey.steps) > 0,
        can_advance=_consumption_journey_ready,
    ),
    StepRule(
        title="ICP target",
        is_present=lambda a: bool(a.icp_target.center_phrase),
        can_advance=_icp_target_ready,
    ),
]

_HAS_CLIENTS_STEPS: list[StepRule] = [
    _BRANCH_STEP,
    StepRule(
        title="Personas radar",
        is_present=lambda a: len(a.personas) > 0,
        can_advance=_personas_ready,
    ),
    StepRule(
        title="Fan and hater",
        is_present=lambda a: a.fan_hater_map.fan is not None,
        can_advance=_fan_hater_ready,
    ),
    StepRule(
        title="Community impact",
        is_present=lambda a: bool(a.community_impact.community.positive),
        can_advance=_community_impact_ready,
    ),
    StepRule(
        title="ICP synthesis",
        is_present=lambda a: bool(a.icp_synthesis.phrase),
        can_advance=_synthesis_ready,
    ),
]


class MenteeChecklist(ModuleChecklist):
    """Branches on ``has_clients``: 6 steps for "no", 5 for "yes"."""

    module_id = ModuleId.MENTEE
    branch_field = "has_clients"

    def steps(self, answers: MenteeAnswers) -> list[StepRule]:
        if answers.has_clients == "no":
            return _NO_CLIENTS_STEPS
        if answers.has_clients == "yes":
            return _HAS_CLIENTS_STEPS
        return [_BRANCH_STEP]

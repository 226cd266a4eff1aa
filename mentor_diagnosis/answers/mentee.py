"""Answer model for the Mentee module.

The first question, ``has_clients``, picks one of two step sequences:

- "no": build the ideal client from scratch (demographics, transformation,
  decision mountain, consumption journey, ICP target).
- "yes": validate hypotheses against real clients (personas radar, fan/hater
  empathy maps, community impact, ICP synthesis).

Switching between the two discards the abandoned branch's answers so that a
record never carries data for a sequence the mentor is no longer on.
"""

import logging
from typing import Literal

from pydantic import Field

from mentor_diagnosis.config import MAX_PERSONAS, MAX_TARGET_ARROWS, NEW_ARROW_POSITION
from mentor_diagnosis.positioning.scoring import (
    clamp_to_radius,
    position_from_confidence,
    radar_confidence,
)

from .base import FrozenModel, filled, longer_than, new_item_id, remove_item, replace_item, swap

logger = logging.getLogger(__name__)

HasClients = Literal["yes", "no"]


# =============================================================================
# "No clients" branch
# =============================================================================


class AgeRange(FrozenModel):
    min: int = 25
    max: int = 45


class DigitalPresence(FrozenModel):
    platforms: list[str] = Field(default_factory=list)
    hours_per_day: float = 2
    behavior: str = ""


class Role(FrozenModel):
    category: str = ""
    area: str = ""


class Demographics(FrozenModel):
    detailed_profile: str = ""
    gender: Literal["", "male", "female", "mixed", "irrelevant"] = ""
    age_range: AgeRange = Field(default_factory=AgeRange)
    locations: list[str] = Field(default_factory=list)
    digital_presence: DigitalPresence = Field(default_factory=DigitalPresence)
    marital_status: Literal["", "single", "married", "divorced", "irrelevant"] = ""
    role: Role = Field(default_factory=Role)


class TransformationPoint(FrozenModel):
    metrics: str = ""
    context: str = ""


class Transformation(FrozenModel):
    before: TransformationPoint = Field(default_factory=TransformationPoint)
    after: TransformationPoint = Field(default_factory=TransformationPoint)


class DecisionMountain(FrozenModel):
    motivation: str = ""
    barriers: str = ""
    overcoming: str = ""


class ConsumptionStep(FrozenModel):
    id: str
    title: str = ""
    description: str = ""


class ConsumptionJourney(FrozenModel):
    discovery_channel: str = ""
    steps: list[ConsumptionStep] = Field(default_factory=list)


class TargetArrow(FrozenModel):
    """A characteristic placed on the ICP target; closer to the center is more relevant."""

    id: str
    text: str = ""
    x: float = NEW_ARROW_POSITION[0]
    y: float = NEW_ARROW_POSITION[1]


class IcpTarget(FrozenModel):
    center_phrase: str = ""
    arrows: list[TargetArrow] = Field(default_factory=list)


# =============================================================================
# "Has clients" branch
# =============================================================================


class Persona(FrozenModel):
    """A real client profile placed on the confidence radar."""

    id: str
    name: str = ""
    description: str = ""
    current_situation: str = ""
    problem: str = ""
    objective: str = ""
    differential: str = ""
    confidence: float = 1
    x: float = 0.0
    y: float = 0.0


class EmpathyMap(FrozenModel):
    who_is: str = ""
    feelings: str = ""
    says_does: str = ""
    sees: str = ""
    hears: str = ""
    thinks: str = ""
    weaknesses: str = ""
    gains: str = ""


class FanHaterMap(FrozenModel):
    fan: EmpathyMap | None = None
    hater: EmpathyMap | None = None


class ImpactSide(FrozenModel):
    positive: str = ""
    definition: str = ""
    negative: str = ""


class CommunityImpact(FrozenModel):
    community: ImpactSide = Field(default_factory=ImpactSide)
    impact: ImpactSide = Field(default_factory=ImpactSide)


class IcpSynthesis(FrozenModel):
    phrase: str = ""


class MenteeAnswers(FrozenModel):
    """All answers of the Mentee module."""

    has_clients: HasClients | None = None
    # "no" branch
    demographics: Demographics = Field(default_factory=Demographics)
    transformation: Transformation = Field(default_factory=Transformation)
    decision_mountain: DecisionMountain = Field(default_factory=DecisionMountain)
    consumption_journey: ConsumptionJourney = Field(default_factory=ConsumptionJourney)
    icp_target: IcpTarget = Field(default_factory=IcpTarget)
    # "yes" branch
    personas: list[Persona] = Field(default_factory=list)
    fan_hater_map: FanHaterMap = Field(default_factory=FanHaterMap)
    community_impact: CommunityImpact = Field(default_factory=CommunityImpact)
    icp_synthesis: IcpSynthesis = Field(default_factory=IcpSynthesis)


NO_CLIENTS_FIELDS = (
    "demographics",
    "transformation",
    "decision_mountain",
    "consumption_journey",
    "icp_target",
)
HAS_CLIENTS_FIELDS = ("personas", "fan_hater_map", "community_impact", "icp_synthesis")


# =============================================================================
# Branch selection
# =============================================================================


def set_has_clients(answers: MenteeAnswers, value: HasClients | None) -> MenteeAnswers:
    """Select the branch, resetting the other branch's answers when it changes.

    Raises:
        ValidationError: If ``value`` is not "yes", "no" or None
    """
    previous = answers.has_clients
    if previous == value:
        return answers

    update: dict = {"has_clients": value}
    abandoned: tuple[str, ...] = ()
    if previous is not None:
        abandoned = HAS_CLIENTS_FIELDS if previous == "yes" else NO_CLIENTS_FIELDS
        blank = MenteeAnswers()
        for name in abandoned:
            update[name] = getattr(blank, name)
    updated = MenteeAnswers.model_validate({**answers.model_dump(), **update})
    if abandoned:
        logger.info(f"Mentee branch changed {previous} -> {value}; cleared {', '.join(abandoned)}")
    return updated


# =============================================================================
# Demographics
# =============================================================================

DEMOGRAPHICS_QUESTIONS = 7


def demographics_question_complete(answers: MenteeAnswers, question: int) -> bool:
    """Whether question ``question`` (1-7) of the demographics sub-wizard is answered."""
    demo = answers.demographics
    checks = {
        1: lambda: longer_than(demo.detailed_profile, 20),
        2: lambda: bool(demo.gender),
        3: lambda: True,  # age range always has a value
        4: lambda: len(demo.locations) > 0,
        5: lambda: len(demo.digital_presence.platforms) > 0,
        6: lambda: bool(demo.marital_status),
        7: lambda: bool(demo.role.category),
    }
    check = checks.get(question)
    return check() if check else False


def _with_demographics(answers: MenteeAnswers, **changes) -> MenteeAnswers:
    demographics = answers.demographics.model_copy(update=changes)
    return answers.model_copy(update={"demographics": demographics})


def add_location(answers: MenteeAnswers, location: str) -> MenteeAnswers:
    location = location.strip()
    if not location or location in answers.demographics.locations:
        return answers
    return _with_demographics(answers, locations=[*answers.demographics.locations, location])


def remove_location(answers: MenteeAnswers, location: str) -> MenteeAnswers:
    locations = [loc for loc in answers.demographics.locations if loc != location]
    return _with_demographics(answers, locations=locations)


def toggle_platform(answers: MenteeAnswers, platform: str) -> MenteeAnswers:
    presence = answers.demographics.digital_presence
    if platform in presence.platforms:
        platforms = [p for p in presence.platforms if p != platform]
    else:
        platforms = [*presence.platforms, platform]
    return _with_demographics(
        answers, digital_presence=presence.model_copy(update={"platforms": platforms})
    )


# =============================================================================
# Consumption Journey
# =============================================================================


def _with_journey(answers: MenteeAnswers, **changes) -> MenteeAnswers:
    journey = answers.consumption_journey.model_copy(update=changes)
    return answers.model_copy(update={"consumption_journey": journey})


def add_journey_step(answers: MenteeAnswers) -> MenteeAnswers:
    steps = [*answers.consumption_journey.steps, ConsumptionStep(id=new_item_id())]
    return _with_journey(answers, steps=steps)


def update_journey_step(
    answers: MenteeAnswers,
    step_id: str,
    title: str | None = None,
    description: str | None = None,
) -> MenteeAnswers:
    fields = {"title": title, "description": description}
    changes = {k: v for k, v in fields.items() if v is not None}
    steps = replace_item(answers.consumption_journey.steps, step_id, **changes)
    return _with_journey(answers, steps=steps)


def remove_journey_step(answers: MenteeAnswers, step_id: str) -> MenteeAnswers:
    return _with_journey(answers, steps=remove_item(answers.consumption_journey.steps, step_id))


def move_journey_step(answers: MenteeAnswers, index: int, direction: int) -> MenteeAnswers:
    return _with_journey(answers, steps=swap(answers.consumption_journey.steps, index, direction))


# =============================================================================
# ICP Target
# =============================================================================


def _with_target(answers: MenteeAnswers, **changes) -> MenteeAnswers:
    return answers.model_copy(update={"icp_target": answers.icp_target.model_copy(update=changes)})


def set_center_phrase(answers: MenteeAnswers, phrase: str) -> MenteeAnswers:
    return _with_target(answers, center_phrase=phrase)


def add_arrow(answers: MenteeAnswers) -> MenteeAnswers:
    arrows = answers.icp_target.arrows
    if len(arrows) >= MAX_TARGET_ARROWS:
        logger.debug(f"Arrow limit reached ({MAX_TARGET_ARROWS})")
        return answers
    return _with_target(answers, arrows=[*arrows, TargetArrow(id=new_item_id())])


def set_arrow_text(answers: MenteeAnswers, arrow_id: str, text: str) -> MenteeAnswers:
    arrows = replace_item(answers.icp_target.arrows, arrow_id, text=text)
    return _with_target(answers, arrows=arrows)


def move_arrow(answers: MenteeAnswers, arrow_id: str, x: float, y: float) -> MenteeAnswers:
    x, y = clamp_to_radius(x, y)
    return _with_target(answers, arrows=replace_item(answers.icp_target.arrows, arrow_id, x=x, y=y))


def remove_arrow(answers: MenteeAnswers, arrow_id: str) -> MenteeAnswers:
    return _with_target(answers, arrows=remove_item(answers.icp_target.arrows, arrow_id))


# =============================================================================
# Personas Radar
# =============================================================================


def add_persona(answers: MenteeAnswers) -> MenteeAnswers:
    """Append a blank persona with the lowest confidence, placed on the radar rim."""
    if len(answers.personas) >= MAX_PERSONAS:
        logger.debug(f"Persona limit reached ({MAX_PERSONAS})")
        return answers
    x, y = position_from_confidence(1)
    persona = Persona(id=new_item_id(), confidence=1, x=x, y=y)
    return answers.model_copy(update={"personas": [*answers.personas, persona]})


def update_persona(answers: MenteeAnswers, persona_id: str, **details: str) -> MenteeAnswers:
    allowed = {"name", "description", "current_situation", "problem", "objective", "differential"}
    unknown = set(details) - allowed
    if unknown:
        raise ValueError(f"Unknown persona fields: {', '.join(sorted(unknown))}")
    return answers.model_copy(
        update={"personas": replace_item(answers.personas, persona_id, **details)}
    )


def move_persona(answers: MenteeAnswers, persona_id: str, x: float, y: float) -> MenteeAnswers:
    """Place a persona on the radar; its confidence follows from the distance."""
    x, y = clamp_to_radius(x, y)
    confidence = radar_confidence(x, y)
    return answers.model_copy(
        update={
            "personas": replace_item(answers.personas, persona_id, x=x, y=y, confidence=confidence)
        }
    )


def set_persona_confidence(
    answers: MenteeAnswers, persona_id: str, confidence: float
) -> MenteeAnswers:
    """Slider control: move the persona along its current angle to match ``confidence``."""
    personas = []
    for persona in answers.personas:
        if persona.id == persona_id:
            x, y = position_from_confidence(confidence, persona.x, persona.y)
            persona = persona.model_copy(
                update={"confidence": radar_confidence(x, y), "x": x, "y": y}
            )
        personas.append(persona)
    return answers.model_copy(update={"personas": personas})


def remove_persona(answers: MenteeAnswers, persona_id: str) -> MenteeAnswers:
    return answers.model_copy(update={"personas": remove_item(answers.personas, persona_id)})


# =============================================================================
# Fan / Hater
# =============================================================================


def set_empathy_map(
    answers: MenteeAnswers, kind: Literal["fan", "hater"], empathy_map: EmpathyMap | dict
) -> MenteeAnswers:
    if kind not in ("fan", "hater"):
        raise ValueError(f"Unknown empathy map kind: {kind}")
    if isinstance(empathy_map, dict):
        empathy_map = EmpathyMap.model_validate(empathy_map)
    fan_hater = answers.fan_hater_map.model_copy(update={kind: empathy_map})
    return answers.model_copy(update={"fan_hater_map": fan_hater})


def empathy_map_started(empathy_map: EmpathyMap | None) -> bool:
    return empathy_map is not None and filled(empathy_map.who_is) and filled(empathy_map.feelings)


OPERATIONS = {
    "set_has_clients": set_has_clients,
    "add_location": add_location,
    "remove_location": remove_location,
    "toggle_platform": toggle_platform,
    "add_journey_step": add_journey_step,
    "update_journey_step": update_journey_step,
    "remove_journey_step": remove_journey_step,
    "move_journey_step": move_journey_step,
    "set_center_phrase": set_center_phrase,
    "add_arrow": add_arrow,
    "set_arrow_text": set_arrow_text,
    "move_arrow": move_arrow,
    "remove_arrow": remove_arrow,
    "add_persona": add_persona,
    "update_persona": update_persona,
    "move_persona": move_persona,
    "set_persona_confidence": set_persona_confidence,
    "remove_persona": remove_persona,
    "set_empathy_map": set_empathy_map,
}

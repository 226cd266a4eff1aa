"""Answer model for the Method module.

``stage`` says how far along the mentor's method is:

- "structured": the method already exists; two steps (stage, then name,
  transformation promise and pillars).
- "none" / "idea": the method is built from zero; four steps (stage, purpose
  from point A to point B, journey map, x-ray of problems and solutions).
"""

import logging
from typing import Literal

from pydantic import Field, field_validator

from mentor_diagnosis.config import (
    MAX_PILLARS,
    MAX_TRANSFORMATION_CHARS,
    MIN_METHOD_JOURNEY_STAGES,
    MIN_PILLARS,
)

from .base import FrozenModel, new_item_id, remove_item, replace_item, swap

logger = logging.getLogger(__name__)

MethodStage = Literal["none", "idea", "structured"]


class Pillar(FrozenModel):
    id: str
    what: str = ""
    why: str = ""
    how: str = ""


class PointA(FrozenModel):
    pain: str = ""
    failed: str = ""
    limit: str = ""


class PointB(FrozenModel):
    worth: str = ""
    ability: str = ""
    feeling: str = ""


class Purpose(FrozenModel):
    point_a: PointA = Field(default_factory=PointA)
    point_b: PointB = Field(default_factory=PointB)


class JourneyStage(FrozenModel):
    id: str
    title: str = ""
    importance: str = ""
    problems: str = ""
    solutions: str = ""


def _default_pillars() -> list[Pillar]:
    return [Pillar(id=str(i)) for i in range(1, MIN_PILLARS + 1)]


def _default_journey() -> list[JourneyStage]:
    return [JourneyStage(id=str(i)) for i in range(1, MIN_METHOD_JOURNEY_STAGES + 1)]


class MethodAnswers(FrozenModel):
    """All answers of the Method module."""

    stage: MethodStage | None = None
    # "structured" path
    name: str = ""
    transformation: str = ""
    pillars: list[Pillar] = Field(default_factory=_default_pillars)
    # build-from-zero path
    purpose: Purpose = Field(default_factory=Purpose)
    journey_map: list[JourneyStage] = Field(default_factory=_default_journey)

    @field_validator("transformation", mode="before")
    @classmethod
    def _truncate_transformation(cls, value):
        if isinstance(value, str):
            return value[:MAX_TRANSFORMATION_CHARS]
        return value


STRUCTURED_FIELDS = ("name", "transformation", "pillars")
FROM_ZERO_FIELDS = ("purpose", "journey_map")


def is_structured(stage: str | None) -> bool:
    return stage == "structured"


# =============================================================================
# Branch selection
# =============================================================================


def set_stage(answers: MethodAnswers, stage: MethodStage | None) -> MethodAnswers:
    """Select the stage, resetting the abandoned path when the sequence changes.

    "none" and "idea" share the same sequence, so switching between them keeps
    every answer.

    Raises:
        ValidationError: If ``stage`` is not one of the known stages or None
    """
    previous = answers.stage
    if previous == stage:
        return answers

    update: dict = {"stage": stage}
    abandoned: tuple[str, ...] = ()
    if previous is not None and is_structured(previous) != is_structured(stage):
        abandoned = STRUCTURED_FIELDS if is_structured(previous) else FROM_ZERO_FIELDS
        blank = MethodAnswers()
        for name in abandoned:
            update[name] = getattr(blank, name)
    updated = MethodAnswers.model_validate({**answers.model_dump(), **update})
    if abandoned:
        logger.info(f"Method stage changed {previous} -> {stage}; cleared {', '.join(abandoned)}")
    return updated


def set_transformation(answers: MethodAnswers, text: str) -> MethodAnswers:
    return answers.model_copy(update={"transformation": text[:MAX_TRANSFORMATION_CHARS]})


# =============================================================================
# Pillars
# =============================================================================


def add_pillar(answers: MethodAnswers) -> MethodAnswers:
    if len(answers.pillars) >= MAX_PILLARS:
        logger.debug(f"Pillar limit reached ({MAX_PILLARS})")
        return answers
    return answers.model_copy(update={"pillars": [*answers.pillars, Pillar(id=new_item_id())]})


def update_pillar(
    answers: MethodAnswers,
    pillar_id: str,
    what: str | None = None,
    why: str | None = None,
    how: str | None = None,
) -> MethodAnswers:
    changes = {k: v for k, v in {"what": what, "why": why, "how": how}.items() if v is not None}
    pillars = replace_item(answers.pillars, pillar_id, **changes)
    return answers.model_copy(update={"pillars": pillars})


def remove_pillar(answers: MethodAnswers, pillar_id: str) -> MethodAnswers:
    if len(answers.pillars) <= MIN_PILLARS:
        logger.debug(f"Cannot remove pillar: minimum is {MIN_PILLARS}")
        return answers
    return answers.model_copy(update={"pillars": remove_item(answers.pillars, pillar_id)})


# =============================================================================
# Journey Map
# =============================================================================


def add_journey_stage(answers: MethodAnswers) -> MethodAnswers:
    stages = [*answers.journey_map, JourneyStage(id=new_item_id())]
    return answers.model_copy(update={"journey_map": stages})


def update_journey_stage(answers: MethodAnswers, stage_id: str, **fields: str) -> MethodAnswers:
    allowed = {"title", "importance", "problems", "solutions"}
    unknown = set(fields) - allowed
    if unknown:
        raise ValueError(f"Unknown journey stage fields: {', '.join(sorted(unknown))}")
    return answers.model_copy(
        update={"journey_map": replace_item(answers.journey_map, stage_id, **fields)}
    )


def remove_journey_stage(answers: MethodAnswers, stage_id: str) -> MethodAnswers:
    if len(answers.journey_map) <= MIN_METHOD_JOURNEY_STAGES:
        logger.debug(f"Cannot remove journey stage: minimum is {MIN_METHOD_JOURNEY_STAGES}")
        return answers
    return answers.model_copy(update={"journey_map": remove_item(answers.journey_map, stage_id)})


def move_journey_stage(answers: MethodAnswers, index: int, direction: int) -> MethodAnswers:
    return answers.model_copy(update={"journey_map": swap(answers.journey_map, index, direction)})


OPERATIONS = {
    "set_stage": set_stage,
    "set_transformation": set_transformation,
    "add_pillar": add_pillar,
    "update_pillar": update_pillar,
    "remove_pillar": remove_pillar,
    "add_journey_stage": add_journey_stage,
    "update_journey_stage": update_journey_stage,
    "remove_journey_stage": remove_journey_stage,
    "move_journey_stage": move_journey_stage,
}

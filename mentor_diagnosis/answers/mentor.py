"""Answer model for the Mentor module.

Seven steps: pitch, timeline of moments, podium of achievements, culture
(mission/vision/values), strategic positioning, testimonials, and market
differentiation.
"""

import logging

from pydantic import Field

from .base import FrozenModel, filled, new_item_id, remove_item

logger = logging.getLogger(__name__)


class Moment(FrozenModel):
    """A milestone on the mentor's timeline."""

    id: str
    year: str  # "YYYY-MM"
    description: str


class Testimonial(FrozenModel):
    """A client result the mentor can show."""

    id: str
    title: str
    description: str
    image_url: str | None = None
    video_url: str | None = None


class PitchStep(FrozenModel):
    field1: str = ""
    field2: str = ""
    field3: str = ""  # no longer asked; kept so older records still load
    field4: str = ""  # elevator pitch


class TimelineStep(FrozenModel):
    moments: list[Moment] = Field(default_factory=list)


class PodiumStep(FrozenModel):
    first: str = ""
    second: str = ""
    third: str = ""


class CultureStep(FrozenModel):
    mission: str = ""
    vision: str = ""
    values: str = ""


class PositioningStep(FrozenModel):
    text: str = ""


class SocialProofStep(FrozenModel):
    testimonials: list[Testimonial] = Field(default_factory=list)
    has_no_testimonials: bool = False


class DifferentiationStep(FrozenModel):
    market_standard: str = ""
    my_difference: str = ""


class MentorAnswers(FrozenModel):
    """All answers of the Mentor module."""

    step1: PitchStep = Field(default_factory=PitchStep)
    step2: TimelineStep = Field(default_factory=TimelineStep)
    step3: PodiumStep = Field(default_factory=PodiumStep)
    step4: CultureStep = Field(default_factory=CultureStep)
    step5: PositioningStep = Field(default_factory=PositioningStep)
    step6: SocialProofStep = Field(default_factory=SocialProofStep)
    step7: DifferentiationStep = Field(default_factory=DifferentiationStep)


# =============================================================================
# Timeline
# =============================================================================


def save_moment(
    answers: MentorAnswers,
    year: str,
    description: str,
    moment_id: str | None = None,
) -> MentorAnswers:
    """Add a new moment or edit an existing one.

    Both year and description are required; otherwise the answers are
    returned unchanged. The timeline is kept sorted by year.
    """
    if not filled(year) or not filled(description):
        logger.debug("Moment ignored: year and description are required")
        return answers

    moments = list(answers.step2.moments)
    if moment_id and any(m.id == moment_id for m in moments):
        moments = [
            m.model_copy(update={"year": year, "description": description})
            if m.id == moment_id
            else m
            for m in moments
        ]
    else:
        moments.append(Moment(id=new_item_id(), year=year, description=description))

    moments.sort(key=lambda m: m.year)
    return answers.model_copy(update={"step2": TimelineStep(moments=moments)})


def remove_moment(answers: MentorAnswers, moment_id: str) -> MentorAnswers:
    moments = remove_item(answers.step2.moments, moment_id)
    return answers.model_copy(update={"step2": TimelineStep(moments=moments)})


# =============================================================================
# Testimonials
# =============================================================================


def save_testimonial(
    answers: MentorAnswers,
    title: str,
    description: str,
    image_url: str | None = None,
    video_url: str | None = None,
    testimonial_id: str | None = None,
) -> MentorAnswers:
    """Add or edit a testimonial.

    Title and description are required. Saving any testimonial clears the
    "I have no testimonials" flag.
    """
    if not filled(title) or not filled(description):
        logger.debug("Testimonial ignored: title and description are required")
        return answers

    fields = {
        "title": title,
        "description": description,
        "image_url": image_url or None,
        "video_url": video_url or None,
    }
    testimonials = list(answers.step6.testimonials)
    if testimonial_id and any(t.id == testimonial_id for t in testimonials):
        testimonials = [
            t.model_copy(update=fields) if t.id == testimonial_id else t for t in testimonials
        ]
    else:
        testimonials.append(Testimonial(id=new_item_id(), **fields))

    step6 = SocialProofStep(testimonials=testimonials, has_no_testimonials=False)
    return answers.model_copy(update={"step6": step6})


def remove_testimonial(answers: MentorAnswers, testimonial_id: str) -> MentorAnswers:
    step6 = answers.step6.model_copy(
        update={"testimonials": remove_item(answers.step6.testimonials, testimonial_id)}
    )
    return answers.model_copy(update={"step6": step6})


def set_no_testimonials(answers: MentorAnswers, flag: bool) -> MentorAnswers:
    step6 = answers.step6.model_copy(update={"has_no_testimonials": bool(flag)})
    return answers.model_copy(update={"step6": step6})


OPERATIONS = {
    "save_moment": save_moment,
    "remove_moment": remove_moment,
    "save_testimonial": save_testimonial,
    "remove_testimonial": remove_testimonial,
    "set_no_testimonials": set_no_testimonials,
}

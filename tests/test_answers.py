"""Tests for mentor_diagnosis.answers.

Covers the generic path setter, collection helpers, and each module's
collection operations and branch handling.
"""

import math

import pytest
from pydantic import ValidationError

from mentor_diagnosis.answers import delivery, mentee, mentor, method
from mentor_diagnosis.answers.base import new_item_id, set_path, swap
from mentor_diagnosis.answers.mentee import Demographics, EmpathyMap, MenteeAnswers
from mentor_diagnosis.answers.mentor import MentorAnswers
from mentor_diagnosis.answers.method import MethodAnswers
from mentor_diagnosis.config import (
    ENGAGEMENT_OPTIONS,
    MAX_PERSONAS,
    MAX_PILLARS,
    MAX_TARGET_ARROWS,
    MAX_TRANSFORMATION_CHARS,
    MIN_PILLARS,
)
from mentor_diagnosis.exceptions import InvalidAnswerPath

# =============================================================================
# Base helpers
# =============================================================================


class TestSetPath:
    """Tests for the dotted-path setter used by every edit."""

    def test_sets_nested_field(self):
        answers = set_path(MenteeAnswers(), "consumption_journey.discovery_channel", "Instagram")
        assert answers.consumption_journey.discovery_channel == "Instagram"

    def test_original_is_untouched(self):
        original = MentorAnswers()
        set_path(original, "step1.field4", "pitch")
        assert original.step1.field4 == ""

    def test_sets_list_item_by_index(self):
        answers = mentee.add_journey_step(MenteeAnswers())
        answers = set_path(answers, "consumption_journey.steps.0.title", "Descoberta")
        assert answers.consumption_journey.steps[0].title == "Descoberta"

    def test_replacing_submodel_with_dict_revalidates(self):
        answers = set_path(MentorAnswers(), "step3", {"first": "A", "second": "B", "third": "C"})
        assert answers.step3.second == "B"

    def test_unknown_field_raises(self):
        with pytest.raises(InvalidAnswerPath, match="Unknown answer path"):
            set_path(MentorAnswers(), "step1.nope", "x")

    def test_unknown_intermediate_raises(self):
        with pytest.raises(InvalidAnswerPath):
            set_path(MentorAnswers(), "step99.field1", "x")

    def test_list_index_out_of_range_raises(self):
        with pytest.raises(InvalidAnswerPath):
            set_path(MenteeAnswers(), "consumption_journey.steps.3.title", "x")

    def test_invalid_enum_value_is_rejected(self):
        with pytest.raises(ValidationError):
            set_path(MenteeAnswers(), "demographics.gender", "robot")


class TestCollectionHelpers:
    def test_item_ids_are_unique(self):
        ids = {new_item_id() for _ in range(50)}
        assert len(ids) == 50

    def test_swap_moves_neighbours(self):
        assert swap(["a", "b", "c"], 0, 1) == ["b", "a", "c"]
        assert swap(["a", "b", "c"], 2, -1) == ["a", "c", "b"]

    def test_swap_out_of_range_is_noop(self):
        assert swap(["a", "b"], 0, -1) == ["a", "b"]
        assert swap(["a", "b"], 1, 1) == ["a", "b"]


# =============================================================================
# Mentor
# =============================================================================


class TestMentorOperations:
    """Timeline and testimonial operations."""

    def test_moments_are_sorted_by_year(self):
        answers = mentor.save_moment(MentorAnswers(), "2020-01", "Livro")
        answers = mentor.save_moment(answers, "2012-06", "Primeiro cliente")
        assert [m.year for m in answers.step2.moments] == ["2012-06", "2020-01"]

    def test_moment_requires_year_and_description(self):
        answers = MentorAnswers()
        assert mentor.save_moment(answers, "2020-01", "  ") is answers
        assert mentor.save_moment(answers, "", "Livro") is answers

    def test_edit_existing_moment(self):
        answers = mentor.save_moment(MentorAnswers(), "2020-01", "Livro")
        moment_id = answers.step2.moments[0].id
        answers = mentor.save_moment(answers, "2021-01", "Segundo livro", moment_id=moment_id)
        assert len(answers.step2.moments) == 1
        assert answers.step2.moments[0].description == "Segundo livro"

    def test_remove_moment(self):
        answers = mentor.save_moment(MentorAnswers(), "2020-01", "Livro")
        answers = mentor.remove_moment(answers, answers.step2.moments[0].id)
        assert answers.step2.moments == []

    def test_saving_testimonial_clears_no_testimonials_flag(self):
        answers = mentor.set_no_testimonials(MentorAnswers(), True)
        answers = mentor.save_testimonial(answers, "Case Carla", "Dobrou o faturamento")
        assert answers.step6.has_no_testimonials is False
        assert len(answers.step6.testimonials) == 1

    def test_empty_media_urls_are_stored_as_none(self):
        answers = mentor.save_testimonial(MentorAnswers(), "Case", "Resultado", image_url="")
        assert answers.step6.testimonials[0].image_url is None

    def test_remove_testimonial(self):
        answers = mentor.save_testimonial(MentorAnswers(), "Case", "Resultado")
        answers = mentor.remove_testimonial(answers, answers.step6.testimonials[0].id)
        assert answers.step6.testimonials == []


# =============================================================================
# Mentee
# =============================================================================


class TestMenteeBranch:
    """Switching has_clients clears the abandoned branch."""

    def test_first_selection_keeps_everything(self):
        answers = set_path(MenteeAnswers(), "demographics.detailed_profile", "Perfil")
        answers = mentee.set_has_clients(answers, "no")
        assert answers.demographics.detailed_profile == "Perfil"

    def test_switch_to_yes_clears_no_clients_fields(self, complete_mentee_no_clients):
        answers = mentee.set_has_clients(complete_mentee_no_clients, "yes")
        assert answers.has_clients == "yes"
        assert answers.demographics == Demographics()
        assert answers.consumption_journey.steps == []
        assert answers.icp_target.arrows == []

    def test_switch_to_no_clears_has_clients_fields(self, complete_mentee_has_clients):
        answers = mentee.set_has_clients(complete_mentee_has_clients, "no")
        assert answers.personas == []
        assert answers.fan_hater_map.fan is None
        assert answers.icp_synthesis.phrase == ""

    def test_same_value_returns_same_record(self, complete_mentee_no_clients):
        answers = complete_mentee_no_clients
        assert mentee.set_has_clients(answers, "no") is answers

    def test_unknown_value_is_rejected(self, complete_mentee_no_clients):
        with pytest.raises(ValidationError):
            mentee.set_has_clients(complete_mentee_no_clients, "maybe")
        with pytest.raises(ValidationError):
            mentee.set_has_clients(MenteeAnswers(), "maybe")


class TestMenteeDemographics:
    def test_add_location_strips_and_deduplicates(self):
        answers = mentee.add_location(MenteeAnswers(), "  Recife ")
        answers = mentee.add_location(answers, "Recife")
        answers = mentee.add_location(answers, "   ")
        assert answers.demographics.locations == ["Recife"]

    def test_remove_location(self):
        answers = mentee.add_location(MenteeAnswers(), "Recife")
        answers = mentee.remove_location(answers, "Recife")
        assert answers.demographics.locations == []

    def test_toggle_platform(self):
        answers = mentee.toggle_platform(MenteeAnswers(), "LinkedIn")
        assert answers.demographics.digital_presence.platforms == ["LinkedIn"]
        answers = mentee.toggle_platform(answers, "LinkedIn")
        assert answers.demographics.digital_presence.platforms == []

    def test_question_completion(self):
        answers = MenteeAnswers()
        assert mentee.demographics_question_complete(answers, 1) is False
        assert mentee.demographics_question_complete(answers, 3) is True
        assert mentee.demographics_question_complete(answers, 8) is False
        answers = set_path(answers, "demographics.detailed_profile", "x" * 21)
        assert mentee.demographics_question_complete(answers, 1) is True


class TestMenteeJourney:
    def test_add_update_move_remove(self):
        answers = mentee.add_journey_step(MenteeAnswers())
        answers = mentee.add_journey_step(answers)
        first, second = (s.id for s in answers.consumption_journey.steps)

        answers = mentee.update_journey_step(answers, first, title="Descoberta")
        assert answers.consumption_journey.steps[0].title == "Descoberta"
        assert answers.consumption_journey.steps[0].description == ""

        answers = mentee.move_journey_step(answers, 0, 1)
        assert [s.id for s in answers.consumption_journey.steps] == [second, first]

        answers = mentee.remove_journey_step(answers, first)
        assert [s.id for s in answers.consumption_journey.steps] == [second]


class TestMenteeTarget:
    def test_new_arrow_defaults(self):
        answers = mentee.add_arrow(MenteeAnswers())
        arrow = answers.icp_target.arrows[0]
        assert (arrow.text, arrow.x, arrow.y) == ("", 0, 30)

    def test_arrow_limit(self):
        answers = MenteeAnswers()
        for _ in range(MAX_TARGET_ARROWS + 2):
            answers = mentee.add_arrow(answers)
        assert len(answers.icp_target.arrows) == MAX_TARGET_ARROWS

    def test_move_arrow_clamps_to_disc(self):
        answers = mentee.add_arrow(MenteeAnswers())
        arrow_id = answers.icp_target.arrows[0].id
        answers = mentee.move_arrow(answers, arrow_id, 60, 0)
        arrow = answers.icp_target.arrows[0]
        assert arrow.x == pytest.approx(48)
        assert arrow.y == pytest.approx(0)

    def test_set_arrow_text_and_center_phrase(self):
        answers = mentee.add_arrow(MenteeAnswers())
        arrow_id = answers.icp_target.arrows[0].id
        answers = mentee.set_arrow_text(answers, arrow_id, "Tem equipe")
        answers = mentee.set_center_phrase(answers, "Donas de agência")
        assert answers.icp_target.arrows[0].text == "Tem equipe"
        assert answers.icp_target.center_phrase == "Donas de agência"

    def test_remove_arrow(self):
        answers = mentee.add_arrow(MenteeAnswers())
        answers = mentee.remove_arrow(answers, answers.icp_target.arrows[0].id)
        assert answers.icp_target.arrows == []


class TestMenteePersonas:
    def test_new_persona_sits_on_rim_with_lowest_confidence(self):
        answers = mentee.add_persona(MenteeAnswers())
        persona = answers.personas[0]
        assert persona.confidence == 1
        assert math.hypot(persona.x, persona.y) == pytest.approx(48)
        assert persona.y < 0

    def test_persona_limit(self):
        answers = MenteeAnswers()
        for _ in range(MAX_PERSONAS + 1):
            answers = mentee.add_persona(answers)
        assert len(answers.personas) == MAX_PERSONAS

    def test_move_to_center_gives_full_confidence(self):
        answers = mentee.add_persona(MenteeAnswers())
        persona_id = answers.personas[0].id
        answers = mentee.move_persona(answers, persona_id, 0, 0)
        assert answers.personas[0].confidence == 5

    def test_move_outside_disc_is_clamped(self):
        answers = mentee.add_persona(MenteeAnswers())
        persona_id = answers.personas[0].id
        answers = mentee.move_persona(answers, persona_id, 0, 90)
        persona = answers.personas[0]
        assert (persona.x, persona.y) == (pytest.approx(0), pytest.approx(48))
        assert persona.confidence == pytest.approx(1)

    def test_slider_keeps_angle(self):
        answers = mentee.add_persona(MenteeAnswers())
        persona_id = answers.personas[0].id
        answers = mentee.move_persona(answers, persona_id, 30, 0)
        answers = mentee.set_persona_confidence(answers, persona_id, 3)
        persona = answers.personas[0]
        assert persona.confidence == pytest.approx(3)
        assert persona.x == pytest.approx(24)
        assert persona.y == pytest.approx(0)

    def test_update_persona_details(self):
        answers = mentee.add_persona(MenteeAnswers())
        persona_id = answers.personas[0].id
        answers = mentee.update_persona(answers, persona_id, name="Carla", problem="Delegar")
        assert answers.personas[0].name == "Carla"
        assert answers.personas[0].problem == "Delegar"

    def test_update_persona_rejects_position_fields(self):
        answers = mentee.add_persona(MenteeAnswers())
        with pytest.raises(ValueError, match="Unknown persona fields"):
            mentee.update_persona(answers, answers.personas[0].id, confidence=5)

    def test_remove_persona(self):
        answers = mentee.add_persona(MenteeAnswers())
        answers = mentee.remove_persona(answers, answers.personas[0].id)
        assert answers.personas == []


class TestEmpathyMaps:
    def test_set_from_dict(self):
        answers = mentee.set_empathy_map(MenteeAnswers(), "fan", {"who_is": "Cliente"})
        assert isinstance(answers.fan_hater_map.fan, EmpathyMap)
        assert answers.fan_hater_map.hater is None

    def test_unknown_kind_raises(self):
        with pytest.raises(ValueError, match="Unknown empathy map kind"):
            mentee.set_empathy_map(MenteeAnswers(), "neutral", EmpathyMap())

    def test_started_requires_who_and_feelings(self):
        assert mentee.empathy_map_started(None) is False
        assert mentee.empathy_map_started(EmpathyMap(who_is="Cliente")) is False
        assert mentee.empathy_map_started(EmpathyMap(who_is="Cliente", feelings="Raiva")) is True


# =============================================================================
# Method
# =============================================================================


class TestMethodStage:
    """Stage changes clear the abandoned path only when the sequence changes."""

    def test_none_to_idea_keeps_from_zero_answers(self, complete_method_from_zero):
        answers = method.set_stage(complete_method_from_zero, "none")
        assert answers.purpose == complete_method_from_zero.purpose
        assert answers.journey_map == complete_method_from_zero.journey_map

    def test_structured_to_idea_clears_structured_answers(self, complete_method_structured):
        answers = method.set_stage(complete_method_structured, "idea")
        assert answers.name == ""
        assert answers.transformation == ""
        assert [p.id for p in answers.pillars] == ["1", "2", "3"]
        assert all(p.what == "" for p in answers.pillars)

    def test_idea_to_structured_clears_from_zero_answers(self, complete_method_from_zero):
        answers = method.set_stage(complete_method_from_zero, "structured")
        assert answers.purpose == MethodAnswers().purpose
        assert all(s.title == "" for s in answers.journey_map)

    def test_unknown_stage_is_rejected(self, complete_method_from_zero):
        with pytest.raises(ValidationError):
            method.set_stage(complete_method_from_zero, "almost")


class TestMethodCollections:
    def test_defaults(self):
        answers = MethodAnswers()
        assert len(answers.pillars) == MIN_PILLARS
        assert len(answers.journey_map) == 3

    def test_transformation_is_truncated(self):
        long_text = "x" * (MAX_TRANSFORMATION_CHARS + 40)
        assert len(method.set_transformation(MethodAnswers(), long_text).transformation) == 250
        assert len(MethodAnswers(transformation=long_text).transformation) == 250

    def test_pillar_bounds(self):
        answers = MethodAnswers()
        assert method.remove_pillar(answers, "1") is answers
        for _ in range(MAX_PILLARS + 2):
            answers = method.add_pillar(answers)
        assert len(answers.pillars) == MAX_PILLARS
        answers = method.remove_pillar(answers, "1")
        assert len(answers.pillars) == MAX_PILLARS - 1

    def test_update_pillar(self):
        answers = method.update_pillar(MethodAnswers(), "2", what="Prospecção ativa")
        assert answers.pillars[1].what == "Prospecção ativa"
        assert answers.pillars[1].why == ""

    def test_journey_stage_bounds_and_order(self):
        answers = MethodAnswers()
        assert method.remove_journey_stage(answers, "1") is answers
        answers = method.add_journey_stage(answers)
        answers = method.move_journey_stage(answers, 0, 1)
        assert [s.id for s in answers.journey_map][:2] == ["2", "1"]
        answers = method.remove_journey_stage(answers, "1")
        assert len(answers.journey_map) == 3

    def test_update_journey_stage_rejects_unknown_fields(self):
        with pytest.raises(ValueError, match="Unknown journey stage fields"):
            method.update_journey_stage(MethodAnswers(), "1", colour="red")

    def test_update_journey_stage_validates_values(self):
        with pytest.raises(ValidationError):
            method.update_journey_stage(MethodAnswers(), "1", title=None)


# =============================================================================
# Delivery
# =============================================================================


class TestDeliveryOperations:
    def test_toggle_engagement(self):
        option = ENGAGEMENT_OPTIONS[1]
        answers = delivery.toggle_engagement(delivery.DeliveryAnswers(), option)
        assert answers.mandatory.online_engagement == [option]
        answers = delivery.toggle_engagement(answers, option)
        assert answers.mandatory.online_engagement == []

    def test_unknown_engagement_raises(self):
        with pytest.raises(ValueError, match="Unknown engagement option"):
            delivery.toggle_engagement(delivery.DeliveryAnswers(), "KARAOKE")

    def test_default_accelerators_are_filled(self):
        accelerators = delivery.DeliveryAnswers().overdelivery.accelerators
        assert len(accelerators) == 3
        assert all(a.pillar and a.acceleration for a in accelerators)

    def test_add_update_remove_accelerator(self):
        answers = delivery.add_accelerator(delivery.DeliveryAnswers())
        new_id = answers.overdelivery.accelerators[-1].id
        answers = delivery.update_accelerator(answers, new_id, pillar="Comunidade")
        assert answers.overdelivery.accelerators[-1].pillar == "Comunidade"
        answers = delivery.remove_accelerator(answers, new_id)
        assert len(answers.overdelivery.accelerators) == 3

"""Tests for step checklists, the sequencer and the validation gate.

Covers resume-step derivation per module and branch, the forward gates and
their thresholds, monotonicity of the gates, and the read-only override.
"""

import pytest

from mentor_diagnosis.answers import mentee, method
from mentor_diagnosis.answers.base import set_path
from mentor_diagnosis.config import OTHER_ENGAGEMENT_OPTION, ModuleId, ModuleStatus
from mentor_diagnosis.workflow import (
    can_advance,
    completion_step,
    describe_progress,
    get_module,
    max_steps,
    resume_step,
    step_titles,
)
from mentor_diagnosis.workflow.step_checklists import ModuleChecklist, get_checklist

# =============================================================================
# Helpers
# =============================================================================


def _blank(module: ModuleId):
    return get_module(module).initial_answers()


def _gate_open_everywhere(module: ModuleId, answers) -> bool:
    steps = range(1, max_steps(module, answers) + 1)
    return all(can_advance(module, step, answers) for step in steps)


# =============================================================================
# Checklist Registry
# =============================================================================


class TestChecklistRegistry:
    def test_every_module_has_a_checklist(self):
        for module in ModuleId:
            assert isinstance(get_checklist(module), ModuleChecklist)

    def test_lookup_by_string(self):
        assert get_checklist("method").module_id is ModuleId.METHOD

    def test_unknown_module_raises(self):
        with pytest.raises(ValueError, match="No checklist registered"):
            get_checklist("marketing")

    def test_base_class_requires_steps(self):
        with pytest.raises(NotImplementedError):
            ModuleChecklist().steps(None)


# =============================================================================
# Resume Step
# =============================================================================


class TestResumeStep:
    """resume_step walks presence predicates in order."""

    @pytest.mark.parametrize("module", list(ModuleId))
    def test_fresh_answers_resume_at_step_one(self, module):
        assert resume_step(module, _blank(module)) == 1

    @pytest.mark.parametrize(
        "fixture_name, module, expected_max",
        [
            ("complete_mentor", ModuleId.MENTOR, 7),
            ("complete_mentee_no_clients", ModuleId.MENTEE, 6),
            ("complete_mentee_has_clients", ModuleId.MENTEE, 5),
            ("complete_method_structured", ModuleId.METHOD, 2),
            ("complete_method_from_zero", ModuleId.METHOD, 4),
            ("complete_delivery", ModuleId.DELIVERY, 3),
        ],
    )
    def test_complete_answers_land_on_completion_view(
        self, request, fixture_name, module, expected_max
    ):
        answers = request.getfixturevalue(fixture_name)
        assert max_steps(module, answers) == expected_max
        assert resume_step(module, answers) == expected_max + 1
        assert resume_step(module, answers) == completion_step(module, answers)
        # Recomputing gives the same answer
        assert resume_step(module, answers) == expected_max + 1

    def test_first_missing_step_wins(self, complete_mentor):
        answers = set_path(complete_mentor, "step4.vision", "")
        assert resume_step(ModuleId.MENTOR, answers) == 4

    def test_unset_branch_has_single_step(self):
        answers = set_path(_blank(ModuleId.MENTEE), "demographics.detailed_profile", "Perfil")
        assert max_steps(ModuleId.MENTEE, answers) == 1
        assert resume_step(ModuleId.MENTEE, answers) == 1

    def test_mentee_no_clients_resumes_at_first_empty_step(self):
        answers = mentee.set_has_clients(_blank(ModuleId.MENTEE), "no")
        answers = set_path(answers, "demographics.detailed_profile", "Perfil curto")
        assert resume_step(ModuleId.MENTEE, answers) == 3

    def test_method_presence_uses_raw_lengths(self, complete_method_structured):
        answers = set_path(complete_method_structured, "name", "Mét ")
        assert resume_step(ModuleId.METHOD, answers) == 2
        # Five characters counting the trailing space; the gate strips it
        answers = set_path(answers, "name", "Méto ")
        assert resume_step(ModuleId.METHOD, answers) == 3
        assert can_advance(ModuleId.METHOD, 2, answers) is False

    def test_delivery_resume_follows_gates(self, complete_delivery):
        answers = set_path(complete_delivery, "mandatory.community_rules", "   ")
        assert resume_step(ModuleId.DELIVERY, answers) == 2

    def test_step_titles_follow_branch(self, complete_method_structured):
        assert step_titles(ModuleId.METHOD, complete_method_structured) == [
            "Method stage",
            "Method definition",
        ]

    def test_describe_progress(self, complete_delivery):
        result = describe_progress(ModuleId.DELIVERY, complete_delivery)
        assert result.is_complete
        assert result.max_steps == 3
        assert result.details[2]["can_advance"] is True


# =============================================================================
# Scenario A: Method, structured branch
# =============================================================================


class TestMethodStructuredScenario:
    def test_walkthrough(self):
        answers = _blank(ModuleId.METHOD)
        assert resume_step(ModuleId.METHOD, answers) == 1

        answers = method.set_stage(answers, "structured")
        assert resume_step(ModuleId.METHOD, answers) == 2
        assert can_advance(ModuleId.METHOD, 2, answers) is False

        answers = set_path(answers, "name", "Escala")
        answers = method.set_transformation(answers, "De sobrecarregado a dono de um time")
        for pillar in answers.pillars:
            answers = method.update_pillar(
                answers,
                pillar.id,
                what="Prospecção ativa",
                why="Sem clientes não há negócio",
                how="Cadência diária de contatos",
            )

        assert can_advance(ModuleId.METHOD, 2, answers) is True
        assert max_steps(ModuleId.METHOD, answers) == 2
        assert resume_step(ModuleId.METHOD, answers) == 3

    def test_one_short_pillar_blocks(self, complete_method_structured):
        answers = method.update_pillar(complete_method_structured, "3", how="curto")
        assert can_advance(ModuleId.METHOD, 2, answers) is False

    def test_fewer_than_three_pillars_blocks(self, complete_method_structured):
        answers = complete_method_structured.model_copy(
            update={"pillars": complete_method_structured.pillars[:2]}
        )
        assert can_advance(ModuleId.METHOD, 2, answers) is False


# =============================================================================
# Scenario B: Mentee, consumption journey
# =============================================================================


class TestConsumptionJourneyScenario:
    JOURNEY_STEP = 5

    def _with_steps(self, answers, count: int, channel: str):
        journey = {
            "discovery_channel": channel,
            "steps": [
                {"id": f"s{i}", "title": f"Etapa {i}", "description": f"Detalhe {i}"}
                for i in range(count)
            ],
        }
        return set_path(answers, "consumption_journey", journey)

    def test_four_steps_and_no_channel_block(self, complete_mentee_no_clients):
        answers = self._with_steps(complete_mentee_no_clients, 4, "")
        assert can_advance(ModuleId.MENTEE, self.JOURNEY_STEP, answers) is False

    def test_five_steps_without_channel_block(self, complete_mentee_no_clients):
        answers = self._with_steps(complete_mentee_no_clients, 5, "")
        assert can_advance(ModuleId.MENTEE, self.JOURNEY_STEP, answers) is False

    def test_four_steps_with_channel_block(self, complete_mentee_no_clients):
        answers = self._with_steps(complete_mentee_no_clients, 4, "Instagram")
        assert can_advance(ModuleId.MENTEE, self.JOURNEY_STEP, answers) is False

    def test_fifth_step_and_channel_open_gate(self, complete_mentee_no_clients):
        answers = self._with_steps(complete_mentee_no_clients, 5, "Instagram")
        assert can_advance(ModuleId.MENTEE, self.JOURNEY_STEP, answers) is True

    def test_partially_filled_step_blocks(self, complete_mentee_no_clients):
        path = "consumption_journey.steps.2.description"
        answers = set_path(complete_mentee_no_clients, path, "")
        assert can_advance(ModuleId.MENTEE, self.JOURNEY_STEP, answers) is False


# =============================================================================
# Gates
# =============================================================================


class TestGates:
    """Thresholds of individual gates."""

    def test_mentor_positioning_needs_more_than_five_chars(self, complete_mentor):
        short = set_path(complete_mentor, "step5.text", "12345")
        enough = set_path(complete_mentor, "step5.text", "123456")
        assert can_advance(ModuleId.MENTOR, 5, short) is False
        assert can_advance(ModuleId.MENTOR, 5, enough) is True

    def test_mentor_podium_rejects_whitespace(self, complete_mentor):
        answers = set_path(complete_mentor, "step3.third", "   ")
        assert resume_step(ModuleId.MENTOR, answers) == 8
        assert can_advance(ModuleId.MENTOR, 3, answers) is False

    def test_demographics_needs_all_seven_questions(self, complete_mentee_no_clients):
        answers = set_path(complete_mentee_no_clients, "demographics.role.category", "")
        assert can_advance(ModuleId.MENTEE, 2, answers) is False

    def test_target_needs_three_named_arrows(self, complete_mentee_no_clients):
        answers = mentee.add_arrow(complete_mentee_no_clients)
        assert can_advance(ModuleId.MENTEE, 6, answers) is False
        arrow_id = answers.icp_target.arrows[-1].id
        answers = mentee.set_arrow_text(answers, arrow_id, "Usa CRM")
        assert can_advance(ModuleId.MENTEE, 6, answers) is True

    def test_synthesis_needs_twenty_chars(self, complete_mentee_has_clients):
        answers = set_path(complete_mentee_has_clients, "icp_synthesis.phrase", "x" * 19)
        assert can_advance(ModuleId.MENTEE, 5, answers) is False

    def test_hater_map_required(self, complete_mentee_has_clients):
        answers = set_path(complete_mentee_has_clients, "fan_hater_map.hater", None)
        assert can_advance(ModuleId.MENTEE, 3, answers) is False

    def test_other_engagement_needs_description(self, complete_delivery):
        answers = set_path(
            complete_delivery, "mandatory.online_engagement", [OTHER_ENGAGEMENT_OPTION]
        )
        assert can_advance(ModuleId.DELIVERY, 2, answers) is False
        answers = set_path(answers, "mandatory.other_engagement_text", "   ")
        assert can_advance(ModuleId.DELIVERY, 2, answers) is False
        answers = set_path(answers, "mandatory.other_engagement_text", "Café virtual")
        assert can_advance(ModuleId.DELIVERY, 2, answers) is True

    def test_individual_support_needs_details(self, complete_delivery):
        answers = set_path(complete_delivery, "overdelivery.has_individual", "yes")
        assert can_advance(ModuleId.DELIVERY, 3, answers) is False
        answers = set_path(answers, "overdelivery.individual_details", "  ")
        answers = set_path(answers, "overdelivery.frequency", "  ")
        assert can_advance(ModuleId.DELIVERY, 3, answers) is False
        answers = set_path(answers, "overdelivery.individual_details", "Call de 30 min")
        assert can_advance(ModuleId.DELIVERY, 3, answers) is False
        answers = set_path(answers, "overdelivery.frequency", "Mensal")
        assert can_advance(ModuleId.DELIVERY, 3, answers) is True

    def test_out_of_range_steps_never_pass(self, complete_mentor):
        assert can_advance(ModuleId.MENTOR, 0, complete_mentor) is False
        assert can_advance(ModuleId.MENTOR, 8, complete_mentor) is False

    def test_read_only_modules_never_block(self):
        blank = _blank(ModuleId.MENTOR)
        assert can_advance(ModuleId.MENTOR, 1, blank) is False
        assert can_advance(ModuleId.MENTOR, 1, blank, ModuleStatus.UNDER_REVIEW) is True
        assert can_advance(ModuleId.MENTOR, 1, blank, ModuleStatus.COMPLETED) is True


class TestGateMonotonicity:
    """Filling more fields never closes a gate that was open."""

    def test_extra_content_keeps_mentor_gates_open(self, complete_mentor):
        assert _gate_open_everywhere(ModuleId.MENTOR, complete_mentor)
        richer = set_path(complete_mentor, "step1.field1", "Mais contexto")
        richer = set_path(richer, "step7.my_difference", "Encontros semanais ao vivo e em grupo")
        assert _gate_open_everywhere(ModuleId.MENTOR, richer)

    def test_extra_collection_items_keep_gates_open(self, complete_mentee_has_clients):
        answers = mentee.set_empathy_map(
            complete_mentee_has_clients,
            "fan",
            {"who_is": "Cliente engajada", "feelings": "Gratidão", "thinks": "Vale a pena"},
        )
        assert _gate_open_everywhere(ModuleId.MENTEE, answers)

    def test_optional_fields_keep_delivery_gates_open(self, complete_delivery):
        answers = set_path(complete_delivery, "overdelivery.frequency", "Quinzenal")
        answers = set_path(answers, "mandatory.other_engagement_text", "Livre")
        assert _gate_open_everywhere(ModuleId.DELIVERY, answers)

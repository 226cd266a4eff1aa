"""Shared test fixtures and helpers.

Centralizes the "fully answered" records that several test files need, so
each test only spells out the field it is actually about.
"""

import pytest

from mentor_diagnosis.answers.delivery import DeliveryAnswers
from mentor_diagnosis.answers.mentee import MenteeAnswers
from mentor_diagnosis.answers.mentor import MentorAnswers
from mentor_diagnosis.answers.method import MethodAnswers
from mentor_diagnosis.config import ENGAGEMENT_OPTIONS
from mentor_diagnosis.persistence import Identity, InMemorySubmissionStore

# ---------------------------------------------------------------------------
# Identity and persistence
# ---------------------------------------------------------------------------


@pytest.fixture
def identity() -> Identity:
    return Identity(name="Ana Souza", email="ana@example.com")


@pytest.fixture
def memory_store() -> InMemorySubmissionStore:
    return InMemorySubmissionStore()


# ---------------------------------------------------------------------------
# Fully answered records, one per module/branch
#
# Each record passes every step's presence check and forward gate for its
# branch, so tests can blank out one field and watch a single step fail.
# ---------------------------------------------------------------------------

_MENTOR_COMPLETE = {
    "step1": {"field4": "Ajudo donos de agência a dobrar o faturamento."},
    "step2": {"moments": [{"id": "m1", "year": "2015-03", "description": "Abri a agência"}]},
    "step3": {"first": "Prêmio RD 2020", "second": "1000 alunos", "third": "Livro publicado"},
    "step4": {"mission": "Libertar donos", "vision": "Ser referência", "values": "Verdade"},
    "step5": {"text": "Mentor de agências B2B"},
    "step6": {"testimonials": [], "has_no_testimonials": True},
    "step7": {
        "market_standard": "Cursos gravados genéricos",
        "my_difference": "Acompanhamento semanal ao vivo",
    },
}

_MENTEE_NO_CLIENTS_COMPLETE = {
    "has_clients": "no",
    "demographics": {
        "detailed_profile": "Dona de agência com equipe pequena e sem processo comercial",
        "gender": "female",
        "age_range": {"min": 30, "max": 45},
        "locations": ["São Paulo"],
        "digital_presence": {"platforms": ["Instagram"], "hours_per_day": 3, "behavior": ""},
        "marital_status": "married",
        "role": {"category": "Empresária", "area": "Marketing"},
    },
    "transformation": {
        "before": {"metrics": "Fatura 20k/mês", "context": "Faz tudo sozinha"},
        "after": {"metrics": "Fatura 80k/mês", "context": "Lidera um time"},
    },
    "decision_mountain": {
        "motivation": "Quer crescer",
        "barriers": "Falta de tempo",
        "overcoming": "Rotina guiada",
    },
    "consumption_journey": {
        "discovery_channel": "Instagram",
        "steps": [
            {"id": f"s{i}", "title": f"Etapa {i}", "description": f"Descrição {i}"}
            for i in range(1, 6)
        ],
    },
    "icp_target": {
        "center_phrase": "Donas de agência que querem escalar",
        "arrows": [
            {"id": "a1", "text": "Tem equipe", "x": 0, "y": 10},
            {"id": "a2", "text": "Fatura acima de 20k", "x": 10, "y": 0},
            {"id": "a3", "text": "Vende serviço recorrente", "x": -20, "y": 5},
        ],
    },
}

_MENTEE_HAS_CLIENTS_COMPLETE = {
    "has_clients": "yes",
    "personas": [
        {
            "id": "p1",
            "name": "Carla",
            "description": "Dona de agência",
            "current_situation": "Sem processo",
            "problem": "Não consegue delegar",
            "objective": "Tirar férias",
            "differential": "",
            "confidence": 4,
            "x": 0,
            "y": -12,
        }
    ],
    "fan_hater_map": {
        "fan": {"who_is": "Cliente engajada", "feelings": "Gratidão"},
        "hater": {"who_is": "Cliente apressado", "feelings": "Impaciência"},
    },
    "community_impact": {
        "community": {"positive": "Troca real", "definition": "", "negative": "Ruído"},
        "impact": {"positive": "Mais vendas", "definition": "", "negative": "Cansaço"},
    },
    "icp_synthesis": {"phrase": "Donas de agência que querem sair do operacional"},
}

_METHOD_STRUCTURED_COMPLETE = {
    "stage": "structured",
    "name": "Método Escala",
    "transformation": "Sair do operacional e montar um time comercial em 90 dias",
    "pillars": [
        {
            "id": str(i),
            "what": f"Pilar número {i}",
            "why": "Porque sem isso nada escala",
            "how": "Com rituais semanais e métricas",
        }
        for i in range(1, 4)
    ],
}

_METHOD_FROM_ZERO_COMPLETE = {
    "stage": "idea",
    "purpose": {
        "point_a": {"pain": "Caos diário", "failed": "Cursos soltos", "limit": "Sem tempo"},
        "point_b": {"worth": "Liberdade", "ability": "Delegar", "feeling": "Calma"},
    },
    "journey_map": [
        {
            "id": str(i),
            "title": f"Fase {i}",
            "importance": "Base de tudo",
            "problems": "Time desalinhado",
            "solutions": "Reunião semanal",
        }
        for i in range(1, 4)
    ],
}

_DELIVERY_COMPLETE = {
    "group_name": "Conselho de Agências",
    "unique_objective": "Dobrar o faturamento em 12 meses",
    "mandatory": {
        "frequency": "2",
        "online_engagement": [ENGAGEMENT_OPTIONS[0]],
        "other_engagement_text": "",
        "community_rules": "Câmera ligada e sigilo",
    },
    "overdelivery": {"has_individual": "no"},
}


@pytest.fixture
def complete_mentor() -> MentorAnswers:
    return MentorAnswers.model_validate(_MENTOR_COMPLETE)


@pytest.fixture
def complete_mentee_no_clients() -> MenteeAnswers:
    return MenteeAnswers.model_validate(_MENTEE_NO_CLIENTS_COMPLETE)


@pytest.fixture
def complete_mentee_has_clients() -> MenteeAnswers:
    return MenteeAnswers.model_validate(_MENTEE_HAS_CLIENTS_COMPLETE)


@pytest.fixture
def complete_method_structured() -> MethodAnswers:
    return MethodAnswers.model_validate(_METHOD_STRUCTURED_COMPLETE)


@pytest.fixture
def complete_method_from_zero() -> MethodAnswers:
    return MethodAnswers.model_validate(_METHOD_FROM_ZERO_COMPLETE)


@pytest.fixture
def complete_delivery() -> DeliveryAnswers:
    return DeliveryAnswers.model_validate(_DELIVERY_COMPLETE)

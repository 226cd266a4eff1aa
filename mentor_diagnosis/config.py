"""Centralized configuration for Mentor Diagnosis.

This module provides a single source of truth for all configuration constants,
eliminating hardcoded values scattered across the codebase.

Design Principles:
- All timing, geometry, and collection limits in one place
- Enums for type-safe module ids and status values
- Dashboard menu defined declaratively
"""

import os
from dataclasses import dataclass
from enum import Enum

# =============================================================================
# Enums for Type Safety
# =============================================================================


class ModuleId(Enum):
    """The four diagnostic modules, in the order they are meant to be filled."""

    MENTOR = "mentor"
    MENTEE = "mentee"
    METHOD = "method"
    DELIVERY = "delivery"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid module ids as strings."""
        return [module.value for module in cls]


class ModuleStatus(Enum):
    """Lifecycle status of a module.

    "in progress" is not stored here; it is derived from TODO plus the
    session's started flag.
    """

    TODO = "todo"
    UNDER_REVIEW = "under_review"
    COMPLETED = "completed"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid status values as strings."""
        return [status.value for status in cls]


class SaveStatus(Enum):
    """Autosave indicator states."""

    IDLE = "idle"
    SAVING = "saving"
    SAVED = "saved"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid indicator values as strings."""
        return [status.value for status in cls]


class DashboardView(Enum):
    """Menu item ids understood by the dashboard.

    The last four are placeholder sections with no questionnaire behind them.
    """

    OVERVIEW = "overview"
    MENTOR = "mentor"
    MENTEE = "mentorado"
    METHOD = "metodo"
    DELIVERY = "entrega_fundacao"
    MARKETING = "marketing"
    SALES = "vendas"
    DELIVERY_PREPARATION = "entrega_preparacao"
    ACTION_PLAN = "plano_acao"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid menu ids as strings."""
        return [view.value for view in cls]


# =============================================================================
# Dashboard Menu
# =============================================================================

MENU_SECTIONS: list[tuple[str, str, list[tuple[DashboardView, str]]]] = [
    ("geral", "PRINCIPAL", [(DashboardView.OVERVIEW, "Dashboard - Visão Geral")]),
    (
        "fundacao",
        "FUNDAÇÃO",
        [
            (DashboardView.MENTOR, "O Mentor"),
            (DashboardView.MENTEE, "O Mentorado"),
            (DashboardView.METHOD, "O Método"),
            (DashboardView.DELIVERY, "A Oferta"),
        ],
    ),
    (
        "preparacao",
        "PREPARAÇÃO",
        [
            (DashboardView.MARKETING, "Marketing"),
            (DashboardView.SALES, "Vendas"),
            (DashboardView.DELIVERY_PREPARATION, "Entrega"),
        ],
    ),
    ("acao", "AÇÃO", [(DashboardView.ACTION_PLAN, "Plano de Execução")]),
]

MENTOR_REQUIRED_MESSAGE = (
    "Por favor, inicie o módulo 'O Mentor' antes de avançar para as próximas etapas."
)


# =============================================================================
# Autosave Configuration
# =============================================================================


@dataclass(frozen=True)
class AutoSaveConfig:
    """Debounce timing for the autosave pipeline."""

    delay_seconds: float
    saved_indicator_seconds: float

    @classmethod
    def from_env(cls) -> "AutoSaveConfig":
        """Read overrides from AUTOSAVE_DELAY_SECONDS / AUTOSAVE_SAVED_SECONDS."""
        return cls(
            delay_seconds=float(os.getenv("AUTOSAVE_DELAY_SECONDS", AUTOSAVE_DELAY_SECONDS)),
            saved_indicator_seconds=float(
                os.getenv("AUTOSAVE_SAVED_SECONDS", SAVED_INDICATOR_SECONDS)
            ),
        )


AUTOSAVE_DELAY_SECONDS = 2.0  # quiet period before one persist call fires
SAVED_INDICATOR_SECONDS = 2.0  # how long "saved" is shown before going idle


# =============================================================================
# Positional Scoring Geometry
# =============================================================================


@dataclass(frozen=True)
class ScoringGeometry:
    """Geometry shared by the target and radar tools.

    Coordinates are percentage offsets from the widget center, in [-50, 50].
    """

    radius: float = 48.0
    target_max_distance: float = 48.0
    drag_threshold_px: float = 5.0
    min_confidence: float = 1.0
    max_confidence: float = 5.0


TARGET_RADIUS = 48.0
DRAG_THRESHOLD_PX = 5.0
DEFAULT_GEOMETRY = ScoringGeometry()


# =============================================================================
# Collection Limits
# =============================================================================

MAX_TARGET_ARROWS = 5
MAX_PERSONAS = 5
MIN_PILLARS = 3
MAX_PILLARS = 8
MIN_METHOD_JOURNEY_STAGES = 3
MIN_CONSUMPTION_STEPS = 5
MIN_TARGET_ARROWS = 3
MAX_TRANSFORMATION_CHARS = 250

# Default position of a new target arrow
NEW_ARROW_POSITION = (0.0, 30.0)


# =============================================================================
# Delivery Options
# =============================================================================

OTHER_ENGAGEMENT_OPTION = "OUTRO: Descreva"

ENGAGEMENT_OPTIONS: list[str] = [
    "HOTSEAT: Alguém traz problema, todos resolvem",
    "CONTEÚDO: Aula nova ao vivo",
    "CONVIDADO: Trazer um expert de fora",
    "ACOMPANHAMENTO: Revisão de metas",
    "Q&A: Plantão de dúvidas com especialista",
    OTHER_ENGAGEMENT_OPTION,
]

MEETING_FREQUENCIES = ("2", "3", "4")  # meetings per month


# =============================================================================
# Persistence
# =============================================================================

DEFAULT_STORE_PATH = os.getenv("MENTOR_DIAGNOSIS_STORE", "data/submissions.yaml")

"""Centralized Module Registry.

Single source of truth for per-module metadata: the answer model, the branch
field and how to change it, the named collection operations a wizard may
run, and how the module is shown on the dashboard.

Modules (filled in this order; mentor must be started before the others):
- MENTOR: authority, history and culture of the mentor
- MENTEE: ideal client profile, either built from scratch or from real clients
- METHOD: the mentor's method, either already structured or built from zero
- DELIVERY: the offer (group, mandatory delivery and overdelivery)
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel

from mentor_diagnosis.answers import delivery, mentee, mentor, method
from mentor_diagnosis.config import DashboardView, ModuleId


@dataclass(frozen=True)
class ModuleMetadata:
    """Immutable metadata for a diagnostic module."""

    # Identifiers
    module_id: ModuleId
    view: DashboardView  # dashboard menu id

    # Display information
    display_name: str
    display_index: int
    description: str

    # Answers
    answers_model: type[BaseModel]
    branch_field: str | None = None
    set_branch: Callable[[Any, Any], Any] | None = None
    operations: dict[str, Callable[..., Any]] = field(default_factory=dict)

    def initial_answers(self) -> BaseModel:
        return self.answers_model()


# =============================================================================
# Module Definitions - Single Source of Truth
# =============================================================================

_MODULES: list[ModuleMetadata] = [
    ModuleMetadata(
        module_id=ModuleId.MENTOR,
        view=DashboardView.MENTOR,
        display_name="O Mentor",
        display_index=1,
        description="Definição de autoridade, história e pilares de cultura.",
        answers_model=mentor.MentorAnswers,
        operations=mentor.OPERATIONS,
    ),
    ModuleMetadata(
        module_id=ModuleId.MENTEE,
        view=DashboardView.MENTEE,
        display_name="O Mentorado",
        display_index=2,
        description="Perfil do cliente ideal, da hipótese à validação com clientes reais.",
        answers_model=mentee.MenteeAnswers,
        branch_field="has_clients",
        set_branch=mentee.set_has_clients,
        operations=mentee.OPERATIONS,
    ),
    ModuleMetadata(
        module_id=ModuleId.METHOD,
        view=DashboardView.METHOD,
        display_name="O Método",
        display_index=3,
        description="Estrutura do método: pilares, propósito e jornada de transformação.",
        answers_model=method.MethodAnswers,
        branch_field="stage",
        set_branch=method.set_stage,
        operations=method.OPERATIONS,
    ),
    ModuleMetadata(
        module_id=ModuleId.DELIVERY,
        view=DashboardView.DELIVERY,
        display_name="A Oferta",
        display_index=4,
        description="Formato do grupo, entregas obrigatórias e entregas extras.",
        answers_model=delivery.DeliveryAnswers,
        operations=delivery.OPERATIONS,
    ),
]


class ModuleRegistry:
    """Registry for module metadata with efficient lookups.

    Usage:
        registry = get_module_registry()
        meta = registry.get(ModuleId.MENTEE)
        meta = registry.get_by_view(DashboardView.METHOD)
        for meta in registry.all_modules():
            print(meta.display_name)
    """

    def __init__(self, modules: list[ModuleMetadata] | None = None):
        self._modules = modules or _MODULES
        self._by_id: dict[ModuleId, ModuleMetadata] = {m.module_id: m for m in self._modules}
        self._by_view: dict[DashboardView, ModuleMetadata] = {m.view: m for m in self._modules}

    def get(self, module: ModuleId | str) -> ModuleMetadata:
        """Get module metadata by id.

        Raises:
            ValueError: If the module is not recognized
        """
        key = module
        if isinstance(module, str):
            key = ModuleId(module) if module in ModuleId.values() else None
        if key not in self._by_id:
            raise ValueError(f"Unknown module: {module}. Valid modules: {ModuleId.values()}")
        return self._by_id[key]

    def get_by_view(self, view: DashboardView | str) -> ModuleMetadata | None:
        """Get module metadata for a dashboard menu id, or None for non-module views."""
        if isinstance(view, str):
            if view not in DashboardView.values():
                return None
            view = DashboardView(view)
        return self._by_view.get(view)

    def all_modules(self) -> list[ModuleMetadata]:
        """All modules in display order."""
        return sorted(self._modules, key=lambda m: m.display_index)


# Singleton instance
_registry: ModuleRegistry | None = None


def get_module_registry() -> ModuleRegistry:
    """Get the global module registry instance."""
    global _registry
    if _registry is None:
        _registry = ModuleRegistry()
    return _registry


def get_module(module: ModuleId | str) -> ModuleMetadata:
    """Convenience function to get module metadata by id."""
    return get_module_registry().get(module)

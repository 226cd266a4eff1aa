"""Wizard engine for the diagnostic modules.

Step checklists, the sequencer and the validation gate are plain functions
over answer models. The per-module wizard is a Burr state machine, and the
dashboard orchestrates one wizard per module.
"""

# Registry and step rules (no external dependencies beyond pydantic)
from .module_registry import ModuleMetadata, ModuleRegistry, get_module, get_module_registry
from .module_session import ModuleSession
from .sequencer import completion_step, describe_progress, max_steps, resume_step, step_titles
from .validation_gate import can_advance


# Lazy import for Burr-dependent modules
def __getattr__(name):
    """Lazy import for Burr-dependent modules."""
    if name in ("ModuleWizard", "build_module_wizard"):
        from . import wizard_builder

        return getattr(wizard_builder, name)
    if name in ("DashboardOrchestrator", "MenuSelection"):
        from . import dashboard

        return getattr(dashboard, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    # Burr wizard (lazy loaded)
    "ModuleWizard",
    "build_module_wizard",
    "DashboardOrchestrator",
    "MenuSelection",
    # Registry (always available)
    "ModuleMetadata",
    "ModuleRegistry",
    "get_module",
    "get_module_registry",
    # Sequencing
    "ModuleSession",
    "can_advance",
    "completion_step",
    "describe_progress",
    "max_steps",
    "resume_step",
    "step_titles",
]

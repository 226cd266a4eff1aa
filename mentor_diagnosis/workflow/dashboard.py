"""Dashboard orchestration across the four modules.

The orchestrator owns one wizard and one autosave pipeline per module. It
decides where a user lands on entry, blocks the other modules until Mentor
has been started, and hands control back to the overview when a module is
left or sent for review.
"""

import logging
from dataclasses import dataclass
from typing import Any

from mentor_diagnosis.config import (
    AUTOSAVE_DELAY_SECONDS,
    MENTOR_REQUIRED_MESSAGE,
    SAVED_INDICATOR_SECONDS,
    DashboardView,
    ModuleId,
    ModuleStatus,
)
from mentor_diagnosis.persistence.adapter import Identity, PersistenceAdapter
from mentor_diagnosis.telemetry.spans import module_span

from .autosave import AutoSavePipeline
from .module_registry import get_module_registry
from .module_session import ModuleSession
from .module_status import ModuleStatusController
from .wizard_builder import ModuleWizard, build_module_wizard

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MenuSelection:
    """Outcome of clicking a menu item."""

    view: DashboardView
    blocked: bool = False
    message: str = ""


def _as_view(target: DashboardView | str) -> DashboardView | None:
    if isinstance(target, DashboardView):
        return target
    if target in DashboardView.values():
        return DashboardView(target)
    return None


class DashboardOrchestrator:
    """Top-level controller for one logged-in user.

    Example:
        dashboard = DashboardOrchestrator.restore(identity, store)
        view = dashboard.entry_route("mentorado")
        wizard = dashboard.wizard(ModuleId.MENTOR)
        wizard.edit("step1.field4", "I help founders sell.")
        dashboard.save_and_exit()
        dashboard.close()
    """

    def __init__(
        self,
        identity: Identity,
        adapter: PersistenceAdapter,
        snapshots: dict[str, dict[str, Any]] | None = None,
        autosave_delay: float = AUTOSAVE_DELAY_SECONDS,
        saved_indicator_seconds: float = SAVED_INDICATOR_SECONDS,
        enable_tracking: bool = False,
    ):
        """Initialize the dashboard.

        Args:
            identity: Logged-in user
            adapter: Persistence adapter receiving module snapshots
            snapshots: Previously stored snapshots keyed by module name
            autosave_delay: Quiet period before an autosave fires
            saved_indicator_seconds: How long "saved" is shown
            enable_tracking: Enable Burr tracking for the wizards
        """
        self.identity = identity
        self.adapter = adapter
        self.autosave_delay = autosave_delay
        self.saved_indicator_seconds = saved_indicator_seconds
        self.enable_tracking = enable_tracking
        self.active_view = DashboardView.OVERVIEW

        self._registry = get_module_registry()
        self._wizards: dict[ModuleId, ModuleWizard] = {}
        self._pipelines: dict[ModuleId, AutoSavePipeline] = {}

        snapshots = snapshots or {}
        for meta in self._registry.all_modules():
            snapshot = snapshots.get(meta.module_id.value)
            if snapshot:
                session = ModuleSession.from_snapshot(snapshot)
            else:
                session = ModuleSession.new(meta.module_id)
            self._install(session)

    @classmethod
    def restore(cls, identity: Identity, store: Any, **kwargs: Any) -> "DashboardOrchestrator":
        """Build a dashboard from whatever ``store`` already holds for ``identity``."""
        snapshots = store.load_snapshots(identity.email)
        if snapshots:
            logger.info(f"Restored {', '.join(sorted(snapshots))} for {identity.email}")
        return cls(identity, store, snapshots=snapshots, **kwargs)

    # ------------------------------------------------------------------
    # Module wiring
    # ------------------------------------------------------------------

    def _install(self, session: ModuleSession) -> None:
        module = session.module
        if module in self._pipelines:
            self._pipelines[module].close()
        pipeline = AutoSavePipeline(
            module,
            self.identity,
            self.adapter,
            delay_seconds=self.autosave_delay,
            saved_indicator_seconds=self.saved_indicator_seconds,
        )
        self._pipelines[module] = pipeline
        self._wizards[module] = build_module_wizard(
            session,
            autosave=pipeline,
            enable_tracking=self.enable_tracking,
        )

    def wizard(self, module: ModuleId | str) -> ModuleWizard:
        return self._wizards[self._registry.get(module).module_id]

    def session(self, module: ModuleId | str) -> ModuleSession:
        return self.wizard(module).session

    def autosave(self, module: ModuleId | str) -> AutoSavePipeline:
        return self._pipelines[self._registry.get(module).module_id]

    # ------------------------------------------------------------------
    # Progress
    # ------------------------------------------------------------------

    def is_started(self, module: ModuleId | str) -> bool:
        return self.session(module).has_progress

    def has_started_any(self) -> bool:
        return any(self.is_started(m) for m in ModuleId)

    def module_badge(self, module: ModuleId | str) -> str:
        """Label for a module card: todo, started, under_review or completed."""
        session = self.session(module)
        if session.status is not ModuleStatus.TODO:
            return session.status.value
        return "started" if session.started else "todo"

    def progress_summary(self) -> dict[str, bool]:
        """Per-module has-progress flags, as admin reporting expects them."""
        return {m.value: self.is_started(m) for m in ModuleId}

    # ------------------------------------------------------------------
    # Routing
    # ------------------------------------------------------------------

    def _module_for(self, view: DashboardView) -> ModuleId | None:
        meta = self._registry.get_by_view(view)
        return meta.module_id if meta else None

    def _activate(self, view: DashboardView) -> DashboardView:
        previous = self._module_for(self.active_view)
        target = self._module_for(view)

        if previous is not None and previous != target:
            # Leaving a module: send any pending change now and stop its timer
            self._pipelines[previous].flush()

        self.active_view = view
        if target is not None and target != previous:
            with module_span(target.value, self.identity.email) as span:
                session = self._wizards[target].resume()
                span.set_attribute("module.resume_step", session.step)
                span.set_attribute("module.max_steps", session.max_steps)
        return view

    def entry_route(self, target: DashboardView | str = DashboardView.OVERVIEW) -> DashboardView:
        """Where a user lands when arriving with ``target`` requested.

        Goes straight into the module only if it already shows progress (and,
        for modules other than Mentor, if Mentor does too). Otherwise the
        user is sent to the overview to start from the right card.
        """
        view = _as_view(target)
        module = self._module_for(view) if view else None
        if module is None or not self.is_started(module):
            return self._activate(DashboardView.OVERVIEW)
        if module is not ModuleId.MENTOR and not self.is_started(ModuleId.MENTOR):
            return self._activate(DashboardView.OVERVIEW)
        return self._activate(view)

    def select_menu_item(self, item_id: DashboardView | str) -> MenuSelection:
        """Handle a menu click; everything but the overview and Mentor needs Mentor started."""
        view = _as_view(item_id)
        if view is None:
            raise ValueError(f"Unknown menu item: {item_id}")

        if view is DashboardView.OVERVIEW:
            return MenuSelection(view=self._activate(view))

        if view is not DashboardView.MENTOR and not self.is_started(ModuleId.MENTOR):
            logger.info(f"Menu item {view.value} blocked: mentor not started")
            return MenuSelection(
                view=self.active_view, blocked=True, message=MENTOR_REQUIRED_MESSAGE
            )

        return MenuSelection(view=self._activate(view))

    def open_module(self, module: ModuleId | str) -> ModuleWizard | None:
        """Open a module from its dashboard card; None if it is blocked."""
        meta = self._registry.get(module)
        selection = self.select_menu_item(meta.view)
        if selection.blocked:
            return None
        return self._wizards[meta.module_id]

    # ------------------------------------------------------------------
    # Leaving a module
    # ------------------------------------------------------------------

    def save_and_exit(self) -> DashboardView:
        return self._activate(DashboardView.OVERVIEW)

    def send_to_evaluation(self, module: ModuleId | str) -> DashboardView:
        """Send a finished module for review and return to the overview.

        If the module cannot be sent (not on its completion view, or already
        sent), the user stays where they are.
        """
        wizard = self.wizard(module)
        next_view = wizard.submit_for_review()
        if next_view is None:
            logger.warning(f"{wizard.session.module.value} not sent: {wizard.last_error}")
            return self.active_view
        return self._activate(next_view)

    def mark_completed(self, module: ModuleId | str) -> ModuleSession:
        """Admin approval of a module under review.

        Raises:
            InvalidStatusTransition: If the module is not under review
        """
        meta = self._registry.get(module)
        controller = ModuleStatusController(autosave=self._pipelines[meta.module_id])
        session = controller.mark_completed(self.session(meta.module_id))
        self._install(session)
        return session

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    def logout(self) -> None:
        """Drop pending saves and reset every module to its initial state."""
        for pipeline in self._pipelines.values():
            pipeline.cancel()
        for module in ModuleId:
            self._install(ModuleSession.new(module))
        self.active_view = DashboardView.OVERVIEW
        logger.info(f"Logged out {self.identity.email}; all modules reset")

    def close(self) -> None:
        for pipeline in self._pipelines.values():
            pipeline.close()

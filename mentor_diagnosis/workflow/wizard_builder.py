"""Builds the Burr application that drives one module's wizard.

Every module uses the same event loop (see ``wizard_actions``); what differs
per module lives in the ModuleSession the application holds in state.
"""

import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from burr.core import ApplicationBuilder, default, when
from burr.lifecycle import PostRunStepHook, PreRunStepHook
from burr.tracking import LocalTrackingClient

from mentor_diagnosis.config import DashboardView
from mentor_diagnosis.telemetry.spans import wizard_event_span

from .autosave import AutoSavePipeline
from .module_session import ModuleSession
from .module_status import ModuleStatusController
from .wizard_actions import WIZARD_ACTIONS, WIZARD_EVENTS

logger = logging.getLogger(__name__)

ENTRYPOINT = "receive_event"
TRACKING_PROJECT = "mentor-diagnosis"


def _build_transitions() -> list[tuple]:
    transitions: list[tuple] = [
        (ENTRYPOINT, handler, when(pending_event=event)) for event, handler in WIZARD_EVENTS.items()
    ]
    transitions.extend((handler, ENTRYPOINT, default) for handler in WIZARD_EVENTS.values())
    return transitions


# ---------------------------------------------------------------------------
# Lifecycle Hook
# ---------------------------------------------------------------------------


@dataclass
class WizardLifecycleHook(PostRunStepHook, PreRunStepHook):
    """Feeds every session change to autosave and to an optional listener."""

    autosave: AutoSavePipeline | None = None
    on_session_change: Callable[[ModuleSession], None] | None = None

    def pre_run_step(self, *, action, **kwargs):
        if action.name != ENTRYPOINT:
            logger.debug(f"Running wizard handler: {action.name}")

    def post_run_step(self, *, action, state, result, **kwargs):
        if action.name == ENTRYPOINT:
            return
        session = state.get("session")
        if session is None:
            return

        if self.autosave is not None:
            self.autosave.observe(session)

        if self.on_session_change:
            try:
                self.on_session_change(session)
            except (TypeError, AttributeError, ValueError) as e:
                logger.error(f"on_session_change callback failed: {e}")


# ---------------------------------------------------------------------------
# Wizard
# ---------------------------------------------------------------------------


class ModuleWizard:
    """Thin driver around a module's Burr application.

    Each call feeds one event: the first ``step()`` runs ``receive_event``,
    the second runs the handler the transition table routes to.
    """

    def __init__(self, app: Any, autosave: AutoSavePipeline | None = None):
        self.app = app
        self.autosave = autosave

    @property
    def session(self) -> ModuleSession:
        return self.app.state["session"]

    @property
    def last_error(self) -> str:
        return self.app.state.get("last_error", "")

    def send(self, event: str, **payload: Any) -> ModuleSession:
        """Feed one event and return the resulting session.

        Raises:
            ValueError: If ``event`` is not a wizard event
        """
        if event not in WIZARD_EVENTS:
            raise ValueError(f"Unknown wizard event: {event}. Valid events: {list(WIZARD_EVENTS)}")

        module = self.session.module.value
        with wizard_event_span(module, event, step=self.session.step):
            self.app.step(inputs={"event": event, "payload": payload})
            self.app.step()
        return self.session

    # Convenience wrappers -------------------------------------------------

    def edit(self, path: str, value: Any) -> ModuleSession:
        return self.send("edit", path=path, value=value)

    def operate(self, name: str, **kwargs: Any) -> ModuleSession:
        return self.send("operate", name=name, kwargs=kwargs)

    def next(self) -> ModuleSession:
        return self.send("next")

    def back(self) -> ModuleSession:
        return self.send("back")

    def go_to(self, step: int) -> ModuleSession:
        return self.send("go_to", step=step)

    def resume(self) -> ModuleSession:
        return self.send("resume")

    def submit_for_review(self) -> DashboardView | None:
        """Send the module for evaluation; returns the view to show next, or None."""
        self.send("submit_for_review")
        exit_view = self.app.state.get("exit_view", "")
        return DashboardView(exit_view) if exit_view else None

    def can_advance(self) -> bool:
        return self.session.can_advance()


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------


def build_module_wizard(
    session: ModuleSession,
    autosave: AutoSavePipeline | None = None,
    status_controller: ModuleStatusController | None = None,
    app_id: str | None = None,
    on_session_change: Callable[[ModuleSession], None] | None = None,
    enable_tracking: bool = False,
    tracking_project: str = TRACKING_PROJECT,
) -> ModuleWizard:
    """Build a wizard for ``session``.

    Args:
        session: Starting session (new or restored from a snapshot)
        autosave: Pipeline that persists session changes
        status_controller: Lifecycle controller; defaults to one bound to ``autosave``
        app_id: Optional custom app ID
        on_session_change: Callback after every handler
        enable_tracking: Enable Burr tracking UI
        tracking_project: Burr tracking project name

    Returns:
        ModuleWizard wrapping the Burr Application
    """
    module = session.module.value
    if app_id is None:
        app_id = f"{module}-{uuid.uuid4().hex[:8]}"
    if status_controller is None:
        status_controller = ModuleStatusController(autosave=autosave)

    tracker = None
    if enable_tracking:
        try:
            tracker = LocalTrackingClient(project=tracking_project)
            logger.info(f"Burr tracking enabled: {tracking_project}")
        except (OSError, RuntimeError) as e:
            logger.warning(f"Could not enable tracking: {e}")

    if autosave is not None:
        autosave.prime(session)

    # NOTE: status_controller is a non-serializable object in Burr state; the
    # wizard only uses in-process state, never Burr persistence.
    state: dict[str, Any] = {
        "session": session,
        "status_controller": status_controller,
        "pending_event": "",
        "pending_payload": {},
        "last_error": "",
        "exit_view": "",
    }

    builder = (
        ApplicationBuilder()
        .with_actions(**WIZARD_ACTIONS)
        .with_transitions(*_build_transitions())
        .with_state(**state)
        .with_entrypoint(ENTRYPOINT)
        .with_hooks(WizardLifecycleHook(autosave=autosave, on_session_change=on_session_change))
        .with_identifiers(app_id=app_id)
    )
    if tracker:
        builder = builder.with_tracker(tracker)

    app = builder.build()
    logger.info(f"Wizard for {module} created (app_id={app_id})")
    return ModuleWizard(app, autosave=autosave)

"""Burr actions for the module wizard.

The wizard is an event loop: ``receive_event`` records what the user did,
and the transition table routes to exactly one handler, which updates the
``session`` value and loops back. Handlers never raise for user input;
rejected input is recorded in ``last_error`` and the session is left as is.
"""

import logging

from burr.core import State, action

from mentor_diagnosis.exceptions import InvalidStatusTransition

logger = logging.getLogger(__name__)


@action(reads=[], writes=["pending_event", "pending_payload"])
def receive_event(state: State, event: str, payload: dict | None = None) -> State:
    """Record the next user event for routing.

    Args:
        event: Event name (see ``WIZARD_EVENTS``)
        payload: Event arguments
    """
    return state.update(pending_event=event, pending_payload=payload or {})


@action(reads=["session", "pending_payload"], writes=["session", "last_error"])
def edit_answers(state: State) -> State:
    """Replace one answer field: payload ``{"path": ..., "value": ...}``."""
    session = state["session"]
    payload = state["pending_payload"]
    try:
        updated = session.set_field(payload["path"], payload.get("value"))
    except (KeyError, TypeError, ValueError) as e:
        logger.warning(f"{session.module.value}: edit rejected: {e}")
        return state.update(session=session, last_error=str(e))
    return state.update(session=updated, last_error="")


@action(reads=["session", "pending_payload"], writes=["session", "last_error"])
def apply_operation(state: State) -> State:
    """Run a named collection operation: payload ``{"name": ..., "kwargs": {...}}``."""
    session = state["session"]
    payload = state["pending_payload"]
    try:
        updated = session.apply_operation(payload["name"], **(payload.get("kwargs") or {}))
    except (KeyError, TypeError, ValueError) as e:
        logger.warning(f"{session.module.value}: operation rejected: {e}")
        return state.update(session=session, last_error=str(e))
    return state.update(session=updated, last_error="")


@action(reads=["session"], writes=["session", "last_error"])
def next_step(state: State) -> State:
    """Move forward if the current step's gate passes."""
    session = state["session"]
    updated = session.advance()
    if updated is session and not session.at_completion_view:
        logger.debug(f"{session.module.value}: step {session.step} is not complete yet")
    return state.update(session=updated, last_error="")


@action(reads=["session"], writes=["session", "last_error"])
def previous_step(state: State) -> State:
    return state.update(session=state["session"].back(), last_error="")


@action(reads=["session", "pending_payload"], writes=["session", "last_error"])
def go_to_step(state: State) -> State:
    """Jump to an already reachable step: payload ``{"step": n}``."""
    session = state["session"]
    try:
        step = int(state["pending_payload"]["step"])
    except (KeyError, TypeError, ValueError) as e:
        return state.update(session=session, last_error=f"Invalid step: {e}")
    return state.update(session=session.go_to(step), last_error="")


@action(reads=["session"], writes=["session", "last_error"])
def resume_position(state: State) -> State:
    """Put the cursor where a returning user should land."""
    session = state["session"].resume()
    logger.info(f"{session.module.value}: resuming at step {session.step}/{session.max_steps}")
    return state.update(session=session, last_error="")


@action(
    reads=["session", "status_controller"],
    writes=["session", "exit_view", "last_error"],
)
def submit_for_review(state: State) -> State:
    """Send the module for evaluation from the completion view."""
    session = state["session"]
    controller = state["status_controller"]
    try:
        transition = controller.submit_for_review(session)
    except InvalidStatusTransition as e:
        logger.warning(str(e))
        return state.update(session=session, exit_view="", last_error=str(e))
    return state.update(
        session=transition.session,
        exit_view=transition.next_view.value,
        last_error="",
    )


# Event name -> handler action name
WIZARD_EVENTS: dict[str, str] = {
    "edit": "edit_answers",
    "operate": "apply_operation",
    "next": "next_step",
    "back": "previous_step",
    "go_to": "go_to_step",
    "resume": "resume_position",
    "submit_for_review": "submit_for_review",
}

WIZARD_ACTIONS = {
    "receive_event": receive_event,
    "edit_answers": edit_answers,
    "apply_operation": apply_operation,
    "next_step": next_step,
    "previous_step": previous_step,
    "go_to_step": go_to_step,
    "resume_position": resume_position,
    "submit_for_review": submit_for_review,
}

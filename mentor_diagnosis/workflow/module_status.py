"""Module lifecycle: todo -> under_review -> completed.

``todo -> under_review`` happens only from the module's completion view,
when the user sends the module for evaluation. ``under_review -> completed``
is an admin decision and is never triggered by the wizard itself.
"""

import logging
from dataclasses import dataclass

from mentor_diagnosis.config import DashboardView, ModuleStatus
from mentor_diagnosis.exceptions import InvalidStatusTransition

from .autosave import AutoSavePipeline
from .module_session import ModuleSession
from .sequencer import resume_step

logger = logging.getLogger(__name__)

_ALLOWED_TRANSITIONS: dict[ModuleStatus, set[ModuleStatus]] = {
    ModuleStatus.TODO: {ModuleStatus.UNDER_REVIEW},
    ModuleStatus.UNDER_REVIEW: {ModuleStatus.COMPLETED},
    ModuleStatus.COMPLETED: set(),
}


@dataclass(frozen=True)
class StatusTransition:
    """Result of a status change: the new session and where to go next."""

    session: ModuleSession
    next_view: DashboardView


def _check(session: ModuleSession, requested: ModuleStatus) -> None:
    if requested not in _ALLOWED_TRANSITIONS[session.status]:
        raise InvalidStatusTransition(
            f"{session.module.value}: cannot move from {session.status.value} to {requested.value}",
            current=session.status.value,
            requested=requested.value,
        )


class ModuleStatusController:
    """Applies lifecycle transitions and the final save that goes with them."""

    def __init__(self, autosave: AutoSavePipeline | None = None):
        self.autosave = autosave

    def submit_for_review(self, session: ModuleSession) -> StatusTransition:
        """Send a finished module for evaluation.

        Sets ``under_review``, forces one last save of the whole session and
        returns control to the dashboard overview.

        Raises:
            InvalidStatusTransition: If the module is not in ``todo``, the
                user is not on the completion view, or a step is still open
        """
        _check(session, ModuleStatus.UNDER_REVIEW)
        if not session.at_completion_view:
            raise InvalidStatusTransition(
                f"{session.module.value}: can only be sent for review from the completion view",
                current=session.status.value,
                requested=ModuleStatus.UNDER_REVIEW.value,
            )
        pending = resume_step(session.module, session.answers)
        if pending <= session.max_steps:
            raise InvalidStatusTransition(
                f"{session.module.value}: step {pending} is not complete",
                current=session.status.value,
                requested=ModuleStatus.UNDER_REVIEW.value,
            )

        updated = session.with_status(ModuleStatus.UNDER_REVIEW)
        if self.autosave is not None:
            self.autosave.flush(updated)
        logger.info(f"{session.module.value} sent for review")
        return StatusTransition(session=updated, next_view=DashboardView.OVERVIEW)

    def mark_completed(self, session: ModuleSession) -> ModuleSession:
        """Admin-side approval of a reviewed module.

        Raises:
            InvalidStatusTransition: If the module is not under review
        """
        _check(session, ModuleStatus.COMPLETED)
        updated = session.with_status(ModuleStatus.COMPLETED)
        if self.autosave is not None:
            self.autosave.flush(updated)
        logger.info(f"{session.module.value} marked completed")
        return updated

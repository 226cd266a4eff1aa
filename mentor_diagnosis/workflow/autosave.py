"""Debounced background saving of module sessions.

The pipeline watches serialized session snapshots. Whenever a snapshot
differs from the last one it saw, it restarts a quiet-period timer; when the
timer finally fires, the latest snapshot is submitted to the persistence
adapter. A burst of edits therefore produces exactly one submit carrying the
last state of the burst.

Persistence is best effort: adapter failures are logged and swallowed, and
the indicator still moves to "saved". There is no retry.
"""

import json
import logging
import threading
from collections.abc import Callable
from typing import Any

from mentor_diagnosis.config import (
    AUTOSAVE_DELAY_SECONDS,
    SAVED_INDICATOR_SECONDS,
    ModuleId,
    SaveStatus,
)
from mentor_diagnosis.persistence.adapter import Identity, PersistenceAdapter

from .module_session import ModuleSession

logger = logging.getLogger(__name__)


class AutoSavePipeline:
    """Debounced persistence for one module.

    Example:
        pipeline = AutoSavePipeline(ModuleId.MENTOR, identity, store)
        pipeline.prime(session)          # baseline, nothing is sent
        pipeline.observe(edited_session) # starts the 2s quiet period
        ...
        pipeline.close()                 # cancels timers on teardown
    """

    def __init__(
        self,
        module: ModuleId,
        identity: Identity,
        adapter: PersistenceAdapter,
        delay_seconds: float = AUTOSAVE_DELAY_SECONDS,
        saved_indicator_seconds: float = SAVED_INDICATOR_SECONDS,
    ):
        self.module = module
        self.identity = identity
        self.adapter = adapter
        self.delay_seconds = delay_seconds
        self.saved_indicator_seconds = saved_indicator_seconds

        self.status = SaveStatus.IDLE
        self.submit_count = 0

        self._lock = threading.Lock()
        self._last_serialized: str | None = None
        self._pending: dict[str, Any] | None = None
        self._timer: threading.Timer | None = None
        self._idle_timer: threading.Timer | None = None
        self._listeners: list[Callable[[SaveStatus], None]] = []

    # ------------------------------------------------------------------
    # Indicator
    # ------------------------------------------------------------------

    def on_status_change(self, callback: Callable[[SaveStatus], None]) -> None:
        self._listeners.append(callback)

    def _set_status(self, status: SaveStatus) -> None:
        self.status = status
        for callback in self._listeners:
            try:
                callback(status)
            except (TypeError, AttributeError, ValueError) as e:
                logger.error(f"Autosave status callback failed: {e}")

    def _return_to_idle(self) -> None:
        with self._lock:
            self._idle_timer = None
            if self.status is not SaveStatus.SAVED:
                return
        self._set_status(SaveStatus.IDLE)

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    @staticmethod
    def _serialize(payload: dict[str, Any]) -> str:
        """Change key of a snapshot: answers and status only.

        Moving the step cursor alone does not start a save; the cursor rides
        along with the next one.
        """
        key = {"answers": payload["answers"], "status": payload["status"]}
        return json.dumps(key, sort_keys=True, ensure_ascii=False)

    def prime(self, session: ModuleSession) -> None:
        """Record ``session`` as already saved, without submitting it."""
        with self._lock:
            self._last_serialized = self._serialize(session.snapshot())

    def observe(self, session: ModuleSession) -> bool:
        """Feed the current session; restarts the quiet period if it changed.

        Returns:
            True if the snapshot changed and a save was scheduled
        """
        payload = session.snapshot()
        serialized = self._serialize(payload)

        with self._lock:
            if serialized == self._last_serialized:
                if self._pending is not None:
                    self._pending = payload
                return False
            self._last_serialized = serialized
            self._pending = payload
            self._cancel_timers_locked()
            self._timer = threading.Timer(self.delay_seconds, self._fire)
            self._timer.daemon = True
            self._timer.start()

        logger.debug(f"{self.module.value}: change observed, save in {self.delay_seconds}s")
        self._set_status(SaveStatus.SAVING)
        return True

    def _fire(self) -> None:
        with self._lock:
            payload = self._pending
            self._pending = None
            self._timer = None
        if payload is not None:
            self._submit(payload)

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def _submit(self, payload: dict[str, Any]) -> None:
        try:
            self.adapter.submit(self.identity, self.module.value, payload)
            logger.info(f"{self.module.value}: saved for {self.identity.email}")
        except Exception as e:
            # Best effort: never surfaced, never retried
            logger.error(f"{self.module.value}: save failed for {self.identity.email}: {e}")
        finally:
            self.submit_count += 1

        with self._lock:
            if self._timer is not None:
                # A newer change is already waiting for its own save
                return
        self._set_status(SaveStatus.SAVED)
        with self._lock:
            if self._idle_timer is not None:
                self._idle_timer.cancel()
            self._idle_timer = threading.Timer(self.saved_indicator_seconds, self._return_to_idle)
            self._idle_timer.daemon = True
            self._idle_timer.start()

    def flush(self, session: ModuleSession | None = None) -> bool:
        """Submit now instead of waiting for the quiet period.

        With ``session`` given, that snapshot is always sent (used when a
        module is sent for review). Without it, only a pending unsaved change
        is sent.

        Returns:
            True if a submit was attempted
        """
        with self._lock:
            self._cancel_timers_locked()
            if session is not None:
                payload = session.snapshot()
                self._last_serialized = self._serialize(payload)
            else:
                payload = self._pending
            self._pending = None

        if payload is None:
            return False
        self._submit(payload)
        return True

    # ------------------------------------------------------------------
    # Cancellation
    # ------------------------------------------------------------------

    def _cancel_timers_locked(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if self._idle_timer is not None:
            self._idle_timer.cancel()
            self._idle_timer = None

    @property
    def has_pending(self) -> bool:
        with self._lock:
            return self._timer is not None

    def cancel(self) -> None:
        """Drop the pending save, if any."""
        with self._lock:
            had_pending = self._timer is not None
            self._cancel_timers_locked()
            self._pending = None
            if had_pending:
                # The dropped change was never saved; observing it again must reschedule
                self._last_serialized = None
        if had_pending:
            logger.debug(f"{self.module.value}: pending save cancelled")
        if self.status is not SaveStatus.IDLE:
            self._set_status(SaveStatus.IDLE)

    def close(self) -> None:
        """Teardown: cancel every timer."""
        self.cancel()

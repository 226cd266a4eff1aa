"""Drag-versus-click recognition for positional widgets.

A gesture starts when the pointer is pressed on an item. If the pointer then
travels more than the threshold from where it was pressed, the gesture becomes
a drag and every further move relocates the item. If it is released before
that, the gesture is a click and the item's editor should open.

States::

    idle -> pressed -> dragging -> idle   (result: drag)
    idle -> pressed -> idle               (result: click)
"""

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from mentor_diagnosis.config import DRAG_THRESHOLD_PX, TARGET_RADIUS

from .scoring import Rect, clamp_to_radius, pointer_to_percent

logger = logging.getLogger(__name__)


class GestureState(Enum):
    IDLE = "idle"
    PRESSED = "pressed"
    DRAGGING = "dragging"


class GestureKind(Enum):
    CLICK = "click"
    DRAG = "drag"
    NONE = "none"


@dataclass(frozen=True)
class GestureResult:
    """Outcome of a finished gesture."""

    kind: GestureKind
    index: int | None = None


class GestureRecognizer:
    """Tracks one pointer gesture at a time.

    Only one item can be active; presses arriving while a gesture is in
    progress are ignored.
    """

    def __init__(self, threshold_px: float = DRAG_THRESHOLD_PX):
        self.threshold_px = threshold_px
        self.state = GestureState.IDLE
        self.active_index: int | None = None
        self._start: tuple[float, float] = (0.0, 0.0)

    def press(self, index: int, client_x: float, client_y: float) -> bool:
        """Start a gesture on item ``index``. Returns False if one is already active."""
        if self.state is not GestureState.IDLE:
            logger.debug(f"Press on item {index} ignored; item {self.active_index} is active")
            return False
        self.state = GestureState.PRESSED
        self.active_index = index
        self._start = (client_x, client_y)
        return True

    def move(self, client_x: float, client_y: float) -> bool:
        """Feed a pointer move. Returns True when the active item should follow it."""
        if self.state is GestureState.IDLE:
            return False
        if self.state is GestureState.PRESSED:
            travelled = math.hypot(client_x - self._start[0], client_y - self._start[1])
            if travelled <= self.threshold_px:
                return False
            self.state = GestureState.DRAGGING
        return True

    def release(self) -> GestureResult:
        """End the gesture and report whether it was a click or a drag."""
        if self.state is GestureState.IDLE:
            return GestureResult(kind=GestureKind.NONE)

        kind = GestureKind.DRAG if self.state is GestureState.DRAGGING else GestureKind.CLICK
        result = GestureResult(kind=kind, index=self.active_index)
        self.state = GestureState.IDLE
        self.active_index = None
        return result

    def cancel(self) -> None:
        self.state = GestureState.IDLE
        self.active_index = None


class PositionalWidget:
    """A target or radar widget: a gesture recognizer bound to item positions.

    Args:
        rect: Screen rectangle of the widget
        on_move: Called with ``(index, x, y)`` while an item is dragged; the
            position is already clamped to the disc
        on_open_editor: Called with ``index`` when an item is clicked
        radius: Clamp radius in percentage units
    """

    def __init__(
        self,
        rect: Rect,
        on_move: Callable[[int, float, float], None],
        on_open_editor: Callable[[int], None] | None = None,
        radius: float = TARGET_RADIUS,
        threshold_px: float = DRAG_THRESHOLD_PX,
    ):
        self.rect = rect
        self.on_move = on_move
        self.on_open_editor = on_open_editor
        self.radius = radius
        self.recognizer = GestureRecognizer(threshold_px=threshold_px)

    def pointer_down(self, index: int, client_x: float, client_y: float) -> bool:
        return self.recognizer.press(index, client_x, client_y)

    def pointer_move(self, client_x: float, client_y: float) -> tuple[float, float] | None:
        """Move the active item if the gesture is a drag; returns the new position."""
        if not self.recognizer.move(client_x, client_y):
            return None
        x, y = pointer_to_percent(client_x, client_y, self.rect)
        x, y = clamp_to_radius(x, y, self.radius)
        self.on_move(self.recognizer.active_index, x, y)
        return x, y

    def pointer_up(self) -> GestureResult:
        result = self.recognizer.release()
        if result.kind is GestureKind.CLICK and self.on_open_editor is not None:
            self.on_open_editor(result.index)
        return result

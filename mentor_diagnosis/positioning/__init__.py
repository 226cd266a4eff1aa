"""Positional scoring engine for the target and radar tools.

Converts a 2D placement relative to a widget center into a bounded score,
and recognizes whether a pointer gesture on an item was a click or a drag.
"""

from .gestures import GestureKind, GestureRecognizer, GestureResult, GestureState, PositionalWidget
from .scoring import (
    Rect,
    arrow_scale,
    clamp_to_radius,
    distance_from_center,
    pointer_to_percent,
    position_from_confidence,
    position_from_relevance,
    radar_confidence,
    target_relevance,
)

__all__ = [
    "GestureKind",
    "GestureRecognizer",
    "GestureResult",
    "GestureState",
    "PositionalWidget",
    "Rect",
    "arrow_scale",
    "clamp_to_radius",
    "distance_from_center",
    "pointer_to_percent",
    "position_from_confidence",
    "position_from_relevance",
    "radar_confidence",
    "target_relevance",
]

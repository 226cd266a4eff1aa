"""Positional scoring for the target and radar tools.

Both tools place items on a disc using percentage offsets from the widget
center (x and y in [-50, 50]). The distance from the center is turned into a
score, but the two tools use different scales:

- Target tool: relevance in [0, 100], an integer priority.
- Radar tool: confidence in [1, 5], how sure the mentor is of a persona.

The two formulas stay separate functions on purpose. Their inputs, output
ranges and meaning differ, and each has its own tests.
"""

import math
from dataclasses import dataclass

from mentor_diagnosis.config import DEFAULT_GEOMETRY, TARGET_RADIUS

MIN_CONFIDENCE = DEFAULT_GEOMETRY.min_confidence
MAX_CONFIDENCE = DEFAULT_GEOMETRY.max_confidence

# Angle used when a point sits exactly at the center: straight up
DEFAULT_ANGLE = -math.pi / 2


@dataclass(frozen=True)
class Rect:
    """Screen rectangle of a positional widget, in pixels."""

    left: float
    top: float
    width: float
    height: float

    @property
    def center_x(self) -> float:
        return self.left + self.width / 2

    @property
    def center_y(self) -> float:
        return self.top + self.height / 2


def distance_from_center(x: float, y: float) -> float:
    return math.hypot(x, y)


def clamp_to_radius(x: float, y: float, radius: float = TARGET_RADIUS) -> tuple[float, float]:
    """Pull a point back onto the disc if it lies outside ``radius``.

    The point keeps its angle; only its distance is reduced. Points already
    inside the disc are returned unchanged.
    """
    dist = math.hypot(x, y)
    if dist <= radius:
        return x, y
    angle = math.atan2(y, x)
    return radius * math.cos(angle), radius * math.sin(angle)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def target_relevance(x: float, y: float, max_distance: float = TARGET_RADIUS) -> int:
    """Relevance of a target-tool item, 100 at the center and 0 at ``max_distance``.

    ``round(clamp(100 - distance / max_distance * 100, 0, 100))``
    """
    dist = math.hypot(x, y)
    raw = 100 - (dist / max_distance) * 100
    return _round_half_up(min(100.0, max(0.0, raw)))


def radar_confidence(x: float, y: float, radius: float = TARGET_RADIUS) -> float:
    """Confidence of a radar-tool persona, 5 at the center and 1 at ``radius``.

    ``5 - (distance / radius) * 4``, clamped to [1, 5].
    """
    dist = math.hypot(x, y)
    raw = MAX_CONFIDENCE - (dist / radius) * (MAX_CONFIDENCE - MIN_CONFIDENCE)
    return min(MAX_CONFIDENCE, max(MIN_CONFIDENCE, raw))


def _current_angle(x: float, y: float) -> float:
    if x == 0 and y == 0:
        return DEFAULT_ANGLE
    return math.atan2(y, x)


def position_from_confidence(
    confidence: float,
    x: float = 0.0,
    y: float = 0.0,
    radius: float = TARGET_RADIUS,
) -> tuple[float, float]:
    """Inverse of :func:`radar_confidence` for the slider control.

    Places the persona at ``((5 - confidence) / 4) * radius`` from the center,
    keeping its current angle (straight up when it sits at the center).
    """
    confidence = min(MAX_CONFIDENCE, max(MIN_CONFIDENCE, confidence))
    dist = ((MAX_CONFIDENCE - confidence) / (MAX_CONFIDENCE - MIN_CONFIDENCE)) * radius
    angle = _current_angle(x, y)
    return dist * math.cos(angle), dist * math.sin(angle)


def position_from_relevance(
    relevance: float,
    x: float = 0.0,
    y: float = 0.0,
    max_distance: float = TARGET_RADIUS,
) -> tuple[float, float]:
    """Inverse of :func:`target_relevance`, keeping the item's current angle."""
    relevance = min(100.0, max(0.0, relevance))
    dist = (100 - relevance) / 100 * max_distance
    angle = _current_angle(x, y)
    return dist * math.cos(angle), dist * math.sin(angle)


def arrow_scale(relevance: float) -> float:
    """Display scale of a target arrow: 0.8 at relevance 0, 1.3 at 100."""
    return 0.8 + (relevance / 100) * 0.5


def pointer_to_percent(client_x: float, client_y: float, rect: Rect) -> tuple[float, float]:
    """Convert a pointer position in pixels to percentage offsets from the center."""
    x = (client_x - rect.center_x) / rect.width * 100
    y = (client_y - rect.center_y) / rect.height * 100
    return x, y

"""
Drawing session: the stroke buffer owned by one drawing surface.
"""

import logging
import threading
from typing import Callable, List, Optional, Tuple

from ..config.settings import DigitConfig
from ..utils.stroke_utils import Point

logger = logging.getLogger(__name__)


class DrawingSession:
    """
    Accumulates pen strokes for one surface.

    Points are recorded in temporal order. A stroke starts with a pen-down
    point (``dragging=False``) and continues with dragging points until
    ``end_stroke``. Ending a stroke notifies ``on_change`` and schedules an
    automatic clear after ``auto_clear_delay`` milliseconds of inactivity.
    """

    def __init__(self, name: str = 'default',
                 on_change: Optional[Callable[['DrawingSession'], None]] = None,
                 auto_clear_delay: Optional[int] = DigitConfig.AUTO_CLEAR_DELAY):
        self.name = name
        self.on_change = on_change
        self.auto_clear_delay = auto_clear_delay

        self.points: List[Point] = []
        self.is_drawing = False
        self.clear_timer: Optional[threading.Timer] = None
        self.state_lock = threading.Lock()

    def _validate(self, x: float, y: float) -> None:
        for key, value in (('x', x), ('y', y)):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"Point {key} must be numeric")

    def start_stroke(self, x: float, y: float) -> Point:
        """Pen down: record the first point of a new stroke."""
        self._validate(x, y)
        self._cancel_clear_timer()

        point = Point(float(x), float(y), dragging=False)
        with self.state_lock:
            self.is_drawing = True
            self.points.append(point)
        return point

    def extend_stroke(self, x: float, y: float) -> Optional[Point]:
        """
        Pen moved: record a continuation point.

        Ignored while the pen is up, so the first point of a session is
        always a pen-down.
        """
        self._validate(x, y)

        with self.state_lock:
            if not self.is_drawing:
                return None
            point = Point(float(x), float(y), dragging=True)
            self.points.append(point)
        return point

    def end_stroke(self) -> None:
        """Pen up: notify the listener and arm the inactivity clear."""
        with self.state_lock:
            if not self.is_drawing:
                return
            self.is_drawing = False

        if self.on_change:
            self.on_change(self)

        self._schedule_clear()

    def get_points(self) -> Tuple[Point, ...]:
        """Read-only snapshot of the recorded points."""
        with self.state_lock:
            return tuple(self.points)

    def clear(self) -> None:
        """Drop all strokes."""
        self._cancel_clear_timer()
        with self.state_lock:
            self.points = []
            self.is_drawing = False
        logger.debug(f"Session '{self.name}' cleared")

    def _auto_clear(self) -> None:
        with self.state_lock:
            if self.is_drawing:
                return
            self.points = []
            self.clear_timer = None
        logger.debug(f"Session '{self.name}' cleared after inactivity")

    def _schedule_clear(self) -> None:
        if self.auto_clear_delay is None:
            return
        self._cancel_clear_timer()
        self.clear_timer = threading.Timer(self.auto_clear_delay / 1000.0, self._auto_clear)
        self.clear_timer.daemon = True
        self.clear_timer.start()

    def _cancel_clear_timer(self) -> None:
        if self.clear_timer:
            self.clear_timer.cancel()
            self.clear_timer = None

    def __len__(self):
        return len(self.points)

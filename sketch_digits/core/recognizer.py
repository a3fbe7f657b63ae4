"""
Digit recognizer that wires drawing sessions to predictions and displays.
"""

import logging
from typing import Dict, Optional

import numpy as np

from ..config.settings import DigitConfig
from ..gestures.confidence_synthesizer import ConfidenceSynthesizer, PredictionResult
from ..utils.logger import PredictionLogger
from .session import DrawingSession

logger = logging.getLogger(__name__)


class DigitRecognizer:
    """
    Owns named drawing surfaces and runs a prediction whenever a stroke ends.

    A display is any object with ``show_prediction(digit)`` and, for surfaces
    registered with ``show_bars=True``, ``show_bars(widths)`` taking ten
    percentages. Display problems are logged and never stop the session.
    """

    def __init__(self, rng: Optional[np.random.Generator] = None,
                 prediction_logger: Optional[PredictionLogger] = None,
                 auto_clear_delay: Optional[int] = DigitConfig.AUTO_CLEAR_DELAY):
        self.synthesizer = ConfidenceSynthesizer(rng=rng)
        self.logger = prediction_logger
        self.auto_clear_delay = auto_clear_delay

        self.sessions: Dict[str, DrawingSession] = {}
        self.displays: Dict[str, object] = {}
        self.show_bars: Dict[str, bool] = {}
        self.last_results: Dict[str, PredictionResult] = {}

    def add_surface(self, name: str, display=None, show_bars: bool = False) -> DrawingSession:
        """Create a session for a new surface and register its display."""
        session = DrawingSession(name, on_change=lambda s: self.process(s.name),
                                 auto_clear_delay=self.auto_clear_delay)
        self.sessions[name] = session
        self.displays[name] = display
        self.show_bars[name] = show_bars
        return session

    def get_session(self, name: str) -> DrawingSession:
        return self.sessions[name]

    def process(self, name: str) -> Optional[PredictionResult]:
        """
        Predict the digit drawn on a surface and update its display.

        Returns:
            The PredictionResult, or None when the surface has no display
            or the prediction failed
        """
        display = self.displays.get(name)
        if display is None:
            logger.error(f"Result display for surface '{name}' not found")
            return None

        session = self.sessions[name]
        points = session.get_points()

        try:
            result = self.synthesizer.predict(points)
            display.show_prediction(result.predicted_class)

            if self.show_bars[name]:
                show_bars = getattr(display, 'show_bars', None)
                if show_bars is None:
                    logger.error(f"Bar display for surface '{name}' not found")
                else:
                    show_bars([c * 100 for c in result.confidences])

            self.last_results[name] = result
            if self.logger:
                self.logger.log_prediction(name, result, len(points), self.show_bars[name])
        except Exception as e:
            logger.error(f"Error during prediction: {e}")
            return None

        return result

    def clear(self, name: Optional[str] = None) -> None:
        """Clear one surface, or all of them."""
        names = [name] if name is not None else list(self.sessions)
        for surface in names:
            self.sessions[surface].clear()
            self.last_results.pop(surface, None)
            if self.logger:
                self.logger.log_clear(surface)

"""
Logging utilities for digit predictions.
"""

import datetime
import logging
from typing import Optional, Sequence

logger = logging.getLogger(__name__)


class PredictionLogger:
    """Handles logging of predictions and session events."""

    def __init__(self, debug_file: Optional[str] = 'prediction_debug.log'):
        self.debug_file = None
        if debug_file is None:
            return
        try:
            self.debug_file = open(debug_file, 'w')
            self.debug_file.write(f"Debug logging started at {datetime.datetime.now()}\n")
            self.debug_file.flush()
        except OSError as e:
            logger.warning(f"Could not open debug file: {e}")

    def _timestamp(self) -> str:
        return datetime.datetime.now().strftime("%H:%M:%S.%f")[:-3]

    def format_bars(self, confidences: Sequence[float], width: int = 20) -> str:
        """Render confidences as one text bar per digit."""
        lines = []
        for digit, confidence in enumerate(confidences):
            filled = int(round(confidence * width))
            lines.append(f"   {digit}: {'█' * filled:<{width}} {confidence * 100:5.1f}%")
        return "\n".join(lines)

    def log_prediction(self, surface: str, result, point_count: int = 0,
                       show_bars: bool = False):
        """Log a prediction result for a surface."""
        timestamp = self._timestamp()

        print(f"[{timestamp}] ✍️  {surface}: predicted {result.predicted_class} "
              f"(shape: {result.shape}, {point_count} pts, "
              f"confidence {max(result.confidences) * 100:.1f}%)")

        if show_bars:
            print(self.format_bars(result.confidences))

        if self.debug_file:
            try:
                self.debug_file.write(f"[{timestamp}] {surface} {result}\n")
                self.debug_file.flush()
            except OSError as e:
                logger.warning(f"Could not write debug file: {e}")

    def log_clear(self, surface: str):
        """Log a surface being cleared."""
        print(f"[{self._timestamp()}] 🧽 {surface}: cleared")

    def close(self):
        """Close the debug file."""
        if self.debug_file:
            self.debug_file.close()
            self.debug_file = None

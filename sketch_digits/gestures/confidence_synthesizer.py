"""
Confidence Synthesizer for Digit Predictions

Turns a shape label into a 10-class confidence distribution the way a small
neural network's softmax output would look: a hand-authored rule table picks
likely digits, bounded uniform noise is injected, and the result is
renormalized. All randomness comes from an injectable numpy Generator.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

import numpy as np

from ..config.settings import DigitConfig
from ..utils.stroke_utils import Point, StrokeUtils
from .shape_classifier import ShapeClassifier, ShapeLabel


# Label -> {digit: confidence}. Ordered; 'complex' and the random fallback
# are handled separately.
CONFIDENCE_RULES: Tuple[Tuple[str, Dict[int, float]], ...] = (
    ('vertical_line', {1: 0.9, 7: 0.2}),
    ('horizontal_line', {7: 0.5, 0: 0.1, 4: 0.1}),
    ('dot', {1: 0.6}),
    ('cross', {8: 0.6, 4: 0.5, 7: 0.2}),
    ('circle', {0: 0.85, 6: 0.4, 8: 0.3, 9: 0.3}),
    ('zigzag', {2: 0.5, 3: 0.4, 7: 0.6, 5: 0.3}),
    ('curved', {2: 0.5, 3: 0.6, 5: 0.5, 8: 0.4, 9: 0.4}),
)

COMPLEX_OPEN_LOOP = {6: 0.7, 9: 0.7, 8: 0.4}
COMPLEX_CLOSED_LOOP = {8: 0.7, 0: 0.6}
COMPLEX_ANGULAR = {4: 0.7, 7: 0.6, 2: 0.4}
COMPLEX_MIXED = {2: 0.5, 3: 0.6, 5: 0.6}

# (top_left, top_right, bottom_left, bottom_right) -> digit nudged upward
QUADRANT_PATTERNS: Tuple[Tuple[Tuple[bool, bool, bool, bool], int], ...] = (
    ((True, True, False, True), 2),
    ((True, True, True, False), 5),
    ((False, True, True, True), 3),
)


@dataclass(frozen=True)
class PredictionResult:
    """Predicted digit, its confidence vector and the shape that drove it."""
    predicted_class: int
    confidences: Tuple[float, ...]
    shape: ShapeLabel = 'unknown'


class ConfidenceSynthesizer:
    """
    Simulates a digit classifier from shape heuristics.

    The label is deterministic; the confidences are not. Pass a seeded
    ``numpy.random.Generator`` as ``rng`` to make predictions reproducible.
    """

    def __init__(self, rng: Optional[np.random.Generator] = None,
                 noise: float = DigitConfig.CONFIDENCE_NOISE,
                 floor: float = DigitConfig.CONFIDENCE_FLOOR):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.noise = noise
        self.floor = floor
        self.shape_classifier = ShapeClassifier()
        self.rules = dict(CONFIDENCE_RULES)

    def floor_vector(self) -> np.ndarray:
        """Uniform low confidence: no information."""
        return np.full(DigitConfig.NUM_CLASSES, self.floor, dtype=float)

    def base_confidences(self, shape: str, points: Sequence[Point]) -> np.ndarray:
        """
        Pre-noise confidence vector for a shape.

        Args:
            shape: ShapeLabel computed from ``points``
            points: The drawing, used by the 'complex' sub-analysis

        Returns:
            Unnormalized 10-element vector
        """
        conf = self.floor_vector()

        if shape in self.rules:
            for digit, value in self.rules[shape].items():
                conf[digit] = value
        elif shape == 'complex':
            self._apply_complex_rules(conf, points)
        else:
            # Unknown shapes: one random digit gets a modest bump
            conf[int(self.rng.integers(0, DigitConfig.NUM_CLASSES))] = DigitConfig.FALLBACK_CONFIDENCE

        return conf

    def _apply_complex_rules(self, conf: np.ndarray, points: Sequence[Point]) -> None:
        """Refine 'complex' drawings by loop, center density and quadrants."""
        has_loop = StrokeUtils.has_loop(points)
        density = StrokeUtils.center_density(points)
        strokes = StrokeUtils.stroke_count(points)
        threshold = DigitConfig.CENTER_DENSITY_THRESHOLD

        if has_loop and density < threshold:
            pattern = COMPLEX_OPEN_LOOP
        elif has_loop and density > threshold:
            pattern = COMPLEX_CLOSED_LOOP
        elif strokes >= 2 and not has_loop:
            pattern = COMPLEX_ANGULAR
        else:
            pattern = COMPLEX_MIXED

        for digit, value in pattern.items():
            conf[digit] = value

        center_x, center_y = StrokeUtils.bounding_box_center(points)
        quadrants = StrokeUtils.quadrant_occupancy(points, center_x, center_y)
        occupied = (quadrants['top_left'], quadrants['top_right'],
                    quadrants['bottom_left'], quadrants['bottom_right'])

        for expected, digit in QUADRANT_PATTERNS:
            if occupied == expected:
                conf[digit] += DigitConfig.QUADRANT_BONUS

    def finalize_confidences(self, conf: np.ndarray) -> Tuple[int, Tuple[float, ...]]:
        """
        Add bounded noise, clamp to [0, 1], normalize and pick the arg-max.

        The floor vector sums to 0.5 and the noise is smaller than that per
        entry on average, so the sum is positive in practice.
        """
        noise = self.rng.uniform(-self.noise, self.noise, size=len(conf))
        noisy = np.clip(conf + noise, 0.0, 1.0)
        normalized = noisy / noisy.sum()

        predicted_class = int(np.argmax(normalized))
        return predicted_class, tuple(float(c) for c in normalized)

    def predict(self, points: Sequence[Point]) -> PredictionResult:
        """
        Predict a digit for a drawing.

        Args:
            points: Ordered Points; may be empty

        Returns:
            PredictionResult. For an empty drawing the class is a random digit
            and the confidences are the unnormalized floor vector.
        """
        shape = self.shape_classifier.classify(points)

        if shape == 'none':
            guess = int(self.rng.integers(0, DigitConfig.NUM_CLASSES))
            return PredictionResult(guess, tuple(float(c) for c in self.floor_vector()), shape)

        conf = self.base_confidences(shape, points)
        predicted_class, confidences = self.finalize_confidences(conf)
        return PredictionResult(predicted_class, confidences, shape)


# Global instance
_synthesizer = None

def predict_digit(points: Sequence[Point],
                  rng: Optional[np.random.Generator] = None) -> PredictionResult:
    """Global function to predict a digit. A given ``rng`` gets a fresh synthesizer."""
    global _synthesizer
    if rng is not None:
        return ConfidenceSynthesizer(rng=rng).predict(points)
    if _synthesizer is None:
        _synthesizer = ConfidenceSynthesizer()
    return _synthesizer.predict(points)

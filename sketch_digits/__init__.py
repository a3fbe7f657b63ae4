"""
Sketch Digits Package
Heuristic handwritten-digit recognition simulator for freehand strokes.
"""

from .core.session import DrawingSession
from .core.recognizer import DigitRecognizer
from .gestures.shape_classifier import ShapeClassifier, classify_shape
from .gestures.confidence_synthesizer import ConfidenceSynthesizer, PredictionResult, predict_digit
from .utils.stroke_utils import Point

__version__ = "1.0.0"
__all__ = [
    "DrawingSession",
    "DigitRecognizer",
    "ShapeClassifier",
    "ConfidenceSynthesizer",
    "PredictionResult",
    "Point",
    "classify_shape",
    "predict_digit"
]

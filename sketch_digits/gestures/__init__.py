"""
Shape classification and confidence synthesis.

This module turns captured strokes into a shape label and a simulated
digit prediction with a confidence distribution.
"""

from .shape_classifier import ShapeClassifier, SHAPE_LABELS, classify_shape, get_shape_stats
from .confidence_synthesizer import ConfidenceSynthesizer, PredictionResult, predict_digit

__all__ = [
    'ShapeClassifier',
    'SHAPE_LABELS',
    'classify_shape',
    'get_shape_stats',
    'ConfidenceSynthesizer',
    'PredictionResult',
    'predict_digit'
]

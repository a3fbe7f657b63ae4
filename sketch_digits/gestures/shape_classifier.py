"""
Shape Classification for Digit Sketches

This module maps a captured point sequence to one discrete shape label
(line, dot, cross, circle, zigzag, ...) using bounding-box, stroke-count,
closure and turning features. The result is a pure function of the input.
"""

import math
from typing import Callable, Dict, List, Literal, Sequence, Tuple

from ..config.settings import DigitConfig
from ..utils.stroke_utils import GeometryUtils, Point, StrokeUtils


ShapeLabel = Literal[
    'none', 'horizontal_line', 'vertical_line', 'dot', 'cross', 'circle',
    'ellipse', 'complex', 'zigzag', 'curved', 'unknown'
]

SHAPE_LABELS: Tuple[str, ...] = (
    'none', 'horizontal_line', 'vertical_line', 'dot', 'cross', 'circle',
    'ellipse', 'complex', 'zigzag', 'curved', 'unknown'
)


def count_direction_changes(points: Sequence[Point]) -> int:
    """
    Count horizontal reversals in the sequence.

    A reversal is a sign flip between consecutive x-deltas where both deltas
    exceed ZIGZAG_MIN_DELTA, so small jitter is not counted.
    """
    min_delta = DigitConfig.ZIGZAG_MIN_DELTA
    changes = 0

    for i in range(2, len(points)):
        dx1 = points[i-1].x - points[i-2].x
        dx2 = points[i].x - points[i-1].x

        if dx1 * dx2 < 0 and abs(dx1) > min_delta and abs(dx2) > min_delta:
            changes += 1

    return changes


def total_turning(points: Sequence[Point], wrap: bool = False) -> float:
    """
    Accumulated absolute turning angle over triples of dragging points.

    With ``wrap=False`` raw atan2 differences are summed, so a turn across
    the +/-pi boundary counts as nearly 2*pi. ``classify`` uses that form.
    """
    total = 0.0

    for i in range(2, len(points)):
        p1, p2, p3 = points[i-2], points[i-1], points[i]

        if p1.dragging and p2.dragging and p3.dragging:
            angle1 = GeometryUtils.segment_angle(p1, p2)
            angle2 = GeometryUtils.segment_angle(p2, p3)
            delta = angle2 - angle1
            if wrap:
                delta = GeometryUtils.wrap_angle(delta)
            total += abs(delta)

    return total


def is_zigzag(points: Sequence[Point]) -> bool:
    """Detect back-and-forth strokes (e.g. 7, Z)."""
    if len(points) < DigitConfig.ZIGZAG_MIN_POINTS:
        return False
    return count_direction_changes(points) >= DigitConfig.ZIGZAG_MIN_CHANGES


def has_arcs(points: Sequence[Point]) -> bool:
    """Detect strokes that turn through more than 1.5 pi (e.g. 2, 3)."""
    if len(points) < DigitConfig.ARC_MIN_POINTS:
        return False
    return total_turning(points) > math.pi * DigitConfig.ARC_MIN_TURNING


class ShapeClassifier:
    """
    Classifies a stroke sequence into a ShapeLabel.

    Rules are evaluated as an ordered decision list and overlap on purpose:
    a short closed single stroke is a ``dot`` before it can be a ``circle``.
    Reordering the rules changes results.
    """

    def __init__(self):
        c = DigitConfig
        self.rules: List[Tuple[Callable[[Dict], bool], ShapeLabel]] = [
            (lambda f: f['stroke_count'] == 1 and f['aspect_ratio'] > c.LINE_ASPECT_RATIO,
             'horizontal_line'),
            (lambda f: f['stroke_count'] == 1 and f['aspect_ratio'] < c.VERTICAL_ASPECT_RATIO,
             'vertical_line'),
            (lambda f: (f['stroke_count'] == 1 and f['width'] < c.DOT_MAX_SIZE
                        and f['height'] < c.DOT_MAX_SIZE),
             'dot'),
            (lambda f: (f['stroke_count'] == 2
                        and abs(f['aspect_ratio'] - 1) < c.SQUARE_TOLERANCE),
             'cross'),
            (lambda f: f['is_closed'] and abs(f['aspect_ratio'] - 1) < c.SQUARE_TOLERANCE,
             'circle'),
            (lambda f: f['is_closed'] and f['aspect_ratio'] > c.ELLIPSE_ASPECT_RATIO,
             'ellipse'),
            (lambda f: (f['point_count'] > c.COMPLEX_MIN_POINTS
                        and f['width'] > c.COMPLEX_MIN_SIZE
                        and f['height'] > c.COMPLEX_MIN_SIZE),
             'complex'),
            (lambda f: is_zigzag(f['points']), 'zigzag'),
            (lambda f: has_arcs(f['points']), 'curved'),
        ]

    def extract_features(self, points: Sequence[Point]) -> Dict:
        """Extract the geometric features the decision list reads."""
        min_x, max_x, min_y, max_y = StrokeUtils.bounding_box(points)
        width = max_x - min_x
        height = max_y - min_y
        closure = StrokeUtils.closure_distance(points)

        return {
            'points': points,
            'point_count': len(points),
            'bounding_box': (min_x, min_y, max_x, max_y),
            'width': width,
            'height': height,
            'aspect_ratio': StrokeUtils.aspect_ratio(width, height),
            'stroke_count': StrokeUtils.stroke_count(points),
            'closure_distance': closure,
            'is_closed': closure < DigitConfig.CLOSURE_DISTANCE,
            'center_of_mass': StrokeUtils.center_of_mass(points),
        }

    def classify(self, points: Sequence[Point]) -> ShapeLabel:
        """
        Classify a point sequence.

        Args:
            points: Ordered Points; may be empty

        Returns:
            The first matching ShapeLabel, 'none' for an empty sequence
            and 'unknown' when no rule matches
        """
        if not points:
            return 'none'

        features = self.extract_features(points)
        for predicate, label in self.rules:
            if predicate(features):
                return label

        return 'unknown'

    def get_shape_stats(self, points: Sequence[Point]) -> Dict:
        """
        Get detailed statistics about a drawing for debugging/analysis.

        Returns:
            Dictionary with point_count, stroke_count, width, height,
            aspect_ratio, closure_distance, is_closed, center_of_mass,
            bounding_box, path_length, direction_changes, total_turning
            and shape
        """
        if not points:
            return {}

        stats = self.extract_features(points)
        del stats['points']
        stats['path_length'] = GeometryUtils.calculate_path_length(points)
        stats['direction_changes'] = count_direction_changes(points)
        stats['total_turning'] = total_turning(points)
        stats['shape'] = self.classify(points)
        return stats


# Convenience functions for simple usage
def classify_shape(points: Sequence[Point]) -> ShapeLabel:
    """
    Simple interface to classify a drawing.

    Args:
        points: Ordered Points

    Returns:
        ShapeLabel
    """
    return ShapeClassifier().classify(points)


def get_shape_stats(points: Sequence[Point]) -> Dict:
    """Get detailed statistics about a drawing."""
    return ShapeClassifier().get_shape_stats(points)

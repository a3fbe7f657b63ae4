"""
Shared utilities for stroke analysis.

This module provides the geometric helpers used by both the shape classifier
and the confidence synthesizer, so that loop, quadrant and density tests are
computed the same way everywhere.
"""

import math
from dataclasses import dataclass
from typing import Dict, Sequence, Tuple

from ..config.settings import DigitConfig


@dataclass(frozen=True)
class Point:
    """One sample of a stroke. ``dragging=False`` marks a pen-down."""
    x: float
    y: float
    dragging: bool = False

    def __repr__(self):
        marker = "~" if self.dragging else "+"
        return f"Point({marker}{self.x:.1f}, {self.y:.1f})"


class GeometryUtils:
    """Utility class for geometric calculations."""

    @staticmethod
    def calculate_distance(p1: Point, p2: Point) -> float:
        """Calculate Euclidean distance between two points."""
        return math.sqrt((p1.x - p2.x) ** 2 + (p1.y - p2.y) ** 2)

    @staticmethod
    def calculate_path_length(points: Sequence[Point]) -> float:
        """Calculate total path length, ignoring jumps between strokes."""
        length = 0.0
        for i in range(1, len(points)):
            if points[i].dragging:
                length += GeometryUtils.calculate_distance(points[i-1], points[i])
        return length

    @staticmethod
    def segment_angle(p1: Point, p2: Point) -> float:
        """Direction of the segment p1 -> p2 in radians."""
        return math.atan2(p2.y - p1.y, p2.x - p1.x)

    @staticmethod
    def wrap_angle(angle: float) -> float:
        """Normalize an angle difference to [-pi, pi]."""
        while angle > math.pi:
            angle -= 2 * math.pi
        while angle < -math.pi:
            angle += 2 * math.pi
        return angle


class StrokeUtils:
    """Feature helpers over a point sequence. All assume well-formed points."""

    @staticmethod
    def bounding_box(points: Sequence[Point]) -> Tuple[float, float, float, float]:
        """Get bounding box of a sequence as (min_x, max_x, min_y, max_y)."""
        if not points:
            return 0.0, 0.0, 0.0, 0.0

        min_x = min(p.x for p in points)
        max_x = max(p.x for p in points)
        min_y = min(p.y for p in points)
        max_y = max(p.y for p in points)

        return min_x, max_x, min_y, max_y

    @staticmethod
    def aspect_ratio(width: float, height: float) -> float:
        """
        Width over height.

        A zero height gives ``inf`` so "very wide" comparisons still hold.
        A zero-size box gives ``nan``, which fails every threshold comparison.
        """
        if height == 0:
            return math.inf if width > 0 else math.nan
        return width / height

    @staticmethod
    def stroke_count(points: Sequence[Point]) -> int:
        """Count pen-downs: the first point plus every non-dragging point."""
        count = 0
        for i, point in enumerate(points):
            if i == 0 or not point.dragging:
                count += 1
        return count

    @staticmethod
    def closure_distance(points: Sequence[Point]) -> float:
        """Distance between the first and last point of the sequence."""
        if not points:
            return 0.0
        return GeometryUtils.calculate_distance(points[0], points[-1])

    @staticmethod
    def is_closed(points: Sequence[Point]) -> bool:
        return StrokeUtils.closure_distance(points) < DigitConfig.CLOSURE_DISTANCE

    @staticmethod
    def center_of_mass(points: Sequence[Point]) -> Tuple[float, float]:
        """Arithmetic mean of all coordinates."""
        if not points:
            return 0.0, 0.0
        sum_x = sum(p.x for p in points)
        sum_y = sum(p.y for p in points)
        return sum_x / len(points), sum_y / len(points)

    @staticmethod
    def bounding_box_center(points: Sequence[Point]) -> Tuple[float, float]:
        min_x, max_x, min_y, max_y = StrokeUtils.bounding_box(points)
        return (min_x + max_x) / 2, (min_y + max_y) / 2

    @staticmethod
    def has_loop(points: Sequence[Point]) -> bool:
        """True when a long enough drawing ends close to where it started."""
        if len(points) < DigitConfig.LOOP_MIN_POINTS:
            return False
        return StrokeUtils.is_closed(points)

    @staticmethod
    def quadrant_occupancy(points: Sequence[Point], center_x: float,
                           center_y: float) -> Dict[str, bool]:
        """Which quadrants around (center_x, center_y) contain at least one point."""
        top_left = False
        top_right = False
        bottom_left = False
        bottom_right = False

        for p in points:
            if p.x < center_x and p.y < center_y:
                top_left = True
            if p.x >= center_x and p.y < center_y:
                top_right = True
            if p.x < center_x and p.y >= center_y:
                bottom_left = True
            if p.x >= center_x and p.y >= center_y:
                bottom_right = True

        return {
            'top_left': top_left,
            'top_right': top_right,
            'bottom_left': bottom_left,
            'bottom_right': bottom_right
        }

    @staticmethod
    def center_density(points: Sequence[Point]) -> float:
        """
        Fraction of points inside the central region of the bounding box.

        The region spans CENTER_REGION_FRACTION of the box width and height
        and shares its center. Bounds are inclusive.
        """
        if not points:
            return 0.0

        min_x, max_x, min_y, max_y = StrokeUtils.bounding_box(points)
        width = max_x - min_x
        height = max_y - min_y
        center_x = (min_x + max_x) / 2
        center_y = (min_y + max_y) / 2
        half = DigitConfig.CENTER_REGION_FRACTION / 2

        region_min_x = center_x - width * half
        region_max_x = center_x + width * half
        region_min_y = center_y - height * half
        region_max_y = center_y + height * half

        center_points = 0
        for p in points:
            if (region_min_x <= p.x <= region_max_x and
                    region_min_y <= p.y <= region_max_y):
                center_points += 1

        return center_points / len(points)


class PathUtils:
    """Utility class for converting between point formats."""

    @staticmethod
    def convert_dict_to_points(path: Sequence[Dict]) -> Tuple[Point, ...]:
        """Convert dicts with 'x', 'y' and optional 'dragging' keys to Points."""
        return tuple(Point(float(p['x']), float(p['y']), bool(p.get('dragging', False)))
                     for p in path)

    @staticmethod
    def convert_points_to_dict(points: Sequence[Point]) -> list:
        """Convert Point objects to dict format."""
        return [{'x': p.x, 'y': p.y, 'dragging': p.dragging} for p in points]

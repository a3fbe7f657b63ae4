"""
Utilities package for stroke analysis and logging.

This package provides shared utilities used by the shape classifier,
the confidence synthesizer and the capture layer.
"""

from .stroke_utils import (
    Point,
    GeometryUtils,
    StrokeUtils,
    PathUtils
)

__all__ = [
    'Point',
    'GeometryUtils',
    'StrokeUtils',
    'PathUtils'
]

"""
Configuration settings for the digit sketch recognizer.
"""

class DigitConfig:
    """Configuration constants for shape classification and confidence synthesis."""

    # Drawing surface (surface coordinate units)
    SURFACE_WIDTH = 150
    SURFACE_HEIGHT = 150
    LINE_WIDTH = 10
    BACKGROUND_COLOR = (255, 255, 255)
    STROKE_COLOR = (0, 0, 0)

    # Timing configurations (in milliseconds)
    AUTO_CLEAR_DELAY = 2200

    # Closure / loop detection
    CLOSURE_DISTANCE = 30
    LOOP_MIN_POINTS = 20

    # Shape decision thresholds
    LINE_ASPECT_RATIO = 3.0
    VERTICAL_ASPECT_RATIO = 0.3
    DOT_MAX_SIZE = 40
    SQUARE_TOLERANCE = 0.3
    ELLIPSE_ASPECT_RATIO = 1.5
    COMPLEX_MIN_POINTS = 100
    COMPLEX_MIN_SIZE = 50

    # Zigzag detection
    ZIGZAG_MIN_POINTS = 20
    ZIGZAG_MIN_DELTA = 5
    ZIGZAG_MIN_CHANGES = 2

    # Arc detection (radians)
    ARC_MIN_POINTS = 15
    ARC_MIN_TURNING = 1.5

    # Center density region (fraction of bounding box)
    CENTER_REGION_FRACTION = 0.5
    CENTER_DENSITY_THRESHOLD = 0.3

    # Confidence synthesis
    NUM_CLASSES = 10
    CONFIDENCE_FLOOR = 0.05
    CONFIDENCE_NOISE = 0.075
    FALLBACK_CONFIDENCE = 0.3
    QUADRANT_BONUS = 0.2

#!/usr/bin/env python3
"""Digit Recognition Demo with Visual Feedback.

Draw a digit with the mouse on the small canvas. When the pen lifts the
simulated network predicts a digit and the confidence bars update. The
canvas clears itself after a short pause.
"""

import json
import logging
from typing import List, Optional, Tuple

import pygame

from sketch_digits.config.settings import DigitConfig
from sketch_digits.core.recognizer import DigitRecognizer
from sketch_digits.utils.logger import PredictionLogger
from sketch_digits.utils.stroke_utils import PathUtils, Point

SAVE_FILE = "saved_digit.json"


def read_saved_drawing(path: str) -> Optional[Tuple[Point, ...]]:
    """Read a saved point sequence, or None when the file is missing or malformed."""
    try:
        with open(path, "r") as f:
            data = json.load(f)
        return PathUtils.convert_dict_to_points(data["points"])
    except FileNotFoundError:
        logging.warning(f"No saved drawing found at {path}")
    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        logging.warning(f"Could not load drawing from {path}: {e}")
    return None


class DigitRecognitionDemo:
    """Interactive demo for digit recognition."""

    SCALE = 3
    CANVAS_ORIGIN = (40, 80)
    BAR_ORIGIN = (560, 80)
    BAR_MAX_WIDTH = 300

    def __init__(self) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode((960, 620))
        pygame.display.set_caption("Digit Recognition Demo")

        self.recognizer = DigitRecognizer(
            prediction_logger=PredictionLogger(debug_file=None)
        )
        self.session = self.recognizer.add_surface('canvas', display=self, show_bars=True)

        self.predicted_digit: Optional[int] = None
        self.bar_widths: List[float] = [0.0] * DigitConfig.NUM_CLASSES

        # Colors
        self.BLACK = DigitConfig.STROKE_COLOR
        self.WHITE = DigitConfig.BACKGROUND_COLOR
        self.GRAY = (128, 128, 128)
        self.LIGHT_GRAY = (230, 230, 230)
        self.BLUE = (40, 90, 220)

        # Fonts
        self.font = pygame.font.Font(None, 48)
        self.big_font = pygame.font.Font(None, 160)
        self.small_font = pygame.font.Font(None, 30)

        self.canvas_rect = pygame.Rect(
            self.CANVAS_ORIGIN,
            (DigitConfig.SURFACE_WIDTH * self.SCALE, DigitConfig.SURFACE_HEIGHT * self.SCALE),
        )

    # Display interface used by DigitRecognizer
    def show_prediction(self, digit: int) -> None:
        self.predicted_digit = digit

    def show_bars(self, widths: List[float]) -> None:
        self.bar_widths = list(widths)

    def run(self) -> None:
        """Run the demo loop."""
        clock = pygame.time.Clock()
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return
                elif event.type == pygame.MOUSEBUTTONDOWN:
                    if event.button == 1 and self.canvas_rect.collidepoint(event.pos):
                        self.session.start_stroke(*self.to_surface(event.pos))
                elif event.type == pygame.MOUSEMOTION:
                    if self.session.is_drawing:
                        if self.canvas_rect.collidepoint(event.pos):
                            self.session.extend_stroke(*self.to_surface(event.pos))
                        else:
                            # Leaving the canvas lifts the pen
                            self.session.end_stroke()
                elif event.type == pygame.MOUSEBUTTONUP:
                    if event.button == 1:
                        self.session.end_stroke()
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_c:
                        self.clear_screen()
                    elif event.key == pygame.K_s:
                        self.save_drawing()
                    elif event.key == pygame.K_l:
                        self.load_drawing()

            self.draw()
            clock.tick(60)

    def to_surface(self, pos: Tuple[int, int]) -> Tuple[float, float]:
        """Translate window coordinates into canvas coordinates."""
        x = (pos[0] - self.canvas_rect.left) / self.SCALE
        y = (pos[1] - self.canvas_rect.top) / self.SCALE
        return x, y

    def to_screen(self, x: float, y: float) -> Tuple[int, int]:
        return (int(self.canvas_rect.left + x * self.SCALE),
                int(self.canvas_rect.top + y * self.SCALE))

    def clear_screen(self) -> None:
        """Clear the drawing and results."""
        self.recognizer.clear('canvas')
        self.predicted_digit = None
        self.bar_widths = [0.0] * DigitConfig.NUM_CLASSES

    def save_drawing(self) -> None:
        """Save the current drawing to a JSON file."""
        points = self.session.get_points()
        if not points:
            return
        result = self.recognizer.last_results.get('canvas')
        data = {
            "points": PathUtils.convert_points_to_dict(points),
            "predicted": result.predicted_class if result else None,
        }
        with open(SAVE_FILE, "w") as f:
            json.dump(data, f, indent=2)

    def load_drawing(self) -> None:
        """Replay a previously saved drawing and predict it."""
        points = read_saved_drawing(SAVE_FILE)
        if points is None:
            return

        self.session.clear()
        for point in points:
            if point.dragging:
                self.session.extend_stroke(point.x, point.y)
            else:
                self.session.start_stroke(point.x, point.y)
        self.session.end_stroke()

    def draw(self) -> None:
        """Render the canvas, prediction and confidence bars."""
        self.screen.fill(self.LIGHT_GRAY)
        pygame.draw.rect(self.screen, self.WHITE, self.canvas_rect)
        pygame.draw.rect(self.screen, self.GRAY, self.canvas_rect, 2)

        title = self.font.render("Draw a digit", True, self.BLACK)
        self.screen.blit(title, (self.CANVAS_ORIGIN[0], 30))
        help_text = self.small_font.render("C: Clear   S: Save   L: Load", True, self.GRAY)
        self.screen.blit(help_text, (self.CANVAS_ORIGIN[0], self.canvas_rect.bottom + 20))

        # Strokes: each dragging point connects to its predecessor
        line_width = DigitConfig.LINE_WIDTH * self.SCALE // 2
        points = self.session.get_points()
        for i, point in enumerate(points):
            end = self.to_screen(point.x, point.y)
            if point.dragging and i > 0:
                start = self.to_screen(points[i-1].x, points[i-1].y)
                pygame.draw.line(self.screen, self.BLACK, start, end, line_width)
            pygame.draw.circle(self.screen, self.BLACK, end, line_width // 2)

        # Prediction
        if self.predicted_digit is not None:
            label = self.big_font.render(str(self.predicted_digit), True, self.BLUE)
            self.screen.blit(label, (self.BAR_ORIGIN[0] + 120, self.canvas_rect.bottom - 110))

        # Confidence bars
        bx, by = self.BAR_ORIGIN
        for digit, width in enumerate(self.bar_widths):
            y = by + digit * 32
            self.screen.blit(self.small_font.render(str(digit), True, self.BLACK), (bx, y))
            bar = pygame.Rect(bx + 30, y + 2, int(self.BAR_MAX_WIDTH * width / 100), 20)
            pygame.draw.rect(self.screen, self.BLUE, bar)

        pygame.display.flip()


def main() -> None:
    """Entry point for the demo."""
    logging.basicConfig(level=logging.INFO)
    demo = DigitRecognitionDemo()
    try:
        demo.run()
    except KeyboardInterrupt:
        pass
    finally:
        demo.recognizer.clear()
        pygame.quit()


if __name__ == "__main__":
    main()

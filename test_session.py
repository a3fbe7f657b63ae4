#!/usr/bin/env python3
"""Tests for drawing sessions, the recognizer wiring and prediction logging."""

import logging

import numpy as np
import pytest

from sketch_digits.core.recognizer import DigitRecognizer
from sketch_digits.core.session import DrawingSession
from sketch_digits.utils.logger import PredictionLogger


class RecordingDisplay:
    """Display double that remembers what it was shown."""

    def __init__(self):
        self.digits = []
        self.bars = []

    def show_prediction(self, digit):
        self.digits.append(digit)

    def show_bars(self, widths):
        self.bars.append(widths)


class LabelOnlyDisplay:
    def __init__(self):
        self.digits = []

    def show_prediction(self, digit):
        self.digits.append(digit)


class BrokenDisplay:
    def show_prediction(self, digit):
        raise RuntimeError("display detached")


class FailingLogger:
    def log_prediction(self, surface, result, point_count, show_bars):
        raise OSError("log file gone")

    def log_clear(self, surface):
        pass


def draw_line(session, start=0, end=100, y=75):
    session.start_stroke(start, y)
    for x in range(start + 5, end + 1, 5):
        session.extend_stroke(x, y)
    session.end_stroke()


def test_first_point_is_pen_down():
    session = DrawingSession(auto_clear_delay=None)
    session.start_stroke(1, 2)
    session.extend_stroke(3, 4)
    session.extend_stroke(5, 6)

    points = session.get_points()
    assert [p.dragging for p in points] == [False, True, True]
    assert (points[0].x, points[0].y) == (1.0, 2.0)


def test_moves_while_pen_up_are_ignored():
    session = DrawingSession(auto_clear_delay=None)
    assert session.extend_stroke(10, 10) is None
    assert session.get_points() == ()

    session.start_stroke(0, 0)
    session.end_stroke()
    session.extend_stroke(5, 5)
    assert len(session) == 1


def test_clear_between_validation_and_append_keeps_pen_down_first():
    session = DrawingSession(auto_clear_delay=None)
    session.start_stroke(0, 0)

    validate = session._validate

    def clear_then_validate(x, y):
        session.clear()
        validate(x, y)

    session._validate = clear_then_validate
    assert session.extend_stroke(5, 5) is None
    assert session.get_points() == ()

    session._validate = validate
    session.start_stroke(10, 10)
    assert session.get_points()[0].dragging is False


def test_end_stroke_after_clear_does_not_notify():
    seen = []
    session = DrawingSession(on_change=seen.append, auto_clear_delay=60000)
    session.start_stroke(0, 0)
    session.clear()
    session.end_stroke()

    assert seen == []
    assert session.clear_timer is None


def test_second_stroke_starts_with_pen_down():
    session = DrawingSession(auto_clear_delay=None)
    draw_line(session, 0, 20)
    draw_line(session, 30, 50)

    pen_downs = [p for p in session.get_points() if not p.dragging]
    assert len(pen_downs) == 2


def test_snapshot_is_not_affected_by_later_drawing():
    session = DrawingSession(auto_clear_delay=None)
    session.start_stroke(0, 0)
    snapshot = session.get_points()
    session.extend_stroke(10, 10)

    assert len(snapshot) == 1
    assert isinstance(snapshot, tuple)


def test_invalid_coordinates_rejected():
    session = DrawingSession(auto_clear_delay=None)
    with pytest.raises(ValueError):
        session.start_stroke("a", 1)
    with pytest.raises(ValueError):
        session.start_stroke(1, None)


def test_end_stroke_notifies_on_change():
    seen = []
    session = DrawingSession('pad', on_change=lambda s: seen.append(s.get_points()),
                             auto_clear_delay=None)
    draw_line(session, 0, 20)

    assert len(seen) == 1
    assert len(seen[0]) == 5

    session.end_stroke()
    assert len(seen) == 1


def test_auto_clear_timer_lifecycle():
    session = DrawingSession(auto_clear_delay=60000)
    draw_line(session, 0, 20)
    assert session.clear_timer is not None

    session.start_stroke(50, 50)
    assert session.clear_timer is None

    session.end_stroke()
    assert session.clear_timer is not None
    session.clear()
    assert session.clear_timer is None
    assert session.get_points() == ()


def test_auto_clear_drops_points():
    session = DrawingSession(auto_clear_delay=60000)
    draw_line(session, 0, 20)
    session._cancel_clear_timer()
    assert session.clear_timer is None

    session._auto_clear()
    assert session.get_points() == ()


def test_auto_clear_skipped_while_drawing():
    session = DrawingSession(auto_clear_delay=None)
    session.start_stroke(0, 0)
    session._auto_clear()
    assert len(session) == 1


def test_recognizer_predicts_on_stroke_end():
    display = RecordingDisplay()
    recognizer = DigitRecognizer(rng=np.random.default_rng(1), auto_clear_delay=None)
    session = recognizer.add_surface('drawing', display=display, show_bars=True)

    draw_line(session, y=75)

    result = recognizer.last_results['drawing']
    assert result.shape == 'horizontal_line'
    assert display.digits == [result.predicted_class]
    assert display.bars[0] == pytest.approx([c * 100 for c in result.confidences])
    assert sum(display.bars[0]) == pytest.approx(100.0)


def test_surfaces_are_independent():
    first, second = RecordingDisplay(), RecordingDisplay()
    recognizer = DigitRecognizer(auto_clear_delay=None)
    recognizer.add_surface('a', display=first)
    recognizer.add_surface('b', display=second)

    draw_line(recognizer.get_session('a'))

    assert len(first.digits) == 1
    assert second.digits == []
    assert first.bars == []
    assert recognizer.get_session('b').get_points() == ()


def test_missing_display_is_logged(caplog):
    recognizer = DigitRecognizer(auto_clear_delay=None)
    session = recognizer.add_surface('orphan')

    with caplog.at_level(logging.ERROR):
        draw_line(session)

    assert "not found" in caplog.text
    assert 'orphan' not in recognizer.last_results
    assert len(session) > 0


def test_missing_bar_display_still_shows_label(caplog):
    display = LabelOnlyDisplay()
    recognizer = DigitRecognizer(auto_clear_delay=None)
    session = recognizer.add_surface('bars', display=display, show_bars=True)

    with caplog.at_level(logging.ERROR):
        draw_line(session)

    assert len(display.digits) == 1
    assert "Bar display" in caplog.text


def test_display_errors_do_not_break_session(caplog):
    recognizer = DigitRecognizer(auto_clear_delay=None)
    session = recognizer.add_surface('broken', display=BrokenDisplay())

    with caplog.at_level(logging.ERROR):
        draw_line(session)
        draw_line(session, 0, 50, y=20)

    assert caplog.text.count("Error during prediction") == 2
    assert len([p for p in session.get_points() if not p.dragging]) == 2


def test_logger_errors_do_not_break_session(caplog):
    display = RecordingDisplay()
    recognizer = DigitRecognizer(prediction_logger=FailingLogger(), auto_clear_delay=None)
    session = recognizer.add_surface('logged', display=display)

    with caplog.at_level(logging.ERROR):
        draw_line(session)
        draw_line(session, 0, 50, y=20)

    assert caplog.text.count("Error during prediction") == 2
    assert len(display.digits) == 2
    assert len([p for p in session.get_points() if not p.dragging]) == 2


def test_recognizer_clear():
    recognizer = DigitRecognizer(auto_clear_delay=None)
    recognizer.add_surface('a', display=RecordingDisplay())
    recognizer.add_surface('b', display=RecordingDisplay())
    draw_line(recognizer.get_session('a'))
    draw_line(recognizer.get_session('b'))

    recognizer.clear('a')
    assert recognizer.get_session('a').get_points() == ()
    assert len(recognizer.get_session('b')) > 0

    recognizer.clear()
    assert recognizer.last_results == {}


def test_prediction_logger_output(tmp_path, capsys):
    log_file = tmp_path / "predictions.log"
    prediction_logger = PredictionLogger(debug_file=str(log_file))
    recognizer = DigitRecognizer(prediction_logger=prediction_logger, auto_clear_delay=None)
    session = recognizer.add_surface('pad', display=RecordingDisplay(), show_bars=True)

    draw_line(session)
    recognizer.clear('pad')
    prediction_logger.close()

    out = capsys.readouterr().out
    assert "pad: predicted" in out
    assert "horizontal_line" in out
    assert "cleared" in out
    assert "PredictionResult" in log_file.read_text()


def test_format_bars():
    prediction_logger = PredictionLogger(debug_file=None)
    text = prediction_logger.format_bars([0.5, 0.5] + [0.0] * 8, width=10)

    lines = text.splitlines()
    assert len(lines) == 10
    assert lines[0].count('█') == 5
    assert "50.0%" in lines[1]

#!/usr/bin/env python3
"""Tests for reading drawings saved by the pygame demo."""

import json
import logging

from demo_digit_recognition import read_saved_drawing


def test_read_saved_drawing(tmp_path):
    path = tmp_path / "saved_digit.json"
    path.write_text(json.dumps({
        "points": [
            {"x": 0, "y": 0, "dragging": False},
            {"x": 10, "y": 5, "dragging": True},
        ],
        "predicted": 1,
    }))

    points = read_saved_drawing(str(path))
    assert [(p.x, p.y, p.dragging) for p in points] == [(0, 0, False), (10, 5, True)]


def test_missing_saved_drawing(tmp_path, caplog):
    with caplog.at_level(logging.WARNING):
        assert read_saved_drawing(str(tmp_path / "absent.json")) is None
    assert "No saved drawing" in caplog.text


def test_malformed_saved_drawing(tmp_path, caplog):
    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    no_points = tmp_path / "no_points.json"
    no_points.write_text(json.dumps({"predicted": 3}))

    with caplog.at_level(logging.WARNING):
        assert read_saved_drawing(str(broken)) is None
        assert read_saved_drawing(str(no_points)) is None

    assert caplog.text.count("Could not load drawing") == 2

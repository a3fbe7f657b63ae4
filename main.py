#!/usr/bin/env python3
"""
Sketch Digits - Main Entry Point
Draw a digit on the touchscreen and get a simulated recognition result.
"""

import logging
import time
from sketch_digits.core.listener import TouchDigitListener
from sketch_digits.core.recognizer import DigitRecognizer
from sketch_digits.utils.logger import PredictionLogger


class ConsoleDisplay:
    """Shows the latest prediction on stdout."""

    def show_prediction(self, digit: int):
        print(f"🔢 Result: {digit}")

    def show_bars(self, widths):
        print("   " + " ".join(f"{i}:{w:.0f}%" for i, w in enumerate(widths)))


def main():
    """Main entry point for the touchscreen digit recognizer."""
    logging.basicConfig(level=logging.INFO)

    prediction_logger = PredictionLogger()
    recognizer = DigitRecognizer(prediction_logger=prediction_logger)
    recognizer.add_surface('touchscreen', display=ConsoleDisplay(), show_bars=True)

    listener = TouchDigitListener(recognizer, 'touchscreen')
    if not listener.start():
        prediction_logger.close()
        return

    try:
        while True:
            time.sleep(0.1)
    except KeyboardInterrupt:
        print("\n👋 Stopping...")
    finally:
        listener.stop()
        recognizer.clear()
        prediction_logger.close()

if __name__ == "__main__":
    main()

"""
Touchscreen listener that records the first finger's path into a drawing session.
"""

import threading
import logging
from typing import Optional
from evdev import ecodes

from ..device.device_manager import DeviceManager
from .recognizer import DigitRecognizer

logger = logging.getLogger(__name__)

class TouchDigitListener:
    """Reads multitouch events and turns one finger's movement into pen strokes."""

    def __init__(self, recognizer: DigitRecognizer, surface: str = 'touchscreen',
                 device_manager: Optional[DeviceManager] = None):
        self.recognizer = recognizer
        self.surface = surface
        self.device_manager = device_manager or DeviceManager()

        # State management
        self.running = False
        self.current_slot = 0
        self.tracked_slot: Optional[int] = None
        self.raw_position = {'x': None, 'y': None}
        self.pen_down = False
        self.moved = False

        # Thread management
        self.thread = None
        self.state_lock = threading.Lock()

    @property
    def session(self):
        return self.recognizer.get_session(self.surface)

    def start(self) -> bool:
        """Start the touchscreen listener."""
        device = self.device_manager.find_device()
        if not device:
            print("❌ No touchscreen found")
            return False

        self.running = True
        self._print_startup_info(self.device_manager.get_device_info())

        self.thread = threading.Thread(target=self._event_loop)
        self.thread.daemon = True
        self.thread.start()
        return True

    def stop(self):
        """Stop the touchscreen listener."""
        self.running = False
        if self.thread:
            self.thread.join(timeout=1)

    def _print_startup_info(self, device_info):
        print(f"✅ Found: {self.device_manager.device.name}")
        print(f"📺 Screen: {device_info['screen_width']}x{device_info['screen_height']}")
        print(f"📐 Surface: {device_info['surface_width']}x{device_info['surface_height']}")
        print("🎯 Ready! Draw a digit with one finger.")

    def _event_loop(self):
        """Main event processing loop."""
        try:
            event_batch = []
            for event in self.device_manager.device.read_loop():
                if not self.running:
                    break

                event_batch.append(event)

                if event.type == ecodes.EV_SYN and event.code == ecodes.SYN_REPORT:
                    with self.state_lock:
                        self._process_event_batch(event_batch)
                    event_batch = []

        except KeyboardInterrupt:
            pass
        except Exception as e:
            logger.error(f"Error in event loop: {e}")

    def _process_event_batch(self, event_batch):
        """Apply a batch of events, then record at most one point."""
        lifted = False
        for ev in event_batch:
            if ev.type != ecodes.EV_ABS:
                continue

            if ev.code == ecodes.ABS_MT_SLOT:
                self.current_slot = ev.value
            elif ev.code == ecodes.ABS_MT_TRACKING_ID:
                if ev.value == -1:
                    lifted = lifted or self.current_slot == self.tracked_slot
                elif self.tracked_slot is None:
                    self.tracked_slot = self.current_slot
                    self.raw_position = {'x': None, 'y': None}
            elif self.current_slot == self.tracked_slot:
                if ev.code == ecodes.ABS_MT_POSITION_X:
                    self.raw_position['x'] = ev.value
                    self.moved = True
                elif ev.code == ecodes.ABS_MT_POSITION_Y:
                    self.raw_position['y'] = ev.value
                    self.moved = True

        self._record_point()

        if lifted:
            self._handle_finger_lift()

    def _record_point(self):
        raw_x, raw_y = self.raw_position['x'], self.raw_position['y']
        if self.tracked_slot is None or raw_x is None or raw_y is None or not self.moved:
            return

        x, y = self.device_manager.to_surface(raw_x, raw_y)
        if self.pen_down:
            self.session.extend_stroke(x, y)
        else:
            self.session.start_stroke(x, y)
            self.pen_down = True
        self.moved = False

    def _handle_finger_lift(self):
        """Finish the stroke and let the recognizer predict."""
        self.tracked_slot = None
        self.raw_position = {'x': None, 'y': None}
        self.moved = False
        if self.pen_down:
            self.pen_down = False
            self.session.end_stroke()

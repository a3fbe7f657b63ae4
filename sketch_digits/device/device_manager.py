"""
Device management for touchscreen discovery and coordinate mapping.
"""

import evdev
from evdev import ecodes
import logging
from typing import Tuple

from ..config.settings import DigitConfig

logger = logging.getLogger(__name__)

class DeviceManager:
    """Finds a multitouch screen and maps its coordinates onto the drawing surface."""

    def __init__(self, surface_width: int = DigitConfig.SURFACE_WIDTH,
                 surface_height: int = DigitConfig.SURFACE_HEIGHT):
        self.device = None
        self.screen_width = 1920  # Default
        self.screen_height = 1080   # Default
        self.surface_width = surface_width
        self.surface_height = surface_height

    def find_device(self):
        """Find and configure the touchscreen device."""
        devices = [evdev.InputDevice(path) for path in evdev.list_devices()]

        for device in devices:
            caps = device.capabilities()
            if ecodes.EV_ABS not in caps:
                continue

            abs_caps = caps.get(ecodes.EV_ABS, [])
            abs_info = {code: info for code, info in abs_caps}

            # Multitouch slots identify a touchscreen rather than a joystick
            if ecodes.ABS_MT_SLOT in abs_info:
                if ecodes.ABS_MT_POSITION_X in abs_info:
                    self.screen_width = abs_info[ecodes.ABS_MT_POSITION_X].max + 1
                if ecodes.ABS_MT_POSITION_Y in abs_info:
                    self.screen_height = abs_info[ecodes.ABS_MT_POSITION_Y].max + 1

                self.device = device
                logger.info(f"Found touchscreen: {device.name}")
                logger.info(f"Screen resolution: {self.screen_width}x{self.screen_height}")
                return device

        logger.error("No touchscreen device found")
        return None

    def to_surface(self, raw_x: float, raw_y: float) -> Tuple[float, float]:
        """Translate raw device coordinates into surface coordinates."""
        x = raw_x * self.surface_width / self.screen_width
        y = raw_y * self.surface_height / self.screen_height
        return x, y

    def get_device_info(self):
        """Get device and screen information."""
        return {
            'device': self.device,
            'screen_width': self.screen_width,
            'screen_height': self.screen_height,
            'surface_width': self.surface_width,
            'surface_height': self.surface_height
        }

"""Viewer configuration constants."""

from __future__ import annotations
import os

# Zoom
ZOOM_STEP_KEYS = 0.2
ZOOM_MIN = 0.01   # exclusive
ZOOM_MAX = 100.0  # exclusive

# Sizes in device-independent pixels (scaled by DeviceInfo.scale_by_size)
WINDOW_MARGIN = 40
IMAGE_PADDING = 5
BUTTON_PADDING = 11
PROGRESS_HEIGHT = 5
PROGRESS_PADDING = 2
PAN_THRESHOLD = 5
TWO_FINGER_TAP_SLACK = 200

# Screen zones (fractions of screen width/height)
SWIPE_EDGE_FRAC = 1.0 / 16.0
NAV_ZONE_FRAC = 1.0 / 3.0
SAVE_CORNER_FRAC = 0.1

# Labels
DEFAULT_TITLE = "Viewing image"
LABEL_ORIGINAL_SIZE = "Original size"
LABEL_SCALE = "Scale"
LABEL_ROTATE = "Rotate"
LABEL_NO_ROTATION = "No rotation"
LABEL_CLOSE = "Close"

# Button ids
BUTTON_SCALE = "scale"
BUTTON_ROTATE = "rotate"
BUTTON_CLOSE = "close"

# Keys (names delivered by the host's key events)
KEY_BACK = "back"
KEY_PAGE_BACK = "page_back"
KEY_PAGE_FORWARD = "page_forward"

# Screenshots
SCREENSHOT_NAME_TEMPLATE = "ImageViewer_%Y-%m-%d_%H%M%S.png"
DATA_DIR = os.environ.get("EINKVIEW_DATA_DIR") or os.path.join(os.path.expanduser("~"), ".einkview")
SCREENSHOT_DIR = os.path.join(DATA_DIR, "screenshots")

#!/usr/bin/env python3
"""
Shared constants for the orrery (scene units and seconds unless stated otherwise).

Keeping constants in one place helps ensure values are consistent across the
codebase and makes tuning easier.
"""
import math

# Reference axes of every body frame
LATERAL_AXIS = (1.0, 0.0, 0.0)
VERTICAL_AXIS = (0.0, 1.0, 0.0)
FORWARD_AXIS = (0.0, 0.0, 1.0)

TWO_PI = 2.0 * math.pi

# Animation controls
DEFAULT_TIME_SCALE = 1.0
MIN_TIME_SCALE = 0.1
MAX_TIME_SCALE = 10.0
STEP_DT = 1 / 60.0  # seconds advanced by a single manual step
TARGET_FPS = 60

# Placement handed to the traversal root (shifts the whole system)
DEFAULT_ROOT_OFFSET = (2.0, 0.0, 0.0)

# Debug basis widget: (line thickness, axis length)
BASIS_PARAMS = (1.0, 2.0)

# Rendering (viewport)
VIEW_WIDTH = 1100
VIEW_HEIGHT = 800
BACKGROUND_COLOR = (25, 25, 25)
HUD_COLOR = (200, 200, 200)
BASIS_COLORS = ((230, 60, 60), (60, 230, 60), (60, 120, 230))
DEFAULT_BODY_COLOR = (200, 200, 255)
MIN_BODY_PIXELS = 1
MAX_BODY_PIXELS = 400

# Camera
CAMERA_FOV_Y = 0.5 * (math.pi / 2.0)
CAMERA_NEAR = 0.01
CAMERA_FAR = 1000.0
DEFAULT_CAMERA_DISTANCE = 6.0
MIN_CAMERA_DISTANCE = 0.5
MAX_CAMERA_DISTANCE = 200.0
MAX_CAMERA_PITCH = math.radians(89.0)
MOUSE_SENSITIVITY = 0.003

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000

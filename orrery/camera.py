#!/usr/bin/env python3
"""
Camera utilities for 3D world-to-screen transforms.
"""
import math
from typing import Optional, Sequence, Tuple

import numpy as np

from .constants import (
    CAMERA_FAR,
    CAMERA_FOV_Y,
    CAMERA_NEAR,
    DEFAULT_CAMERA_DISTANCE,
    MAX_CAMERA_DISTANCE,
    MAX_CAMERA_PITCH,
    MIN_CAMERA_DISTANCE,
    VERTICAL_AXIS,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from .transforms import look_at, perspective
from .utils import clamp


class Camera3D:
    """
    Orbiting camera looking at a target point.

    The camera sits ``distance`` units from ``target``, placed by ``yaw`` around
    the vertical axis and ``pitch`` above the orbit plane.
    """

    def __init__(self, target=(0.0, 0.0, 0.0), distance=DEFAULT_CAMERA_DISTANCE,
                 yaw=0.0, pitch=0.0, fov_y=CAMERA_FOV_Y):
        self.target = [float(target[0]), float(target[1]), float(target[2])]
        self.distance = distance
        self.yaw = yaw
        self.pitch = pitch
        self.fov_y = fov_y
        self.near = CAMERA_NEAR
        self.far = CAMERA_FAR
        self.viewport_size = (VIEW_WIDTH, VIEW_HEIGHT)

    def set_viewport_size(self, w: int, h: int) -> None:
        self.viewport_size = (w, h)

    def reset(self, target=(0.0, 0.0, 0.0), distance=DEFAULT_CAMERA_DISTANCE, yaw=0.0, pitch=0.0):
        """Return to a starting pose in place; viewport size and lens are kept."""
        self.target = [float(target[0]), float(target[1]), float(target[2])]
        self.distance = distance
        self.yaw = yaw
        self.pitch = pitch

    def eye(self) -> Tuple[float, float, float]:
        cp = math.cos(self.pitch)
        tx, ty, tz = self.target
        return (tx + self.distance * cp * math.sin(self.yaw),
                ty + self.distance * math.sin(self.pitch),
                tz + self.distance * cp * math.cos(self.yaw))

    def view_matrix(self) -> np.ndarray:
        return look_at(self.eye(), self.target, VERTICAL_AXIS)

    def projection_matrix(self) -> np.ndarray:
        w, h = self.viewport_size
        return perspective(self.fov_y, w / max(h, 1), self.near, self.far)

    def view_projection(self) -> np.ndarray:
        """World-to-clip matrix for the current frame."""
        return self.projection_matrix() @ self.view_matrix()

    def zoom(self, factor):
        factor = clamp(factor, 0.05, 20.0)
        self.distance = clamp(self.distance / factor, MIN_CAMERA_DISTANCE, MAX_CAMERA_DISTANCE)

    def rotate(self, dyaw, dpitch):
        self.yaw = math.fmod(self.yaw + dyaw, 2.0 * math.pi)
        self.pitch = clamp(self.pitch + dpitch, -MAX_CAMERA_PITCH, MAX_CAMERA_PITCH)

    def pan(self, dx, dy):
        """Move the target in the camera's screen plane by scene units."""
        view = self.view_matrix()
        right = view[0, 0:3]
        up = view[1, 0:3]
        for i in range(3):
            self.target[i] += -dx * right[i] + dy * up[i]


def project_to_screen(clip_from_local: np.ndarray, point: Sequence[float],
                      viewport_size: Tuple[int, int]) -> Optional[Tuple[float, float, float]]:
    """
    Project a local-space point to pixel coordinates.

    Returns:
        (x, y, depth) with depth the clip-space w, or None if the point is behind the camera.
    """
    clip = clip_from_local @ np.array((point[0], point[1], point[2], 1.0), dtype=np.float64)
    w = clip[3]
    if w <= 1e-9:
        return None
    ndc_x = clip[0] / w
    ndc_y = clip[1] / w
    width, height = viewport_size
    return ((ndc_x + 1.0) * 0.5 * width, (1.0 - ndc_y) * 0.5 * height, w)

#!/usr/bin/env python3
"""
Placement matrices and the per-body transform composer.

Responsibilities
- Build 4x4 affine matrices (translate, rotate, scale) and the camera matrices
  (perspective, look_at) with numpy.
- Advance a body's spin and orbit angles by the frame's elapsed time.
- Compose the body's world placement and the placement handed to its children.

Conventions
- Column vectors: ``A @ B`` applies ``B`` first, then ``A``.
- Rotations are right-handed about unit axes.
- Lateral axis is x, vertical (orbit normal) is y, forward is z.

Composition
    world = parent @ orbital_rotation @ orbital_tilt @ (tilt @ spin)
    child = parent @ orbital_rotation @ orbital_tilt @ tilt

Children inherit the orbital frame and the axial tilt, never the spin angle,
so a body turning about its axis does not drag its satellites with it.
"""

import math
from typing import Sequence, Tuple

import numpy as np

from .constants import FORWARD_AXIS, LATERAL_AXIS, TWO_PI, VERTICAL_AXIS
from .data_models import OrbitConfiguration, SpinConfiguration


def identity() -> np.ndarray:
    return np.identity(4, dtype=np.float64)


def translate(offset: Sequence[float]) -> np.ndarray:
    m = identity()
    m[0:3, 3] = offset[0], offset[1], offset[2]
    return m


def scale(factors: Sequence[float]) -> np.ndarray:
    m = identity()
    m[0, 0], m[1, 1], m[2, 2] = factors[0], factors[1], factors[2]
    return m


def rotate(angle: float, axis: Sequence[float]) -> np.ndarray:
    """
    Right-handed rotation of ``angle`` radians about ``axis`` (Rodrigues).

    The angle is reduced modulo 2π here only, for the trigonometric call; callers
    keep their accumulated value untouched.
    """
    a = np.asarray(axis, dtype=np.float64)
    length = np.linalg.norm(a)
    if length == 0.0:
        return identity()
    x, y, z = a / length
    theta = math.fmod(angle, TWO_PI)
    c = math.cos(theta)
    s = math.sin(theta)
    t = 1.0 - c
    m = identity()
    m[0:3, 0:3] = (
        (t * x * x + c, t * x * y - s * z, t * x * z + s * y),
        (t * x * y + s * z, t * y * y + c, t * y * z - s * x),
        (t * x * z - s * y, t * y * z + s * x, t * z * z + c),
    )
    return m


def perspective(fov_y: float, aspect: float, near: float, far: float) -> np.ndarray:
    """OpenGL-style perspective projection mapping the view frustum to clip space."""
    f = 1.0 / math.tan(fov_y / 2.0)
    m = np.zeros((4, 4), dtype=np.float64)
    m[0, 0] = f / aspect
    m[1, 1] = f
    m[2, 2] = (far + near) / (near - far)
    m[2, 3] = (2.0 * far * near) / (near - far)
    m[3, 2] = -1.0
    return m


def look_at(eye: Sequence[float], target: Sequence[float], up: Sequence[float]) -> np.ndarray:
    """View matrix placing the camera at ``eye`` looking at ``target``."""
    eye_v = np.asarray(eye, dtype=np.float64)
    forward = np.asarray(target, dtype=np.float64) - eye_v
    forward /= np.linalg.norm(forward)
    side = np.cross(forward, np.asarray(up, dtype=np.float64))
    side /= np.linalg.norm(side)
    true_up = np.cross(side, forward)
    m = identity()
    m[0, 0:3] = side
    m[1, 0:3] = true_up
    m[2, 0:3] = -forward
    m[0:3, 3] = (-side.dot(eye_v), -true_up.dot(eye_v), forward.dot(eye_v))
    return m


# -----------------------
# Transform composer
# -----------------------

def advance(spin: SpinConfiguration, orbit: OrbitConfiguration, dt: float) -> None:
    """Accumulate this frame's spin and orbit angles (``dt`` in seconds, >= 0)."""
    spin.rotation_angle += spin.speed * dt
    orbit.rotation_angle += orbit.speed * dt


def tilt_matrix(spin: SpinConfiguration) -> np.ndarray:
    return rotate(spin.axial_tilt, FORWARD_AXIS)


def spin_matrix(spin: SpinConfiguration) -> np.ndarray:
    # Tilt after spin so the body turns about its own tilted axis.
    return tilt_matrix(spin) @ rotate(spin.rotation_angle, VERTICAL_AXIS)


def orbital_rotation(orbit: OrbitConfiguration) -> np.ndarray:
    offset = [orbit.radius * a for a in LATERAL_AXIS]
    return rotate(orbit.rotation_angle, VERTICAL_AXIS) @ translate(offset)


def orbital_tilt(orbit: OrbitConfiguration) -> np.ndarray:
    return rotate(orbit.inclination, FORWARD_AXIS)


def compose_placements(spin: SpinConfiguration,
                       orbit: OrbitConfiguration,
                       parent_placement: np.ndarray,
                       dt: float) -> Tuple[np.ndarray, np.ndarray]:
    """
    Advance the motion state and build this frame's placements.

    Args:
        spin: Spin state of the body (rotation_angle is advanced in place).
        orbit: Orbit state of the body (rotation_angle is advanced in place).
        parent_placement: Placement received from the parent, or the root placement.
        dt: Elapsed animation time in seconds.

    Returns:
        (world_placement, child_placement)
    """
    advance(spin, orbit, dt)
    orbital_frame = parent_placement @ orbital_rotation(orbit) @ orbital_tilt(orbit)
    world = orbital_frame @ spin_matrix(spin)
    children = orbital_frame @ tilt_matrix(spin)
    return world, children

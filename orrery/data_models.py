#!/usr/bin/env python3
"""
Data models for the orrery.

This module defines the per-body motion state shared between the transform
composer, celestial bodies and the UI.

Units and usage
- Angles are in radians, speeds in radians per second, radius in scene units.
- rotation_angle accumulates without bound; it is mutated once per frame by the
  traversal and reset to 0 whenever the configuration is replaced.
"""
from dataclasses import dataclass
from typing import Any, Tuple


@dataclass
class SpinConfiguration:
    """
    Rotation of a body about its own axis.

    Fields:
    - axial_tilt: Constant tilt of the spin axis about the forward axis
    - speed: Angular speed; the sign gives the direction of rotation
    - rotation_angle: Accumulated spin angle
    """
    axial_tilt: float = 0.0
    speed: float = 0.0
    rotation_angle: float = 0.0


@dataclass
class OrbitConfiguration:
    """
    Circular motion of a body around its parent.

    Fields:
    - radius: Distance from the orbit center along the lateral axis
    - inclination: Tilt of the orbital plane about the forward axis
    - speed: Angular speed around the vertical axis
    - rotation_angle: Accumulated orbital angle
    """
    radius: float = 0.0
    inclination: float = 0.0
    speed: float = 0.0
    rotation_angle: float = 0.0


@dataclass
class RingConfiguration:
    """A ring rigidly attached to its owner; it has no motion state of its own."""
    node: Any
    scale: Tuple[float, float] = (1.0, 1.0)

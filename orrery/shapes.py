#!/usr/bin/env python3
"""
Parametric shapes used as body and ring geometry.

Shapes are sample points in the body's local frame (y is the spin axis); a
renderable node projects them to draw an outline. Nothing here touches the
display.
"""
import math
from dataclasses import dataclass, field
from typing import Dict

import numpy as np


@dataclass
class MeshData:
    """
    Named groups of local-space sample points.

    Fields:
    - name: Identifier used in logs
    - loops: Closed polylines, each an (N, 3) array
    """
    name: str
    loops: Dict[str, np.ndarray] = field(default_factory=dict)


def _circle(radius: float, samples: int, plane: str) -> np.ndarray:
    t = np.linspace(0.0, 2.0 * math.pi, samples, endpoint=False)
    c = radius * np.cos(t)
    s = radius * np.sin(t)
    zeros = np.zeros_like(t)
    if plane == "xz":
        return np.stack((c, zeros, s), axis=1)
    if plane == "xy":
        return np.stack((c, s, zeros), axis=1)
    raise ValueError(f"Unknown plane: {plane}")


def create_sphere(radius: float = 1.0, samples: int = 48) -> MeshData:
    """Unit sphere given by its equator and prime meridian, enough to show spin and tilt."""
    return MeshData(
        name="sphere",
        loops={
            "equator": _circle(radius, samples, "xz"),
            "meridian": _circle(radius, samples, "xy"),
        },
    )


def create_circle_ring(radius: float, thickness: float, samples: int = 80) -> MeshData:
    """
    Flat ring in the equatorial (x-z) plane.

    Args:
        radius: Distance from the center to the middle of the ring.
        thickness: Width of the ring band.
        samples: Points per edge.
    """
    half = thickness / 2.0
    return MeshData(
        name="circle_ring",
        loops={
            "inner": _circle(radius - half, samples, "xz"),
            "outer": _circle(radius + half, samples, "xz"),
        },
    )

#!/usr/bin/env python3
"""
Built-in scenes.

Each builder returns ``(root, root_offset, time_scale)``. Bodies are created
through a ``SceneAssets`` bundle so the same scenes can be drawn by pygame or
recorded by tests.

Speeds are given as periods: ``2π / period`` radians per second, a negative
period turns the other way.
"""
import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from .celestial_body import CelestialBody
from .constants import DEFAULT_ROOT_OFFSET, TWO_PI
from .render_nodes import BasisDrawer, RenderableNode
from .shapes import MeshData, create_circle_ring, create_sphere

Scene = Tuple[CelestialBody, Tuple[float, float, float], Optional[float]]


@dataclass
class SceneAssets:
    """
    Everything a scene needs from the drawing side.

    Fields:
    - new_node: Factory returning a fresh renderable node
    - load_texture: Maps a texture name to a texture handle
    - body_program / ring_program: Programs attached to body and ring nodes
    - sphere / ring_shape: Shared geometry
    - basis_drawer: Optional debug basis collaborator
    """
    new_node: Callable[[], RenderableNode]
    load_texture: Callable[[str], Any]
    body_program: Any = None
    ring_program: Any = None
    sphere: Optional[MeshData] = None
    ring_shape: Optional[MeshData] = None
    basis_drawer: Optional[BasisDrawer] = None

    def __post_init__(self):
        if self.sphere is None:
            self.sphere = create_sphere()
        if self.ring_shape is None:
            self.ring_shape = create_circle_ring(0.675, 0.45)


def speed_from_period(period: float) -> float:
    """Angular speed for a full turn every ``period`` seconds; 0 means no motion."""
    if period == 0:
        return 0.0
    return TWO_PI / period


def make_body(assets: SceneAssets, name: str, texture: str,
              scale=(1.0, 1.0, 1.0),
              spin: Tuple[float, float] = (0.0, 0.0),
              orbit: Tuple[float, float, float] = (0.0, 0.0, 0.0)) -> CelestialBody:
    """
    Create and configure one body.

    Args:
        spin: (axial tilt in degrees, period in seconds)
        orbit: (radius, inclination in degrees, period in seconds)
    """
    body = CelestialBody(assets.new_node(), assets.sphere, assets.body_program,
                         assets.load_texture(texture), name=name,
                         basis_drawer=assets.basis_drawer)
    body.set_scale(scale)
    body.configure_spin(math.radians(spin[0]), speed_from_period(spin[1]))
    body.configure_orbit(orbit[0], math.radians(orbit[1]), speed_from_period(orbit[2]))
    return body


def build_earth_moon(assets: SceneAssets) -> Scene:
    """Earth with its Moon, the whole system shifted along the lateral axis."""
    moon = make_body(assets, "Moon", "moon", scale=(0.3, 0.3, 0.3),
                     spin=(-6.7, 90.0), orbit=(1.5, -66.0, 1.3))
    earth = make_body(assets, "Earth", "earth",
                      spin=(-23.0, 3.0), orbit=(-2.5, 45.0, 10.0))
    earth.add_child(moon)
    return earth, DEFAULT_ROOT_OFFSET, None


# name, texture, scale, (tilt deg, spin period), (radius, inclination deg, orbit period)
_PLANETS: List[Tuple[str, str, float, Tuple[float, float], Tuple[float, float, float]]] = [
    ("Mercury", "mercury", 0.02, (-0.0, 180.0), (2.0, -3.4, 4.0)),
    ("Venus", "venus", 0.05, (-2.6, -600.0), (3.0, -3.9, 12.0)),
    ("Earth", "earth", 0.05, (-23.0, 3.0), (4.0, -7.2, 20.0)),
    ("Mars", "mars", 0.03, (-25.0, 3.0), (5.0, -5.7, 36.0)),
    ("Jupiter", "jupiter", 0.5, (-3.1, 1.0), (13.0, -6.1, 220.0)),
    ("Saturn", "saturn", 0.4, (-27.0, 1.2), (16.0, -5.5, 400.0)),
    ("Uranus", "uranus", 0.2, (-82.0, -2.0), (18.0, -6.5, 1680.0)),
    ("Neptune", "neptune", 0.2, (-28.0, 2.0), (19.0, -6.4, 3200.0)),
]


def build_solar_system(assets: SceneAssets) -> Scene:
    """The Sun with all eight planets, the Earth's Moon and Saturn's ring."""
    sun = make_body(assets, "Sun", "sun", spin=(0.0, 6.0))
    planets: Dict[str, CelestialBody] = {}
    for name, texture, size, spin, orbit in _PLANETS:
        planets[name] = make_body(assets, name, texture, scale=(size, size, size), spin=spin, orbit=orbit)
        sun.add_child(planets[name])

    moon = make_body(assets, "Moon", "moon", scale=(0.01, 0.01, 0.01),
                     spin=(-6.7, 90.0), orbit=(0.2, 29.0, 1.3))
    planets["Earth"].add_child(moon)

    planets["Saturn"].set_ring(assets.new_node(), assets.ring_shape, assets.ring_program,
                               assets.load_texture("saturn_ring"), (1.0, 1.25))
    return sun, (0.0, 0.0, 0.0), None


BUILTIN_SCENES: Dict[str, Callable[[SceneAssets], Scene]] = {
    "Earth and Moon": build_earth_moon,
    "Solar System": build_solar_system,
}

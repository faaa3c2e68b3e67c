#!/usr/bin/env python3
"""
Celestial bodies: the nodes of the orrery scene graph.

A body owns its motion state, a scale, an optional ring and a renderable node.
Child links are plain references; the tree is owned by whoever assembled it
(see ``orrery.traversal.validate_tree`` for the assembly-time check).
"""
from typing import Any, List, Optional, Sequence, Tuple

import numpy as np

from .constants import BASIS_PARAMS
from .data_models import OrbitConfiguration, RingConfiguration, SpinConfiguration
from .render_nodes import BasisDrawer, RenderableNode
from .transforms import compose_placements, scale


class CelestialBody:
    """
    A spinning body orbiting its parent.

    Each call to ``update_and_render`` advances the spin and orbit angles once,
    draws the body (and its ring) and returns the placement its children are
    drawn relative to.
    """

    def __init__(self, node: RenderableNode, shape: Any, program: Any, diffuse_texture: Any,
                 name: str = "", basis_drawer: Optional[BasisDrawer] = None):
        node.set_geometry(shape)
        node.attach_texture("diffuse_texture", diffuse_texture)
        node.set_program(program)

        self.name = name
        self.node = node
        self.basis_drawer = basis_drawer
        self._spin = SpinConfiguration()
        self._orbit = OrbitConfiguration()
        self._scale: Tuple[float, float, float] = (1.0, 1.0, 1.0)
        self._ring: Optional[RingConfiguration] = None
        self._children: List["CelestialBody"] = []
        self._world: Optional[np.ndarray] = None

    def __repr__(self):
        return f"{type(self).__name__}({self.name!r}, children={len(self._children)})"

    # -----------------------
    # Configuration
    # -----------------------

    def configure_spin(self, axial_tilt: float, speed: float) -> None:
        self._spin = SpinConfiguration(axial_tilt=float(axial_tilt), speed=float(speed))

    def configure_orbit(self, radius: float, inclination: float, speed: float) -> None:
        # A negative radius mirrors the body through the orbit center.
        self._orbit = OrbitConfiguration(radius=float(radius),
                                         inclination=float(inclination),
                                         speed=float(speed))

    def set_scale(self, factors: Sequence[float]) -> None:
        self._scale = (float(factors[0]), float(factors[1]), float(factors[2]))

    def set_ring(self, node: RenderableNode, shape: Any, program: Any, diffuse_texture: Any,
                 ring_scale: Sequence[float]) -> None:
        node.set_geometry(shape)
        node.attach_texture("diffuse_texture", diffuse_texture)
        node.set_program(program)
        self._ring = RingConfiguration(node=node, scale=(float(ring_scale[0]), float(ring_scale[1])))

    def add_child(self, body: "CelestialBody") -> None:
        self._children.append(body)

    def get_children(self) -> Tuple["CelestialBody", ...]:
        return tuple(self._children)

    @property
    def spin(self) -> SpinConfiguration:
        return self._spin

    @property
    def orbit(self) -> OrbitConfiguration:
        return self._orbit

    @property
    def scale(self) -> Tuple[float, float, float]:
        return self._scale

    @property
    def ring(self) -> Optional[RingConfiguration]:
        return self._ring

    @property
    def world_placement(self) -> Optional[np.ndarray]:
        """World placement computed by the most recent frame, None before the first one."""
        return self._world

    # -----------------------
    # Per-frame update
    # -----------------------

    def update_and_render(self, dt: float, view_projection: np.ndarray,
                          parent_placement: np.ndarray, show_basis: bool) -> np.ndarray:
        """
        Advance the body by ``dt`` seconds and draw it.

        Args:
            dt: Elapsed animation time in seconds (>= 0; 0 leaves the state untouched).
            view_projection: Camera matrix for this frame.
            parent_placement: Placement returned by the parent, or the root placement.
            show_basis: Whether to draw the debug basis at the body's origin.

        Returns:
            The placement to hand to this body's children.
        """
        world, children = compose_placements(self._spin, self._orbit, parent_placement, dt)
        self._world = world

        if show_basis and self.basis_drawer is not None:
            self.basis_drawer.draw_basis(BASIS_PARAMS, view_projection, world)

        self.node.draw(view_projection, world @ scale(self._scale))
        if self._ring is not None:
            ring_x, ring_y = self._ring.scale
            self._ring.node.draw(view_projection, world @ scale((ring_x, 1.0, ring_y)))

        return children

#!/usr/bin/env python3
"""
Boundary contracts for the collaborators a celestial body draws through.

A body never inspects drawing state; it hands its node a view-projection and a
world placement and lets the node do the rest. Concrete pygame implementations
live in ``orrery.pygame_nodes``.
"""
from typing import Any, Protocol, Sequence

import numpy as np


class RenderableNode(Protocol):
    """Opaque handle to geometry plus material state, loaded outside the core."""

    def set_geometry(self, mesh: Any) -> None:
        ...

    def attach_texture(self, name: str, handle: Any) -> None:
        ...

    def set_program(self, shader: Any) -> None:
        ...

    def draw(self, view_projection: np.ndarray, world_placement: np.ndarray) -> None:
        ...


class BasisDrawer(Protocol):
    """Debug widget drawing the three axes of a placement."""

    def draw_basis(self, scale_params: Sequence[float],
                   view_projection: np.ndarray,
                   world_placement: np.ndarray) -> None:
        ...

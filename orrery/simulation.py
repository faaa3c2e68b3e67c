#!/usr/bin/env python3
"""
Shared animation state between the UI thread (Dear PyGui) and the rendering thread (pygame).

The controller owns the current scene root and the animation settings. One call
to ``render_frame`` computes the frame's animation time once and walks the
whole tree with it, under the lock, so UI edits never land mid-frame.
"""
import logging
import threading
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .celestial_body import CelestialBody
from .constants import DEFAULT_TIME_SCALE, MAX_TIME_SCALE, MIN_TIME_SCALE, STEP_DT
from .transforms import identity, translate
from .traversal import render_tree, validate_tree, walk
from .utils import clamp

logger = logging.getLogger(__name__)


class OrreryController:
    """
    Thread-safe holder of the scene and the animation settings.
    """
    def __init__(self):
        self.lock = threading.RLock()
        self.root: Optional[CelestialBody] = None
        self.root_placement = identity()
        self.scene_name = ""
        self.running = True  # app running
        self.playing = True  # animation running
        self.time_scale = DEFAULT_TIME_SCALE
        self.show_basis = False
        self.selected_index: Optional[int] = None
        self.frame_count = 0
        self.last_visited = 0

        self._step_requested = False

    def set_time_scale(self, s: float) -> float:
        with self.lock:
            self.time_scale = clamp(float(s), MIN_TIME_SCALE, MAX_TIME_SCALE)
            return self.time_scale

    def set_playing(self, playing: bool):
        with self.lock:
            self.playing = bool(playing)

    def toggle_playing(self) -> bool:
        with self.lock:
            self.playing = not self.playing
            return self.playing

    def set_show_basis(self, show: bool):
        with self.lock:
            self.show_basis = bool(show)

    def request_step(self):
        """Advance exactly one frame of ``STEP_DT`` (scaled) on the next render, even when paused."""
        with self.lock:
            self._step_requested = True

    def replace_scene(self, root: CelestialBody, root_offset: Sequence[float] = (0.0, 0.0, 0.0),
                      name: str = ""):
        """
        Install a new scene tree.

        Raises:
            SceneGraphError: The tree has a cycle or a body with two parents.
        """
        count = validate_tree(root)
        with self.lock:
            self.root = root
            self.root_placement = translate(root_offset)
            self.scene_name = name
            self.selected_index = 0
            self.frame_count = 0
        logger.info("Loaded scene %r with %d bodies", name or root.name, count)

    def animation_dt(self, real_dt: float) -> float:
        """Animation time for a frame that took ``real_dt`` wall-clock seconds."""
        with self.lock:
            if self._step_requested:
                self._step_requested = False
                return STEP_DT * self.time_scale
            if not self.playing:
                return 0.0
            return max(0.0, real_dt) * self.time_scale

    def render_frame(self, real_dt: float, view_projection: np.ndarray) -> int:
        """Walk the scene once; every body sees the same animation time. Returns the visit count."""
        with self.lock:
            if self.root is None:
                return 0
            dt = self.animation_dt(real_dt)
            self.last_visited = render_tree(self.root, dt, view_projection,
                                            self.root_placement, self.show_basis)
            self.frame_count += 1
            return self.last_visited

    def bodies(self) -> List[Tuple[CelestialBody, int]]:
        with self.lock:
            if self.root is None:
                return []
            return list(walk(self.root))

    def body_labels(self) -> List[str]:
        """Indented list-box labels in walk order, numbered so equal names stay distinct."""
        return [f"{'  ' * depth}{body.name or 'Body'} #{i + 1}"
                for i, (body, depth) in enumerate(self.bodies())]

    def get_selected_body(self) -> Optional[CelestialBody]:
        with self.lock:
            bodies = self.bodies()
            if self.selected_index is not None and 0 <= self.selected_index < len(bodies):
                return bodies[self.selected_index][0]
            return None

    def reconfigure_body(self, index: int,
                         spin: Optional[Tuple[float, float]] = None,
                         orbit: Optional[Tuple[float, float, float]] = None) -> Optional[CelestialBody]:
        """
        Replace the spin and/or orbit of the body at ``index`` in walk order.

        Args:
            spin: (axial_tilt, speed) in radians and radians per second.
            orbit: (radius, inclination, speed).

        Returns:
            The reconfigured body, or None if the index is out of range.
        """
        with self.lock:
            bodies = self.bodies()
            if not 0 <= index < len(bodies):
                return None
            body = bodies[index][0]
            if spin is not None:
                body.configure_spin(*spin)
            if orbit is not None:
                body.configure_orbit(*orbit)
        logger.info("Reconfigured %s (spin=%s, orbit=%s)", body.name, spin, orbit)
        return body

#!/usr/bin/env python3
"""
pygame implementations of the renderable node and the debug basis drawer.

A ``Canvas`` plays the role of the process-wide drawing context: every node
draws onto whatever surface the canvas currently holds. Programs are drawing
styles standing in for shader programs, and texture handles are RGB colours.

Each draw call is self-contained: it projects the node's mesh through
``view_projection @ world_placement`` and draws immediately.
"""
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
import pygame
from pygame import gfxdraw

from .camera import project_to_screen
from .constants import (
    BASIS_COLORS,
    DEFAULT_BODY_COLOR,
    MAX_BODY_PIXELS,
    MIN_BODY_PIXELS,
    SAFE_COORD_LIMIT,
)
from .shapes import MeshData

Color = Tuple[int, int, int]

# Flat colours used as "textures" for the built-in scenes
TEXTURE_COLORS: Dict[str, Color] = {
    "sun": (255, 204, 0),
    "mercury": (170, 160, 150),
    "venus": (230, 200, 140),
    "earth": (100, 149, 237),
    "moon": (200, 200, 200),
    "mars": (210, 100, 60),
    "jupiter": (215, 180, 140),
    "saturn": (230, 210, 150),
    "saturn_ring": (190, 170, 120),
    "uranus": (160, 220, 230),
    "neptune": (80, 110, 230),
}


def load_texture(name: str) -> Color:
    return TEXTURE_COLORS.get(name, DEFAULT_BODY_COLOR)


def _safe_point(pt):
    try:
        x, y = int(pt[0]), int(pt[1])
    except (TypeError, ValueError, OverflowError):
        return None
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None


def _shade(color: Color, factor: float) -> Color:
    return tuple(max(0, min(255, int(c * factor))) for c in color)


class Canvas:
    """Target surface shared by every node; swapped when the window is resized."""

    def __init__(self, surface: Optional[pygame.Surface] = None):
        self.surface = surface

    @property
    def viewport_size(self) -> Tuple[int, int]:
        return self.surface.get_size()


class SphereProgram:
    """Filled disc at the projected body, with the front half of its meridian drawn to show spin."""

    def render(self, canvas: Canvas, mesh: MeshData, clip_from_local: np.ndarray, color: Color) -> None:
        size = canvas.viewport_size
        center = project_to_screen(clip_from_local, (0.0, 0.0, 0.0), size)
        if center is None:
            return
        center_s = _safe_point(center)
        if center_s is None:
            return

        projected: Dict[str, List[Tuple[float, float, float]]] = {}
        for name, loop in mesh.loops.items():
            projected[name] = [p for p in (project_to_screen(clip_from_local, v, size) for v in loop)
                               if p is not None]

        radius = MIN_BODY_PIXELS
        for points in projected.values():
            for px, py, _ in points:
                radius = max(radius, int(np.hypot(px - center[0], py - center[1])))
        radius = min(radius, MAX_BODY_PIXELS)

        gfxdraw.filled_circle(canvas.surface, center_s[0], center_s[1], radius, color)
        gfxdraw.aacircle(canvas.surface, center_s[0], center_s[1], radius, color)

        front = [_safe_point(p) for p in projected.get("meridian", []) if p[2] <= center[2]]
        front = [p for p in front if p is not None]
        if len(front) > 1 and radius > 3:
            pygame.draw.lines(canvas.surface, _shade(color, 0.6), False, front, 1)


class RingProgram:
    """Outline of both ring edges."""

    def render(self, canvas: Canvas, mesh: MeshData, clip_from_local: np.ndarray, color: Color) -> None:
        size = canvas.viewport_size
        for loop in mesh.loops.values():
            points = [_safe_point(p) for p in (project_to_screen(clip_from_local, v, size) for v in loop)
                      if p is not None]
            points = [p for p in points if p is not None]
            if len(points) > 2:
                pygame.draw.aalines(canvas.surface, color, True, points)


class PygameNode:
    """Renderable node drawing a parametric mesh onto the shared canvas."""

    def __init__(self, canvas: Canvas):
        self.canvas = canvas
        self.mesh: Optional[MeshData] = None
        self.program = None
        self.textures: Dict[str, Color] = {}

    def set_geometry(self, mesh: MeshData) -> None:
        self.mesh = mesh

    def attach_texture(self, name: str, handle: Color) -> None:
        self.textures[name] = handle

    def set_program(self, shader) -> None:
        self.program = shader

    def draw(self, view_projection: np.ndarray, world_placement: np.ndarray) -> None:
        if self.canvas.surface is None or self.mesh is None or self.program is None:
            return
        color = self.textures.get("diffuse_texture", DEFAULT_BODY_COLOR)
        self.program.render(self.canvas, self.mesh, view_projection @ world_placement, color)


class PygameBasisDrawer:
    """Draws the x, y and z axes of a placement in red, green and blue."""

    def __init__(self, canvas: Canvas):
        self.canvas = canvas

    def draw_basis(self, scale_params: Sequence[float], view_projection: np.ndarray,
                   world_placement: np.ndarray) -> None:
        if self.canvas.surface is None:
            return
        thickness, length = scale_params
        clip_from_local = view_projection @ world_placement
        size = self.canvas.viewport_size
        origin = project_to_screen(clip_from_local, (0.0, 0.0, 0.0), size)
        origin_s = _safe_point(origin) if origin is not None else None
        if origin_s is None:
            return
        for axis, color in enumerate(BASIS_COLORS):
            tip = [0.0, 0.0, 0.0]
            tip[axis] = length
            end = project_to_screen(clip_from_local, tip, size)
            end_s = _safe_point(end) if end is not None else None
            if end_s is not None:
                pygame.draw.line(self.canvas.surface, color, origin_s, end_s, max(1, int(thickness)))

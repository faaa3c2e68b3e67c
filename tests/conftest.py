import math

import numpy as np
import pytest

from orrery.celestial_body import CelestialBody
from orrery.presets import SceneAssets


class RecordingNode:
    """Renderable node that remembers what it was configured with and every draw request."""

    def __init__(self, log=None):
        self.log = log if log is not None else []
        self.mesh = None
        self.program = None
        self.textures = {}
        self.draws = []

    def set_geometry(self, mesh):
        self.mesh = mesh

    def attach_texture(self, name, handle):
        self.textures[name] = handle

    def set_program(self, shader):
        self.program = shader

    def draw(self, view_projection, world_placement):
        self.draws.append((np.array(view_projection), np.array(world_placement)))
        self.log.append(self)


class RecordingBasisDrawer:
    def __init__(self):
        self.calls = []

    def draw_basis(self, scale_params, view_projection, world_placement):
        self.calls.append((tuple(scale_params), np.array(world_placement)))


def rot_y(angle):
    c, s = math.cos(angle), math.sin(angle)
    return np.array([[c, 0, s, 0], [0, 1, 0, 0], [-s, 0, c, 0], [0, 0, 0, 1]], dtype=float)


def rot_z(angle):
    c, s = math.cos(angle), math.sin(angle)
    return np.array([[c, -s, 0, 0], [s, c, 0, 0], [0, 0, 1, 0], [0, 0, 0, 1]], dtype=float)


def trans(x, y, z):
    m = np.identity(4)
    m[0:3, 3] = (x, y, z)
    return m


def transform_point(matrix, point):
    return (matrix @ np.array([point[0], point[1], point[2], 1.0]))[0:3]


@pytest.fixture
def draw_log():
    return []


@pytest.fixture
def basis_drawer():
    return RecordingBasisDrawer()


@pytest.fixture
def make_body(draw_log, basis_drawer):
    def _make(name="Body", spin=(0.0, 0.0), orbit=(0.0, 0.0, 0.0)):
        body = CelestialBody(RecordingNode(draw_log), "sphere", "program", (1, 2, 3),
                             name=name, basis_drawer=basis_drawer)
        body.configure_spin(*spin)
        body.configure_orbit(*orbit)
        return body
    return _make


@pytest.fixture
def assets(draw_log, basis_drawer):
    return SceneAssets(
        new_node=lambda: RecordingNode(draw_log),
        load_texture=lambda name: name,
        body_program="body-program",
        ring_program="ring-program",
        basis_drawer=basis_drawer,
    )

import math

import numpy as np
import pytest

from orrery.data_models import OrbitConfiguration, SpinConfiguration
from orrery.transforms import (
    advance,
    compose_placements,
    identity,
    look_at,
    orbital_rotation,
    perspective,
    rotate,
    scale,
    spin_matrix,
    translate,
)

from conftest import rot_y, rot_z, trans, transform_point


def test_rotate_quarter_turn_about_vertical_axis():
    m = rotate(math.pi / 2, (0, 1, 0))
    assert np.allclose(transform_point(m, (1, 0, 0)), (0, 0, -1))
    assert np.allclose(m, rot_y(math.pi / 2))


def test_rotate_matches_reference_for_large_accumulated_angles():
    angle = 1000.0 * math.pi + 0.3
    assert np.allclose(rotate(angle, (0, 0, 1)), rot_z(0.3))


def test_rotate_normalizes_axis():
    assert np.allclose(rotate(0.7, (0, 5, 0)), rot_y(0.7))


def test_translate_and_scale():
    assert np.allclose(transform_point(translate((1, 2, 3)), (1, 1, 1)), (2, 3, 4))
    assert np.allclose(transform_point(scale((2, 3, 4)), (1, 1, 1)), (2, 3, 4))


def test_look_at_puts_target_in_front_of_camera():
    view = look_at((0, 0, 5), (0, 0, 0), (0, 1, 0))
    assert np.allclose(transform_point(view, (0, 0, 0)), (0, 0, -5))


def test_perspective_maps_near_and_far_planes():
    proj = perspective(math.pi / 2, 1.0, 1.0, 10.0)
    near = proj @ np.array((0, 0, -1, 1.0))
    far = proj @ np.array((0, 0, -10, 1.0))
    assert near[2] / near[3] == pytest.approx(-1.0)
    assert far[2] / far[3] == pytest.approx(1.0)


def test_advance_accumulates_speed_times_dt():
    spin = SpinConfiguration(axial_tilt=0.1, speed=2.0)
    orbit = OrbitConfiguration(radius=1.0, speed=-0.5)
    advance(spin, orbit, 0.25)
    advance(spin, orbit, 0.75)
    assert spin.rotation_angle == pytest.approx(2.0)
    assert orbit.rotation_angle == pytest.approx(-0.5)


def test_advance_with_zero_dt_is_a_no_op():
    spin = SpinConfiguration(speed=3.0, rotation_angle=1.25)
    orbit = OrbitConfiguration(speed=4.0, rotation_angle=-2.5)
    advance(spin, orbit, 0.0)
    assert spin.rotation_angle == 1.25
    assert orbit.rotation_angle == -2.5


def test_spin_matrix_applies_tilt_after_spin():
    spin = SpinConfiguration(axial_tilt=0.4, speed=0.0, rotation_angle=1.1)
    assert np.allclose(spin_matrix(spin), rot_z(0.4) @ rot_y(1.1))
    assert not np.allclose(spin_matrix(spin), rot_y(1.1) @ rot_z(0.4))


def test_orbital_rotation_sweeps_a_circle_of_the_radius():
    for angle in (0.0, 0.8, 2.5, 4.0):
        orbit = OrbitConfiguration(radius=3.0, rotation_angle=angle)
        position = transform_point(orbital_rotation(orbit), (0, 0, 0))
        assert np.linalg.norm(position) == pytest.approx(3.0)
        assert position[1] == pytest.approx(0.0)


def test_compose_placements_order():
    spin = SpinConfiguration(axial_tilt=0.3, speed=1.0)
    orbit = OrbitConfiguration(radius=2.0, inclination=0.5, speed=0.25)
    parent = trans(1, -1, 4) @ rot_y(0.2)

    world, child = compose_placements(spin, orbit, parent, 2.0)

    orbital_frame = parent @ rot_y(0.5) @ trans(2, 0, 0) @ rot_z(0.5)
    assert np.allclose(world, orbital_frame @ rot_z(0.3) @ rot_y(2.0))
    assert np.allclose(child, orbital_frame @ rot_z(0.3))


def test_child_placement_ignores_spin_angle():
    orbit = OrbitConfiguration(radius=1.0)
    _, slow = compose_placements(SpinConfiguration(axial_tilt=0.2, speed=0.1), orbit, identity(), 1.0)
    orbit = OrbitConfiguration(radius=1.0)
    _, fast = compose_placements(SpinConfiguration(axial_tilt=0.2, speed=5.0), orbit, identity(), 1.0)
    assert np.allclose(slow, fast)


def test_negative_radius_mirrors_through_orbit_center():
    _, positive = compose_placements(SpinConfiguration(), OrbitConfiguration(radius=2.5), identity(), 0.0)
    _, negative = compose_placements(SpinConfiguration(), OrbitConfiguration(radius=-2.5), identity(), 0.0)
    assert np.allclose(positive[0:3, 3], -negative[0:3, 3])

import math

import pytest

from orrery.camera import Camera3D, project_to_screen
from orrery.constants import MAX_CAMERA_PITCH, MIN_CAMERA_DISTANCE
from orrery.transforms import identity


def test_target_projects_to_viewport_center():
    camera = Camera3D(distance=6.0, yaw=0.7, pitch=0.3)
    camera.set_viewport_size(400, 300)
    x, y, depth = project_to_screen(camera.view_projection(), camera.target, (400, 300))
    assert x == pytest.approx(200.0)
    assert y == pytest.approx(150.0)
    assert depth == pytest.approx(6.0)


def test_point_behind_camera_is_not_projected():
    camera = Camera3D(distance=6.0)
    assert project_to_screen(camera.view_projection(), (0.0, 0.0, 10.0), (800, 600)) is None


def test_lateral_axis_points_right_on_screen():
    camera = Camera3D(distance=6.0)
    camera.set_viewport_size(200, 200)
    x, _, _ = project_to_screen(camera.view_projection(), (1.0, 0.0, 0.0), (200, 200))
    assert x > 100


def test_zoom_and_pitch_are_clamped():
    camera = Camera3D(distance=6.0)
    camera.zoom(1000.0)
    assert camera.distance == MIN_CAMERA_DISTANCE
    camera.rotate(0.0, 10.0)
    assert camera.pitch == MAX_CAMERA_PITCH


def test_pan_moves_target_sideways():
    camera = Camera3D(distance=6.0)
    camera.pan(-1.0, 0.0)
    assert camera.target[0] == pytest.approx(1.0)
    assert camera.target[1] == pytest.approx(0.0)


def test_project_identity_matrix():
    assert project_to_screen(identity(), (0.5, -0.5, 0.0), (100, 100)) == (75.0, 75.0, 1.0)


def test_reset_restores_pose_in_place():
    camera = Camera3D(distance=6.0, pitch=0.3)
    camera.set_viewport_size(640, 480)
    camera.rotate(1.0, 0.4)
    camera.zoom(3.0)
    camera.pan(1.0, -2.0)
    same = camera
    camera.reset(distance=6.0, pitch=0.3)
    assert camera is same
    assert camera.target == [0.0, 0.0, 0.0]
    assert camera.distance == 6.0
    assert camera.yaw == 0.0
    assert camera.pitch == 0.3
    assert camera.viewport_size == (640, 480)

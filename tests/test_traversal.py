import math

import numpy as np
import pytest

from orrery.errors import SceneGraphError
from orrery.traversal import render_tree, validate_tree, walk
from orrery.transforms import identity

from conftest import rot_y, trans

VIEW_PROJECTION = np.diag([2.0, 2.0, -1.0, 1.0])


@pytest.fixture
def family(make_body):
    sun = make_body("Sun", spin=(0.0, 1.0))
    earth = make_body("Earth", spin=(0.4, 3.0), orbit=(4.0, 0.0, 0.5))
    moon = make_body("Moon", orbit=(1.0, 0.0, 2.0))
    mars = make_body("Mars", orbit=(6.0, 0.0, 0.25))
    sun.add_child(earth)
    earth.add_child(moon)
    sun.add_child(mars)
    return sun, earth, moon, mars


def test_render_tree_visits_parents_before_children(family, draw_log):
    sun, earth, moon, mars = family
    visited = render_tree(sun, 0.1, VIEW_PROJECTION, identity(), False)
    assert visited == 4
    assert draw_log == [sun.node, earth.node, moon.node, mars.node]


def test_every_body_is_advanced_exactly_once_per_frame(family):
    sun, earth, moon, mars = family
    render_tree(sun, 0.5, VIEW_PROJECTION, identity(), False)
    assert sun.spin.rotation_angle == pytest.approx(0.5)
    assert earth.orbit.rotation_angle == pytest.approx(0.25)
    assert moon.orbit.rotation_angle == pytest.approx(1.0)
    assert mars.orbit.rotation_angle == pytest.approx(0.125)
    for body in family:
        assert len(body.node.draws) == 1


def test_state_persists_in_the_real_bodies_across_frames(family):
    sun, earth, moon, _ = family
    for _ in range(4):
        render_tree(sun, 0.25, VIEW_PROJECTION, identity(), False)
    assert moon.orbit.rotation_angle == pytest.approx(2.0)
    assert earth.get_children()[0] is moon


def test_siblings_accumulate_their_own_speeds_over_varying_frames(make_body):
    parent = make_body("Parent")
    fast = make_body("Fast", spin=(0.0, 4.0), orbit=(1.0, 0.0, 2.5))
    slow = make_body("Slow", spin=(0.1, -0.5), orbit=(3.0, 0.2, 0.25))
    parent.add_child(fast)
    parent.add_child(slow)
    dts = [0.01, 0.5, 0.0, 0.033, 1.7]
    for dt in dts:
        render_tree(parent, dt, VIEW_PROJECTION, identity(), False)
    total = sum(dts)
    assert fast.spin.rotation_angle == pytest.approx(4.0 * total)
    assert fast.orbit.rotation_angle == pytest.approx(2.5 * total)
    assert slow.spin.rotation_angle == pytest.approx(-0.5 * total)
    assert slow.orbit.rotation_angle == pytest.approx(0.25 * total)
    assert len(fast.node.draws) == len(slow.node.draws) == len(dts)


def test_child_is_placed_from_its_parents_child_placement(make_body):
    root = make_body("Root", orbit=(2.0, 0.0, 0.0))
    child = make_body("Child", orbit=(1.0, 0.0, 0.0))
    root.add_child(child)
    render_tree(root, 0.0, VIEW_PROJECTION, trans(3, 0, 0), False)
    origin = child.world_placement @ np.array([0.0, 0.0, 0.0, 1.0])
    assert np.allclose(origin[0:3], (6.0, 0.0, 0.0))


def test_siblings_receive_the_same_inbound_placement(make_body):
    parent = make_body("Parent", spin=(0.0, 5.0), orbit=(1.0, 0.0, 1.0))
    first = make_body("First", orbit=(2.0, 0.0, 0.0))
    second = make_body("Second", orbit=(2.0, 0.0, 0.0))
    parent.add_child(first)
    parent.add_child(second)
    render_tree(parent, 0.3, VIEW_PROJECTION, rot_y(math.pi / 3), False)
    assert np.allclose(first.world_placement, second.world_placement)


def test_show_basis_is_forwarded_to_every_body(family, basis_drawer):
    render_tree(family[0], 0.0, VIEW_PROJECTION, identity(), True)
    assert len(basis_drawer.calls) == 4
    render_tree(family[0], 0.0, VIEW_PROJECTION, identity(), False)
    assert len(basis_drawer.calls) == 4


def test_single_body_tree(make_body):
    lonely = make_body("Lonely")
    assert render_tree(lonely, 1.0, VIEW_PROJECTION, identity(), False) == 1


def test_walk_reports_depths_in_render_order(family):
    sun, earth, moon, mars = family
    assert list(walk(sun)) == [(sun, 0), (earth, 1), (moon, 2), (mars, 1)]


def test_walk_does_not_touch_motion_state(family):
    sun = family[0]
    list(walk(sun))
    assert all(body.spin.rotation_angle == 0.0 for body in family)
    assert all(not body.node.draws for body in family)


def test_validate_tree_counts_bodies(family):
    assert validate_tree(family[0]) == 4


def test_validate_tree_rejects_shared_child(make_body):
    root = make_body("Root")
    a = make_body("A")
    b = make_body("B")
    shared = make_body("Shared")
    root.add_child(a)
    root.add_child(b)
    a.add_child(shared)
    b.add_child(shared)
    with pytest.raises(SceneGraphError, match="Shared"):
        validate_tree(root)


def test_validate_tree_rejects_cycle(make_body):
    root = make_body("Root")
    child = make_body("Child")
    root.add_child(child)
    child.add_child(root)
    with pytest.raises(SceneGraphError):
        validate_tree(root)

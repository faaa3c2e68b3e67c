#!/usr/bin/env python3
"""
Scene traversal: one walk of the body tree per frame.

Every body reachable from the root is visited exactly once, and a body is
always updated before any of its children, because the children are drawn
relative to the placement it returns.

The work-list holds ``(body, inbound placement)`` pairs referring to the real
bodies in the tree. Each entry carries its own placement, so no placement
outlives the subtree it belongs to.

There is no per-frame cycle check; call ``validate_tree`` once after
assembling a scene.
"""
import logging
from typing import Iterator, List, Set, Tuple

import numpy as np

from .celestial_body import CelestialBody
from .errors import SceneGraphError

logger = logging.getLogger(__name__)


def render_tree(root: CelestialBody, dt: float, view_projection: np.ndarray,
                root_placement: np.ndarray, show_basis: bool) -> int:
    """
    Update and draw every body reachable from ``root``.

    Args:
        root: Traversal root.
        dt: Animation time for this frame, shared by every body.
        view_projection: Camera matrix for this frame.
        root_placement: Externally supplied placement of the root.
        show_basis: Forwarded to every body.

    Returns:
        Number of bodies visited.
    """
    pending: List[Tuple[CelestialBody, np.ndarray]] = [(root, root_placement)]
    visited = 0
    while pending:
        body, inbound = pending.pop()
        child_placement = body.update_and_render(dt, view_projection, inbound, show_basis)
        visited += 1
        # Reversed so siblings come off the stack in insertion order.
        for child in reversed(body.get_children()):
            pending.append((child, child_placement))
    return visited


def walk(root: CelestialBody) -> Iterator[Tuple[CelestialBody, int]]:
    """Yield ``(body, depth)`` in the same parent-before-child order as ``render_tree``."""
    pending: List[Tuple[CelestialBody, int]] = [(root, 0)]
    while pending:
        body, depth = pending.pop()
        yield body, depth
        for child in reversed(body.get_children()):
            pending.append((child, depth + 1))


def validate_tree(root: CelestialBody) -> int:
    """
    Check that every body is reachable from ``root`` exactly once.

    Raises:
        SceneGraphError: A body is linked from two parents, or the links form a cycle.

    Returns:
        Number of bodies in the tree.
    """
    seen: Set[int] = set()
    pending: List[Tuple[CelestialBody, str]] = [(root, "")]
    while pending:
        body, parent_name = pending.pop()
        if id(body) in seen:
            raise SceneGraphError(
                f"Body {body.name or body!r} is reachable more than once "
                f"(again via {parent_name or 'the root'}); the scene must be a tree"
            )
        seen.add(id(body))
        for child in body.get_children():
            pending.append((child, body.name))
    logger.debug("Validated scene tree rooted at %s with %d bodies", root.name, len(seen))
    return len(seen)

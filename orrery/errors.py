#!/usr/bin/env python3
"""
Exceptions raised while assembling a scene.

The per-frame path (composer, body update, traversal) never raises; these only
surface while a tree is built or loaded.
"""


class OrreryError(Exception):
    """Base class for orrery errors."""


class SceneGraphError(OrreryError):
    """The body tree is not a single-parent, acyclic tree."""


class SceneDefinitionError(OrreryError):
    """A scene template entry could not be turned into a body."""

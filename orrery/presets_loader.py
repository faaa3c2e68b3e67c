#!/usr/bin/env python3
"""
Scene template JSON loading utilities.

Schema
======
Template JSON (templates/*.json):
{
  "name": "Human-friendly preset name",
  "description": "Optional description",
  "time_scale": 2.0,                    # optional, default None
  "root_offset": [2.0, 0.0, 0.0],       # optional, default [0, 0, 0]
  "root": {
    "name": "Earth",
    "texture": "earth",
    "scale": [1.0, 1.0, 1.0],           # or a single number
    "spin": {"axial_tilt_deg": -23.0, "period": 3.0},
    "orbit": {"radius": 4.0, "inclination_deg": -7.2, "period": 20.0},
    "ring": {"texture": "saturn_ring", "scale": [1.0, 1.25]},
    "children": [ ...more bodies... ]
  }
}

Periods are in seconds per full turn; a negative period turns the other way
and 0 (or no period) means the angle never advances.

Users can add their own JSON files into the templates folder and they'll be picked up by the loader.
A body entry that cannot be read is skipped together with its children.
"""
import json
import logging
import math
import os
from typing import List, Optional, Tuple

from .celestial_body import CelestialBody
from .errors import SceneDefinitionError, SceneGraphError
from .presets import BUILTIN_SCENES, SceneAssets, speed_from_period
from .traversal import validate_tree

logger = logging.getLogger(__name__)

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "templates")


def _read_json(path: str) -> Optional[dict]:
  try:
    with open(path, "r", encoding="utf-8") as f:
      data = json.load(f)
  except (OSError, ValueError) as exc:
    logger.warning("Could not read template %s: %s", path, exc)
    return None
  if not isinstance(data, dict):
    logger.warning("Template %s is not a JSON object", path)
    return None
  return data


def _coerce_vec(value, n: int, default: float) -> Tuple[float, ...]:
  if value is None:
    return (default,) * n
  if isinstance(value, (int, float)):
    return (float(value),) * n
  if not isinstance(value, (list, tuple)) or len(value) != n:
    raise SceneDefinitionError(f"expected a number or {n} components, got {value!r}")
  try:
    return tuple(float(v) for v in value)
  except (TypeError, ValueError) as exc:
    raise SceneDefinitionError(f"bad vector {value!r}: {exc}") from exc


def _build_body(entry: dict, assets: SceneAssets) -> CelestialBody:
  if not isinstance(entry, dict):
    raise SceneDefinitionError("body entry must be an object")
  try:
    spin = entry.get("spin", {})
    orbit = entry.get("orbit", {})
    body = CelestialBody(assets.new_node(), assets.sphere, assets.body_program,
                         assets.load_texture(entry.get("texture", "")),
                         name=str(entry.get("name", "Body")),
                         basis_drawer=assets.basis_drawer)
    body.set_scale(_coerce_vec(entry.get("scale"), 3, 1.0))
    body.configure_spin(math.radians(float(spin.get("axial_tilt_deg", 0.0))),
                        speed_from_period(float(spin.get("period", 0.0))))
    body.configure_orbit(float(orbit.get("radius", 0.0)),
                         math.radians(float(orbit.get("inclination_deg", 0.0))),
                         speed_from_period(float(orbit.get("period", 0.0))))
    ring = entry.get("ring")
    if ring is not None:
      body.set_ring(assets.new_node(), assets.ring_shape, assets.ring_program,
                    assets.load_texture(ring.get("texture", "")),
                    _coerce_vec(ring.get("scale"), 2, 1.0))
  except (AttributeError, TypeError, ValueError) as exc:
    raise SceneDefinitionError(str(exc)) from exc

  children = entry.get("children")
  if children is None:
    children = []
  if not isinstance(children, list):
    raise SceneDefinitionError(f"children of {body.name!r} must be a list")
  for child_entry in children:
    try:
      body.add_child(_build_body(child_entry, assets))
    except SceneDefinitionError as exc:
      name = child_entry.get("name", "?") if isinstance(child_entry, dict) else "?"
      logger.warning("Skipping body %r under %r: %s", name, body.name, exc)
  return body


def list_templates() -> List[Tuple[str, str]]:
  """Return list of (file_name, display_name) for available templates."""
  items: List[Tuple[str, str]] = []
  if not os.path.isdir(TEMPLATES_DIR):
    return items
  for fn in sorted(os.listdir(TEMPLATES_DIR)):
    if not fn.lower().endswith(".json"):
      continue
    path = os.path.join(TEMPLATES_DIR, fn)
    data = _read_json(path) or {}
    display = data.get("name") or os.path.splitext(fn)[0]
    items.append((fn, display))
  return items


def load_template(file_name: str, assets: SceneAssets, directory: Optional[str] = None):
  """
  Load a template JSON by file name.
  Returns (root, root_offset, time_scale, display_name); root is None if the template is unusable.
  """
  path = os.path.join(directory or TEMPLATES_DIR, file_name)
  data = _read_json(path) or {}
  display_name = data.get("name") or os.path.splitext(file_name)[0]
  time_scale = data.get("time_scale")
  if time_scale is not None and (isinstance(time_scale, bool) or not isinstance(time_scale, (int, float))):
    logger.warning("Ignoring non-numeric time_scale %r in %s", time_scale, file_name)
    time_scale = None
  root = None
  root_offset = (0.0, 0.0, 0.0)
  try:
    root_offset = _coerce_vec(data.get("root_offset"), 3, 0.0)
    if "root" in data:
      root = _build_body(data["root"], assets)
      validate_tree(root)
  except (SceneDefinitionError, SceneGraphError) as exc:
    logger.warning("Template %s is unusable: %s", file_name, exc)
    root = None
  if root is not None:
    logger.info("Loaded template %r from %s", display_name, path)
  return root, root_offset, time_scale, display_name


def scene_names() -> List[str]:
  """Display names of every loadable scene: JSON templates first, then the built-in scenes."""
  names = [display for _, display in list_templates()]
  for name in BUILTIN_SCENES:
    if name not in names:
      names.append(name)
  return names


def load_scene(name: str, assets: SceneAssets):
  """
  Load a scene by display name, preferring JSON templates over built-in scenes.
  Returns (root, root_offset, time_scale, display_name); root is None if nothing usable matched.
  """
  for fn, display in list_templates():
    if display == name:
      root, root_offset, time_scale, display_name = load_template(fn, assets)
      if root is not None:
        return root, root_offset, time_scale, display_name
  builder = BUILTIN_SCENES.get(name)
  if builder is None:
    logger.warning("Unknown scene %r", name)
    return None, (0.0, 0.0, 0.0), None, name
  root, root_offset, time_scale = builder(assets)
  return root, root_offset, time_scale, name

#!/usr/bin/env python3
"""
Orrery application entry point and UI/renderer coordination.

What this module does
- Starts two event loops: a pygame rendering thread (viewport) and the Dear PyGui UI
  (running on the main thread).
- Maintains a shared OrreryController that owns the scene tree and the animation settings;
  all access is guarded by a re-entrant lock.
- Provides the camera input handling, the HUD and a Dear PyGui-based UI for switching
  scenes, pausing, changing the time scale, toggling the debug basis and reconfiguring
  the spin or orbit of a body.

Threading model
- PygameRenderer runs in a background thread and performs: input handling (for the viewport),
  one scene traversal per frame and drawing. The traversal runs under the controller lock.
- The UI class runs in the main thread via Dear PyGui. It updates controls on a periodic
  frame callback and invokes OrreryController methods as needed; these are lock-protected.

Running
1) Install dependencies: `pip install -e .`
2) Run this module: `python orrery_sim.py --preset "Solar System"`
"""

import argparse
import logging
import math
import time
import threading
from typing import List, Optional

# GUI and Rendering libs
import pygame
import dearpygui.dearpygui as dpg

from orrery.camera import Camera3D
from orrery.constants import (
    BACKGROUND_COLOR,
    DEFAULT_CAMERA_DISTANCE,
    HUD_COLOR,
    MAX_TIME_SCALE,
    MIN_TIME_SCALE,
    MOUSE_SENSITIVITY,
    TARGET_FPS,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from orrery.errors import SceneGraphError
from orrery.presets import SceneAssets, speed_from_period
from orrery.presets_loader import load_scene, scene_names
from orrery.pygame_nodes import Canvas, PygameBasisDrawer, PygameNode, RingProgram, SphereProgram, load_texture
from orrery.simulation import OrreryController
from orrery.utils import try_float

logger = logging.getLogger("orrery_sim")

DEFAULT_SCENE = "Earth and Moon"


def build_assets(canvas: Canvas) -> SceneAssets:
    return SceneAssets(
        new_node=lambda: PygameNode(canvas),
        load_texture=load_texture,
        body_program=SphereProgram(),
        ring_program=RingProgram(),
        basis_drawer=PygameBasisDrawer(canvas),
    )


def install_scene(sim: OrreryController, assets: SceneAssets, name: str) -> Optional[float]:
    """
    Load a scene by name into the controller.
    Returns the scene's preferred time scale (if any); raises LookupError if nothing loaded.
    """
    root, root_offset, time_scale, display_name = load_scene(name, assets)
    if root is None:
        raise LookupError(f"Scene {name!r} could not be loaded")
    sim.replace_scene(root, root_offset, display_name)
    if time_scale is not None:
        sim.set_time_scale(time_scale)
    return time_scale


def _period(speed: float) -> float:
    return 0.0 if speed == 0 else 2.0 * math.pi / speed

# ============================================================
# Pygame Renderer Thread
# ============================================================

class PygameRenderer(threading.Thread):
    """
    pygame loop: one traversal per frame plus the HUD.
    Handles camera orbiting (left drag / arrows), panning (right drag) and zoom (wheel).
    """
    def __init__(self, sim: OrreryController, canvas: Canvas):
        super().__init__(daemon=True)
        self.sim = sim
        self.canvas = canvas
        self.camera = Camera3D(distance=DEFAULT_CAMERA_DISTANCE, pitch=0.3)
        self.clock = None
        self.dragging_rotate = False
        self.dragging_pan = False
        self.drag_start_screen = (0, 0)
        self.rotate_speed_keys = 1.5  # radians per second
        self.running = True

    def reset_camera(self):
        # Called from the UI thread; the render thread reads the camera under the same lock.
        with self.sim.lock:
            self.camera.reset(distance=DEFAULT_CAMERA_DISTANCE, pitch=0.3)

    def run(self):
        pygame.init()
        pygame.display.set_caption("Orrery - Viewport")
        self.canvas.surface = pygame.display.set_mode((VIEW_WIDTH, VIEW_HEIGHT), pygame.RESIZABLE)
        self.camera.set_viewport_size(VIEW_WIDTH, VIEW_HEIGHT)
        self.clock = pygame.time.Clock()

        last_time = time.perf_counter()
        while self.running and self.sim.running:
            now = time.perf_counter()
            real_dt = now - last_time
            last_time = now

            # Input handling
            with self.sim.lock:
                self.handle_events(real_dt)
                view_projection = self.camera.view_projection()

            # Traverse and draw
            self.canvas.surface.fill(BACKGROUND_COLOR)
            self.sim.render_frame(real_dt, view_projection)
            self.draw_hud()
            pygame.display.flip()

            # Limit FPS
            self.clock.tick(TARGET_FPS)

        pygame.quit()

    def handle_events(self, real_dt):
        keys = pygame.key.get_pressed()
        if keys[pygame.K_LEFT]:
            self.camera.rotate(-self.rotate_speed_keys * real_dt, 0)
        if keys[pygame.K_RIGHT]:
            self.camera.rotate(self.rotate_speed_keys * real_dt, 0)
        if keys[pygame.K_UP]:
            self.camera.rotate(0, self.rotate_speed_keys * real_dt)
        if keys[pygame.K_DOWN]:
            self.camera.rotate(0, -self.rotate_speed_keys * real_dt)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.sim.running = False
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.canvas.surface = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                self.camera.set_viewport_size(event.w, event.h)

            elif event.type == pygame.MOUSEWHEEL:
                factor = 1.1 if event.y > 0 else 1.0 / 1.1
                self.camera.zoom(factor)

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_SPACE:
                    self.sim.toggle_playing()
                elif event.key == pygame.K_b:
                    with self.sim.lock:
                        self.sim.show_basis = not self.sim.show_basis
                elif event.key == pygame.K_PERIOD:
                    self.sim.request_step()

            elif event.type == pygame.MOUSEBUTTONDOWN:
                if event.button == 1:
                    self.dragging_rotate = True
                elif event.button in (2, 3):
                    self.dragging_pan = True
                self.drag_start_screen = pygame.mouse.get_pos()

            elif event.type == pygame.MOUSEBUTTONUP:
                if event.button == 1:
                    self.dragging_rotate = False
                if event.button in (2, 3):
                    self.dragging_pan = False

            elif event.type == pygame.MOUSEMOTION:
                mouse = pygame.mouse.get_pos()
                dx = mouse[0] - self.drag_start_screen[0]
                dy = mouse[1] - self.drag_start_screen[1]
                if self.dragging_rotate:
                    self.camera.rotate(-dx * MOUSE_SENSITIVITY, dy * MOUSE_SENSITIVITY)
                elif self.dragging_pan:
                    units_per_pixel = self.camera.distance * MOUSE_SENSITIVITY * 0.5
                    self.camera.pan(dx * units_per_pixel, dy * units_per_pixel)
                self.drag_start_screen = mouse

    def draw_hud(self):
        surf = self.canvas.surface
        draw_text(surf, "Left-drag/Arrows: orbit camera | Right-drag: pan | Wheel: zoom | "
                        "Space: Pause/Play | .: Step | B: basis", 10, 10, HUD_COLOR)
        with self.sim.lock:
            ts = self.sim.time_scale
            playing = self.sim.playing
            visited = self.sim.last_visited
            name = self.sim.scene_name
        draw_text(surf, f"{name}  Time scale: {ts:.2f}x  [{'Playing' if playing else 'Paused'}]  "
                        f"Bodies: {visited}", 10, 30, HUD_COLOR)

_cached_font = None

def draw_text(surface, text, x, y, color):
    global _cached_font
    if not pygame.font.get_init():
        pygame.font.init()
    if _cached_font is None:
        _cached_font = pygame.font.SysFont("consolas", 16) or pygame.font.Font(None, 16)
    img = _cached_font.render(text, True, color)
    surface.blit(img, (x, y))

# ============================================================
# Dear PyGui UI
# ============================================================

class UI:
    """
    Dear PyGui interface: scene selection, animation controls, body list and spin/orbit editing.
    """
    def __init__(self, sim: OrreryController, renderer: PygameRenderer, assets: SceneAssets,
                 initial_scene: str):
        self.sim = sim
        self.renderer = renderer
        self.assets = assets
        self.initial_scene = initial_scene

        self.status_msg_id = None
        self.body_list_id = None

        # Edit Selected Body fields
        self.spin_tilt_id = None
        self.spin_period_id = None
        self.orbit_radius_id = None
        self.orbit_inclination_id = None
        self.orbit_period_id = None
        self.angles_id = None

        # Track selection to avoid overwriting edits during typing
        self._last_edit_selected_idx = None
        self._body_labels: List[str] = []

        self._build_ui()

        dpg.set_frame_callback(1, self._post_setup)
        self._schedule_sync()

    def _post_setup(self):
        self._refresh_body_list()

    def _schedule_sync(self):
        """Reschedule the periodic sync callback using frame callbacks (approx ~10Hz)."""
        current = dpg.get_frame_count()
        dpg.set_frame_callback(current + 6, self._sync_ui_with_sim)

    # -----------------------
    # UI Construction
    # -----------------------

    def _build_ui(self):
        dpg.create_context()
        dpg.create_viewport(title='Orrery - Controls', width=520, height=640)

        with dpg.window(label="Scene controls", width=500, height=620, pos=(10, 10), tag="main_window"):
            with dpg.group(horizontal=True):
                dpg.add_text("Scene:")
                dpg.add_combo(scene_names(),
                              default_value=self.initial_scene,
                              width=260,
                              callback=lambda s, a, u: self.load_scene(a),
                              tag="scene_combo")
                dpg.add_button(label="Load", callback=lambda: self.load_scene(dpg.get_value("scene_combo")))
                dpg.add_button(label="Reset Camera", callback=self.renderer.reset_camera)

            dpg.add_separator()

            dpg.add_text("Animation")
            with dpg.group(horizontal=True):
                dpg.add_checkbox(label="Pause the animation", default_value=not self.sim.playing,
                                 callback=lambda s, a, u: self.sim.set_playing(not a), tag="pause_checkbox")
                dpg.add_button(label="Step", callback=self._step_once)
            dpg.add_slider_float(label="Time scale", min_value=MIN_TIME_SCALE, max_value=MAX_TIME_SCALE,
                                 default_value=self.sim.time_scale, width=300,
                                 callback=lambda s, a, u: self.sim.set_time_scale(a), tag="time_scale_slider")
            dpg.add_checkbox(label="Show basis", default_value=self.sim.show_basis,
                             callback=lambda s, a, u: self.sim.set_show_basis(a), tag="basis_checkbox")

            dpg.add_separator()

            dpg.add_text("Bodies")
            self.body_list_id = dpg.add_listbox(items=[], width=480, num_items=8, callback=self._on_select_body)
            self.angles_id = dpg.add_text("")

            dpg.add_separator()

            dpg.add_text("Edit Selected Body (re-applying resets its angle)")
            with dpg.group(horizontal=True):
                self.spin_tilt_id = dpg.add_input_text(label="Axial tilt (deg)", width=100)
                self.spin_period_id = dpg.add_input_text(label="Spin period (s)", width=100)
            dpg.add_button(label="Apply Spin", callback=self._apply_spin)
            with dpg.group(horizontal=True):
                self.orbit_radius_id = dpg.add_input_text(label="Radius", width=100)
                self.orbit_inclination_id = dpg.add_input_text(label="Inclination (deg)", width=100)
            self.orbit_period_id = dpg.add_input_text(label="Orbit period (s)", width=100)
            dpg.add_button(label="Apply Orbit", callback=self._apply_orbit)

            self.status_msg_id = dpg.add_text("")

        dpg.setup_dearpygui()
        dpg.show_viewport()
        dpg.set_primary_window("main_window", True)

    # -----------------------
    # UI Callbacks
    # -----------------------

    def _set_status(self, msg: str, color=(180, 220, 180)):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=color)

    def _set_error(self, msg: str):
        dpg.set_value(self.status_msg_id, msg)
        dpg.configure_item(self.status_msg_id, color=(255, 120, 120))

    def load_scene(self, name: str):
        try:
            time_scale = install_scene(self.sim, self.assets, name.strip())
        except (LookupError, SceneGraphError) as exc:
            logger.error("%s", exc)
            self._set_error(str(exc))
            return
        if time_scale is not None:
            dpg.set_value("time_scale_slider", self.sim.time_scale)
        self._last_edit_selected_idx = None
        self._refresh_body_list()
        self.renderer.reset_camera()
        self._set_status(f"Loaded scene: {name}")

    def _refresh_body_list(self):
        self._body_labels = self.sim.body_labels()
        dpg.configure_item(self.body_list_id, items=self._body_labels)

    def _on_select_body(self, sender, app_data, user_data):
        if app_data in self._body_labels:
            with self.sim.lock:
                self.sim.selected_index = self._body_labels.index(app_data)

    def _step_once(self):
        self.sim.request_step()
        self._set_status("Stepped one frame.")

    def _populate_edit_fields_from_selected(self):
        b = self.sim.get_selected_body()
        if b is None:
            return
        with self.sim.lock:
            spin, orbit = b.spin, b.orbit
            dpg.set_value(self.spin_tilt_id, f"{math.degrees(spin.axial_tilt):.3f}")
            dpg.set_value(self.spin_period_id, f"{_period(spin.speed):.3f}")
            dpg.set_value(self.orbit_radius_id, f"{orbit.radius:.3f}")
            dpg.set_value(self.orbit_inclination_id, f"{math.degrees(orbit.inclination):.3f}")
            dpg.set_value(self.orbit_period_id, f"{_period(orbit.speed):.3f}")

    def _apply_spin(self):
        tilt = try_float(dpg.get_value(self.spin_tilt_id))
        period = try_float(dpg.get_value(self.spin_period_id))
        if tilt is None or period is None:
            self._set_error("Spin fields must be numbers.")
            return
        body = self.sim.reconfigure_body(self.sim.selected_index or 0,
                                         spin=(math.radians(tilt), speed_from_period(period)))
        if body is None:
            self._set_error("No body selected.")
            return
        self._set_status(f"Spin of {body.name} reconfigured.")

    def _apply_orbit(self):
        radius = try_float(dpg.get_value(self.orbit_radius_id))
        inclination = try_float(dpg.get_value(self.orbit_inclination_id))
        period = try_float(dpg.get_value(self.orbit_period_id))
        if radius is None or inclination is None or period is None:
            self._set_error("Orbit fields must be numbers.")
            return
        body = self.sim.reconfigure_body(self.sim.selected_index or 0,
                                         orbit=(radius, math.radians(inclination), speed_from_period(period)))
        if body is None:
            self._set_error("No body selected.")
            return
        self._set_status(f"Orbit of {body.name} reconfigured.")

    def _sync_ui_with_sim(self):
        """
        Periodic UI update reflecting the selected body's angles and the animation flags.
        """
        with self.sim.lock:
            current_idx = self.sim.selected_index
            playing = self.sim.playing
            show_basis = self.sim.show_basis
        dpg.set_value("pause_checkbox", not playing)
        dpg.set_value("basis_checkbox", show_basis)

        b = self.sim.get_selected_body()
        if b is not None:
            if current_idx is not None and current_idx < len(self._body_labels):
                dpg.set_value(self.body_list_id, self._body_labels[current_idx])
            with self.sim.lock:
                spin_angle = b.spin.rotation_angle
                orbit_angle = b.orbit.rotation_angle
            dpg.set_value(self.angles_id, f"Spin angle: {spin_angle:.2f} rad   Orbit angle: {orbit_angle:.2f} rad")
            # Only repopulate edit fields when selection changes to avoid clobbering user edits
            if current_idx != self._last_edit_selected_idx:
                self._populate_edit_fields_from_selected()
                self._last_edit_selected_idx = current_idx
        self._schedule_sync()

# ============================================================
# Application Entry
# ============================================================

def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Animate a tree of orbiting, spinning bodies.")
    parser.add_argument("--preset", default=DEFAULT_SCENE, help="Scene to load at start-up")
    parser.add_argument("--time-scale", type=float, default=None,
                        help=f"Animation speed multiplier ({MIN_TIME_SCALE} to {MAX_TIME_SCALE})")
    parser.add_argument("--show-basis", action="store_true", help="Draw each body's basis")
    parser.add_argument("--paused", action="store_true", help="Start with the animation paused")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    sim = OrreryController()
    canvas = Canvas()
    assets = build_assets(canvas)

    # Ensure a working scene is present before any UI callbacks
    try:
        install_scene(sim, assets, args.preset)
    except (LookupError, SceneGraphError) as exc:
        logger.error("%s; falling back to %r", exc, DEFAULT_SCENE)
        install_scene(sim, assets, DEFAULT_SCENE)
    if args.time_scale is not None:
        sim.set_time_scale(args.time_scale)
    sim.set_show_basis(args.show_basis)
    sim.set_playing(not args.paused)

    renderer = PygameRenderer(sim, canvas)

    # Start pygame renderer thread
    renderer.start()

    ui = UI(sim, renderer, assets, sim.scene_name)

    # Keyboard shortcut in UI window to toggle play/pause (Space)
    with dpg.handler_registry():
        def key_down(sender, app_data):
            if app_data == dpg.mvKey_Spacebar:
                playing = sim.toggle_playing()
                ui._set_status("Animation playing." if playing else "Animation paused.")
        dpg.add_key_press_handler(callback=key_down)

    # Run Dear PyGui event loop
    try:
        dpg.start_dearpygui()
    finally:
        sim.running = False
        renderer.running = False
        renderer.join(timeout=2.0)
        dpg.destroy_context()

if __name__ == "__main__":
    main()

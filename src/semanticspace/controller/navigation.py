"""
Orbit Navigation
================
Damped orbit / dolly / pan camera control around a target point.

Input handlers only accumulate deltas; `update()` (called once per frame)
applies them to the camera. With damping enabled, each frame applies a
`damping_factor` share of what is left and decays the rest, so the camera
eases out instead of stopping dead.

Pointer coordinates passed to the drag API use a top-left origin, y down.
"""
from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Optional, Tuple, TYPE_CHECKING

import numpy as np

from semanticspace.model.camera import PerspectiveCamera

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

EPS = 1e-6
# remaining deltas below this are considered settled
SETTLE_EPS = 1e-7


class DragMode(Enum):
    NONE = 0
    ROTATE = 1
    DOLLY = 2
    PAN = 3


class MouseButton(Enum):
    LEFT = 0
    MIDDLE = 1
    RIGHT = 2


BUTTON_MODES = {
    MouseButton.LEFT: DragMode.ROTATE,
    MouseButton.MIDDLE: DragMode.DOLLY,
    MouseButton.RIGHT: DragMode.PAN,
}


def _rotation_between(a: npt.NDArray[np.float64], b: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    """3x3 rotation taking unit vector `a` onto unit vector `b`."""
    v = np.cross(a, b)
    c = float(np.dot(a, b))
    if c > 1.0 - 1e-12:
        return np.eye(3)
    if c < -1.0 + 1e-12:
        # opposite vectors: half turn about any perpendicular axis
        axis = np.cross(a, [1.0, 0.0, 0.0])
        if np.linalg.norm(axis) < 1e-6:
            axis = np.cross(a, [0.0, 1.0, 0.0])
        axis /= np.linalg.norm(axis)
        return 2.0 * np.outer(axis, axis) - np.eye(3)
    vx = np.array([
        [0.0, -v[2], v[1]],
        [v[2], 0.0, -v[0]],
        [-v[1], v[0], 0.0],
    ])
    return np.eye(3) + vx + vx @ vx * (1.0 / (1.0 + c))


class OrbitController:
    def __init__(
        self,
        camera: PerspectiveCamera,
        target: Tuple[float, float, float] = (0.0, 0.0, 0.0),
        enable_damping: bool = False,
        damping_factor: float = 0.05,
        screen_space_panning: bool = True,
        min_distance: float = 0.0,
        max_distance: float = math.inf,
    ) -> None:
        self.camera = camera
        self.target: npt.NDArray[np.float64] = np.array(target, dtype=np.float64)
        camera.look_at(self.target)

        self.enable_damping = enable_damping
        self.damping_factor = damping_factor
        self.screen_space_panning = screen_space_panning
        self.min_distance = min_distance
        self.max_distance = max_distance

        # polar angle limits, measured from the up axis
        self.min_polar_angle = 0.0
        self.max_polar_angle = math.pi

        self.rotate_speed = 1.0
        self.zoom_speed = 1.0
        self.pan_speed = 1.0

        # pending motion
        self._delta_theta = 0.0
        self._delta_phi = 0.0
        self._scale = 1.0
        self._pan_offset: npt.NDArray[np.float64] = np.zeros(3)
        # the first update always runs, to apply the distance bounds
        self._dirty = True

        # drag state
        self._mode = DragMode.NONE
        self._drag_start: Optional[Tuple[float, float]] = None

        self._saved_position = camera.position.copy()
        self._saved_target = self.target.copy()

    # ---- state ----

    @property
    def is_settled(self) -> bool:
        return (
            self._delta_theta == 0.0
            and self._delta_phi == 0.0
            and self._scale == 1.0
            and not self._pan_offset.any()
        )

    @property
    def distance(self) -> float:
        return float(np.linalg.norm(self.camera.position - self.target))

    def save_state(self) -> None:
        self._saved_position = self.camera.position.copy()
        self._saved_target = self.target.copy()

    def reset(self) -> None:
        """Jump back to the saved camera position and target."""
        logger.debug("Resetting camera to saved state.")
        self.camera.position = self._saved_position.copy()
        self.target = self._saved_target.copy()
        self.camera.look_at(self.target)
        self._clear_motion()
        self._mode = DragMode.NONE
        self._drag_start = None
        self._dirty = True
        self.update()

    # ---- primitive motions ----

    def rotate_left(self, angle: float) -> None:
        self._delta_theta -= angle

    def rotate_up(self, angle: float) -> None:
        self._delta_phi -= angle

    def dolly_in(self, scale: float) -> None:
        """Move toward the target; `scale` < 1 is the distance multiplier."""
        self._scale *= scale

    def dolly_out(self, scale: float) -> None:
        self._scale /= scale

    def pan(self, delta_x: float, delta_y: float, viewport_height: float) -> None:
        """
        Pan by a pointer delta in pixels.

        The world distance is chosen so that content at the target depth
        follows the pointer.
        """
        if viewport_height <= 0:
            return
        target_distance = self.distance * math.tan(math.radians(self.camera.fov) / 2.0)
        self._pan_left(2.0 * delta_x * target_distance / viewport_height)
        self._pan_up(2.0 * delta_y * target_distance / viewport_height)

    def _pan_left(self, distance: float) -> None:
        right, _, _ = self.camera.basis()
        self._pan_offset += -distance * right

    def _pan_up(self, distance: float) -> None:
        right, cam_up, _ = self.camera.basis()
        if self.screen_space_panning:
            v = cam_up
        else:
            # stay in the horizontal world plane
            v = np.cross(self.camera.up, right)
        self._pan_offset += distance * v

    def _zoom_scale(self) -> float:
        return 0.95 ** self.zoom_speed

    # ---- pointer API ----

    def begin_drag(self, button: MouseButton, x: float, y: float) -> None:
        self._mode = BUTTON_MODES[button]
        self._drag_start = (x, y)

    def drag_to(self, x: float, y: float, viewport_height: float) -> None:
        if self._mode is DragMode.NONE or self._drag_start is None:
            return
        if viewport_height <= 0:
            return

        dx = x - self._drag_start[0]
        dy = y - self._drag_start[1]
        self._drag_start = (x, y)

        if self._mode is DragMode.ROTATE:
            self.rotate_left(2.0 * math.pi * dx * self.rotate_speed / viewport_height)
            self.rotate_up(2.0 * math.pi * dy * self.rotate_speed / viewport_height)
        elif self._mode is DragMode.DOLLY:
            if dy > 0:
                self.dolly_out(self._zoom_scale())
            elif dy < 0:
                self.dolly_in(self._zoom_scale())
        elif self._mode is DragMode.PAN:
            self.pan(dx * self.pan_speed, dy * self.pan_speed, viewport_height)

    def end_drag(self) -> None:
        self._mode = DragMode.NONE
        self._drag_start = None

    def wheel(self, steps: int) -> None:
        """Positive steps (wheel forward) zoom in."""
        if steps > 0:
            for _ in range(steps):
                self.dolly_in(self._zoom_scale())
        elif steps < 0:
            for _ in range(-steps):
                self.dolly_out(self._zoom_scale())

    # ---- per-frame update ----

    def update(self) -> bool:
        """
        Apply pending motion to the camera.

        Returns:
            True if the camera position or target moved.
        """
        if self.is_settled and not self._dirty:
            return False
        self._dirty = False

        cam = self.camera
        up = cam.up / np.linalg.norm(cam.up)
        to_y_up = _rotation_between(up, np.array([0.0, 1.0, 0.0]))

        old_position = cam.position.copy()
        old_target = self.target.copy()

        offset = to_y_up @ (cam.position - self.target)
        radius = float(np.linalg.norm(offset))
        if radius == 0.0:
            theta, phi = 0.0, 0.0
        else:
            theta = math.atan2(offset[0], offset[2])
            phi = math.acos(min(1.0, max(-1.0, offset[1] / radius)))

        if self.enable_damping:
            theta += self._delta_theta * self.damping_factor
            phi += self._delta_phi * self.damping_factor
        else:
            theta += self._delta_theta
            phi += self._delta_phi

        phi = min(self.max_polar_angle, max(self.min_polar_angle, phi))
        # keep off the poles, where the azimuth is undefined
        phi = min(math.pi - EPS, max(EPS, phi))

        if self.enable_damping:
            self.target = self.target + self._pan_offset * self.damping_factor
        else:
            self.target = self.target + self._pan_offset

        radius = min(self.max_distance, max(self.min_distance, radius * self._scale))

        sin_phi_radius = math.sin(phi) * radius
        offset = np.array([
            sin_phi_radius * math.sin(theta),
            math.cos(phi) * radius,
            sin_phi_radius * math.cos(theta),
        ])
        offset = to_y_up.T @ offset

        cam.position = self.target + offset
        cam.look_at(self.target)

        self._decay_motion()

        moved = (
            float(np.sum((cam.position - old_position) ** 2)) > EPS
            or float(np.sum((self.target - old_target) ** 2)) > EPS
        )
        return moved

    def _decay_motion(self) -> None:
        if not self.enable_damping:
            self._clear_motion()
            return

        keep = 1.0 - self.damping_factor
        self._delta_theta *= keep
        self._delta_phi *= keep
        self._pan_offset *= keep
        self._scale = 1.0

        if abs(self._delta_theta) < SETTLE_EPS:
            self._delta_theta = 0.0
        if abs(self._delta_phi) < SETTLE_EPS:
            self._delta_phi = 0.0
        if np.linalg.norm(self._pan_offset) < SETTLE_EPS:
            self._pan_offset[:] = 0.0

    def _clear_motion(self) -> None:
        self._delta_theta = 0.0
        self._delta_phi = 0.0
        self._scale = 1.0
        self._pan_offset = np.zeros(3)

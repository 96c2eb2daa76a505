"""
Perspective Camera
==================
Camera state mirrored into the VTK camera every frame. The projection
matrix follows the OpenGL convention (right-handed view space looking
down -Z, clip-space depth in [-1, 1]).
"""
from __future__ import annotations

import math
from typing import Sequence, Tuple, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    import numpy.typing as npt


def _normalized(v: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
    norm = np.linalg.norm(v)
    if norm == 0.0:
        return v
    return v / norm


class PerspectiveCamera:
    def __init__(
        self,
        fov: float = 50.0,
        aspect: float = 1.0,
        near: float = 0.1,
        far: float = 2000.0,
    ) -> None:
        """
        Args:
            fov: Vertical field of view in degrees.
            aspect: Viewport width / height.
            near: Near clip plane distance.
            far: Far clip plane distance.
        """
        self.fov = fov
        self.aspect = aspect
        self.near = near
        self.far = far

        self.position: npt.NDArray[np.float64] = np.zeros(3)
        self.target: npt.NDArray[np.float64] = np.array([0.0, 0.0, -1.0])
        self.up: npt.NDArray[np.float64] = np.array([0.0, 1.0, 0.0])

        self.projection_matrix: npt.NDArray[np.float64] = np.eye(4)
        self.update_projection_matrix()

    def set_position(self, x: float, y: float, z: float) -> None:
        self.position = np.array([x, y, z], dtype=np.float64)

    def look_at(self, target: Sequence[float]) -> None:
        self.target = np.array(target, dtype=np.float64).reshape(3)

    # ---- matrices ----

    def update_projection_matrix(self) -> None:
        """Recompute the projection after fov/aspect/near/far changed."""
        f = 1.0 / math.tan(math.radians(self.fov) / 2.0)
        near, far = self.near, self.far
        self.projection_matrix = np.array([
            [f / self.aspect, 0.0, 0.0, 0.0],
            [0.0, f, 0.0, 0.0],
            [0.0, 0.0, (far + near) / (near - far), 2.0 * far * near / (near - far)],
            [0.0, 0.0, -1.0, 0.0],
        ])

    def basis(self) -> Tuple[npt.NDArray[np.float64], npt.NDArray[np.float64], npt.NDArray[np.float64]]:
        """Camera right, up and back (+Z) axes in world space."""
        back = _normalized(self.position - self.target)
        right = np.cross(self.up, back)
        if np.linalg.norm(right) < 1e-12:
            # looking straight along `up`; pick any perpendicular axis
            right = np.cross(np.array([0.0, 0.0, 1.0]), back)
        right = _normalized(right)
        true_up = np.cross(back, right)
        return right, true_up, back

    def depth(self, points: npt.ArrayLike) -> npt.NDArray[np.float64]:
        """
        View-space depth of world points: distance in front of the camera
        along its viewing direction. Negative behind the camera.
        """
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 3)
        _, _, back = self.basis()
        return (pts - self.position) @ -back

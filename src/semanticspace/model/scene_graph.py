"""
Scene Graph
===========
A small, renderer-agnostic hierarchy of scene objects.

Nodes carry a local translation only; a child's world position is its
parent's world position plus its own. This is all the semantic space needs:
labels ride on their markers, everything else hangs off the root.

Classes:
    SceneNode: Base node with parent/children ownership.
    Scene: Root node with background and fog.
    Mesh, AmbientLight, DirectionalLight, AxesHelper, Label: Scene objects.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple, Type, TypeVar, TYPE_CHECKING

import numpy as np

from semanticspace.model.dataset import WHITE, hex_to_rgb

if TYPE_CHECKING:
    import numpy.typing as npt

NodeT = TypeVar("NodeT", bound="SceneNode")


class SceneNode:
    def __init__(self, name: str = "", position: Sequence[float] = (0.0, 0.0, 0.0)) -> None:
        self.name: str = name
        self.position: npt.NDArray[np.float64] = np.array(position, dtype=np.float64).reshape(3)
        self.parent: Optional[SceneNode] = None
        self.children: List[SceneNode] = []
        self.visible: bool = True

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, position={self.position.tolist()})"

    def add(self, child: NodeT) -> NodeT:
        """Attach `child`, detaching it from any previous parent first."""
        if child is self:
            raise ValueError("A node cannot be its own child.")
        if child.parent is not None:
            child.parent.remove(child)
        child.parent = self
        self.children.append(child)
        return child

    def remove(self, child: SceneNode) -> None:
        if child.parent is not self:
            raise ValueError(f"{child!r} is not a child of {self!r}.")
        self.children.remove(child)
        child.parent = None

    def set_position(self, x: float, y: float, z: float) -> None:
        self.position[:] = (x, y, z)

    def world_position(self) -> npt.NDArray[np.float64]:
        pos = self.position.copy()
        node = self.parent
        while node is not None:
            pos += node.position
            node = node.parent
        return pos

    def is_visible(self) -> bool:
        """Visible only if this node and all of its ancestors are."""
        node: Optional[SceneNode] = self
        while node is not None:
            if not node.visible:
                return False
            node = node.parent
        return True

    def traverse(self) -> Iterator[SceneNode]:
        """Depth-first, pre-order walk starting at this node."""
        yield self
        for child in self.children:
            yield from child.traverse()

    def find_all(self, kind: Type[NodeT]) -> List[NodeT]:
        return [node for node in self.traverse() if isinstance(node, kind)]


# --- Scene root ---

@dataclass
class Fog:
    """Linear distance fog, as used for depth cueing."""
    color: int
    near: float
    far: float

    def factor(self, distance: float) -> float:
        """0.0 up to `near`, 1.0 from `far` on, linear in between."""
        if distance <= self.near:
            return 0.0
        if distance >= self.far or self.far <= self.near:
            return 1.0
        return (distance - self.near) / (self.far - self.near)

    def apply(self, rgb: Tuple[float, float, float], distance: float) -> Tuple[float, float, float]:
        """Blend `rgb` toward the fog color for an object `distance` away."""
        f = self.factor(distance)
        fog_rgb = hex_to_rgb(self.color)
        return tuple((1.0 - f) * c + f * fc for c, fc in zip(rgb, fog_rgb))


class Scene(SceneNode):
    def __init__(self, background: int = 0x000000, fog: Optional[Fog] = None) -> None:
        super().__init__(name="scene")
        self.background: int = background
        self.fog: Optional[Fog] = fog


# --- Geometry / material ---

@dataclass(frozen=True)
class SphereGeometry:
    radius: float = 1.0
    width_segments: int = 32
    height_segments: int = 16


@dataclass(frozen=True)
class StandardMaterial:
    """Lit material with a physically based roughness/metalness pair."""
    color: int = WHITE
    roughness: float = 1.0
    metalness: float = 0.0

    @property
    def rgb(self) -> Tuple[float, float, float]:
        return hex_to_rgb(self.color)


class Mesh(SceneNode):
    def __init__(self, geometry: SphereGeometry, material: StandardMaterial, name: str = "") -> None:
        super().__init__(name=name)
        self.geometry = geometry
        self.material = material


# --- Lights ---

class AmbientLight(SceneNode):
    """Uniform light hitting every surface from every direction."""
    def __init__(self, color: int = WHITE, intensity: float = 1.0) -> None:
        super().__init__(name="ambient_light")
        self.color = color
        self.intensity = intensity


class DirectionalLight(SceneNode):
    """Parallel light shining from `position` toward the origin."""
    def __init__(self, color: int = WHITE, intensity: float = 1.0) -> None:
        super().__init__(name="directional_light")
        self.color = color
        self.intensity = intensity

    @property
    def direction(self) -> npt.NDArray[np.float64]:
        pos = self.world_position()
        norm = np.linalg.norm(pos)
        if norm == 0.0:
            return np.array([0.0, -1.0, 0.0])
        return -pos / norm


class AxesHelper(SceneNode):
    """X/Y/Z segments from the origin, drawn red/green/blue."""
    AXIS_COLORS: Tuple[int, int, int] = (0xFF0000, 0x00FF00, 0x0000FF)

    def __init__(self, size: float = 1.0) -> None:
        super().__init__(name="axes")
        self.size = size

    def segments(self) -> List[Tuple[npt.NDArray[np.float64], npt.NDArray[np.float64], int]]:
        origin = self.world_position()
        return [
            (origin, origin + self.size * axis, color)
            for axis, color in zip(np.eye(3), self.AXIS_COLORS)
        ]


# --- Overlay labels ---

@dataclass(frozen=True)
class LabelStyle:
    color: Optional[str] = None  # CSS-like name or "#RRGGBB"; None = overlay default
    font_size: Optional[int] = None  # px; None = overlay default
    bold: bool = False


class Label(SceneNode):
    """Text drawn in the 2D overlay at the projected position of its anchor."""
    def __init__(self, text: str, style: Optional[LabelStyle] = None, name: str = "") -> None:
        super().__init__(name=name or text)
        self.text = text
        self.style = style or LabelStyle()

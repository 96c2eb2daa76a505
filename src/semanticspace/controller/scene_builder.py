"""
Scene Builder
=============
Builds the semantic-space scene from a dataset and drives it frame by frame.

Why is this file needed?
------------------------
It is the single owner of everything that lives for the whole session: the
scene graph, the camera, the navigation controller, both renderers and the
marker list. Keeping them on one `SceneContext` (instead of module globals)
lets the Qt view, the tests and any off-screen caller drive the same logic.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Protocol, Tuple

from semanticspace import config
from semanticspace.controller.navigation import OrbitController
from semanticspace.model.camera import PerspectiveCamera
from semanticspace.model.dataset import LabeledPoint
from semanticspace.model.scene_graph import (
    AmbientLight,
    AxesHelper,
    DirectionalLight,
    Fog,
    Label,
    LabelStyle,
    Mesh,
    Scene,
    SceneNode,
    SphereGeometry,
    StandardMaterial,
)

logger = logging.getLogger(__name__)

AXIS_LABELS: Tuple[Tuple[str, Tuple[float, float, float], str], ...] = (
    ("X", (1.0, 0.0, 0.0), "red"),
    ("Y", (0.0, 1.0, 0.0), "green"),
    ("Z", (0.0, 0.0, 1.0), "blue"),
)


class Renderer(Protocol):
    """What the scene builder needs from a rendering layer."""

    @property
    def size(self) -> Tuple[int, int]: ...

    def set_size(self, width: int, height: int) -> None: ...

    def render(self, scene: Scene, camera: PerspectiveCamera) -> None: ...


@dataclass
class SceneContext:
    scene: Scene
    camera: PerspectiveCamera
    controls: OrbitController
    renderer: Renderer
    label_renderer: Renderer
    # one per data point, input order
    markers: List[Mesh] = field(default_factory=list)
    # axes indicator and its X/Y/Z labels
    axes: List[SceneNode] = field(default_factory=list)

    def set_axes_visible(self, visible: bool) -> None:
        for node in self.axes:
            node.visible = visible

    def set_word_labels_visible(self, visible: bool) -> None:
        for marker in self.markers:
            for child in marker.children:
                if isinstance(child, Label):
                    child.visible = visible

    def resize(self, width: int, height: int) -> None:
        """Keep camera aspect and both render layers in step with the viewport."""
        width = max(1, int(width))
        height = max(1, int(height))
        logger.debug(f"Resizing viewport to {width}x{height}.")

        self.camera.aspect = width / height
        self.camera.update_projection_matrix()
        self.renderer.set_size(width, height)
        self.label_renderer.set_size(width, height)

    def render_frame(self) -> None:
        """One tick of the frame loop. Rendering errors propagate."""
        self.controls.update()
        self.renderer.render(self.scene, self.camera)
        self.label_renderer.render(self.scene, self.camera)


# ---- construction ----

def create_scene() -> Scene:
    s = config.SCENE
    return Scene(background=s.background, fog=Fog(s.fog_color, s.fog_near, s.fog_far))


def create_camera(width: int, height: int) -> PerspectiveCamera:
    c = config.CAMERA
    camera = PerspectiveCamera(c.fov, max(1, width) / max(1, height), c.near, c.far)
    camera.set_position(*c.position)
    camera.look_at(c.target)
    return camera


def create_controls(camera: PerspectiveCamera) -> OrbitController:
    n = config.NAVIGATION
    controls = OrbitController(
        camera,
        target=config.CAMERA.target,
        enable_damping=n.enable_damping,
        damping_factor=n.damping_factor,
        screen_space_panning=n.screen_space_panning,
        min_distance=n.min_distance,
        max_distance=n.max_distance,
    )
    controls.update()
    controls.save_state()
    return controls


def add_lights(scene: Scene) -> None:
    lights = config.LIGHTS
    scene.add(AmbientLight(lights.ambient_color, lights.ambient_intensity))
    directional = DirectionalLight(lights.directional_color, lights.directional_intensity)
    directional.set_position(*lights.directional_position)
    scene.add(directional)


def add_axes(scene: Scene) -> List[SceneNode]:
    """Axes indicator plus one label per axis, just past each axis end."""
    axes = config.AXES
    nodes: List[SceneNode] = [scene.add(AxesHelper(axes.length))]

    for text, direction, color in AXIS_LABELS:
        label = create_axis_label(
            text,
            tuple(axes.label_distance * d for d in direction),
            color,
        )
        # axis labels hang off the root, not off the axes helper
        scene.add(label)
        nodes.append(label)
    return nodes


def create_axis_label(text: str, position: Tuple[float, float, float], color: str) -> Label:
    style = LabelStyle(color=color, font_size=config.AXES.label_font_size, bold=True)
    label = Label(text, style=style, name=f"axis_{text.lower()}")
    label.set_position(*position)
    return label


def create_word_marker(point: LabeledPoint) -> Mesh:
    """Sphere at the point's coordinates with its text label riding on top."""
    m = config.MARKER
    geometry = SphereGeometry(m.radius, m.width_segments, m.height_segments)
    material = StandardMaterial(
        color=point.resolved_color,
        roughness=m.roughness,
        metalness=m.metalness,
    )
    sphere = Mesh(geometry, material, name=point.text)
    sphere.set_position(*point.position)

    label = Label(point.text)
    # relative to the sphere, so the label follows it
    label.set_position(*m.label_offset)
    sphere.add(label)
    return sphere


def build_scene(
    points: Iterable[LabeledPoint],
    renderer: Renderer,
    label_renderer: Renderer,
    width: int,
    height: int,
) -> SceneContext:
    """
    Build the full scene for `points` and size both renderers to the viewport.

    Args:
        points: Dataset to plot; every entry gets its own marker and label.
        renderer: Layer drawing the 3D geometry.
        label_renderer: Layer drawing the text overlay on top of it.
        width, height: Initial viewport size in pixels.
    """
    scene = create_scene()
    camera = create_camera(width, height)
    controls = create_controls(camera)

    ctx = SceneContext(
        scene=scene,
        camera=camera,
        controls=controls,
        renderer=renderer,
        label_renderer=label_renderer,
    )
    ctx.resize(width, height)

    add_lights(scene)
    ctx.axes = add_axes(scene)

    for point in points:
        marker = create_word_marker(point)
        scene.add(marker)
        ctx.markers.append(marker)

    logger.info(f"Scene built with {len(ctx.markers)} markers.")
    return ctx

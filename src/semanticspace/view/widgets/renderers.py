"""
Scene Renderers (PyVista)
Two layers over one plotter: the 3D geometry and the text-label overlay.

Both keep their own viewport size, set together by SceneContext.resize().
The overlay asks the VTK renderer where each label anchor lands on screen,
so a layer left at a stale size shows up as labels drifting off their
spheres.

The layers share one render window. When the overlay is given the scene
layer, the scene layer only syncs its actors and the overlay draws the
finished frame once.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

import logging
import numpy as np
import pyvista as pv
from vtkmodules.vtkRenderingCore import vtkTextActor

from semanticspace.model.camera import PerspectiveCamera
from semanticspace.model.scene_graph import (
    AmbientLight,
    AxesHelper,
    DirectionalLight,
    Label,
    Mesh,
    Scene,
    SceneNode,
)
from semanticspace.view.widgets.vtk_utils import VtkUtils

logger = logging.getLogger(__name__)


def sync_camera(plotter: pv.Plotter, camera: PerspectiveCamera) -> None:
    """Copy the model camera into the plotter's VTK camera."""
    pv_cam = plotter.camera
    pv_cam.position = tuple(camera.position)
    pv_cam.focal_point = tuple(camera.target)
    pv_cam.up = tuple(camera.up)
    pv_cam.view_angle = camera.fov
    pv_cam.clipping_range = (camera.near, camera.far)
    # stop PyVista from auto-fitting the camera on first show
    plotter.camera_set = True


class PyVistaSceneRenderer:
    """Draws meshes, axes and lights of a Scene through a PyVista plotter."""

    def __init__(self, plotter: pv.Plotter) -> None:
        self.plotter = plotter
        self._size: Tuple[int, int] = (1, 1)

        # set by a LabelOverlayRenderer that draws the shared frame
        self.defer_draw: bool = False
        self._draw_pending: bool = False

        # keyed by id(node); the node is kept alongside so the id stays valid
        self._mesh_actors: Dict[int, Tuple[Mesh, pv.Actor]] = {}
        self._axes_actors: Dict[int, Tuple[AxesHelper, List[pv.Actor]]] = {}
        self._lights_key: Optional[tuple] = None
        self._background: Optional[int] = None
        self._last_state: Optional[tuple] = None

    @property
    def size(self) -> Tuple[int, int]:
        return self._size

    def set_size(self, width: int, height: int) -> None:
        self._size = (width, height)
        # inside Qt the widget owns the window size; off-screen we set it
        if getattr(self.plotter, "off_screen", False):
            self.plotter.window_size = [width, height]

    def render(self, scene: Scene, camera: PerspectiveCamera) -> None:
        changed = self._sync_background(scene)
        changed |= self._sync_lights(scene)
        changed |= self._sync_actors(scene)
        self._apply_fog_and_visibility(scene, camera)
        sync_camera(self.plotter, camera)

        state = self._frame_state(scene, camera)
        if changed or state != self._last_state:
            self._last_state = state
            if self.defer_draw:
                self._draw_pending = True
            else:
                self.plotter.render()

    def take_pending_draw(self) -> bool:
        """True once per deferred frame that needs drawing."""
        pending, self._draw_pending = self._draw_pending, False
        return pending

    def actors_for(self, node: SceneNode) -> List[pv.Actor]:
        """Actors created for a mesh or axes node (empty if not drawn yet)."""
        if id(node) in self._mesh_actors:
            return [self._mesh_actors[id(node)][1]]
        if id(node) in self._axes_actors:
            return list(self._axes_actors[id(node)][1])
        return []

    # ------------------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------------------

    def _frame_state(self, scene: Scene, camera: PerspectiveCamera) -> tuple:
        """Everything that changes the picture between two frames."""
        visibility = tuple(node.is_visible() for node in scene.traverse())
        return (
            camera.position.tobytes(),
            camera.target.tobytes(),
            camera.up.tobytes(),
            camera.fov,
            camera.near,
            camera.far,
            self._size,
            visibility,
        )

    def _sync_background(self, scene: Scene) -> bool:
        if scene.background == self._background:
            return False
        self._background = scene.background
        self.plotter.set_background(VtkUtils.to_rgb(scene.background))
        return True

    def _sync_lights(self, scene: Scene) -> bool:
        """Rebuild VTK lights when the scene's light set changed."""
        ambients = scene.find_all(AmbientLight)
        directionals = scene.find_all(DirectionalLight)
        key = (
            tuple((a.color, a.intensity) for a in ambients),
            tuple((d.color, d.intensity, tuple(d.world_position())) for d in directionals),
        )
        if key == self._lights_key:
            return False
        self._lights_key = key

        self.plotter.remove_all_lights()
        for light in directionals:
            vtk_light = pv.Light(
                position=tuple(light.world_position()),
                focal_point=(0.0, 0.0, 0.0),
                color=VtkUtils.to_rgb(light.color),
                intensity=light.intensity,
                light_type="scene light",
            )
            self.plotter.add_light(vtk_light)

        # VTK has no ambient light source; ambient is a per-surface term
        ambient = self._ambient_intensity(scene)
        for _, actor in self._mesh_actors.values():
            actor.prop.ambient = ambient

        logger.debug(f"Lights updated: ambient={ambient}, directional={len(directionals)}.")
        return True

    def _ambient_intensity(self, scene: Scene) -> float:
        return sum(a.intensity for a in scene.find_all(AmbientLight))

    def _sync_actors(self, scene: Scene) -> bool:
        """Create actors for nodes seen for the first time and place them all."""
        created = False
        ambient = self._ambient_intensity(scene)

        for node in scene.traverse():
            if isinstance(node, Mesh):
                entry = self._mesh_actors.get(id(node))
                if entry is None:
                    actor = self._add_mesh_actor(node, ambient)
                    self._mesh_actors[id(node)] = (node, actor)
                    created = True
                else:
                    actor = entry[1]
                actor.position = tuple(node.world_position())

            elif isinstance(node, AxesHelper) and id(node) not in self._axes_actors:
                actors = [
                    self.plotter.add_mesh(
                        VtkUtils.segment_polydata(start, end),
                        color=VtkUtils.to_rgb(color),
                        line_width=2,
                        lighting=False,
                        pickable=False,
                        reset_camera=False,
                    )
                    for start, end, color in node.segments()
                ]
                self._axes_actors[id(node)] = (node, actors)
                created = True

        if created:
            logger.debug(f"Scene actors: {len(self._mesh_actors)} meshes, {len(self._axes_actors)} axes.")
        return created

    def _add_mesh_actor(self, node: Mesh, ambient: float) -> pv.Actor:
        material = node.material
        return self.plotter.add_mesh(
            VtkUtils.sphere_polydata(node.geometry),
            color=material.rgb,
            smooth_shading=True,
            ambient=ambient,
            diffuse=1.0 - 0.5 * material.metalness,
            # rougher surfaces get a weaker, wider highlight
            specular=0.5 * (1.0 - material.roughness),
            specular_power=max(1.0, 100.0 * (1.0 - material.roughness)),
            pickable=False,
            reset_camera=False,
            name=f"marker-{id(node)}",
        )

    def _apply_fog_and_visibility(self, scene: Scene, camera: PerspectiveCamera) -> None:
        fog = scene.fog

        for node, actor in self._mesh_actors.values():
            actor.visibility = node.is_visible()
            rgb = node.material.rgb
            if fog is not None:
                (depth,) = camera.depth(node.world_position())
                rgb = fog.apply(rgb, float(depth))
            actor.prop.color = rgb

        for node, actors in self._axes_actors.values():
            for actor, (start, end, color) in zip(actors, node.segments()):
                actor.visibility = node.is_visible()
                rgb = VtkUtils.to_rgb(color)
                if fog is not None:
                    (depth,) = camera.depth(0.5 * (start + end))
                    rgb = fog.apply(rgb, float(depth))
                actor.prop.color = rgb


class LabelOverlayRenderer:
    """
    2D text labels placed over the 3D layer at their anchors' projections.

    Each Label node gets one vtkTextActor, re-positioned every frame.
    Given `scene_layer`, it draws the frame the scene layer deferred, so
    each tick renders the shared window at most once.
    """

    def __init__(self, plotter: pv.Plotter, scene_layer: Optional[PyVistaSceneRenderer] = None) -> None:
        self.plotter = plotter
        self.enabled: bool = True
        self.scene_layer = scene_layer
        if scene_layer is not None:
            scene_layer.defer_draw = True

        self._size: Tuple[int, int] = (1, 1)
        self._actors: Dict[int, Tuple[Label, vtkTextActor]] = {}
        self._last_layout: Optional[tuple] = None

    @property
    def size(self) -> Tuple[int, int]:
        return self._size

    def set_size(self, width: int, height: int) -> None:
        self._size = (width, height)

    def layout(self, scene: Scene, camera: PerspectiveCamera) -> List[Tuple[Label, int, int, bool]]:
        """
        Display position and visibility of every label for this frame.

        Returns:
            (label, x, y, shown) per label, x/y in pixels from bottom-left.
        """
        labels = scene.find_all(Label)
        if not labels:
            return []

        sync_camera(self.plotter, camera)
        anchors = np.array([label.world_position() for label in labels])
        depths = camera.depth(anchors)
        width, height = self._size

        placed = []
        for label, anchor, depth in zip(labels, anchors, depths):
            x, y = self._world_to_display(anchor)
            in_view = (
                camera.near <= depth <= camera.far
                and 0.0 <= x <= width
                and 0.0 <= y <= height
            )
            shown = bool(self.enabled and in_view and label.is_visible())
            placed.append((label, int(round(x)), int(round(y)), shown))
        return placed

    def render(self, scene: Scene, camera: PerspectiveCamera) -> None:
        placed = self.layout(scene, camera)

        for label, x, y, shown in placed:
            actor = self._get_or_create_actor(label)
            actor.SetVisibility(shown)
            if shown:
                actor.SetDisplayPosition(x, y)

        scene_changed = self.scene_layer is not None and self.scene_layer.take_pending_draw()
        current = tuple((id(label), x, y, shown) for label, x, y, shown in placed)
        if scene_changed or current != self._last_layout:
            self._last_layout = current
            self.plotter.render()

    def _world_to_display(self, point: Sequence[float]) -> Tuple[float, float]:
        ren = self.plotter.renderer
        ren.SetWorldPoint(float(point[0]), float(point[1]), float(point[2]), 1.0)
        ren.WorldToDisplay()
        dx, dy, _ = ren.GetDisplayPoint()
        return float(dx), float(dy)

    def _get_or_create_actor(self, label: Label) -> vtkTextActor:
        entry = self._actors.get(id(label))
        if entry is not None:
            return entry[1]

        actor = VtkUtils.create_text_actor(label.text, label.style)
        self.plotter.renderer.AddActor2D(actor)
        self._actors[id(label)] = (label, actor)
        return actor

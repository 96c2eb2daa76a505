import numpy as np
import pytest

pv = pytest.importorskip("pyvista")

from semanticspace.controller.scene_builder import build_scene  # noqa: E402
from semanticspace.model.dataset import DEFAULT_DATASET, LabeledPoint, hex_to_rgb  # noqa: E402
from semanticspace.model.scene_graph import AxesHelper  # noqa: E402
from semanticspace.view.widgets.renderers import (  # noqa: E402
    LabelOverlayRenderer,
    PyVistaSceneRenderer,
)


@pytest.fixture
def plotter():
    pl = pv.Plotter(off_screen=True, window_size=(800, 600))
    yield pl
    pl.close()


@pytest.fixture
def draws(plotter, monkeypatch):
    calls = []
    monkeypatch.setattr(plotter, "render", lambda: calls.append("render"))
    return calls


def _build(plotter, points=DEFAULT_DATASET):
    scene_layer = PyVistaSceneRenderer(plotter)
    overlay = LabelOverlayRenderer(plotter, scene_layer=scene_layer)
    ctx = build_scene(points, scene_layer, overlay, 800, 600)
    ctx.render_frame()
    return ctx


def _axes(ctx) -> AxesHelper:
    (axes,) = ctx.scene.find_all(AxesHelper)
    return axes


def test_one_actor_per_marker_at_its_position(plotter) -> None:
    ctx = _build(plotter)

    for marker in ctx.markers:
        (actor,) = ctx.renderer.actors_for(marker)
        np.testing.assert_allclose(actor.position, marker.world_position())
    assert len({id(ctx.renderer.actors_for(m)[0]) for m in ctx.markers}) == len(DEFAULT_DATASET)
    assert len(ctx.renderer.actors_for(_axes(ctx))) == 3


def test_moved_marker_actor_follows(plotter) -> None:
    ctx = _build(plotter)
    marker = ctx.markers[0]

    marker.set_position(1.0, 2.0, 3.0)
    ctx.render_frame()

    (actor,) = ctx.renderer.actors_for(marker)
    np.testing.assert_allclose(actor.position, [1.0, 2.0, 3.0])


def test_fog_blends_by_view_depth(plotter) -> None:
    points = [
        LabeledPoint("near", 0.0, 0.0, 0.0, 0xFF0000),
        LabeledPoint("far", -40.0, -40.0, -120.0, 0xFF0000),
    ]
    ctx = _build(plotter, points)
    near_marker, far_marker = ctx.markers
    fog = ctx.scene.fog

    (depth,) = ctx.camera.depth(near_marker.world_position())
    expected = fog.apply((1.0, 0.0, 0.0), float(depth))
    (near_actor,) = ctx.renderer.actors_for(near_marker)
    np.testing.assert_allclose(near_actor.prop.color.float_rgb, expected, atol=1e-2)

    # beyond the fog's far distance only the fog color is left
    (far_actor,) = ctx.renderer.actors_for(far_marker)
    np.testing.assert_allclose(far_actor.prop.color.float_rgb, hex_to_rgb(0x222222), atol=1e-2)


def test_lights_and_ambient_term(plotter) -> None:
    ctx = _build(plotter)

    (light,) = plotter.renderer.lights
    assert light.intensity == pytest.approx(0.8)
    np.testing.assert_allclose(light.position, [5.0, 10.0, 7.5])
    (actor,) = ctx.renderer.actors_for(ctx.markers[0])
    assert actor.prop.ambient == pytest.approx(0.6)


def test_camera_is_copied_into_vtk(plotter) -> None:
    ctx = _build(plotter)
    ctx.controls.rotate_left(0.3)
    ctx.controls.pan(40.0, 0.0, 600)
    for _ in range(5):
        ctx.render_frame()

    vtk_camera = plotter.camera
    np.testing.assert_allclose(vtk_camera.position, ctx.camera.position)
    np.testing.assert_allclose(vtk_camera.focal_point, ctx.camera.target)
    assert vtk_camera.view_angle == pytest.approx(75.0)
    np.testing.assert_allclose(vtk_camera.clipping_range, (0.1, 1000.0))


def test_axes_toggle_hides_axis_actors(plotter) -> None:
    ctx = _build(plotter)

    ctx.set_axes_visible(False)
    ctx.render_frame()

    assert not any(actor.visibility for actor in ctx.renderer.actors_for(_axes(ctx)))
    assert all(ctx.renderer.actors_for(m)[0].visibility for m in ctx.markers)


def test_frame_draws_the_window_at_most_once(plotter, draws) -> None:
    ctx = _build(plotter)
    assert draws == ["render"]

    ctx.controls.rotate_left(0.3)
    ctx.render_frame()
    assert draws == ["render"] * 2

    # settled and unchanged: nothing to redraw
    ctx.controls.reset()
    ctx.render_frame()
    draws.clear()
    ctx.render_frame()
    assert draws == []


def test_standalone_scene_layer_draws_itself(plotter, draws) -> None:
    scene_layer = PyVistaSceneRenderer(plotter)
    ctx = build_scene(DEFAULT_DATASET, scene_layer, scene_layer, 800, 600)

    scene_layer.render(ctx.scene, ctx.camera)

    assert draws == ["render"]
    assert not scene_layer.take_pending_draw()

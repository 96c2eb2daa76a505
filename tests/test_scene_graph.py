import numpy as np
import pytest

from semanticspace.model.scene_graph import (
    AxesHelper,
    DirectionalLight,
    Fog,
    Label,
    Mesh,
    Scene,
    SceneNode,
    SphereGeometry,
    StandardMaterial,
)


def test_child_world_position_is_relative_to_parent() -> None:
    root = Scene()
    marker = root.add(Mesh(SphereGeometry(), StandardMaterial()))
    marker.set_position(1.0, 2.0, 3.0)
    label = marker.add(Label("word"))
    label.set_position(0.0, 0.4, 0.0)

    np.testing.assert_allclose(label.world_position(), [1.0, 2.4, 3.0])

    # moving the parent carries the child along
    marker.set_position(-1.0, 0.0, 5.0)
    np.testing.assert_allclose(label.world_position(), [-1.0, 0.4, 5.0])


def test_add_reparents_node() -> None:
    a = SceneNode("a")
    b = SceneNode("b")
    child = a.add(SceneNode("child"))

    b.add(child)

    assert child.parent is b
    assert child not in a.children
    assert b.children == [child]


def test_node_cannot_parent_itself() -> None:
    node = SceneNode("n")
    with pytest.raises(ValueError):
        node.add(node)


def test_remove_requires_child() -> None:
    a = SceneNode("a")
    with pytest.raises(ValueError):
        a.remove(SceneNode("stranger"))


def test_traverse_is_depth_first_preorder() -> None:
    root = SceneNode("root")
    left = root.add(SceneNode("left"))
    left.add(SceneNode("left.child"))
    root.add(SceneNode("right"))

    assert [n.name for n in root.traverse()] == ["root", "left", "left.child", "right"]


def test_find_all_by_type() -> None:
    scene = Scene()
    marker = scene.add(Mesh(SphereGeometry(), StandardMaterial()))
    marker.add(Label("a"))
    scene.add(Label("b"))

    assert [label.text for label in scene.find_all(Label)] == ["a", "b"]
    assert scene.find_all(Mesh) == [marker]


def test_visibility_is_inherited() -> None:
    scene = Scene()
    marker = scene.add(Mesh(SphereGeometry(), StandardMaterial()))
    label = marker.add(Label("a"))

    assert label.is_visible()
    marker.visible = False
    assert not label.is_visible()


@pytest.mark.parametrize(
    ("distance", "expected"),
    [(0.0, 0.0), (10.0, 0.0), (30.0, 0.5), (50.0, 1.0), (80.0, 1.0)],
)
def test_linear_fog_factor(distance, expected) -> None:
    fog = Fog(0x222222, 10.0, 50.0)
    assert fog.factor(distance) == pytest.approx(expected)


def test_fog_blends_toward_fog_color() -> None:
    fog = Fog(0x000000, 10.0, 50.0)

    assert fog.apply((1.0, 1.0, 1.0), 5.0) == pytest.approx((1.0, 1.0, 1.0))
    assert fog.apply((1.0, 1.0, 1.0), 30.0) == pytest.approx((0.5, 0.5, 0.5))
    assert fog.apply((1.0, 0.5, 0.0), 100.0) == pytest.approx((0.0, 0.0, 0.0))


def test_directional_light_points_at_origin() -> None:
    light = DirectionalLight(intensity=0.8)
    light.set_position(0.0, 10.0, 0.0)

    np.testing.assert_allclose(light.direction, [0.0, -1.0, 0.0])


def test_axes_helper_segments() -> None:
    axes = AxesHelper(10.0)
    segments = axes.segments()

    assert [color for _, _, color in segments] == [0xFF0000, 0x00FF00, 0x0000FF]
    np.testing.assert_allclose(segments[0][1], [10.0, 0.0, 0.0])
    np.testing.assert_allclose(segments[2][1], [0.0, 0.0, 10.0])

def test_import():
    import semanticspace

    assert semanticspace.__version__ == "0.1.0"


def test_model_and_controller_public_api_imports() -> None:
    from semanticspace.controller.navigation import MouseButton, OrbitController
    from semanticspace.controller.scene_builder import SceneContext, build_scene
    from semanticspace.model.camera import PerspectiveCamera
    from semanticspace.model.dataset import DEFAULT_DATASET, LabeledPoint, parse_color
    from semanticspace.model.io import IOManager
    from semanticspace.model.scene_graph import Fog, Label, Mesh, Scene, SceneNode

    assert OrbitController is not None
    assert MouseButton is not None
    assert SceneContext is not None
    assert build_scene is not None
    assert PerspectiveCamera is not None
    assert LabeledPoint is not None
    assert DEFAULT_DATASET
    assert parse_color is not None
    assert IOManager is not None
    assert Fog is not None
    assert Label is not None
    assert Mesh is not None
    assert Scene is not None
    assert SceneNode is not None

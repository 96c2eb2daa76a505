import pytest

pytest.importorskip("pyvista")

from vtkmodules.vtkInteractionStyle import vtkInteractorStyleUser  # noqa: E402

from semanticspace.model.scene_graph import LabelStyle  # noqa: E402
from semanticspace.view.widgets.vtk_utils import VtkUtils  # noqa: E402


class _Interactor:
    def __init__(self) -> None:
        self.style = None

    def SetInteractorStyle(self, style) -> None:
        self.style = style


class _Iren:
    """Records what the widget does to PyVista's interactor wrapper."""

    def __init__(self) -> None:
        self.interactor = _Interactor()
        self.key_callbacks = {"v": ["isometric"], "q": ["close"], "Up": ["zoom"], "Down": ["zoom"]}

    def clear_key_event_callbacks(self) -> None:
        self.key_callbacks.clear()


class _Plotter:
    def __init__(self) -> None:
        self.iren = _Iren()


def test_take_over_interaction_drops_builtin_style_and_keys() -> None:
    plotter = _Plotter()

    VtkUtils.take_over_interaction(plotter)

    assert isinstance(plotter.iren.interactor.style, vtkInteractorStyleUser)
    assert plotter.iren.key_callbacks == {}


def test_to_rgb_accepts_packed_ints_and_names() -> None:
    assert VtkUtils.to_rgb(0xFF0000) == (1.0, 0.0, 0.0)
    assert tuple(VtkUtils.to_rgb("white")) == pytest.approx((1.0, 1.0, 1.0))


def test_text_actor_uses_label_style() -> None:
    actor = VtkUtils.create_text_actor("X", LabelStyle(color="red", font_size=16, bold=True))

    tp = actor.GetTextProperty()
    assert actor.GetInput() == "X"
    assert tp.GetFontSize() == 16
    assert tp.GetBold()
    assert tuple(tp.GetColor()) == pytest.approx((1.0, 0.0, 0.0))

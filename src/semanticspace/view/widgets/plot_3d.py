"""
3D Semantic Space Widget (PyVista Wrapper)
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

import logging

from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QFrame, QStyle
)
from PySide6.QtCore import QTimer
from PySide6.QtGui import QCloseEvent, QResizeEvent

from pyvistaqt import QtInteractor

from semanticspace import config
from semanticspace.controller.navigation import MouseButton
from semanticspace.controller.scene_builder import SceneContext, build_scene
from semanticspace.model.dataset import LabeledPoint
from semanticspace.view.widgets.renderers import LabelOverlayRenderer, PyVistaSceneRenderer
from semanticspace.view.widgets.vtk_utils import VtkUtils

logger = logging.getLogger(__name__)


class SemanticSpaceWidget(QWidget):
    """
    Interactive view of a labeled point cloud.

    Mouse: left drag orbits, middle drag dollies, right drag pans, wheel zooms.
    Keys: R resets the view, L toggles word labels, A toggles the axes.
    """

    def __init__(self, points: Sequence[LabeledPoint], parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        self.layout_box: QVBoxLayout = QVBoxLayout(self)
        self.layout_box.setContentsMargins(0, 0, 0, 0)

        self.plotter: QtInteractor = QtInteractor(self)
        self.layout_box.addWidget(self.plotter)

        self._init_plotter()

        width, height = self._viewport_size_px()
        scene_layer = PyVistaSceneRenderer(self.plotter)
        self.context: SceneContext = build_scene(
            points,
            renderer=scene_layer,
            label_renderer=LabelOverlayRenderer(self.plotter, scene_layer=scene_layer),
            width=width,
            height=height,
        )

        self._attach_observers()
        self._setup_overlay_controls()

        # Frame loop
        self._frame_timer = QTimer(self)
        self._frame_timer.setInterval(config.FRAME_INTERVAL_MS)
        self._frame_timer.timeout.connect(self._on_frame)
        self._frame_timer.start()

    # ------------------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------------------

    def reset_view(self) -> None:
        self.context.controls.reset()

    def set_word_labels_visible(self, visible: bool) -> None:
        self.context.set_word_labels_visible(visible)
        if self.btn_labels.isChecked() != visible:
            self.btn_labels.blockSignals(True)
            self.btn_labels.setChecked(visible)
            self.btn_labels.blockSignals(False)

    def set_axes_visible(self, visible: bool) -> None:
        self.context.set_axes_visible(visible)
        if self.btn_axes.isChecked() != visible:
            self.btn_axes.blockSignals(True)
            self.btn_axes.setChecked(visible)
            self.btn_axes.blockSignals(False)

    # ------------------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------------------

    def _init_plotter(self) -> None:
        self.plotter.enable_anti_aliasing("fxaa")
        # all camera motion goes through OrbitController
        VtkUtils.take_over_interaction(self.plotter)

    def _viewport_size_px(self) -> Tuple[int, int]:
        w, h = self.plotter.render_window.GetSize()
        return max(1, int(w)), max(1, int(h))

    def _attach_observers(self) -> None:
        """Route pointer, key and resize events of the render window."""
        iren = self.plotter.iren.interactor
        controls = self.context.controls

        iren.AddObserver("LeftButtonPressEvent", lambda *_: self._on_press(MouseButton.LEFT))
        iren.AddObserver("MiddleButtonPressEvent", lambda *_: self._on_press(MouseButton.MIDDLE))
        iren.AddObserver("RightButtonPressEvent", lambda *_: self._on_press(MouseButton.RIGHT))
        for event in ("LeftButtonReleaseEvent", "MiddleButtonReleaseEvent", "RightButtonReleaseEvent"):
            iren.AddObserver(event, lambda *_: controls.end_drag())
        iren.AddObserver("MouseMoveEvent", lambda *_: self._on_move())
        iren.AddObserver("MouseWheelForwardEvent", lambda *_: controls.wheel(1))
        iren.AddObserver("MouseWheelBackwardEvent", lambda *_: controls.wheel(-1))
        iren.AddObserver("KeyPressEvent", lambda *_: self._on_key())
        iren.AddObserver("ConfigureEvent", lambda *_: self._on_viewport_resized())

    def _pointer_position(self) -> Tuple[float, float]:
        """Event position with a top-left origin (VTK reports bottom-left)."""
        x, y = self.plotter.iren.interactor.GetEventPosition()
        _, height = self._viewport_size_px()
        return float(x), float(height - y)

    def _on_press(self, button: MouseButton) -> None:
        x, y = self._pointer_position()
        self.context.controls.begin_drag(button, x, y)

    def _on_move(self) -> None:
        x, y = self._pointer_position()
        _, height = self._viewport_size_px()
        self.context.controls.drag_to(x, y, height)

    def _on_key(self) -> None:
        key = self.plotter.iren.interactor.GetKeySym()
        if not key:
            return
        key = key.lower()
        if key == "r":
            self.reset_view()
        elif key == "l":
            self.set_word_labels_visible(not self.btn_labels.isChecked())
        elif key == "a":
            self.set_axes_visible(not self.btn_axes.isChecked())

    def _on_viewport_resized(self) -> None:
        width, height = self._viewport_size_px()
        self.context.resize(width, height)

    def _on_frame(self) -> None:
        self.context.render_frame()

    def _setup_overlay_controls(self) -> None:
        """Floating view buttons."""
        self.overlay_widget = QFrame(self)
        self.overlay_widget.setStyleSheet("""
            QFrame { background-color: rgba(255, 255, 255, 200); border-radius: 6px; border: 1px solid #ccc; }
            QPushButton { background-color: transparent; border: none; padding: 4px; }
            QPushButton:checked { background-color: rgba(0, 120, 215, 50); border: 1px solid #0078D7; border-radius: 3px; }
            QPushButton:hover { background-color: rgba(0, 0, 0, 10); }
        """)

        layout = QHBoxLayout(self.overlay_widget)
        layout.setContentsMargins(4, 4, 4, 4)

        def make_btn(icon, slot, tooltip, checkable=True):
            btn = QPushButton()
            btn.setIcon(self.style().standardIcon(icon))
            btn.setCheckable(checkable)
            btn.setChecked(checkable)
            btn.setToolTip(tooltip)
            if checkable:
                btn.toggled.connect(slot)
            else:
                btn.clicked.connect(lambda *_: slot())
            layout.addWidget(btn)
            return btn

        self.btn_reset = make_btn(QStyle.SP_BrowserReload, self.reset_view, "Reset view (R)", checkable=False)
        self.btn_labels = make_btn(QStyle.SP_FileDialogDetailedView, self.context.set_word_labels_visible,
                                   "Show word labels (L)")
        self.btn_axes = make_btn(QStyle.SP_ArrowUp, self.context.set_axes_visible, "Show axes (A)")

        self.overlay_widget.adjustSize()
        self.overlay_widget.move(10, 10)
        self.overlay_widget.raise_()

    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        if hasattr(self, "context"):
            self._on_viewport_resized()

    def closeEvent(self, event: QCloseEvent) -> None:
        self._frame_timer.stop()
        self.plotter.close()
        event.accept()

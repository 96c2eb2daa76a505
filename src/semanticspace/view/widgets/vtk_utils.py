"""
VTK and PyVista Utilities
Helper functions turning scene-graph objects into VTK data and actors.
"""
from typing import Optional, Tuple

import logging
import numpy as np
import numpy.typing as npt
import pyvista as pv
from vtkmodules.vtkInteractionStyle import vtkInteractorStyleUser
from vtkmodules.vtkRenderingCore import vtkTextActor

from semanticspace import config
from semanticspace.model.dataset import hex_to_rgb
from semanticspace.model.scene_graph import LabelStyle, SphereGeometry

logger = logging.getLogger(__name__)

RGB = Tuple[float, float, float]


class VtkUtils:
    @staticmethod
    def to_rgb(color: object) -> RGB:
        """
        Convert a packed 0xRRGGBB integer or any color PyVista understands
        (name, "#RRGGBB", RGB tuple) into a float RGB triple.
        """
        if isinstance(color, int) and not isinstance(color, bool):
            return hex_to_rgb(color)
        return pv.Color(color).float_rgb

    @staticmethod
    def sphere_polydata(geometry: SphereGeometry) -> pv.PolyData:
        """Sphere centered on the origin; actors are moved, not the data."""
        return pv.Sphere(
            radius=geometry.radius,
            center=(0.0, 0.0, 0.0),
            theta_resolution=geometry.width_segments,
            phi_resolution=geometry.height_segments,
        )

    @staticmethod
    def segment_polydata(start: npt.NDArray[np.float64], end: npt.NDArray[np.float64]) -> pv.PolyData:
        return pv.Line(tuple(start), tuple(end))

    @staticmethod
    def create_text_actor(text: str, style: Optional[LabelStyle] = None) -> vtkTextActor:
        """
        Text actor centered on its display position, like an overlay label
        translated by half its own size.
        """
        defaults = config.LABELS
        style = style or LabelStyle()

        actor = vtkTextActor()
        actor.SetInput(text)
        tp = actor.GetTextProperty()
        tp.SetFontSize(style.font_size or defaults.font_size)
        tp.SetColor(*VtkUtils.to_rgb(style.color or defaults.color))
        tp.SetFontFamilyAsString(defaults.font_family)
        tp.SetBold(bool(style.bold))
        tp.SetShadow(defaults.shadow)
        tp.SetJustificationToCentered()
        tp.SetVerticalJustificationToCentered()
        actor.SetPickable(False)
        return actor

    @staticmethod
    def take_over_interaction(plotter) -> None:
        """
        Leave all mouse and key handling to project observers: replace the
        VTK interactor style and drop PyVista's key bindings (v, q, Up/Down,
        ...), which would move or close the VTK camera directly.
        """
        iren = plotter.iren
        iren.interactor.SetInteractorStyle(vtkInteractorStyleUser())
        iren.clear_key_event_callbacks()

"""
Configuration & Constants
=========================
This module serves as the central registry for scene constants and paths.

Why is this file needed?
------------------------
1. Abstraction: It keeps magic numbers (camera placement, fog bounds, damping)
   out of the scene construction code.
2. Deployment: It handles the logic required by PyInstaller (sys._MEIPASS) to
   find assets (sample datasets) when the app is frozen into an .exe.

Exports:
    ASSETS_PATH (str): Absolute path to the assets directory.
    EXAMPLE_DATASET_PATH (str): The bundled example dataset.
    SCENE, CAMERA, NAVIGATION, MARKER, AXES, LABELS, LIGHTS: Default settings.
"""
import sys
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

Vector3 = Tuple[float, float, float]


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        # PyInstaller temp folder
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # Development mode: config.py is in src/semanticspace/
    current_file_path: Path = Path(__file__)
    project_root: Path = current_file_path.parent.parent.parent
    return os.path.join(str(project_root), relative_path)


@dataclass(frozen=True)
class SceneSettings:
    background: int = 0x222222
    fog_color: int = 0x222222
    fog_near: float = 10.0
    fog_far: float = 50.0


@dataclass(frozen=True)
class CameraSettings:
    fov: float = 75.0  # vertical, degrees
    near: float = 0.1
    far: float = 1000.0
    position: Vector3 = (5.0, 5.0, 15.0)
    target: Vector3 = (0.0, 0.0, 0.0)


@dataclass(frozen=True)
class NavigationSettings:
    enable_damping: bool = True
    damping_factor: float = 0.05
    screen_space_panning: bool = False
    min_distance: float = 2.0
    max_distance: float = 50.0


@dataclass(frozen=True)
class MarkerSettings:
    radius: float = 0.3
    width_segments: int = 32
    height_segments: int = 32
    roughness: float = 0.5
    metalness: float = 0.1
    label_offset: Vector3 = (0.0, 0.4, 0.0)


@dataclass(frozen=True)
class AxesSettings:
    length: float = 10.0
    label_distance: float = 11.0
    label_font_size: int = 16


@dataclass(frozen=True)
class LabelSettings:
    """Overlay text defaults, used where a label has no style of its own."""
    color: str = "white"
    font_size: int = 12
    font_family: str = "Arial"
    shadow: bool = True


@dataclass(frozen=True)
class LightSettings:
    ambient_color: int = 0xFFFFFF
    ambient_intensity: float = 0.6
    directional_color: int = 0xFFFFFF
    directional_intensity: float = 0.8
    directional_position: Vector3 = (5.0, 10.0, 7.5)


# Global Constants
SCENE = SceneSettings()
CAMERA = CameraSettings()
NAVIGATION = NavigationSettings()
MARKER = MarkerSettings()
AXES = AxesSettings()
LABELS = LabelSettings()
LIGHTS = LightSettings()

# ~60 Hz, the closest a QTimer gets to a display-refresh callback
FRAME_INTERVAL_MS: int = 16

DEFAULT_WINDOW_SIZE: Tuple[int, int] = (1280, 800)

ORG_ID = "semanticspace"
APP_ID = "semanticspace"
VISIBLE_APP_NAME = "Semantic Space"

ASSETS_PATH: str = get_resource_path("assets")
EXAMPLE_DATASET_PATH: str = os.path.join(ASSETS_PATH, "example_dataset.json")

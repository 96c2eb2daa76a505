from typing import List, Tuple

import pytest

from semanticspace.controller.scene_builder import SceneContext, build_scene
from semanticspace.model.dataset import DEFAULT_DATASET


class FakeRenderer:
    """In-memory stand-in for a render layer."""

    def __init__(self, name: str = "renderer", log: List[str] = None) -> None:
        self.name = name
        self.size: Tuple[int, int] = (0, 0)
        self.size_history: List[Tuple[int, int]] = []
        self.renders = 0
        self._log = log if log is not None else []

    def set_size(self, width: int, height: int) -> None:
        self.size = (width, height)
        self.size_history.append((width, height))

    def render(self, scene, camera) -> None:
        self.renders += 1
        self._log.append(self.name)


@pytest.fixture
def frame_log() -> List[str]:
    return []


@pytest.fixture
def renderers(frame_log):
    return FakeRenderer("scene", frame_log), FakeRenderer("labels", frame_log)


@pytest.fixture
def context(renderers) -> SceneContext:
    renderer, label_renderer = renderers
    return build_scene(DEFAULT_DATASET, renderer, label_renderer, 800, 600)

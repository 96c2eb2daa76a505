"""
Main Application Window
=======================
The top-level window hosting the semantic-space view.
"""
import logging
from typing import Optional, Sequence

from PySide6.QtWidgets import QMainWindow, QWidget
from PySide6.QtGui import QCloseEvent

from semanticspace import config
from semanticspace.model.dataset import LabeledPoint
from semanticspace.view.widgets.plot_3d import SemanticSpaceWidget

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(
        self,
        points: Sequence[LabeledPoint],
        source_name: Optional[str] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.points = list(points)
        self.source_name = source_name

        self.update_window_title()
        self.resize(*config.DEFAULT_WINDOW_SIZE)

        self.visualizer = SemanticSpaceWidget(self.points)
        self.setCentralWidget(self.visualizer)

    def update_window_title(self) -> None:
        title = f"{config.VISIBLE_APP_NAME} - {len(self.points)} points"
        if self.source_name:
            title += f" [{self.source_name}]"
        self.setWindowTitle(title)

    def closeEvent(self, event: QCloseEvent) -> None:
        logger.info("Closing main window.")
        self.visualizer.close()
        event.accept()

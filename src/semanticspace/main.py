"""
Application Initialization
==========================
This module loads the dataset, builds the main window and starts the Qt
event loop.

Why is this file needed?
------------------------
It acts as the composition root. It:
1. Parses the command line and sets up logging.
2. Loads the dataset (built-in or from a JSON file).
3. Creates the QApplication and the Main Window (View).
4. Hands control to the Qt event loop, which drives the frame timer.
"""
import argparse
import logging
import os
import sys
from typing import List, Optional, Sequence

from PySide6.QtWidgets import QApplication
from PySide6.QtCore import QCoreApplication

from semanticspace import config
from semanticspace.logging_config import setup_logging
from semanticspace.model.dataset import DEFAULT_DATASET, LabeledPoint
from semanticspace.model.io import IOManager
from semanticspace.view.main_window import MainWindow

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="semanticspace",
        description="Explore labeled words placed in a 3D semantic space.",
    )
    parser.add_argument(
        "dataset",
        nargs="?",
        help="JSON file with [{text, x, y, z, color?}, ...]; the built-in example is used if omitted.",
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level (default: INFO).")
    parser.add_argument("--log-file", default=None, help="Also write the log to this file.")
    return parser.parse_args(argv)


def load_points(path: Optional[str]) -> List[LabeledPoint]:
    if path is None:
        logger.info(f"Using built-in dataset ({len(DEFAULT_DATASET)} points).")
        return list(DEFAULT_DATASET)
    return IOManager.load_dataset(path)


def create_app(argv: Sequence[str]) -> QApplication:
    """Create and configure the QApplication instance."""
    os.environ.setdefault("QT_ENABLE_HIGHDPI_SCALING", "1")

    QCoreApplication.setOrganizationName(config.ORG_ID)
    QCoreApplication.setApplicationName(config.APP_ID)

    app = QApplication(list(argv))
    app.setApplicationDisplayName(config.VISIBLE_APP_NAME)
    return app


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])

    # 1. Setup Logging
    setup_logging(level=args.log_level, log_file=args.log_file)

    # 2. Load the data before any window exists, so bad input fails fast
    points = load_points(args.dataset)

    # 3. Create the Qt Application
    app = create_app([sys.argv[0]])

    # 4. Initialize the Main Window
    source_name = os.path.basename(args.dataset) if args.dataset else None
    window = MainWindow(points, source_name=source_name)
    window.show()

    # 5. Start Event Loop
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
